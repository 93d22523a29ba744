"""Entries of a chain.

A chain is an ordered list of entries and every entry is either an ``Action``
(run directly against the run context) or a ``PreCondition`` (a named
sub-chain whose steps may be hidden from the documentation). The kind is
fixed when the entry is built.
"""
from dataclasses import dataclass
from functools import partial
from typing import Any, Awaitable, Callable, Iterable, Sequence, Tuple, Union

from e2e2d.actions import action_library
from e2e2d.assertions.should import FluentShould, ShouldStep

ActionFn = Callable[[Any], Awaitable[Any]]


class Action:
    def __init__(self, fn: ActionFn, name: str = ""):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "action")

    async def run(self, ctx):
        await self.fn(ctx)
        return ctx

    def __repr__(self):
        return f"Action({self.name!r})"


class ShouldAction(Action, FluentShould):
    """A ``should`` assertion as a chain entry, with the fluent surface."""

    def __init__(self, steps: Iterable[ShouldStep] = (), take_screenshot: bool = True):
        super().__init__(self._assert, "should" if take_screenshot else "shouldNoScreenShot")
        self.steps = list(steps)
        self.take_screenshot = take_screenshot

    def then(self, step: ShouldStep) -> "ShouldAction":
        self.steps.append(step)
        return self

    async def _assert(self, ctx):
        if self.take_screenshot:
            return await ctx.should(*self.steps)
        return await ctx.should_no_screenshot(*self.steps)


@dataclass
class PreCondition:
    """Named, reusable sub-chain.

    Unless ``record_steps`` is set, the Recording is switched off while the
    sub-chain runs, so only the ``followStepsIn`` marker documents it.
    """
    name: str
    action: Union[Action, "PreCondition", Sequence[Union[Action, "PreCondition"]]]
    record_steps: bool = False

    @property
    def entries(self) -> Tuple[Union[Action, "PreCondition"], ...]:
        if isinstance(self.action, (Action, PreCondition)):
            return (self.action,)
        return tuple(self.action)


Entry = Union[Action, PreCondition]


def validate_chain(chain: Iterable[Any]) -> Tuple[Entry, ...]:
    """Return ``chain`` as a tuple, rejecting anything that is not an entry."""
    entries = tuple(chain)
    for entry in entries:
        if isinstance(entry, PreCondition):
            validate_chain(entry.entries)
        elif not isinstance(entry, Action):
            raise TypeError(
                f"Chain entries must be Action or PreCondition, got {type(entry).__name__}; "
                "wrap coroutine functions with action()"
            )
    return entries


# ============================================================================
# BUILDERS
# ============================================================================

def action(fn: ActionFn, name: str = "") -> Action:
    """Wrap an ``async def fn(ctx)`` as a chain entry."""
    return Action(fn, name)


def pre_condition(name: str, action_: Union[ActionFn, Entry, Sequence[Entry]], record_steps: bool = False) -> PreCondition:
    if callable(action_):
        action_ = Action(action_, name)
    return PreCondition(name, action_, record_steps)


def comment(doc: str) -> Action:
    return Action(partial(action_library.comment, doc=doc), "comment")


def nav_to(url: str, doc: str = "") -> Action:
    return Action(partial(action_library.nav_to, url=url, doc=doc), "navTo")


def fill(selector: str, value: str, doc: str = "") -> Action:
    return Action(partial(action_library.fill, selector=selector, value=value, doc=doc), "insert")


def left_click(selector: str, doc: str = "", after_click_screenshot: bool = True) -> Action:
    return Action(
        partial(action_library.left_click, selector=selector, doc=doc, after_click_screenshot=after_click_screenshot),
        "leftClick",
    )


def left_click_nav(selector: str, doc: str = "", after_click_screenshot: bool = True) -> Action:
    return Action(
        partial(action_library.left_click_nav, selector=selector, doc=doc, after_click_screenshot=after_click_screenshot),
        "leftClickNav",
    )


def should(*steps: ShouldStep) -> ShouldAction:
    return ShouldAction(steps)


def should_no_screenshot(*steps: ShouldStep) -> ShouldAction:
    return ShouldAction(steps, take_screenshot=False)
