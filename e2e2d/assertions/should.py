"""Fluent assertion chain.

A ``Should`` collects narration tokens and a current subject while it is
threaded through a pipeline of steps. Each step is an ``async (Should) ->
Should`` function. Terminal steps (``equals``, ``equal``, ``exist``) either
record a success Step or raise an ``E2E2DError`` referencing the chain.

Two surfaces over the same steps::

    await ctx.should(see("#name"), is_, equal("Ada", inner_text))
    await ctx.should().see("#name").equal("Ada", inner_text)
"""
import inspect
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, List

from e2e2d.data import Recording
from e2e2d.errors import E2E2DError
from e2e2d.utils.narration import build_console_text

if TYPE_CHECKING:
    from e2e2d.executor.run_context import RunContext

logger = logging.getLogger(__name__)

ShouldStep = Callable[["Should"], Awaitable["Should"]]


# ============================================================================
# TRANSFORMS
# ============================================================================

def identity(value: Any) -> Any:
    return value


async def inner_text(el) -> str:
    return await el.inner_text() if el is not None else ""


async def input_value(el) -> str:
    """Current value of a form control, "" when there is no element."""
    return await el.input_value() if el is not None else ""


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strictly_equal(got: Any, expected: Any) -> bool:
    """Equality without coercion: 1 does not equal "1", True does not equal 1.

    int and float are one number type, so 2.0 equals 2.
    """
    if _is_number(got) and _is_number(expected):
        return got == expected
    return type(got) is type(expected) and got == expected


# ============================================================================
# PIPELINE STEPS
# ============================================================================

async def observe(sh: "Should") -> "Should":
    sh.msg.append("observe")
    return sh


async def is_(sh: "Should") -> "Should":
    sh.msg.append("is")
    return sh


async def to(sh: "Should") -> "Should":
    sh.msg.append("to")
    return sh


def that(thing: Any) -> ShouldStep:
    """Assert on ``thing`` instead of a page element."""
    async def step(sh: "Should") -> "Should":
        sh.msg.append("that")
        sh.el = thing
        return sh
    return step


def see(selector: str = "", doc_name: str = "") -> ShouldStep:
    """Make the element matching ``selector`` the subject.

    ``doc_name`` replaces the selector in the narration. A failing query is
    not turned into a missing subject, it propagates.
    """
    async def step(sh: "Should") -> "Should":
        sh.selector = selector
        sh.msg.append("see")
        sh.msg.append(doc_name if doc_name else selector)
        sh.el = await sh.ctx.handler.query_selector(selector)
        return sh
    return step


def equals(to_cmp_against: Any, transform: Callable[[Any], Any] = identity) -> ShouldStep:
    async def step(sh: "Should") -> "Should":
        if not sh.msg or sh.msg[-1] != "is":
            sh.msg.append("is")
        sh.msg.append("equal")
        sh.msg.append(f"'{to_cmp_against}'")

        v = await _resolve(transform(await sh.resolve_subject()))
        if not strictly_equal(v, to_cmp_against):
            await sh.save_step_error(failed="equals", got=v, expected=to_cmp_against)
            await sh.ctx.dehighlight(sh.selector, sh.should_take_screenshot)
            raise E2E2DError.comparison(sh, v, to_cmp_against)

        sh.ctx.print_msg(build_console_text(True, sh.ctx.conf.color, sh.msg))
        await sh.save_step()
        return sh
    return step


def equal(to_cmp_against: Any, transform: Callable[[Any], Any] = identity) -> ShouldStep:
    """Same as ``equals``."""
    return equals(to_cmp_against, transform)


async def exist(sh: "Should") -> "Should":
    sh.msg.append("exist")
    v = await sh.resolve_subject()
    if v is None:
        await sh.save_step_error(failed="exist")
        raise E2E2DError.predicate("Exist", sh)

    sh.ctx.print_msg(build_console_text(True, sh.ctx.conf.color, sh.msg))
    await sh.save_step()
    return sh


# ============================================================================
# CHAIN
# ============================================================================

class FluentShould(ABC):
    """Sentence-like methods; each queues a pipeline step and returns self."""

    @abstractmethod
    def then(self, step: ShouldStep):
        """Queue ``step`` and return self."""

    def observe(self):
        return self.then(observe)

    def is_(self):
        return self.then(is_)

    def to(self):
        return self.then(to)

    def that(self, thing: Any):
        return self.then(that(thing))

    def see(self, selector: str = "", doc_name: str = ""):
        return self.then(see(selector, doc_name))

    def equals(self, to_cmp_against: Any, transform: Callable[[Any], Any] = identity):
        return self.then(equals(to_cmp_against, transform))

    def equal(self, to_cmp_against: Any, transform: Callable[[Any], Any] = identity):
        return self.then(equal(to_cmp_against, transform))

    def exist(self):
        return self.then(exist)


class Should(FluentShould):
    def __init__(self, ctx: "RunContext", should_take_screenshot: bool = True, steps: Iterable[ShouldStep] = ()):
        self.ctx = ctx
        self.should_take_screenshot = should_take_screenshot
        self.msg: List[str] = ["You"]
        self.el: Any = None
        self.selector = ""
        self._steps: List[ShouldStep] = list(steps)

    def then(self, step: ShouldStep) -> "Should":
        self._steps.append(step)
        return self

    async def run(self) -> "Should":
        """Run the queued steps in order."""
        steps, self._steps = self._steps, []
        sh = self
        for step in steps:
            sh = await step(sh)
        return sh

    def __await__(self):
        return self.run().__await__()

    async def resolve_subject(self) -> Any:
        """Return the subject, awaiting it first if it is still pending."""
        self.el = await _resolve(self.el)
        return self.el

    @property
    def doc(self) -> str:
        return " ".join(self.msg)

    async def save_step_error(self, **additional_data):
        before = ""
        if self.should_take_screenshot:
            before = await self.ctx.take_screenshot(self.ctx.gen_file_name("_".join(self.msg), "error"))
        step = Recording.new_step("should", self.selector, self.doc, before_screenshot=before, **additional_data)
        logger.info(f"failed step: {step.model_dump(by_alias=True)}")
        self.ctx.recording.add_step(step)

    async def save_step(self):
        highlight = ""
        if self.should_take_screenshot and self.selector:
            await self.ctx.highlight(self.selector, True)
            highlight = await self.ctx.take_screenshot(self.ctx.gen_file_name("_".join(self.msg), "highlight"))
            await self.ctx.dehighlight(self.selector, True)
        self.ctx.recording.add_step(
            Recording.new_step("should", self.selector, self.doc, after_highlight_screenshot=highlight)
        )
