from enum import Enum
from typing import Any

from playwright.async_api import Error as PlaywrightError


class ErrorKind(str, Enum):
    COMPARISON = "comparison"
    PREDICATE = "predicate"
    DELEGATED = "delegated"
    UNCLASSIFIED = "unclassified"


class E2E2DError(Exception):
    """Failure raised inside a chain, tagged with its ``kind``.

    The chain executor matches on ``kind`` to decide how the failure is
    narrated. ``should`` references the assertion chain that failed so the
    narration accumulated so far is still available.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UNCLASSIFIED,
        should: Any = None,
        got: Any = None,
        expected: Any = None,
        action: str = "",
        context: str = "",
    ):
        super().__init__(message)
        self.kind = kind
        self.should = should
        self.got = got
        self.expected = expected
        self.action = action
        self.context = context

    @classmethod
    def comparison(cls, should, got, expected) -> "E2E2DError":
        return cls(f"Equals {got} {expected}", ErrorKind.COMPARISON, should=should, got=got, expected=expected)

    @classmethod
    def predicate(cls, name: str, should) -> "E2E2DError":
        return cls(name, ErrorKind.PREDICATE, should=should)

    @classmethod
    def delegated(cls, action: str, context: str, cause: BaseException) -> "E2E2DError":
        head = f"You {action} {context}".rstrip()
        return cls(f"{head} failed: {cause}", ErrorKind.DELEGATED, action=action, context=context)


def classify_error(exc: BaseException) -> ErrorKind:
    """Return the kind a failure is narrated as."""
    if isinstance(exc, E2E2DError):
        return exc.kind
    if isinstance(exc, PlaywrightError):
        return ErrorKind.DELEGATED
    return ErrorKind.UNCLASSIFIED
