from .should import (
    Should,
    equal,
    equals,
    exist,
    identity,
    inner_text,
    input_value,
    is_,
    observe,
    see,
    strictly_equal,
    that,
    to,
)

__all__ = [
    "Should",
    "see",
    "that",
    "observe",
    "is_",
    "to",
    "equals",
    "equal",
    "exist",
    "identity",
    "inner_text",
    "input_value",
    "strictly_equal",
]
