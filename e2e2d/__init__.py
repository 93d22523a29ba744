from .assertions import equal, equals, exist, identity, inner_text, input_value, is_, observe, see, that, to
from .config import BrowserConfig, E2E2DConfig, load_config
from .data import Recording, Step
from .errors import E2E2DError, ErrorKind, classify_error
from .executor import (
    Action,
    ChainExecutor,
    PreCondition,
    RunContext,
    RunResult,
    RunStatus,
    action,
    comment,
    fill,
    in_order_to,
    left_click,
    left_click_nav,
    nav_to,
    pre_condition,
    run,
    should,
    should_no_screenshot,
)

__all__ = [
    "in_order_to",
    "run",
    "pre_condition",
    "action",
    "comment",
    "nav_to",
    "fill",
    "left_click",
    "left_click_nav",
    "should",
    "should_no_screenshot",
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
    "Action",
    "PreCondition",
    "ChainExecutor",
    "RunContext",
    "RunResult",
    "RunStatus",
    "Recording",
    "Step",
    "E2E2DError",
    "ErrorKind",
    "classify_error",
    "BrowserConfig",
    "E2E2DConfig",
    "load_config",
]
