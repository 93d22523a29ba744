from .chain_executor import ChainExecutor, RunResult, RunStatus, in_order_to, run
from .entries import (
    Action,
    PreCondition,
    ShouldAction,
    action,
    comment,
    fill,
    left_click,
    left_click_nav,
    nav_to,
    pre_condition,
    should,
    should_no_screenshot,
)
from .run_context import RunContext
from .trace_writer import JsonTraceWriter

__all__ = [
    "ChainExecutor",
    "RunResult",
    "RunStatus",
    "RunContext",
    "JsonTraceWriter",
    "in_order_to",
    "run",
    "Action",
    "PreCondition",
    "ShouldAction",
    "action",
    "pre_condition",
    "comment",
    "nav_to",
    "fill",
    "left_click",
    "left_click_nav",
    "should",
    "should_no_screenshot",
]
