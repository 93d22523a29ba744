import asyncio
import logging
import os
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from e2e2d.actions.action_handler import ActionHandler
from e2e2d.browser.session import BrowserSession
from e2e2d.config import E2E2DConfig, load_config, load_config_data_file
from e2e2d.data import Recording
from e2e2d.errors import ErrorKind, classify_error
from e2e2d.executor.entries import Entry, PreCondition, validate_chain
from e2e2d.executor.run_context import RunContext, output_folder_name
from e2e2d.executor.trace_writer import JsonTraceWriter, TraceSink
from e2e2d.utils.get_log import GetLog
from e2e2d.utils.narration import ConsoleNarrationSink, NarrationSink, build_console_text

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RunResult:
    name: str
    status: RunStatus
    recording: Recording
    error: Optional[BaseException] = None
    kind: Optional[ErrorKind] = None
    trace_path: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCEEDED


class ChainExecutor:
    """Runs a chain of entries against one browser page.

    Entries run strictly in order. The first failure ends the run; the
    failure is classified and narrated, the trace is written and the browser
    is released whether the chain succeeded or not.
    """

    def __init__(
        self,
        name: str,
        desc: str,
        chain: Iterable[Entry],
        config: E2E2DConfig,
        narration_sink: Optional[NarrationSink] = None,
        trace_writer: Optional[TraceSink] = None,
    ):
        self.name = name
        self.desc = desc
        self.chain = validate_chain(chain)
        self.config = config
        self.narration = narration_sink or ConsoleNarrationSink()
        self.trace_writer = trace_writer or JsonTraceWriter()
        self.status = RunStatus.RUNNING

    @property
    def run_folder(self) -> str:
        return output_folder_name(self.config.output_folder, self.name)

    async def execute(self, browser_session: Any = None) -> RunResult:
        """Run the chain.

        Args:
            browser_session: Object exposing ``get_page()`` and ``close()``.
                When omitted a ``BrowserSession`` is created from the browser
                config and initialized before the first entry.

        Returns:
            RunResult: outcome, the Recording and the trace path.

        Raises:
            SystemExit: on failure when ``exit_on_failure`` is configured,
                after the trace was written and the browser released.
        """
        conf = self.config
        session = browser_session or BrowserSession(browser_config=conf.browser)
        ctx = RunContext(self.name, self.desc, conf, narration_sink=self.narration)
        error: Optional[BaseException] = None
        kind: Optional[ErrorKind] = None
        trace_path = ""
        try:
            os.makedirs(self.run_folder, exist_ok=True)
            try:
                if browser_session is None:
                    await session.initialize()
                load_config_data_file(conf)
                ctx.handler = ActionHandler(session.get_page())
                ctx.print_msg(f"\tName: {self.name}\n\tDesc: {self.desc}")

                for entry in self.chain:
                    if conf.restore_recording:
                        ctx.start_recording()
                    await self._run_entry(ctx, entry)
                self.status = RunStatus.SUCCEEDED
            except Exception as e:
                self.status = RunStatus.FAILED
                error = e
                kind = self._report_failure(ctx, e)

            if conf.generate_doc:
                trace_path = self.trace_writer.write(ctx.recording, self.run_folder)
        finally:
            await session.close()

        logger.info(f"Run '{self.name}' {self.status.value} with {len(ctx.recording.steps)} recorded steps")
        if error is not None and conf.exit_on_failure:
            raise SystemExit(1)
        return RunResult(self.name, self.status, ctx.recording, error, kind, trace_path)

    async def _run_entry(self, ctx: RunContext, entry: Entry):
        if isinstance(entry, PreCondition):
            await self._run_pre_condition(ctx, entry)
        else:
            logger.debug(f"running action {entry.name}")
            await entry.run(ctx)

    async def _run_pre_condition(self, ctx: RunContext, pre: PreCondition):
        ctx.follow_steps_in(pre.name)
        was_recording = ctx.recording.recording_is_on
        if pre.record_steps:
            ctx.start_recording()
        else:
            ctx.stop_recording()

        logger.debug(f"running precondition {pre.name} (record_steps={pre.record_steps})")
        for entry in pre.entries:
            await self._run_entry(ctx, entry)

        if self.config.restore_recording:
            ctx.recording.set_recording_enabled(was_recording)

    def _report_failure(self, ctx: RunContext, e: BaseException) -> ErrorKind:
        """Narrate the failure that ended the run and return its kind."""
        color = self.config.color
        if self.config.silent_unless_error and ctx.deferred_output:
            ctx.flush_deferred_output()

        kind = classify_error(e)
        should = getattr(e, "should", None)
        if kind is ErrorKind.COMPARISON and should is not None:
            line = build_console_text(False, color, [*should.msg, "|", f"Got: '{e.got}'", f"Expected: '{e.expected}'"])
        elif kind is ErrorKind.PREDICATE and should is not None:
            line = build_console_text(False, color, should.msg)
        elif kind is ErrorKind.DELEGATED and getattr(e, "action", ""):
            # already narrated by RunContext.handle_error
            line = None
        elif kind is ErrorKind.DELEGATED:
            line = build_console_text(False, color, [str(e)])
        else:
            line = "Error: " + "".join(traceback.format_exception(type(e), e, e.__traceback__))
        if line is not None:
            self.narration.emit(line)

        logger.error(f"Run '{self.name}' failed ({kind.value}): {e}")
        return kind


async def in_order_to(
    name: str,
    desc: str,
    *chain: Entry,
    config: Optional[E2E2DConfig] = None,
    browser_session: Any = None,
    narration_sink: Optional[NarrationSink] = None,
    trace_writer: Optional[TraceSink] = None,
) -> RunResult:
    """Run ``chain`` as the scenario ``name`` and document it.

    Without ``config`` the configuration is read from the command line.
    """
    conf = config or load_config()
    GetLog.get_log(output_folder_name(conf.output_folder, name), conf.log_level)
    executor = ChainExecutor(name, desc, chain, conf, narration_sink, trace_writer)
    return await executor.execute(browser_session)


def run(name: str, desc: str, *chain: Entry, **kwargs) -> RunResult:
    """Blocking variant of ``in_order_to``."""
    return asyncio.run(in_order_to(name, desc, *chain, **kwargs))
