import logging
import os
import re
from typing import TYPE_CHECKING, List, Optional

from e2e2d.actions import action_library
from e2e2d.assertions.should import Should
from e2e2d.config import E2E2DConfig
from e2e2d.data import Recording
from e2e2d.errors import E2E2DError
from e2e2d.utils.narration import ConsoleNarrationSink, NarrationSink, glyph

if TYPE_CHECKING:
    from e2e2d.actions.action_handler import ActionHandler

logger = logging.getLogger(__name__)


def sanitize_run_name(name: str) -> str:
    return re.sub(r"[ /\\]", "_", name)


def output_folder_name(out_dir: str, run_name: str) -> str:
    """Return the run's documentation folder, with a trailing separator."""
    return os.path.join(out_dir, sanitize_run_name(run_name), "")


class RunContext:
    """State threaded through every action and assertion of one run.

    Holds the step counter, the Recording, the deferred output buffer used in
    silent-unless-error mode and the configuration. Only the chain executor
    creates it; actions mutate it (counter, recording) and hand it back.
    """

    def __init__(
        self,
        name: str,
        desc: str,
        conf: E2E2DConfig,
        handler: Optional["ActionHandler"] = None,
        recording: Optional[Recording] = None,
        narration_sink: Optional[NarrationSink] = None,
    ):
        self.name = name
        self.desc = desc
        self.conf = conf
        self.handler = handler
        self.recording = recording if recording is not None else Recording()
        self.narration = narration_sink or ConsoleNarrationSink()
        self.cnt = 0
        self.deferred_output: List[str] = []

    # ------------------------------------------------------------------
    # recording
    # ------------------------------------------------------------------
    def stop_recording(self):
        self.recording.stop_recording()

    def start_recording(self):
        self.recording.start_recording()

    # ------------------------------------------------------------------
    # narration
    # ------------------------------------------------------------------
    def print_msg(self, msg: str):
        if self.conf.silent_unless_error:
            self.deferred_output.append(msg)
        else:
            self.narration.emit(msg)

    def print_success(self, text: str):
        self.print_msg(glyph(True, self.conf.color) + text)

    def flush_deferred_output(self):
        lines, self.deferred_output = self.deferred_output, []
        for line in lines:
            self.narration.emit(line)

    def handle_error(self, e: BaseException, fun: str, msg: str = ""):
        """Narrate a failed delegated call and raise it, annotated, to the caller.

        This is the only narration of the failure, the executor does not
        repeat it.
        """
        self.print_msg(glyph(False, self.conf.color) + f"You {fun}{' ' + msg if msg else ''} failed")
        self.print_msg("\t\t\twith error")
        self.print_msg(str(e))
        logger.warning(f"{fun} {msg} failed: {e}")
        raise E2E2DError.delegated(fun, msg, e) from e

    # ------------------------------------------------------------------
    # files and screenshots
    # ------------------------------------------------------------------
    def gen_prefix(self) -> str:
        return output_folder_name(self.conf.output_folder, self.name)

    def gen_file_name(self, action: str, part: str) -> str:
        action = re.sub(r"[^A-Za-z0-9.\-]+", "_", action).strip("_")
        return f"{self.gen_prefix()}{self.cnt}_{action}_{part}.png"

    async def take_screenshot(self, file_name: str) -> str:
        """Capture ``file_name`` when documentation is being generated.

        Returns the path relative to the run folder, or "" when no capture
        happened (recording off or documentation disabled).
        """
        if not (self.recording.recording_is_on and self.conf.generate_doc):
            return ""
        await self.handler.screenshot(file_name)
        return file_name[len(self.gen_prefix()):]

    async def highlight(self, selector: str, should_highlight: bool):
        if should_highlight and selector:
            await self.handler.highlight(selector)

    async def dehighlight(self, selector: str, should_highlight: bool):
        if should_highlight and selector:
            await self.handler.dehighlight()

    # ------------------------------------------------------------------
    # assertions
    # ------------------------------------------------------------------
    def should(self, *steps) -> Should:
        self.cnt += 1
        return Should(self, True, steps)

    def should_no_screenshot(self, *steps) -> Should:
        self.cnt += 1
        return Should(self, False, steps)

    # ------------------------------------------------------------------
    # actions
    # ------------------------------------------------------------------
    async def comment(self, doc: str):
        return await action_library.comment(self, doc)

    async def nav_to(self, url: str, doc: str = ""):
        return await action_library.nav_to(self, url, doc)

    async def fill(self, selector: str, value: str, doc: str = ""):
        return await action_library.fill(self, selector, value, doc)

    async def left_click(self, selector: str, doc: str = "", after_click_screenshot: bool = True):
        return await action_library.left_click(self, selector, doc, after_click_screenshot)

    async def left_click_nav(self, selector: str, doc: str = "", after_click_screenshot: bool = True):
        return await action_library.left_click_nav(self, selector, doc, after_click_screenshot)

    def follow_steps_in(self, name: str):
        return action_library.follow_steps_in(self, name)
