from .get_log import GetLog
from .narration import ConsoleNarrationSink, ListNarrationSink, NarrationSink, build_console_text

__all__ = ["GetLog", "NarrationSink", "ConsoleNarrationSink", "ListNarrationSink", "build_console_text"]
