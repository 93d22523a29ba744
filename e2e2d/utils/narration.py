from typing import Iterable, List, Protocol

GREEN_TICK = "\t\t\x1b[32m✓\x1b[0m "
TICK = "\t\t✓ "
RED_CROSS = "\t\t\x1b[31m⨯\x1b[0m "
CROSS = "\t\t⨯ "


def glyph(worked: bool, color: bool) -> str:
    if worked:
        return GREEN_TICK if color else TICK
    return RED_CROSS if color else CROSS


def build_console_text(worked: bool, color: bool, rest: Iterable[str]) -> str:
    return glyph(worked, color) + " ".join(rest)


class NarrationSink(Protocol):
    """Receives the operator-facing pass/fail lines of a run."""

    def emit(self, line: str) -> None: ...


class ConsoleNarrationSink:
    def emit(self, line: str) -> None:
        print(line, flush=True)


class ListNarrationSink:
    """Keeps every emitted line, for tests and for embedding."""

    def __init__(self):
        self.lines: List[str] = []

    def emit(self, line: str) -> None:
        self.lines.append(line)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
