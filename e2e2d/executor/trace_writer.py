import logging
import os
from typing import Protocol

from e2e2d.data import Recording

logger = logging.getLogger(__name__)


class TraceSink(Protocol):
    def write(self, recording: Recording, folder: str) -> str: ...


class JsonTraceWriter:
    """Writes the Recording of a run to ``<folder>/e2e2d.json``."""

    file_name = "e2e2d.json"

    def write(self, recording: Recording, folder: str) -> str:
        os.makedirs(folder, exist_ok=True)
        json_path = os.path.join(folder, self.file_name)
        with open(json_path, "w", encoding="utf-8") as f:
            f.write(recording.to_json())
        logger.info(f"Trace with {len(recording.steps)} steps written to {json_path}")
        return json_path
