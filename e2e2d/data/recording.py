import json
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

StepKind = Literal["comment", "navTo", "insert", "leftClick", "should", "followStepsIn"]


# ============================================================================
# DATA MODELS
# ============================================================================

class Step(BaseModel):
    """One recorded action or assertion.

    Kind-specific fields (``value`` for an insert, ``failed``/``got``/``expected``
    for a failed assertion) are carried as extra fields. A Step is frozen, so
    every screenshot has to be captured before the Step is built.
    """
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True, alias_generator=to_camel)

    action: StepKind
    selector: str = ""
    doc: str = ""
    before_screenshot: str = ""
    after_highlight_screenshot: str = ""
    after_screenshot: str = ""

    def extras(self) -> Dict[str, Any]:
        """Return the kind-specific fields of this step."""
        return dict(self.__pydantic_extra__ or {})


class Recording(BaseModel):
    """Ordered log of the Steps of one run.

    While recording is off ``add_step`` drops steps, which keeps setup
    actions out of the generated documentation while they still run.
    """
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    steps: List[Step] = Field(default_factory=list)
    recording_is_on: bool = True

    @staticmethod
    def new_step(kind: StepKind, selector: str = "", doc: str = "", **extra: Any) -> Step:
        return Step(action=kind, selector=selector, doc=doc, **extra)

    def add_step(self, step: Step) -> None:
        if self.recording_is_on:
            self.steps.append(step)

    def set_recording_enabled(self, enabled: bool) -> None:
        self.recording_is_on = enabled

    def start_recording(self) -> None:
        self.set_recording_enabled(True)

    def stop_recording(self) -> None:
        self.set_recording_enabled(False)

    def to_json(self) -> str:
        """Serialize to the e2e2d.json format (2-space indent, trailing newline)."""
        return json.dumps(self.model_dump(by_alias=True), indent=2, ensure_ascii=False, default=str) + "\n"

    @classmethod
    def from_json(cls, text: str) -> "Recording":
        return cls.model_validate(json.loads(text))
