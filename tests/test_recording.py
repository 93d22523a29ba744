import json

import pytest
from pydantic import ValidationError

from e2e2d.data import Recording, Step


def test_add_step_is_ignored_while_recording_is_off():
    recording = Recording()
    recording.add_step(Recording.new_step("comment", doc="visible"))
    recording.stop_recording()
    recording.add_step(Recording.new_step("navTo", doc="setup"))
    recording.start_recording()
    recording.add_step(Recording.new_step("comment", doc="visible again"))

    assert [s.doc for s in recording.steps] == ["visible", "visible again"]


def test_step_is_frozen():
    step = Recording.new_step("insert", "#name", "type the name", value="Ada")
    with pytest.raises(ValidationError):
        step.after_screenshot = "late.png"


def test_kind_specific_fields_are_extras():
    step = Recording.new_step("should", "#name", "You see #name", failed="equals", got="Ad a", expected="Ada")
    assert step.extras() == {"failed": "equals", "got": "Ad a", "expected": "Ada"}
    assert Recording.new_step("comment").extras() == {}


def test_to_json_uses_camel_case_and_two_space_indent():
    recording = Recording()
    recording.add_step(Recording.new_step("navTo", doc="open", before_screenshot="0_navTo_before.png"))

    text = recording.to_json()

    assert text.endswith("}\n")
    assert text.startswith('{\n  "steps": [\n')
    data = json.loads(text)
    assert data["recordingIsOn"] is True
    assert data["steps"][0] == {
        "action": "navTo",
        "selector": "",
        "doc": "open",
        "beforeScreenshot": "0_navTo_before.png",
        "afterHighlightScreenshot": "",
        "afterScreenshot": "",
    }


def test_json_round_trip_keeps_steps_field_for_field():
    recording = Recording()
    recording.add_step(Recording.new_step("comment", doc="start"))
    recording.add_step(Recording.new_step("insert", "#name", "", before_screenshot="1_insert_before.png", value="Ada"))
    recording.add_step(Recording.new_step("should", "#name", "You see #name", failed="equals", got=3, expected="3"))

    reloaded = Recording.from_json(recording.to_json())

    assert reloaded.steps == recording.steps
    assert reloaded.steps[1].extras()["value"] == "Ada"
    assert isinstance(reloaded.steps[0], Step)


def test_values_json_cannot_hold_are_written_as_text():
    class Thing:
        def __str__(self):
            return "<thing>"

    recording = Recording()
    recording.add_step(Recording.new_step("should", failed="equals", got=Thing(), expected="x"))

    assert json.loads(recording.to_json())["steps"][0]["got"] == "<thing>"


def test_unknown_step_kind_is_rejected():
    with pytest.raises(ValidationError):
        Recording.new_step("hover")
