import os

import pytest
from playwright.async_api import Error as PlaywrightError

from e2e2d.errors import E2E2DError, ErrorKind, classify_error


@pytest.mark.asyncio
async def test_comment_records_without_touching_the_page(ctx, page):
    await ctx.comment("Start at the landing page")

    assert page.calls == []
    step = ctx.recording.steps[0]
    assert (step.action, step.selector, step.doc) == ("comment", "", "Start at the landing page")
    assert ctx.cnt == 1


@pytest.mark.asyncio
async def test_nav_to(ctx, page, narration):
    await ctx.nav_to("https://x.example", "open the app")

    assert page.url == "https://x.example"
    step = ctx.recording.steps[0]
    assert step.action == "navTo"
    assert step.before_screenshot == "0_navTo_before.png"
    assert os.path.isfile(os.path.join(ctx.gen_prefix(), "0_navTo_before.png"))
    assert narration.lines == ["\t\t✓ You navigate to https://x.example"]
    assert ctx.cnt == 1


@pytest.mark.asyncio
async def test_fill_captures_every_phase_in_order(ctx, page):
    await ctx.fill("#name", "Ada", "type the name")

    assert page.call_names() == ["screenshot", "evaluate", "screenshot", "fill", "screenshot", "evaluate"]
    assert page.calls[1] == ("evaluate", "#name")
    step = ctx.recording.steps[0]
    assert step.action == "insert"
    assert step.extras() == {"value": "Ada"}
    assert (step.before_screenshot, step.after_highlight_screenshot, step.after_screenshot) == (
        "0_insert_before.png",
        "0_insert_highlight.png",
        "0_insert_after.png",
    )
    assert page.values["#name"] == "Ada"


@pytest.mark.asyncio
async def test_left_click_dehighlights_before_clicking(ctx, page):
    await ctx.left_click("#go", "press go")

    assert page.call_names() == ["screenshot", "evaluate", "screenshot", "evaluate", "click", "screenshot"]
    step = ctx.recording.steps[0]
    assert step.action == "leftClick"
    assert step.after_screenshot == "0_leftClick_after.png"


@pytest.mark.asyncio
async def test_left_click_without_after_screenshot(ctx, page):
    await ctx.left_click("#go", after_click_screenshot=False)

    assert ctx.recording.steps[0].after_screenshot == ""
    assert page.call_names().count("screenshot") == 2


@pytest.mark.asyncio
async def test_left_click_nav_joins_click_and_navigation(ctx, page, config):
    page.navigation_target = "https://x.example/next"

    await ctx.left_click_nav("#go")

    assert page.url == "https://x.example/next"
    assert ("expect_navigation", config.navigation_timeout_ms) in page.calls
    assert ctx.recording.steps[0].action == "leftClick"


@pytest.mark.asyncio
async def test_left_click_nav_fails_when_no_navigation_happens(ctx, page, narration):
    with pytest.raises(E2E2DError) as exc_info:
        await ctx.left_click_nav("#go")

    err = exc_info.value
    assert err.kind is ErrorKind.DELEGATED
    assert err.action == "leftClick"
    assert isinstance(err.__cause__, PlaywrightError)
    assert ctx.recording.steps == []
    assert narration.lines[0] == "\t\t⨯ You leftClick on '#go' failed"
    assert narration.lines[1] == "\t\t\twith error"
    assert "Timeout" in narration.lines[2]


@pytest.mark.asyncio
async def test_fill_failure_is_annotated_not_swallowed(ctx):
    with pytest.raises(E2E2DError) as exc_info:
        await ctx.fill("#nope", "Ada")

    assert str(exc_info.value).startswith("You insert '#nope' with 'Ada' failed")
    assert classify_error(exc_info.value) is ErrorKind.DELEGATED
    assert ctx.cnt == 0


@pytest.mark.asyncio
async def test_navigation_failure(ctx, narration):
    with pytest.raises(E2E2DError):
        await ctx.nav_to("not a url")

    assert narration.lines[0] == "\t\t⨯ You navTo 'not a url' failed"


@pytest.mark.asyncio
async def test_no_screenshots_without_doc_generation(ctx, page, config):
    config.generate_doc = False

    await ctx.fill("#name", "Ada")

    assert page.screenshots == []
    step = ctx.recording.steps[0]
    assert step.before_screenshot == step.after_highlight_screenshot == step.after_screenshot == ""


@pytest.mark.asyncio
async def test_no_screenshots_while_recording_is_off(ctx, page):
    ctx.stop_recording()

    await ctx.nav_to("https://x.example")

    assert page.screenshots == []
    assert ctx.recording.steps == []
    assert ctx.cnt == 1


@pytest.mark.asyncio
async def test_silent_mode_defers_narration(ctx, narration, config):
    config.silent_unless_error = True

    await ctx.nav_to("https://x.example")

    assert narration.lines == []
    assert ctx.deferred_output == ["\t\t✓ You navigate to https://x.example"]
    ctx.flush_deferred_output()
    assert narration.lines == ["\t\t✓ You navigate to https://x.example"]
    assert ctx.deferred_output == []


def test_follow_steps_in_marker(ctx):
    ctx.follow_steps_in("log in")

    step = ctx.recording.steps[0]
    assert (step.action, step.selector, step.doc) == ("followStepsIn", "log in", "")
    assert ctx.cnt == 1
