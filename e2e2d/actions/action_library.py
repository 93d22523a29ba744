"""Named actions of a chain.

Each action takes a before screenshot, optionally highlights its target,
performs the delegated operation, takes the remaining screenshots, appends one
Step, advances the step counter and narrates the result. A delegated failure
is narrated and re-raised through ``RunContext.handle_error``.
"""
from typing import TYPE_CHECKING

from e2e2d.data import Recording

if TYPE_CHECKING:
    from e2e2d.executor.run_context import RunContext


async def comment(ctx: "RunContext", doc: str):
    ctx.recording.add_step(Recording.new_step("comment", "", doc))
    ctx.cnt += 1
    return ctx


async def nav_to(ctx: "RunContext", url: str, doc: str = ""):
    try:
        before = await ctx.take_screenshot(ctx.gen_file_name("navTo", "before"))
        await ctx.handler.navigate(url)
    except Exception as e:
        ctx.handle_error(e, "navTo", f"'{url}'")
    ctx.print_success(f"You navigate to {url}")
    ctx.recording.add_step(Recording.new_step("navTo", "", doc, before_screenshot=before))
    ctx.cnt += 1
    return ctx


async def fill(ctx: "RunContext", selector: str, value: str, doc: str = ""):
    try:
        before = await ctx.take_screenshot(ctx.gen_file_name("insert", "before"))
        await ctx.highlight(selector, True)
        highlight = await ctx.take_screenshot(ctx.gen_file_name("insert", "highlight"))
        await ctx.handler.fill(selector, value)
        after = await ctx.take_screenshot(ctx.gen_file_name("insert", "after"))
        await ctx.dehighlight(selector, True)
    except Exception as e:
        ctx.handle_error(e, "insert", f"'{selector}' with '{value}'")
    ctx.print_success(f"You insert '{value}' into {selector}")
    ctx.recording.add_step(
        Recording.new_step(
            "insert",
            selector,
            doc,
            before_screenshot=before,
            after_highlight_screenshot=highlight,
            after_screenshot=after,
            value=value,
        )
    )
    ctx.cnt += 1
    return ctx


async def _left_click(ctx: "RunContext", selector: str, doc: str, after_click_screenshot: bool, wait_for_navigation: bool):
    after = ""
    try:
        before = await ctx.take_screenshot(ctx.gen_file_name("leftClick", "before"))
        await ctx.highlight(selector, True)
        highlight = await ctx.take_screenshot(ctx.gen_file_name("leftClick", "highlight"))
        await ctx.dehighlight(selector, True)

        if wait_for_navigation:
            await ctx.handler.click_and_wait_for_navigation(selector, ctx.conf.navigation_timeout_ms)
        else:
            await ctx.handler.click(selector)
        if after_click_screenshot:
            after = await ctx.take_screenshot(ctx.gen_file_name("leftClick", "after"))
    except Exception as e:
        ctx.handle_error(e, "leftClick", f"on '{selector}'")
    ctx.print_success(f"You left click {selector}")
    ctx.recording.add_step(
        Recording.new_step(
            "leftClick",
            selector,
            doc,
            before_screenshot=before,
            after_highlight_screenshot=highlight,
            after_screenshot=after,
        )
    )
    ctx.cnt += 1
    return ctx


async def left_click(ctx: "RunContext", selector: str, doc: str = "", after_click_screenshot: bool = True):
    return await _left_click(ctx, selector, doc, after_click_screenshot, wait_for_navigation=False)


async def left_click_nav(ctx: "RunContext", selector: str, doc: str = "", after_click_screenshot: bool = True):
    """Left click a link-style element and wait for the page it leads to."""
    return await _left_click(ctx, selector, doc, after_click_screenshot, wait_for_navigation=True)


def follow_steps_in(ctx: "RunContext", name: str):
    """Documentation breadcrumb pointing at the named precondition."""
    ctx.recording.add_step(Recording.new_step("followStepsIn", name, ""))
    ctx.cnt += 1
    return ctx
