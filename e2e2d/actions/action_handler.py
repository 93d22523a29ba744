import logging
from typing import Any

from playwright.async_api import ElementHandle, Page

logger = logging.getLogger(__name__)

HIGHLIGHT_JS = """
(selector) => {
    const el = document.querySelector(selector);
    if (!el) {
        return false;
    }
    el.setAttribute('data-e2e2d-outline', el.style.outline || '');
    el.style.outline = '3px solid #ff3d00';
    el.style.outlineOffset = '2px';
    return true;
}
"""

DEHIGHLIGHT_JS = """
() => {
    document.querySelectorAll('[data-e2e2d-outline]').forEach((el) => {
        el.style.outline = el.getAttribute('data-e2e2d-outline');
        el.style.outlineOffset = '';
        el.removeAttribute('data-e2e2d-outline');
    });
}
"""


class ActionHandler:
    """The page automation boundary.

    Every method is a suspension point and every Playwright error is left to
    propagate; annotating it is the caller's job.
    """

    def __init__(self, page: Page):
        self.page = page

    async def navigate(self, url: str):
        logger.debug(f"navigate to {url}")
        await self.page.goto(url)

    async def click(self, selector: str):
        logger.debug(f"click {selector}")
        await self.page.click(selector)

    async def click_and_wait_for_navigation(self, selector: str, timeout_ms: int = 5000):
        """Click and wait for the navigation the click triggers.

        The click and the navigation wait are joined; if the page did not
        reach network idle within ``timeout_ms`` the join raises a timeout.
        """
        logger.debug(f"click {selector} and wait up to {timeout_ms}ms for navigation")
        async with self.page.expect_navigation(wait_until="networkidle", timeout=timeout_ms):
            await self.page.click(selector)

    async def fill(self, selector: str, value: str):
        logger.debug(f"fill {selector} with '{value}'")
        await self.page.fill(selector, value)

    async def query_selector(self, selector: str) -> ElementHandle | None:
        """Return the element matching ``selector``, None when there is none.

        Does not wait for the element to appear. A malformed selector raises.
        """
        logger.debug(f"query {selector}")
        return await self.page.query_selector(selector)

    async def screenshot(self, path: str):
        logger.debug(f"screenshot {path}")
        await self.page.screenshot(path=path)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        if arg is None:
            return await self.page.evaluate(script)
        return await self.page.evaluate(script, arg)

    async def highlight(self, selector: str) -> bool:
        return await self.evaluate(HIGHLIGHT_JS, selector)

    async def dehighlight(self):
        await self.evaluate(DEHIGHLIGHT_JS)
