import os
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from e2e2d.actions.action_handler import ActionHandler
from e2e2d.config import E2E2DConfig
from e2e2d.executor.run_context import RunContext
from e2e2d.utils.get_log import GetLog
from e2e2d.utils.narration import ListNarrationSink


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        '--url',
        action='store',
        default=None,
        help='Target URL for the live browser tests (skipped without it)',
    )


@pytest.fixture
def live_url(request: pytest.FixtureRequest) -> str:
    # Priority: CLI --url > env E2E2D_TEST_URL
    url = request.config.getoption('--url') or os.getenv('E2E2D_TEST_URL')
    if not url:
        pytest.skip('live browser tests need --url or E2E2D_TEST_URL')
    return url


class FakeElement:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    async def inner_text(self) -> str:
        return self.page.values[self.selector]

    async def input_value(self) -> str:
        return self.page.values[self.selector]


class FakePage:
    """In-memory stand-in for a Playwright page.

    ``values`` maps the selectors present on the page to their text. ``render``
    maps a selector to a function applied to filled values, to simulate a page
    that mangles input.
    """

    def __init__(self, values=None, render=None, navigation_target=None):
        self.values = dict(values or {})
        self.render = dict(render or {})
        self.navigation_target = navigation_target
        self.url = "about:blank"
        self.calls = []
        self.screenshots = []

    def call_names(self):
        return [name for name, _ in self.calls]

    def _require(self, selector: str):
        if selector not in self.values:
            raise PlaywrightTimeoutError(f"Timeout 30000ms exceeded waiting for locator('{selector}')")

    async def goto(self, url: str):
        self.calls.append(("goto", url))
        if not url.startswith(("http://", "https://", "about:")):
            raise PlaywrightError(f"Protocol error (Page.navigate): Cannot navigate to invalid URL {url}")
        self.url = url

    async def click(self, selector: str):
        self.calls.append(("click", selector))
        self._require(selector)

    async def fill(self, selector: str, value: str):
        self.calls.append(("fill", selector))
        self._require(selector)
        self.values[selector] = self.render.get(selector, lambda v: v)(value)

    async def query_selector(self, selector: str):
        self.calls.append(("query_selector", selector))
        if "!!" in selector:
            raise PlaywrightError(f"Unexpected token \"!!\" while parsing selector \"{selector}\"")
        if selector not in self.values:
            return None
        return FakeElement(self, selector)

    async def wait_for_selector(self, selector: str, **kwargs):
        # waiting for a missing element ends in a timeout, never in None
        self.calls.append(("wait_for_selector", selector))
        if selector not in self.values:
            raise PlaywrightTimeoutError(f"Timeout 30000ms exceeded waiting for locator('{selector}')")
        return FakeElement(self, selector)

    async def screenshot(self, path: str):
        self.calls.append(("screenshot", path))
        self.screenshots.append(path)
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        Path(path).write_bytes(b"\x89PNG")

    async def evaluate(self, script: str, arg=None):
        self.calls.append(("evaluate", arg))
        return True

    @asynccontextmanager
    async def expect_navigation(self, wait_until=None, timeout=None):
        self.calls.append(("expect_navigation", timeout))
        yield
        if self.navigation_target is None:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
        self.url = self.navigation_target


class FakeBrowserSession:
    def __init__(self, page: FakePage):
        self.page = page
        self.close_count = 0

    def get_page(self):
        return self.page

    async def close(self):
        self.close_count += 1


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    GetLog.reset()


@pytest.fixture
def page():
    return FakePage({"#name": "", "#go": "Go", "h1": "Welcome"})


@pytest.fixture
def browser(page):
    return FakeBrowserSession(page)


@pytest.fixture
def narration():
    return ListNarrationSink()


@pytest.fixture
def config(tmp_path):
    return E2E2DConfig(output_folder=str(tmp_path), color=False, exit_on_failure=False)


@pytest.fixture
def ctx(config, page, narration):
    run_ctx = RunContext("unit run", "exercises single actions", config, ActionHandler(page), narration_sink=narration)
    os.makedirs(run_ctx.gen_prefix(), exist_ok=True)
    return run_ctx
