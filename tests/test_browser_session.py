import pytest

from e2e2d.browser import BrowserSession, Driver
from e2e2d.config import BrowserConfig
from e2e2d.utils.narration import ListNarrationSink


class FakeDriver:
    def __init__(self, browser_config):
        self.browser_config = browser_config
        self.page = object()
        self.closed = 0

    def is_closed(self):
        return self.closed > 0

    def get_page(self):
        return self.page

    async def close_browser(self):
        self.closed += 1


@pytest.fixture
def drivers(monkeypatch):
    created = []

    async def get_instance(browser_config):
        driver = FakeDriver(browser_config)
        created.append(driver)
        return driver

    monkeypatch.setattr(Driver, "getInstance", staticmethod(get_instance))
    return created


@pytest.mark.asyncio
async def test_session_as_context_manager_closes_the_browser_once(drivers):
    config = BrowserConfig(headless=True)

    async with BrowserSession(browser_config=config) as session:
        assert session.get_page() is drivers[0].page
        assert drivers[0].browser_config is config

    assert session.is_closed()
    assert drivers[0].closed == 1
    await session.close()
    assert drivers[0].closed == 1


@pytest.mark.asyncio
async def test_closed_session_has_no_page(drivers):
    session = await BrowserSession().initialize()
    await session.close()

    with pytest.raises(RuntimeError):
        session.get_page()
    with pytest.raises(RuntimeError):
        await session.initialize()


def test_list_sink_joins_lines():
    sink = ListNarrationSink()
    sink.emit("\tName: x")
    sink.emit("\t\t✓ You navigate to https://x")

    assert sink.text == "\tName: x\n\t\t✓ You navigate to https://x"
