import asyncio
import logging
import uuid
from typing import Optional

from playwright.async_api import Page

from e2e2d.browser.driver import Driver
from e2e2d.config import BrowserConfig

logger = logging.getLogger(__name__)


class BrowserSession:
    """The browser of one run: acquired before the first chain entry and
    released exactly once when the run ends."""

    def __init__(self, session_id: str = None, browser_config: BrowserConfig = None):
        self.session_id = session_id or str(uuid.uuid4())
        self.browser_config = browser_config or BrowserConfig()
        self.driver: Optional[Driver] = None
        self._is_closed = False
        self._lock = asyncio.Lock()

    async def initialize(self):
        """Initialize browser session."""
        async with self._lock:
            if self._is_closed:
                raise RuntimeError("Browser session is closed")

            logger.debug(f"Initializing browser session {self.session_id} with config: {self.browser_config}")
            try:
                self.driver = await Driver.getInstance(browser_config=self.browser_config)
                logger.debug(f"Browser session {self.session_id} initialized successfully via Driver")
            except Exception as e:
                logger.error(f"Failed to initialize browser session {self.session_id}: {e}")
                await self._cleanup()
                raise
        return self

    def get_page(self) -> Page:
        """Return current page via Driver."""
        if self._is_closed or not self.driver:
            raise RuntimeError("Browser session not initialized or closed")
        return self.driver.get_page()

    def is_closed(self) -> bool:
        return self._is_closed

    async def _cleanup(self):
        try:
            if self.driver and not self.driver.is_closed():
                await self.driver.close_browser()
        except Exception as e:
            logger.error(f"Error during cleanup: {e}")
        finally:
            self.driver = None

    async def close(self):
        """Close browser session. Calling it again is a no-op."""
        async with self._lock:
            if self._is_closed:
                return

            logger.info(f"Closing browser session {self.session_id}")
            self._is_closed = True
            await self._cleanup()

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
