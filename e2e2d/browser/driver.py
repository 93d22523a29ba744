import logging

from playwright.async_api import async_playwright

from e2e2d.config import BrowserConfig

logger = logging.getLogger(__name__)


class Driver:
    """Owns the Playwright instance, the browser, its context and the page."""

    @staticmethod
    async def getInstance(browser_config: BrowserConfig):
        """Create a driver and launch its browser.

        Args:
            browser_config (BrowserConfig): Browser configuration options.
        """
        logger.info(f"Driver.getInstance called with browser_config: {browser_config}")
        driver = Driver()
        await driver.create_browser(browser_config=browser_config)
        return driver

    def __init__(self):
        self._is_closed = False
        self.page = None
        self.browser = None
        self.context = None
        self.playwright = None
        self.config = None

    def is_closed(self):
        """Check if the browser instance is closed."""
        return getattr(self, "_is_closed", True)

    async def create_browser(self, browser_config: BrowserConfig):
        """Creates a new Chromium instance and sets up the page.

        Args:
            browser_config (BrowserConfig): headless, slow_mo, devtools and the
                viewport used for the window and the context.

        Returns:
            Page: the page every action of the run is performed on.
        """
        try:
            viewport = browser_config.viewport
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(
                headless=browser_config.headless,
                slow_mo=browser_config.slow_mo,
                devtools=browser_config.devtools,
                args=[
                    "--disable-dev-shm-usage",  # Mitigate shared memory issues in Docker
                    f"--window-size={viewport.width},{viewport.height}",
                ],
            )

            self.context = await self.browser.new_context(
                viewport={"width": viewport.width, "height": viewport.height},
                locale=browser_config.language,
            )
            self.page = await self.context.new_page()
            self.config = browser_config

            logger.debug(f"Browser instance created successfully with config: {browser_config}")
            return self.page

        except Exception:
            logger.error("Failed to create browser instance.", exc_info=True)
            raise

    def get_page(self):
        return self.page

    async def close_browser(self):
        """Closes the browser instance and stops Playwright."""
        try:
            if not self.is_closed():
                await self.browser.close()
                await self.playwright.stop()
                self._is_closed = True
                logger.info("Browser instance closed successfully.")
        except Exception:
            logger.error("Failed to close browser instance.", exc_info=True)
            raise
