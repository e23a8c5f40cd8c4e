import asyncio
import logging
import os
import uuid
from typing import Optional

from playwright.async_api import BrowserContext, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from formqa.browser.config import RunConfig
from formqa.browser.driver import Driver


class BrowserSession:
    """One browser session per test: its own browser, context and page.

    Sessions are never shared between tests, so no cookies or storage leak
    from one scenario into another.
    """

    def __init__(self, run_config: Optional[RunConfig] = None, session_id: str = None, artifact_dir: str = None):
        self.session_id = session_id or str(uuid.uuid4())
        self.config = run_config or RunConfig()
        self.artifact_dir = artifact_dir
        self.driver: Optional[Driver] = None
        self._is_closed = False
        self._lock = asyncio.Lock()

    @property
    def timeouts(self):
        return self.config.timeouts

    def _browser_config(self) -> dict:
        browser_config = self.config.browser_config()
        browser_config["command_timeout"] = self.timeouts.command
        browser_config["page_load_timeout"] = self.timeouts.page_load
        if self.config.video and self.artifact_dir:
            browser_config["video_dir"] = os.path.join(self.artifact_dir, "videos")
        return browser_config

    async def initialize(self):
        """Initialize browser session."""
        async with self._lock:
            if self._is_closed:
                raise RuntimeError("Browser session is closed")

            browser_config = self._browser_config()
            logging.debug(f"Initializing browser session {self.session_id} with config: {browser_config}")

            try:
                self.driver = await Driver.getInstance(browser_config=browser_config)
                logging.debug(f"Browser session {self.session_id} initialized successfully via Driver")
            except Exception as e:
                logging.error(f"Failed to initialize browser session {self.session_id}: {e}")
                await self._cleanup()
                raise
        return self

    async def navigate_to(self, path: str, **kwargs):
        """Navigate to a path below the configured base URL (or an absolute URL).

        Raises PlaywrightTimeoutError when the page-load budget runs out.
        """
        page = self.get_page()
        url = self.config.url_for(path)

        logging.info(f"Session {self.session_id} navigating to: {url}")
        kwargs.setdefault("timeout", self.timeouts.page_load)
        kwargs.setdefault("wait_until", "load")

        await page.goto(url, **kwargs)
        return url

    def get_page(self) -> Page:
        """Return current page via Driver."""
        if self._is_closed or not self.driver:
            raise RuntimeError("Browser session not initialized or closed")
        return self.driver.get_page()

    def get_context(self) -> BrowserContext:
        if self._is_closed or not self.driver:
            raise RuntimeError("Browser session not initialized or closed")
        return self.driver.get_context()

    def current_url(self) -> str:
        return self.get_page().url

    def is_closed(self) -> bool:
        """Check if session is closed."""
        return self._is_closed

    async def screenshot(self, name: str) -> Optional[str]:
        """Save a full-page screenshot into the artifact folder and return its
        path, or None when the session has no artifact folder."""
        if not self.artifact_dir:
            return None
        folder = os.path.join(self.artifact_dir, "screenshots")
        os.makedirs(folder, exist_ok=True)
        path = os.path.join(folder, f"{name}.png")
        try:
            await self.get_page().screenshot(path=path, full_page=True)
        except PlaywrightTimeoutError as e:
            logging.warning(f"Screenshot for {name} timed out: {e}")
            return None
        logging.info(f"Saved failure screenshot: {path}")
        return path

    async def _cleanup(self):
        """Internal cleanup method."""
        try:
            if self.driver and not self.driver.is_closed():
                await self.driver.close_browser()
        except Exception as e:
            logging.error(f"Error during cleanup: {e}")
        finally:
            self.driver = None

    async def close(self):
        """Close browser session."""
        async with self._lock:
            if self._is_closed:
                return

            logging.debug(f"Closing browser session {self.session_id}")
            self._is_closed = True
            await self._cleanup()
            logging.debug(f"Browser session {self.session_id} closed")

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
