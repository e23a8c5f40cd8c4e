import asyncio
import logging

from playwright.async_api import async_playwright


class Driver:
    # Lock used to ensure thread-safety when multiple coroutines create Driver instances concurrently
    __lock = asyncio.Lock()

    @staticmethod
    async def getInstance(browser_config, *args, **kwargs):
        """Create a new Driver with its own browser, context and page.

        Every call returns an independent instance so that no browser state
        is carried from one test to the next.

        Args:
            browser_config (dict): Browser configuration options.
        """
        logging.debug(f"Driver.getInstance called with browser_config: {browser_config}")

        async with Driver.__lock:
            driver = Driver(browser_config=browser_config)
            await driver.create_browser(browser_config=browser_config)
            return driver

    def __init__(self, browser_config=None, *args, **kwargs):
        self._is_closed = False
        self.page = None
        self.browser = None
        self.context = None
        self.playwright = None
        self.config = browser_config

    def is_closed(self):
        """Check if the browser instance is closed."""
        return getattr(self, "_is_closed", True)

    async def create_browser(self, browser_config):
        """Creates a new browser instance and sets up the page.

        Args:
            browser_config (dict): Browser configuration containing:
                - headless (bool): Whether to run browser in headless mode
                - viewport (dict): Browser viewport width and height
                - language (str): Browser locale
                - command_timeout (float): Default budget for element actions, in ms
                - page_load_timeout (float): Default budget for navigation, in ms
                - video_dir (str, optional): Folder to record videos into

        Returns:
            Page: The page created in the new context.
        """
        try:
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(
                headless=browser_config["headless"],
                args=[
                    "--disable-dev-shm-usage",  # Mitigate shared memory issues in Docker
                    "--no-sandbox",
                    "--disable-setuid-sandbox",
                    "--disable-gpu",
                    "--force-device-scale-factor=1",
                    f'--window-size={browser_config["viewport"]["width"]},{browser_config["viewport"]["height"]}',
                ],
            )

            context_options = {
                "viewport": {"width": browser_config["viewport"]["width"], "height": browser_config["viewport"]["height"]},
                "device_scale_factor": 1,
                "is_mobile": False,
                "locale": browser_config["language"],
            }
            if browser_config.get("video_dir"):
                context_options["record_video_dir"] = browser_config["video_dir"]
                context_options["record_video_size"] = context_options["viewport"]

            self.context = await self.browser.new_context(**context_options)
            if browser_config.get("command_timeout"):
                self.context.set_default_timeout(browser_config["command_timeout"])
            if browser_config.get("page_load_timeout"):
                self.context.set_default_navigation_timeout(browser_config["page_load_timeout"])

            self.page = await self.context.new_page()
            browser_config["browser"] = "Chromium"
            self.config = browser_config

            logging.debug(f"Browser instance created successfully with config: {browser_config}")
            return self.page

        except Exception as e:
            logging.error("Failed to create browser instance.", exc_info=True)
            await self.close_browser()
            raise e

    def get_context(self):
        return self.context

    def get_page(self):
        """Returns the current page instance.

        Returns:
            Page: The current page instance.
        """
        return self.page

    async def close_browser(self):
        """Closes the context (flushing any video), the browser and stops Playwright."""
        if self.is_closed():
            return
        try:
            if self.context is not None:
                await self.context.close()
            if self.browser is not None:
                await self.browser.close()
            if self.playwright is not None:
                await self.playwright.stop()
            logging.debug("Browser instance closed successfully.")
        except Exception as e:
            logging.error("Failed to close browser instance.", exc_info=True)
            raise e
        finally:
            self._is_closed = True
