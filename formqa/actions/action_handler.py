import logging

from playwright.async_api import expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from formqa.browser.session import BrowserSession
from formqa.errors import AssertionTimeout, ElementNotFound
from formqa.pages.login_page import LoginPage
from formqa.pages.types import Locator


class ActionHandler:
    """Composite helpers shared by scenarios.

    Each helper only strings together page primitives in a fixed order; it
    adds no behaviour of its own.
    """

    def __init__(self, session: BrowserSession):
        self.session = session

    @property
    def page(self):
        return self.session.get_page()

    async def login(self, username: str, password: str) -> None:
        """Fill username, fill password, then submit, on the current login page."""
        logging.info(f"Logging in as '{username}'")
        login_page = LoginPage(self.session)
        await login_page.fill_username(username)
        await login_page.fill_password(password)
        await login_page.submit()

    async def fill_field(self, locator: Locator, value: str) -> None:
        """Clear an ad hoc field, then type ``value`` into it."""
        field = self.page.locator(locator).first
        timeout = self.session.timeouts.command
        try:
            await field.clear(timeout=timeout)
            if value:
                await field.press_sequentially(value, timeout=timeout)
        except PlaywrightTimeoutError as e:
            if await self.page.locator(locator).count() == 0:
                raise ElementNotFound(locator, "fill", timeout) from e
            raise

    async def contains_text(self, locator: Locator, text: str) -> None:
        """Assert that an ad hoc element contains ``text`` as a substring."""
        timeout = self.session.timeouts.command
        try:
            await expect(self.page.locator(locator).first).to_contain_text(text, timeout=timeout)
        except AssertionError as e:
            raise AssertionTimeout(f"text containing '{text}'", locator, timeout, str(e)) from e
