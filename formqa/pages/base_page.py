"""Shared plumbing for page objects.

A page object binds one conceptual page to a private set of locators and
exposes actions (visit, fill, submit) and assertions (``verify_*``) on it.
Page objects hold no state of their own: everything lives in the browser
session they are bound to.

Actions wait for their target under the command budget. Assertions wrap one
Playwright ``expect`` each, so they are retried until they pass or the budget
runs out; they never change the page.

When a locator meant to address a single element matches several, the first
match is used and a warning is logged.
"""

import logging
import re
from typing import Awaitable, Optional

from playwright.async_api import Locator as ElementLocator
from playwright.async_api import Page, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from formqa.browser.session import BrowserSession
from formqa.errors import AssertionTimeout, ElementNotFound, NavigationTimeout
from formqa.pages.types import Locator


class BasePage:
    DEFAULT_PATH = "/"

    # The element that defines the page; visit() waits for it to be visible.
    _FORM: Locator = "form"

    def __init__(self, session: BrowserSession):
        self.session = session

    @property
    def page(self) -> Page:
        return self.session.get_page()

    @property
    def timeouts(self):
        return self.session.timeouts

    # Navigation

    async def visit(self, path: Optional[str] = None) -> None:
        """Open the page and wait until its form container is visible.

        Raises:
            NavigationTimeout: the page did not load within the page-load
                budget, or the form never became visible within the command
                budget.
        """
        target = path or self.DEFAULT_PATH
        url = self.session.config.url_for(target)
        try:
            await self.session.navigate_to(target)
        except PlaywrightTimeoutError as e:
            raise NavigationTimeout(url, self._FORM, self.timeouts.page_load, "page load timed out") from e

        try:
            await expect(self._locate(self._FORM)).to_be_visible(timeout=self.timeouts.command)
        except AssertionError as e:
            raise NavigationTimeout(url, self._FORM, self.timeouts.command, str(e)) from e
        logging.debug(f"{type(self).__name__} ready at {url}")

    def current_url(self) -> str:
        return self.session.current_url()

    def expect_request(self, url_fragment: str):
        """Async context manager waiting for a request whose URL contains
        ``url_fragment``, under the request budget."""
        return self.page.expect_request(lambda request: url_fragment in request.url, timeout=self.timeouts.request)

    def expect_response(self, url_fragment: str):
        """Async context manager waiting for a response whose URL contains
        ``url_fragment``, under the response budget."""
        return self.page.expect_response(lambda response: url_fragment in response.url, timeout=self.timeouts.response)

    async def verify_url_contains(self, fragment: str) -> None:
        await self._verify(
            f"URL to contain '{fragment}'",
            None,
            expect(self.page).to_have_url(re.compile(re.escape(fragment)), timeout=self.timeouts.command),
        )

    async def verify_form_visible(self) -> None:
        await self._verify_visible(self._FORM, "form to be visible")

    # Locating

    def _locate(self, locator: Locator) -> ElementLocator:
        return self.page.locator(locator).first

    async def _resolve(self, locator: Locator) -> ElementLocator:
        """Return the first match, logging when the locator is ambiguous."""
        count = await self.page.locator(locator).count()
        if count > 1:
            logging.warning(f"Locator '{locator}' matched {count} elements on {self.current_url()}; using the first")
        return self._locate(locator)

    async def _raise_if_missing(self, locator: Locator, action: str, error: Exception) -> None:
        if await self.page.locator(locator).count() == 0:
            raise ElementNotFound(locator, action, self.timeouts.command) from error

    # Actions

    async def _fill(self, locator: Locator, value: str) -> None:
        """Clear the field, then type ``value`` key by key like a user would."""
        field = await self._resolve(locator)
        logging.debug(f"Filling '{locator}' with {len(value)} characters")
        try:
            await field.clear(timeout=self.timeouts.command)
            if value:
                await field.press_sequentially(value, timeout=self.timeouts.command)
        except PlaywrightTimeoutError as e:
            await self._raise_if_missing(locator, "fill", e)
            raise

    async def _clear(self, locator: Locator) -> None:
        field = await self._resolve(locator)
        try:
            await field.clear(timeout=self.timeouts.command)
        except PlaywrightTimeoutError as e:
            await self._raise_if_missing(locator, "clear", e)
            raise

    async def _click(self, locator: Locator) -> None:
        target = await self._resolve(locator)
        logging.debug(f"Clicking '{locator}'")
        try:
            await target.click(timeout=self.timeouts.command)
        except PlaywrightTimeoutError as e:
            await self._raise_if_missing(locator, "click", e)
            raise

    # Capability queries: one-shot reads, evaluated once, never retried

    async def _has(self, locator: Locator) -> bool:
        return await self.page.locator(locator).count() > 0

    async def _attribute(self, locator: Locator, name: str) -> Optional[str]:
        if not await self._has(locator):
            raise ElementNotFound(locator, f"reading attribute '{name}'")
        return await self._locate(locator).get_attribute(name, timeout=self.timeouts.command)

    async def _max_length(self, locator: Locator) -> Optional[int]:
        value = await self._attribute(locator, "maxlength")
        if value is None or not value.strip().isdigit():
            return None
        return int(value)

    # Assertions

    async def _verify(self, description: str, locator: Optional[Locator], assertion: Awaitable[None]) -> None:
        try:
            await assertion
        except AssertionError as e:
            logging.error(f"Assertion failed: {description} ({locator or self.current_url()})")
            raise AssertionTimeout(description, locator, self.timeouts.command, str(e)) from e

    async def _verify_visible(self, locator: Locator, description: str = "element to be visible") -> None:
        await self._verify(description, locator, expect(self._locate(locator)).to_be_visible(timeout=self.timeouts.command))

    async def _verify_contains_text(self, locator: Locator, text: str) -> None:
        """Visible and containing ``text`` as a substring."""
        await self._verify_visible(locator, f"message containing '{text}' to be visible")
        await self._verify(
            f"text containing '{text}'",
            locator,
            expect(self._locate(locator)).to_contain_text(text, timeout=self.timeouts.command),
        )

    async def _verify_value(self, locator: Locator, value: str) -> None:
        await self._verify(
            f"value '{value}'",
            locator,
            expect(self._locate(locator)).to_have_value(value, timeout=self.timeouts.command),
        )

    async def _verify_has_attribute(self, locator: Locator, name: str) -> None:
        await self._verify(
            f"attribute '{name}'",
            locator,
            expect(self._locate(locator)).to_have_attribute(name, re.compile(".*"), timeout=self.timeouts.command),
        )

    async def _verify_attribute(self, locator: Locator, name: str, value: str) -> None:
        await self._verify(
            f"attribute {name}='{value}'",
            locator,
            expect(self._locate(locator)).to_have_attribute(name, value, timeout=self.timeouts.command),
        )

    async def _verify_enabled(self, locator: Locator) -> None:
        await self._verify("element to be enabled", locator, expect(self._locate(locator)).to_be_enabled(timeout=self.timeouts.command))

    async def _verify_disabled(self, locator: Locator) -> None:
        await self._verify("element to be disabled", locator, expect(self._locate(locator)).to_be_disabled(timeout=self.timeouts.command))

    async def _verify_exists(self, locator: Locator, description: str) -> None:
        await self._verify(description, locator, expect(self._locate(locator)).to_be_attached(timeout=self.timeouts.command))

    async def _verify_constraint(self, locator: Locator, state: str) -> None:
        """Native constraint validation: ``state`` is "valid" or "invalid"."""
        matching = self._locate(locator).and_(self.page.locator(f":{state}"))
        await self._verify(
            f"field to be {state} by constraint validation",
            locator,
            expect(matching).to_be_attached(timeout=self.timeouts.command),
        )
