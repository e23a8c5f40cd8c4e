from typing import Optional

from formqa.pages.base_page import BasePage


class LoginPage(BasePage):
    """The login form: username, password, submit and a flash message region."""

    DEFAULT_PATH = "/login"
    SECURE_PATH = "/secure"

    _FORM = "#login"
    _USERNAME_INPUT = "#username"
    _PASSWORD_INPUT = "#password"
    _SUBMIT_BUTTON = 'button[type="submit"]'
    _FLASH_MESSAGE = "#flash"
    _SUCCESS_MESSAGE = "#flash.flash.success"
    _ERROR_MESSAGE = "#flash.flash.error"

    async def fill_username(self, username: str) -> None:
        await self._fill(self._USERNAME_INPUT, username)

    async def fill_password(self, password: str) -> None:
        await self._fill(self._PASSWORD_INPUT, password)

    async def submit(self) -> None:
        """Click the submit button. Does not wait for the resulting page."""
        await self._click(self._SUBMIT_BUTTON)

    async def login(self, username: str, password: str) -> None:
        await self.fill_username(username)
        await self.fill_password(password)
        await self.submit()

    async def username_max_length(self) -> Optional[int]:
        """The username field's maxlength, or None when it has none."""
        return await self._max_length(self._USERNAME_INPUT)

    async def verify_success_message(self, message: str) -> None:
        await self._verify_contains_text(self._SUCCESS_MESSAGE, message)

    async def verify_error_message(self, message: str) -> None:
        await self._verify_contains_text(self._ERROR_MESSAGE, message)

    async def verify_flash_contains(self, text: str) -> None:
        """Flash region contains ``text`` whatever its success/error styling."""
        await self._verify_contains_text(self._FLASH_MESSAGE, text)

    async def verify_username_field_empty(self) -> None:
        await self._verify_value(self._USERNAME_INPUT, "")

    async def verify_password_field_empty(self) -> None:
        await self._verify_value(self._PASSWORD_INPUT, "")

    async def verify_username_value(self, value: str) -> None:
        await self._verify_value(self._USERNAME_INPUT, value)

    async def verify_password_value(self, value: str) -> None:
        await self._verify_value(self._PASSWORD_INPUT, value)

    async def verify_username_field_required(self) -> None:
        await self._verify_has_attribute(self._USERNAME_INPUT, "required")

    async def verify_password_field_required(self) -> None:
        await self._verify_has_attribute(self._PASSWORD_INPUT, "required")

    async def verify_username_invalid(self) -> None:
        await self._verify_constraint(self._USERNAME_INPUT, "invalid")

    async def verify_password_invalid(self) -> None:
        await self._verify_constraint(self._PASSWORD_INPUT, "invalid")

    async def verify_submit_button_enabled(self) -> None:
        await self._verify_enabled(self._SUBMIT_BUTTON)

    async def verify_submit_button_disabled(self) -> None:
        await self._verify_disabled(self._SUBMIT_BUTTON)

    async def verify_username_visible(self) -> None:
        await self._verify_visible(self._USERNAME_INPUT, "username field to be visible")

    async def verify_password_visible(self) -> None:
        await self._verify_visible(self._PASSWORD_INPUT, "password field to be visible")

    async def verify_submit_button_visible(self) -> None:
        await self._verify_visible(self._SUBMIT_BUTTON, "submit button to be visible")

    async def verify_redirect_after_login(self) -> None:
        await self.verify_url_contains(self.SECURE_PATH)

    async def verify_still_on_login_page(self) -> None:
        await self.verify_url_contains(self.DEFAULT_PATH)
