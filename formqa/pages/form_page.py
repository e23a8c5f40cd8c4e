from typing import Optional

from playwright.async_api import expect

from formqa.pages.base_page import BasePage
from formqa.pages.types import FormData, FormField


class FormPage(BasePage):
    """A generic data form (name, email, phone, message).

    Also usable on any page carrying a form: the ``has_*`` capability queries
    tell a scenario which optional elements the current page offers, so the
    decision is taken once instead of inside every assertion.
    """

    DEFAULT_PATH = "/form"

    _FORM = "form"
    _FIRST_NAME_INPUT = "#firstname"
    _LAST_NAME_INPUT = "#lastname"
    _EMAIL_INPUT = 'input[type="email"]'
    _PHONE_INPUT = "#phone"
    _MESSAGE_TEXTAREA = "#message"
    _SUBMIT_BUTTON = 'button[type="submit"]'
    _RESET_BUTTON = 'button[type="reset"]'
    _SUCCESS_MESSAGE = ".success-message"
    _ERROR_MESSAGE = ".error-message"
    _VALIDATION_ERROR = ".validation-error"
    _REQUIRED_INPUT = "input[required]"

    _FIELDS = {
        FormField.FIRST_NAME: _FIRST_NAME_INPUT,
        FormField.LAST_NAME: _LAST_NAME_INPUT,
        FormField.EMAIL: _EMAIL_INPUT,
        FormField.PHONE: _PHONE_INPUT,
        FormField.MESSAGE: _MESSAGE_TEXTAREA,
    }

    def _field(self, field: FormField) -> str:
        return self._FIELDS[FormField(field)]

    async def fill_first_name(self, first_name: str) -> None:
        await self._fill(self._FIRST_NAME_INPUT, first_name)

    async def fill_last_name(self, last_name: str) -> None:
        await self._fill(self._LAST_NAME_INPUT, last_name)

    async def fill_email(self, email: str) -> None:
        await self._fill(self._EMAIL_INPUT, email)

    async def fill_phone(self, phone: str) -> None:
        await self._fill(self._PHONE_INPUT, phone)

    async def fill_message(self, message: str) -> None:
        await self._fill(self._MESSAGE_TEXTAREA, message)

    async def fill_field(self, field: FormField, value: str) -> None:
        await self._fill(self._field(field), value)

    async def fill_all(self, data: FormData) -> None:
        """Fill every field, in form order."""
        await self.fill_first_name(data.first_name)
        await self.fill_last_name(data.last_name)
        await self.fill_email(data.email)
        await self.fill_phone(data.phone)
        await self.fill_message(data.message)

    async def submit(self) -> None:
        """Click the submit button. Does not wait for the resulting page."""
        await self._click(self._SUBMIT_BUTTON)

    async def reset(self) -> None:
        await self._click(self._RESET_BUTTON)

    async def clear_all_fields(self) -> None:
        for locator in self._FIELDS.values():
            await self._clear(locator)

    # Capability queries

    async def has_email_field(self) -> bool:
        return await self._has(self._EMAIL_INPUT)

    async def has_reset_button(self) -> bool:
        return await self._has(self._RESET_BUTTON)

    async def email_has_attribute(self, name: str) -> bool:
        return await self._attribute(self._EMAIL_INPUT, name) is not None

    async def max_length(self, field: FormField) -> Optional[int]:
        return await self._max_length(self._field(field))

    # Assertions

    async def verify_success_message(self, message: str) -> None:
        await self._verify_contains_text(self._SUCCESS_MESSAGE, message)

    async def verify_error_message(self, message: str) -> None:
        await self._verify_contains_text(self._ERROR_MESSAGE, message)

    async def verify_field_validation_error(self, field: FormField, error_text: str) -> None:
        """The validation message rendered next to ``field`` contains ``error_text``."""
        locator = self._field(field)
        message = self._locate(locator).locator("xpath=..").locator(self._VALIDATION_ERROR).first
        await self._verify(f"validation error '{error_text}' to be visible", locator, expect(message).to_be_visible(timeout=self.timeouts.command))
        await self._verify(f"validation error containing '{error_text}'", locator, expect(message).to_contain_text(error_text, timeout=self.timeouts.command))

    async def verify_field_required(self, field: FormField) -> None:
        await self._verify_has_attribute(self._field(field), "required")

    async def verify_email_format(self) -> None:
        await self._verify_attribute(self._EMAIL_INPUT, "type", "email")

    async def verify_email_has_placeholder(self) -> None:
        await self._verify_has_attribute(self._EMAIL_INPUT, "placeholder")

    async def verify_field_empty(self, field: FormField) -> None:
        await self._verify_value(self._field(field), "")

    async def verify_field_value(self, field: FormField, value: str) -> None:
        await self._verify_value(self._field(field), value)

    async def verify_email_valid(self) -> None:
        await self._verify_constraint(self._EMAIL_INPUT, "valid")

    async def verify_email_invalid(self) -> None:
        await self._verify_constraint(self._EMAIL_INPUT, "invalid")

    async def verify_required_fields_present(self) -> None:
        required = self._locate(self._FORM).locator(self._REQUIRED_INPUT).first
        await self._verify("a required input inside the form", self._REQUIRED_INPUT, expect(required).to_be_attached(timeout=self.timeouts.command))

    async def verify_required_field_invalid(self) -> None:
        """At least one required input of the form is failing constraint validation."""
        invalid = self._locate(self._FORM).locator(f"{self._REQUIRED_INPUT}:invalid").first
        await self._verify("an invalid required input inside the form", self._REQUIRED_INPUT, expect(invalid).to_be_attached(timeout=self.timeouts.command))

    async def verify_submit_button_enabled(self) -> None:
        await self._verify_enabled(self._SUBMIT_BUTTON)

    async def verify_submit_button_disabled(self) -> None:
        await self._verify_disabled(self._SUBMIT_BUTTON)

