from enum import Enum

from pydantic import BaseModel

# A CSS or Playwright selector string. Selectors never leave the page classes.
Locator = str


class FormField(str, Enum):
    """Semantic names for the fields of the generic data form."""

    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    EMAIL = "email"
    PHONE = "phone"
    MESSAGE = "message"


class FormData(BaseModel):
    """Values for every field of the generic data form.

    Nothing is validated here: constraints are enforced by the page under
    test and only observed by the page objects.
    """

    first_name: str
    last_name: str
    email: str
    phone: str
    message: str

    def value_for(self, field: FormField) -> str:
        return getattr(self, field.value)
