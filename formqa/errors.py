"""Failure conditions raised by the page object layer.

Every error is local to the scenario that raised it. Nothing here is retried
by the page layer: Playwright already polls inside a single timeout budget.

A locator meant to be singular that resolves to several elements (the
"ambiguous locator" condition) is not an error: the first match is used and a
warning is logged.
"""

from typing import Optional


class FormQAError(Exception):
    """Base exception for all page object failures."""

    pass


class NavigationTimeout(FormQAError):
    """The page did not load, or its defining element never became visible."""

    def __init__(self, url: str, locator: str, timeout_ms: float, reason: str = ""):
        self.url = url
        self.locator = locator
        self.timeout_ms = timeout_ms
        message = f"Navigation to {url} did not show '{locator}' within {timeout_ms:g}ms"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ElementNotFound(FormQAError):
    """A locator resolved to zero elements at interaction time."""

    def __init__(self, locator: str, action: str, timeout_ms: Optional[float] = None):
        self.locator = locator
        self.action = action
        self.timeout_ms = timeout_ms
        message = f"No element matches '{locator}' for {action}"
        if timeout_ms is not None:
            message = f"{message} (waited {timeout_ms:g}ms)"
        super().__init__(message)


class AssertionTimeout(FormQAError, AssertionError):
    """An expected condition never became true within its budget."""

    def __init__(self, description: str, locator: Optional[str], timeout_ms: float, reason: str = ""):
        self.description = description
        self.locator = locator
        self.timeout_ms = timeout_ms
        target = f" on '{locator}'" if locator else ""
        message = f"Expected {description}{target} within {timeout_ms:g}ms"
        if reason:
            message = f"{message}\n{reason}"
        super().__init__(message)
