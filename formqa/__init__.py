from formqa.actions.action_handler import ActionHandler
from formqa.browser.config import RunConfig, load_run_config
from formqa.browser.session import BrowserSession
from formqa.errors import AssertionTimeout, ElementNotFound, FormQAError, NavigationTimeout
from formqa.pages.form_page import FormPage
from formqa.pages.landing_page import LandingPage
from formqa.pages.login_page import LoginPage
from formqa.pages.types import FormData, FormField

__all__ = [
    "ActionHandler",
    "AssertionTimeout",
    "BrowserSession",
    "ElementNotFound",
    "FormData",
    "FormField",
    "FormPage",
    "FormQAError",
    "LandingPage",
    "LoginPage",
    "NavigationTimeout",
    "RunConfig",
    "load_run_config",
]
