from .base_page import BasePage
from .form_page import FormPage
from .landing_page import LandingPage
from .login_page import LoginPage
from .types import FormData, FormField

__all__ = ["BasePage", "LoginPage", "FormPage", "LandingPage", "FormData", "FormField"]
