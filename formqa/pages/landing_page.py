from formqa.pages.form_page import FormPage


class LandingPage(FormPage):
    """Any page that may or may not carry form fields.

    Only the document body has to render on visit; which fields exist is
    left to the ``has_*`` capability queries.
    """

    DEFAULT_PATH = "/"

    _FORM = "body"
