import pytest
import pytest_asyncio

from formqa.pages.form_page import FormPage
from formqa.pages.login_page import LoginPage
from formqa.pages.types import FormData, FormField

pytestmark = pytest.mark.tags('form')


@pytest_asyncio.fixture
async def login_form(browser_session):
    # The login page doubles as a generic form with required inputs
    page = FormPage(browser_session)
    await page.visit('/login')
    return page


@pytest.fixture
def contact_data():
    return FormData(
        first_name='Ada',
        last_name='Lovelace',
        email='ada@example.com',
        phone='+44 20 7946 0000',
        message='Hello from the analytical engine.',
    )


class TestRequiredFields:
    async def test_required_inputs_present(self, login_form):
        await login_form.verify_required_fields_present()

    async def test_empty_required_field_blocks_submission(self, login_form):
        await login_form.submit()
        await login_form.verify_required_field_invalid()
        await login_form.verify_url_contains('/login')

    async def test_submission_with_required_fields_filled(self, browser_session):
        login_page = LoginPage(browser_session)
        await login_page.visit()
        await login_page.fill_username('tomsmith')
        await login_page.fill_password('SuperSecretPassword!')
        await login_page.submit()
        await login_page.verify_redirect_after_login()


class TestInputFields:
    async def test_text_input_keeps_typed_value(self, login_page):
        await login_page.fill_username('Test Input')
        await login_page.verify_username_value('Test Input')

    async def test_clearing_input(self, login_page):
        await login_page.fill_username('Test')
        await login_page.fill_username('')
        await login_page.verify_username_field_empty()

    async def test_maxlength_truncates_typed_input(self, login_page):
        max_length = await login_page.username_max_length()
        if max_length is None:
            pytest.skip('username field has no maxlength attribute')
        await login_page.fill_username('a' * (max_length + 1))
        await login_page.verify_username_value('a' * max_length)


class TestSubmission:
    @pytest.mark.tags('smoke')
    async def test_valid_data_redirects(self, login_page):
        await login_page.login('tomsmith', 'SuperSecretPassword!')
        await login_page.verify_url_contains('/secure')

    async def test_invalid_data_stays_on_form(self, login_page):
        await login_page.login('invalid', 'wrong')
        await login_page.verify_still_on_login_page()
        await login_page.verify_flash_contains('invalid')


class TestReset:
    async def test_reset_clears_fields(self, login_form, browser_session):
        login_page = LoginPage(browser_session)
        await login_page.fill_username('Test')
        await login_page.fill_password('testpass')

        if not await login_form.has_reset_button():
            pytest.skip('form has no reset button')
        await login_form.reset()
        await login_page.verify_username_field_empty()
        await login_page.verify_password_field_empty()


@pytest.mark.tags('form-page')
class TestContactForm:
    async def test_fields_are_required(self, form_page):
        for field in (FormField.FIRST_NAME, FormField.LAST_NAME, FormField.EMAIL, FormField.MESSAGE):
            await form_page.verify_field_required(field)

    async def test_email_field_uses_email_type(self, form_page):
        await form_page.verify_email_format()

    @pytest.mark.tags('smoke')
    async def test_fill_all_and_submit_shows_success(self, form_page, contact_data):
        await form_page.fill_all(contact_data)
        await form_page.submit()
        await form_page.verify_success_message('Your message has been sent')
        await form_page.verify_success_message(contact_data.first_name)
        await form_page.verify_submit_button_disabled()

    async def test_fill_all_leaves_exact_values(self, form_page, contact_data):
        await form_page.fill_all(contact_data)
        for field in FormField:
            await form_page.verify_field_value(field, contact_data.value_for(field))

    async def test_empty_submit_shows_errors(self, form_page):
        await form_page.verify_submit_button_enabled()
        await form_page.submit()
        await form_page.verify_error_message('Please correct')
        await form_page.verify_field_validation_error(FormField.FIRST_NAME, 'required')
        await form_page.verify_field_validation_error(FormField.MESSAGE, 'required')

    async def test_bad_email_shows_field_error(self, form_page, contact_data):
        await form_page.fill_all(contact_data.model_copy(update={'email': 'not-an-email'}))
        await form_page.submit()
        await form_page.verify_field_validation_error(FormField.EMAIL, 'valid email')
        await form_page.verify_email_invalid()

    async def test_clear_all_fields(self, form_page, contact_data):
        await form_page.fill_all(contact_data)
        await form_page.clear_all_fields()
        for field in FormField:
            await form_page.verify_field_empty(field)

    async def test_phone_maxlength(self, form_page):
        max_length = await form_page.max_length(FormField.PHONE)
        assert max_length is not None
        await form_page.fill_field(FormField.PHONE, '1' * (max_length + 5))
        await form_page.verify_field_value(FormField.PHONE, '1' * max_length)
