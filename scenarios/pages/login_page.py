from playwright.async_api import Page, expect

from scenarios.constants import (
    LOCKED_OUT_USER, PATH_INVENTORY, PATH_LOGIN, STANDARD_USER, STANDARD_PASSWORD, url_pattern,
)
from scenarios.context import ScenarioContext
from scenarios.pages.actions import PageActions

# ── LoginPage ─────────────────────────────────────────────────────────────────

class LoginPage:
    USERNAME       = ('test_id', 'username')
    PASSWORD       = ('test_id', 'password')
    LOGIN_BUTTON   = ('test_id', 'login-button')
    ERROR          = ('test_id', 'error')
    ERROR_BUTTON   = ('locator', '.error-button')
    LOGO           = ('locator', '.login_logo')
    CREDENTIALS    = ('locator', '.login_credentials')
    PASSWORD_INFO  = ('locator', '.login_password')

    CREDENTIALS_HEADER = 'Accepted usernames are:'
    PASSWORD_HEADER    = 'Password for all users:'

    def __init__(self, page: Page, context: ScenarioContext):
        self.page = page
        self.context = context
        self.actions = PageActions(page, context, owner=self.__class__.__name__)

    async def goto(self):
        await self.page.goto(self.context.url(PATH_LOGIN))
        await expect(self.actions.loc(self.LOGIN_BUTTON)).to_be_visible()

    async def login(self, username: str, password: str = STANDARD_PASSWORD, check_success: bool = True):
        """
        Loguje i sprawdza wynik:
          - locked_out_user → zostajemy na stronie logowania z błędem
          - pozostali (check_success) → przekierowanie na inventory
        """
        await self.submit_login(username, password)

        if username == LOCKED_OUT_USER:
            await expect(self.page).to_have_url(self.context.base_url)
            await expect(self.actions.loc(self.ERROR)).to_be_visible()
        elif check_success:
            await expect(self.page).to_have_url(url_pattern(PATH_INVENTORY))

    async def submit_login(self, username: str, password: str):
        """Wypełnia i wysyła formularz bez sprawdzania wyniku (ścieżki negatywne)."""
        await self.actions.loc(self.USERNAME).fill(username)
        await self.actions.loc(self.PASSWORD).fill(password)
        await self.actions.loc(self.LOGIN_BUTTON).click()

    async def get_error_message(self) -> str:
        error = self.actions.loc(self.ERROR)
        if not await error.is_visible():
            return ""
        return await self.actions.get_text_content(error)

    async def dismiss_error(self):
        await self.actions.loc(self.ERROR_BUTTON).click()
        await expect(self.actions.loc(self.ERROR)).to_be_hidden()

    async def validate_form(self) -> bool:
        """Natywna walidacja HTML (validity.valid) obu pól."""
        username_valid = await self.actions.loc(self.USERNAME).evaluate("el => el.validity.valid")
        password_valid = await self.actions.loc(self.PASSWORD).evaluate("el => el.validity.valid")
        return bool(username_valid and password_valid)

    async def get_available_usernames(self) -> list[str]:
        # inner_text zamienia <br> na nowe linie, text_content skleja wszystko
        text = await self.actions.loc(self.CREDENTIALS).inner_text() or ""
        return [
            line.strip()
            for line in text.split("\n")
            if line.strip() and self.CREDENTIALS_HEADER not in line
        ]

    async def get_standard_password(self) -> str:
        text = await self.actions.loc(self.PASSWORD_INFO).inner_text() or ""
        return text.replace(self.PASSWORD_HEADER, "").strip()

    async def verify_logo(self):
        logo = self.actions.loc(self.LOGO)
        await expect(logo).to_be_visible()
        await expect(logo).to_have_text('Swag Labs')

    async def navigate_with_keyboard(self, username: str = STANDARD_USER, password: str = STANDARD_PASSWORD):
        """Tab: username → password → przycisk Login, z weryfikacją fokusu na każdym kroku."""
        keyboard = self.page.keyboard

        await keyboard.press('Tab')
        await expect(self.actions.loc(self.USERNAME)).to_be_focused()
        await keyboard.type(username)

        await keyboard.press('Tab')
        await expect(self.actions.loc(self.PASSWORD)).to_be_focused()
        await keyboard.type(password)

        await keyboard.press('Tab')
        await expect(self.actions.loc(self.LOGIN_BUTTON)).to_be_focused()

    async def verify_page_elements(self):
        username = self.actions.loc(self.USERNAME)
        await expect(username).to_be_visible()
        await expect(username).to_have_attribute('placeholder', 'Username')

        password = self.actions.loc(self.PASSWORD)
        await expect(password).to_be_visible()
        await expect(password).to_have_attribute('placeholder', 'Password')
        await expect(password).to_have_attribute('type', 'password')

        button = self.actions.loc(self.LOGIN_BUTTON)
        await expect(button).to_be_visible()
        await expect(button).to_have_value('Login')

        await expect(self.actions.loc(self.LOGO)).to_be_visible()
        await expect(self.actions.loc(self.CREDENTIALS)).to_be_visible()
        await expect(self.actions.loc(self.PASSWORD_INFO)).to_be_visible()
