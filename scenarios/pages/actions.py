import logging
import time
from dataclasses import replace
from typing import Awaitable, Callable

from playwright.async_api import Error as PlaywrightError, Locator, Page, expect

from scenarios.context import ScenarioContext

logger = logging.getLogger(__name__)


class PageActions:
    """
    Wspólne operacje na stronie Sauce Demo: niezależne od konkretnego widoku.
    Konkretne pages TRZYMAJĄ instancję PageActions (self.actions), nie dziedziczą.
    Playwright jest TYLKO tutaj i w pages.
    """

    MENU_BUTTON  = ('locator', '#react-burger-menu-btn')
    MENU_CLOSE   = ('locator', '#react-burger-cross-btn')
    MENU         = ('locator', '.bm-menu')
    MENU_WRAP    = ('locator', '.bm-menu-wrap')
    RESET_LINK   = ('locator', '#reset_sidebar_link')
    LOGOUT_LINK  = ('locator', '#logout_sidebar_link')
    CART_BADGE   = ('locator', '.shopping_cart_badge')

    POLL_INTERVAL_MS = 100

    def __init__(self, page: Page, context: ScenarioContext, owner: str | None = None):
        self.page = page
        self.context = context
        self.owner = owner or self.__class__.__name__

    # ── Lokator ───────────────────────────────────────────────────────────────

    def loc(self, selector: tuple) -> Locator:
        """
        Interpretuje tuple selektora i zwraca Playwright Locator.

        Formaty:
          ('locator',      'css_or_xpath')
          ('role',         'button',       {'name': 'Login'})
          ('text',         'Products',     {'exact': True})
          ('test_id',      'login-button')      # atrybut data-test
          ('label',        'Username')
          ('placeholder',  'Username')
        """
        kind = selector[0]

        if kind == 'locator':
            return self.page.locator(selector[1])
        elif kind == 'role':
            kwargs = selector[2] if len(selector) > 2 else {}
            return self.page.get_by_role(selector[1], **kwargs)
        elif kind == 'text':
            kwargs = selector[2] if len(selector) > 2 else {}
            return self.page.get_by_text(selector[1], **kwargs)
        elif kind == 'test_id':
            return self.page.get_by_test_id(selector[1])
        elif kind == 'label':
            return self.page.get_by_label(selector[1])
        elif kind == 'placeholder':
            return self.page.get_by_placeholder(selector[1])
        else:
            raise ValueError(f"Nieznany typ selektora: {kind}")

    def url(self, path: str = "") -> str:
        return self.context.url(path)

    # ── Menu ──────────────────────────────────────────────────────────────────

    async def open_menu(self, max_retries: int | None = None):
        """
        Otwiera boczne menu. Przycisk bywa zasłonięty albo w trakcie animacji,
        więc całość idzie przez context.menu_retry (domyślnie 3 próby co 1s).
        """
        policy = self.context.menu_retry
        if max_retries is not None:
            policy = replace(policy, max_attempts=max_retries)
        await policy.run(self.page, self._open_menu_once, label=f"{self.owner}.open_menu")

    async def _open_menu_once(self):
        toggle = self.loc(self.MENU_BUTTON)
        await toggle.wait_for(state='visible', timeout=5000)

        if not await self.is_visible(self.MENU):
            await toggle.click()
            await self.loc(self.MENU).wait_for(state='visible', timeout=2000)

        await self.wait_until_stable(self.MENU_WRAP)

    async def close_menu(self):
        if await self.is_visible(self.MENU_CLOSE):
            await self.loc(self.MENU_CLOSE).click()
            await self.loc(self.MENU).wait_for(state='hidden')

    async def reset_app_state(self):
        await self.open_menu()
        await self.loc(self.RESET_LINK).click()
        # Reset czyści koszyk: znikający badge to sygnał zakończenia
        await self.loc(self.CART_BADGE).wait_for(state='hidden', timeout=self.context.timeout_ms)
        await self.page.reload()

    async def logout(self):
        """
        Logout przez menu. Ścieżka przez menu jest zawodna:
        po błędzie context.logout_policy przechodzi na bezpośrednią nawigację.
        """
        async def via_menu():
            await self.open_menu()
            link = self.loc(self.LOGOUT_LINK)
            await link.wait_for(state='visible')
            await link.click(force=True)
            await expect(self.page).to_have_url(self.context.base_url)

        async def direct():
            self.log(f"Logout przez menu nieudany — nawiguję na {self.context.base_url}")
            await self.page.goto(self.context.base_url)

        await self.context.logout_policy.run(
            self.page, via_menu, label=f"{self.owner}.logout", fallback=direct,
        )

    # ── Odczyty ───────────────────────────────────────────────────────────────

    async def get_cart_count(self) -> int:
        badge = self.loc(self.CART_BADGE)
        if not await badge.is_visible():
            return 0
        text = await self.get_text_content(badge)
        try:
            return int(text)
        except ValueError:
            return 0

    async def get_text_content(self, locator: Locator) -> str:
        try:
            return (await locator.text_content() or "").strip()
        except PlaywrightError:
            return ""

    async def get_text(self, selector: tuple) -> str:
        return await self.get_text_content(self.loc(selector))

    async def exists(self, locator: Locator) -> bool:
        return await locator.count() > 0

    async def is_visible(self, selector: tuple) -> bool:
        try:
            return await self.loc(selector).is_visible()
        except PlaywrightError:
            return False

    # ── Czekanie ──────────────────────────────────────────────────────────────

    async def wait_for(self, condition: Callable[[], Awaitable[bool]], timeout: int = 5000) -> bool:
        """
        Odpytuje condition co 100ms aż zwróci True albo minie timeout (ms).
        Nigdy nie rzuca: błąd Playwright w condition traktujemy jak "jeszcze nie".
        """
        deadline = time.monotonic() + timeout / 1000
        while time.monotonic() < deadline:
            try:
                if await condition():
                    return True
            except PlaywrightError:
                pass
            await self.page.wait_for_timeout(self.POLL_INTERVAL_MS)
        return False

    async def wait_until_stable(self, selector: tuple, timeout: int = 2000) -> bool:
        """
        Czeka aż element przestanie się ruszać (dwa kolejne odczyty
        bounding_box identyczne). Zastępuje sztywne czekanie na animację.
        """
        locator = self.loc(selector)
        last_box: dict = {}

        async def settled() -> bool:
            box = await locator.bounding_box()
            stable = box is not None and box == last_box.get('box')
            last_box['box'] = box
            return stable

        stable = await self.wait_for(settled, timeout)
        if not stable:
            self.log(f"Element {selector[1]} nie ustabilizował się w {timeout}ms — ryzyko niestabilności")
        return stable

    def log(self, msg: str):
        logger.info(f"[{self.owner}] {msg}")
