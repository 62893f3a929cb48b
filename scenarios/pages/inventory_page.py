import re

from playwright.async_api import Error as PlaywrightError, Locator, Page, expect

from scenarios.constants import (
    ABOUT_HOST, MENU_ITEMS, PATH_INVENTORY, PATH_INVENTORY_ITEM, SORT_OPTIONS, url_pattern,
)
from scenarios.context import ScenarioContext
from scenarios.pages.actions import PageActions
from scenarios.run_data import Product, is_sorted

# ── InventoryPage — listing produktów ─────────────────────────────────────────

class InventoryPage:
    INVENTORY_LIST  = ('locator', '.inventory_list')
    INVENTORY_ITEM  = ('locator', '.inventory_item')
    ITEM_NAME       = '.inventory_item_name'
    ITEM_DESC       = '.inventory_item_desc'
    ITEM_PRICE      = '.inventory_item_price'
    ADD_BUTTON      = '[id^="add-to-cart-"]'
    REMOVE_BUTTON   = '[id^="remove-"]'
    SORT_DROPDOWN   = ('locator', '.product_sort_container')
    PRODUCT_IMAGES  = ('locator', '.inventory_item img')
    SOCIAL_LINKS    = ('locator', '.social')
    FOOTER          = ('locator', 'footer')

    def __init__(self, page: Page, context: ScenarioContext):
        self.page = page
        self.context = context
        self.actions = PageActions(page, context, owner=self.__class__.__name__)

    async def goto(self):
        """
        Wejście na listing. Bez sesji sklep przekierowuje na logowanie:
        to też poprawny wynik, nie błąd.
        """
        await self.page.goto(self.context.url(PATH_INVENTORY))
        try:
            await expect(self.actions.loc(self.INVENTORY_LIST)).to_be_visible(timeout=2000)
        except AssertionError:
            self.actions.log("Brak listingu — sprawdzam przekierowanie na logowanie")
            await expect(self.page).to_have_url(self.context.base_url)

    # ── Koszyk ────────────────────────────────────────────────────────────────

    async def add_to_cart(self, product_id: str):
        await self.page.get_by_test_id(f"add-to-cart-{product_id}").click()
        await expect(self.page.get_by_test_id(f"remove-{product_id}")).to_be_visible()

    async def remove_from_cart(self, product_id: str):
        await self.page.get_by_test_id(f"remove-{product_id}").click()
        await expect(self.page.get_by_test_id(f"add-to-cart-{product_id}")).to_be_visible()

    async def can_add_to_cart(self, product_id: str) -> bool:
        return await self.page.get_by_test_id(f"add-to-cart-{product_id}").is_visible()

    async def rapid_add_remove(self, product_id: str, iterations: int):
        for _ in range(iterations):
            await self.add_to_cart(product_id)
            await self.remove_from_cart(product_id)

    async def get_cart_count(self) -> int:
        return await self.actions.get_cart_count()

    # ── Produkty ──────────────────────────────────────────────────────────────

    async def get_products(self) -> list[Product]:
        products = []
        for item in await self.actions.loc(self.INVENTORY_ITEM).all():
            products.append(Product(
                id=await self._product_id(item),
                name=await self.actions.get_text_content(item.locator(self.ITEM_NAME)),
                description=await self.actions.get_text_content(item.locator(self.ITEM_DESC)),
                price=await self.actions.get_text_content(item.locator(self.ITEM_PRICE)),
            ))
        return products

    async def _product_id(self, item: Locator) -> str:
        """
        Id produktu z przycisku: najpierw "add-to-cart-<id>",
        a jeśli produkt już jest w koszyku: "remove-<id>".
        """
        add_button = item.locator(self.ADD_BUTTON)
        if await self.actions.exists(add_button):
            return (await add_button.get_attribute('id') or "").removeprefix('add-to-cart-')
        remove_button = item.locator(self.REMOVE_BUTTON)
        return (await remove_button.get_attribute('id') or "").removeprefix('remove-')

    async def open_product(self, name: str):
        await self.page.locator('.inventory_item_name', has_text=name).click()
        await expect(self.page).to_have_url(url_pattern(PATH_INVENTORY_ITEM))

    # ── Sortowanie ────────────────────────────────────────────────────────────

    async def sort_products(self, option: str):
        """
        Wybiera tryb sortowania i czeka na przerysowanie listingu:
        kontrolka pokazuje option, a produkty ułożone są w tej kolejności.
        Sama wartość kontrolki zmienia się od razu po select_option.
        """
        if option not in SORT_OPTIONS:
            raise ValueError(f"Nieznany tryb sortowania: {option}")
        await self.actions.loc(self.SORT_DROPDOWN).select_option(option)

        async def applied() -> bool:
            if await self.get_current_sort_order() != option:
                return False
            try:
                return is_sorted(await self.get_products(), option)
            except ValueError:
                # cena w trakcie przerysowania bywa pusta
                return False

        if not await self.actions.wait_for(applied, timeout=self.context.timeout_ms):
            raise AssertionError(f"Sortowanie '{option}' nie zostało zastosowane")

    async def get_current_sort_order(self) -> str:
        return await self.actions.loc(self.SORT_DROPDOWN).input_value()

    # ── Weryfikacje statycznej treści ─────────────────────────────────────────

    async def verify_product_images(self):
        for image in await self.actions.loc(self.PRODUCT_IMAGES).all():
            box = await image.bounding_box()
            assert box is not None, "Obrazek produktu nie jest renderowany"
            assert box['width'] > 0, f"Szerokość obrazka = {box['width']}"
            assert box['height'] > 0, f"Wysokość obrazka = {box['height']}"

            src = await image.get_attribute('src')
            assert src, "Obrazek produktu bez atrybutu src"

    async def verify_social_links(self):
        for link in await self.actions.loc(self.SOCIAL_LINKS).locator('a').all():
            href = await link.get_attribute('href') or ""
            assert re.match(r"^https?://", href), f"Link społecznościowy nie jest absolutny: {href!r}"

    async def verify_footer(self):
        footer = self.actions.loc(self.FOOTER)
        await expect(footer).to_be_visible()
        text = await self.actions.get_text_content(footer)
        assert '©' in text, f"Stopka bez znaku copyright: {text!r}"

    # ── Menu ──────────────────────────────────────────────────────────────────

    async def toggle_menu(self, action: str):
        if action == 'open':
            await self.actions.loc(PageActions.MENU_BUTTON).click()
            await self.actions.loc(PageActions.MENU).wait_for(state='visible')
        elif action == 'close':
            await self.actions.loc(PageActions.MENU_CLOSE).click()
            await self.actions.loc(PageActions.MENU).wait_for(state='hidden')
        else:
            raise ValueError(f"Nieznana akcja menu: {action}")

    async def is_menu_visible(self) -> bool:
        try:
            await self.actions.loc(PageActions.MENU).wait_for(state='visible', timeout=1000)
            return True
        except PlaywrightError:
            return False

    async def click_menu_item(self, item_selector: str):
        item = self.page.locator(item_selector)
        await item.wait_for(state='visible')
        await item.click()

    async def get_menu_item_text(self, item_selector: str) -> str:
        return await self.page.locator(item_selector).text_content() or ""

    async def perform_menu_action(self, action: str):
        """
        Otwiera menu i klika link akcji (all-items / about / logout / reset).
        Link bywa zasłonięty albo w trakcie animacji: najpierw zwykły klik
        (5s), a po porażce klik skryptem: wg context.menu_click_policy.
        """
        if action not in MENU_ITEMS:
            raise ValueError(f"Nieznana akcja menu: {action}")

        await self.actions.open_menu()
        await self.actions.loc(PageActions.MENU).wait_for(state='visible')

        link = self.page.locator(MENU_ITEMS[action])
        await link.wait_for(state='visible')
        await link.scroll_into_view_if_needed()

        async def normal_click():
            await link.click(timeout=5000)

        async def script_click():
            self.actions.log(f"Klik skryptem w '{action}'")
            await link.evaluate("node => node.click()")

        await self.context.menu_click_policy.run(
            self.page, normal_click, label=f"menu:{action}", fallback=script_click,
        )
        await self._wait_for_menu_outcome(action)

    async def _wait_for_menu_outcome(self, action: str):
        # About otwiera saucelabs.com w tej samej karcie
        if action == 'about':
            await self.page.wait_for_url(lambda url: ABOUT_HOST in url, wait_until='commit')
        elif action == 'all-items':
            await self.page.wait_for_url(url_pattern(PATH_INVENTORY), wait_until='commit')
        elif action == 'logout':
            await self.page.wait_for_url(self.context.base_url, wait_until='commit')
        elif action == 'reset':
            await self.actions.loc(PageActions.CART_BADGE).wait_for(state='hidden')

    async def logout(self):
        await self.actions.logout()

    async def reset_app_state(self):
        await self.actions.reset_app_state()
