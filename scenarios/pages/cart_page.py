from playwright.async_api import Locator, Page, expect

from scenarios.constants import PATH_CART, PATH_CHECKOUT_STEP_ONE, PATH_INVENTORY, url_pattern
from scenarios.context import ScenarioContext
from scenarios.pages.actions import PageActions
from scenarios.run_data import CartItem, parse_price

# ── CartPage — koszyk (cart.html) ─────────────────────────────────────────────

class CartPage:
    CART_LIST         = ('locator', '.cart_list')
    CART_ITEM         = ('locator', '.cart_item')
    ITEM_NAME         = '.inventory_item_name'
    ITEM_DESC         = '.inventory_item_desc'
    ITEM_PRICE        = '.inventory_item_price'
    ITEM_QUANTITY     = '.cart_quantity'
    REMOVE_BUTTON     = '[id^="remove-"]'
    CHECKOUT          = ('test_id', 'checkout')
    CONTINUE_SHOPPING = ('test_id', 'continue-shopping')

    def __init__(self, page: Page, context: ScenarioContext):
        self.page = page
        self.context = context
        self.actions = PageActions(page, context, owner=self.__class__.__name__)

    async def goto(self):
        await self.page.goto(self.context.url(PATH_CART))
        await expect(self.actions.loc(self.CART_LIST)).to_be_visible()

    def _row(self, product_id: str) -> Locator:
        """Wiersz koszyka po id produktu: rozpoznawany po przycisku Remove."""
        return self.actions.loc(self.CART_ITEM).filter(
            has=self.page.get_by_test_id(f"remove-{product_id}")
        )

    # ── Odczyty ───────────────────────────────────────────────────────────────

    async def get_cart_items(self) -> list[CartItem]:
        items = []
        for row in await self.actions.loc(self.CART_ITEM).all():
            remove_id = await row.locator(self.REMOVE_BUTTON).get_attribute('id') or ""
            quantity = await self.actions.get_text_content(row.locator(self.ITEM_QUANTITY))
            items.append(CartItem(
                id=remove_id.removeprefix('remove-'),
                name=await self.actions.get_text_content(row.locator(self.ITEM_NAME)),
                description=await self.actions.get_text_content(row.locator(self.ITEM_DESC)),
                price=await self.actions.get_text_content(row.locator(self.ITEM_PRICE)),
                quantity=int(quantity) if quantity.isdigit() else 1,
            ))
        return items

    async def get_cart_total(self) -> float:
        """Suma cen liczona po stronie testu: sklep nie pokazuje sumy w koszyku."""
        total = 0.0
        for item in await self.get_cart_items():
            total += parse_price(item.price)
        return round(total, 2)

    async def get_item_quantity(self, product_id: str) -> int:
        text = await self.actions.get_text_content(self._row(product_id).locator(self.ITEM_QUANTITY))
        try:
            return int(text)
        except ValueError:
            return 0

    async def is_empty(self) -> bool:
        return len(await self.get_cart_items()) == 0

    async def get_cart_count(self) -> int:
        return await self.actions.get_cart_count()

    # ── Akcje ─────────────────────────────────────────────────────────────────

    async def remove_item(self, product_id: str):
        row = self._row(product_id)
        await self.page.get_by_test_id(f"remove-{product_id}").click()
        await expect(row).to_be_hidden()

    async def proceed_to_checkout(self):
        await self.actions.loc(self.CHECKOUT).click()
        await expect(self.page).to_have_url(url_pattern(PATH_CHECKOUT_STEP_ONE))

    async def continue_shopping(self):
        await self.actions.loc(self.CONTINUE_SHOPPING).click()
        await expect(self.page).to_have_url(url_pattern(PATH_INVENTORY))

    # ── Weryfikacje ───────────────────────────────────────────────────────────

    async def verify_cart_count(self):
        items = await self.get_cart_items()
        badge = await self.get_cart_count()
        assert len(items) == badge, f"Badge koszyka = {badge}, pozycji w koszyku = {len(items)}"

    async def verify_cart_persistence(self):
        before = await self.get_cart_items()
        await self.page.reload()
        await expect(self.actions.loc(self.CART_LIST)).to_be_visible()
        after = await self.get_cart_items()
        assert after == before, f"Koszyk zmienił się po odświeżeniu: {before} → {after}"

    async def logout(self):
        await self.actions.logout()

    async def reset_app_state(self):
        await self.actions.reset_app_state()
