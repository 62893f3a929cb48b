from playwright.async_api import Page, expect

from scenarios.constants import (
    PATH_CART, PATH_CHECKOUT_COMPLETE, PATH_CHECKOUT_STEP_ONE, PATH_CHECKOUT_STEP_TWO, PATH_INVENTORY, url_pattern,
)
from scenarios.context import ScenarioContext
from scenarios.pages.actions import PageActions
from scenarios.run_data import CheckoutInfo, OrderItem, OrderSummary, parse_price

# ── Krok 1: dane klienta (checkout-step-one.html) ─────────────────────────────

class CheckoutInfoPage:
    FIRST_NAME   = ('test_id', 'firstName')
    LAST_NAME    = ('test_id', 'lastName')
    POSTAL_CODE  = ('test_id', 'postalCode')
    CONTINUE     = ('test_id', 'continue')
    CANCEL       = ('test_id', 'cancel')
    ERROR        = ('test_id', 'error')

    def __init__(self, page: Page, context: ScenarioContext):
        self.page = page
        self.context = context
        self.actions = PageActions(page, context, owner=self.__class__.__name__)

    def _fields(self) -> list[tuple]:
        return [self.FIRST_NAME, self.LAST_NAME, self.POSTAL_CODE]

    async def goto(self):
        await self.page.goto(self.context.url(PATH_CHECKOUT_STEP_ONE))
        await expect(self.actions.loc(self.CONTINUE)).to_be_visible()

    async def fill_form(self, info: CheckoutInfo):
        """
        Czyści formularz i wpisuje tylko niepuste wartości.
        Po każdym polu blur: walidacja sklepu jest podpięta pod utratę fokusu.
        """
        await self.clear_form()

        values = [info.first_name, info.last_name, info.postal_code]
        for selector, value in zip(self._fields(), values):
            if not value:
                continue
            field = self.actions.loc(selector)
            await field.fill(value)
            await field.evaluate("el => el.blur()")

    async def continue_checkout(self):
        """
        Puste którekolwiek wymagane pole → klik i oczekiwany komunikat błędu (bez nawigacji).
        Komplet danych → klik i przejście na checkout-step-two w ciągu 10s.
        """
        current = await self.read_form()

        await self.actions.loc(self.CONTINUE).click()

        if not current.is_complete:
            await expect(self.actions.loc(self.ERROR)).to_be_visible()
            return

        await expect(self.page).to_have_url(
            url_pattern(PATH_CHECKOUT_STEP_TWO),
            timeout=self.context.navigation_timeout_ms,
        )

    async def fill_and_continue(self, info: CheckoutInfo):
        await self.fill_form(info)
        await self.continue_checkout()

    async def cancel(self):
        await self.actions.loc(self.CANCEL).click()
        await expect(self.page).to_have_url(url_pattern(PATH_CART))

    async def get_error_message(self) -> str:
        error = self.actions.loc(self.ERROR)
        if not await error.is_visible():
            return ""
        return await self.actions.get_text_content(error)

    async def validate_fields(self) -> bool:
        for selector in self._fields():
            if not await self.actions.loc(selector).evaluate("el => el.validity.valid"):
                return False
        return True

    async def clear_form(self):
        for selector in self._fields():
            await self.actions.loc(selector).clear()

    async def read_form(self) -> CheckoutInfo:
        """Aktualne wartości trzech pól: dokładnie to, co jest w inputach."""
        first_name, last_name, postal_code = [
            await self.actions.loc(selector).input_value() for selector in self._fields()
        ]
        return CheckoutInfo(first_name, last_name, postal_code)


# ── Krok 2: podsumowanie (checkout-step-two.html) ─────────────────────────────

class CheckoutOverviewPage:
    FINISH         = ('test_id', 'finish')
    CANCEL         = ('test_id', 'cancel')
    SUBTOTAL       = ('locator', '.summary_subtotal_label')
    TAX            = ('locator', '.summary_tax_label')
    TOTAL          = ('locator', '.summary_total_label')
    ITEM_ROW       = ('locator', '.cart_list .cart_item')
    ITEM_NAME      = '.inventory_item_name'
    ITEM_QUANTITY  = '.cart_quantity'
    ITEM_PRICE     = '.inventory_item_price'

    def __init__(self, page: Page, context: ScenarioContext):
        self.page = page
        self.context = context
        self.actions = PageActions(page, context, owner=self.__class__.__name__)

    async def finish_checkout(self):
        await self.actions.loc(self.FINISH).click()
        await expect(self.page).to_have_url(url_pattern(PATH_CHECKOUT_COMPLETE))

    async def cancel(self):
        await self.actions.loc(self.CANCEL).click()
        await expect(self.page).to_have_url(url_pattern(PATH_INVENTORY))

    # ── Kwoty ─────────────────────────────────────────────────────────────────

    async def _amount(self, selector: tuple) -> float:
        # "Item total: $39.98" → 39.98; brak liczby = błąd, nie 0
        return parse_price(await self.actions.get_text(selector))

    async def get_subtotal(self) -> float:
        return await self._amount(self.SUBTOTAL)

    async def get_tax(self) -> float:
        return await self._amount(self.TAX)

    async def get_total(self) -> float:
        return await self._amount(self.TOTAL)

    async def get_summary(self) -> OrderSummary:
        return OrderSummary(
            subtotal=await self.get_subtotal(),
            tax=await self.get_tax(),
            total=await self.get_total(),
        )

    async def verify_total_calculation(self) -> bool:
        summary = await self.get_summary()
        consistent = summary.is_consistent()
        if not consistent:
            self.actions.log(
                f"Suma się nie zgadza: {summary.subtotal} + {summary.tax} != {summary.total}"
            )
        return consistent

    async def get_order_items(self) -> list[OrderItem]:
        items = []
        for row in await self.actions.loc(self.ITEM_ROW).all():
            quantity = await self.actions.get_text_content(row.locator(self.ITEM_QUANTITY))
            items.append(OrderItem(
                name=await self.actions.get_text_content(row.locator(self.ITEM_NAME)),
                quantity=int(quantity) if quantity.isdigit() else 0,
                price=await self.actions.get_text_content(row.locator(self.ITEM_PRICE)),
            ))
        return items


# ── Krok 3: potwierdzenie (checkout-complete.html) ────────────────────────────

class CheckoutCompletePage:
    HEADER         = ('test_id', 'complete-header')
    BACK_HOME      = ('test_id', 'back-to-products')

    def __init__(self, page: Page, context: ScenarioContext):
        self.page = page
        self.context = context
        self.actions = PageActions(page, context, owner=self.__class__.__name__)

    async def is_complete(self) -> bool:
        return await self.actions.is_visible(self.HEADER)

    async def get_header(self) -> str:
        return await self.actions.get_text(self.HEADER)

    async def back_to_products(self):
        await self.actions.loc(self.BACK_HOME).click()
        await expect(self.page).to_have_url(url_pattern(PATH_INVENTORY))

    async def get_cart_count(self) -> int:
        return await self.actions.get_cart_count()
