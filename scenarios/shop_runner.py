"""
ShopRunner: główny orkiestrator scenariusza zakupowego.
Odpowiedzialności:
  1. Prowadzi pages przez etapy: login → inventory → cart → checkout → overview → complete
  2. Po każdym etapie ocenia dane rules i przekazuje instructions dalej
  3. Obsługuje zatrzymanie (StopTest): oczekiwane i nieoczekiwane
  4. Zbiera alerty i screenshoty ze wszystkich etapów
"""
import logging
from dataclasses import dataclass, field

from playwright.async_api import Error as PlaywrightError, Page

from scenarios.constants import PATH_CHECKOUT_STEP_TWO, PATH_INVENTORY
from scenarios.context import ScenarioContext
from scenarios.run_data import (
    CartData, CheckoutData, CompleteData, InventoryData, LoginData, OverviewData, RunData,
)
from scenarios.rules_result import AlertResult, RulesResult

from scenarios.pages import (
    LoginPage, InventoryPage, CartPage,
    CheckoutInfoPage, CheckoutOverviewPage, CheckoutCompletePage,
)

from scenarios.rules import (
    LoginRules, InventoryRules, CartRules,
    CheckoutRules, OverviewRules, CompleteRules,
    GlobalRules,
)

logger = logging.getLogger(__name__)


@dataclass
class ShopRunResult:
    run_data: RunData
    alerts: list[AlertResult] = field(default_factory=list)
    stopped_at: str | None = None
    success: bool = True
    screenshots: dict[str, str] = field(default_factory=dict)  # stage → ścieżka pliku


class StopTest(Exception):
    """
    Rzucane gdy scenariusz ma się zatrzymać.
    expected=True  → stop był oczekiwany (flaga stop_at_*, scenariusz negatywny)
    expected=False → stop oznacza błąd
    """
    def __init__(self, stage: str, reason: str, expected: bool = True):
        super().__init__(f"{stage}: {reason}")
        self.stage = stage
        self.reason = reason
        self.expected = expected


class ShopRunner:
    def __init__(self, page: Page, context: ScenarioContext, screenshot_dir: str | None = None):
        self.page = page
        self.context = context
        self.run_data = RunData()
        self.alerts: list[AlertResult] = []
        # Instrukcje akumulowane między etapami
        self.instructions: dict = {}
        self._current_stage = 'init'
        self.screenshot_dir = screenshot_dir
        self.screenshots: dict[str, str] = {}

    # ── Helpers ───────────────────────────────────────────────────────────────

    async def _screenshot(self, stage: str) -> None:
        if not self.screenshot_dir:
            return
        path = f"{self.screenshot_dir}/{stage}.png"
        try:
            await self.page.screenshot(path=path)
            self.screenshots[stage] = path
        except PlaywrightError as e:
            logger.warning(f"[{self.context.scenario_name}] Screenshot '{stage}' nieudany: {e}")

    def _result(self, stopped_at: str | None = None, success: bool = True) -> ShopRunResult:
        return ShopRunResult(
            run_data=self.run_data,
            alerts=self.alerts,
            stopped_at=stopped_at,
            success=success,
            screenshots=self.screenshots,
        )

    # ── Publiczne API ─────────────────────────────────────────────────────────

    async def run(self) -> ShopRunResult:
        try:
            await self._run_login()
            await self._run_inventory()
            await self._run_cart()
            await self._run_checkout()
            await self._run_overview()

            if self.context.is_order:
                await self._run_complete()

            # Global rules: mają dostęp do danych ze wszystkich etapów
            self._process_result(GlobalRules(self.context).check(self.run_data), 'global')

        except StopTest as e:
            if e.expected:
                logger.info(
                    f"[{self.context.scenario_name}] "
                    f"Scenariusz zatrzymany na '{e.stage}': {e.reason}"
                )
            else:
                logger.warning(
                    f"[{self.context.scenario_name}] "
                    f"Scenariusz przerwany na '{e.stage}' (nieoczekiwane): {e.reason}"
                )
            # Global rules na tym, co zdążyliśmy zebrać: bez ponownego stopu
            self.alerts.extend(GlobalRules(self.context).check(self.run_data).alerts)
            return self._result(stopped_at=e.stage, success=e.expected)

        except (PlaywrightError, AssertionError) as e:
            logger.exception(
                f"[{self.context.scenario_name}] Błąd na etapie '{self._current_stage}': {e}"
            )
            await self._screenshot(f"{self._current_stage}_error")
            return self._result(stopped_at=self._current_stage, success=False)

        return self._result()

    # ── Etapy ─────────────────────────────────────────────────────────────────

    async def _run_login(self):
        self._current_stage = 'login'
        login_page = LoginPage(self.page, self.context)
        await login_page.goto()
        await login_page.submit_login(self.context.username, self.context.password)

        # Wynik logowania to albo inventory, albo komunikat błędu: czekamy na jedno z dwóch
        async def settled() -> bool:
            return PATH_INVENTORY in self.page.url or await login_page.actions.is_visible(LoginPage.ERROR)

        await login_page.actions.wait_for(settled, timeout=self.context.navigation_timeout_ms)

        data = LoginData(url=self.page.url, error=await login_page.get_error_message())
        if data.logged_in:
            data.product_count = len(await InventoryPage(self.page, self.context).get_products())
        self.run_data.login = data

        await self._screenshot('login')
        self._process_result(LoginRules(self.context).check(self.run_data), 'login')

    async def _run_inventory(self):
        self._current_stage = 'inventory'
        inventory = InventoryPage(self.page, self.context)
        data = InventoryData(
            sort_option=self.context.sort_option,
            requested=list(self.context.product_ids),
        )

        if self.context.sort_option:
            try:
                await inventory.sort_products(self.context.sort_option)
            except AssertionError as e:
                logger.warning(f"[{self.context.scenario_name}] {e}")
            data.sort_applied = await inventory.get_current_sort_order()

        data.products = await inventory.get_products()

        for product_id in self.context.product_ids:
            if not await inventory.can_add_to_cart(product_id):
                data.missing.append(product_id)
                continue
            try:
                await inventory.add_to_cart(product_id)
                data.added.append(product_id)
            except AssertionError:
                # error_user / problem_user: przycisk nie przełącza się na Remove
                data.missing.append(product_id)

        data.cart_count = await inventory.get_cart_count()
        self.run_data.inventory = data

        await self._screenshot('inventory')
        self._process_result(InventoryRules(self.context).check(self.run_data), 'inventory')

    async def _run_cart(self):
        self._current_stage = 'cart'
        cart = CartPage(self.page, self.context)
        await cart.goto()

        items = await cart.get_cart_items()
        data = CartData(items=items, cart_count=await cart.get_cart_count())
        try:
            data.total = round(sum(item.price_value for item in items), 2)
        except ValueError as e:
            logger.warning(f"[{self.context.scenario_name}] Nieczytelna cena w koszyku: {e}")
            data.total = None
        self.run_data.cart = data

        await self._screenshot('cart')
        self._process_result(CartRules(self.context).check(self.run_data), 'cart')

        if self.context.flag('stop_at_cart'):
            raise StopTest('cart', 'Oczekiwane zatrzymanie na koszyku', expected=True)

    async def _run_checkout(self):
        self._current_stage = 'checkout'
        cart = CartPage(self.page, self.context)
        data = CheckoutData(info=self.context.checkout_info)

        for product_id in self.instructions.get('remove_ids', []):
            await cart.remove_item(product_id)
            data.removed.append(product_id)

        await cart.proceed_to_checkout()

        checkout = CheckoutInfoPage(self.page, self.context)
        try:
            await checkout.fill_and_continue(self.context.checkout_info)
        except AssertionError as e:
            logger.warning(f"[{self.context.scenario_name}] Checkout: {e}")

        data.error = await checkout.get_error_message()
        data.reached_overview = PATH_CHECKOUT_STEP_TWO in self.page.url
        self.run_data.checkout = data

        await self._screenshot('checkout')
        self._process_result(CheckoutRules(self.context).check(self.run_data), 'checkout')

    async def _run_overview(self):
        self._current_stage = 'overview'
        overview = CheckoutOverviewPage(self.page, self.context)
        data = OverviewData(items=await overview.get_order_items())
        try:
            data.summary = await overview.get_summary()
        except ValueError as e:
            logger.warning(f"[{self.context.scenario_name}] Nieczytelne kwoty w podsumowaniu: {e}")
        self.run_data.overview = data

        await self._screenshot('overview')
        self._process_result(OverviewRules(self.context).check(self.run_data), 'overview')

        if self.context.flag('stop_at_overview'):
            raise StopTest('overview', 'Oczekiwane zatrzymanie na podsumowaniu', expected=True)

    async def _run_complete(self):
        self._current_stage = 'complete'
        await CheckoutOverviewPage(self.page, self.context).finish_checkout()

        complete = CheckoutCompletePage(self.page, self.context)
        self.run_data.complete = CompleteData(
            completed=await complete.is_complete(),
            header=await complete.get_header(),
            cart_count=await complete.get_cart_count(),
        )

        await self._screenshot('complete')
        self._process_result(CompleteRules(self.context).check(self.run_data), 'complete')

    def _process_result(self, result: RulesResult, stage: str):
        """
        Przetwarza wynik rules:
        - zapisuje alerty
        - akumuluje instrukcje dla kolejnych etapów
        - rzuca StopTest jeśli rules zdecydowały o zatrzymaniu
        """
        for alert in result.alerts:
            logger.warning(f"[{stage}] ALERT: {alert.business_rule} — {alert.description}")
        self.alerts.extend(result.alerts)

        self.instructions.update(result.instructions)

        if result.should_stop:
            raise StopTest(stage=stage, reason=result.stop_reason, expected=result.expected_stop)
