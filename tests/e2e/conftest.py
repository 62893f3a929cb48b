"""
Fixtures dla testów e2e na żywym Sauce Demo.
Każdy test dostaje świeżą przeglądarkę (open_page) i page objecty na tej samej karcie.
"""
import pytest

from scenarios.browser import open_page
from scenarios.context import ScenarioContext
from scenarios.pages import (
    CartPage, CheckoutCompletePage, CheckoutInfoPage, CheckoutOverviewPage, InventoryPage, LoginPage,
)


@pytest.fixture
def context() -> ScenarioContext:
    return ScenarioContext.from_env(scenario_name="e2e")


@pytest.fixture
async def page(context):
    async with open_page(context) as page:
        yield page


@pytest.fixture
def login_page(page, context) -> LoginPage:
    return LoginPage(page, context)


@pytest.fixture
def inventory(page, context) -> InventoryPage:
    return InventoryPage(page, context)


@pytest.fixture
def cart(page, context) -> CartPage:
    return CartPage(page, context)


@pytest.fixture
def checkout_info(page, context) -> CheckoutInfoPage:
    return CheckoutInfoPage(page, context)


@pytest.fixture
def checkout_overview(page, context) -> CheckoutOverviewPage:
    return CheckoutOverviewPage(page, context)


@pytest.fixture
def checkout_complete(page, context) -> CheckoutCompletePage:
    return CheckoutCompletePage(page, context)


@pytest.fixture
async def logged_in(login_page, context) -> LoginPage:
    """Zalogowany standard_user na inventory.html."""
    await login_page.goto()
    await login_page.login(context.username, context.password)
    return login_page
