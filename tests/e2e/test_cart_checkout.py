import re

import pytest
from playwright.async_api import expect

from scenarios.run_data import CheckoutInfo

pytestmark = pytest.mark.e2e

JOHN = CheckoutInfo("John", "Doe", "12345")


@pytest.fixture(autouse=True)
async def signed_in(logged_in):
    return logged_in


@pytest.fixture
async def at_checkout(inventory, cart):
    """Plecak w koszyku, otwarty checkout-step-one."""
    await inventory.add_to_cart("sauce-labs-backpack")
    await cart.goto()
    await cart.proceed_to_checkout()


# ── Koszyk ────────────────────────────────────────────────────────────────────

async def test_empty_cart(cart):
    await cart.goto()

    assert await cart.is_empty() is True
    await cart.continue_shopping()


async def test_cart_items(inventory, cart, page):
    await inventory.add_to_cart("sauce-labs-backpack")
    await inventory.add_to_cart("sauce-labs-bike-light")
    await cart.goto()

    items = await cart.get_cart_items()

    assert [item.id for item in items] == ["sauce-labs-backpack", "sauce-labs-bike-light"]
    assert items[0].name == "Sauce Labs Backpack"
    assert await cart.get_item_quantity("sauce-labs-backpack") == 1
    assert await cart.get_cart_total() == 39.98
    await cart.verify_cart_count()

    await page.locator('.inventory_item_name', has_text="Sauce Labs Backpack").click()
    await expect(page).to_have_url(re.compile(r".*inventory-item\.html"))


async def test_badge_follows_cart(inventory, cart):
    assert await cart.get_cart_count() == 0

    await inventory.add_to_cart("sauce-labs-backpack")
    await inventory.add_to_cart("sauce-labs-bike-light")
    assert await cart.get_cart_count() == 2

    await cart.goto()
    await cart.remove_item("sauce-labs-backpack")
    assert await cart.get_cart_count() == 1


async def test_cart_persists_across_navigation_and_reload(inventory, cart):
    await inventory.add_to_cart("sauce-labs-backpack")
    await inventory.add_to_cart("sauce-labs-bike-light")

    await cart.goto()
    await cart.continue_shopping()
    await cart.goto()

    assert len(await cart.get_cart_items()) == 2
    await cart.verify_cart_persistence()


async def test_empty_cart_checkout_requires_first_name(cart, checkout_info):
    await cart.goto()
    await cart.proceed_to_checkout()

    await checkout_info.continue_checkout()

    assert re.search("first name is required", await checkout_info.get_error_message(), re.IGNORECASE)


async def test_remove_last_item_during_checkout(inventory, cart, checkout_info):
    await inventory.add_to_cart("sauce-labs-backpack")
    await cart.goto()
    await cart.proceed_to_checkout()
    await checkout_info.fill_form(JOHN)

    await cart.goto()
    await cart.remove_item("sauce-labs-backpack")

    assert await cart.get_cart_count() == 0
    assert await cart.is_empty() is True


# ── Checkout ──────────────────────────────────────────────────────────────────

async def test_full_checkout(at_checkout, checkout_info, checkout_overview, checkout_complete):
    await checkout_info.fill_and_continue(JOHN)

    assert await checkout_overview.verify_total_calculation() is True
    assert [item.name for item in await checkout_overview.get_order_items()] == ["Sauce Labs Backpack"]

    await checkout_overview.finish_checkout()

    assert await checkout_complete.is_complete() is True
    assert await checkout_complete.get_cart_count() == 0
    await checkout_complete.back_to_products()


async def test_total_is_subtotal_plus_tax(at_checkout, checkout_info, checkout_overview):
    await checkout_info.fill_and_continue(JOHN)

    subtotal = await checkout_overview.get_subtotal()
    tax = await checkout_overview.get_tax()
    total = await checkout_overview.get_total()

    assert subtotal == 29.99
    assert total == pytest.approx(subtotal + tax, abs=0.01)


@pytest.mark.parametrize("info", [
    CheckoutInfo(),
    CheckoutInfo("John", "", ""),
    CheckoutInfo("", "Doe", ""),
    CheckoutInfo("John", "Doe", ""),
])
async def test_incomplete_form_shows_error(at_checkout, checkout_info, page, info):
    await checkout_info.fill_and_continue(info)

    assert await checkout_info.get_error_message()
    await expect(page).to_have_url(re.compile(r".*checkout-step-one\.html"))


async def test_form_round_trip(at_checkout, checkout_info):
    info = CheckoutInfo("Zoë", "O'Brien-Łukasik", "00-950")

    await checkout_info.fill_form(info)

    assert await checkout_info.read_form() == info
    assert await checkout_info.validate_fields() is True


async def test_special_characters_are_accepted(at_checkout, checkout_info):
    special = "!@#$%^&*()_+-=[]{}|;:,.<>?/~`\"'\\"

    await checkout_info.fill_and_continue(CheckoutInfo("John" + special, "Doe" + special, "123" + special))


async def test_cancel_from_each_step(at_checkout, cart, checkout_info, checkout_overview):
    await checkout_info.cancel()

    await cart.proceed_to_checkout()
    await checkout_info.fill_form(CheckoutInfo("John", "", ""))
    await checkout_info.cancel()

    await cart.proceed_to_checkout()
    await checkout_info.fill_and_continue(JOHN)
    await checkout_overview.cancel()
