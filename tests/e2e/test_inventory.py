import re

import pytest
from playwright.async_api import expect

from scenarios.constants import EXPECTED_PRODUCT_COUNT, SORT_OPTIONS
from scenarios.run_data import is_sorted

pytestmark = pytest.mark.e2e

EXPECTED_PRODUCTS = [
    ("Sauce Labs Backpack", "$29.99"),
    ("Sauce Labs Bike Light", "$9.99"),
    ("Sauce Labs Bolt T-Shirt", "$15.99"),
    ("Sauce Labs Fleece Jacket", "$49.99"),
    ("Sauce Labs Onesie", "$7.99"),
    ("Test.allTheThings() T-Shirt (Red)", "$15.99"),
]


@pytest.fixture(autouse=True)
async def signed_in(logged_in):
    return logged_in


async def test_listing_shows_all_products(inventory):
    products = await inventory.get_products()

    assert [(p.name, p.price) for p in products] == EXPECTED_PRODUCTS
    assert all(p.id and p.description for p in products)


@pytest.mark.parametrize("option", SORT_OPTIONS)
async def test_sort(inventory, option):
    await inventory.sort_products(option)

    assert await inventory.get_current_sort_order() == option
    assert is_sorted(await inventory.get_products(), option)


async def test_sort_resets_after_reload(inventory, page):
    await inventory.sort_products("hilo")

    await page.reload()

    assert await inventory.get_current_sort_order() == "az"
    assert is_sorted(await inventory.get_products(), "az")


async def test_unknown_sort_value_keeps_default_order(inventory, page):
    await page.evaluate("""() => {
        const select = document.querySelector('.product_sort_container');
        select.value = 'invalid_sort';
        select.dispatchEvent(new Event('change'));
    }""")

    assert is_sorted(await inventory.get_products(), "az")


async def test_static_content(inventory):
    await inventory.verify_product_images()
    await inventory.verify_social_links()
    await inventory.verify_footer()


async def test_images_keep_layout_when_blocked(inventory, page):
    await page.route("**/*.jpg", lambda route: route.abort("failed"))
    await page.reload()

    await inventory.verify_product_images()


async def test_product_detail_and_back(inventory, page):
    await inventory.open_product("Sauce Labs Backpack")

    await expect(page.locator('.inventory_details_name')).to_have_text("Sauce Labs Backpack")
    await expect(page.locator('.inventory_details_price')).to_be_visible()

    await page.get_by_test_id('back-to-products').click()
    await expect(page).to_have_url(re.compile(r".*inventory\.html"))


async def test_add_and_remove_updates_badge(inventory, page):
    await inventory.add_to_cart("sauce-labs-backpack")
    await inventory.add_to_cart("sauce-labs-bike-light")
    assert await inventory.get_cart_count() == 2

    await inventory.remove_from_cart("sauce-labs-backpack")
    assert await inventory.get_cart_count() == 1

    await inventory.remove_from_cart("sauce-labs-bike-light")
    await expect(page.locator('.shopping_cart_badge')).to_be_hidden()
    assert await inventory.get_cart_count() == 0


async def test_button_toggles_between_add_and_remove(inventory):
    product_id = "sauce-labs-backpack"

    assert await inventory.can_add_to_cart(product_id) is True
    await inventory.add_to_cart(product_id)
    assert await inventory.can_add_to_cart(product_id) is False
    await inventory.remove_from_cart(product_id)
    assert await inventory.can_add_to_cart(product_id) is True


async def test_badge_counts_up_and_down(inventory):
    ids = [p.id for p in (await inventory.get_products())[:3]]

    for count, product_id in enumerate(ids, start=1):
        await inventory.add_to_cart(product_id)
        assert await inventory.get_cart_count() == count

    for count, product_id in reversed(list(enumerate(ids))):
        await inventory.remove_from_cart(product_id)
        assert await inventory.get_cart_count() == count


async def test_rapid_add_remove(inventory):
    await inventory.rapid_add_remove("sauce-labs-backpack", 3)
    await inventory.add_to_cart("sauce-labs-backpack")

    assert await inventory.get_cart_count() == 1


async def test_cart_survives_reload(inventory, page):
    await inventory.add_to_cart("sauce-labs-backpack")
    await inventory.add_to_cart("sauce-labs-bike-light")

    await page.reload()

    assert await inventory.get_cart_count() == 2
    assert await inventory.can_add_to_cart("sauce-labs-backpack") is False
    assert await inventory.can_add_to_cart("sauce-labs-bike-light") is False


async def test_critical_elements_load_quickly(page):
    await page.reload()

    await expect(page.locator('.inventory_list')).to_be_visible(timeout=1000)
    await expect(page.locator('.inventory_item').first).to_be_visible(timeout=1000)
    await expect(page.locator('.shopping_cart_link')).to_be_visible(timeout=1000)
    await expect(page.locator('#react-burger-menu-btn')).to_be_visible(timeout=1000)
    await expect(page.locator('.inventory_item')).to_have_count(EXPECTED_PRODUCT_COUNT)
