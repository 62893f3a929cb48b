from scenarios.pages.actions import PageActions
from scenarios.pages.login_page import LoginPage
from scenarios.pages.inventory_page import InventoryPage
from scenarios.pages.cart_page import CartPage
from scenarios.pages.checkout_pages import CheckoutInfoPage, CheckoutOverviewPage, CheckoutCompletePage
