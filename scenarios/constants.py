"""
Stałe aplikacji Sauce Demo: użytkownicy, komunikaty błędów, ścieżki.
Wszystko co jest zaszyte po stronie sklepu i nie podlega konfiguracji.
"""

import re

DEFAULT_BASE_URL = "https://www.saucedemo.com/"

# ── Użytkownicy ───────────────────────────────────────────────────────────────

STANDARD_USER = "standard_user"
LOCKED_OUT_USER = "locked_out_user"
PROBLEM_USER = "problem_user"
PERFORMANCE_GLITCH_USER = "performance_glitch_user"
ERROR_USER = "error_user"
VISUAL_USER = "visual_user"

KNOWN_USERS = (
    STANDARD_USER,
    LOCKED_OUT_USER,
    PROBLEM_USER,
    PERFORMANCE_GLITCH_USER,
    ERROR_USER,
    VISUAL_USER,
)

STANDARD_PASSWORD = "secret_sauce"

# ── Komunikaty błędów (dokładne teksty) ───────────────────────────────────────

ERROR_USERNAME_REQUIRED = "Epic sadface: Username is required"
ERROR_PASSWORD_REQUIRED = "Epic sadface: Password is required"
ERROR_INVALID_CREDENTIALS = "Epic sadface: Username and password do not match any user in this service"
ERROR_LOCKED_OUT = "Epic sadface: Sorry, this user has been locked out."

# ── Ścieżki ───────────────────────────────────────────────────────────────────

PATH_LOGIN = ""
PATH_INVENTORY = "inventory.html"
PATH_CART = "cart.html"
PATH_CHECKOUT_STEP_ONE = "checkout-step-one.html"
PATH_CHECKOUT_STEP_TWO = "checkout-step-two.html"
PATH_CHECKOUT_COMPLETE = "checkout-complete.html"
PATH_INVENTORY_ITEM = "inventory-item.html"


def url_pattern(path: str) -> re.Pattern:
    """Wzorzec URL zawierającego ścieżkę, do expect(page).to_have_url() i wait_for_url()."""
    return re.compile(rf".*{re.escape(path)}")


# ── Sortowanie i menu ─────────────────────────────────────────────────────────

SORT_OPTIONS = ("az", "za", "lohi", "hilo")

# akcja → selektor linku w bocznym menu
MENU_ITEMS = {
    "all-items": "#inventory_sidebar_link",
    "about":     "#about_sidebar_link",
    "logout":    "#logout_sidebar_link",
    "reset":     "#reset_sidebar_link",
}

MENU_ITEM_LABELS = {
    "all-items": "All Items",
    "about":     "About",
    "logout":    "Logout",
    "reset":     "Reset App State",
}

ABOUT_HOST = "saucelabs.com"

# Liczba produktów na listingu dla standard_user
EXPECTED_PRODUCT_COUNT = 6

TOTAL_TOLERANCE = 0.01
