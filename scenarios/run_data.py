import re
from dataclasses import dataclass, field
from typing import Optional

from scenarios.constants import PATH_INVENTORY, TOTAL_TOLERANCE


def parse_price(text: str) -> float:
    """'$29.99' / 'Item total: $29.99' → 29.99. Rzuca ValueError gdy brak liczby."""
    cleaned = re.sub(r"[^0-9.\-]+", "", text or "")
    return float(cleaned)


def is_sorted(products: list["Product"], option: str) -> bool:
    """Sprawdza czy kolejność produktów odpowiada trybowi sortowania."""
    if option in ("az", "za"):
        values = [p.name for p in products]
    elif option in ("lohi", "hilo"):
        values = [p.price_value for p in products]
    else:
        raise ValueError(f"Nieznany tryb sortowania: {option}")

    expected = sorted(values, reverse=option in ("za", "hilo"))
    return values == expected


# ── Obiekty wartości (to co widać na stronie) ────────────────────────────────

@dataclass
class Product:
    id: str
    name: str
    description: str
    price: str

    @property
    def price_value(self) -> float:
        return parse_price(self.price)


@dataclass
class CartItem:
    id: str
    name: str
    description: str
    price: str
    quantity: int = 1

    @property
    def price_value(self) -> float:
        return parse_price(self.price)


@dataclass
class CheckoutInfo:
    first_name: str = ""
    last_name: str = ""
    postal_code: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.first_name and self.last_name and self.postal_code)


@dataclass
class OrderSummary:
    subtotal: float
    tax: float
    total: float

    def is_consistent(self, tolerance: float = TOTAL_TOLERANCE) -> bool:
        return abs(self.subtotal + self.tax - self.total) < tolerance


@dataclass
class OrderItem:
    name: str
    quantity: int
    price: str


# ── Dane etapów (zbierane przez ShopRunner, oceniane przez rules) ────────────

@dataclass
class LoginData:
    url: str = ""
    error: str = ""
    product_count: int = 0

    @property
    def logged_in(self) -> bool:
        return PATH_INVENTORY in self.url


@dataclass
class InventoryData:
    products: list[Product] = field(default_factory=list)
    sort_option: Optional[str] = None
    sort_applied: Optional[str] = None
    requested: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    cart_count: int = 0


@dataclass
class CartData:
    items: list[CartItem] = field(default_factory=list)
    cart_count: int = 0
    total: Optional[float] = 0.0   # None gdy cena pozycji jest nieczytelna


@dataclass
class CheckoutData:
    info: Optional[CheckoutInfo] = None
    removed: list[str] = field(default_factory=list)
    reached_overview: bool = False
    error: str = ""


@dataclass
class OverviewData:
    summary: Optional[OrderSummary] = None
    items: list[OrderItem] = field(default_factory=list)


@dataclass
class CompleteData:
    completed: bool = False
    header: str = ""
    cart_count: int = 0


@dataclass
class RunData:
    login:     Optional[LoginData]     = None
    inventory: Optional[InventoryData] = None
    cart:      Optional[CartData]      = None
    checkout:  Optional[CheckoutData]  = None
    overview:  Optional[OverviewData]  = None
    complete:  Optional[CompleteData]  = None

    @property
    def ordered_items(self) -> list[CartItem]:
        """Pozycje koszyka, które poszły do checkoutu (bez usuniętych przed checkoutem)."""
        if not self.cart:
            return []
        removed = set(self.checkout.removed) if self.checkout else set()
        return [item for item in self.cart.items if item.id not in removed]
