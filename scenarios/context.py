from dataclasses import dataclass, field, replace
from typing import Optional
import os

from dotenv import load_dotenv

from scenarios.constants import DEFAULT_BASE_URL, STANDARD_USER, STANDARD_PASSWORD, SORT_OPTIONS
from scenarios.retry import RetryPolicy
from scenarios.run_data import CheckoutInfo

DEFAULT_PRODUCTS = ["sauce-labs-backpack", "sauce-labs-bike-light"]


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


def _env_list(name: str) -> list[str]:
    value = os.getenv(name) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class ScenarioContext:
    # Identyfikacja
    scenario_name: str = "default"
    base_url: str = DEFAULT_BASE_URL

    # Konto
    username: str = STANDARD_USER
    password: str = STANDARD_PASSWORD

    # Przebieg zakupów
    product_ids: list[str] = field(default_factory=lambda: list(DEFAULT_PRODUCTS))
    sort_option: Optional[str] = None
    checkout_info: CheckoutInfo = field(
        default_factory=lambda: CheckoutInfo("John", "Doe", "12345")
    )
    is_order: bool = False

    # Przeglądarka i czasy (ms)
    headless: bool = True
    timeout_ms: int = 5000
    navigation_timeout_ms: int = 10000

    # Polityki ponowień
    menu_retry: RetryPolicy = field(default_factory=lambda: RetryPolicy(max_attempts=3, backoff_ms=1000))
    menu_click_policy: RetryPolicy = field(default_factory=lambda: RetryPolicy(use_fallback=True))
    logout_policy: RetryPolicy = field(default_factory=lambda: RetryPolicy(use_fallback=True))

    # Flagi: {name: is_enabled}
    flags: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self):
        if not self.base_url.endswith("/"):
            self.base_url += "/"
        if self.sort_option is not None and self.sort_option not in SORT_OPTIONS:
            raise ValueError(f"Nieznany tryb sortowania: {self.sort_option}")

    def flag(self, name: str, default: bool = False) -> bool:
        return self.flags.get(name, default)

    @property
    def is_mobile(self) -> bool:
        return self.flag('mobile')

    @property
    def is_desktop(self) -> bool:
        return not self.flag('mobile')

    @property
    def viewport(self) -> dict:
        return {'width': 390, 'height': 844} if self.is_mobile else {'width': 1280, 'height': 720}

    def url(self, path: str = "") -> str:
        return f"{self.base_url}{path.lstrip('/')}"

    def for_user(self, username: str) -> "ScenarioContext":
        """Kopia kontekstu dla innego użytkownika: jeden scenariusz na usera, bez wspólnych list i słowników."""
        return replace(
            self,
            username=username,
            scenario_name=f"{self.scenario_name}:{username}",
            product_ids=list(self.product_ids),
            checkout_info=replace(self.checkout_info),
            flags=dict(self.flags),
        )

    @classmethod
    def from_env(cls, **overrides) -> "ScenarioContext":
        """
        Buduje kontekst ze zmiennych środowiskowych (.env).
        overrides nadpisują wartości z env: przydatne w CLI i testach.
        """
        load_dotenv()

        products = _env_list("SAUCE_PRODUCTS")
        values = dict(
            scenario_name=os.getenv("SAUCE_SCENARIO", "default"),
            base_url=os.getenv("SAUCE_BASE_URL", DEFAULT_BASE_URL),
            username=os.getenv("SAUCE_USERNAME", STANDARD_USER),
            password=os.getenv("SAUCE_PASSWORD", STANDARD_PASSWORD),
            product_ids=products or list(DEFAULT_PRODUCTS),
            sort_option=os.getenv("SAUCE_SORT") or None,
            is_order=_env_bool("SAUCE_ORDER", False),
            headless=_env_bool("SAUCE_HEADLESS", True),
            timeout_ms=_env_int("SAUCE_TIMEOUT_MS", 5000),
            navigation_timeout_ms=_env_int("SAUCE_NAVIGATION_TIMEOUT_MS", 10000),
            menu_retry=RetryPolicy(
                max_attempts=_env_int("SAUCE_MENU_RETRIES", 3),
                backoff_ms=_env_int("SAUCE_MENU_BACKOFF_MS", 1000),
            ),
            flags={name: True for name in _env_list("SAUCE_FLAGS")},
        )
        values.update(overrides)
        return cls(**values)
