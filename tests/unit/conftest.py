"""
Fakes Playwright dla testów jednostkowych: bez przeglądarki.

FakePage trzyma rejestr lokatorów po selektorze: page.locator('.x') zwraca
zawsze ten sam MagicMock, więc test ustawia zachowanie, a page object go używa.
get_by_test_id('x') to page.locator('[data-test="x"]').
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from scenarios.context import ScenarioContext
from scenarios.retry import RetryPolicy

ASYNC_LOCATOR_METHODS = (
    'click', 'fill', 'clear', 'wait_for', 'is_visible', 'text_content', 'inner_text',
    'count', 'get_attribute', 'evaluate', 'input_value', 'select_option',
    'scroll_into_view_if_needed', 'bounding_box', 'all', 'press',
)

STABLE_BOX = {'x': 0, 'y': 0, 'width': 240, 'height': 320}


def make_locator(**returns) -> MagicMock:
    """
    Lokator z async metodami. returns ustawia return_value, np.
    make_locator(is_visible=True, text_content="3").
    """
    locator = MagicMock(name="locator")
    for method in ASYNC_LOCATOR_METHODS:
        setattr(locator, method, AsyncMock(name=method))

    locator.is_visible.return_value = False
    locator.count.return_value = 0
    locator.text_content.return_value = ""
    locator.inner_text.return_value = ""
    locator.input_value.return_value = ""
    locator.get_attribute.return_value = None
    locator.evaluate.return_value = True
    locator.bounding_box.return_value = dict(STABLE_BOX)
    locator.all.return_value = []

    children: dict[str, MagicMock] = {}

    def child(selector, **kwargs):
        if selector not in children:
            children[selector] = make_locator()
        return children[selector]

    locator.locator.side_effect = child
    locator.filter.return_value = locator
    locator.first = locator

    for method, value in returns.items():
        getattr(locator, method).return_value = value
    return locator


class FakePage:
    def __init__(self, url: str = "https://www.saucedemo.com/"):
        self.url = url
        self._locators: dict[str, MagicMock] = {}

        self.goto = AsyncMock(side_effect=self._goto)
        self.reload = AsyncMock()
        self.wait_for_timeout = AsyncMock()
        self.wait_for_url = AsyncMock()
        self.screenshot = AsyncMock()

        self.keyboard = MagicMock()
        self.keyboard.press = AsyncMock()
        self.keyboard.type = AsyncMock()

    async def _goto(self, url, **kwargs):
        self.url = url

    def locator(self, selector: str, has_text: str | None = None) -> MagicMock:
        key = f"{selector}|{has_text}" if has_text else selector
        if key not in self._locators:
            self._locators[key] = make_locator()
        return self._locators[key]

    def get_by_test_id(self, test_id: str) -> MagicMock:
        return self.locator(f'[data-test="{test_id}"]')

    def get_by_role(self, role: str, **kwargs) -> MagicMock:
        return self.locator(f"role={role}")

    def get_by_text(self, text: str, **kwargs) -> MagicMock:
        return self.locator(f"text={text}")


class FakeExpect:
    """
    Zastępuje playwright expect: każda asercja jest odnotowana i domyślnie przechodzi.
    fail(target, 'to_be_visible') sprawia, że ta asercja rzuci AssertionError.
    """

    def __init__(self):
        self.calls: list[tuple] = []
        self._failures: dict[tuple, Exception] = {}

    def __call__(self, target, message=None):
        return _Assertions(self, target)

    def fail(self, target, method: str, error: Exception | None = None):
        self._failures[(id(target), method)] = error or AssertionError(f"{method} failed")

    def called(self, target, method: str) -> bool:
        return any(t is target and m == method for t, m, _, _ in self.calls)

    def args_of(self, target, method: str) -> list[tuple]:
        return [(args, kwargs) for t, m, args, kwargs in self.calls if t is target and m == method]


class _Assertions:
    def __init__(self, owner: FakeExpect, target):
        self._owner = owner
        self._target = target

    def __getattr__(self, method):
        async def assertion(*args, **kwargs):
            self._owner.calls.append((self._target, method, args, kwargs))
            error = self._owner._failures.get((id(self._target), method))
            if error:
                raise error
        return assertion


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def context() -> ScenarioContext:
    return ScenarioContext(
        scenario_name="unit",
        timeout_ms=200,
        navigation_timeout_ms=300,
        menu_retry=RetryPolicy(max_attempts=3, backoff_ms=10),
    )


@pytest.fixture
def fake_expect(monkeypatch) -> FakeExpect:
    fake = FakeExpect()
    for module in (
        'scenarios.pages.actions',
        'scenarios.pages.login_page',
        'scenarios.pages.inventory_page',
        'scenarios.pages.cart_page',
        'scenarios.pages.checkout_pages',
    ):
        monkeypatch.setattr(f"{module}.expect", fake)
    return fake


@pytest.fixture
def locator_factory():
    return make_locator
