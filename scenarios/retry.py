"""
RetryPolicy: ograniczona liczba prób z odstępem i opcjonalnym fallbackiem.

Używane tam gdzie UI Sauce Demo bywa niestabilne:
  - otwieranie bocznego menu (animacja, zasłonięty przycisk)
  - klik w link menu (fallback: klik skryptem)
  - logout (fallback: bezpośrednia nawigacja na stronę logowania)
"""
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from playwright.async_api import Error as PlaywrightError, Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Tylko te błędy traktujemy jako przejściowe: reszta leci dalej od razu
TRANSIENT_ERRORS = (PlaywrightError, AssertionError)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 1
    backoff_ms: int = 0
    use_fallback: bool = False

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts musi być >= 1, jest {self.max_attempts}")
        if self.backoff_ms < 0:
            raise ValueError(f"backoff_ms nie może być ujemny, jest {self.backoff_ms}")

    async def run(
        self,
        page: Page,
        action: Callable[[], Awaitable[T]],
        *,
        label: str = "",
        fallback: Callable[[], Awaitable[T]] | None = None,
    ) -> T:
        """
        Wykonuje action do max_attempts razy.
        Między próbami czeka backoff_ms (przez page.wait_for_timeout).
        Po wyczerpaniu prób: fallback jeśli polityka na to pozwala,
        w przeciwnym razie rzuca ostatni błąd.
        """
        last_error: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await action()
            except TRANSIENT_ERRORS as e:
                last_error = e
                logger.warning(f"[{label}] Próba {attempt}/{self.max_attempts} nieudana: {e}")
                if attempt < self.max_attempts and self.backoff_ms:
                    await page.wait_for_timeout(self.backoff_ms)

        if self.use_fallback and fallback is not None:
            logger.error(f"[{label}] Wszystkie próby nieudane — fallback. Ostatni błąd: {last_error}")
            return await fallback()

        raise last_error
