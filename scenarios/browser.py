"""
Uruchamianie przeglądarki dla scenariuszy i testów e2e.
Jedno miejsce, w którym ustawiamy data-test jako atrybut get_by_test_id,
viewport (desktop/mobile) i domyślne timeouty z ScenarioContext.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Page, async_playwright

from scenarios.context import ScenarioContext

logger = logging.getLogger(__name__)

TEST_ID_ATTRIBUTE = "data-test"


@asynccontextmanager
async def open_page(context: ScenarioContext, headless: bool | None = None) -> AsyncIterator[Page]:
    headless = context.headless if headless is None else headless

    async with async_playwright() as p:
        p.selectors.set_test_id_attribute(TEST_ID_ATTRIBUTE)

        browser = await p.chromium.launch(headless=headless)
        browser_context = await browser.new_context(viewport=context.viewport)
        browser_context.set_default_timeout(context.timeout_ms)
        browser_context.set_default_navigation_timeout(context.navigation_timeout_ms)

        logger.debug(
            f"[{context.scenario_name}] Chromium headless={headless} viewport={context.viewport}"
        )

        try:
            yield await browser_context.new_page()
        finally:
            await browser_context.close()
            await browser.close()
