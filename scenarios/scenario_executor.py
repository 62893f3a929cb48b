"""
Scenario Executor: uruchamia pojedynczy scenariusz (jeden użytkownik).
Przeglądarka → ShopRunner → zapis ScenarioRun, BasketSnapshot i Alert.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy.orm import Session

from app.models.basket_snapshot import BasketSnapshot
from app.models.run import ScenarioRun, RunStatus
from core.alert_engine import AlertEngine
from scenarios.browser import open_page
from scenarios.context import ScenarioContext
from scenarios.shop_runner import ShopRunner, ShopRunResult

logger = logging.getLogger(__name__)


class ScenarioExecutor:
    """Wykonuje pojedynczy scenariusz przez Playwright i zapisuje wynik."""

    def __init__(
        self,
        context: ScenarioContext,
        db: Session,
        suite_run_id: int | None = None,
        headless: bool | None = None,
    ):
        self.context = context
        self.db = db
        self.suite_run_id = suite_run_id
        self.headless = context.headless if headless is None else headless
        self.scenario_run = None
        self.alert_engine = None

    async def run(self) -> ScenarioRun:
        """Uruchamia scenariusz i zwraca ScenarioRun z wynikami."""

        self.scenario_run = ScenarioRun(
            suite_run_id=self.suite_run_id,
            scenario_name=self.context.scenario_name,
            username=self.context.username,
            status=RunStatus.RUNNING,
            started_at=datetime.now(timezone.utc),
        )
        self.db.add(self.scenario_run)
        self.db.commit()
        self.db.refresh(self.scenario_run)

        self.alert_engine = AlertEngine(run_id=self.scenario_run.id, db=self.db)

        logger.info(f"[RUN #{self.scenario_run.id}] Start: {self.context.scenario_name}")

        try:
            await self._execute()

            if self.alert_engine.counted_alerts() > 0:
                self.scenario_run.status = RunStatus.FAILED
            else:
                self.scenario_run.status = RunStatus.SUCCESS

        except Exception as e:
            logger.error(f"[RUN #{self.scenario_run.id}] Nieoczekiwany błąd: {e}", exc_info=True)
            self.scenario_run.status = RunStatus.FAILED
            self.alert_engine.add_alert("scenario.unexpected_error", description=str(e))

        finally:
            self.alert_engine.save_all()
            self.scenario_run.finished_at = datetime.now(timezone.utc)
            self.db.commit()

            logger.info(
                f"[RUN #{self.scenario_run.id}] Finished: {self.scenario_run.status.value} | "
                f"Duration: {self.scenario_run.duration_seconds}s | "
                f"Alerts: {self.alert_engine.counted_alerts()}"
            )

        return self.scenario_run

    async def _execute(self):
        """Otwiera przeglądarkę i przekazuje sterowanie do ShopRunner."""

        screenshot_dir = f"screenshots/{self.suite_run_id or 'single'}/{self.scenario_run.id}"
        Path(screenshot_dir).mkdir(parents=True, exist_ok=True)

        async with open_page(self.context, headless=self.headless) as page:
            runner = ShopRunner(page=page, context=self.context, screenshot_dir=screenshot_dir)
            result = await runner.run()

        self._save_run_data(result)

        for alert in result.alerts:
            self.alert_engine.add_alert(
                business_rule=alert.business_rule,
                description=alert.description,
                alert_type=alert.alert_type,
            )

        if result.stopped_at:
            logger.info(
                f"[RUN #{self.scenario_run.id}] "
                f"Zatrzymano na: {result.stopped_at} | "
                f"Sukces: {result.success}"
            )

        # Nieoczekiwany stop = run dostaje status FAILED
        if not result.success:
            raise RuntimeError(f"Scenariusz zatrzymany nieoczekiwanie na '{result.stopped_at}'")

    def _save_run_data(self, result: ShopRunResult) -> None:
        rd = result.run_data
        run_id = self.scenario_run.id

        self.scenario_run.stopped_at = result.stopped_at
        if rd.login:
            self.scenario_run.product_count = rd.login.product_count

        if result.screenshots:
            self.scenario_run.screenshot_url = list(result.screenshots.values())[-1]

        snapshots = []
        if rd.inventory:
            snapshots.append(BasketSnapshot(
                run_id=run_id,
                stage='inventory',
                cart_count=rd.inventory.cart_count,
                raw_data={
                    'added': rd.inventory.added,
                    'missing': rd.inventory.missing,
                    'screenshot': result.screenshots.get('inventory'),
                },
            ))
        if rd.cart:
            snapshots.append(BasketSnapshot(
                run_id=run_id,
                stage='cart',
                cart_count=rd.cart.cart_count,
                total_price=rd.cart.total,
                raw_data={
                    'items': [{'id': i.id, 'name': i.name, 'price': i.price} for i in rd.cart.items],
                    'screenshot': result.screenshots.get('cart'),
                },
            ))
        if rd.overview and rd.overview.summary:
            snapshots.append(BasketSnapshot(
                run_id=run_id,
                stage='overview',
                subtotal=rd.overview.summary.subtotal,
                tax=rd.overview.summary.tax,
                total_price=rd.overview.summary.total,
                raw_data={
                    'items': [{'name': i.name, 'quantity': i.quantity, 'price': i.price} for i in rd.overview.items],
                    'screenshot': result.screenshots.get('overview'),
                },
            ))
        if rd.complete:
            snapshots.append(BasketSnapshot(
                run_id=run_id,
                stage='complete',
                cart_count=rd.complete.cart_count,
                raw_data={
                    'header': rd.complete.header,
                    'screenshot': result.screenshots.get('complete'),
                },
            ))
        if snapshots:
            self.db.add_all(snapshots)
