"""
Suite Executor: uruchamia zestaw scenariuszy równolegle i agreguje wyniki.
"""

import asyncio
import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from sqlalchemy.orm import Session

from app.models.run import RunStatus
from app.models.suite_run import SuiteRun, SuiteRunStatus
from scenarios.context import ScenarioContext
from scenarios.scenario_executor import ScenarioExecutor

logger = logging.getLogger(__name__)


class SuiteExecutor:
    """Orchestrator: tworzy suite_run, uruchamia scenariusze (max `workers` naraz), liczy wynik."""

    def __init__(self, contexts: list[ScenarioContext], workers: int, db: Session,
                 name: str = "default", headless: bool | None = None, triggered_by: str = "manual"):
        self.contexts = contexts
        self.workers = max(1, workers)
        self.db = db
        self.name = name
        self.headless = headless
        self.triggered_by = triggered_by
        self.suite_run_id = None
        self.log_handler = None
        self.log_file = None

    async def run(self) -> SuiteRun:
        """Uruchamia wszystkie scenariusze i zwraca suite_run z wynikami."""

        suite_run = SuiteRun(
            name=self.name,
            base_url=self.contexts[0].base_url if self.contexts else "",
            status=SuiteRunStatus.RUNNING,
            started_at=datetime.now(timezone.utc),
            triggered_by=self.triggered_by,
            workers=self.workers,
            total_scenarios=len(self.contexts),
        )
        self.db.add(suite_run)
        self.db.commit()
        self.db.refresh(suite_run)

        self.suite_run_id = suite_run.id
        self._setup_logging()

        logger.info(f"\n{'='*60}")
        logger.info(f"[SUITE RUN #{suite_run.id}] {self.name} @ {suite_run.base_url}")
        logger.info(f"Scenariusze: {len(self.contexts)} | Workers: {self.workers}")
        logger.info(f"{'='*60}\n")

        semaphore = asyncio.Semaphore(self.workers)

        async def run_with_limit(context: ScenarioContext) -> dict:
            async with semaphore:
                # Każdy scenariusz na własnej sesji: równoległe commity
                db_session = Session(bind=self.db.get_bind())
                try:
                    executor = ScenarioExecutor(
                        context=context,
                        db=db_session,
                        suite_run_id=suite_run.id,
                        headless=self.headless,
                    )
                    run = await executor.run()
                    return {
                        'scenario_name': context.scenario_name,
                        'status': run.status.value,
                        'alerts': sum(1 for alert in run.alerts if alert.is_counted),
                    }
                except Exception as e:
                    logger.error(f"Błąd w scenariuszu {context.scenario_name}: {e}")
                    self._write_raw_traceback(context.scenario_name, e)
                    return {'scenario_name': context.scenario_name, 'status': RunStatus.FAILED.value, 'alerts': 0}
                finally:
                    db_session.close()

        tasks = [run_with_limit(c) for c in self.contexts]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        for context, result in zip(self.contexts, results):
            if isinstance(result, BaseException):
                logger.error(f"Exception w scenariuszu {context.scenario_name}: {result}")
                self._write_raw_traceback(context.scenario_name, result)

        self._finalize_suite_run(suite_run, results)

        if self.log_handler:
            logging.getLogger().removeHandler(self.log_handler)
            self.log_handler.close()

        return suite_run

    def _write_raw_traceback(self, scenario_name: str, exception: BaseException):
        if not self.log_file:
            return
        try:
            tb_lines = traceback.format_exception(type(exception), exception, exception.__traceback__)
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write('=' * 80 + '\n')
                f.write(f'ERROR in scenario: {scenario_name}\n')
                f.write('=' * 80 + '\n')
                f.write(''.join(tb_lines))
                f.write('=' * 80 + '\n\n')
        except OSError as e:
            logger.error(f"Nie udało się zapisać tracebacku: {e}")

    def _setup_logging(self):
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        self.log_file = log_dir / f"suite_run_{self.suite_run_id}.log"
        self.log_handler = logging.FileHandler(self.log_file, encoding='utf-8')
        self.log_handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter('%(asctime)s | %(levelname)-8s | %(message)s', datefmt='%H:%M:%S')
        self.log_handler.setFormatter(formatter)
        logging.getLogger().addHandler(self.log_handler)

    def _finalize_suite_run(self, suite_run: SuiteRun, results: list):
        """Liczy success/failed/alerty i ustawia status suite_run."""

        finished = [r for r in results if not isinstance(r, BaseException)]
        success = sum(1 for r in finished if r['status'] == RunStatus.SUCCESS.value)
        failed = len(results) - success
        total_alerts = sum(r['alerts'] for r in finished)

        suite_run.success_scenarios = success
        suite_run.failed_scenarios  = failed
        suite_run.total_alerts      = total_alerts
        suite_run.finished_at       = datetime.now(timezone.utc)

        if failed == 0:
            suite_run.status = SuiteRunStatus.SUCCESS
        elif success == 0:
            suite_run.status = SuiteRunStatus.FAILED
        else:
            suite_run.status = SuiteRunStatus.PARTIAL

        self.db.commit()

        logger.info(f"\n{'='*60}")
        logger.info(f"[SUITE RUN #{suite_run.id}] COMPLETED")
        logger.info(f"Status: {suite_run.status.value.upper()}")
        logger.info(f"Success: {success} | Failed: {failed}")
        logger.info(f"Alerts: {total_alerts}")
        logger.info(f"Duration: {suite_run.duration_seconds}s")
        logger.info(f"{'='*60}\n")
