"""
Sauce Demo Monitor
==================
Przechodzi ścieżkę zakupową Sauce Demo (login → koszyk → checkout) dla jednego
lub wielu użytkowników równolegle i zapisuje historię runów w bazie.

Użycie:
    python main.py                                   # użytkownik z .env (domyślnie standard_user)
    python main.py --users standard_user,problem_user
    python main.py --workers 4                       # max równoległych przeglądarek
    python main.py --headless                        # bez okna przeglądarki
    python main.py --order                           # dokończ zamówienie (checkout-complete)
    python main.py --products sauce-labs-backpack,sauce-labs-onesie
    python main.py --sort hilo
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from database import SessionLocal, init_db
from scenarios.context import ScenarioContext
from scenarios.suite_executor import SuiteExecutor

logger = logging.getLogger(__name__)


def setup_logging():
    Path("logs").mkdir(exist_ok=True)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(
                f"logs/run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log",
                encoding="utf-8"
            )
        ]
    )


def _value(argv: list[str], flag: str) -> str | None:
    if flag not in argv:
        return None
    idx = argv.index(flag)
    if idx + 1 >= len(argv):
        raise SystemExit(f"Brak wartości dla {flag}")
    return argv[idx + 1]


def _csv(value: str | None) -> list[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


def parse_args(argv: list[str]) -> dict:
    workers = _value(argv, "--workers")
    return {
        'users':    _csv(_value(argv, "--users")),
        'workers':  int(workers) if workers else 1,
        'headless': True if "--headless" in argv else None,
        'order':    "--order" in argv,
        'products': _csv(_value(argv, "--products")),
        'sort':     _value(argv, "--sort"),
    }


def build_contexts(args: dict) -> list[ScenarioContext]:
    """Jeden ScenarioContext na użytkownika: overrides z CLI nadpisują .env."""
    overrides = {}
    if args['headless'] is not None:
        overrides['headless'] = args['headless']
    if args['order']:
        overrides['is_order'] = True
    if args['products']:
        overrides['product_ids'] = args['products']
    if args['sort']:
        overrides['sort_option'] = args['sort']

    base = ScenarioContext.from_env(**overrides)
    if not args['users']:
        return [base]
    return [base.for_user(user) for user in args['users']]


async def run_suite(contexts: list[ScenarioContext], workers: int) -> str:
    """Zwraca status suite_run (success / failed / partial)."""
    db = SessionLocal()
    try:
        executor = SuiteExecutor(
            contexts=contexts,
            workers=workers,
            db=db,
            name=contexts[0].scenario_name.split(":")[0],
        )
        suite_run = await executor.run()
        return suite_run.status.value
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging()
    init_db()

    contexts = build_contexts(args)
    logger.info(f"Użytkownicy: {[c.username for c in contexts]} | Workers: {args['workers']}")

    status = asyncio.run(run_suite(contexts, args["workers"]))
    return 0 if status == "success" else 1


if __name__ == "__main__":
    sys.exit(main())
