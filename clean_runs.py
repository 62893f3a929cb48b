"""
Clean Runs: usuwa historię runów (suite_runs, scenario_runs, snapshoty, alerty),
a domyślnie także logi i screenshoty.

Użycie:
    python clean_runs.py              # interaktywne potwierdzenie
    python clean_runs.py --force      # bez pytania
    python clean_runs.py --keep-logs  # nie usuwaj logów ani screenshotów
"""

import shutil
import sys
from pathlib import Path

from sqlalchemy.orm import Session

from database import SessionLocal
from app.models.alert import Alert
from app.models.basket_snapshot import BasketSnapshot
from app.models.run import ScenarioRun
from app.models.suite_run import SuiteRun


def delete_runs(db: Session) -> dict[str, int]:
    """Kasuje rekordy od zależnych do głównych. Commit po stronie wywołującego."""
    counts = {}
    counts['basket_snapshots'] = db.query(BasketSnapshot).delete()
    counts['alerts'] = db.query(Alert).delete()
    counts['scenario_runs'] = db.query(ScenarioRun).delete()
    counts['suite_runs'] = db.query(SuiteRun).delete()
    return counts


def delete_artifacts(logs_dir: Path = Path("logs"), screenshots_dir: Path = Path("screenshots")) -> int:
    removed = 0
    if logs_dir.exists():
        for log_file in logs_dir.glob("*.log"):
            log_file.unlink()
            removed += 1
    if screenshots_dir.exists():
        shutil.rmtree(screenshots_dir)
    return removed


def clean_runs(force: bool = False, keep_logs: bool = False):
    if not force:
        print("⚠️  UWAGA: To usunie całą historię runów!")
        confirm = input("Czy kontynuować? (yes/no): ")
        if confirm.lower() not in ['yes', 'y']:
            print("Anulowano.")
            return

    db = SessionLocal()
    try:
        print("\n🗑️  Usuwanie runów...")
        counts = delete_runs(db)
        db.commit()

        print("\n📊 Usunięte rekordy:")
        for table, count in counts.items():
            print(f"   {table}: {count}")

        if not keep_logs:
            removed = delete_artifacts()
            print(f"\n🗑️  Usunięto {removed} plików logów i katalog screenshots/")

        print("\n✅ Runy wyczyszczone!")

    except Exception as e:
        db.rollback()
        print(f"\n❌ Błąd: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    force = "--force" in sys.argv or "-f" in sys.argv
    keep_logs = "--keep-logs" in sys.argv

    clean_runs(force=force, keep_logs=keep_logs)
