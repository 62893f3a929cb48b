"""
Alert Engine: zbiera alerty jednego runu i zapisuje je do bazy.

Alerty typu "verify" są zapisywane, ale nie psują statusu runu (is_counted=False).
"""

import logging
from sqlalchemy.orm import Session

from app.models.alert import Alert, AlertType

logger = logging.getLogger(__name__)


class AlertEngine:
    """Zbiera alerty podczas wykonywania scenariusza."""

    def __init__(self, run_id: int, db: Session):
        self.run_id = run_id
        self.db = db
        self.alerts: list[Alert] = []

    def add_alert(self, business_rule: str, description: str | None = None, alert_type: str = "bug"):
        """
        Args:
            business_rule: kod reguły (np. "CART_BADGE_MISMATCH")
            description: szczegóły (np. oczekiwane vs faktyczne)
            alert_type: "bug" | "verify"
        """
        try:
            kind = AlertType(alert_type)
        except ValueError:
            logger.warning(f"Nieznany typ alertu '{alert_type}' dla {business_rule} — traktuję jako bug")
            kind = AlertType.BUG

        alert = Alert(
            run_id=self.run_id,
            business_rule=business_rule,
            alert_type=kind,
            description=description,
            is_counted=kind == AlertType.BUG,
        )
        self.alerts.append(alert)
        logger.info(f"Alert dodany: {business_rule} [{kind.value}]")

    def counted_alerts(self) -> int:
        return sum(1 for alert in self.alerts if alert.is_counted)

    def save_all(self):
        if not self.alerts:
            logger.debug("Brak alertów do zapisania")
            return

        self.db.add_all(self.alerts)
        self.db.flush()

        logger.info(f"Zapisano {len(self.alerts)} alertów")
