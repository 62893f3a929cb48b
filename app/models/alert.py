from sqlalchemy import String, Boolean, DateTime, ForeignKey, Text, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.models.base import Base, now_utc
from datetime import datetime
import enum


class AlertType(str, enum.Enum):
    BUG = "bug"
    VERIFY = "verify"


class Alert(Base):
    """
    Alert z reguły biznesowej, nałożony na jedno uruchomienie scenariusza.
    is_counted=False dla alertów informacyjnych (nie psują statusu runu).
    """
    __tablename__ = "alerts"

    id: Mapped[int] = mapped_column(primary_key=True)
    run_id: Mapped[int] = mapped_column(ForeignKey("scenario_runs.id"), nullable=False)

    alert_type: Mapped[AlertType] = mapped_column(Enum(AlertType), nullable=False)
    business_rule: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    is_counted: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)

    run: Mapped["ScenarioRun"] = relationship(back_populates="alerts")

    def __repr__(self) -> str:
        return f"<Alert [{self.alert_type}] {self.business_rule}>"
