from sqlalchemy import String, DateTime, ForeignKey, Integer, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.models.base import Base, now_utc
from datetime import datetime
import enum


class RunStatus(str, enum.Enum):
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class ScenarioRun(Base):
    """
    Jedno przejście scenariusza dla jednego użytkownika.
    Pojedynczy run z CLI też dostaje suite_run (jednoelementowy).
    """
    __tablename__ = "scenario_runs"

    id: Mapped[int] = mapped_column(primary_key=True)
    suite_run_id: Mapped[int | None] = mapped_column(ForeignKey("suite_runs.id"))

    scenario_name: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(100), nullable=False)

    status: Mapped[RunStatus] = mapped_column(
        Enum(RunStatus), default=RunStatus.RUNNING, nullable=False
    )
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Wyniki
    stopped_at: Mapped[str | None] = mapped_column(String(50))
    product_count: Mapped[int | None] = mapped_column(Integer)
    screenshot_url: Mapped[str | None] = mapped_column(String(1000))

    # Relacje
    suite_run: Mapped["SuiteRun"] = relationship(back_populates="scenario_runs")
    basket_snapshots: Mapped[list["BasketSnapshot"]] = relationship(
        back_populates="run", cascade="all, delete-orphan"
    )
    alerts: Mapped[list["Alert"]] = relationship(
        back_populates="run", cascade="all, delete-orphan"
    )

    @property
    def duration_seconds(self) -> int | None:
        if self.finished_at and self.started_at:
            return int((self.finished_at - self.started_at).total_seconds())
        return None

    def __repr__(self) -> str:
        return f"<ScenarioRun id={self.id} user={self.username} status={self.status}>"
