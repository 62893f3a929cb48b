from sqlalchemy import String, DateTime, ForeignKey, Integer, JSON, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.models.base import Base, now_utc
from datetime import datetime
from decimal import Decimal


class BasketSnapshot(Base):
    """
    Stan koszyka na danym etapie runu: po jednym snapshocie na etap.

    Etapy: inventory / cart / overview / complete
    """
    __tablename__ = "basket_snapshots"

    id: Mapped[int] = mapped_column(primary_key=True)
    run_id: Mapped[int] = mapped_column(ForeignKey("scenario_runs.id"), nullable=False)

    stage: Mapped[str] = mapped_column(String(50), nullable=False)
    cart_count: Mapped[int | None] = mapped_column(Integer)
    subtotal: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    tax: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    total_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    raw_data: Mapped[dict | None] = mapped_column(JSON)  # pozycje koszyka + screenshot
    captured_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)

    run: Mapped["ScenarioRun"] = relationship(back_populates="basket_snapshots")

    def __repr__(self) -> str:
        return f"<BasketSnapshot run={self.run_id} stage={self.stage}>"
