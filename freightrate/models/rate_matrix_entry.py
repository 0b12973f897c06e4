# freightrate/models/rate_matrix_entry.py
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from freightrate.db.base import Base


class RateMatrixEntry(Base):
    __tablename__ = "rate_matrix_entries"
    __table_args__ = (
        Index("ix_rme_lookup", "tariff_id", "break_id", "zone_code", "class_code"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    tariff_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tariffs.id", ondelete="CASCADE"), nullable=False
    )
    break_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("rating_breaks.id", ondelete="CASCADE"), nullable=False
    )

    zone_code: Mapped[str] = mapped_column(String(32), nullable=False)
    # NMFC 货物等级；不分等级的费率为 NULL
    class_code: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)

    rate_value: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)
    min_charge: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)

    # 仅 skid 口径：整段一口价（与件数无关）
    flat_band: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    def __repr__(self) -> str:
        return (
            f"<RateMatrixEntry id={self.id} tariff={self.tariff_id} break={self.break_id} "
            f"zone={self.zone_code} class={self.class_code} rate={self.rate_value}>"
        )
