# freightrate/models/carrier_zone_binding.py
from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from freightrate.db.base import Base


class CarrierZoneBinding(Base):
    """
    承运商 + 服务 在某日期区间内使用哪套 ZoneSet。
    区间两端闭合；多条命中时 priority 大者胜。
    """

    __tablename__ = "carrier_zone_bindings"
    __table_args__ = (Index("ix_czb_carrier_service", "carrier_id", "service_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    carrier_id: Mapped[str] = mapped_column(String(64), nullable=False)
    service_id: Mapped[str] = mapped_column(String(64), nullable=False)

    zone_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("zone_sets.id", ondelete="RESTRICT"),
        nullable=False,
    )

    effective_from: Mapped[date] = mapped_column(Date, nullable=False)
    effective_to: Mapped[date] = mapped_column(Date, nullable=False)

    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    def __repr__(self) -> str:
        return (
            f"<CarrierZoneBinding id={self.id} {self.carrier_id}/{self.service_id} "
            f"set={self.zone_set_id} p={self.priority}>"
        )
