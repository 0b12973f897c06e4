# freightrate/models/carrier_zone_override.py
from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from freightrate.db.base import Base


class CarrierZoneOverride(Base):
    """承运商级点对点覆盖：同一区域对上永远压过 ZoneMap。"""

    __tablename__ = "carrier_zone_overrides"
    __table_args__ = (
        UniqueConstraint(
            "carrier_id",
            "service_id",
            "origin_region_id",
            "dest_region_id",
            name="uq_czo_carrier_service_pair",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    carrier_id: Mapped[str] = mapped_column(String(64), nullable=False)
    service_id: Mapped[str] = mapped_column(String(64), nullable=False)

    origin_region_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("regions.id", ondelete="RESTRICT"), nullable=False
    )
    dest_region_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("regions.id", ondelete="RESTRICT"), nullable=False
    )

    zone_code: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<CarrierZoneOverride id={self.id} {self.carrier_id}/{self.service_id} "
            f"{self.origin_region_id}->{self.dest_region_id} zone={self.zone_code}>"
        )
