# freightrate/models/zone_map.py
from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from freightrate.db.base import Base

class ZoneMap(Base):
    __tablename__ = "zone_maps"
    __table_args__ = (
        UniqueConstraint(
            "zone_set_id", "origin_region_id", "dest_region_id", name="uq_zone_maps_set_pair"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    zone_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("zone_sets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    origin_region_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("regions.id", ondelete="RESTRICT"), nullable=False
    )
    dest_region_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("regions.id", ondelete="RESTRICT"), nullable=False
    )

    zone_code: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<ZoneMap id={self.id} set={self.zone_set_id} "
            f"{self.origin_region_id}->{self.dest_region_id} zone={self.zone_code}>"
        )
