# freightrate/models/zone_set.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import Boolean, Date, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from freightrate.db.base import Base, JSONType

class ZoneSet(Base):
    """可复用、带版本的分区模板；由 CarrierZoneBinding 绑定到承运商 / 服务。"""

    __tablename__ = "zone_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(512), nullable=False, default="", server_default="")

    selected_zones: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    zone_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true"
    )

    effective_from: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    effective_to: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<ZoneSet id={self.id} name={self.name!r} v{self.version}>"
