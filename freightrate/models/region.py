# freightrate/models/region.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from freightrate.db.base import Base, JSONType

# 由细到粗：city → fsa/zip3 → state_province → country
REGION_TYPES = ("country", "state_province", "fsa", "zip3", "city")


class Region(Base):
    __tablename__ = "regions"
    __table_args__ = (UniqueConstraint("type", "code", name="uq_regions_type_code"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    type: Mapped[str] = mapped_column(String(32), nullable=False)
    code: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)

    # 父链指向 country，例如 ON → CA；不建 relationship，统一走 RegionArena 按 id 取
    parent_region_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("regions.id", ondelete="RESTRICT"),
        nullable=True,
    )

    # 匹配用正则（维护端使用，解析路径不读）
    patterns: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)

    enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true"
    )

    metadata_json: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Region id={self.id} {self.type}:{self.code} parent={self.parent_region_id}>"
