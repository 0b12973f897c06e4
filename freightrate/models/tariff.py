# freightrate/models/tariff.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from freightrate.db.base import Base, JSONType


class Tariff(Base):
    __tablename__ = "tariffs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(128), nullable=False)

    weight_break_set_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("rating_break_sets.id", ondelete="RESTRICT"), nullable=True
    )
    capacity_break_set_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("rating_break_sets.id", ondelete="RESTRICT"), nullable=True
    )

    # min | max：多个口径同时命中时取哪一个；NULL 时走 DEFAULT_COMPARE_POLICY
    compare_policy: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)

    # 各口径推导配置：
    # {"lf": {"method": "footprint", "round_increment": 0.5, "usable_width_in": 100, ...},
    #  "skid": {"stack_factor": 0.5, "stackable_max_height": 84},
    #  "cube": {"trailer_cube": 4000}}
    meta: Mapped[Dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Tariff id={self.id} name={self.name!r} policy={self.compare_policy}>"
