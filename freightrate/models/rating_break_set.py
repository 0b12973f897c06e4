# freightrate/models/rating_break_set.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from freightrate.db.base import Base, JSONType

BREAK_METRICS = ("weight", "lf", "skid", "cube")
BREAK_METHODS = ("step", "extend")
ROUNDING_DIRECTIONS = ("up", "down", "nearest")


class RatingBreakSet(Base):
    __tablename__ = "rating_break_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(128), nullable=False)

    # weight | lf | skid | cube
    metric: Mapped[str] = mapped_column(String(16), nullable=False)
    unit: Mapped[str] = mapped_column(String(16), nullable=False)

    # =========================================================
    # method:
    #   - step   : 按取整后的实际量计费
    #   - extend : 不足段起点按段起点计费（units = max(rounded, min_metric)）
    # =========================================================
    method: Mapped[str] = mapped_column(String(16), nullable=False, server_default="step")

    # {"rounding_increment": 1, "rounding_direction": "up"}
    meta: Mapped[Dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<RatingBreakSet id={self.id} {self.metric}/{self.unit} method={self.method}>"
