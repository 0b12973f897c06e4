# freightrate/models/rating_break.py
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from freightrate.db.base import Base


class RatingBreak(Base):
    __tablename__ = "rating_breaks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    break_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rating_break_sets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # 闭区间 [min_metric, max_metric]；max 为 NULL 视为无上限。
    # 不保证段与段互不重叠，计费侧自行容忍。
    min_metric: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)
    max_metric: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 3), nullable=True)

    seq: Mapped[int] = mapped_column(Integer, nullable=False)

    description: Mapped[str] = mapped_column(String(256), nullable=False, default="", server_default="")

    def __repr__(self) -> str:
        return (
            f"<RatingBreak id={self.id} set={self.break_set_id} "
            f"{self.min_metric}-{self.max_metric} seq={self.seq}>"
        )
