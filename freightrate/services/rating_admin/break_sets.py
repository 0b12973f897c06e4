# freightrate/services/rating_admin/break_sets.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from freightrate.api.errors import InvalidArgument, NotFound
from freightrate.db.uow import UoW
from freightrate.models.rating_break import RatingBreak
from freightrate.models.rating_break_set import RatingBreakSet

from .validators import (
    BREAK_METHODS,
    BREAK_METRICS,
    norm,
    norm_required,
    normalize_break_set_meta,
    validate_choice,
    validate_number,
)

log = logging.getLogger(__name__)


def create_break_set(
    db: Session,
    *,
    name: str,
    metric: str,
    unit: str,
    method: str,
    meta: Optional[Dict[str, Any]] = None,
) -> RatingBreakSet:
    row = RatingBreakSet(
        name=norm_required(name, "name"),
        metric=validate_choice(metric, "metric", BREAK_METRICS),
        unit=norm_required(unit, "unit").lower(),
        method=validate_choice(method, "method", BREAK_METHODS),
        meta=normalize_break_set_meta(meta),
        enabled=True,
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    log.info("break set created: id=%s %s/%s method=%s", row.id, row.metric, row.unit, row.method)
    return row


def list_break_sets(db: Session, metric: Optional[str] = None) -> List[RatingBreakSet]:
    q = db.query(RatingBreakSet)
    m = norm(metric)
    if m:
        q = q.filter(RatingBreakSet.metric == validate_choice(m, "metric", BREAK_METRICS))
    return q.order_by(RatingBreakSet.name.asc(), RatingBreakSet.id.asc()).all()


def list_breaks(db: Session, break_set_id: int) -> List[RatingBreak]:
    if db.get(RatingBreakSet, int(break_set_id)) is None:
        raise NotFound(f"break set {break_set_id} not found")
    return (
        db.query(RatingBreak)
        .filter(RatingBreak.break_set_id == int(break_set_id))
        .order_by(RatingBreak.seq.asc(), RatingBreak.id.asc())
        .all()
    )


def _validate_break_rows(rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    if not rows:
        raise InvalidArgument("breaks must be a non-empty list")

    out: List[Dict[str, Any]] = []
    for i, r in enumerate(rows):
        label = f"break {i + 1}"
        mn = validate_number(r.get("min_metric"), f"{label}: min_metric")
        if mn < 0:
            raise InvalidArgument(f"{label}: min_metric must be >= 0")
        raw_max = r.get("max_metric")
        mx = None if raw_max in (None, "") else validate_number(raw_max, f"{label}: max_metric")
        if mx is not None and mx < mn:
            raise InvalidArgument(f"{label}: max_metric must be >= min_metric")
        out.append({"min_metric": mn, "max_metric": mx, "description": norm(r.get("description")) or ""})
    return out


def add_breaks(db: Session, break_set_id: int, rows: Sequence[Mapping[str, Any]]) -> List[RatingBreak]:
    """
    批量追加分段（全有或全无）：任一行不合法整批拒绝，不落任何一行。
    seq 接在该 break set 现有最大 seq 之后，按入参顺序递增。
    """
    with UoW(db):
        bs = db.get(RatingBreakSet, int(break_set_id))
        if bs is None:
            raise NotFound(f"break set {break_set_id} not found")

        clean = _validate_break_rows(rows)

        last_seq = (
            db.query(func.max(RatingBreak.seq))
            .filter(RatingBreak.break_set_id == bs.id)
            .scalar()
        ) or 0

        created = [
            RatingBreak(break_set_id=bs.id, seq=int(last_seq) + i + 1, **r)
            for i, r in enumerate(clean)
        ]
        db.add_all(created)
        db.flush()

    log.info("breaks added: break_set=%s count=%d", break_set_id, len(created))
    return created
