# freightrate/services/rating_admin/regions.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freightrate.api.errors import Conflict, NotFound
from freightrate.models.region import Region

from .validators import norm, norm_required, validate_region_type

log = logging.getLogger(__name__)


def list_regions(db: Session, *, region_type: Optional[str] = None) -> List[Region]:
    q = db.query(Region)
    if norm(region_type):
        q = q.filter(Region.type == validate_region_type(region_type))
    return q.order_by(Region.type.asc(), Region.code.asc()).all()


def create_region(
    db: Session,
    *,
    type: str,
    code: str,
    name: str,
    parent_region_id: Optional[int] = None,
    patterns: Optional[List[str]] = None,
    enabled: bool = True,
    metadata: Optional[Dict[str, Any]] = None,
) -> Region:
    """
    (type, code) 唯一：type 统一小写、code 统一大写后再判重。
    """
    t = validate_region_type(type)
    c = norm_required(code, "code").upper()
    n = norm_required(name, "name")

    if parent_region_id is not None and db.get(Region, int(parent_region_id)) is None:
        raise NotFound(f"parent region {parent_region_id} not found")

    dup = db.query(Region.id).filter(Region.type == t, Region.code == c).first()
    if dup is not None:
        raise Conflict(f"region {t}:{c} already exists")

    row = Region(
        type=t,
        code=c,
        name=n,
        parent_region_id=None if parent_region_id is None else int(parent_region_id),
        patterns=list(patterns or []),
        enabled=bool(enabled),
        metadata_json=dict(metadata or {}),
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(f"region {t}:{c} already exists") from e
    db.refresh(row)

    log.info("region created: id=%s %s:%s", row.id, row.type, row.code)
    return row
