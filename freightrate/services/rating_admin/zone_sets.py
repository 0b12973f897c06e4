# freightrate/services/rating_admin/zone_sets.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freightrate.api.errors import Conflict, InvalidArgument, NotFound
from freightrate.db.uow import UoW
from freightrate.models.carrier_zone_binding import CarrierZoneBinding
from freightrate.models.region import Region
from freightrate.models.zone_map import ZoneMap
from freightrate.models.zone_set import ZoneSet

from .validators import norm, norm_required

log = logging.getLogger(__name__)


def list_zone_sets(db: Session) -> List[ZoneSet]:
    return db.query(ZoneSet).order_by(ZoneSet.name.asc()).all()


def create_zone_set(
    db: Session,
    *,
    name: str,
    selected_zones: Sequence[str],
    description: Optional[str] = None,
    zone_count: Optional[int] = None,
    enabled: bool = True,
    effective_from: Optional[date] = None,
    effective_to: Optional[date] = None,
) -> ZoneSet:
    n = norm_required(name, "name")
    zones = [z for z in (norm(x) for x in (selected_zones or [])) if z]
    if not zones:
        raise InvalidArgument("at least one zone must be selected")
    if effective_from and effective_to and effective_to < effective_from:
        raise InvalidArgument("effective_to must be >= effective_from")

    if db.query(ZoneSet.id).filter(ZoneSet.name == n).first() is not None:
        raise Conflict(f"zone set {n!r} already exists")

    row = ZoneSet(
        name=n,
        description=norm(description) or "",
        selected_zones=zones,
        zone_count=int(zone_count) if zone_count else len(zones),
        enabled=bool(enabled),
        effective_from=effective_from,
        effective_to=effective_to,
        version=1,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(f"zone set {n!r} already exists") from e
    db.refresh(row)

    log.info("zone set created: id=%s name=%s zones=%d", row.id, row.name, row.zone_count)
    return row


def delete_zone_set(db: Session, zone_set_id: int) -> None:
    """
    仍被承运商绑定引用时拒绝删除（先解绑）；删除时连同其 zone maps 一起删。
    """
    with UoW(db):
        zs = db.get(ZoneSet, int(zone_set_id))
        if zs is None:
            raise NotFound(f"zone set {zone_set_id} not found")

        bound = (
            db.query(CarrierZoneBinding.id)
            .filter(CarrierZoneBinding.zone_set_id == zs.id)
            .first()
        )
        if bound is not None:
            raise Conflict(f"zone set {zs.id} is still bound to a carrier service")

        db.query(ZoneMap).filter(ZoneMap.zone_set_id == zs.id).delete(synchronize_session=False)
        db.delete(zs)

    log.info("zone set deleted: id=%s", zone_set_id)


def list_zone_maps(db: Session, zone_set_id: int) -> List[ZoneMap]:
    if db.get(ZoneSet, int(zone_set_id)) is None:
        raise NotFound(f"zone set {zone_set_id} not found")
    return (
        db.query(ZoneMap)
        .filter(ZoneMap.zone_set_id == int(zone_set_id))
        .order_by(ZoneMap.id.asc())
        .all()
    )


def _validate_zone_map_rows(db: Session, rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    seen: set[tuple[int, int]] = set()
    region_ids: set[int] = set()

    for i, r in enumerate(rows):
        try:
            o = int(r["origin_region_id"])
            d = int(r["dest_region_id"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidArgument(f"row {i + 1}: origin_region_id and dest_region_id are required") from e
        code = norm(r.get("zone_code"))
        if not code:
            raise InvalidArgument(f"row {i + 1}: zone_code is required")
        if (o, d) in seen:
            raise InvalidArgument(f"row {i + 1}: duplicate region pair {o}->{d}")
        seen.add((o, d))
        region_ids.update((o, d))
        out.append({"origin_region_id": o, "dest_region_id": d, "zone_code": code})

    if region_ids:
        found = {rid for (rid,) in db.query(Region.id).filter(Region.id.in_(region_ids)).all()}
        missing = sorted(region_ids - found)
        if missing:
            raise NotFound(f"regions not found: {missing}")
    return out


def replace_zone_maps(db: Session, zone_set_id: int, rows: Sequence[Mapping[str, Any]]) -> int:
    """
    整批替换某 ZoneSet 的全部 zone maps（全有或全无）：
    先整体校验，再在同一事务里删旧插新；任一步失败整体回滚，旧数据不动。
    成功后 ZoneSet.version + 1。
    """
    with UoW(db):
        zs = db.get(ZoneSet, int(zone_set_id))
        if zs is None:
            raise NotFound(f"zone set {zone_set_id} not found")

        clean = _validate_zone_map_rows(db, rows)

        db.query(ZoneMap).filter(ZoneMap.zone_set_id == zs.id).delete(synchronize_session=False)
        db.add_all([ZoneMap(zone_set_id=zs.id, **r) for r in clean])
        zs.version = int(zs.version or 0) + 1
        db.flush()

    log.info("zone maps replaced: zone_set=%s rows=%d", zone_set_id, len(clean))
    return len(clean)
