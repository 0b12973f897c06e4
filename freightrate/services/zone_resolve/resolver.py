# freightrate/services/zone_resolve/resolver.py
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from freightrate.api.errors import BizError, Internal, InvalidArgument, NoActiveZoneSet, NoZoneMapping
from freightrate.metrics import ZONE_RESOLVE
from freightrate.models.region import Region

from .arena import RegionArena
from .canonical import canonicalize
from .lookups import get_active_zone_set, load_overrides, load_zone_maps
from .types import REGION_LEVEL, ZoneResolution, _s, _today

log = logging.getLogger(__name__)


def _level(r: Region) -> int:
    return REGION_LEVEL.get((r.type or "").lower(), REGION_LEVEL["country"])


def walk_pairs(
    origin_chain: Sequence[Region],
    dest_chain: Sequence[Region],
) -> Iterator[Tuple[Region, Region]]:
    """
    兜底上卷顺序：
    - 先给出原始 (origin, dest)
    - 未命中时只上卷一侧：更细的一侧先卷；同级先卷 dest
    - 一侧已到根则只卷另一侧；两侧都到根即结束
    层级深度 ≤ 4，天然有界。
    """
    oi, di = 0, 0
    while True:
        o, d = origin_chain[oi], dest_chain[di]
        yield o, d

        can_o = oi + 1 < len(origin_chain)
        can_d = di + 1 < len(dest_chain)
        if not can_o and not can_d:
            return
        if can_o and can_d:
            if _level(o) < _level(d):
                oi += 1
            else:
                di += 1
        elif can_o:
            oi += 1
        else:
            di += 1


def cache_key_for(
    carrier_id: str,
    service_id: str,
    zone_set_id: int,
    origin_region_id: int,
    dest_region_id: int,
    ship_date: date,
) -> str:
    # 按月分桶：费率极少月中变动，换更高命中率
    return f"{carrier_id}|{service_id}|{zone_set_id}|{origin_region_id}|{dest_region_id}|{ship_date:%Y-%m}"


def _resolve(
    db: Session,
    carrier_id: str,
    service_id: str,
    origin_postal: str,
    dest_postal: str,
    ship_date: date,
) -> ZoneResolution:
    origin = canonicalize(db, origin_postal)
    dest = canonicalize(db, dest_postal)

    active = get_active_zone_set(db, carrier_id, service_id, ship_date)
    if active is None:
        raise NoActiveZoneSet(
            f"no active zone set for carrier={carrier_id} service={service_id} on {ship_date.isoformat()}"
        )
    binding, zone_set = active

    reasons: List[str] = [
        f"origin: {origin.type}:{origin.code} (region={origin.id})",
        f"dest: {dest.type}:{dest.code} (region={dest.id})",
        f"zone_set: {zone_set.name} v{zone_set.version} (binding={binding.id} priority={binding.priority})",
    ]

    arena = RegionArena(db, seed=[origin, dest])
    o_chain = arena.chain(origin)
    d_chain = arena.chain(dest)

    o_ids = [r.id for r in o_chain]
    d_ids = [r.id for r in d_chain]
    overrides: Dict[Tuple[int, int], str] = load_overrides(db, carrier_id, service_id, o_ids, d_ids)
    maps: Dict[Tuple[int, int], str] = load_zone_maps(db, zone_set.id, o_ids, d_ids)

    cache_key = cache_key_for(carrier_id, service_id, zone_set.id, origin.id, dest.id, ship_date)

    for step, (o, d) in enumerate(walk_pairs(o_chain, d_chain)):
        pair = (o.id, d.id)
        via: Optional[str] = None
        zone_code: Optional[str] = None

        if pair in overrides:
            via, zone_code = "override", overrides[pair]
        elif pair in maps:
            via, zone_code = "zone_map", maps[pair]

        if zone_code is None:
            continue

        label = "exact" if step == 0 else f"fallback step={step}"
        reasons.append(f"zone_match: {via} {o.type}:{o.code} -> {d.type}:{d.code} ({label}) zone={zone_code}")
        return ZoneResolution(
            zone_code=zone_code,
            origin_region=origin,
            dest_region=dest,
            zone_set=zone_set,
            cache_key=cache_key,
            matched_via=via,
            matched_origin_region_id=o.id,
            matched_dest_region_id=d.id,
            reasons=reasons,
        )

    raise NoZoneMapping(
        f"no zone mapping for {origin.type}:{origin.code} -> {dest.type}:{dest.code} "
        f"in zone set {zone_set.name!r} (carrier={carrier_id} service={service_id})"
    )


def resolve_zone(
    db: Session,
    carrier_id: str,
    service_id: str,
    origin_postal: str,
    dest_postal: str,
    ship_date: Optional[date] = None,
) -> ZoneResolution:
    """
    承运商 + 服务 + 起止邮编 + 日期 → zone code。

    优先级（每一层都先 override 再 zone_map），全部落空抛 NoZoneMapping；
    不返回任何默认 / 伪造的 zone。
    """
    cid = _s(carrier_id)
    sid = _s(service_id)
    if not cid or not sid or not _s(origin_postal) or not _s(dest_postal):
        raise InvalidArgument("carrier_id, service_id, origin_postal and dest_postal are required")

    d = ship_date or _today()

    try:
        res = _resolve(db, cid, sid, origin_postal, dest_postal, d)
    except BizError as e:
        ZONE_RESOLVE.labels(e.code).inc()
        log.warning(
            "zone resolve rejected: %s carrier=%s service=%s origin=%s dest=%s",
            e.code, cid, sid, origin_postal, dest_postal,
        )
        raise
    except SQLAlchemyError as e:
        ZONE_RESOLVE.labels(Internal.code).inc()
        log.exception("zone resolve failed: carrier=%s service=%s", cid, sid)
        raise Internal(f"zone resolve failed: {e}") from e

    ZONE_RESOLVE.labels("OK").inc()
    log.info(
        "zone resolved: zone=%s via=%s origin=%s dest=%s zone_set=%s",
        res.zone_code, res.matched_via, res.origin_region.code, res.dest_region.code, res.zone_set.id,
    )
    return res
