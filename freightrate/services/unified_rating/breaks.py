# freightrate/services/unified_rating/breaks.py
from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from freightrate.api.errors import InvalidArgument, NotFound
from freightrate.models.rate_matrix_entry import RateMatrixEntry
from freightrate.models.rating_break import RatingBreak
from freightrate.models.rating_break_set import RatingBreakSet

from .rounding import fmt_num, mul, round_by_meta
from .types import RATE_TYPES, BreakCandidate, MetricRate


def break_applies(b: RatingBreak, rounded_value: float, method: str = "step") -> bool:
    """
    闭区间 [min_metric, max_metric]，max 为 NULL 视为无上限。
    extend：不看下限，不足段起点的按起点计费（见 billable_units），只受上限约束。
    段之间允许重叠，调用方自行在多个命中段里择优。
    """
    if (method or "").lower() != "extend" and rounded_value < float(b.min_metric):
        return False
    if b.max_metric is not None and rounded_value > float(b.max_metric):
        return False
    return True


def billable_units(method: str, rounded_value: float, min_metric: float) -> float:
    # extend：不足段起点按段起点计
    if (method or "").lower() == "extend":
        return max(rounded_value, min_metric)
    return rounded_value


def compute_charge(
    metric: str,
    units: float,
    rate_value: float,
    min_charge: Optional[float],
    flat_band: bool,
) -> float:
    if metric == "skid" and flat_band:
        charge = rate_value
    else:
        charge = mul(units, rate_value)
    return max(charge, min_charge or 0.0)


def describe_calculation(
    metric: str,
    unit: str,
    units: float,
    rate_value: float,
    charge: float,
    flat_band: bool,
    extended: bool = False,
) -> str:
    u = fmt_num(units)
    r = fmt_num(rate_value)
    total = f"${charge:.2f}"

    if metric == "weight":
        if extended:
            return f"{u} {unit} (extended) × ${r}/{unit} = {total}"
        return f"{u} {unit} × ${r}/{unit} = {total}"
    if metric == "lf":
        return f"{u} LF × ${r}/LF = {total}"
    if metric == "skid":
        if flat_band:
            return f"{u} skids (flat band) = {total}"
        return f"{u} skids × ${r}/skid = {total}"
    if metric == "cube":
        return f"{u} cube utilization × ${r}/cube = {total}"
    return f"{u} units × ${r} = {total}"


def _load_entries(
    db: Session,
    tariff_id: int,
    break_ids: List[int],
    zone_code: str,
    freight_class: Optional[str],
) -> Dict[int, RateMatrixEntry]:
    q = db.query(RateMatrixEntry).filter(
        RateMatrixEntry.tariff_id == tariff_id,
        RateMatrixEntry.break_id.in_(break_ids),
        RateMatrixEntry.zone_code == zone_code,
    )
    # 未指定货物等级时不按 class 过滤
    if freight_class:
        q = q.filter(RateMatrixEntry.class_code == freight_class)

    out: Dict[int, RateMatrixEntry] = {}
    for e in q.order_by(RateMatrixEntry.id.asc()).all():
        out.setdefault(e.break_id, e)
    return out


def calculate_metric_rate(
    db: Session,
    break_set_id: int,
    metric: str,
    raw_value: float,
    tariff_id: int,
    zone_code: str,
    freight_class: Optional[str] = None,
) -> Optional[MetricRate]:
    """
    单口径计费：
      1) 按 break set 的取整规则得到 rounded_value
      2) 按 seq 枚举所有命中段（可重叠），逐段取 (tariff, break, zone[, class]) 费率
         extend 方法下，段起点高于 rounded 的段也参与（按起点计费）
      3) units：extend 取 max(rounded, min_metric)，step 取 rounded
      4) charge：skid + flat_band → rate_value；否则 units × rate_value；再抬到 min_charge
      5) 多段命中取 charge 最低者（同价取先出现的段）
    每个有费率的段都记进 candidates。无任何段 / 费率命中返回 None。
    """
    rate_cls = RATE_TYPES.get(metric)
    if rate_cls is None:
        raise InvalidArgument(f"unsupported metric: {metric}")

    bs = db.get(RatingBreakSet, break_set_id)
    if bs is None:
        raise NotFound(f"break set {break_set_id} not found")

    method = (bs.method or "step").lower()
    rounded = round_by_meta(float(raw_value), bs.meta)

    breaks = (
        db.query(RatingBreak)
        .filter(RatingBreak.break_set_id == break_set_id)
        .order_by(RatingBreak.seq.asc(), RatingBreak.id.asc())
        .all()
    )
    applicable = [b for b in breaks if break_applies(b, rounded, method)]
    if not applicable:
        return None

    entries = _load_entries(db, tariff_id, [b.id for b in applicable], zone_code, freight_class)

    candidates: List[BreakCandidate] = []
    best: Optional[BreakCandidate] = None
    for b in applicable:
        entry = entries.get(b.id)
        if entry is None:
            continue

        min_metric = float(b.min_metric)
        rate_value = float(entry.rate_value)
        min_charge = None if entry.min_charge is None else float(entry.min_charge)
        flat_band = bool(entry.flat_band)

        units = billable_units(method, rounded, min_metric)
        c = BreakCandidate(
            break_id=b.id,
            min_metric=min_metric,
            max_metric=None if b.max_metric is None else float(b.max_metric),
            units=units,
            rate_value=rate_value,
            min_charge=min_charge,
            charge=compute_charge(metric, units, rate_value, min_charge, flat_band),
            flat_band=flat_band,
        )
        candidates.append(c)

        if best is None or c.charge < best.charge:
            best = c

    if best is None:
        return None

    extended = best.units > rounded
    extra = {}
    if metric == "weight":
        extra = {"unit": bs.unit, "extended": extended}
    elif metric == "skid":
        extra = {"flat_band": best.flat_band}

    return rate_cls(
        metric=metric,
        break_id=best.break_id,
        input_value=float(raw_value),
        rounded_value=rounded,
        units=best.units,
        rate_value=best.rate_value,
        min_charge=best.min_charge,
        charge=best.charge,
        method=method,
        calculation=describe_calculation(
            metric, bs.unit, best.units, best.rate_value, best.charge, best.flat_band, extended
        ),
        candidates=candidates,
        **extra,
    )
