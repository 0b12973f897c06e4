# freightrate/services/unified_rating/calc.py
from __future__ import annotations

import logging
import time
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from freightrate.api.errors import BizError, Internal, InvalidArgument, NotFound
from freightrate.metrics import UNIFIED_RATE, UNIFIED_RATE_LAT
from freightrate.models.tariff import Tariff

from .breaks import calculate_metric_rate
from .capacity import derive_capacity_metrics
from .policy import select_winner
from .types import RESULT_KEYS, CapacityMetrics, MetricRate, Shipment, UnifiedRateOutcome

log = logging.getLogger(__name__)


def _rate_all(
    db: Session,
    tariff: Tariff,
    shipment: Shipment,
    zone_code: str,
    freight_class: Optional[str],
) -> tuple[Dict[str, Optional[MetricRate]], Optional[CapacityMetrics]]:
    results: Dict[str, Optional[MetricRate]] = {}

    # 重量口径
    if tariff.weight_break_set_id is not None and (shipment.total_weight or 0) > 0:
        results[RESULT_KEYS["weight"]] = calculate_metric_rate(
            db,
            tariff.weight_break_set_id,
            "weight",
            float(shipment.total_weight),
            tariff.id,
            zone_code,
            freight_class,
        )

    # 容量口径（LF / skid / cube 共用 capacity break set）
    capacity: Optional[CapacityMetrics] = None
    if tariff.capacity_break_set_id is not None:
        capacity = derive_capacity_metrics(shipment, tariff.meta)
        for metric, value in (
            ("lf", capacity.linear_feet),
            ("skid", capacity.skid_count),
            ("cube", capacity.cube_utilization),
        ):
            if value is None:
                continue
            results[RESULT_KEYS[metric]] = calculate_metric_rate(
                db,
                tariff.capacity_break_set_id,
                metric,
                float(value),
                tariff.id,
                zone_code,
                freight_class,
            )

    return results, capacity


def calculate_unified_rates(
    db: Session,
    tariff_id: int,
    shipment: Shipment,
    zone_code: str,
    freight_class: Optional[str] = None,
    *,
    default_policy: str = "max",
) -> UnifiedRateOutcome:
    """
    统一计费入口：tariff + 货物 + zone → 各口径候选价 → compare_policy 择一。

    任何一环查不到都显式抛错（NotFound / NoValidRate），
    调用方据此转人工报价，这里不兜底 0 元。
    """
    if not tariff_id or shipment is None or not (zone_code or "").strip():
        raise InvalidArgument("tariff_id, shipment and zone_code are required")

    zone = zone_code.strip()
    fc = (freight_class or "").strip() or None
    started = time.perf_counter()

    try:
        tariff = db.get(Tariff, int(tariff_id))
        if tariff is None:
            raise NotFound(f"tariff {tariff_id} not found")

        results, capacity = _rate_all(db, tariff, shipment, zone, fc)
        policy = tariff.compare_policy or default_policy
        outcome = select_winner(results, policy)
    except BizError as e:
        UNIFIED_RATE.labels(e.code, "").inc()
        log.warning("unified rate rejected: %s tariff=%s zone=%s (%s)", e.code, tariff_id, zone, e.message)
        raise
    except SQLAlchemyError as e:
        UNIFIED_RATE.labels(Internal.code, "").inc()
        log.exception("unified rate failed: tariff=%s zone=%s", tariff_id, zone)
        raise Internal(f"unified rate failed: {e}") from e
    finally:
        UNIFIED_RATE_LAT.observe(time.perf_counter() - started)

    UNIFIED_RATE.labels("OK", outcome.winning_metric).inc()
    log.info(
        "unified rate calculated: tariff=%s zone=%s metrics=%s winner=%s total=%.2f",
        tariff.id, zone, sorted(results), outcome.winning_metric, outcome.total_rate,
    )

    return UnifiedRateOutcome(
        winning_metric=outcome.winning_metric,
        total_rate=outcome.total_rate,
        calculation=outcome.calculation,
        details=outcome.details,
        all_results=results,
        tariff_info={"id": tariff.id, "name": tariff.name, "compare_policy": policy},
        capacity_metrics=capacity,
    )
