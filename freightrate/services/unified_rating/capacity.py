# freightrate/services/unified_rating/capacity.py
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from freightrate.api.errors import InvalidArgument

from .rounding import apply_rounding
from .types import CapacityMetrics, Package, Shipment

# 53' 拖车标准参数
DEFAULT_USABLE_WIDTH_IN = 100.0
DEFAULT_PACKING_EFF = 0.9
DEFAULT_AVG_PALLET_WIDTH_IN = 40.0
DEFAULT_AVG_PALLET_LENGTH_IN = 48.0
DEFAULT_LF_ROUND_INCREMENT = 0.5
DEFAULT_STACKABLE_MAX_HEIGHT_IN = 84.0
DEFAULT_STACK_FACTOR = 0.5
DEFAULT_TRAILER_CUBE = 4000.0


def _qty(pkg: Package) -> int:
    return int(pkg.quantity or 1)


def footprint_lf(packages: List[Package], cfg: Dict[str, Any]) -> float:
    usable_width = float(cfg.get("usable_width_in") or DEFAULT_USABLE_WIDTH_IN)
    packing_eff = float(cfg.get("packing_eff") or DEFAULT_PACKING_EFF)

    total_sq_in = 0.0
    for p in packages:
        total_sq_in += float(p.length or 0) * float(p.width or 0) * _qty(p)

    return total_sq_in / (usable_width * packing_eff) / 12


def rows_across_lf(packages: List[Package], cfg: Dict[str, Any]) -> float:
    usable_width = float(cfg.get("usable_width_in") or DEFAULT_USABLE_WIDTH_IN)
    pallet_width = float(cfg.get("avg_pallet_width_in") or DEFAULT_AVG_PALLET_WIDTH_IN)
    pallet_length = float(cfg.get("avg_pallet_length_in") or DEFAULT_AVG_PALLET_LENGTH_IN)

    rows_across = math.floor(usable_width / pallet_width)
    if rows_across <= 0:
        raise InvalidArgument(
            f"avg_pallet_width_in={pallet_width} exceeds usable_width_in={usable_width}"
        )

    total_pallets = sum(_qty(p) for p in packages)
    rows_needed = math.ceil(total_pallets / rows_across)
    return rows_needed * pallet_length / 12


def derive_linear_feet(shipment: Shipment, cfg: Dict[str, Any]) -> Optional[float]:
    method = str(cfg.get("method") or "footprint").lower()

    if method == "declared":
        raw = float(shipment.declared_lf or 0)
    elif not shipment.packages:
        return None
    elif method == "footprint":
        raw = footprint_lf(shipment.packages, cfg)
    elif method == "rows_across":
        raw = rows_across_lf(shipment.packages, cfg)
    else:
        raise InvalidArgument(f"unsupported linear feet method: {method}")

    lf = apply_rounding(raw, cfg.get("round_increment") or DEFAULT_LF_ROUND_INCREMENT, "up")
    return lf if lf > 0 else None


def derive_skid_count(shipment: Shipment, cfg: Dict[str, Any]) -> Optional[int]:
    if not shipment.packages:
        return None

    max_height = float(cfg.get("stackable_max_height") or DEFAULT_STACKABLE_MAX_HEIGHT_IN)
    stack_factor = float(cfg.get("stack_factor") or DEFAULT_STACK_FACTOR)

    total = 0.0
    for p in shipment.packages:
        if p.stackable and float(p.height or 0) <= max_height:
            total += _qty(p) * stack_factor
        else:
            total += _qty(p)

    skids = int(math.ceil(total))
    return skids if skids > 0 else None


def derive_cube_utilization(shipment: Shipment, cfg: Dict[str, Any]) -> Optional[float]:
    total_cube = float(shipment.total_cube or 0)
    if total_cube <= 0:
        return None
    trailer_cube = float(cfg.get("trailer_cube") or DEFAULT_TRAILER_CUBE)
    return total_cube / trailer_cube


def derive_capacity_metrics(shipment: Shipment, tariff_meta: Optional[Dict[str, Any]]) -> CapacityMetrics:
    """
    tariff.meta 示例：
      {"lf": {"method": "rows_across", "round_increment": 0.5},
       "skid": {"stack_factor": 0.5, "stackable_max_height": 84},
       "cube": {"trailer_cube": 4000}}
    三个口径互相独立；无输入的口径返回 None。
    """
    meta = tariff_meta or {}
    return CapacityMetrics(
        linear_feet=derive_linear_feet(shipment, meta.get("lf") or {}),
        skid_count=derive_skid_count(shipment, meta.get("skid") or {}),
        cube_utilization=derive_cube_utilization(shipment, meta.get("cube") or {}),
    )
