from __future__ import annotations

from .breaks import calculate_metric_rate
from .calc import calculate_unified_rates
from .capacity import derive_capacity_metrics
from .policy import select_winner
from .types import (
    BreakCandidate,
    CapacityMetrics,
    CubeRate,
    LinearFeetRate,
    MetricRate,
    Package,
    Shipment,
    SkidRate,
    UnifiedRateOutcome,
    WeightRate,
)

__all__ = [
    "BreakCandidate",
    "CapacityMetrics",
    "CubeRate",
    "LinearFeetRate",
    "MetricRate",
    "Package",
    "Shipment",
    "SkidRate",
    "UnifiedRateOutcome",
    "WeightRate",
    "calculate_metric_rate",
    "calculate_unified_rates",
    "derive_capacity_metrics",
    "select_winner",
]
