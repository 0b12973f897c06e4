# freightrate/services/unified_rating/types.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, List, Optional

# 计费口径（break set 的 metric） → 结果键
RESULT_KEYS: Dict[str, str] = {
    "weight": "weight",
    "lf": "linearFeet",
    "skid": "skids",
    "cube": "cube",
}


@dataclass
class Package:
    length: float = 0.0  # in
    width: float = 0.0  # in
    height: float = 0.0  # in
    quantity: int = 1
    stackable: bool = False


@dataclass
class Shipment:
    total_weight: Optional[float] = None
    total_cube: Optional[float] = None  # cu ft
    declared_lf: Optional[float] = None
    packages: List[Package] = field(default_factory=list)


@dataclass
class CapacityMetrics:
    # None = 无可用输入（不补 0）
    linear_feet: Optional[float] = None
    skid_count: Optional[int] = None
    cube_utilization: Optional[float] = None


# ---------------------------------------------------------------------------
# 单口径计费结果：按口径分型，公共字段在基类
# ---------------------------------------------------------------------------
@dataclass
class BreakCandidate:
    """单个命中段的计费明细（未择优前）。"""

    break_id: int
    min_metric: float
    max_metric: Optional[float]
    units: float
    rate_value: float
    min_charge: Optional[float]
    charge: float
    flat_band: bool = False


@dataclass
class MetricRate:
    kind: ClassVar[str] = "metric"

    metric: str
    break_id: int
    input_value: float
    rounded_value: float
    units: float
    rate_value: float
    min_charge: Optional[float]
    charge: float
    method: str
    calculation: str
    # 所有有费率的命中段，按 seq 顺序；best 即其中 charge 最低者
    candidates: List[BreakCandidate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["kind"] = self.kind
        return out


@dataclass
class WeightRate(MetricRate):
    kind: ClassVar[str] = "weight"

    unit: str = "lbs"
    extended: bool = False


@dataclass
class LinearFeetRate(MetricRate):
    kind: ClassVar[str] = "linear_feet"


@dataclass
class SkidRate(MetricRate):
    kind: ClassVar[str] = "skid"

    flat_band: bool = False


@dataclass
class CubeRate(MetricRate):
    kind: ClassVar[str] = "cube"


RATE_TYPES = {
    "weight": WeightRate,
    "lf": LinearFeetRate,
    "skid": SkidRate,
    "cube": CubeRate,
}


@dataclass
class PolicyOutcome:
    winning_metric: str
    total_rate: float
    calculation: str
    details: MetricRate


@dataclass
class UnifiedRateOutcome:
    winning_metric: str
    total_rate: float
    calculation: str
    details: MetricRate
    all_results: Dict[str, Optional[MetricRate]]
    tariff_info: Dict[str, Any]
    capacity_metrics: Optional[CapacityMetrics] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winning_metric": self.winning_metric,
            "total_rate": self.total_rate,
            "calculation": self.calculation,
            "details": self.details.to_dict(),
            "all_results": {k: (v.to_dict() if v is not None else None) for k, v in self.all_results.items()},
            "tariff_info": dict(self.tariff_info),
            "capacity_metrics": asdict(self.capacity_metrics) if self.capacity_metrics else None,
        }
