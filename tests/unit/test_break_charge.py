# tests/unit/test_break_charge.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from freightrate.services.unified_rating.breaks import (
    billable_units,
    break_applies,
    compute_charge,
    describe_calculation,
)


@dataclass
class DummyBreak:
    min_metric: float
    max_metric: Optional[float] = None


def test_break_range_is_closed():
    b = DummyBreak(500, 999)
    assert break_applies(b, 500)
    assert break_applies(b, 999)
    assert not break_applies(b, 499)
    assert not break_applies(b, 1000)


def test_break_without_max_is_open_ended():
    assert break_applies(DummyBreak(1000, None), 10_000_000)


def test_extend_break_applies_below_minimum():
    b = DummyBreak(1000, None)
    assert break_applies(b, 800, "extend")
    assert not break_applies(b, 800, "step")
    # 上限仍然生效
    assert not break_applies(DummyBreak(0, 999), 1200, "extend")


def test_extend_bills_at_least_break_minimum():
    assert billable_units("extend", 800, 1000) == 1000
    assert billable_units("extend", 1200, 1000) == 1200


def test_step_bills_rounded_value():
    assert billable_units("step", 800, 1000) == 800


def test_skid_flat_band_charge_is_rate_value():
    assert compute_charge("skid", 3, 350, None, True) == 350
    assert compute_charge("skid", 3, 100, None, False) == 300


def test_flat_band_ignored_for_other_metrics():
    assert compute_charge("lf", 4, 50, None, True) == 200


def test_min_charge_lifts_charge():
    assert compute_charge("weight", 100, 0.5, 75, False) == 75
    assert compute_charge("weight", 1000, 0.5, 75, False) == 500


def test_charge_has_no_float_tail():
    assert compute_charge("cube", 0.3, 1000, None, False) == 300.0
    assert compute_charge("weight", 3, 0.1, None, False) == 0.3


def test_describe_calculation_shapes():
    assert describe_calculation("skid", "skid", 3, 350, 350, True) == "3 skids (flat band) = $350.00"
    assert describe_calculation("weight", "lbs", 1500, 0.2, 300, False) == "1500 lbs × $0.2/lbs = $300.00"
    assert describe_calculation("weight", "lbs", 1000, 0.2, 200, False, extended=True) == (
        "1000 lbs (extended) × $0.2/lbs = $200.00"
    )
    assert describe_calculation("lf", "ft", 12, 25, 300, False) == "12 LF × $25/LF = $300.00"


def test_extended_label_only_when_units_lifted():
    assert describe_calculation("weight", "lbs", 1200, 0.2, 240, False, extended=False) == (
        "1200 lbs × $0.2/lbs = $240.00"
    )
