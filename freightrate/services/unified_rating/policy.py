# freightrate/services/unified_rating/policy.py
from __future__ import annotations

from typing import Mapping, Optional

from freightrate.api.errors import NoValidRate

from .types import MetricRate, PolicyOutcome


def select_winner(results: Mapping[str, Optional[MetricRate]], policy: Optional[str] = "max") -> PolicyOutcome:
    """
    多口径择一：
    - max（默认，未知值也按 max）：按收入更高的口径计费
    - min：取最低
    空结果 / 无正数 charge 的口径不参与；同价保留先出现者。
    """
    candidates = [(k, r) for k, r in results.items() if r is not None and r.charge > 0]
    if not candidates:
        raise NoValidRate("no valid rates calculated")

    mode = (policy or "max").strip().lower()

    win_key, win = candidates[0]
    for k, r in candidates[1:]:
        if mode == "min":
            if r.charge < win.charge:
                win_key, win = k, r
        elif r.charge > win.charge:
            win_key, win = k, r

    return PolicyOutcome(
        winning_metric=win_key,
        total_rate=win.charge,
        calculation=win.calculation,
        details=win,
    )
