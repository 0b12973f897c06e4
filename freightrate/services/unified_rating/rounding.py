# freightrate/services/unified_rating/rounding.py
from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

_MODES = {
    "up": ROUND_CEILING,
    "down": ROUND_FLOOR,
    "nearest": ROUND_HALF_UP,
}


def _dec(v: Any) -> Decimal:
    # 走 str 再转 Decimal，0.1 之类的步长不带二进制误差
    return Decimal(str(float(v)))


def apply_rounding(value: float, increment: Optional[float] = 1, direction: Optional[str] = "up") -> float:
    """
    按步长取整（十进制计算，结果是步长的整倍数）：
      up      → ceil(v / inc) * inc
      down    → floor(v / inc) * inc
      nearest → 四舍五入（.5 向上进位，不走银行家舍入）
    其它方向值原样返回。
    """
    inc = _dec(increment or 1)
    if inc <= 0:
        inc = Decimal(1)

    mode = _MODES.get((direction or "up").strip().lower())
    if mode is None:
        return float(value)

    q = (_dec(value) / inc).to_integral_value(rounding=mode)
    return float(q * inc)


def mul(a: float, b: float) -> float:
    """十进制乘法：units × rate 不带浮点尾巴。"""
    return float(_dec(a) * _dec(b))


def round_by_meta(value: float, meta: Optional[Dict[str, Any]]) -> float:
    """break set meta = {"rounding_increment": 500, "rounding_direction": "up"}"""
    m = meta or {}
    return apply_rounding(value, m.get("rounding_increment") or 1, m.get("rounding_direction") or "up")


def fmt_num(v: float) -> str:
    f = float(v)
    if f.is_integer():
        return str(int(f))
    return str(f)
