# freightrate/models/__init__.py
"""
统一导出 ORM 模型。
"""

from importlib import import_module


def _export(module_name: str, class_name: str) -> None:
    module = import_module(module_name)
    globals()[class_name] = getattr(module, class_name)


MODEL_SPECS = [
    # -------- 区域 / 分区 --------
    ("freightrate.models.region", "Region"),
    ("freightrate.models.zone_set", "ZoneSet"),
    ("freightrate.models.zone_map", "ZoneMap"),
    ("freightrate.models.carrier_zone_binding", "CarrierZoneBinding"),
    ("freightrate.models.carrier_zone_override", "CarrierZoneOverride"),
    # -------- 费率 --------
    ("freightrate.models.rating_break_set", "RatingBreakSet"),
    ("freightrate.models.rating_break", "RatingBreak"),
    ("freightrate.models.tariff", "Tariff"),
    ("freightrate.models.rate_matrix_entry", "RateMatrixEntry"),
]

for _mod, _cls in MODEL_SPECS:
    _export(_mod, _cls)

__all__ = [cls for _, cls in MODEL_SPECS]
