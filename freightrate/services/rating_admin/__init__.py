from __future__ import annotations

from .break_sets import add_breaks, create_break_set, list_break_sets, list_breaks
from .regions import create_region, list_regions
from .zone_sets import (
    create_zone_set,
    delete_zone_set,
    list_zone_maps,
    list_zone_sets,
    replace_zone_maps,
)

__all__ = [
    "add_breaks",
    "create_break_set",
    "create_region",
    "create_zone_set",
    "delete_zone_set",
    "list_break_sets",
    "list_breaks",
    "list_regions",
    "list_zone_maps",
    "list_zone_sets",
    "replace_zone_maps",
]
