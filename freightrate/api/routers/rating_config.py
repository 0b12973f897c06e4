# freightrate/api/routers/rating_config.py
from __future__ import annotations

from fastapi import APIRouter

from freightrate.api.routers import (
    rating_config_routes_break_sets,
    rating_config_routes_regions,
    rating_config_routes_zone_sets,
)

router = APIRouter(tags=["rating-config"])


def _register_all_routes() -> None:
    rating_config_routes_regions.register(router)
    rating_config_routes_zone_sets.register(router)
    rating_config_routes_break_sets.register(router)


_register_all_routes()

__all__ = ["router"]
