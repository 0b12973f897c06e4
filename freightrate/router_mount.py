# freightrate/router_mount.py
from __future__ import annotations

from fastapi import FastAPI


def mount_routers(app: FastAPI) -> None:
    # ---------------------------------------------------------------------------
    # routers imports
    # ---------------------------------------------------------------------------
    from freightrate.api.health import router as health_router
    from freightrate.api.routers.rating_config import router as rating_config_router
    from freightrate.api.routers.unified_rates import router as unified_rates_router
    from freightrate.api.routers.zone_resolve import router as zone_resolve_router
    from freightrate.metrics import router as metrics_router

    # 分区 / 计费
    app.include_router(zone_resolve_router)
    app.include_router(unified_rates_router)

    # 配置维护
    app.include_router(rating_config_router)

    # 观测
    app.include_router(metrics_router)
    app.include_router(health_router)
