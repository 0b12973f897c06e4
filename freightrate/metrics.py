# freightrate/metrics.py
from __future__ import annotations

import os

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

# 业务指标
ZONE_RESOLVE = Counter("zone_resolve_total", "Zone resolutions", ["outcome"])
UNIFIED_RATE = Counter("unified_rate_total", "Unified rate calculations", ["outcome", "winning_metric"])
UNIFIED_RATE_LAT = Histogram("unified_rate_seconds", "Unified rate calculation latency (seconds)")

router = APIRouter()


@router.get("/metrics")
def metrics() -> Response:
    """
    单进程直接导出默认 REGISTRY；
    多进程（设置了 PROMETHEUS_MULTIPROC_DIR）时临时建 CollectorRegistry 合并各分片。
    """
    if os.environ.get("PROMETHEUS_MULTIPROC_DIR"):
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        payload = generate_latest(registry)
    else:
        payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)
