# freightrate/api/deps.py
from __future__ import annotations

from fastapi import Request

from freightrate.core.config import AppSettings, get_settings


def get_app_settings(request: Request) -> AppSettings:
    """create_app 时注入到 app.state.settings；未注入时退回进程级单例。"""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()
