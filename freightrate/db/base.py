# freightrate/db/base.py
from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Iterable, Iterator, List, Set

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, configure_mappers

log = logging.getLogger("freightrate.models")

# PG 下落 jsonb；测试 / 本地 sqlite 退化为通用 JSON
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """全局唯一 ORM Base"""

    pass


_INITIALIZED: bool = False  # 防重复初始化


def _iter_model_modules_recursive(pkg_name: str = "freightrate.models") -> Iterator[str]:
    """递归发现 freightrate.models.* 下的所有模块（排除以下划线开头的内部模块）"""
    try:
        pkg = importlib.import_module(pkg_name)
    except ModuleNotFoundError:
        return

    paths = list(getattr(pkg, "__path__", []))
    if not paths:
        return

    for _, name, _ in pkgutil.walk_packages(paths, prefix=pkg_name + "."):
        short = name.rsplit(".", 1)[-1]
        if short.startswith("_"):
            continue
        yield name


def init_models(
    *,
    extra_modules: Iterable[str] | None = None,
    exclude: Iterable[str] | None = None,
    force: bool = False,
) -> None:
    """
    集中导入模型 + 固化关系映射：
      1) 先显式导入区域 / 分区模型（字符串关系目标类必须已注册）
      2) 再递归导入 freightrate.models.* 补齐遗漏
      3) 最后统一 configure_mappers()

    模型导入失败直接抛出：缺表定义时宁可启动失败，也不要带病算价。
    """
    global _INITIALIZED
    if _INITIALIZED and not force:
        log.debug("init_models() called again; already initialized, skipping.")
        return

    ex: Set[str] = set(exclude or [])
    loaded: List[str] = []

    explicit_chain = [
        "freightrate.models.region",
        "freightrate.models.zone_set",
        "freightrate.models.rating_break_set",
        "freightrate.models.tariff",
    ]
    for mod in [m for m in explicit_chain if m not in ex]:
        importlib.import_module(mod)
        loaded.append(mod)

    for mod in _iter_model_modules_recursive("freightrate.models"):
        if mod in ex or mod in loaded:
            continue
        importlib.import_module(mod)
        loaded.append(mod)

    for mod in extra_modules or []:
        if mod in ex or mod in loaded:
            continue
        importlib.import_module(mod)
        loaded.append(mod)

    configure_mappers()
    _INITIALIZED = True
    log.info("ORM models initialized & mappers configured (loaded %d modules)", len(loaded))
