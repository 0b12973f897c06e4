# alembic/env.py

from __future__ import annotations

import os
import re
from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

# Alembic 基本配置
config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# 延迟加载模型（避免导入时机引发的问题）
from freightrate.db.base import Base, init_models  # noqa: E402
from freightrate.db.session import normalize_dsn  # noqa: E402


# ---------------------------------------------------------------------------
# include_object：DB 有而模型里没有的对象不参与 diff（不自动生成 drop）
# ---------------------------------------------------------------------------
def include_object(
    obj: Any, name: str | None, type_: str, reflected: bool, compare_to: Any
) -> bool:
    if reflected and compare_to is None:
        return False
    return True


# ---------------------------------------------------------------------------
# URL 获取：FREIGHTRATE_DATABASE_URL 优先，其次 alembic.ini
# ---------------------------------------------------------------------------
def get_url() -> str:
    url = os.getenv("FREIGHTRATE_DATABASE_URL") or config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError(
            "Alembic 无法确定数据库 URL：\n"
            "请设置 FREIGHTRATE_DATABASE_URL，或在 alembic.ini 里配置 sqlalchemy.url"
        )
    return normalize_dsn(url)


def run_migrations_offline() -> None:
    """
    Offline 模式：不真实连库，只生成 SQL。
    """
    init_models()

    context.configure(
        url=get_url(),
        target_metadata=Base.metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=False,
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Online 模式：真实连库执行迁移。
    """
    init_models()

    url = get_url()
    engine = create_engine(url, poolclass=NullPool, future=True)

    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=Base.metadata,
            compare_type=True,
            compare_server_default=False,
            include_object=include_object,
            # sqlite 不支持 ALTER 约束，走 batch 模式
            render_as_batch=bool(re.match(r"^sqlite", url)),
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
