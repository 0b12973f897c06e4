# freightrate/db/session.py
# 同步会话工厂 + FastAPI 依赖（get_db）
from __future__ import annotations

import re
from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from freightrate.core.config import AppSettings, get_settings


# ---- DSN 归一：postgres(+*) 统一到 psycopg3 ----
def normalize_dsn(url: str) -> str:
    url = (url or "").strip()
    # 有些环境会把值写成 '"postgresql+psycopg://..."'，这里统一剥掉两侧引号
    if (url.startswith('"') and url.endswith('"')) or (url.startswith("'") and url.endswith("'")):
        url = url[1:-1].strip()
    if not url:
        raise RuntimeError("FREIGHTRATE_DATABASE_URL is empty")
    if re.match(r"^postgres(?:ql)?\+(?:asyncpg|psycopg2|pg8000)://", url):
        return re.sub(r"^postgres(?:ql)?\+\w+://", "postgresql+psycopg://", url)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def build_engine(settings: AppSettings) -> Engine:
    return create_engine(
        normalize_dsn(settings.DATABASE_URL),
        future=True,
        pool_pre_ping=True,
        echo=settings.SQL_ECHO,
    )


def build_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session)


engine = build_engine(get_settings())
SessionLocal: sessionmaker[Session] = build_sessionmaker(engine)


# ---- FastAPI 依赖 ----
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
