# tests/conftest.py
from __future__ import annotations

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# ============================================================
# ★★ 关键：在 import freightrate.* 之前固定 DSN ★★
# session.py 在导入时按 settings 建 engine；测试一律走内存 sqlite
# ============================================================
os.environ["FREIGHTRATE_DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.setdefault("FREIGHTRATE_LOG_LEVEL", "WARNING")

from freightrate.db.base import Base, init_models  # noqa: E402
from freightrate.db.deps import get_db  # noqa: E402
from freightrate.main import app  # noqa: E402


# =========================================
# 每用例独立 Engine：StaticPool 保证同一内存库
# =========================================
@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    init_models()
    eng = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(eng)
        eng.dispose()


@pytest.fixture(scope="function")
def db(engine: Engine) -> Generator[Session, None, None]:
    """
    标准 Session：用例里造数只 flush，路由 / 服务层自行 commit。
    """
    maker = sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session)
    sess = maker()
    try:
        yield sess
    finally:
        sess.close()


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    TestClient 与用例共用同一个 Session：用例造的数据路由里立即可见。
    """

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
