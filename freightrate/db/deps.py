# freightrate/db/deps.py
"""
统一数据库依赖（薄转发到 freightrate.db.session）：
- get_db → 同步 Session（yield）

测试通过 app.dependency_overrides[get_db] 替换为 sqlite 会话。
"""

from __future__ import annotations

from typing import Generator

from sqlalchemy.orm import Session

from freightrate.db.session import get_db as _get_db


def get_db() -> Generator[Session, None, None]:
    """
    用法：def endpoint(db: Session = Depends(get_db)): ...
    """
    yield from _get_db()
