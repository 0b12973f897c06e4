# freightrate/db/uow.py
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from freightrate.db.session import SessionLocal


@dataclass
class UoW:
    """
    轻量事务边界：正常退出提交，异常回滚。

    批量写（add_breaks / replace_zone_maps）整体走一个 UoW：
    失败不留半截数据，调用方整批重试，不做断点续传。
    传入外部 Session 时同样由 UoW 负责 commit / rollback，但不负责 close。
    """

    db: Session | None = None
    _own: bool = False

    def __enter__(self) -> "UoW":
        if self.db is None:
            self.db = SessionLocal()
            self._own = True
        return self

    def __exit__(self, exc_type, *_) -> None:
        try:
            if exc_type is None:
                self.db.commit()
            else:
                self.db.rollback()
        finally:
            if self._own:
                self.db.close()
