# freightrate/api/errors.py
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse


class BizError(Exception):
    code = "BIZ_ERROR"
    status = 400

    def __init__(self, message: str, code: str | None = None, status: int | None = None):
        super().__init__(message)
        if code:
            self.code = code
        if status:
            self.status = status
        self.message = message


# ---------------------------------------------------------------------------
# 入参 / 查找
# ---------------------------------------------------------------------------
class InvalidArgument(BizError):
    code = "INVALID_ARGUMENT"
    status = 422


class UnsupportedFormat(InvalidArgument):
    code = "UNSUPPORTED_POSTAL_FORMAT"


class NotFound(BizError):
    code = "NOT_FOUND"
    status = 404


class RegionNotFound(NotFound):
    code = "REGION_NOT_FOUND"


class Conflict(BizError):
    code = "CONFLICT"
    status = 409


# ---------------------------------------------------------------------------
# 分区 / 计费：查不到就报错，绝不兜底出一个默认 zone 或 0 元
# ---------------------------------------------------------------------------
class NoActiveZoneSet(NotFound):
    code = "NO_ACTIVE_ZONE_SET"


class NoZoneMapping(NotFound):
    code = "NO_ZONE_MAPPING"


class NoValidRate(BizError):
    code = "NO_VALID_RATE"
    status = 422


class Internal(BizError):
    code = "INTERNAL"
    status = 500


def biz_error_handler(_: Request, exc: BizError):
    return JSONResponse(
        status_code=exc.status,
        content={"error": {"code": exc.code, "message": exc.message}},
    )
