# src/transflow/presentation/api/errors.py
"""
把 Transflow 异常映射为 HTTP 响应。

响应体统一为 `{"error": <kind>, "detail": <message>}`。内部错误只返回通用描述，
具体原因写入日志。
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from transflow.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    DatabaseError,
    ForbiddenError,
    InvalidStateError,
    LockAcquisitionError,
    NotFoundError,
    TransflowError,
)

logger = structlog.get_logger(__name__)

_HANDLED = (
    NotFoundError,
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    AuthenticationError,
    DatabaseError,
    LockAcquisitionError,
    ConfigurationError,
    TransflowError,
)


async def transflow_error_handler(request: Request, exc: TransflowError) -> JSONResponse:
    status_code = exc.http_status
    headers = None
    if status_code >= 500:
        logger.error(
            "请求处理失败",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        detail = "服务器内部错误。"
    else:
        logger.info(
            "请求被拒绝",
            path=request.url.path,
            error=exc.code,
            detail=str(exc),
        )
        detail = str(exc)
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": request.app.state.auth_scheme}
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "detail": detail},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    for exc_cls in _HANDLED:
        app.add_exception_handler(exc_cls, transflow_error_handler)
