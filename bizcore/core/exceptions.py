"""
统一异常定义

- BizCoreException 及其子类用于请求级错误，由 ExceptionHandlers 转换为 HTTP 响应
- CatalogError 用于模块目录编译失败，属于启动期致命错误
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI, Request
    from fastapi.responses import JSONResponse


class BizCoreException(Exception):
    """请求级异常基类"""

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_type: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_type is not None:
            self.error_type = error_type


class NotFoundException(BizCoreException):
    """资源不存在"""

    status_code = 404
    error_type = "not_found"


class InvalidRequestException(BizCoreException):
    """请求参数或状态不合法"""

    status_code = 400
    error_type = "invalid_request"


class CatalogError(Exception):
    """
    模块目录编译失败

    一次性收集所有问题（重复键、格式错误的条目），而不是遇到第一个就停止
    """

    def __init__(self, problems: Iterable[str]) -> None:
        self.problems = list(problems)
        summary = "; ".join(self.problems)
        super().__init__(f"Invalid module catalog ({len(self.problems)} problem(s)): {summary}")


class ExceptionHandlers:
    """FastAPI 异常处理器"""

    @staticmethod
    async def handle_bizcore_exception(
        request: "Request", exc: BizCoreException
    ) -> "JSONResponse":
        from fastapi.responses import JSONResponse

        from bizcore.core.logger import logger

        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.debug(f"{request.method} {request.url.path} rejected: {exc.message}")

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"type": exc.error_type, "message": exc.message}},
        )

    @classmethod
    def register(cls, app: "FastAPI") -> None:
        handler = cls.handle_bizcore_exception
        app.add_exception_handler(BizCoreException, handler)  # type: ignore[arg-type]
