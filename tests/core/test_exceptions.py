"""异常处理器测试"""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace

from bizcore.core.exceptions import (
    CatalogError,
    ExceptionHandlers,
    InvalidRequestException,
    NotFoundException,
)


def _request() -> SimpleNamespace:
    return SimpleNamespace(method="PUT", url=SimpleNamespace(path="/api/x"))


def test_handler_renders_error_body() -> None:
    response = asyncio.run(
        ExceptionHandlers.handle_bizcore_exception(_request(), NotFoundException("missing"))
    )

    assert response.status_code == 404
    assert json.loads(response.body) == {"error": {"type": "not_found", "message": "missing"}}


def test_handler_honours_overrides() -> None:
    exc = InvalidRequestException("bad", status_code=422, error_type="validation")

    response = asyncio.run(ExceptionHandlers.handle_bizcore_exception(_request(), exc))

    assert response.status_code == 422
    assert json.loads(response.body)["error"]["type"] == "validation"


def test_catalog_error_keeps_problems() -> None:
    error = CatalogError(["a", "b"])

    assert error.problems == ["a", "b"]
    assert "2 problem(s)" in str(error)
