"""Canonical error envelope for all Kanban engine responses.

Standardized structure:
{
  "error": {
    "code": "string",
    "message": "string",
    "http_status": 400,
    "resource_kind": "stage_rule | kanban_card | board_config | null",
    "details": {}
  }
}
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from kanban_engines.common.errors import KanbanError

logger = logging.getLogger(__name__)


class ErrorDetail(BaseModel):
    """Canonical error detail structure."""
    code: str
    message: str
    http_status: int
    resource_kind: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    """Top-level error envelope returned by every endpoint."""
    error: ErrorDetail


def build_error_envelope(
    code: str,
    message: str,
    status_code: int = 400,
    resource_kind: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> ErrorEnvelope:
    """Construct an ErrorEnvelope (without raising).

    Args:
        code: Machine-readable error code (e.g., "kanban.not_found")
        message: Human-readable error message, passed through verbatim
        status_code: HTTP status code (default 400), mirrored as http_status
        resource_kind: The resource type (stage_rule, kanban_card, board_config)
        details: Additional context dict
    """
    error_detail = ErrorDetail(
        code=code,
        message=message,
        http_status=status_code,
        resource_kind=resource_kind,
        details=details or {},
    )
    return ErrorEnvelope(error=error_detail)


def envelope_from_error(exc: KanbanError) -> ErrorEnvelope:
    return build_error_envelope(
        code=exc.code,
        message=exc.message,
        status_code=exc.http_status,
        resource_kind=exc.resource_kind,
        details=exc.details,
    )


# --- Error Handling ---

async def _kanban_error_handler(request: Request, exc: KanbanError):
    envelope = envelope_from_error(exc)
    return JSONResponse(content=envelope.model_dump(), status_code=exc.http_status)


async def _http_exception_handler(request: Request, exc: HTTPException):
    # Normalize existing envelopes if possible
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail:
        return JSONResponse(content=detail, status_code=exc.status_code)

    envelope = build_error_envelope(
        code="http.exception",
        message=str(detail) if detail else "HTTP exception",
        status_code=exc.status_code,
    )
    return JSONResponse(content=envelope.model_dump(), status_code=exc.status_code)


async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [{"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg")} for err in exc.errors()]
    envelope = build_error_envelope(
        code="validation.error",
        message="Validation failed",
        status_code=400,
        details={"errors": errors},
    )
    return JSONResponse(content=envelope.model_dump(), status_code=400)


async def _generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    envelope = build_error_envelope(
        code="internal.error",
        message="Internal server error",
        status_code=500,
    )
    return JSONResponse(content=envelope.model_dump(), status_code=500)


def register_error_handlers(target_app: FastAPI) -> None:
    target_app.add_exception_handler(KanbanError, _kanban_error_handler)
    target_app.add_exception_handler(HTTPException, _http_exception_handler)
    target_app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    target_app.add_exception_handler(Exception, _generic_exception_handler)
