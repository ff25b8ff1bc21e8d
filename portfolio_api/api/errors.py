"""RFC 7807 Problem Details error response formatting"""

import logging
from typing import Optional, Dict, List
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from portfolio_api.services.media_storage import MediaStorageError
from portfolio_api.services.portfolio_service import (
    InvalidRequestError,
    ResourceConflictError,
    ResourceNotFoundError,
)
from portfolio_api.services.record_store import RecordStoreError

logger = logging.getLogger(__name__)

ERROR_TYPE_BASE = "/errors"


class ValidationErrorDetail(BaseModel):
    """One rejected request field"""
    field: str
    message: str


class ProblemDetail(BaseModel):
    """Error body returned by every failing endpoint (RFC 7807)"""
    type: str = Field(..., description="Problem type path, e.g. /errors/not_found")
    title: str
    status: int
    detail: str = Field(..., description="What went wrong for this request")
    instance: Optional[str] = Field(None, description="Request path")
    errors: Optional[List[ValidationErrorDetail]] = Field(None, description="Per-field problems, validation failures only")


def problem_content(
    status_code: int,
    title: str,
    detail: str,
    error_type: Optional[str] = None,
    instance: Optional[str] = None,
    errors: Optional[List[Dict[str, str]]] = None,
) -> Dict:
    """
    Build an RFC 7807 problem document

    Args:
        status_code: HTTP status code
        title: Short error title
        detail: Detailed error message
        error_type: Error type slug (defaults to one derived from the status code)
        instance: Request path or identifier
        errors: List of validation errors with field and message

    Returns:
        Problem document dictionary
    """
    error_type_map = {
        400: "validation_error",
        401: "unauthorized",
        404: "not_found",
        409: "conflict",
        500: "internal_server_error",
        502: "bad_gateway",
    }

    if not error_type:
        error_type = error_type_map.get(status_code, "error")

    problem = {
        "type": f"{ERROR_TYPE_BASE}/{error_type}",
        "title": title,
        "status": status_code,
        "detail": detail,
    }

    if instance:
        problem["instance"] = instance

    if errors:
        problem["errors"] = errors

    return problem


def create_error_response(
    status_code: int,
    title: str,
    detail: str,
    error_type: Optional[str] = None,
    instance: Optional[str] = None,
    errors: Optional[List[Dict[str, str]]] = None,
) -> JSONResponse:
    """Create an RFC 7807 compliant error response"""
    return JSONResponse(
        status_code=status_code,
        content=problem_content(status_code, title, detail, error_type, instance, errors),
    )


def _field_name(location: tuple) -> str:
    parts = [str(part) for part in location if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


async def _not_found_handler(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    return create_error_response(
        status_code=status.HTTP_404_NOT_FOUND,
        title="Not Found",
        detail=str(exc),
        instance=request.url.path,
    )


async def _conflict_handler(request: Request, exc: ResourceConflictError) -> JSONResponse:
    return create_error_response(
        status_code=status.HTTP_409_CONFLICT,
        title="Conflict",
        detail=str(exc),
        instance=request.url.path,
    )


async def _invalid_request_handler(request: Request, exc: InvalidRequestError) -> JSONResponse:
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        title="Validation Error",
        detail=str(exc),
        instance=request.url.path,
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_name(tuple(error.get("loc", ()))), "message": error.get("msg", "Invalid value")}
        for error in exc.errors()
    ]
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        title="Validation Error",
        detail="Validation failed",
        instance=request.url.path,
        errors=errors,
    )


async def _media_storage_handler(request: Request, exc: MediaStorageError) -> JSONResponse:
    logger.error(f"Media host failure on {request.method} {request.url.path}: {exc}")
    return create_error_response(
        status_code=status.HTTP_502_BAD_GATEWAY,
        title="Bad Gateway",
        detail=str(exc),
        instance=request.url.path,
    )


async def _record_store_handler(request: Request, exc: RecordStoreError) -> JSONResponse:
    logger.error(f"Record store failure on {request.method} {request.url.path}: {exc}")
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        title="Internal Server Error",
        detail="Stored data could not be read",
        instance=request.url.path,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map service exceptions to problem responses"""
    app.add_exception_handler(ResourceNotFoundError, _not_found_handler)
    app.add_exception_handler(ResourceConflictError, _conflict_handler)
    app.add_exception_handler(InvalidRequestError, _invalid_request_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(MediaStorageError, _media_storage_handler)
    app.add_exception_handler(RecordStoreError, _record_store_handler)
