# app/api/responses.py
from typing import Any, List, Optional
from fastapi import Request
from fastapi.responses import JSONResponse
from app.schemas.base_schema import ApiResponse


def ok(
    data: Any,
    message: str,
    request: Optional[Request] = None,
    meta: Optional[dict] = None,
) -> ApiResponse:
    """Wrap a successful response in the standard ApiResponse envelope."""
    return ApiResponse(
        success=True,
        data=data,
        meta=meta,
        message=message,
        errors=None,
        trace_id=getattr(request.state, "trace_id", "") if request else "",
    )


def error(
    status_code: int,
    message: str,
    request: Request,
    errors: Optional[List[str]] = None,
) -> JSONResponse:
    """Wrap a failure in the ApiResponse envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(
            success=False,
            data=None,
            message=message,
            errors=errors or [message],
            trace_id=getattr(request.state, "trace_id", None) or "",
        ).model_dump(),
    )
