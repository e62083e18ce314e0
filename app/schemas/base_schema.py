"""Response envelope shared by every endpoint."""
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Meta(BaseModel):
    page: Optional[int] = None
    page_size: Optional[int] = None
    total: Optional[int] = None


class ApiResponse(BaseModel, Generic[T]):
    """success/data on the happy path; message and errors on failure.

    trace_id matches the X-Trace-Id response header and the correlation_id
    of the request's log lines.
    """
    success: bool
    data: Optional[T]
    meta: Optional[Meta] = None
    message: Optional[str] = None
    errors: Optional[List[str]] = None
    trace_id: str
