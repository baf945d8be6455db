"""
Dashboard loader exceptions

Defines the error taxonomy used by the load orchestrator and its collaborators.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """错误分类枚举"""
    CANCELLED = "cancelled"              # request abandoned by the caller
    NOT_FOUND = "not_found"              # no dashboard content obtained
    TRANSPORT_ERROR = "transport_error"  # backend call failed
    UNKNOWN_ERROR = "unknown_error"


class DashboardLoaderError(Exception):
    """Base class for dashboard loader errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        uid: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        timestamp: Optional[datetime] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.uid = uid
        self.details = details or {}
        self.timestamp = timestamp or datetime.now()


class FetchCancelledError(DashboardLoaderError):
    """A backend request was superseded before it completed."""

    def __init__(self, message: str = "Request was cancelled", request_id: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.CANCELLED,
            details={"request_id": request_id},
            **kwargs
        )
        self.request_id = request_id


class DashboardNotFoundError(DashboardLoaderError):
    """No dashboard could be produced for the request."""

    def __init__(self, message: str = "Dashboard not found", redirect_to: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.NOT_FOUND,
            details={"redirect_to": redirect_to},
            **kwargs
        )
        self.redirect_to = redirect_to


class BackendTransportError(DashboardLoaderError):
    """The backend answered with an error status or could not be reached."""

    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.TRANSPORT_ERROR,
            details={"status": status, "url": url},
            **kwargs
        )
        self.status = status
        self.url = url
