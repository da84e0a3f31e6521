"""
Structured exceptions and error responses for Critpath.

Provides consistent error handling with:
- Custom exception classes
- Structured error response format
- FastAPI exception handlers
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from critpath.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Error Response Schema
# =============================================================================

class ErrorDetail(BaseModel):
    """Detail of a single error."""
    loc: Optional[List[str]] = None  # Location of error (e.g., ["body", "tasks"])
    msg: str
    type: str


class ErrorResponse(BaseModel):
    """Structured error response format."""
    error: str  # Error code (e.g., "cycle_detected")
    message: str  # Human-readable message
    details: Optional[List[ErrorDetail]] = None


# =============================================================================
# Custom Exceptions
# =============================================================================

class CritpathException(Exception):
    """Base exception for all Critpath errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "internal_error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class CyclicDependencyError(CritpathException):
    """
    The blocks-graph contains a cycle, so no schedule exists.

    ``task_ids`` lists every task the topological passes could not finalize
    (the cycle members plus anything downstream of them). ``cycle`` holds one
    concrete cycle as (blocker, dependent) pairs when it could be located.
    """

    def __init__(
        self,
        task_ids: Sequence[str],
        cycle: Optional[Sequence[Tuple[str, str]]] = None,
    ):
        self.task_ids = sorted(task_ids)
        self.cycle = list(cycle) if cycle else []
        details = [{
            "loc": ["body", "dependencies"],
            "msg": f"Task {task_id} is part of or blocked by a dependency cycle",
            "type": "cycle_error",
        } for task_id in self.task_ids]
        super().__init__(
            message="dependency cycle detected involving tasks: " + ", ".join(self.task_ids),
            error_code="cycle_detected",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class PayloadTooLargeError(CritpathException):
    """Request carries more tasks than the configured limit."""

    def __init__(self, task_count: int, max_tasks: int):
        super().__init__(
            message=f"Request contains {task_count} tasks; the limit is {max_tasks}",
            error_code="too_many_tasks",
            status_code=413,
        )
        self.task_count = task_count
        self.max_tasks = max_tasks


# =============================================================================
# Exception Handlers
# =============================================================================

async def critpath_exception_handler(request: Request, exc: CritpathException) -> JSONResponse:
    """Handle CritpathException and return structured response."""
    logger.warning(f"{exc.error_code} on {request.url.path}: {exc.message}")
    body = ErrorResponse(error=exc.error_code, message=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(CritpathException, critpath_exception_handler)
