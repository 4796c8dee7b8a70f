"""
Error envelope helpers.

Dependencies: fastapi, kbchat.models.common
System role: Uniform error responses for route handlers
"""

from typing import Any

from fastapi.responses import JSONResponse

from kbchat.models.common import ErrorResponse


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    """
    Build a ``{"success": false, "error": ...}`` response.

    Args:
        status_code: HTTP status
        message: User-facing message
        **extra: Additional camelCase fields to include

    Returns:
        JSONResponse
    """
    body = ErrorResponse(error=message).model_dump(by_alias=True)
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)
