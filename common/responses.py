from typing import Any, Dict, Optional

from fastapi import HTTPException, status


def error_response(message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    """
    Standard error response envelope.
    """
    payload: Dict[str, Any] = {"message": message}
    if details is not None:
        payload["details"] = details
    return payload


def http_bad_request(detail: str) -> HTTPException:
    """
    400 Bad Request response shortcut.
    """
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
