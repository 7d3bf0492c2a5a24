from typing import Any, Optional

from fastapi import HTTPException


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def api_error(status_code: int, error: str, details: Optional[str] = None, hint: Optional[str] = None) -> HTTPException:
    """HTTPException whose detail is rendered as the JSON body {error, details?, hint?}."""
    body = {"error": error}
    if details is not None:
        body["details"] = details
    if hint is not None:
        body["hint"] = hint
    return HTTPException(status_code=status_code, detail=body)


def bad_request(error: str, hint: Optional[str] = None) -> HTTPException:
    return api_error(400, error, hint=hint)


def failed(error: str, exc: BaseException) -> HTTPException:
    return api_error(500, error, details=str(exc))
