# app/utils/response.py

from typing import TypeVar, Generic, Optional, Dict, Any
from urllib.parse import urlencode

from pydantic import BaseModel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


class APIErrorResponse(BaseModel):
    success: bool = False
    message: str
    error_code: str
    details: Optional[Any] = None


# Documented on endpoints that accept form submissions.
FORM_ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": APIErrorResponse, "description": "Malformed submission"},
    404: {"model": APIErrorResponse, "description": "Record not found"},
    422: {"model": APIErrorResponse, "description": "Form rejected; field errors in details"},
    500: {"model": APIErrorResponse, "description": "Save failed; nothing was written"},
}


def success_response(message: str, data: Optional[T] = None) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": data,
    }


def flash_redirect(path: str, message: str) -> str:
    """Dashboard page URL carrying a one-shot ``success`` banner."""
    return f"{path}?{urlencode({'success': message})}"
