# src/core/responses.py
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every successful response."""
    success: bool = True
    data: Optional[T] = None
    message: str = ""


def error_body(message: str, error: str) -> Dict[str, Any]:
    return {"success": False, "data": None, "message": message, "error": error}
