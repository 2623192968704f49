"""
Learnyst — Error envelope
==========================
Every non-2xx response from this API is an ErrorResponse.
"""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error envelope: ``{"error": "..."}`` plus optional detail."""
    error: str
    detail: Optional[str] = None
