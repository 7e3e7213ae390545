"""
Shared response schemas.
"""

from pydantic import BaseModel
from typing import Optional


class SuccessResponse(BaseModel):
    """Returned by delete and reset operations."""
    success: bool = True
    message: Optional[str] = None
