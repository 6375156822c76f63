# ============================================================================
# API Models - Response Schemas shared across routers
# ============================================================================

"""
Pydantic models for API responses that are not resource entities.
Resource models (User, Pirg, ...) live in hpcadmin.data.models.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ServiceInfo(BaseModel):
    """Administrative namespace landing response."""
    name: str
    version: str

    class Config:
        json_schema_extra = {
            "example": {
                "name": "HPC Admin Server",
                "version": "0.1.0",
            }
        }


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: str
    message: str
    request_id: Optional[str] = None
    context: Dict[str, Any] = {}

    class Config:
        json_schema_extra = {
            "example": {
                "error": "ResourceNotFoundError",
                "error_code": "NOT_FOUND",
                "message": "user 42 not found",
                "request_id": "5c0e7c2e-7d0b-4a52-9c1b-0f6d6c3a9d55",
                "context": {"user_id": 42},
            }
        }
