"""Standardized error response schema."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error body shared by every failure response (4xx and 5xx)."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode", description="HTTP status code")
    error: str = Field(..., description="Status category, e.g. 'Not Found'")
    message: str = Field(..., description="Human-readable error message")
