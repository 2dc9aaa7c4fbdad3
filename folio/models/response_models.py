"""Response models for API endpoints."""

from typing import Any, List
from pydantic import BaseModel, Field


class DataResponse(BaseModel):
    """Successful response carrying a record or a sub-collection."""

    data: Any = Field(..., description="Fetched or mutated record")


class TokenResponse(BaseModel):
    token: str = Field(..., description="Bearer token for the x-auth-token header")


class MessageResponse(BaseModel):
    msg: str = Field(..., examples=["Post removed"])


class ErrorResponse(BaseModel):
    """Error response model."""

    msg: str = Field(
        ...,
        description="Error message describing what went wrong",
        examples=["Post not found"]
    )


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status", examples=["ok"])


class RootResponse(BaseModel):
    """Root endpoint response model."""

    message: str = Field(..., examples=["Folio API"])
    version: str = Field(..., examples=["1.0.0"])
