"""Service information and health endpoints."""

from fastapi import APIRouter, status

from folio import __version__
from folio.models.response_models import HealthResponse, RootResponse

router = APIRouter(tags=["health"])


@router.get(
    "/",
    response_model=RootResponse,
    status_code=status.HTTP_200_OK,
    summary="Root endpoint",
    description="Returns API information including name and version",
)
async def root():
    """Root endpoint."""
    return RootResponse(message="Folio API", version=__version__)


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Checks if the API service is running",
)
async def health():
    return HealthResponse(status="ok")
