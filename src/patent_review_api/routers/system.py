"""System endpoints: health checks and models."""

from fastapi import APIRouter
from ..schemas.system import HealthResponse
from ..models.model_router import get_model_router

router = APIRouter(prefix="", tags=["System"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Check API status and available translation models."""
    model_router = get_model_router()
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        available_models=model_router.get_available_models()
    )


@router.get("/models", summary="Get All Available Models")
async def get_models():
    """
    Get the models that can translate documents with the configured API keys.

    Each model includes:
    - provider: The AI provider (Google, Anthropic)
    - description: Model description
    - capabilities: List of model capabilities
    - context_window: Maximum context window size
    """
    return get_model_router().get_available_models()
