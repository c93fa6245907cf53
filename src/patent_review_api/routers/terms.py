"""Term suggestion endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from ..schemas.documents import TermSuggestionRequest, TermSuggestionResponse
from ..models.model_router import get_model_router
from ..config import get_settings
from ..workflows.document_translation import suggest_term_improvement
from ..api.dependencies import router_limiter

router = APIRouter(prefix="/terms", tags=["Terms"])
settings = get_settings()


@router.post("/suggest", response_model=TermSuggestionResponse, dependencies=[Depends(router_limiter)])
async def suggest_terms(request: TermSuggestionRequest):
    """
    Suggest three alternative patent-register translations for a term.

    Model failures produce an empty suggestion list rather than an error.
    """
    model_name = request.model_name or settings.default_model
    model_router = get_model_router()
    if not model_router.validate_model_availability(model_name):
        available_models = list(model_router.get_available_models().keys())
        raise HTTPException(
            status_code=400,
            detail=f"Model '{model_name}' is not available. Available models: {available_models}"
        )

    try:
        model = model_router.get_model(model_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    suggestions = await suggest_term_improvement(
        model,
        request.term,
        request.context,
        request.target_language or settings.default_target_language,
    )
    return TermSuggestionResponse(term=request.term, suggestions=suggestions)
