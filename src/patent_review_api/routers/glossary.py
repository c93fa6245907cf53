"""Glossary management endpoints."""

from fastapi import APIRouter, Depends, Query, Response
from ..schemas.glossary import GlossaryAddRequest, GlossaryListResponse, GlossaryPromoteRequest
from ..models.glossary import GlossaryTerm, GlossaryTermCandidate
from ..workflows.controller import WorkflowController, WorkspaceSession
from ..api.dependencies import get_controller, get_session

router = APIRouter(prefix="/glossary", tags=["Glossary"])


@router.get("", response_model=GlossaryListResponse)
async def list_glossary(
    q: str = Query("", description="Case-insensitive match on source or target"),
    session: WorkspaceSession = Depends(get_session),
):
    """List glossary terms in insertion order, optionally filtered by a search query."""
    return GlossaryListResponse(query=q, terms=list(session.glossary.search(q)))


@router.post("", response_model=GlossaryTerm, status_code=201)
async def add_glossary_term(
    request: GlossaryAddRequest,
    controller: WorkflowController = Depends(get_controller),
):
    """Add a term pair to the glossary. Category defaults to `general`."""
    candidate = GlossaryTermCandidate(
        source=request.source,
        target=request.target,
        category=request.category,
        context=request.context,
    )
    return controller.add_glossary_term(candidate)


@router.post("/promote", response_model=GlossaryTerm, status_code=201)
async def promote_flagged_term(
    request: GlossaryPromoteRequest,
    controller: WorkflowController = Depends(get_controller),
):
    """
    Add a flagged term and its suggested translation to the glossary.

    Terms promoted from review are filed under the `technical` category.
    """
    return controller.promote_flagged_term(request.term, request.suggestion)


@router.delete("/{term_id}", status_code=204)
async def remove_glossary_term(
    term_id: str,
    controller: WorkflowController = Depends(get_controller),
):
    """Remove a glossary term. Unknown ids are ignored."""
    controller.remove_glossary_term(term_id)
    return Response(status_code=204)
