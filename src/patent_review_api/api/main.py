"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import get_settings
from ..models.model_router import get_model_router
from ..stores.glossary_store import create_glossary_store
from ..stores.segment_store import SegmentStore
from ..workflows.controller import WorkspaceSession
from ..routers import (
    system,
    documents,
    glossary,
    terms,
)


logger = logging.getLogger("patent_review_api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logging.basicConfig(level=get_settings().log_level.upper())
    logger.info("Starting Patent Translation Review API...")
    logger.info("Available models: %s", list(get_model_router().get_available_models().keys()))
    yield
    logger.info("Shutting down Patent Translation Review API...")


def create_app() -> FastAPI:
    """Build the app with a fresh review session."""
    settings = get_settings()
    app = FastAPI(
        title="Patent Translation Review API",
        description="""
A review workspace for machine-translated patent documents.

**Key Features:**
- Upload a patent PDF; a language model translates it into segments and flags uncertain terminology.
- Review segments in original order or prioritized by risk score.
- Edit translations; confirmed segments drop their uncertainty annotations.
- Maintain a glossary of approved terms, including terms promoted from flags.
- Export the translation as plain text in original document order.
        """,
        version="1.0.0",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.session = WorkspaceSession(
        glossary=create_glossary_store(seed=settings.seed_glossary),
        segments=SegmentStore(),
    )

    app.include_router(system.router)
    app.include_router(documents.router)
    app.include_router(glossary.router)
    app.include_router(terms.router)
    return app


app = create_app()
