"""FastAPI application entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from rich.logging import RichHandler

from src.config import settings
from src.database import close_mongo_client
from src.routers.queries import router as queries_router
from src.services.answer_service import AnswerGenerator, create_genai_client
from src.services.document_cache import DocumentCache

logging.basicConfig(
    level=logging.INFO,
    format="%(name)s - %(message)s",
    datefmt="%H:%M:%S",
    handlers=[RichHandler(rich_tracebacks=True, markup=False)],
    force=True,
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("pymongo").setLevel(logging.WARNING)
# Our app loggers: show DEBUG when debug=True, keep third-party libs at INFO
if settings.debug:
    for name in ("src.services", "src.routers"):
        logging.getLogger(name).setLevel(logging.DEBUG)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.document_cache = DocumentCache(
        max_entries=settings.doc_cache_max_entries,
        ttl_seconds=settings.doc_cache_ttl_seconds,
    )
    try:
        app.state.answer_generator = AnswerGenerator(
            create_genai_client(settings), settings.ai_model
        )
    except Exception as e:
        logger.warning("Answer generator initialization failed: %s", e)
        app.state.answer_generator = None
    yield
    await close_mongo_client()


app = FastAPI(
    title="HospiAgent Search",
    description="Medical literature and clinical trial question answering",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(queries_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
