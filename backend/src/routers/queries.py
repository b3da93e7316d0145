"""Medical question answering and search API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from src.config import settings
from src.database import get_document_store
from src.models.schemas import (
    ClinicalTrialQueryRequest,
    ErrorDetail,
    RagQueryRequest,
    RagResponse,
    SearchRequest,
    SearchResponse,
)
from src.services.rag_service import RetrievalPipeline
from src.services.search_executor import RetrievalError, StoreUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["queries"])


def _retrieval_http_error(e: RetrievalError) -> HTTPException:
    status_code = 503 if isinstance(e, StoreUnavailableError) else 500
    return HTTPException(
        status_code=status_code,
        detail=ErrorDetail(code=e.code, message=e.message).model_dump(),
    )


def get_pipeline(request: Request) -> RetrievalPipeline:
    """Dependency: a pipeline over the shared document cache and answer generator."""
    try:
        store = get_document_store()
    except StoreUnavailableError as e:
        logger.error("Document store unavailable: %s", e.message)
        raise _retrieval_http_error(e)
    return RetrievalPipeline(
        store,
        request.app.state.document_cache,
        getattr(request.app.state, "answer_generator", None),
        settings,
    )


def _answer_response(result: RagResponse) -> RagResponse | JSONResponse:
    if result.error is not None:
        return JSONResponse(
            status_code=500, content=result.model_dump(exclude_none=True)
        )
    return result


@router.post(
    "/rag-query", response_model=RagResponse, response_model_exclude_none=True
)
async def rag_query(
    body: RagQueryRequest,
    pipeline: RetrievalPipeline = Depends(get_pipeline),
) -> RagResponse | JSONResponse:
    try:
        result = await pipeline.answer_medical_query(body)
    except RetrievalError as e:
        logger.exception("RAG query failed: %r", body.query)
        raise _retrieval_http_error(e)
    return _answer_response(result)


@router.post(
    "/clinical-trials", response_model=RagResponse, response_model_exclude_none=True
)
async def clinical_trials(
    body: ClinicalTrialQueryRequest,
    pipeline: RetrievalPipeline = Depends(get_pipeline),
) -> RagResponse | JSONResponse:
    try:
        result = await pipeline.answer_clinical_trial_query(body)
    except RetrievalError as e:
        logger.exception("Clinical trial query failed: %r", body.query)
        raise _retrieval_http_error(e)
    return _answer_response(result)


@router.post("/search", response_model=SearchResponse)
async def search(
    body: SearchRequest,
    pipeline: RetrievalPipeline = Depends(get_pipeline),
) -> SearchResponse:
    try:
        return await pipeline.search_documents(body)
    except RetrievalError as e:
        logger.exception("Search failed: %r", body.query)
        raise _retrieval_http_error(e)
