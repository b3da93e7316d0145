"""RAG service: search, context assembly, and answer generation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from src.config import Settings
from src.models.rag import SearchResult
from src.models.schemas import (
    ClinicalTrialQueryRequest,
    RagQueryRequest,
    RagResponse,
    SearchRequest,
    SearchResponse,
)
from src.services.answer_service import AnswerGenerationError, AnswerGenerator
from src.services.context_processor import ContextProcessor
from src.services.document_cache import DocumentCache
from src.services.document_store import DocumentStore
from src.services.filter_builder import build_clinical_trial_filter, build_user_filter
from src.services.prompts import (
    CLINICAL_TRIAL_SYSTEM_PROMPT,
    NO_MEDICAL_RESULTS_ANSWER,
    NO_TRIAL_RESULTS_ANSWER,
    SYSTEM_PROMPT,
    build_clinical_trial_user_prompt,
    build_context,
    build_medical_user_prompt,
)
from src.services.query_classifier import (
    classify_clinical_trial_query,
    classify_medical_query,
)
from src.services.search_executor import SearchExecutor

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 1)


@dataclass
class Retrieval:
    results: list[SearchResult]
    chunks: list[str]


class RetrievalPipeline:
    """Wires the search executor, context processor and answer generator.

    The document cache is injected so one instance can be shared by every
    request for the lifetime of the app.
    """

    def __init__(
        self,
        store: DocumentStore,
        cache: DocumentCache,
        generator: AnswerGenerator | None,
        config: Settings,
    ) -> None:
        self._executor = SearchExecutor(store)
        self._processor = ContextProcessor(
            store,
            cache,
            max_context_length=config.max_context_length,
            max_content_chars=config.max_content_chars,
        )
        self._generator = generator

    async def retrieve(
        self,
        query_text: str,
        filter: dict[str, Any] | None,
        top_k: int,
    ) -> Retrieval:
        candidates = await self._executor.search(query_text, filter, top_k)
        results, chunks = await self._processor.process(candidates)
        return Retrieval(results=results, chunks=chunks)

    async def answer_medical_query(self, request: RagQueryRequest) -> RagResponse:
        start = time.perf_counter()
        logger.info("=== RAG query: %r top_k=%d ===", request.query, request.top_k)

        retrieval = await self.retrieve(
            request.query, build_user_filter(request.filters), request.top_k
        )
        if not retrieval.chunks:
            return RagResponse(
                query=request.query,
                answer=NO_MEDICAL_RESULTS_ANSWER,
                documents=[] if request.include_documents else None,
                execution_time_ms=_elapsed_ms(start),
            )

        hint = classify_medical_query(request.query)
        logger.debug("Format hint: %s", hint)
        user_prompt = build_medical_user_prompt(
            request.query, build_context(retrieval.chunks), hint
        )
        return await self._generate(
            request.query,
            SYSTEM_PROMPT,
            user_prompt,
            retrieval.results,
            start,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
            include_documents=request.include_documents,
            model=request.model,
            error_prefix="Error generating answer",
        )

    async def answer_clinical_trial_query(
        self, request: ClinicalTrialQueryRequest
    ) -> RagResponse:
        start = time.perf_counter()
        logger.info(
            "=== Clinical trial query: %r phase=%r status=%r condition=%r "
            "intervention_type=%r top_k=%d ===",
            request.query,
            request.phase,
            request.status,
            request.condition,
            request.intervention_type,
            request.top_k,
        )

        retrieval = await self.retrieve(
            request.query, build_clinical_trial_filter(request), request.top_k
        )
        if not retrieval.chunks:
            return RagResponse(
                query=request.query,
                answer=NO_TRIAL_RESULTS_ANSWER,
                documents=[] if request.include_documents else None,
                execution_time_ms=_elapsed_ms(start),
            )

        hint = classify_clinical_trial_query(request.query)
        logger.debug("Format hint: %s", hint)
        user_prompt = build_clinical_trial_user_prompt(
            request.query, build_context(retrieval.chunks), hint
        )
        return await self._generate(
            request.query,
            CLINICAL_TRIAL_SYSTEM_PROMPT,
            user_prompt,
            retrieval.results,
            start,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
            include_documents=request.include_documents,
            model=None,
            error_prefix="Error generating answer about clinical trials",
        )

    async def search_documents(self, request: SearchRequest) -> SearchResponse:
        """Search and hydrate without generating an answer."""
        start = time.perf_counter()
        candidates = await self._executor.search(
            request.query, build_user_filter(request.filters), request.top_k
        )
        results = await self._processor.hydrate(candidates)
        if request.min_score is not None:
            results = [r for r in results if r.score >= request.min_score]
        return SearchResponse(
            query=request.query,
            results=results,
            total_results=len(results),
            execution_time_ms=_elapsed_ms(start),
        )

    async def _generate(
        self,
        query: str,
        system_prompt: str,
        user_prompt: str,
        results: list[SearchResult],
        start: float,
        *,
        max_tokens: int,
        temperature: float,
        include_documents: bool,
        model: str | None,
        error_prefix: str,
    ) -> RagResponse:
        documents = results if include_documents else None
        try:
            if self._generator is None:
                raise AnswerGenerationError(
                    code="LLM_UNAVAILABLE",
                    message="Answer generator is not configured",
                )
            answer = await self._generator.complete(
                system_prompt,
                user_prompt,
                max_tokens=max_tokens,
                temperature=temperature,
                model=model,
            )
        except AnswerGenerationError as e:
            logger.error("%s: [%s] %s", error_prefix, e.code, e.message)
            return RagResponse(
                query=query,
                answer=f"{error_prefix}: {e.message}",
                documents=documents,
                execution_time_ms=_elapsed_ms(start),
                error=e.code,
            )

        logger.info("Answer complete in %.1fms", _elapsed_ms(start))
        return RagResponse(
            query=query,
            answer=answer,
            documents=documents,
            execution_time_ms=_elapsed_ms(start),
        )
