"""Hydrate search candidates and assemble a length-bounded LLM context."""

from __future__ import annotations

import logging

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from src.models.documents import Document
from src.models.rag import SearchCandidate, SearchResult
from src.services.document_cache import DocumentCache
from src.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONTEXT_LENGTH = 15000
DEFAULT_MAX_CONTENT_CHARS = 3000
ELLIPSIS = "..."


def truncate_content(text: str, ceiling: int = DEFAULT_MAX_CONTENT_CHARS) -> str:
    """Cut text to at most ``ceiling`` chars, preferring natural boundaries.

    Tries the last paragraph break starting at or before the ceiling, then the
    last sentence end (the period is kept), then a hard cut. Truncated text
    gets an ellipsis, so the result is at most ``ceiling + 3`` chars.
    """
    if len(text) <= ceiling:
        return text

    break_point = text.rfind("\n\n", 0, ceiling + 2)
    if break_point <= 0:
        sentence_end = text.rfind(". ", 0, ceiling + 1)
        break_point = sentence_end + 1 if sentence_end > 0 else ceiling
    return text[:break_point] + ELLIPSIS


def format_document(
    doc: Document,
    position: int,
    score: float,
    max_content_chars: int = DEFAULT_MAX_CONTENT_CHARS,
) -> str:
    """Render one document as a context chunk. ``position`` is 1-based."""
    parts = [
        f"DOCUMENT {position} [Score: {score:.4f}]",
        f"Title: {doc.title or 'No title'}",
    ]
    if doc.authors:
        parts.append(f"Authors: {doc.authors}")
    if doc.journal:
        parts.append(f"Journal: {doc.journal}")
    if doc.publication_date_str:
        parts.append(f"Date: {doc.publication_date_str}")
    if doc.doi:
        parts.append(f"DOI: {doc.doi}")

    # Medical papers always carry an abstract line
    parts.append(f"Abstract: {doc.abstract or 'No abstract'}")

    if doc.body:
        parts.append(f"Content: {truncate_content(doc.body, max_content_chars)}")

    return "\n".join(parts)


class ContextProcessor:
    """Resolves candidates to documents and accumulates chunks under a budget.

    A candidate is included atomically: either both its SearchResult and its
    chunk are returned, or neither. The first chunk that would overflow
    ``max_context_length`` stops processing, so lower-ranked candidates never
    replace a higher-ranked one that did not fit.
    """

    def __init__(
        self,
        store: DocumentStore,
        cache: DocumentCache,
        max_context_length: int = DEFAULT_MAX_CONTEXT_LENGTH,
        max_content_chars: int = DEFAULT_MAX_CONTENT_CHARS,
    ) -> None:
        self._store = store
        self._cache = cache
        self.max_context_length = max_context_length
        self.max_content_chars = max_content_chars

    async def resolve(self, candidate: SearchCandidate) -> Document | None:
        """Return the full document from cache, falling back to the store."""
        key = candidate.key
        doc = self._cache.get(key)
        if doc is not None:
            logger.debug("Cache hit for document %s", key)
            return doc

        doc = await self._store.get_by_id(candidate.id)
        if doc is not None:
            self._cache.put(key, doc)
        return doc

    async def _resolve_or_skip(self, candidate: SearchCandidate) -> Document | None:
        """Resolve a candidate; None means log-and-skip."""
        try:
            doc = await self.resolve(candidate)
        except (PyMongoError, ValidationError) as e:
            logger.error("Error fetching document %s: %s", candidate.key, e)
            return None
        if doc is None:
            logger.warning("Document %s not found, skipping", candidate.key)
        return doc

    async def hydrate(self, candidates: list[SearchCandidate]) -> list[SearchResult]:
        """Resolve every candidate to a SearchResult, with no context budget."""
        results: list[SearchResult] = []
        for candidate in candidates:
            doc = await self._resolve_or_skip(candidate)
            if doc is not None:
                results.append(SearchResult.from_document(doc, candidate.score))
        return results

    async def process(
        self, candidates: list[SearchCandidate]
    ) -> tuple[list[SearchResult], list[str]]:
        results: list[SearchResult] = []
        chunks: list[str] = []
        total_length = 0

        for idx, candidate in enumerate(candidates):
            doc = await self._resolve_or_skip(candidate)
            if doc is None:
                continue

            chunk = format_document(
                doc, idx + 1, candidate.score, self.max_content_chars
            )
            if total_length + len(chunk) > self.max_context_length:
                logger.info(
                    "Context budget reached at candidate %d (%d + %d > %d chars)",
                    idx + 1,
                    total_length,
                    len(chunk),
                    self.max_context_length,
                )
                break

            results.append(SearchResult.from_document(doc, candidate.score))
            chunks.append(chunk)
            total_length += len(chunk)

        logger.info(
            "Context assembled: %d/%d documents, %d chars",
            len(chunks),
            len(candidates),
            total_length,
        )
        return results, chunks
