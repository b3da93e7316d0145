"""Ranked search against the document store (phase one: ids and scores)."""

from __future__ import annotations

import logging
from typing import Any

from pymongo.errors import ConnectionFailure, PyMongoError

from src.models.rag import SearchCandidate
from src.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class RetrievalError(Exception):
    """Raised when the document store cannot serve a search."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class StoreUnavailableError(RetrievalError):
    """Raised when the document store is unconfigured or unreachable."""

    def __init__(self, message: str) -> None:
        super().__init__(code="STORE_UNAVAILABLE", message=message)


class SearchExecutor:
    """Issues a relevance-ranked search, optionally filtered, capped at top_k."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def search(
        self,
        query_text: str,
        filter: dict[str, Any] | None = None,
        top_k: int = 5,
    ) -> list[SearchCandidate]:
        logger.info(
            "Ranked search: query=%r filtered=%s top_k=%d",
            query_text,
            bool(filter),
            top_k,
        )
        try:
            candidates = await self._store.ranked_text_search(
                query_text, filter or None, top_k
            )
        except ConnectionFailure as e:
            logger.error("Document store unreachable: %s", e)
            raise StoreUnavailableError(f"Document store unreachable: {e}") from e
        except PyMongoError as e:
            logger.error("Document store search failed: %s", e)
            raise RetrievalError(
                code="RETRIEVAL_FAILED",
                message=f"Document search failed: {e}",
            ) from e

        # Stable sort: ties keep store order
        candidates = sorted(candidates, key=lambda c: c.score, reverse=True)[:top_k]
        logger.info("Search returned %d candidates", len(candidates))
        for c in candidates:
            logger.debug("  Candidate id=%s score=%.4f", c.key, c.score)
        return candidates
