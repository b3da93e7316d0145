"""MongoDB document store: ranked text search and hydration by id."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pymongo.asynchronous.collection import AsyncCollection

from src.models.documents import Document
from src.models.rag import SearchCandidate

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Two-phase store interface: cheap ranking first, full documents on demand."""

    async def ranked_text_search(
        self,
        query: str,
        filter: dict[str, Any] | None,
        limit: int,
    ) -> list[SearchCandidate]: ...

    async def get_by_id(self, doc_id: Any) -> Document | None: ...


def build_search_pipeline(
    query_text: str,
    filter: dict[str, Any] | None,
    limit: int,
    index: str,
) -> list[dict[str, Any]]:
    """Aggregation pipeline: relevance search, optional filter, id/score projection, cap.

    The ``$match`` stage sits directly after ``$search`` so the ``$limit``
    applies to filtered results.
    """
    pipeline: list[dict[str, Any]] = [
        {
            "$search": {
                "index": index,
                "text": {
                    "query": query_text,
                    "path": {"wildcard": "*"},
                },
            }
        },
        {"$project": {"_id": 1, "score": {"$meta": "searchScore"}}},
        {"$limit": limit},
    ]
    if filter:
        pipeline.insert(1, {"$match": filter})
    return pipeline


class MongoDocumentStore:
    """DocumentStore backed by an Atlas Search enabled collection."""

    def __init__(self, collection: AsyncCollection, search_index: str) -> None:
        self._collection = collection
        self._search_index = search_index

    async def ranked_text_search(
        self,
        query: str,
        filter: dict[str, Any] | None,
        limit: int,
    ) -> list[SearchCandidate]:
        pipeline = build_search_pipeline(query, filter, limit, self._search_index)
        logger.debug("Aggregation pipeline: %s", pipeline)
        cursor = await self._collection.aggregate(pipeline)
        rows = await cursor.to_list()
        return [
            SearchCandidate(id=row["_id"], score=row.get("score") or 0.0)
            for row in rows
        ]

    async def get_by_id(self, doc_id: Any) -> Document | None:
        """Fetch one full document by its raw ``_id`` (as returned by search)."""
        raw = await self._collection.find_one({"_id": doc_id})
        if raw is None:
            return None
        return Document.model_validate(raw)
