"""Test fixtures and configuration."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from pymongo.errors import PyMongoError

from src.config import Settings
from src.main import app
from src.models.documents import Document
from src.models.rag import SearchCandidate
from src.routers.queries import get_pipeline
from src.services.answer_service import AnswerGenerator
from src.services.document_cache import DocumentCache
from src.services.rag_service import RetrievalPipeline


class FakeDocumentStore:
    """In-memory DocumentStore: a fixed ranking plus a dict of documents."""

    def __init__(self) -> None:
        self.documents: dict[Any, Document] = {}
        self.ranking: list[SearchCandidate] = []
        self.failing_ids: set[Any] = set()
        self.search_error: Exception | None = None
        self.search_calls: list[tuple[str, dict | None, int]] = []
        self.get_calls: list[Any] = []

    def add(self, doc_id: str, score: float, **fields: Any) -> Document:
        doc = Document(id=doc_id, **fields)
        self.documents[doc_id] = doc
        self.ranking.append(SearchCandidate(id=doc_id, score=score))
        return doc

    async def ranked_text_search(
        self, query: str, filter: dict | None, limit: int
    ) -> list[SearchCandidate]:
        self.search_calls.append((query, filter, limit))
        if self.search_error is not None:
            raise self.search_error
        return self.ranking[:limit]

    async def get_by_id(self, doc_id: Any) -> Document | None:
        self.get_calls.append(doc_id)
        if doc_id in self.failing_ids:
            raise PyMongoError(f"lookup failed for {doc_id}")
        return self.documents.get(doc_id)


@pytest.fixture
def fake_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def document_cache() -> DocumentCache:
    return DocumentCache(max_entries=100, ttl_seconds=3600)


@pytest.fixture
def fake_generator() -> AsyncMock:
    generator = AsyncMock(spec=AnswerGenerator)
    generator.complete.return_value = "**CLINICAL ANSWER:** generated"
    return generator


@pytest.fixture
def test_settings() -> Settings:
    return Settings(max_context_length=15000, max_content_chars=3000)


@pytest.fixture
def pipeline(
    fake_store: FakeDocumentStore,
    document_cache: DocumentCache,
    fake_generator: AsyncMock,
    test_settings: Settings,
) -> RetrievalPipeline:
    return RetrievalPipeline(fake_store, document_cache, fake_generator, test_settings)


@pytest.fixture
async def client(pipeline: RetrievalPipeline) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
