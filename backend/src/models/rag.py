"""Pydantic models for RAG: search candidates and retrieval results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.models.documents import Document


class SearchCandidate(BaseModel):
    """An identifier + relevance score pair returned by ranked search, before hydration."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: Any
    score: float = Field(default=0.0, ge=0.0)

    @property
    def key(self) -> str:
        """String form of the store identifier, used as the cache key."""
        return str(self.id)


class SearchResult(BaseModel):
    """A document projection returned to the caller alongside its score."""

    id: str
    title: str = ""
    authors: str = ""
    abstract: str = ""
    publication_date: str = ""
    journal: str = ""
    doi: str = ""
    doi_link: str = ""
    link: str = ""
    score: float

    @classmethod
    def from_document(cls, doc: Document, score: float) -> SearchResult:
        return cls(
            id=str(doc.id),
            title=doc.title,
            authors=doc.authors,
            abstract=doc.abstract,
            publication_date=doc.publication_date_str,
            journal=doc.journal,
            doi=doc.doi,
            doi_link=doc.doi_link,
            link=doc.link,
            score=score,
        )
