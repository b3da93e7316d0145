"""Pydantic request/response/error schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.models.rag import SearchResult


# --- Request schemas ---


class RagQueryRequest(BaseModel):
    query: str = Field(min_length=1)
    top_k: int = Field(default=5, ge=1, le=20)
    filters: dict[str, Any] | None = None
    temperature: float = Field(default=0.0, ge=0.0, le=1.0)
    max_tokens: int = Field(default=1500, ge=1, le=4000)
    include_documents: bool = True
    model: str | None = None


class ClinicalTrialQueryRequest(BaseModel):
    query: str = Field(min_length=1)
    top_k: int = Field(default=8, ge=1, le=30)
    phase: str | None = None
    status: str | None = None
    condition: str | None = None
    intervention_type: str | None = None
    filters: dict[str, Any] | None = None
    max_tokens: int = Field(default=2000, ge=1, le=4000)
    temperature: float = Field(default=0.1, ge=0.0, le=1.0)
    include_documents: bool = True


class SearchRequest(BaseModel):
    query: str = Field(min_length=1)
    top_k: int = Field(default=5, ge=1, le=100)
    min_score: float | None = None
    filters: dict[str, Any] | None = None


# --- Response schemas ---


class RagResponse(BaseModel):
    query: str
    answer: str
    documents: list[SearchResult] | None = None
    execution_time_ms: float
    error: str | None = None


class SearchResponse(BaseModel):
    query: str
    results: list[SearchResult]
    total_results: int
    execution_time_ms: float


# --- Error schema ---


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: dict = {}
