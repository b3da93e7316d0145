"""Pydantic model for articles stored in the document collection."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """A medical or clinical-trial article as stored in MongoDB.

    Store keys use the Title Case names of the ingestion export
    (e.g. ``"Publication Date"``, ``"Cleaned Text"``); attributes are the
    snake_case equivalents. Instances are frozen.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    id: Any = Field(alias="_id")
    title: str = Field(default="", alias="Title")
    authors: str = Field(default="", alias="Authors")
    abstract: str = Field(default="", alias="Abstract")
    publication_date: Any = Field(default=None, alias="Publication Date")
    journal: str = Field(default="", alias="Journal")
    doi: str = Field(default="", alias="DOI")
    doi_link: str = Field(default="", alias="DOI Link")
    link: str = Field(default="", alias="Link")
    keywords: Any = Field(default=None, alias="Keywords")
    document_type: str = Field(default="", alias="Document Type")
    cleaned_text: str = Field(default="", alias="Cleaned Text")
    full_text: str = Field(default="", alias="Full Text")

    @field_validator(
        "title",
        "authors",
        "abstract",
        "journal",
        "doi",
        "doi_link",
        "link",
        "document_type",
        "cleaned_text",
        "full_text",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return value if isinstance(value, str) else str(value)

    @property
    def body(self) -> str:
        """Richest available body text: cleaned text first, then full text."""
        return self.cleaned_text or self.full_text

    @property
    def publication_date_str(self) -> str:
        if not self.publication_date:
            return ""
        return str(self.publication_date)
