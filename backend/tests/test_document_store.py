"""Unit tests for the Mongo document store and the Document model."""

from __future__ import annotations

import datetime
from unittest.mock import AsyncMock, MagicMock

from bson import ObjectId

from src.models.documents import Document
from src.services.document_store import MongoDocumentStore, build_search_pipeline

RAW_ARTICLE = {
    "_id": ObjectId("65a1b2c3d4e5f60718293a4b"),
    "Title": "Warfarin and aspirin co-therapy",
    "Authors": ["Sharma A", "Iyer R"],
    "Abstract": "Bleeding risk with combined anticoagulant and antiplatelet use.",
    "Publication Date": datetime.datetime(2021, 5, 4),
    "Journal": "Indian Heart Journal",
    "DOI": "10.1000/ihj.2021.04",
    "DOI Link": "https://doi.org/10.1000/ihj.2021.04",
    "Link": "https://pubmed.ncbi.nlm.nih.gov/1",
    "Cleaned Text": "Cleaned body.",
    "Full Text": None,
    "Embedding": [0.1, 0.2],
}


def _mock_collection(rows: list[dict] | None = None, found: dict | None = None):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=rows or [])
    collection = MagicMock()
    collection.aggregate = AsyncMock(return_value=cursor)
    collection.find_one = AsyncMock(return_value=found)
    return collection


class TestBuildSearchPipeline:
    def test_unfiltered_pipeline(self) -> None:
        pipeline = build_search_pipeline("warfarin", None, 5, "pubmed_index")
        assert [next(iter(stage)) for stage in pipeline] == [
            "$search",
            "$project",
            "$limit",
        ]
        assert pipeline[0]["$search"]["index"] == "pubmed_index"
        assert pipeline[0]["$search"]["text"] == {
            "query": "warfarin",
            "path": {"wildcard": "*"},
        }
        assert pipeline[-1] == {"$limit": 5}

    def test_projects_only_id_and_score(self) -> None:
        pipeline = build_search_pipeline("warfarin", None, 5, "idx")
        assert pipeline[1] == {
            "$project": {"_id": 1, "score": {"$meta": "searchScore"}}
        }

    def test_filter_inserted_after_search_before_limit(self) -> None:
        query_filter = {"Journal": "Lancet"}
        pipeline = build_search_pipeline("warfarin", query_filter, 3, "idx")
        assert [next(iter(stage)) for stage in pipeline] == [
            "$search",
            "$match",
            "$project",
            "$limit",
        ]
        assert pipeline[1] == {"$match": query_filter}

    def test_empty_filter_ignored(self) -> None:
        pipeline = build_search_pipeline("warfarin", {}, 3, "idx")
        assert all("$match" not in stage for stage in pipeline)


class TestMongoDocumentStore:
    async def test_ranked_text_search_returns_candidates(self) -> None:
        first, second = ObjectId(), ObjectId()
        collection = _mock_collection(
            rows=[{"_id": first, "score": 3.2}, {"_id": second, "score": 1.5}]
        )
        store = MongoDocumentStore(collection, "idx")

        candidates = await store.ranked_text_search("warfarin", {"A": 1}, 2)

        assert [c.id for c in candidates] == [first, second]
        assert [c.score for c in candidates] == [3.2, 1.5]
        pipeline = collection.aggregate.call_args.args[0]
        assert pipeline[1] == {"$match": {"A": 1}}
        assert pipeline[-1] == {"$limit": 2}

    async def test_missing_score_defaults_to_zero(self) -> None:
        collection = _mock_collection(rows=[{"_id": "x"}])
        store = MongoDocumentStore(collection, "idx")
        candidates = await store.ranked_text_search("q", None, 1)
        assert candidates[0].score == 0.0

    async def test_get_by_id_hydrates_document(self) -> None:
        collection = _mock_collection(found=RAW_ARTICLE)
        store = MongoDocumentStore(collection, "idx")

        doc = await store.get_by_id(RAW_ARTICLE["_id"])

        collection.find_one.assert_awaited_once_with({"_id": RAW_ARTICLE["_id"]})
        assert doc is not None
        assert doc.title == "Warfarin and aspirin co-therapy"
        assert doc.authors == "Sharma A, Iyer R"
        assert doc.full_text == ""
        assert doc.body == "Cleaned body."

    async def test_get_by_id_missing(self) -> None:
        store = MongoDocumentStore(_mock_collection(found=None), "idx")
        assert await store.get_by_id(ObjectId()) is None


class TestDocumentModel:
    def test_aliases_and_defaults(self) -> None:
        doc = Document.model_validate({"_id": "abc", "Title": "Only a title"})
        assert doc.id == "abc"
        assert doc.abstract == ""
        assert doc.publication_date_str == ""
        assert doc.body == ""

    def test_body_prefers_cleaned_text(self) -> None:
        doc = Document(id="1", cleaned_text="clean", full_text="raw")
        assert doc.body == "clean"
        assert Document(id="2", full_text="raw").body == "raw"

    def test_publication_date_stringified(self) -> None:
        doc = Document.model_validate(RAW_ARTICLE)
        assert doc.publication_date_str == "2021-05-04 00:00:00"
