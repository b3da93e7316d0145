"""Unit tests for filter_builder: clinical-trial and user filters."""

from __future__ import annotations

from src.models.schemas import ClinicalTrialQueryRequest
from src.services.filter_builder import (
    CLINICAL_TRIAL_DETECTOR,
    build_clinical_trial_filter,
    build_user_filter,
)


def _request(**kwargs) -> ClinicalTrialQueryRequest:
    return ClinicalTrialQueryRequest(query="metformin trials", **kwargs)


class TestClinicalTrialFilter:
    def test_base_detector_always_present(self) -> None:
        result = build_clinical_trial_filter(_request())
        fields = [next(iter(clause)) for clause in result["$or"]]
        assert fields == ["Title", "Abstract", "Keywords", "Document Type"]
        for clause in result["$or"]:
            condition = next(iter(clause.values()))
            assert condition["$options"] == "i"

    def test_no_optional_fields_means_no_and(self) -> None:
        result = build_clinical_trial_filter(_request())
        assert "$and" not in result

    def test_phase_and_condition(self) -> None:
        result = build_clinical_trial_filter(_request(phase="II", condition="diabetes"))

        assert len(result["$or"]) == len(CLINICAL_TRIAL_DETECTOR)
        assert len(result["$and"]) == 2

        phase_clause, condition_clause = result["$and"]
        assert phase_clause == {
            "$or": [
                {"Title": {"$regex": "phase II|phase-II|phaseII", "$options": "i"}},
                {"Abstract": {"$regex": "phase II|phase-II|phaseII", "$options": "i"}},
            ]
        }
        assert [next(iter(c)) for c in condition_clause["$or"]] == [
            "Title",
            "Abstract",
            "Keywords",
        ]
        assert condition_clause["$or"][2]["Keywords"]["$regex"] == "diabetes"

    def test_status_and_intervention_fields(self) -> None:
        result = build_clinical_trial_filter(
            _request(status="recruiting", intervention_type="drug")
        )
        status_clause, intervention_clause = result["$and"]
        assert [next(iter(c)) for c in status_clause["$or"]] == ["Title", "Abstract"]
        assert status_clause["$or"][0]["Title"]["$regex"] == "recruiting"
        assert intervention_clause["$or"][1]["Abstract"]["$regex"] == "drug"

    def test_user_filters_appended_as_exact_match(self) -> None:
        result = build_clinical_trial_filter(
            _request(phase="III", filters={"Journal": "Lancet", "Year": 2023})
        )
        assert result["$and"][1:] == [{"Journal": "Lancet"}, {"Year": 2023}]

    def test_empty_strings_treated_as_absent(self) -> None:
        result = build_clinical_trial_filter(_request(phase="", status=""))
        assert "$and" not in result

    def test_values_are_not_escaped(self) -> None:
        result = build_clinical_trial_filter(_request(condition="type 1|type 2"))
        assert result["$and"][0]["$or"][0]["Title"]["$regex"] == "type 1|type 2"

    def test_deterministic(self) -> None:
        request = _request(phase="II", status="completed", filters={"Journal": "BMJ"})
        first = build_clinical_trial_filter(request)
        second = build_clinical_trial_filter(request)
        assert first == second
        assert first is not second


class TestUserFilter:
    def test_none_and_empty(self) -> None:
        assert build_user_filter(None) is None
        assert build_user_filter({}) is None

    def test_returns_copy(self) -> None:
        filters = {"Journal": "NEJM"}
        result = build_user_filter(filters)
        assert result == filters
        assert result is not filters
