"""Build MongoDB filter documents for ranked search.

Field values are passed through to ``$regex`` unescaped, so a value such as
``"II|III"`` acts as an alternation. Callers forwarding untrusted input should
be aware of this.
"""

from __future__ import annotations

from typing import Any, Protocol

# Base detector: does this document look like a clinical trial report?
CLINICAL_TRIAL_DETECTOR: tuple[tuple[str, str], ...] = (
    ("Title", "clinical trial|trial|phase|randomized|randomised"),
    ("Abstract", "clinical trial|phase [I|II|III|IV]|randomized|randomised|NCT[0-9]"),
    ("Keywords", "clinical trial"),
    ("Document Type", "clinical trial"),
)

PHASE_FIELDS = ("Title", "Abstract")
STATUS_FIELDS = ("Title", "Abstract")
CONDITION_FIELDS = ("Title", "Abstract", "Keywords")
INTERVENTION_FIELDS = ("Title", "Abstract")


class ClinicalTrialQuery(Protocol):
    phase: str | None
    status: str | None
    condition: str | None
    intervention_type: str | None
    filters: dict[str, Any] | None


def _regex(pattern: str) -> dict[str, str]:
    return {"$regex": pattern, "$options": "i"}


def _any_field_matches(fields: tuple[str, ...], pattern: str) -> dict[str, Any]:
    return {"$or": [{field: _regex(pattern)} for field in fields]}


def build_clinical_trial_filter(query: ClinicalTrialQuery) -> dict[str, Any]:
    """Combine the clinical-trial detector with the query's optional constraints.

    The detector ``$or`` is always present. Each populated optional field adds
    one ``$or`` clause to ``$and``; each user filter adds one exact-match
    clause. ``$and`` is omitted when nothing was added.
    """
    result: dict[str, Any] = {
        "$or": [{field: _regex(pattern)} for field, pattern in CLINICAL_TRIAL_DETECTOR]
    }

    and_conditions: list[dict[str, Any]] = []

    if query.phase:
        phase = query.phase
        and_conditions.append(
            _any_field_matches(
                PHASE_FIELDS, f"phase {phase}|phase-{phase}|phase{phase}"
            )
        )
    if query.status:
        and_conditions.append(_any_field_matches(STATUS_FIELDS, query.status))
    if query.condition:
        and_conditions.append(_any_field_matches(CONDITION_FIELDS, query.condition))
    if query.intervention_type:
        and_conditions.append(
            _any_field_matches(INTERVENTION_FIELDS, query.intervention_type)
        )

    for key, value in (query.filters or {}).items():
        and_conditions.append({key: value})

    if and_conditions:
        result["$and"] = and_conditions
    return result


def build_user_filter(filters: dict[str, Any] | None) -> dict[str, Any] | None:
    """Filter for general medical queries: the caller's map as-is, or None."""
    if not filters:
        return None
    return dict(filters)
