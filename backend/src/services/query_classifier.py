"""Heuristic query classification into response-format hints.

Each classifier is an ordered list of rules; the first rule whose predicate
matches the lowercased query supplies the hint.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# --- General medical query keywords ---

DRUG_INTERACTION_KEYWORDS = frozenset(
    {
        "drug interaction",
        "drug-drug",
        "interaction",
        "contraindication",
        "concomitant",
        "co-administration",
        "drug combination",
        "polypharmacy",
        "medication interaction",
    }
)

TREATMENT_KEYWORDS = frozenset(
    {
        "treatment",
        "therapy",
        "manage",
        "care",
        "intervention",
        "protocol",
        "regimen",
        "guideline",
        "approach",
        "strategy",
    }
)

DISEASE_KEYWORDS = frozenset(
    {
        "disease",
        "condition",
        "disorder",
        "syndrome",
        "pathology",
        "illness",
        "symptoms",
        "diagnosis",
        "etiology",
    }
)

PUBLIC_HEALTH_KEYWORDS = frozenset(
    {
        "public health",
        "policy",
        "population",
        "community",
        "prevention",
        "screening",
        "surveillance",
        "outbreak",
        "epidemic",
        "pandemic",
    }
)

# --- Hints ---

DRUG_INTERACTION_HINT = (
    "This appears to be a drug interaction query. "
    "Follow the DRUG INTERACTION SUMMARY format with all sections."
)
TREATMENT_HINT = (
    "This appears to be a treatment query. "
    "Follow the CLINICAL ANSWER format with all sections."
)
DISEASE_HINT = (
    "This appears to be a disease/condition query. "
    "Follow the CONDITION OVERVIEW format with all sections."
)
PUBLIC_HEALTH_HINT = (
    "This appears to be a public health query. "
    "Follow the PUBLIC HEALTH PERSPECTIVE format with all sections."
)
GENERAL_HINT = (
    "Structure your response with clear headers, bullet points, "
    "and numbered lists for each major section."
)

SAFETY_HINT = (
    "This appears to be a safety query. "
    "Focus on the Safety Profile section with detailed adverse event data."
)
EFFICACY_HINT = (
    "This appears to be an efficacy query. "
    "Focus on the Outcomes section with detailed efficacy data."
)
STUDY_DESIGN_HINT = (
    "This appears to be a study design query. "
    "Focus on the Study Design and Inclusion/Exclusion Criteria sections."
)
INDIAN_CONTEXT_HINT = (
    "This appears to be a query about Indian context. "
    "Focus on the Indian Context section and regional relevance."
)
BALANCED_TRIAL_HINT = (
    "Provide a balanced summary across all sections, "
    "highlighting the most relevant clinical trial information."
)


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Callable[[str], bool]
    hint: str


def contains_phrase(keywords: frozenset[str]) -> Callable[[str], bool]:
    """Substring containment; suits multi-word phrases."""
    return lambda text: any(keyword in text for keyword in keywords)


def contains_word(keywords: frozenset[str]) -> Callable[[str], bool]:
    """Whole-token membership after whitespace splitting."""
    return lambda text: not keywords.isdisjoint(text.split())


def matches_pattern(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(pattern)
    return lambda text: compiled.search(text) is not None


MEDICAL_RULES: tuple[Rule, ...] = (
    Rule("drug_interaction", contains_phrase(DRUG_INTERACTION_KEYWORDS), DRUG_INTERACTION_HINT),
    Rule("treatment", contains_word(TREATMENT_KEYWORDS), TREATMENT_HINT),
    Rule("disease", contains_word(DISEASE_KEYWORDS), DISEASE_HINT),
    Rule("public_health", contains_phrase(PUBLIC_HEALTH_KEYWORDS), PUBLIC_HEALTH_HINT),
)

CLINICAL_TRIAL_RULES: tuple[Rule, ...] = (
    Rule("safety", matches_pattern(r"safety|adverse|side effect|toxicity"), SAFETY_HINT),
    Rule("efficacy", matches_pattern(r"efficacy|effectiveness|outcome|result"), EFFICACY_HINT),
    Rule(
        "study_design",
        matches_pattern(r"design|methodology|protocol|inclusion|exclusion"),
        STUDY_DESIGN_HINT,
    ),
    Rule("indian_context", matches_pattern(r"india|indian|local|regional"), INDIAN_CONTEXT_HINT),
)


def match_rule(query_text: str, rules: tuple[Rule, ...]) -> Rule | None:
    """First rule matching the lowercased query, or None."""
    text = query_text.lower()
    for rule in rules:
        if rule.matches(text):
            return rule
    return None


def classify(query_text: str, rules: tuple[Rule, ...], default: str) -> str:
    rule = match_rule(query_text, rules)
    if rule is None:
        logger.debug("No category matched, using default hint")
        return default
    logger.debug("Query classified as %s", rule.name)
    return rule.hint


def classify_medical_query(query_text: str) -> str:
    """Format hint for a general medical query."""
    return classify(query_text, MEDICAL_RULES, GENERAL_HINT)


def classify_clinical_trial_query(query_text: str) -> str:
    """Format hint for a clinical-trial query."""
    return classify(query_text, CLINICAL_TRIAL_RULES, BALANCED_TRIAL_HINT)
