from __future__ import annotations

from difflib import SequenceMatcher
from typing import Iterable

from locator_healing.core.metadata import CandidateElement

DESCRIPTIVE_ATTRIBUTES = ("aria-label", "placeholder", "title", "name", "value", "alt")
INTERACTIVE_TAGS = {"button", "a", "input", "select", "textarea"}


def score_candidates(description: str, candidates: Iterable[CandidateElement]) -> list[CandidateElement]:
    """Ranks candidates by how well their visible text and labels match ``description``."""

    scored: list[CandidateElement] = []
    for candidate in candidates:
        score = 50 * _best_similarity(description, candidate)
        score += 30 * _token_overlap(description, _label_text(candidate))
        if candidate.tag in INTERACTIVE_TAGS:
            score += 10
        if candidate.attributes.get("role"):
            score += 5
        if _is_visible(candidate.rect):
            score += 5
        candidate.heuristic_score = round(score, 4)
        scored.append(candidate)
    scored.sort(key=lambda item: item.heuristic_score, reverse=True)
    return scored


def _label_text(candidate: CandidateElement) -> str:
    values = [candidate.text]
    values.extend(candidate.attributes.get(name, "") for name in DESCRIPTIVE_ATTRIBUTES)
    return " ".join(value for value in values if value)


def _best_similarity(description: str, candidate: CandidateElement) -> float:
    values = [candidate.text] + [candidate.attributes.get(name, "") for name in DESCRIPTIVE_ATTRIBUTES]
    return max((_similarity(description, value) for value in values if value), default=0.0)


def _similarity(left: str, right: str) -> float:
    if not left or not right:
        return 0.0
    return SequenceMatcher(a=left.lower(), b=right.lower()).ratio()


def _token_overlap(description: str, label: str) -> float:
    expected = {token for token in description.lower().split() if token}
    actual = {token for token in label.lower().split() if token}
    if not expected or not actual:
        return 0.0
    return len(expected & actual) / len(expected)


def _is_visible(rect: dict[str, float]) -> bool:
    return rect.get("width", 0.0) > 0 and rect.get("height", 0.0) > 0
