from __future__ import annotations

import logging
from typing import Any

from selenium.common.exceptions import InvalidSelectorException

from locator_healing.core.exceptions import SelectorValidationError
from locator_healing.core.metadata import CandidateElement
from locator_healing.core.strategies import SemanticFinder
from locator_healing.llm.parser import parse_selector_response
from locator_healing.utils.dom_extract import extract_candidate_elements
from locator_healing.utils.scoring import score_candidates

log = logging.getLogger(__name__)


class LLMSemanticFinder(SemanticFinder):
    """Asks an LLM to pick the element that matches a description.

    Interactive elements are collected from the live page and ranked
    locally first, so only the best few reach the model.
    """

    name = "llm semantic"

    def __init__(self, client, max_candidates: int = 5) -> None:
        self.client = client
        self.max_candidates = max_candidates

    def find_element(self, driver, description: str):
        candidates = score_candidates(description, extract_candidate_elements(driver))
        top_candidates = candidates[: self.max_candidates]
        if not top_candidates:
            raise SelectorValidationError("No candidate elements on the page")
        payload = self._build_payload(description, top_candidates)
        response = self.client.suggest_selector(payload)
        locator = parse_selector_response(response)
        log.info(
            "%s suggested %s for %r",
            getattr(self.client, "provider_name", "unknown"),
            locator.key,
            description,
        )
        try:
            matches = driver.find_elements(*locator.to_selenium())
        except InvalidSelectorException as exc:
            raise SelectorValidationError("LLM returned an invalid selector") from exc
        if not matches:
            raise SelectorValidationError("LLM selector did not match any element")
        return matches[0]

    def _build_payload(self, description: str, candidates: list[CandidateElement]) -> dict[str, Any]:
        return {
            "description": description,
            "candidates": [self._candidate_payload(item) for item in candidates],
        }

    @staticmethod
    def _candidate_payload(candidate: CandidateElement) -> dict[str, Any]:
        return {
            "selector_hint": candidate.selector_hint,
            "tag": candidate.tag,
            "text": candidate.text,
            "attributes": candidate.attributes,
            "parent_tag": candidate.parent_tag,
            "heuristic_score": candidate.heuristic_score,
        }
