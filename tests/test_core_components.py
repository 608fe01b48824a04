from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from locator_healing.config.loader import ConfigLoader
from locator_healing.config.schema import HealingSettings
from locator_healing.core.exceptions import SelectorValidationError
from locator_healing.core.locator import Locator
from locator_healing.core.metadata import CandidateElement
from locator_healing.llm.client import GeminiSelectorClient, create_selector_client
from locator_healing.llm.parser import infer_locator, parse_selector_response
from locator_healing.llm.semantic import LLMSemanticFinder
from locator_healing.reporting.reporter import LoggingReporter
from locator_healing.utils.scoring import score_candidates
from tests.helpers import FakeDriver, FakeElement


def test_config_loader_validates_json(tmp_path):
    config_path = tmp_path / "suite.json"
    config_path.write_text(
        json.dumps(
            {
                "healing": {"learning_enabled": False},
                "elements": [
                    {"key": "search", "locator": "name=q", "description": "Search box"},
                ],
            }
        ),
        encoding="utf-8",
    )
    config = ConfigLoader.load(config_path, environ={})
    assert config.healing.healing_enabled is True
    assert config.healing.learning_enabled is False
    assert config.get_element("search").to_locator() == Locator.name("q")


def test_config_rejects_malformed_locator(tmp_path):
    config_path = tmp_path / "suite.json"
    config_path.write_text(json.dumps({"elements": [{"key": "x", "locator": "nonsense"}]}), encoding="utf-8")
    with pytest.raises(ValidationError):
        ConfigLoader.load(config_path, environ={})


def test_env_overrides_flags():
    settings = ConfigLoader.from_env(
        {
            "SELF_HEALING_ENABLED": "off",
            "SELF_HEALING_LEARNING_ENABLED": "Yes",
            "SELF_HEALING_ARTIFACTS_ROOT": "/tmp/heal",
        }
    )
    assert settings == HealingSettings(
        healing_enabled=False,
        learning_enabled=True,
        artifacts_root="/tmp/heal",
    )


def test_env_overrides_apply_to_loaded_config(tmp_path):
    config_path = tmp_path / "suite.json"
    config_path.write_text(json.dumps({"healing": {"healing_enabled": True}}), encoding="utf-8")
    config = ConfigLoader.load(config_path, environ={"SELF_HEALING_ENABLED": "0"})
    assert config.healing.healing_enabled is False


def test_env_rejects_garbage_flags():
    with pytest.raises(ValueError, match="SELF_HEALING_CAPTURE_ARTIFACTS"):
        ConfigLoader.from_env({"SELF_HEALING_CAPTURE_ARTIFACTS": "maybe"})


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("SELF_HEALING_LEARNING_ENABLED", "false")
    assert ConfigLoader.from_env().learning_enabled is False


def test_logging_reporter_forwards_to_logging(caplog):
    caplog.set_level("INFO", logger="locator_healing")
    reporter = LoggingReporter()
    reporter.log_info("trying")
    reporter.log_warning("failed")
    reporter.log_success("id: a -> name: a")
    messages = [(record.levelname, record.getMessage()) for record in caplog.records]
    assert messages == [
        ("INFO", "trying"),
        ("WARNING", "failed"),
        ("INFO", "HEALED id: a -> name: a"),
    ]


def test_selector_parser_accepts_css_and_xpath():
    assert parse_selector_response("#login-button") == Locator.css("#login-button")
    assert parse_selector_response(" //button[@type='submit'] ") == Locator.xpath("//button[@type='submit']")
    assert infer_locator("(//button)[1]") == Locator.xpath("(//button)[1]")


@pytest.mark.parametrize("response", ["", "#a\n#b", "```css\n#a\n```", "```#a```"])
def test_selector_parser_rejects_unusable_responses(response):
    with pytest.raises(SelectorValidationError):
        parse_selector_response(response)


def _candidate(selector_hint, tag, text, attributes=None):
    return CandidateElement(
        selector_hint=selector_hint,
        tag=tag,
        text=text,
        attributes=attributes or {},
        parent_tag="form",
        rect={"x": 1, "y": 1, "width": 80, "height": 20},
    )


def test_scoring_prefers_matching_description():
    candidates = [
        _candidate("#cancel", "button", "Cancel"),
        _candidate("#signin", "button", "", {"aria-label": "Login button"}),
        _candidate("div.banner", "div", "Welcome back"),
    ]
    scored = score_candidates("Login button", candidates)
    assert scored[0].selector_hint == "#signin"
    assert scored[0].heuristic_score > scored[1].heuristic_score


class FakeSelectorClient:
    provider_name = "fake"

    def __init__(self, response: str) -> None:
        self.response = response
        self.payloads: list[dict] = []

    def suggest_selector(self, payload):
        self.payloads.append(payload)
        return self.response


class ScriptedDriver(FakeDriver):
    def __init__(self, candidates, elements=None):
        super().__init__(elements)
        self.candidates = candidates

    def execute_script(self, script):
        return self.candidates


def test_llm_semantic_finder_resolves_suggestion():
    element = FakeElement("signin")
    driver = ScriptedDriver(
        [
            {"selector_hint": "#cancel", "tag": "button", "text": "Cancel"},
            {"selector_hint": "#signin", "tag": "button", "text": "Log in", "attributes": {"id": "signin"}},
        ],
        {Locator.css("#signin"): element},
    )
    client = FakeSelectorClient("#signin")
    finder = LLMSemanticFinder(client, max_candidates=1)

    assert finder.find_element(driver, "Log in") is element
    payload = client.payloads[0]
    assert payload["description"] == "Log in"
    assert [item["selector_hint"] for item in payload["candidates"]] == ["#signin"]


def test_llm_semantic_finder_rejects_unmatched_selector():
    driver = ScriptedDriver([{"selector_hint": "#a", "tag": "button", "text": "A"}])
    finder = LLMSemanticFinder(FakeSelectorClient("#missing"))
    with pytest.raises(SelectorValidationError, match="did not match"):
        finder.find_element(driver, "A")


def test_llm_semantic_finder_rejects_invalid_selector():
    driver = ScriptedDriver([{"selector_hint": "#a", "tag": "button", "text": "A"}])
    driver.invalid = {Locator.css("#[").to_selenium()}
    finder = LLMSemanticFinder(FakeSelectorClient("#["))
    with pytest.raises(SelectorValidationError, match="invalid"):
        finder.find_element(driver, "A")


def test_llm_semantic_finder_needs_candidates():
    finder = LLMSemanticFinder(FakeSelectorClient("#a"))
    with pytest.raises(SelectorValidationError):
        finder.find_element(ScriptedDriver([]), "A")


def test_selector_client_factory_supports_gemini(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "gemini")
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    client = create_selector_client()
    assert isinstance(client, GeminiSelectorClient)
    assert client.provider_name == "gemini"


def test_selector_client_factory_requires_key(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "anthropic")
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with pytest.raises(RuntimeError, match="ANTHROPIC_API_KEY"):
        create_selector_client()
