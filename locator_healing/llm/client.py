from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from typing import Any
from urllib import error, request

from locator_healing.llm.prompts import SYSTEM_PROMPT, build_user_prompt


class SelectorSuggestionClient(ABC):
    """Asks a hosted model for one selector matching an element description.

    ``payload`` is the description plus ranked page candidates built by the
    semantic finder. Providers differ only in endpoint, headers, request body
    and where the answer sits in the response.
    """

    provider_name = "unknown"
    default_model = ""
    model_variable = ""
    timeout_seconds = 30

    def __init__(self, api_key: str, model: str | None = None) -> None:
        self.api_key = api_key
        self.model = model or os.getenv(self.model_variable, self.default_model)

    def suggest_selector(self, payload: dict[str, Any]) -> str:
        prompt = build_user_prompt(payload)
        response = _post_json(self.url(), self.body(prompt), self.headers(), self.timeout_seconds)
        try:
            answer = self.answer(response)
        except (KeyError, IndexError, TypeError) as exc:
            raise RuntimeError(f"{self.provider_name} response had an unexpected shape") from exc
        answer = answer.strip()
        if not answer:
            raise RuntimeError(f"{self.provider_name} returned an empty answer")
        return answer

    @abstractmethod
    def url(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def headers(self) -> dict[str, str]:
        raise NotImplementedError

    @abstractmethod
    def body(self, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def answer(self, response: dict[str, Any]) -> str:
        raise NotImplementedError


class OpenAISelectorClient(SelectorSuggestionClient):
    provider_name = "openai"
    default_model = "gpt-4o-mini"
    model_variable = "OPENAI_MODEL"

    def url(self) -> str:
        return "https://api.openai.com/v1/chat/completions"

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

    def body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "temperature": 0,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        }

    def answer(self, response: dict[str, Any]) -> str:
        return response["choices"][0]["message"]["content"]


class AnthropicSelectorClient(SelectorSuggestionClient):
    provider_name = "anthropic"
    default_model = "claude-3-5-sonnet-latest"
    model_variable = "ANTHROPIC_MODEL"

    def url(self) -> str:
        return "https://api.anthropic.com/v1/messages"

    def headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
            "Content-Type": "application/json",
        }

    def body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": 128,
            "temperature": 0,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": prompt}],
        }

    def answer(self, response: dict[str, Any]) -> str:
        return "".join(block["text"] for block in response["content"] if block.get("type", "text") == "text")


class GeminiSelectorClient(SelectorSuggestionClient):
    provider_name = "gemini"
    default_model = "gemini-2.5-flash"
    model_variable = "GEMINI_MODEL"

    def url(self) -> str:
        return f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"

    def headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}

    def body(self, prompt: str) -> dict[str, Any]:
        return {
            "system_instruction": {"parts": [{"text": SYSTEM_PROMPT}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0},
        }

    def answer(self, response: dict[str, Any]) -> str:
        parts = response["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)


_PROVIDERS = {
    "openai": ("OPENAI_API_KEY", OpenAISelectorClient),
    "anthropic": ("ANTHROPIC_API_KEY", AnthropicSelectorClient),
    "gemini": ("GEMINI_API_KEY", GeminiSelectorClient),
}


def create_selector_client() -> SelectorSuggestionClient:
    provider = os.getenv("LLM_PROVIDER", "openai").lower()
    if provider not in _PROVIDERS:
        raise RuntimeError(f"Unsupported LLM provider: {provider}")
    key_variable, client_class = _PROVIDERS[provider]
    api_key = os.getenv(key_variable)
    if not api_key:
        raise RuntimeError(f"{key_variable} is required when LLM_PROVIDER={provider}")
    return client_class(api_key)


def _post_json(url: str, payload: dict[str, Any], headers: dict[str, str], timeout: float) -> dict[str, Any]:
    req = request.Request(url, data=json.dumps(payload).encode("utf-8"), headers=headers, method="POST")
    try:
        with request.urlopen(req, timeout=timeout) as response:
            return json.loads(response.read().decode("utf-8"))
    except error.HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="replace")
        raise RuntimeError(f"Selector request failed with status {exc.code}: {detail}") from exc
    except error.URLError as exc:
        raise RuntimeError(f"Selector request could not be completed: {exc.reason}") from exc
