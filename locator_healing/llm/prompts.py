from __future__ import annotations

from typing import Any

SYSTEM_PROMPT = """You locate web elements for Selenium tests. Return exactly one valid selector string and nothing else.
Rules:
1. Pick the candidate that best matches the element description.
2. Use only the numbered candidates; do not invent tags, attributes, text, or hierarchy.
3. Prefer the candidate's selector hint when it identifies the element.
4. Prefer a CSS selector when it uniquely identifies the element; otherwise return a valid XPath.
5. Output must be a single line with no explanation, no quotes, no markdown, and no code fence."""

PROMPT_ATTRIBUTES = ("aria-label", "placeholder", "title", "name", "type", "role")


def build_user_prompt(payload: dict[str, Any]) -> str:
    """Renders the description and ranked candidates as a numbered list."""

    lines = [f"Element description: {payload['description']}", "Candidates, best first:"]
    for index, candidate in enumerate(payload.get("candidates", []), start=1):
        lines.append(f"{index}. {_candidate_line(candidate)}")
    return "\n".join(lines)


def _candidate_line(candidate: dict[str, Any]) -> str:
    parts = [candidate.get("selector_hint", ""), f"<{candidate.get('tag', '')}>"]
    text = candidate.get("text", "")
    if text:
        parts.append(f"text={text[:80]!r}")
    attributes = candidate.get("attributes", {})
    for name in PROMPT_ATTRIBUTES:
        if attributes.get(name):
            parts.append(f"{name}={attributes[name]!r}")
    if candidate.get("parent_tag"):
        parts.append(f"inside <{candidate['parent_tag']}>")
    parts.append(f"score={candidate.get('heuristic_score', 0.0)}")
    return " ".join(parts)
