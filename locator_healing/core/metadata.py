from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from locator_healing.core.locator import Locator


class HealingStrategy(str, Enum):
    HISTORY = "history"
    ALTERNATIVE = "alternative"
    SEMANTIC = "semantic"
    VISUAL = "visual"


@dataclass(frozen=True, slots=True)
class ResolutionOutcome:
    """Result of one healing run. ``strategy`` is None when exhausted."""

    element: Any = None
    strategy: HealingStrategy | None = None
    locator: Locator | None = None

    EXHAUSTED: ClassVar[ResolutionOutcome]

    @property
    def resolved(self) -> bool:
        return self.strategy is not None

    def __bool__(self) -> bool:
        return self.resolved


ResolutionOutcome.EXHAUSTED = ResolutionOutcome()


@dataclass(slots=True)
class CandidateElement:
    selector_hint: str
    tag: str
    text: str
    attributes: dict[str, str]
    parent_tag: str
    rect: dict[str, float]
    heuristic_score: float = 0.0


@dataclass(slots=True)
class HealAttempt:
    original_locator: str
    description: str | None
    strategy: str | None
    new_locator: str
    success: bool
    attempts: int
    artifact_paths: dict[str, str] = field(default_factory=dict)
