from __future__ import annotations

from abc import ABC, abstractmethod


class SemanticFinder(ABC):
    """Resolves an element from a natural-language description."""

    name = "semantic"

    @abstractmethod
    def find_element(self, driver, description: str):
        raise NotImplementedError


class VisualFinder(ABC):
    """Resolves an element by matching what is rendered on screen."""

    name = "visual"

    @abstractmethod
    def find_element(self, driver, description: str | None):
        raise NotImplementedError
