class HealingError(RuntimeError):
    """Raised when an element cannot be resolved even after healing."""


class ElementNotHealedError(HealingError):
    """Raised by the finder when every healing strategy is exhausted."""

    def __init__(self, locator, description: str | None = None) -> None:
        message = f"Could not resolve or heal locator {locator}"
        if description:
            message += f" ({description})"
        super().__init__(message)
        self.locator = locator
        self.description = description


class SelectorValidationError(HealingError):
    """Raised when an LLM returns an unusable selector."""


class LocatorParseError(ValueError):
    """Raised when a locator string cannot be parsed."""
