from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from locator_healing.core.locator import Locator


class HealingSettings(BaseModel):
    healing_enabled: bool = True
    learning_enabled: bool = True
    capture_artifacts: bool = False
    artifacts_root: str = "artifacts"


class ElementDefinition(BaseModel):
    key: str
    locator: str
    description: str | None = None

    @field_validator("locator")
    @classmethod
    def validate_locator(cls, value: str) -> str:
        Locator.parse(value)
        return value

    def to_locator(self) -> Locator:
        return Locator.parse(self.locator)


class TestSuiteConfig(BaseModel):
    healing: HealingSettings = Field(default_factory=HealingSettings)
    elements: list[ElementDefinition] = Field(default_factory=list)

    def get_element(self, key: str) -> ElementDefinition:
        for element in self.elements:
            if element.key == key:
                return element
        raise KeyError(f"Unknown element key: {key}")
