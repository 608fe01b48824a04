from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from selenium.common.exceptions import NoSuchElementException

from locator_healing.config.schema import HealingSettings
from locator_healing.core.alternatives import generate_alternatives
from locator_healing.core.history import HealingHistory
from locator_healing.core.locator import Locator
from locator_healing.core.metadata import HealAttempt, HealingStrategy, ResolutionOutcome
from locator_healing.core.strategies import SemanticFinder, VisualFinder
from locator_healing.reporting.artifacts import ArtifactManager
from locator_healing.reporting.audit import HealingAuditLogger
from locator_healing.reporting.reporter import HealingReporter, LoggingReporter

log = logging.getLogger(__name__)


class LocatorHealer:
    """Runs the ordered fallback chain for a locator that failed to resolve.

    The order is history replay, generated alternatives, the semantic finder
    and finally the visual finder. The first strategy that yields an element
    wins. Every failure inside a strategy is treated as "no candidate", so
    ``heal`` never raises and signals failure only with
    ``ResolutionOutcome.EXHAUSTED``.

    Flags are read once from ``settings``. The history is shared between
    healers and is the only state that outlives a ``heal`` call.
    """

    def __init__(
        self,
        history: HealingHistory,
        settings: HealingSettings | None = None,
        semantic_finder: SemanticFinder | None = None,
        visual_finder: VisualFinder | None = None,
        reporter: HealingReporter | None = None,
        audit_logger: HealingAuditLogger | None = None,
        artifact_manager: ArtifactManager | None = None,
        generator: Callable[[Locator, str | None], Iterable[Locator]] = generate_alternatives,
    ) -> None:
        settings = settings or HealingSettings()
        self.history = history
        self.healing_enabled = settings.healing_enabled
        self.learning_enabled = settings.learning_enabled
        self.semantic_finder = semantic_finder
        self.visual_finder = visual_finder
        self.reporter = reporter or LoggingReporter()
        self.audit_logger = audit_logger
        self.generator = generator
        if artifact_manager is None and settings.capture_artifacts:
            artifact_manager = ArtifactManager(settings.artifacts_root)
        self.artifact_manager = artifact_manager

    def heal(self, driver, original: Locator, description: str | None = None) -> ResolutionOutcome:
        if not self.healing_enabled:
            return ResolutionOutcome.EXHAUSTED

        self._report("info", f"Healing {original.key}" + (f" ({description})" if description else ""))
        attempts = 0
        steps = (
            self._replay_history,
            self._try_alternatives,
            self._try_semantic,
            self._try_visual,
        )
        for step in steps:
            outcome, tried = step(driver, original, description)
            attempts += tried
            if outcome.resolved:
                self._report("success", f"{original.key} -> {self._describe(outcome)}")
                self._audit(original, description, outcome, attempts, {})
                return outcome

        self._report("warning", f"All healing strategies exhausted for {original.key}")
        self._audit(original, description, ResolutionOutcome.EXHAUSTED, attempts, self._capture(driver, original))
        return ResolutionOutcome.EXHAUSTED

    def _replay_history(self, driver, original: Locator, description: str | None):
        learned = self.history.lookup(original)
        for tried, candidate in enumerate(learned, start=1):
            self._report("info", f"Replaying {candidate.key}")
            element = self._resolve(driver, candidate)
            if element is not None:
                return ResolutionOutcome(element, HealingStrategy.HISTORY, candidate), tried
        if learned:
            self._report("info", f"No learned locator for {original.key} resolved")
        return ResolutionOutcome.EXHAUSTED, len(learned)

    def _try_alternatives(self, driver, original: Locator, description: str | None):
        try:
            candidates = list(self.generator(original, description))
        except Exception as exc:  # noqa: BLE001 - a broken generator must not abort the chain.
            log.warning("Alternative generation failed for %s: %s", original.key, exc)
            return ResolutionOutcome.EXHAUSTED, 0
        for tried, candidate in enumerate(candidates, start=1):
            self._report("info", f"Trying alternative {candidate.key}")
            element = self._resolve(driver, candidate)
            if element is None:
                continue
            if self.learning_enabled:
                self.history.remember(original, candidate)
            return ResolutionOutcome(element, HealingStrategy.ALTERNATIVE, candidate), tried
        return ResolutionOutcome.EXHAUSTED, len(candidates)

    def _try_semantic(self, driver, original: Locator, description: str | None):
        if self.semantic_finder is None or not description or not description.strip():
            return ResolutionOutcome.EXHAUSTED, 0
        element = self._run_finder(self.semantic_finder, driver, description)
        if element is None:
            return ResolutionOutcome.EXHAUSTED, 1
        return ResolutionOutcome(element, HealingStrategy.SEMANTIC), 1

    def _try_visual(self, driver, original: Locator, description: str | None):
        if self.visual_finder is None:
            return ResolutionOutcome.EXHAUSTED, 0
        element = self._run_finder(self.visual_finder, driver, description)
        if element is None:
            return ResolutionOutcome.EXHAUSTED, 1
        return ResolutionOutcome(element, HealingStrategy.VISUAL), 1

    def _run_finder(self, finder, driver, description: str | None):
        name = getattr(finder, "name", type(finder).__name__)
        self._report("info", f"Trying {name} finder")
        try:
            return finder.find_element(driver, description)
        except NoSuchElementException:
            self._report("info", f"{name} finder found no match")
        except Exception as exc:  # noqa: BLE001 - external finders fail in arbitrary ways.
            self._report("warning", f"{name} finder failed: {type(exc).__name__}: {exc}")
        return None

    @staticmethod
    def _resolve(driver, locator: Locator):
        try:
            return driver.find_element(*locator.to_selenium())
        except NoSuchElementException:
            return None
        except Exception as exc:  # noqa: BLE001 - invalid selectors count as no match.
            log.warning("Resolving %s failed: %s: %s", locator.key, type(exc).__name__, exc)
            return None

    @staticmethod
    def _describe(outcome: ResolutionOutcome) -> str:
        if outcome.locator is None:
            return f"{outcome.strategy.value} finder"
        return f"{outcome.locator.key} via {outcome.strategy.value}"

    def _report(self, level: str, message: str) -> None:
        try:
            if level == "success":
                self.reporter.log_success(message)
            elif level == "warning":
                self.reporter.log_warning(message)
            else:
                self.reporter.log_info(message)
        except Exception as exc:  # noqa: BLE001 - reporting must not change the outcome.
            log.debug("Healing reporter failed: %s", exc)

    def _capture(self, driver, original: Locator) -> dict[str, str]:
        if self.artifact_manager is None:
            return {}
        try:
            return self.artifact_manager.capture(driver, original.key)
        except Exception as exc:  # noqa: BLE001 - artifact capture is best effort.
            log.warning("Could not capture artifacts for %s: %s", original.key, exc)
            return {}

    def _audit(
        self,
        original: Locator,
        description: str | None,
        outcome: ResolutionOutcome,
        attempts: int,
        artifact_paths: dict[str, str],
    ) -> None:
        if self.audit_logger is None:
            return
        attempt = HealAttempt(
            original_locator=original.key,
            description=description,
            strategy=outcome.strategy.value if outcome.strategy else None,
            new_locator=outcome.locator.key if outcome.locator else "",
            success=outcome.resolved,
            attempts=attempts,
            artifact_paths=artifact_paths,
        )
        try:
            self.audit_logger.write(attempt)
        except Exception as exc:  # noqa: BLE001 - auditing must not change the outcome.
            log.warning("Could not write healing audit record: %s", exc)
