from __future__ import annotations

import logging
from abc import ABC, abstractmethod

log = logging.getLogger(__name__)


class HealingReporter(ABC):
    """Receives human-readable healing events."""

    @abstractmethod
    def log_info(self, message: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def log_warning(self, message: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def log_success(self, message: str) -> None:
        raise NotImplementedError


class LoggingReporter(HealingReporter):
    """Forwards healing events to the standard logging tree."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or log

    def log_info(self, message: str) -> None:
        self.logger.info(message)

    def log_warning(self, message: str) -> None:
        self.logger.warning(message)

    def log_success(self, message: str) -> None:
        self.logger.info("HEALED %s", message)
