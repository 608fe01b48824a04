from __future__ import annotations

import threading

from locator_healing.core.locator import Locator


class HealingHistory:
    """Thread-safe record of locators that replaced a broken locator.

    Records are keyed by the canonical form of the broken locator and keep
    insertion order. A substitute that is already recorded is not appended
    again. Nothing is evicted for the lifetime of the instance.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, list[Locator]] = {}

    def remember(self, original: Locator, successful: Locator) -> None:
        with self._lock:
            record = self._records.setdefault(original.key, [])
            if successful not in record:
                record.append(successful)

    def lookup(self, original: Locator) -> tuple[Locator, ...]:
        with self._lock:
            return tuple(self._records.get(original.key, ()))

    def snapshot(self) -> dict[str, tuple[Locator, ...]]:
        with self._lock:
            return {key: tuple(record) for key, record in self._records.items()}

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __contains__(self, original: Locator) -> bool:
        with self._lock:
            return original.key in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
