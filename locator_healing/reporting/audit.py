from __future__ import annotations

import json
import threading
from dataclasses import asdict
from pathlib import Path

from locator_healing.core.metadata import HealAttempt


class HealingAuditLogger:
    """Appends one JSON line per healing run."""

    def __init__(self, root: str | Path = "artifacts") -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.healed_elements_path = self.root / "healed_elements.jsonl"
        self._lock = threading.Lock()

    def write(self, attempt: HealAttempt) -> None:
        line = json.dumps(asdict(attempt))
        with self._lock:
            with self.healed_elements_path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")

    def read(self) -> list[dict]:
        if not self.healed_elements_path.exists():
            return []
        with self.healed_elements_path.open("r", encoding="utf-8") as handle:
            return [json.loads(line) for line in handle if line.strip()]
