from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


class ArtifactManager:
    """Creates and manages DOM snapshots and screenshots of failed heals."""

    def __init__(self, root: str | Path = "artifacts") -> None:
        self.root = Path(root)
        self.dom_root = self.root / "dom_snapshots"
        self.screenshot_root = self.root / "screenshots"
        self._ensure_structure()

    def _ensure_structure(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self.dom_root.mkdir(parents=True, exist_ok=True)
        self.screenshot_root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def timestamp() -> str:
        return datetime.now(UTC).strftime("%Y%m%dT%H%M%S%fZ")

    @staticmethod
    def safe_name(label: str) -> str:
        return _UNSAFE_CHARS.sub("_", label).strip("_")[:80] or "element"

    def write_dom_snapshot(self, label: str, page_source: str, timestamp: str | None = None) -> Path:
        stamp = timestamp or self.timestamp()
        path = self.dom_root / f"{stamp}_{self.safe_name(label)}.html"
        path.write_text(page_source, encoding="utf-8")
        return path

    def screenshot_path(self, label: str, timestamp: str | None = None) -> Path:
        stamp = timestamp or self.timestamp()
        return self.screenshot_root / f"{stamp}_{self.safe_name(label)}.png"

    def capture(self, driver, label: str) -> dict[str, str]:
        """Saves the page source and a screenshot of the current page."""

        stamp = self.timestamp()
        dom_path = self.write_dom_snapshot(label, driver.page_source, stamp)
        screenshot_path = self.screenshot_path(label, stamp)
        driver.save_screenshot(str(screenshot_path))
        return {
            "dom_snapshot": str(dom_path),
            "screenshot": str(screenshot_path),
        }
