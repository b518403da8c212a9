"""Write access to the package output directory."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from .logging import get_logger


class OutputTree:
    """Creates parent directories on demand and records every file it writes."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.written: List[Path] = []
        self.logger = get_logger("output")

    def write_text(self, path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return self._record(path)

    def write_bytes(self, path: Path, content: bytes) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return self._record(path)

    def copy(self, source: str | Path, path: Path) -> Path:
        """Copy ``source`` to ``path`` including its permission bits."""
        path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(source, path)
        return self._record(path)

    def move(self, source: Path, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(source), str(path))
        if source in self.written:
            self.written.remove(source)
        return self._record(path)

    def _record(self, path: Path) -> Path:
        self.logger.debug("Wrote %s", path)
        self.written.append(path)
        return path


__all__ = ["OutputTree"]
