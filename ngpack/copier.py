"""Placement of bundle and module files into the output package."""

from __future__ import annotations

import posixpath
import stat
from pathlib import Path

from .logging import get_logger
from .output import OutputTree
from .paths import normalize_separators


class ArtifactCopier:
    """Copies built files into an output subdirectory, normalizing their names.

    ``.mjs`` files are published as ``.js``. Flat bundles for nested entry
    points encode ``/`` as the escape delimiter (``http__testing.js``); those
    are moved to the real subdirectory (``http/testing.js``) and their
    ``sourceMappingURL`` comment is pointed at the renamed map file.
    """

    def __init__(self, output: OutputTree, *, escape_delimiter: str = "__") -> None:
        self.output = output
        self.escape_delimiter = escape_delimiter
        self.logger = get_logger("copier")

    @staticmethod
    def output_name(file_path: str) -> str:
        name = posixpath.basename(normalize_separators(file_path))
        if name.endswith(".mjs"):
            return f"{name[: -len('.mjs')]}.js"
        return name

    def place(self, file_path: str, dest_dir: Path, relative_subpath: str = ".") -> Path:
        """Copy ``file_path`` into ``dest_dir/relative_subpath`` and return its final location."""
        directory = dest_dir / relative_subpath
        placed = self.output.copy(file_path, directory / self.output_name(file_path))
        if self.escape_delimiter in placed.name:
            return self._unescape(file_path, placed)
        return placed

    def _unescape(self, file_path: str, placed: Path) -> Path:
        parts = placed.name.split(self.escape_delimiter)
        target = self.output.move(placed, placed.parent.joinpath(*parts))
        self.logger.debug("Unescaped %s to %s", placed.name, target)

        if target.name.endswith(".js"):
            # Build outputs are typically read-only.
            target.chmod(target.stat().st_mode | stat.S_IWUSR)
            source_map = f"{posixpath.basename(normalize_separators(file_path))}.map"
            content = target.read_text(encoding="utf-8")
            target.write_text(content.replace(source_map, f"{target.name}.map"), encoding="utf-8")
        return target


__all__ = ["ArtifactCopier"]
