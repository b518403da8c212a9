"""Mapping of input artifact paths onto the output package tree."""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Dict, Optional, Tuple

from .models import TreeRoot


class PathResolutionError(ValueError):
    """Raised when an input path cannot be attributed to a known tree root."""


def normalize_separators(path: str) -> str:
    """Replace backslash separators with POSIX forward slashes."""
    return path.replace("\\", "/")


def _normalize(path: str) -> str:
    return posixpath.normpath(normalize_separators(path))


def _remainder(path: str, root: str) -> Optional[str]:
    """Return ``path`` below ``root`` when ``root`` appears as whole segments, else None."""
    if path == root:
        return ""
    if root == "/":
        return path[1:] if path.startswith("/") else None
    if path.startswith(f"{root}/"):
        return path[len(root) + 1 :]
    index = path.find(f"/{root}/")
    if index >= 0:
        return path[index + len(root) + 2 :]
    return None


class PathRewriter:
    """Re-roots artifacts from the source, bin or genfiles tree into the output tree."""

    def __init__(self, out: str | Path, src_dir: str, bin_dir: str, genfiles_dir: str) -> None:
        self.out = Path(out)
        self.src_dir = _normalize(src_dir)
        self.bin_dir = _normalize(bin_dir)
        self.genfiles_dir = _normalize(genfiles_dir)
        # Iteration order doubles as the tie-break when two roots are equally long.
        self.roots: Dict[TreeRoot, str] = {
            TreeRoot.BIN: self.bin_dir,
            TreeRoot.GENFILES: self.genfiles_dir,
            TreeRoot.SOURCE: self.src_dir,
        }

    def classify(self, input_path: str) -> Tuple[TreeRoot, str]:
        """Return the provenance of ``input_path`` and its path below that tree root."""
        path = _normalize(input_path)
        best: Optional[Tuple[TreeRoot, str]] = None
        best_length = -1
        for tree, root in self.roots.items():
            remainder = _remainder(path, root)
            if remainder is None:
                continue
            if len(root) > best_length:
                best = (tree, remainder)
                best_length = len(root)
        if best is None:
            raise PathResolutionError(
                f"{input_path} is not inside the source ({self.src_dir}), "
                f"bin ({self.bin_dir}) or genfiles ({self.genfiles_dir}) tree"
            )
        return best

    def provenance(self, input_path: str) -> TreeRoot:
        return self.classify(input_path)[0]

    def relocate(self, input_path: str) -> Path:
        """Return the output location of ``input_path``, preserving its tree-relative suffix."""
        _, remainder = self.classify(input_path)
        return self.out / remainder if remainder else self.out

    def relative_reference(self, from_path: str, artifact_path: str) -> str:
        """Return a forward-slash import path from ``from_path`` to a bin-tree artifact.

        Both ends are first re-rooted into the source tree so the reference
        stays valid once the package is published with the source layout.
        """
        artifact = _normalize(artifact_path)
        published = posixpath.join(self.src_dir, posixpath.relpath(artifact, self.bin_dir))
        _, from_remainder = self.classify(from_path)
        start = posixpath.dirname(posixpath.join(self.src_dir, from_remainder)) or "."
        result = normalize_separators(posixpath.relpath(published, start))
        if result.startswith(".."):
            return result
        return f"./{result}"

    def relocate_flat_module(
        self, file_path: str, root_suffix: str, output_subdir: str
    ) -> Optional[Path]:
        """Return the destination directory of a per-module file, or None to skip it.

        Per-module trees are re-rooted under a marker directory ending with
        ``root_suffix``; the last occurrence of the marker is the module root.
        Files that would land above the output subdirectory are skipped.
        """
        path = _normalize(file_path)
        if root_suffix:
            marker = f"{root_suffix}/"
            index = path.rfind(marker)
            if index < 0:
                raise PathResolutionError(f"{file_path} has no {marker!r} segment")
            module_root = path[: index + len(marker)]
            relative = posixpath.relpath(path, posixpath.join(module_root, self.src_dir))
        else:
            relative = posixpath.relpath(path, self.bin_dir)
        directory = posixpath.dirname(relative)
        if directory.startswith(".."):
            return None
        return self.out / output_subdir / directory if directory else self.out / output_subdir


__all__ = ["PathResolutionError", "PathRewriter", "normalize_separators"]
