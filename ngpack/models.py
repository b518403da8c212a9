"""Core data models shared across ngpack components."""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from .params import ParamsError


class TreeRoot(Enum):
    """Input trees an artifact path can originate from."""

    BIN = "bin"
    GENFILES = "genfiles"
    SOURCE = "source"


@dataclass(frozen=True)
class ModuleEntry:
    """Artifact paths recorded for one package or secondary entry point."""

    name: str
    index: str
    typings: str
    metadata: Optional[str] = None
    guessed_paths: bool = False
    esm5_index: Optional[str] = None
    esm2015_index: Optional[str] = None

    @classmethod
    def from_dict(cls, name: str, payload: Any) -> "ModuleEntry":
        if not isinstance(payload, dict):
            raise ParamsError(f"Module map entry for {name!r} must be an object")
        index = payload.get("index")
        typings = payload.get("typings")
        if not isinstance(index, str) or not index:
            raise ParamsError(f"Module map entry for {name!r} is missing 'index'")
        if not isinstance(typings, str) or not typings:
            raise ParamsError(f"Module map entry for {name!r} is missing 'typings'")
        metadata = payload.get("metadata")
        return cls(
            name=name,
            index=index,
            typings=typings,
            metadata=metadata if isinstance(metadata, str) and metadata else None,
            guessed_paths=bool(payload.get("guessedPaths", False)),
        )

    def with_derived_indexes(self, bin_dir: str) -> "ModuleEntry":
        """Return a copy carrying the per-module ES5/ES2015 index locations."""
        relative = posixpath.relpath(self.index, bin_dir)
        return replace(
            self,
            esm5_index=posixpath.join(bin_dir, "esm5", relative),
            esm2015_index=posixpath.join(bin_dir, "esm2015", relative),
        )


def parse_module_map(text: str) -> Dict[str, ModuleEntry]:
    """Parse the module-name to artifact-paths JSON mapping, keeping its order."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParamsError(f"Module map is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ParamsError("Module map must be a JSON object")
    return {name: ModuleEntry.from_dict(name, entry) for name, entry in payload.items()}


@dataclass
class PackageResult:
    """Accumulated state and outcome of a single packaging run."""

    root_package_name: str = ""
    packages_with_manifest: Set[str] = field(default_factory=set)
    errors: List[str] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 1 if self.errors else 0

    def observe_package_name(self, name: str) -> None:
        """Track the shortest manifest name seen; secondary entry points only ever extend it."""
        self.packages_with_manifest.add(name)
        if not self.root_package_name or len(name) < len(self.root_package_name):
            self.root_package_name = name


__all__ = ["ModuleEntry", "PackageResult", "TreeRoot", "parse_module_map"]
