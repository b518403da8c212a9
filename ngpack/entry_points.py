"""Generation of forwarding files for secondary entry points."""

from __future__ import annotations

import json
import posixpath
import re
from pathlib import Path
from typing import List, Mapping

from .logging import get_logger
from .manifest import ManifestAmender
from .models import ModuleEntry, PackageResult
from .output import OutputTree
from .paths import PathRewriter

_METADATA_SUFFIX = re.compile(r"\.metadata\.json$")
_TYPINGS_SUFFIX = re.compile(r"\.d\.tsx?$")


class EntryPointSynthesizer:
    """Writes re-export files and package.json files for secondary entry points.

    A secondary entry point such as ``@angular/common/http`` gets
    ``http.d.ts`` (and ``http.metadata.json`` when metadata exists) next to
    the root package.json, forwarding to the real implementation, plus an
    ``http/package.json`` unless the sources already provide one.
    """

    def __init__(
        self,
        rewriter: PathRewriter,
        amender: ManifestAmender,
        output: OutputTree,
        *,
        license_banner: str = "",
        metadata_version: int = 3,
    ) -> None:
        self.rewriter = rewriter
        self.amender = amender
        self.output = output
        self.license_banner = license_banner
        self.metadata_version = metadata_version
        self.logger = get_logger("entry_points")

    def synthesize(self, modules: Mapping[str, ModuleEntry], result: PackageResult) -> List[str]:
        """Generate files for every entry point extending the root package; return their names."""
        root = result.root_package_name
        if not root:
            self.logger.warning(
                "No package.json found among the sources; skipping secondary entry points"
            )
            return []

        synthesized: List[str] = []
        prefix = f"{root}/"
        for package_name, entry in modules.items():
            if not package_name.startswith(prefix):
                continue
            entry_point_name = package_name[len(prefix) :]
            if not entry_point_name:
                continue

            if entry.metadata:
                self.write_metadata_reexport(entry_point_name, entry.metadata, package_name)
            self.write_typings_reexport(entry_point_name, entry.typings)
            if package_name not in result.packages_with_manifest:
                self.write_package_json(entry_point_name, package_name)
            synthesized.append(entry_point_name)
            self.logger.debug("Synthesized entry point %s", package_name)
        return synthesized

    def write_metadata_reexport(
        self, entry_point_name: str, metadata_file: str, package_name: str
    ) -> Path:
        input_path = posixpath.join(self.rewriter.src_dir, f"{entry_point_name}.metadata.json")
        target = _METADATA_SUFFIX.sub("", metadata_file)
        document = {
            "__symbolic": "module",
            "version": self.metadata_version,
            "metadata": {},
            "exports": [{"from": self.rewriter.relative_reference(input_path, target)}],
            "flatModuleIndexRedirect": True,
            "importAs": package_name,
        }
        content = json.dumps(document, separators=(",", ":"), ensure_ascii=False) + "\n"
        return self.output.write_text(self.rewriter.relocate(input_path), content)

    def write_typings_reexport(self, entry_point_name: str, typings_file: str) -> Path:
        """Write ``<name>.d.ts`` containing e.g. ``export * from './http/http';``."""
        input_path = posixpath.join(self.rewriter.src_dir, f"{entry_point_name}.d.ts")
        target = _TYPINGS_SUFFIX.sub("", typings_file)
        reference = self.rewriter.relative_reference(input_path, target)
        content = f"{self.license_banner}\nexport * from '{reference}';\n"
        return self.output.write_text(self.rewriter.relocate(input_path), content)

    def write_package_json(self, entry_point_name: str, package_name: str) -> Path:
        manifest_path = posixpath.join(self.rewriter.src_dir, entry_point_name, "package.json")
        content = self.amender.amend(manifest_path, {"name": package_name}, True)
        return self.output.write_text(self.rewriter.relocate(manifest_path), content)


__all__ = ["EntryPointSynthesizer"]
