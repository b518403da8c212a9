"""Orchestration of a single package assembly run."""

from __future__ import annotations

import json
import posixpath
from pathlib import Path
from typing import Dict, Iterable, Optional

from .config import PackagerConfig
from .copier import ArtifactCopier
from .entry_points import EntryPointSynthesizer
from .logging import get_logger
from .manifest import ManifestAmender
from .models import ModuleEntry, PackageResult, TreeRoot, parse_module_map
from .output import OutputTree
from .params import PackagerParams, ParamsError
from .paths import PathRewriter, normalize_separators
from .typings import build_dts_bundle, rewire_metadata, strip_amd_module


class Packager:
    """Assembles the publishable package directory described by :class:`PackagerParams`."""

    def __init__(self, params: PackagerParams, config: Optional[PackagerConfig] = None) -> None:
        self.params = params
        self.config = config or PackagerConfig(root=Path.cwd())
        self.logger = get_logger("packager")

        self.rewriter = PathRewriter(
            params.out, params.src_dir, params.bin_dir, params.genfiles_dir
        )
        self.modules: Dict[str, ModuleEntry] = {
            name: entry.with_derived_indexes(self.rewriter.bin_dir)
            for name, entry in parse_module_map(params.modules_manifest).items()
        }
        self.output = OutputTree(Path(params.out))
        self.copier = ArtifactCopier(self.output, escape_delimiter=self.config.escape_delimiter)
        self.amender = ManifestAmender(
            self.rewriter,
            self.modules,
            indent=self.config.manifest_indent,
            umd_suffix=self.config.umd_suffix,
        )

    def run(self) -> PackageResult:
        """Write every artifact into the output tree and return the run outcome."""
        params = self.params
        result = PackageResult()
        out = Path(params.out)
        self.logger.info("Assembling package into %s", out)

        if params.readme:
            self.copier.place(params.readme, out)

        self._place_flat_modules(params.esm2015, "", "esm2015")
        self._place_flat_modules(params.esm5, ".esm5", "esm5")
        for bundle in params.bundles:
            self.copier.place(bundle, out, "bundles")
        for file in params.fesm2015:
            self.copier.place(file, out, "fesm2015")
        for file in params.fesm5:
            self.copier.place(file, out, "fesm5")

        for file in params.type_definitions:
            self._write_from_input(file, self._read_typings(file))
        for file in params.data:
            self.output.copy(file, self.rewriter.relocate(file))

        self._write_metadata()

        license_banner = (
            Path(params.license_file).read_text(encoding="utf-8") if params.license_file else ""
        )
        self._write_dts_bundles(license_banner)

        self._write_sources(params.srcs, result)

        synthesizer = EntryPointSynthesizer(
            self.rewriter,
            self.amender,
            self.output,
            license_banner=license_banner,
            metadata_version=self.config.metadata_version,
        )
        synthesized = synthesizer.synthesize(self.modules, result)

        result.written = list(self.output.written)
        self.logger.info(
            "Packaged %s: %d files written, %d secondary entry points generated",
            result.root_package_name or "(unnamed package)",
            len(result.written),
            len(synthesized),
        )
        return result

    # ------------------------------------------------------------------
    # Internal helpers

    def _place_flat_modules(self, files: Iterable[str], root_suffix: str, output_subdir: str) -> None:
        for file in files:
            destination = self.rewriter.relocate_flat_module(file, root_suffix, output_subdir)
            if destination is None:
                self.logger.debug("Skipping %s: outside of the package root", file)
                continue
            self.copier.place(file, destination)

    def _write_metadata(self) -> None:
        # Entry points built without the flat module compiler have no metadata.
        for entry in self.modules.values():
            if not entry.metadata:
                continue
            destination = self.rewriter.relocate(entry.metadata)
            # All entry points of a package are dts bundled, or none are.
            if self.params.dts_bundles:
                text = Path(entry.metadata).read_text(encoding="utf-8")
                self.output.write_text(
                    destination, rewire_metadata(text, entry.metadata, entry.typings)
                )
            else:
                self.output.copy(entry.metadata, destination)

    def _write_dts_bundles(self, license_banner: str) -> None:
        suffix = self.params.dts_bundle_suffix
        for bundle in self.params.dts_bundles:
            dist_path = bundle.replace(suffix, ".d.ts", 1) if suffix else bundle
            content = build_dts_bundle(self._read_typings(bundle), license_banner)
            self._write_from_input(dist_path, content)

    def _write_sources(self, srcs: Iterable[str], result: PackageResult) -> None:
        for src in srcs:
            if self.rewriter.provenance(src) is not TreeRoot.SOURCE:
                message = f"The srcs of a package should not include output of other rules. Found: {src}"
                self.logger.error(message)
                result.errors.append(message)

            if posixpath.basename(normalize_separators(src)) != "package.json":
                self.output.copy(src, self.rewriter.relocate(src))
                continue

            manifest = json.loads(Path(src).read_text(encoding="utf-8"))
            if not isinstance(manifest, dict):
                raise ParamsError(f"{src} must contain a JSON object")
            content = self.amender.amend(src, manifest, False)
            package_name = manifest.get("name")
            if isinstance(package_name, str) and package_name:
                result.observe_package_name(package_name)
            self._write_from_input(src, content)

    def _read_typings(self, path: str) -> str:
        content = Path(path).read_text(encoding="utf-8")
        return strip_amd_module(content) if self.config.strip_amd_modules else content

    def _write_from_input(self, input_path: str, content: str) -> Path:
        return self.output.write_text(self.rewriter.relocate(input_path), content)


def assemble(params: PackagerParams, config: Optional[PackagerConfig] = None) -> PackageResult:
    """Run a :class:`Packager` for ``params``."""
    return Packager(params, config).run()


__all__ = ["Packager", "assemble"]
