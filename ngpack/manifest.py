"""Amendment of package.json files so consumers resolve the packaged formats."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from .logging import get_logger
from .models import ModuleEntry
from .paths import PathRewriter

# package.json fields that declare a supported format and its entry path.
FORMAT_FIELDS = ("main", "fesm2015", "esm2015", "typings", "module", "es2015")


def has_explicit_format_properties(manifest: Mapping[str, Any]) -> bool:
    """Return True when the manifest already sets any format field (like ``main``)."""
    return any(name in FORMAT_FIELDS for name in manifest)


def bundle_name(package_name: str, kind_dir: str, *, umd_suffix: str = ".umd") -> str:
    """Return the path of a package's flat bundle relative to its package.json.

    ``@angular/common/http`` resolves to ``../bundles/common-http.umd.js`` for
    the UMD bundle and to ``../fesm2015/http.js`` for flat ES2015 modules.
    """
    parts = package_name.split("/")
    name_parts = parts[1:] if package_name.startswith("@") else parts
    up_levels = "/".join([".."] * (len(name_parts) - 1)) or "."
    if kind_dir == "bundles":
        basename = "-".join(name_parts) + umd_suffix
    elif len(name_parts) == 1:
        basename = name_parts[0]
    else:
        basename = "/".join(name_parts[1:])
    return f"{up_levels}/{kind_dir}/{basename}.js"


class ManifestAmender:
    """Points package.json format fields at the artifacts copied into the package."""

    def __init__(
        self,
        rewriter: PathRewriter,
        modules: Mapping[str, ModuleEntry],
        *,
        indent: int = 2,
        umd_suffix: str = ".umd",
    ) -> None:
        self.rewriter = rewriter
        self.modules = modules
        self.indent = indent
        self.umd_suffix = umd_suffix
        self.logger = get_logger("manifest")

    def amend(
        self, manifest_path: str, manifest: Dict[str, Any], is_synthesized: bool
    ) -> str:
        """Update ``manifest`` in place and return its serialized form."""
        package_name = manifest.get("name")
        entry = self.modules.get(package_name) if isinstance(package_name, str) else None

        if entry is None:
            # Some internal packages legitimately ship without flat module metadata.
            self.logger.warning(
                "No module metadata for package %s; not updating %s to point to it. "
                "The module target for this package is possibly missing its module name.",
                package_name,
                manifest_path,
            )
            return self.serialize(manifest)

        if entry.guessed_paths and not is_synthesized and has_explicit_format_properties(manifest):
            self.logger.warning(
                "%s explicitly sets format properties (like `main`); skipping automatic "
                "insertion of format properties. Ignore this warning if they are set intentionally.",
                manifest_path,
            )
            return self.serialize(manifest)

        manifest["main"] = bundle_name(entry.name, "bundles", umd_suffix=self.umd_suffix)
        manifest["fesm2015"] = bundle_name(entry.name, "fesm2015", umd_suffix=self.umd_suffix)
        manifest["esm2015"] = self.rewriter.relative_reference(
            manifest_path, entry.esm2015_index or entry.index
        )
        manifest["typings"] = self.rewriter.relative_reference(manifest_path, entry.typings)

        # Bundlers resolve the flat ES2015 file much faster than the per-module tree.
        manifest["module"] = manifest["fesm2015"]
        manifest["es2015"] = manifest["fesm2015"]

        self.logger.debug("Amended format fields of %s", manifest_path)
        return self.serialize(manifest)

    def serialize(self, manifest: Mapping[str, Any]) -> str:
        return json.dumps(manifest, indent=self.indent, ensure_ascii=False)


__all__ = ["FORMAT_FIELDS", "ManifestAmender", "bundle_name", "has_explicit_format_properties"]
