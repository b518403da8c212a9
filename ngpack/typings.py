"""Content rewrites for type definitions, dts bundles and flat module metadata."""

from __future__ import annotations

import json
import posixpath
import re

from .paths import normalize_separators

_AMD_MODULE = re.compile(r"^/// <amd-module name=.*/>[\r\n]+", re.MULTILINE)
_LICENSE_COMMENT = re.compile(r"/\*\*\s+\*\s@license[\s\S]*?\*/", re.MULTILINE)
# Matches relative module specifiers such as ./src/core/foo and ../src/core/foo.d.ts
_RELATIVE_PATH = re.compile(r"\.?\./[\w.\-/]+")


def strip_amd_module(content: str) -> str:
    """Remove named AMD module directives, which only bazel consumers understand."""
    return _AMD_MODULE.sub("", content)


def strip_license_comments(content: str) -> str:
    return _LICENSE_COMMENT.sub("", content)


def build_dts_bundle(content: str, license_banner: str) -> str:
    """Replace the per-file license comments of a dts bundle with a single banner."""
    return f"{license_banner}\n{strip_license_comments(strip_amd_module(content))}"


def rewire_metadata(metadata_text: str, metadata_path: str, typings_path: str) -> str:
    """Point flat module metadata at the bundled typings instead of per-file sources."""
    metadata = json.loads(metadata_text)

    typings_reference = normalize_separators(
        posixpath.relpath(
            normalize_separators(typings_path),
            posixpath.dirname(normalize_separators(metadata_path)) or ".",
        )
    )
    if not typings_reference.startswith(".."):
        typings_reference = f"./{typings_reference}"
    typings_reference = typings_reference.replace(".d.ts", "", 1)

    exports = metadata.get("exports") if isinstance(metadata, dict) else None
    if exports:
        # Re-exports of relative files become self-references once typings are bundled.
        metadata["exports"] = [
            item
            for item in exports
            if not (isinstance(item, dict) and _RELATIVE_PATH.search(str(item.get("from", ""))))
        ]

    serialized = json.dumps(metadata, separators=(",", ":"), ensure_ascii=False)
    return _RELATIVE_PATH.sub(lambda _match: typings_reference, serialized)


__all__ = ["build_dts_bundle", "rewire_metadata", "strip_amd_module", "strip_license_comments"]
