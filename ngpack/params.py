"""Parsing of the line-delimited parameter file handed over by the build rule."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

_QUOTED = re.compile(r"^'(.*)'$")

# Order in which the build rule writes its arguments, one per line.
_FIELDS = (
    "out",
    "src_dir",
    "bin_dir",
    "genfiles_dir",
    "modules_manifest",
    "readme",
    "fesm2015",
    "fesm5",
    "esm2015",
    "esm5",
    "bundles",
    "srcs",
    "type_definitions",
    "data",
    "license_file",
    "dts_bundles",
    "dts_bundle_suffix",
)

_LIST_FIELDS = {
    "fesm2015",
    "fesm5",
    "esm2015",
    "esm5",
    "bundles",
    "srcs",
    "type_definitions",
    "data",
    "dts_bundles",
}

_REQUIRED_FIELDS = ("out", "src_dir", "bin_dir", "genfiles_dir", "modules_manifest")


class ParamsError(ValueError):
    """Raised when the parameter file is incomplete or malformed."""


@dataclass
class PackagerParams:
    """Inputs for one packaging run."""

    out: str
    src_dir: str
    bin_dir: str
    genfiles_dir: str
    modules_manifest: str
    readme: str = ""
    fesm2015: List[str] = field(default_factory=list)
    fesm5: List[str] = field(default_factory=list)
    esm2015: List[str] = field(default_factory=list)
    esm5: List[str] = field(default_factory=list)
    bundles: List[str] = field(default_factory=list)
    srcs: List[str] = field(default_factory=list)
    type_definitions: List[str] = field(default_factory=list)
    data: List[str] = field(default_factory=list)
    license_file: str = ""
    dts_bundles: List[str] = field(default_factory=list)
    dts_bundle_suffix: str = ""


def unquote(value: str) -> str:
    """Strip one pair of wrapping single quotes added by the build tool."""
    return _QUOTED.sub(r"\1", value)


def split_list(value: str) -> List[str]:
    return [item for item in value.split(",") if item]


def parse_params(text: str) -> PackagerParams:
    """Parse the parameter blob into :class:`PackagerParams`."""
    return _from_lines(text.split("\n"))


def load_params(path: Path) -> PackagerParams:
    """Read and parse a parameter file."""
    return parse_params(path.read_text(encoding="utf-8"))


def _from_lines(lines: Sequence[str]) -> PackagerParams:
    values = [unquote(line) for line in lines]
    values.extend([""] * (len(_FIELDS) - len(values)))

    kwargs = {}
    for name, raw in zip(_FIELDS, values):
        kwargs[name] = split_list(raw) if name in _LIST_FIELDS else raw

    missing = [name for name in _REQUIRED_FIELDS if not kwargs[name]]
    if missing:
        raise ParamsError(f"Parameter file is missing required values: {', '.join(missing)}")

    return PackagerParams(**kwargs)


__all__ = ["PackagerParams", "ParamsError", "load_params", "parse_params", "split_list", "unquote"]
