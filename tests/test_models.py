"""Tests for ngpack.models."""

from __future__ import annotations

import json

import pytest

from ngpack.models import ModuleEntry, PackageResult, parse_module_map
from ngpack.params import ParamsError


def test_parse_module_map_keeps_order_and_optional_fields() -> None:
    text = json.dumps(
        {
            "@angular/common": {
                "index": "bazel-bin/packages/common/common.js",
                "typings": "bazel-bin/packages/common/common.d.ts",
                "metadata": "bazel-bin/packages/common/common.metadata.json",
            },
            "@angular/common/http": {
                "index": "bazel-bin/packages/common/http/index.js",
                "typings": "bazel-bin/packages/common/http/index.d.ts",
                "guessedPaths": True,
            },
        }
    )

    modules = parse_module_map(text)

    assert list(modules) == ["@angular/common", "@angular/common/http"]
    assert modules["@angular/common"].metadata == "bazel-bin/packages/common/common.metadata.json"
    assert modules["@angular/common"].guessed_paths is False
    assert modules["@angular/common/http"].metadata is None
    assert modules["@angular/common/http"].guessed_paths is True


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        json.dumps({"@x/a": {"typings": "a.d.ts"}}),
        json.dumps({"@x/a": {"index": "a.js"}}),
        json.dumps({"@x/a": "a.js"}),
    ],
)
def test_parse_module_map_rejects_malformed_input(text: str) -> None:
    with pytest.raises(ParamsError):
        parse_module_map(text)


def test_with_derived_indexes() -> None:
    entry = ModuleEntry(
        name="@angular/common/http",
        index="bazel-bin/packages/common/http/http.js",
        typings="bazel-bin/packages/common/http/http.d.ts",
    )

    derived = entry.with_derived_indexes("bazel-bin/packages/common")

    assert derived.esm2015_index == "bazel-bin/packages/common/esm2015/http/http.js"
    assert derived.esm5_index == "bazel-bin/packages/common/esm5/http/http.js"
    assert entry.esm2015_index is None


def test_package_result_tracks_shortest_name_and_exit_code() -> None:
    result = PackageResult()
    result.observe_package_name("@angular/common/http")
    result.observe_package_name("@angular/common")
    result.observe_package_name("@angular/common/testing")

    assert result.root_package_name == "@angular/common"
    assert result.packages_with_manifest == {
        "@angular/common",
        "@angular/common/http",
        "@angular/common/testing",
    }
    assert result.exit_code == 0

    result.errors.append("bad src")
    assert result.exit_code == 1
