"""Tests for ngpack.params."""

from __future__ import annotations

from pathlib import Path

import pytest

from ngpack.params import ParamsError, load_params, parse_params, unquote


def _lines(**overrides: str) -> str:
    values = {
        "out": "dist",
        "src_dir": "packages/common",
        "bin_dir": "bazel-bin/packages/common",
        "genfiles_dir": "bazel-genfiles/packages/common",
        "modules": '{"@angular/common": {"index": "a.js", "typings": "a.d.ts"}}',
        "readme": "packages/common/README.md",
        "fesm2015": "a.js,b.js",
        "fesm5": "",
        "esm2015": "c.js",
        "esm5": "",
        "bundles": "a.umd.js",
        "srcs": "packages/common/package.json",
        "type_definitions": "a.d.ts",
        "data": "",
        "license": "LICENSE",
        "dts_bundles": "",
        "suffix": ".bundle.d.ts",
    }
    values.update(overrides)
    return "\n".join(values.values()) + "\n"


def test_unquote_strips_single_wrapping_quotes() -> None:
    assert unquote("'dist'") == "dist"
    assert unquote("dist") == "dist"
    assert unquote("'it's'") == "it's"


def test_parse_params_reads_fixed_order() -> None:
    params = parse_params(_lines())

    assert params.out == "dist"
    assert params.src_dir == "packages/common"
    assert params.bin_dir == "bazel-bin/packages/common"
    assert params.genfiles_dir == "bazel-genfiles/packages/common"
    assert params.modules_manifest.startswith('{"@angular/common"')
    assert params.readme == "packages/common/README.md"
    assert params.fesm2015 == ["a.js", "b.js"]
    assert params.fesm5 == []
    assert params.esm2015 == ["c.js"]
    assert params.bundles == ["a.umd.js"]
    assert params.srcs == ["packages/common/package.json"]
    assert params.type_definitions == ["a.d.ts"]
    assert params.data == []
    assert params.license_file == "LICENSE"
    assert params.dts_bundles == []
    assert params.dts_bundle_suffix == ".bundle.d.ts"


def test_parse_params_unquotes_values_and_drops_empty_list_items() -> None:
    params = parse_params(_lines(out="'dist'", srcs="'a/package.json,,b/index.ts,'"))

    assert params.out == "dist"
    assert params.srcs == ["a/package.json", "b/index.ts"]


def test_parse_params_tolerates_missing_trailing_values() -> None:
    params = parse_params("dist\npackages/common\nbazel-bin/packages/common\nbazel-genfiles/packages/common\n{}")

    assert params.readme == ""
    assert params.srcs == []
    assert params.dts_bundle_suffix == ""


def test_parse_params_requires_roots() -> None:
    with pytest.raises(ParamsError) as excinfo:
        parse_params("dist\n\nbazel-bin/packages/common")

    assert "src_dir" in str(excinfo.value)
    assert "modules_manifest" in str(excinfo.value)


def test_load_params_reads_file(tmp_path: Path) -> None:
    params_file = tmp_path / "params.txt"
    params_file.write_text(_lines(), encoding="utf-8")

    assert load_params(params_file).out == "dist"


def test_load_params_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_params(tmp_path / "missing.txt")
