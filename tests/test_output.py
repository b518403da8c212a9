"""Tests for ngpack.output."""

from __future__ import annotations

from pathlib import Path

from ngpack.output import OutputTree


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    output = OutputTree(tmp_path / "dist")
    target = tmp_path / "dist" / "http" / "testing" / "package.json"

    output.write_text(target, "{}")

    assert target.read_text(encoding="utf-8") == "{}"
    assert output.written == [target]


def test_copy_and_move_record_final_locations(tmp_path: Path) -> None:
    source = tmp_path / "fr.js"
    source.write_bytes(b"export default [];\n")
    output = OutputTree(tmp_path / "dist")

    copied = output.copy(source, tmp_path / "dist" / "locales" / "fr.js")
    moved = output.move(copied, tmp_path / "dist" / "locales" / "fr" / "index.js")

    assert moved.read_bytes() == b"export default [];\n"
    assert not copied.exists()
    assert output.written == [moved]
