"""
Tests for conversion operations — discovery, output paths, batch runs.
"""

from pathlib import Path

import pytest

from md2norg.core.services.convert_ops import (
    ConvertError,
    convert_file,
    convert_tree,
    iter_markdown_files,
    resolve_output_path,
    write_document,
)


def _names(paths, root: Path) -> list[str]:
    return [p.relative_to(root).as_posix() for p in paths]


class TestDiscovery:
    def test_top_level_only(self, notes_dir: Path):
        found = _names(iter_markdown_files(notes_dir), notes_dir)
        assert found == ["index.md", "todo.md"]

    def test_recursive(self, notes_dir: Path):
        found = _names(iter_markdown_files(notes_dir, recursive=True), notes_dir)
        assert found == ["index.md", "sub/deeper/leaf.md", "sub/nested.md", "todo.md"]

    def test_extension_is_exact(self, tmp_path: Path):
        (tmp_path / "UPPER.MD").write_text("x")
        (tmp_path / "notes.markdown").write_text("x")
        (tmp_path / ".md").write_text("x")
        (tmp_path / "a.md").write_text("x")
        assert _names(iter_markdown_files(tmp_path), tmp_path) == ["a.md"]

    def test_directories_named_like_markdown_skipped(self, tmp_path: Path):
        (tmp_path / "folder.md").mkdir()
        assert list(iter_markdown_files(tmp_path)) == []

    def test_custom_extension(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("x")
        (tmp_path / "b.md").write_text("x")
        assert _names(iter_markdown_files(tmp_path, extension="txt"), tmp_path) == ["a.txt"]

    def test_missing_input(self, tmp_path: Path):
        with pytest.raises(ConvertError, match="not found"):
            list(iter_markdown_files(tmp_path / "nope"))


class TestOutputPaths:
    def test_sibling(self, tmp_path: Path):
        src = tmp_path / "notes" / "a.md"
        assert resolve_output_path(src, tmp_path / "notes") == tmp_path / "notes" / "a.norg"

    def test_mirrored(self, tmp_path: Path):
        src = tmp_path / "notes" / "sub" / "a.md"
        out = resolve_output_path(src, tmp_path / "notes", tmp_path / "out")
        assert out == tmp_path / "out" / "sub" / "a.norg"

    def test_only_last_extension_replaced(self, tmp_path: Path):
        src = tmp_path / "v1.2.md"
        assert resolve_output_path(src, tmp_path).name == "v1.2.norg"

    def test_custom_target_extension(self, tmp_path: Path):
        src = tmp_path / "a.md"
        assert resolve_output_path(src, tmp_path, extension="neorg").name == "a.neorg"

    def test_write_creates_parents(self, tmp_path: Path):
        target = tmp_path / "x" / "y" / "z.norg"
        write_document(target, "* hi\n")
        assert target.read_text(encoding="utf-8") == "* hi\n"


class TestConvertFile:
    def test_success(self, tmp_path: Path):
        src = tmp_path / "a.md"
        src.write_text("# A\n", encoding="utf-8")
        record = convert_file(src, tmp_path / "a.norg")
        assert record.ok
        assert not record.replaced
        assert (tmp_path / "a.norg").read_text(encoding="utf-8") == "* A\n"
        assert src.exists()

    def test_replace_removes_source(self, tmp_path: Path):
        src = tmp_path / "a.md"
        src.write_text("- x\n", encoding="utf-8")
        record = convert_file(src, tmp_path / "a.norg", replace=True)
        assert record.ok
        assert record.replaced
        assert not src.exists()

    def test_unicode_round_trip(self, tmp_path: Path):
        src = tmp_path / "u.md"
        src.write_text("# Ünïcødé 日本\n", encoding="utf-8")
        convert_file(src, tmp_path / "u.norg")
        assert (tmp_path / "u.norg").read_text(encoding="utf-8") == "* Ünïcødé 日本\n"

    def test_invalid_utf8_is_a_failed_record(self, tmp_path: Path):
        src = tmp_path / "bad.md"
        src.write_bytes(b"\xff\xfe\xfa")
        record = convert_file(src, tmp_path / "bad.norg", replace=True)
        assert record.failed
        assert record.error
        assert src.exists()
        assert not (tmp_path / "bad.norg").exists()

    def test_missing_source_is_a_failed_record(self, tmp_path: Path):
        record = convert_file(tmp_path / "gone.md", tmp_path / "gone.norg")
        assert record.failed


class TestConvertTree:
    def test_in_place(self, notes_dir: Path):
        report = convert_tree(notes_dir)
        assert report.status == "ok"
        assert report.converted == 2
        assert (notes_dir / "index.norg").read_text(encoding="utf-8") == (
            "* Index\n\n-- {:Daily.norg:}\n"
        )
        assert (notes_dir / "todo.norg").read_text(encoding="utf-8") == (
            "-- ( ) write\n-- (x) read\n"
        )
        assert not (notes_dir / "sub" / "nested.norg").exists()
        assert (notes_dir / "index.md").exists()

    def test_recursive_mirror(self, notes_dir: Path, tmp_path: Path):
        out = tmp_path / "out"
        report = convert_tree(notes_dir, output_dir=out, recursive=True)
        assert report.converted == 4
        assert (out / "sub" / "deeper" / "leaf.norg").read_text(encoding="utf-8") == "plain\n"
        assert (out / "sub" / "nested.norg").read_text(encoding="utf-8") == "** Nested\n"
        assert not (out / "readme.norg").exists()

    def test_replace(self, notes_dir: Path):
        convert_tree(notes_dir, recursive=True, replace=True)
        assert sorted(p.name for p in notes_dir.rglob("*.md")) == []
        assert (notes_dir / "sub" / "deeper" / "leaf.norg").exists()

    def test_aborts_on_first_failure(self, notes_dir: Path):
        (notes_dir / "bad.md").write_bytes(b"\xff")
        report = convert_tree(notes_dir)
        # bad.md sorts first, so nothing else is touched
        assert report.aborted
        assert report.status == "failed"
        assert report.total == 1
        assert not (notes_dir / "index.norg").exists()

    def test_keep_going_skips_failures(self, notes_dir: Path):
        (notes_dir / "bad.md").write_bytes(b"\xff")
        report = convert_tree(notes_dir, keep_going=True)
        assert not report.aborted
        assert report.status == "partial"
        assert report.failed == 1
        assert report.converted == 2

    def test_same_extension_in_place_refused(self, notes_dir: Path):
        with pytest.raises(ConvertError, match="overwrite"):
            convert_tree(notes_dir, source_extension="md", target_extension="md")

    def test_same_extension_with_output_allowed(self, notes_dir: Path, tmp_path: Path):
        report = convert_tree(
            notes_dir,
            output_dir=tmp_path / "out",
            source_extension="md",
            target_extension="md",
        )
        assert report.converted == 2
        assert (tmp_path / "out" / "index.md").read_text(encoding="utf-8").startswith("* Index")

    def test_missing_input(self, tmp_path: Path):
        with pytest.raises(ConvertError):
            convert_tree(tmp_path / "missing")

    def test_empty_directory(self, tmp_path: Path):
        report = convert_tree(tmp_path)
        assert report.total == 0
        assert report.status == "ok"
