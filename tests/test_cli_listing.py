"""CLI integration tests for listing selected files."""

from __future__ import annotations

from pathlib import Path

import pytest

from wildsift.cli import main


def _make_tree(root: Path) -> None:
    """Create a minimal project directory tree for testing."""
    (root / "README.md").write_text("# Root\n")
    docs = root / "docs"
    docs.mkdir()
    (docs / "guide.md").write_text("# Guide\n")
    (docs / "api.md").write_text("# API\n")
    (root / "test_0.txt").write_text("zero\n")
    (root / "test_1.txt").write_text("one\n")


def _lines(out: str) -> list[str]:
    return [line for line in out.strip().split("\n") if line]


def test_lists_matching_files(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-f", "**/*.md", "--relative", "."]) == 0
    out = capsys.readouterr().out
    assert _lines(out) == ["README.md", "docs/api.md", "docs/guide.md"]


def test_exclusion_filter(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-f", "*.txt", "-f", "!test_0.txt", "-r"]) == 0
    assert _lines(capsys.readouterr().out) == ["test_1.txt"]


def test_absolute_paths_by_default(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _make_tree(tmp_path)
    assert main(["-f", "README.md", str(tmp_path)]) == 0
    assert _lines(capsys.readouterr().out) == [str(tmp_path / "README.md")]


def test_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    manifest = tmp_path / "out" / "manifest.txt"
    assert main(["-f", "docs/*.md", "-r", "-o", str(manifest), str(tmp_path)]) == 0
    assert capsys.readouterr().out == ""
    assert manifest.read_text() == "docs/api.md\ndocs/guide.md\n"


def test_filter_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "md.filters").write_text("# docs only\ndocs/*.md\n!docs/api.md\n")
    monkeypatch.chdir(tmp_path)
    assert main(["--filter-file", "md.filters", "-r", "."]) == 0
    assert _lines(capsys.readouterr().out) == ["docs/guide.md"]


def test_no_filters_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["."]) == 1
    assert "No filters specified" in capsys.readouterr().err


def test_missing_root_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["-f", "*", "missing"]) == 1
    assert "not a directory" in capsys.readouterr().err


def test_missing_filter_file_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["--filter-file", "missing.filters", "."]) == 2
    assert "Error:" in capsys.readouterr().err


def test_config_file_supplies_filters(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / ".wildsift.toml").write_text('filters = ["*.txt"]\nrelative = true\n')
    monkeypatch.chdir(tmp_path)
    assert main(["."]) == 0
    assert _lines(capsys.readouterr().out) == ["test_0.txt", "test_1.txt"]


def test_cli_filters_override_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / ".wildsift.toml").write_text('filters = ["*.txt"]\nrelative = true\n')
    monkeypatch.chdir(tmp_path)
    assert main(["-f", "README.md", "."]) == 0
    assert _lines(capsys.readouterr().out) == ["README.md"]


def test_extend_filter_adds_to_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "wildsift.toml").write_text('filters = ["*.txt"]\n')
    monkeypatch.chdir(tmp_path)
    assert main(["--extend-filter", "README.md", "-r", "."]) == 0
    assert _lines(capsys.readouterr().out) == ["README.md", "test_0.txt", "test_1.txt"]


def test_respect_gitignore_flag(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / ".gitignore").write_text("api.md\n")
    monkeypatch.chdir(tmp_path)
    assert main(["-f", "docs/*.md", "--respect-gitignore", "-r", "."]) == 0
    assert _lines(capsys.readouterr().out) == ["docs/guide.md"]


def test_verbose_logs_to_stderr(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-f", "docs/*.md", "-v", "."]) == 0
    captured = capsys.readouterr()
    assert len(_lines(captured.out)) == 2


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("v") or out == "unknown (package not installed)"


def test_non_utf8_filter_file_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "bad.filters").write_bytes(b"\xff\xfe*.txt\n")
    monkeypatch.chdir(tmp_path)
    assert main(["--filter-file", "bad.filters", "."]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error:" in captured.err


def test_invalid_config_file_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "wildsift.toml").write_text("filters = [\n")
    monkeypatch.chdir(tmp_path)
    assert main(["-f", "*.txt", "."]) == 1
    assert "Invalid config file" in capsys.readouterr().err


def test_config_filter_files_found_from_subdirectory(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "md.filters").write_text("*.md\n")
    (tmp_path / "wildsift.toml").write_text('filter-files = ["md.filters"]\nrelative = true\n')
    monkeypatch.chdir(tmp_path / "docs")
    assert main(["."]) == 0
    assert _lines(capsys.readouterr().out) == ["api.md", "guide.md"]
