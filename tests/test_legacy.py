import sys
from pathlib import Path

import pytest

from codetree.legacy import generate_report, is_excluded_dir, main


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.rs").write_text("fn main() {}\n", encoding="utf-8")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "lib.js").write_text("module.exports = 1;\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("readme text\n", encoding="utf-8")
    (tmp_path / "config.json").write_text('{"key": 1}\n', encoding="utf-8")
    return tmp_path


@pytest.mark.parametrize(
    "name, expected",
    [
        ("node_modules", True),
        (".next", True),
        ("target", True),
        ("vendor", True),
        ("src", False),
        ("lib", False),
    ],
)
def test_is_excluded_dir(name, expected):
    assert is_excluded_dir(name) is expected


def test_report_starts_with_tree_header(project):
    text = generate_report(project, "runner")
    assert text.startswith("Project File Tree:\n\n")
    assert "\nProject Codes:\n\n" in text


def test_report_leaves_out_excluded_entries(project):
    text = generate_report(project, "runner")
    assert "node_modules" not in text
    assert "lib.js" not in text
    assert "README.md" not in text
    assert "readme text" not in text


def test_report_lists_tree_entries(project):
    text = generate_report(project, "runner")
    tree = text.split("\nProject Codes:")[0]
    assert "├── src/\n" in tree
    assert "└── config.json\n" in tree
    assert tree.index("src/") < tree.index("config.json")


def test_report_numbers_files_and_shows_contents(project):
    text = generate_report(project, "runner")
    codes = text.split("\nProject Codes:\n\n", 1)[1]
    assert f"1. {Path('src') / 'main.rs'}\n\nfn main() {{}}\n" in codes
    assert '2. config.json\n\n{"key": 1}\n' in codes


def test_report_does_not_hide_sensitive_files(project):
    text = generate_report(project, "runner")
    assert '{"key": 1}' in text
    assert "Content hidden" not in text
    assert "Project Statistics" not in text


def test_report_skips_script_and_output_names(project):
    (project / "runner").write_text("script body\n", encoding="utf-8")
    (project / "codetree.txt").write_text("old report\n", encoding="utf-8")
    text = generate_report(project, "runner")
    assert "script body" not in text
    assert "old report" not in text
    assert "codetree.txt" not in text


def test_report_marks_unreadable_content(tmp_path):
    (tmp_path / "blob.bin").write_bytes(b"\xff\xfe\x00\x81")
    text = generate_report(tmp_path, "runner")
    assert "1. blob.bin\n (Unable to read file content)\n" in text


def test_main_writes_report_file(project, capsys):
    (project / "codetree.txt").write_text("stale\n", encoding="utf-8")
    assert main([str(project)]) == 0
    written = (project / "codetree.txt").read_bytes().decode("utf-8")
    assert "stale" not in written
    assert written == generate_report(project, sys.argv[0])
    out = capsys.readouterr().out
    assert "100% Complete" in out
    assert "File tree and contents have been written to" in out


def test_main_fails_for_missing_directory(tmp_path, capsys):
    missing = tmp_path / "missing"
    assert main([str(missing)]) == 1
    assert "Error:" in capsys.readouterr().err
    assert not missing.exists()