import pytest

from codetree.stats import ProjectStats, format_size, is_likely_comment, is_sensitive


def _write_lines(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_format_size_bytes():
    assert format_size(0) == "0 bytes"
    assert format_size(1023) == "1023 bytes"


def test_format_size_unit_boundaries():
    assert format_size(1024).endswith(" KB")
    assert format_size(1024 * 1024 - 1).endswith(" KB")
    assert format_size(1024 * 1024).endswith(" MB")
    assert format_size(1024 * 1024 * 1024).endswith(" GB")


def test_format_size_two_decimals():
    assert format_size(1536) == "1.50 KB"


@pytest.mark.parametrize(
    "line, name, expected",
    [
        ("// note", "main.rs", True),
        ("* continued", "main.c", True),
        ("let x = 1;", "main.rs", False),
        ("# note", "script.py", True),
        ("# note", "main.rs", False),
        ("<!-- note", "page.html", True),
        ("end -->", "page.xml", True),
        ("/* rule */", "style.SCSS", True),
        ("// note", "notes.txt", False),
        ("// note", "Makefile", False),
    ],
)
def test_is_likely_comment(line, name, expected):
    assert is_likely_comment(line, name) is expected


@pytest.mark.parametrize(
    "name, expected",
    [
        (".env", True),
        ("prod.env.local", True),
        ("secrets.json", True),
        ("app/settings.py", True),
        ("main.py", False),
        ("package.json", False),
    ],
)
def test_is_sensitive(name, expected):
    assert is_sensitive(name) is expected


def test_add_file_counts_lines(tmp_path):
    code = ["fn main() {", "    let x = 1;", "}"]
    comments = ["// heading", "    /* block */"]
    blanks = ["", "   "]
    path = tmp_path / "main.rs"
    _write_lines(path, comments[:1] + code[:1] + blanks + comments[1:] + code[1:])

    stats = ProjectStats()
    stats.add_file(path)

    assert stats.total_files == 1
    assert stats.code_lines == len(code)
    assert stats.comment_lines == len(comments)
    assert stats.blank_lines == len(blanks)
    assert stats.total_lines == len(code) + len(comments) + len(blanks)
    assert stats.total_size_bytes == path.stat().st_size


def test_add_file_without_trailing_newline(tmp_path):
    path = tmp_path / "a.py"
    path.write_text("x = 1\ny = 2", encoding="utf-8")
    stats = ProjectStats()
    stats.add_file(path)
    assert stats.total_lines == stats.code_lines == len(["x = 1", "y = 2"])


def test_add_file_groups_extensions(tmp_path):
    first = tmp_path / "a.rs"
    second = tmp_path / "b.RS"
    third = tmp_path / "c.py"
    _write_lines(first, ["a", "b"])
    _write_lines(second, ["c"])
    _write_lines(third, ["d"])

    stats = ProjectStats()
    for path in (first, second, third):
        stats.add_file(path)

    assert stats.files_by_extension == {"rs": 2, "py": 1}
    assert stats.lines_by_extension == {"rs": 3, "py": 1}
    assert stats.total_lines == sum(stats.lines_by_extension.values())


def test_add_missing_file_changes_nothing(tmp_path):
    stats = ProjectStats()
    stats.add_file(tmp_path / "missing.rs")
    assert stats == ProjectStats()


def test_add_undecodable_file_counts_size_only(tmp_path):
    path = tmp_path / "blob.bin"
    payload = b"\xff\xfe\x00\x81"
    path.write_bytes(payload)
    stats = ProjectStats()
    stats.add_file(path)
    assert stats.total_files == 1
    assert stats.total_size_bytes == len(payload)
    assert stats.total_lines == 0
    assert stats.files_by_extension == {"bin": 1}
    assert stats.lines_by_extension == {}


def test_add_file_without_extension(tmp_path):
    path = tmp_path / ".bashrc"
    _write_lines(path, ["# shell"])
    stats = ProjectStats()
    stats.add_file(path)
    assert stats.files_by_extension == {}
    assert stats.code_lines == stats.total_lines


def test_sensitive_files_counted(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{}", encoding="utf-8")
    stats = ProjectStats()
    stats.add_file(path)
    assert stats.sensitive_files_count == 1
    assert "Detected 1 potentially sensitive file(s) that have been protected." in stats.format()


def test_format_empty_stats():
    text = ProjectStats().format()
    assert text.startswith("\nProject Statistics:\n==================\n")
    assert "Total Files: 0\n" in text
    assert "  - Code Lines: 0 (0.0%)\n" in text
    assert "Total Size: 0 bytes\n" in text
    assert "potentially sensitive" not in text
    assert text.endswith("\nFiles by Type:\n")


def test_format_orders_extensions_by_count(tmp_path):
    stats = ProjectStats()
    _write_lines(tmp_path / "one.py", ["x"])
    stats.add_file(tmp_path / "one.py")
    for name in ("a.rs", "b.rs"):
        _write_lines(tmp_path / name, ["y", "z"])
        stats.add_file(tmp_path / name)

    text = stats.format()
    assert "  .rs: 2 files, 4 lines\n" in text
    assert "  .py: 1 files, 1 lines\n" in text
    assert text.index(".rs:") < text.index(".py:")
    assert f"Total Files: {stats.total_files}\n" in text