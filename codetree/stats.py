"""Line, size and file-type statistics for a project."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

SENSITIVE_FILES: tuple[str, ...] = (
    ".env",
    ".env.local",
    ".env.development",
    ".env.production",
    ".env.test",
    "config.json",
    "secrets.json",
    "credentials.json",
    "aws-config.json",
    "firebase-config.json",
    "database.yml",
    "settings.py",
    "config.py",
    "wp-config.php",
    "application.properties",
)

_SLASH_COMMENT_EXTENSIONS = frozenset(
    {"rs", "c", "cpp", "h", "hpp", "js", "jsx", "ts", "tsx", "java", "cs", "go", "swift"}
)
_HASH_COMMENT_EXTENSIONS = frozenset({"py", "rb", "sh", "bash", "yml", "yaml"})
_MARKUP_EXTENSIONS = frozenset({"html", "xml", "svg"})
_STYLE_EXTENSIONS = frozenset({"css", "scss", "sass"})

_SLASH_PREFIXES = ("//", "/*", "*", "*/")

_KB = 1024
_MB = 1024 * 1024
_GB = 1024 * 1024 * 1024


def _extension(path: Path) -> str | None:
    """Return the text after the last dot of the file name, as for a file extension."""
    name = path.name
    dot = name.rfind(".")
    if dot <= 0:
        return None
    return name[dot + 1 :]


def _lines(content: str) -> list[str]:
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def format_size(size: int) -> str:
    """Format a byte count as bytes, KB, MB or GB."""
    if size < _KB:
        return f"{size} bytes"
    if size < _MB:
        return f"{size / _KB:.2f} KB"
    if size < _GB:
        return f"{size / _MB:.2f} MB"
    return f"{size / _GB:.2f} GB"


def is_likely_comment(line: str, path: str | os.PathLike[str]) -> bool:
    """Tell whether a trimmed line looks like a comment in the file's language."""
    ext = _extension(Path(path))
    if ext is None:
        return False
    ext = ext.lower()
    if ext in _SLASH_COMMENT_EXTENSIONS or ext in _STYLE_EXTENSIONS:
        return line.startswith(_SLASH_PREFIXES)
    if ext in _HASH_COMMENT_EXTENSIONS:
        return line.startswith("#")
    if ext in _MARKUP_EXTENSIONS:
        return line.startswith("<!--") or "-->" in line
    return False


def is_sensitive(path: str | os.PathLike[str]) -> bool:
    """Tell whether a file's name marks it as likely to hold secrets."""
    name = Path(path).name
    return any(name.endswith(suffix) for suffix in SENSITIVE_FILES)


@dataclass
class ProjectStats:
    """Running totals over the files of a project."""

    total_lines: int = 0
    code_lines: int = 0
    blank_lines: int = 0
    comment_lines: int = 0
    total_files: int = 0
    files_by_extension: dict[str, int] = field(default_factory=dict)
    lines_by_extension: dict[str, int] = field(default_factory=dict)
    total_size_bytes: int = 0
    sensitive_files_count: int = 0

    def add_file(self, path: str | os.PathLike[str]) -> None:
        """Count one file; a file that does not exist is ignored."""
        path = Path(path)
        if not path.exists():
            return

        self.total_files += 1
        if is_sensitive(path):
            self.sensitive_files_count += 1

        ext = _extension(path)
        key = ext.lower() if ext is not None else None
        if key is not None:
            self.files_by_extension[key] = self.files_by_extension.get(key, 0) + 1

        try:
            self.total_size_bytes += path.stat().st_size
        except OSError:
            pass

        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError):
            return

        lines = _lines(content)
        self.total_lines += len(lines)
        if key is not None:
            self.lines_by_extension[key] = self.lines_by_extension.get(key, 0) + len(lines)

        blank = comments = 0
        for line in lines:
            trimmed = line.strip()
            if not trimmed:
                blank += 1
            elif is_likely_comment(trimmed, path):
                comments += 1

        self.blank_lines += blank
        self.comment_lines += comments
        self.code_lines += len(lines) - blank - comments

    def _percent(self, count: int) -> float:
        return count / self.total_lines * 100.0 if self.total_lines else 0.0

    def format(self) -> str:
        """Return the statistics as a readable report."""
        parts = [
            "\nProject Statistics:\n",
            "==================\n",
            f"Total Files: {self.total_files}\n",
            f"Total Lines of Code: {self.total_lines}\n",
            f"  - Code Lines: {self.code_lines} ({self._percent(self.code_lines):.1f}%)\n",
            f"  - Comment Lines: {self.comment_lines} "
            f"({self._percent(self.comment_lines):.1f}%)\n",
            f"  - Blank Lines: {self.blank_lines} ({self._percent(self.blank_lines):.1f}%)\n",
            f"Total Size: {format_size(self.total_size_bytes)}\n",
        ]
        if self.sensitive_files_count > 0:
            parts.append(
                f"\nDetected {self.sensitive_files_count} potentially sensitive file(s) "
                "that have been protected.\n"
            )

        parts.append("\nFiles by Type:\n")
        ordered = sorted(self.files_by_extension.items(), key=lambda item: -item[1])
        for ext, count in ordered:
            lines = self.lines_by_extension.get(ext, 0)
            parts.append(f"  .{ext}: {count} files, {lines} lines\n")
        return "".join(parts)