"""Directory tree rendering and the full code report."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Collection, Iterable, Iterator
from pathlib import Path

from codetree.project import ProjectDetector
from codetree.stats import ProjectStats, is_sensitive

OUTPUT_FILE_NAME = "codetree.txt"

EXCLUDED_FILES = frozenset(
    {
        ".DS_Store",
        ".env",
        ".eslintrc.json",
        ".gitignore",
        ".npmignore",
        "Cargo.lock",
        "eslint.config.js",
        "favicon.ico",
        "globals.css",
        "next.config.mjs",
        "next-env.d.ts",
        "postcss.config.js",
        "postcss.config.mjs",
        "README.md",
        "package-lock.json",
        "pnpm-lock.yaml",
        "tailwind.config.js",
        "tailwind.config.ts",
        "tsconfig.app.json",
        "tsconfig.node.json",
        "tsconfig.json",
        "thumbs.db",
        "vite.config.ts",
        "yarn.lock",
    }
)

HIDDEN_CONTENT = "[Content hidden to protect potential sensitive information]\n"

_PIPE = "│   "
_BRANCH = "├── "
_LAST = "└── "


def is_excluded_file(path: str | os.PathLike[str]) -> bool:
    """Tell whether a file is always left out of the report."""
    return Path(path).name in EXCLUDED_FILES


def _list_entries(
    directory: Path, is_excluded_dir: Callable[[str], bool]
) -> list[tuple[bool, str, Path]]:
    entries = []
    try:
        with os.scandir(directory) as scan:
            for entry in scan:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    continue
                if is_dir and is_excluded_dir(entry.name):
                    continue
                entries.append((is_dir, entry.name, Path(entry.path)))
    except OSError:
        return []
    entries.sort(key=lambda item: (not item[0], item[1]))
    return entries


def _walk(
    directory: Path,
    depth: int,
    is_excluded_dir: Callable[[str], bool],
    skip_names: Collection[str],
) -> Iterator[tuple[str, Path | None]]:
    indent = _PIPE * depth
    last_indent = _PIPE * (depth - 1) + _LAST if depth > 0 else ""
    entries = _list_entries(directory, is_excluded_dir)
    last_index = len(entries) - 1

    for index, (is_dir, name, path) in enumerate(entries):
        if name in skip_names or is_excluded_file(path):
            continue
        is_last = index == last_index
        prefix = last_indent + _LAST if is_last else indent + _BRANCH
        if is_dir:
            yield f"{prefix}{name}/", None
            yield from _walk(path, depth + 1, is_excluded_dir, skip_names)
        else:
            yield f"{prefix}{name}", path


def walk_tree(
    directory: str | os.PathLike[str],
    is_excluded_dir: Callable[[str], bool],
    skip_names: Collection[str],
) -> Iterator[tuple[str, Path | None]]:
    """Yield each tree line with the file it names, or None for a directory.

    Directories come before files, each group sorted by name; directories for
    which ``is_excluded_dir`` is true, names in ``skip_names`` and always
    excluded files are left out.
    """
    return _walk(Path(directory), 0, is_excluded_dir, skip_names)


def render_contents(
    files: Iterable[str | os.PathLike[str]],
    root: str | os.PathLike[str],
    skip_names: Collection[str],
    progress: Callable[[int], None] | None = None,
) -> str:
    """Return the numbered listing of each file's content.

    ``progress``, if given, is called with the percentage of files handled.
    """
    paths = [Path(f) for f in files]
    root = Path(root)
    parts = []
    for number, path in enumerate(paths, start=1):
        if progress is not None:
            progress(int(number / len(paths) * 100.0))
        if path.name in skip_names or is_excluded_file(path):
            continue

        try:
            shown = path.relative_to(root)
        except ValueError:
            shown = path
        parts.append(f"{number}. {shown}\n")

        if path.exists():
            try:
                content = path.read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError):
                parts.append(" (Unable to read file content)\n")
            else:
                body = HIDDEN_CONTENT if is_sensitive(path) else content
                parts.append(f"\n{body}\n")
        else:
            parts.append(" (File not found)\n")
        parts.append("\n")
    return "".join(parts)


def generate_report(
    root: str | os.PathLike[str], script_name: str
) -> tuple[str, ProjectStats, ProjectDetector]:
    """Build the report for a project; return its text, statistics and detector."""
    root = Path(root)
    detector = ProjectDetector()
    detector.detect(root)
    stats = ProjectStats()
    skip_names = {script_name, OUTPUT_FILE_NAME}

    parts = ["Project File Tree:\n\n", detector.format_info()]
    files = []
    for line, path in walk_tree(root, detector.is_excluded_dir, skip_names):
        parts.append(line + "\n")
        if path is not None:
            files.append(path)
            stats.add_file(path)

    parts.append(stats.format())
    parts.append("\nProject Codes:\n\n")
    parts.append(render_contents(files, root, skip_names))
    return "".join(parts), stats, detector


def main(argv: list[str] | None = None) -> int:
    """Write codetree.txt for the directory given, or the current one."""
    args = sys.argv[1:] if argv is None else argv
    script_name = sys.argv[0] if sys.argv else ""
    try:
        start_dir = Path(args[0]) if args else Path.cwd()
        output_path = start_dir / OUTPUT_FILE_NAME
        if output_path.exists():
            output_path.unlink()

        print(f"Generating file tree for {start_dir}...")
        text, stats, detector = generate_report(start_dir, script_name)
        print(detector.format_info())

        print("Writing to file...")
        output_path.write_text(text, encoding="utf-8", newline="")
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print(stats.format())
    print(f"File tree and contents have been written to {output_path}")
    return 0