"""The plain report: the file tree and file contents, with a fixed exclusion list."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Collection, Iterable
from pathlib import Path

from codetree.tree import OUTPUT_FILE_NAME, is_excluded_file, walk_tree

EXCLUDED_DIRS = frozenset(
    {
        ".idea",
        ".git",
        ".github",
        ".gitlab",
        ".next",
        ".vscode",
        ".venv",
        ".target",
        ".zig-cache",
        "node_modules",
        "assets",
        "asset",
        "public",
        "bin",
        "build",
        "cache",
        "dist",
        "fonts",
        "obj",
        "out",
        "target",
        "vendor",
    }
)


def is_excluded_dir(name: str) -> bool:
    """Tell whether a directory of this name is left out of the report."""
    return name in EXCLUDED_DIRS


def _render_contents(
    files: Iterable[Path],
    root: Path,
    skip_names: Collection[str],
    progress: Callable[[int], None] | None,
) -> str:
    paths = list(files)
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
                parts.append(f"\n{content}\n")
        else:
            parts.append(" (File not found)\n")
        parts.append("\n")
    return "".join(parts)


def _build(
    root: Path, script_name: str, progress: Callable[[int], None] | None
) -> str:
    skip_names = {script_name, OUTPUT_FILE_NAME}
    parts = ["Project File Tree:\n\n"]
    files = []
    for line, path in walk_tree(root, is_excluded_dir, skip_names):
        parts.append(line + "\n")
        if path is not None:
            files.append(path)

    parts.append("\nProject Codes:\n\n")
    parts.append(_render_contents(files, root, skip_names, progress))
    return "".join(parts)


def generate_report(root: str | os.PathLike[str], script_name: str) -> str:
    """Return the report text for a project directory."""
    return _build(Path(root), script_name, None)


def _show_progress(percent: int) -> None:
    print(f"\rProcessing Files: {percent}% Complete", end="", flush=True)


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
        text = _build(start_dir, script_name, _show_progress)

        print("\nWriting to file...")
        output_path.write_text(text, encoding="utf-8", newline="")
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print(f"File tree and contents have been written to {output_path}")
    return 0