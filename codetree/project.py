"""Project type detection and the directory exclusions that follow from it."""

from __future__ import annotations

import os
from pathlib import Path

from codetree.frameworks import FrameworkDetector

BASE_EXCLUDED_DIRS: tuple[str, ...] = (
    ".idea",
    ".git",
    ".github",
    ".gitlab",
    ".vscode",
    ".venv",
    "cache",
    "fonts",
    "obj",
    "out",
)

_COMMON_EXCLUDED_DIRS: tuple[str, ...] = ("assets", "asset", "public", "bin")

_PYTHON_MARKERS: tuple[str, ...] = ("setup.py", "requirements.txt", "pyproject.toml")
_GRADLE_MARKERS: tuple[str, ...] = ("build.gradle", "build.gradle.kts")
_DOTNET_EXTENSIONS = frozenset({"csproj", "fsproj"})


def _read_text(path: Path) -> str | None:
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _extension(name: str) -> str | None:
    dot = name.rfind(".")
    if dot <= 0:
        return None
    return name[dot + 1 :]


def _has_dotnet_project(root: Path) -> bool:
    try:
        return any(_extension(child.name) in _DOTNET_EXTENSIONS for child in root.iterdir())
    except OSError:
        return False


class ProjectDetector:
    """Detects project types and frameworks, and the directories to leave out."""

    def __init__(self) -> None:
        self.excluded_dirs: set[str] = set(BASE_EXCLUDED_DIRS)
        self.project_types: set[str] = set()
        self.frameworks = FrameworkDetector()

    def _found(self, project_type: str, *excluded: str) -> None:
        self.project_types.add(project_type)
        self.excluded_dirs.update(excluded)

    def detect(self, root_dir: str | os.PathLike[str]) -> None:
        """Inspect the root directory and record what kind of project it holds."""
        root = Path(root_dir)

        if (root / "Cargo.toml").exists():
            self._found("Rust", "target")

        package_json = root / "package.json"
        if package_json.exists():
            self._found("JavaScript/Node.js", "node_modules", "dist", "build")
            content = _read_text(package_json)
            if content is not None:
                self.frameworks.detect_js(content)

        if any((root / marker).exists() for marker in _PYTHON_MARKERS):
            self._found("Python", "__pycache__", ".pytest_cache", "venv", "dist", "build")
            self.frameworks.detect_python(root)

        pom_xml = root / "pom.xml"
        if pom_xml.exists():
            self._found("Java/Maven", "target")
            content = _read_text(pom_xml)
            if content is not None:
                self.frameworks.detect_java(content)

        if any((root / marker).exists() for marker in _GRADLE_MARKERS):
            self._found("Java/Gradle", "build", ".gradle")
            self.frameworks.detect_java(None)

        if _has_dotnet_project(root):
            self._found(".NET", "bin", "obj")
            self.frameworks.detect_dotnet(root)

        if (root / "go.mod").exists():
            self._found("Go", "vendor")

        if (root / "Gemfile").exists():
            self._found("Ruby")
            self.frameworks.detect_ruby(root)

        if (root / "composer.json").exists():
            self._found("PHP", "vendor")
            self.frameworks.detect_php(root)

        self.excluded_dirs.update(_COMMON_EXCLUDED_DIRS)

    def format_info(self) -> str:
        """Return a report of the project types, exclusions and frameworks."""
        if self.project_types:
            extra_dirs = sorted(d for d in self.excluded_dirs if d not in BASE_EXCLUDED_DIRS)
            info = (
                f"Detected Project Types: {', '.join(sorted(self.project_types))}\n"
                f"Auto-excluded build directories: {', '.join(extra_dirs)}\n\n"
            )
        else:
            info = "No specific project type detected\n\n"
        return info + self.frameworks.format()

    def is_excluded_dir(self, name: str) -> bool:
        """Tell whether a directory of this name is left out of the report."""
        return name in self.excluded_dirs