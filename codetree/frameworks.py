"""Detection of frameworks used by a project."""

from __future__ import annotations

import os
import re
from pathlib import Path

UNKNOWN_VERSION = "?"

# Display name, followed by the package.json dependency names that reveal it.
_JS_FRAMEWORKS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("React", ("react",)),
    ("Vue.js", ("vue",)),
    ("Angular", ("@angular/core",)),
    ("Next.js", ("next",)),
    ("Three.js", ("three",)),
    ("Svelte", ("svelte",)),
    ("Tailwind CSS", ("tailwindcss",)),
    ("Material UI", ("@mui/material", "@material-ui/core")),
    ("Bootstrap", ("bootstrap",)),
    ("Chakra UI", ("@chakra-ui/react",)),
    ("Express.js", ("express",)),
    ("NestJS", ("@nestjs/core",)),
    ("Fastify", ("fastify",)),
    ("Redux", ("redux",)),
    ("MobX", ("mobx",)),
    ("Jest", ("jest",)),
    ("Cypress", ("cypress",)),
)

_PYTHON_REQUIREMENTS: tuple[tuple[str, str], ...] = (
    ("django", "Django"),
    ("flask", "Flask"),
    ("fastapi", "FastAPI"),
    ("sqlalchemy", "SQLAlchemy"),
    ("pytest", "Pytest"),
)

_FRONTEND = frozenset(
    {
        "React",
        "Vue.js",
        "Angular",
        "Next.js",
        "Three.js",
        "Svelte",
        "Tailwind CSS",
        "Material UI",
        "Bootstrap",
        "Chakra UI",
    }
)
_BACKEND = frozenset(
    {
        "Express.js",
        "NestJS",
        "Fastify",
        "Django",
        "Flask",
        "FastAPI",
        "Ruby on Rails",
        "Laravel",
        "Symfony",
        "Spring Boot",
        "ASP.NET Core",
    }
)
_TESTING = frozenset({"Jest", "Cypress", "Pytest"})

_DOTNET_MAX_DEPTH = 3


def _read_text(path: Path) -> str | None:
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _category(name: str) -> str:
    if name in _FRONTEND:
        return "Frontend"
    if name in _BACKEND:
        return "Backend"
    if name in _TESTING:
        return "Testing"
    return "Other"


def extract_version(package_json: str, dep_name: str) -> str | None:
    """Return the version string given for a dependency in package.json text."""
    pattern = rf'"{re.escape(dep_name)}"\s*:\s*"([^"]+)"'
    match = re.search(pattern, package_json)
    return match.group(1) if match else None


class FrameworkDetector:
    """Collects the frameworks found in a project, mapped to their versions."""

    def __init__(self) -> None:
        self.frameworks: dict[str, str] = {}

    def detect_js(self, package_json: str) -> None:
        """Detect JavaScript frameworks from the text of package.json."""
        for name, deps in _JS_FRAMEWORKS:
            if not any(f'"{dep}"' in package_json for dep in deps):
                continue
            version = next(
                (
                    found
                    for dep in deps
                    if (found := extract_version(package_json, dep)) is not None
                ),
                UNKNOWN_VERSION,
            )
            self.frameworks[name] = version

    def detect_python(self, root_dir: str | os.PathLike[str]) -> None:
        """Detect Python frameworks from requirements.txt and Django layout."""
        root = Path(root_dir)
        requirements = root / "requirements.txt"
        if requirements.exists():
            content = _read_text(requirements)
            if content is not None:
                for needle, name in _PYTHON_REQUIREMENTS:
                    if needle in content:
                        self.frameworks[name] = UNKNOWN_VERSION

        if (root / "manage.py").exists() and (
            (root / "settings.py").exists() or self._child_has_settings(root)
        ):
            self.frameworks["Django"] = UNKNOWN_VERSION

    @staticmethod
    def _child_has_settings(root: Path) -> bool:
        try:
            return any((child / "settings.py").exists() for child in root.iterdir())
        except OSError:
            return False

    def detect_ruby(self, root_dir: str | os.PathLike[str]) -> None:
        """Detect Ruby on Rails."""
        if (Path(root_dir) / "config" / "routes.rb").exists():
            self.frameworks["Ruby on Rails"] = UNKNOWN_VERSION

    def detect_php(self, root_dir: str | os.PathLike[str]) -> None:
        """Detect Laravel and Symfony."""
        root = Path(root_dir)
        if (root / "artisan").exists():
            self.frameworks["Laravel"] = UNKNOWN_VERSION
        if (
            (root / "bin" / "console").exists()
            and (root / "config").exists()
            and (root / "src" / "Kernel.php").exists()
        ):
            self.frameworks["Symfony"] = UNKNOWN_VERSION

    def detect_java(self, pom_xml: str | None) -> None:
        """Detect Java frameworks from the text of pom.xml, if there is one."""
        if pom_xml is None:
            return
        if "spring-boot" in pom_xml:
            self.frameworks["Spring Boot"] = UNKNOWN_VERSION
        if "hibernate" in pom_xml:
            self.frameworks["Hibernate"] = UNKNOWN_VERSION

    def detect_dotnet(self, root_dir: str | os.PathLike[str]) -> None:
        """Detect ASP.NET Core from .csproj files up to three levels deep."""
        for project_file in self._csproj_files(Path(root_dir)):
            content = _read_text(project_file)
            if content is not None and "Microsoft.AspNetCore" in content:
                self.frameworks["ASP.NET Core"] = UNKNOWN_VERSION
                break

    @staticmethod
    def _csproj_files(root: Path):
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            depth = len(current.relative_to(root).parts)
            if depth >= _DOTNET_MAX_DEPTH - 1:
                dirnames.clear()
            for filename in filenames:
                dot = filename.rfind(".")
                if dot > 0 and filename[dot + 1 :] == "csproj":
                    yield current / filename

    def format(self) -> str:
        """Return a report of the detected frameworks, grouped by category."""
        if not self.frameworks:
            return "No specific frameworks detected\n"

        groups: dict[str, list[tuple[str, str]]] = {
            "Frontend": [],
            "Backend": [],
            "Testing": [],
            "Other": [],
        }
        for name, version in self.frameworks.items():
            groups[_category(name)].append((name, version))

        parts = ["Detected Frameworks:\n"]
        for group, items in groups.items():
            if not items:
                continue
            parts.append(f"  {group} Frameworks:\n")
            parts.extend(f"    - {name} (v{version})\n" for name, version in items)
        return "".join(parts)