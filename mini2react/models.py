"""Data models for the mini2react migration pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


class DependencyKind(enum.Enum):
    COMPONENT = "component"
    STYLE = "style"
    SCRIPT = "script"
    ASSET = "asset"


@dataclass(frozen=True)
class DependencyEdge:
    """A discovered dependency between two files of a component tree.

    The kind reflects which handler found the edge, not the target's extension.
    """
    source: Path
    target: Path
    kind: DependencyKind


@dataclass
class Dialect:
    """File kinds and translation tables of the mini-program dialect."""
    source_extensions: tuple[str, ...] = (".ts", ".tsx")
    script_extensions: tuple[str, ...] = (".js", ".ts", ".json")
    style_extensions: tuple[str, ...] = (".less", ".acss")
    style_import_extension: str = ".less"
    # Files walked by the script handler
    script_file_extensions: tuple[str, ...] = (".js", ".ts", ".sjs")
    markup_extension: str = ".axml"
    config_filename: str = "index.json"
    sjs_tag: str = "import-sjs"
    event_prefixes: tuple[str, ...] = ("on", "catch")
    target_extension: str = ".tsx"
    # Emit inline style keys as fontSize instead of fontsize
    camelize_style_keys: bool = False
    tag_map: dict[str, str] = field(default_factory=lambda: {
        "view": "div",
        "text": "span",
        "image": "img",
    })

    # Same-stem script files checked next to a markup file, in order
    companion_scripts: tuple[str, ...] = (".js", ".ts")

    @property
    def config_extension(self) -> str:
        return Path(self.config_filename).suffix


@dataclass
class MigrationConfig:
    """Configuration for the graph and migration pipelines."""
    source_dir: Path = field(default_factory=lambda: Path("."))
    output_dir: Path = field(default_factory=lambda: Path("react"))
    dialect: Dialect = field(default_factory=Dialect)
    # Root that absolute "/..." component paths are resolved against (defaults to source_dir)
    project_root: Path | None = None
    restrict_to_universe: bool = False
    strict: bool = False
    skip_dirs: list[str] = field(default_factory=lambda: [
        "node_modules", ".git", "__pycache__", "build", "dist",
        ".next", ".venv", "venv", "env", "*.egg-info",
    ])


@dataclass
class MigrationResult:
    """Result of a per-component migration run."""
    output_dir: Path
    components: list[Path] = field(default_factory=list)
    files_copied: list[Path] = field(default_factory=list)
    files_converted: list[Path] = field(default_factory=list)
    errors: list[tuple[Path, str]] = field(default_factory=list)
    manifest_path: Path | None = None
