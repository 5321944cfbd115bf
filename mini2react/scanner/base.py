"""Filesystem scanning for source files and component directories."""

from __future__ import annotations

import fnmatch
from pathlib import Path


class SourceScanner:
    """Enumerate files of the given extensions below a directory."""

    def __init__(self, extensions: tuple[str, ...], skip_dirs: list[str] | None = None):
        self.extensions = extensions
        self.skip_dirs = skip_dirs or [
            "node_modules", ".git", "__pycache__",
            "build", "dist", ".next", ".venv", "venv", "env",
        ]

    def scan_directory(self, directory: Path) -> list[Path]:
        """Recursively collect canonical paths of matching files."""
        files: list[Path] = []
        if not directory.is_dir():
            return files
        for path in sorted(directory.rglob("*")):
            if path.is_dir():
                continue
            if self._should_skip(path.relative_to(directory)):
                continue
            if path.suffix in self.extensions:
                try:
                    files.append(path.resolve(strict=True))
                except OSError:
                    continue
        return files

    def _should_skip(self, path: Path) -> bool:
        for part in path.parts:
            for pattern in self.skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False


def scan_component_dirs(base_dir: Path, config_filename: str = "index.json") -> list[Path]:
    """Return the config file of every immediate subdirectory that is a component."""
    result: list[Path] = []
    try:
        entries = sorted(base_dir.iterdir())
    except OSError:
        return result
    for entry in entries:
        if not entry.is_dir():
            continue
        config_path = entry / config_filename
        if config_path.is_file():
            result.append(config_path)
    return result
