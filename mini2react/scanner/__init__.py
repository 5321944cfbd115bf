"""Scanner layer: file enumeration and import extraction."""

from __future__ import annotations

from pathlib import Path

from mini2react.scanner.base import SourceScanner, scan_component_dirs
from mini2react.scanner.import_scanner import (
    extract_legacy_imports,
    extract_module_imports,
    is_relative_specifier,
    read_source,
)


def scan_source_files(
    directory: Path,
    extensions: tuple[str, ...],
    skip_dirs: list[str] | None = None,
) -> list[Path]:
    """Collect every file with one of ``extensions`` below ``directory``."""
    return SourceScanner(extensions, skip_dirs=skip_dirs).scan_directory(directory)


__all__ = [
    "SourceScanner",
    "extract_legacy_imports",
    "extract_module_imports",
    "is_relative_specifier",
    "read_source",
    "scan_component_dirs",
    "scan_source_files",
]
