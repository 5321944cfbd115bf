"""Path resolver: turn (referencing file, specifier) into a canonical file path."""

from __future__ import annotations

import os
from pathlib import Path

from mini2react.scanner.import_scanner import is_relative_specifier

DEFAULT_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx")


def normalize_path(path: Path) -> Path:
    """Lexically normalize ``path`` against the working directory.

    ``..`` pops the previous segment (a no-op at the root), ``.`` is dropped.
    The filesystem is never consulted.
    """
    if not path.is_absolute():
        path = Path(os.getcwd()) / path

    anchor = path.anchor
    parts: list[str] = []
    for part in path.parts[1:] if anchor else path.parts:
        if part == "..":
            if parts:
                parts.pop()
        elif part == ".":
            continue
        else:
            parts.append(part)
    return Path(anchor, *parts)


def with_extension(path: Path, extension: str) -> Path | None:
    """Replace (or add) the final suffix of ``path``."""
    if path.name in ("", ".", ".."):
        return None
    return path.with_suffix(extension)


def candidate_paths(base: Path, extensions: tuple[str, ...]) -> list[Path]:
    """Probe order: as-is, each extension swapped in, then ``index.<ext>``."""
    candidates = [base]
    for ext in extensions:
        swapped = with_extension(base, ext)
        if swapped is not None:
            candidates.append(swapped)
    for ext in extensions:
        candidates.append(base / f"index{ext}")
    return candidates


def canonical_file(path: Path) -> Path | None:
    """Return the canonical path of ``path`` if it is an existing regular file."""
    try:
        canon = normalize_path(path).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return None
    return canon if canon.is_file() else None


def resolve_specifier(
    current: Path,
    specifier: str,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> Path | None:
    """Resolve a relative import specifier seen in ``current``.

    Returns None for package specifiers and for anything that does not exist.
    """
    if not is_relative_specifier(specifier):
        return None

    raw = current.parent / specifier
    for candidate in candidate_paths(raw, extensions):
        resolved = canonical_file(candidate)
        if resolved is not None:
            return resolved
    return None
