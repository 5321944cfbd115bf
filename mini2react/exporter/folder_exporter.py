"""Copy collected files into the output tree and write converted components."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from mini2react.converter import convert_markup_file
from mini2react.models import Dialect, MigrationResult

logger = logging.getLogger(__name__)


def target_path_for(file: Path, source_root: Path, target_root: Path) -> Path | None:
    """Mirror ``file``'s position under ``source_root`` into ``target_root``."""
    try:
        rel_path = file.relative_to(source_root)
    except ValueError:
        return None
    return target_root / rel_path


def copy_dependency(
    dep: Path,
    source_root: Path,
    target_root: Path,
    result: MigrationResult,
    dialect: Dialect | None = None,
) -> Path | None:
    """Copy ``dep`` byte-for-byte; markup files also get a sibling component.

    Failures are logged and recorded on ``result`` rather than raised.
    """
    dialect = dialect or Dialect()
    target = target_path_for(dep, source_root, target_root)
    if target is None:
        logger.debug("skipping %s: outside %s", dep, source_root)
        return None

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(dep, target)
    except OSError as e:
        logger.warning("Failed to copy %s to %s: %s", dep, target, e)
        result.errors.append((dep, str(e)))
        return None
    result.files_copied.append(target)

    if dep.suffix == dialect.markup_extension:
        component_path = target.with_suffix(dialect.target_extension)
        try:
            component_path.write_text(convert_markup_file(dep, dialect), encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to write %s: %s", component_path, e)
            result.errors.append((dep, str(e)))
        else:
            result.files_converted.append(component_path)

    return target
