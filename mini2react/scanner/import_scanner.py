"""Import specifier extraction using regex patterns.

Two lexical shapes are recognized:

* module-style: a line starting with ``import`` or ``export`` that carries
  ``from "<specifier>"`` later on the same line.
* legacy-style: ``import ... from "<specifier>"`` or ``require("<specifier>")``
  anywhere in the text, as used by component scripts.

No specifier validation happens here; the resolver decides what is local.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_MODULE_IMPORT_RE = re.compile(
    r"""^\s*(?:import|export).*?from\s+['"](.+?)['"]""",
    re.MULTILINE,
)
_LEGACY_IMPORT_RE = re.compile(
    r"""(?:import.*from\s+|require\()\s*["']([^"']+)["']""",
)


def read_source(path: Path) -> str:
    """Read a source file, returning an empty string if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("unreadable source %s: %s", path, e)
        return ""


def extract_module_imports(source: str) -> list[str]:
    """Return module-style specifiers in order of appearance, duplicates kept."""
    return [m.group(1) for m in _MODULE_IMPORT_RE.finditer(source)]


def extract_legacy_imports(source: str) -> list[str]:
    """Return legacy-style (import/require) specifiers in order of appearance."""
    return [m.group(1) for m in _LEGACY_IMPORT_RE.finditer(source)]


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith(".")
