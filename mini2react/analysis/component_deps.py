"""Component dependency collector.

Walks a mini-program component (config, markup, stylesheet, script) and
returns a typed, ordered list of dependency edges. Each file kind has its own
handler describing how to discover its children; the collector owns the
traversal state and the post-order edge emission, so a dependency always
precedes the file that needs it.
"""

from __future__ import annotations

import abc
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from mini2react.analysis.resolver import canonical_file, with_extension
from mini2react.converter.markup_parser import iter_elements, parse_markup
from mini2react.models import DependencyEdge, DependencyKind, Dialect
from mini2react.scanner import extract_legacy_imports, is_relative_specifier, read_source

logger = logging.getLogger(__name__)

Discovered = list[tuple[Path, DependencyKind]]

_STYLE_IMPORT_RE = re.compile(r"""@import\s+(?:url\(\s*)?["']([^"']+)["']""")
_STYLE_URL_RE = re.compile(r"""url\(\s*["']?([^"')]+?)["']?\s*\)""")
_REMOTE_PREFIXES = ("http://", "https://", "//", "data:")


@dataclass
class TraversalContext:
    """Mutable state of one collection call."""
    visited: set[Path] = field(default_factory=set)
    edges: list[DependencyEdge] = field(default_factory=list)
    seen: set[DependencyEdge] = field(default_factory=set)

    def emit(self, edge: DependencyEdge) -> None:
        if edge not in self.seen:
            self.seen.add(edge)
            self.edges.append(edge)


class KindHandler(abc.ABC):
    """Knows how to find the dependencies of one kind of dialect file."""

    extensions: tuple[str, ...] = ()

    def __init__(self, dialect: Dialect, strict: bool = False):
        self.dialect = dialect
        self.strict = strict

    def matches(self, path: Path) -> bool:
        return path.suffix in self.extensions

    @abc.abstractmethod
    def discover(self, path: Path, source: str) -> Discovered:
        """Return (existing target, kind) pairs in source order."""

    def _missing(self, path: Path, reference: str) -> None:
        if self.strict:
            logger.warning("unresolved reference %r in %s", reference, path)
        else:
            logger.debug("unresolved reference %r in %s", reference, path)


class ConfigHandler(KindHandler):
    """``usingComponents`` entries plus the component's own co-located files."""

    def __init__(self, dialect: Dialect, strict: bool = False, project_root: Path | None = None):
        super().__init__(dialect, strict)
        self.extensions = (dialect.config_extension,)
        self.project_root = project_root

    def matches(self, path: Path) -> bool:
        return path.name == self.dialect.config_filename

    def discover(self, path: Path, source: str) -> Discovered:
        found: Discovered = []
        for rel_path in self._using_components(path, source):
            if rel_path.startswith("plugin://"):
                continue
            if rel_path.startswith("/"):
                if self.project_root is None:
                    self._missing(path, rel_path)
                    continue
                component_dir = self.project_root / rel_path.lstrip("/")
            else:
                component_dir = path.parent / rel_path
            target = canonical_file(component_dir / self.dialect.config_filename)
            if target is None:
                self._missing(path, rel_path)
                continue
            found.append((target, DependencyKind.COMPONENT))

        found.extend(self._siblings(path))
        return found

    def _using_components(self, path: Path, source: str) -> list[str]:
        try:
            parsed = json.loads(source) if source.strip() else {}
        except (ValueError, RecursionError) as e:
            if self.strict:
                logger.warning("malformed config %s: %s", path, e)
            else:
                logger.debug("malformed config %s: %s", path, e)
            return []
        if not isinstance(parsed, dict):
            return []
        components = parsed.get("usingComponents")
        if not isinstance(components, dict):
            return []
        return [v for v in components.values() if isinstance(v, str)]

    def _siblings(self, path: Path) -> Discovered:
        dialect = self.dialect
        kinds: list[tuple[str, DependencyKind]] = [(dialect.markup_extension, DependencyKind.COMPONENT)]
        kinds += [(ext, DependencyKind.STYLE) for ext in dialect.style_extensions]
        kinds += [(ext, DependencyKind.SCRIPT) for ext in dialect.companion_scripts]

        found: Discovered = []
        for ext, kind in kinds:
            target = canonical_file(path.with_suffix(ext))
            if target is not None and target != path:
                found.append((target, kind))
        return found


class StyleHandler(KindHandler):
    """``@import`` directives and relative ``url()`` assets."""

    def __init__(self, dialect: Dialect, strict: bool = False):
        super().__init__(dialect, strict)
        self.extensions = dialect.style_extensions

    def discover(self, path: Path, source: str) -> Discovered:
        found: Discovered = []
        for line in source.splitlines():
            m = _STYLE_IMPORT_RE.search(line)
            if m:
                target = self._resolve_import(path, m.group(1))
                if target is None:
                    self._missing(path, m.group(1))
                else:
                    found.append((target, DependencyKind.STYLE))
                continue

            for url in _STYLE_URL_RE.findall(line):
                if not is_relative_specifier(url):
                    continue
                target = canonical_file(path.parent / url)
                if target is not None:
                    found.append((target, DependencyKind.ASSET))
        return found

    def _resolve_import(self, path: Path, spec: str) -> Path | None:
        raw = path.parent / spec
        candidate = with_extension(raw, self.dialect.style_import_extension)
        target = canonical_file(candidate) if candidate is not None else None
        if target is None and raw.suffix in self.dialect.style_extensions:
            target = canonical_file(raw)
        return target


class ScriptHandler(KindHandler):
    """Relative ``import``/``require`` specifiers, probing script extensions."""

    def __init__(self, dialect: Dialect, strict: bool = False):
        super().__init__(dialect, strict)
        self.extensions = dialect.script_file_extensions

    def discover(self, path: Path, source: str) -> Discovered:
        found: Discovered = []
        for spec in extract_legacy_imports(source):
            if not is_relative_specifier(spec):
                continue
            target = self._probe(path.parent / spec)
            if target is None:
                self._missing(path, spec)
            else:
                found.append((target, DependencyKind.SCRIPT))
        return found

    def _probe(self, raw: Path) -> Path | None:
        for ext in self.dialect.script_extensions:
            candidate = with_extension(raw, ext)
            if candidate is None:
                continue
            target = canonical_file(candidate)
            if target is not None:
                return target
        if raw.suffix:
            return canonical_file(raw)
        return None


class MarkupHandler(KindHandler):
    """Sub-script modules (``import-sjs``) and relative image sources."""

    def __init__(self, dialect: Dialect, strict: bool = False):
        super().__init__(dialect, strict)
        self.extensions = (dialect.markup_extension,)

    def discover(self, path: Path, source: str) -> Discovered:
        found: Discovered = []
        for element in iter_elements(parse_markup(source)):
            if element.tag == self.dialect.sjs_tag:
                spec = element.get("from")
                if not spec:
                    continue
                target = canonical_file(path.parent / spec)
                if target is None:
                    self._missing(path, spec)
                else:
                    found.append((target, DependencyKind.SCRIPT))
            elif element.tag == "image":
                src = element.get("src") or ""
                if "{{" in src or src.startswith(_REMOTE_PREFIXES) or not src:
                    continue
                target = canonical_file(path.parent / src)
                if target is not None:
                    found.append((target, DependencyKind.ASSET))
        return found


class ComponentDependencyCollector:
    """Collect the dependencies of a component, dependency-before-dependent."""

    def __init__(
        self,
        dialect: Dialect | None = None,
        project_root: Path | None = None,
        strict: bool = False,
    ):
        self.dialect = dialect or Dialect()
        self.handlers: list[KindHandler] = [
            ConfigHandler(self.dialect, strict, project_root),
            StyleHandler(self.dialect, strict),
            ScriptHandler(self.dialect, strict),
            MarkupHandler(self.dialect, strict),
        ]

    def collect(self, entry: Path, context: TraversalContext | None = None) -> list[DependencyEdge]:
        """Collect every edge reachable from ``entry``.

        Pass the same context to several calls to share one visited set.
        """
        context = context or TraversalContext()
        start = canonical_file(entry)
        if start is not None:
            self._visit(start, context)
        return context.edges

    def handler_for(self, path: Path) -> KindHandler | None:
        for handler in self.handlers:
            if handler.matches(path):
                return handler
        return None

    def _visit(self, path: Path, context: TraversalContext) -> None:
        if path in context.visited:
            return
        context.visited.add(path)

        handler = self.handler_for(path)
        if handler is None:
            return

        for target, kind in handler.discover(path, read_source(path)):
            self._visit(target, context)
            context.emit(DependencyEdge(source=path, target=target, kind=kind))


def collect_all_dependencies(
    path: Path,
    visited: set[Path] | None = None,
    out: list[DependencyEdge] | None = None,
    dialect: Dialect | None = None,
) -> list[DependencyEdge]:
    """Collect dependencies of ``path`` into ``out`` (created if omitted)."""
    context = TraversalContext(
        visited=visited if visited is not None else set(),
        edges=out if out is not None else [],
    )
    context.seen.update(context.edges)
    return ComponentDependencyCollector(dialect).collect(path, context)
