"""Dependency graph builder: batch and lazy construction, tree rendering, roots, cycles."""

from __future__ import annotations

import json
import logging
from collections import deque
from pathlib import Path
from typing import Any, Iterable

from mini2react.analysis.graph_models import CYCLE_MARKER, DependencyGraph
from mini2react.analysis.resolver import DEFAULT_EXTENSIONS, resolve_specifier
from mini2react.scanner import (
    extract_module_imports,
    is_relative_specifier,
    read_source,
    scan_source_files,
)

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Build a file-level import graph for a source tree."""

    def __init__(
        self,
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
        skip_dirs: list[str] | None = None,
        restrict_to_universe: bool = False,
        strict: bool = False,
    ):
        self.extensions = extensions
        self.skip_dirs = skip_dirs
        self.restrict_to_universe = restrict_to_universe
        self.strict = strict

    def build_from_directory(self, root: Path) -> DependencyGraph:
        """Batch mode: scan every source file below ``root`` and link its imports.

        Targets outside the scanned universe are kept as leaf edges unless
        ``restrict_to_universe`` is set, in which case they are dropped.
        """
        graph = DependencyGraph()
        graph.all_files = set(scan_source_files(root, self.extensions, self.skip_dirs))

        for file in sorted(graph.all_files):
            for resolved in self._resolved_imports(file):
                if self.restrict_to_universe and resolved not in graph.all_files:
                    continue
                graph.add_edge(file, resolved)

        logger.info(
            "batch graph: %d files, %d edges", len(graph.all_files), graph.edge_count,
        )
        return graph

    def build_from_roots(self, roots: Iterable[Path]) -> DependencyGraph:
        """Lazy mode: expand outward from ``roots``, reading each file once."""
        graph = DependencyGraph()
        visited: set[Path] = set()
        frontier: deque[Path] = deque()

        for root in roots:
            try:
                frontier.append(root.resolve(strict=True))
            except OSError:
                logger.debug("root does not exist: %s", root)

        while frontier:
            file = frontier.popleft()
            if file in visited:
                continue
            visited.add(file)
            graph.forward.setdefault(file, set())

            for resolved in self._resolved_imports(file):
                graph.add_edge(file, resolved)
                if resolved not in visited:
                    frontier.append(resolved)

        graph.all_files = visited
        return graph

    def find_roots(self, graph: DependencyGraph) -> list[Path]:
        """Files of the universe that nothing imports."""
        return sorted(f for f in graph.all_files if not graph.reverse.get(f))

    def build_tree(
        self,
        graph: DependencyGraph,
        file: Path,
        visited: set[Path] | None = None,
    ) -> dict[str, Any] | str:
        """Render ``file``'s dependencies as a nested map keyed by path.

        A file already expanded in this rendering becomes the cycle marker.
        """
        if visited is None:
            visited = set()
        if file in visited:
            return CYCLE_MARKER
        visited.add(file)

        tree: dict[str, Any] = {}
        for child in graph.dependencies(file):
            tree[str(child)] = self.build_tree(graph, child, visited)
        return tree

    def build_forest(self, graph: DependencyGraph) -> dict[str, Any]:
        """One tree per root, each rendered with its own visited set."""
        return {
            str(root): self.build_tree(graph, root, set())
            for root in self.find_roots(graph)
        }

    def detect_cycles(self, graph: DependencyGraph) -> list[list[Path]]:
        """Detect all import cycles in the graph using DFS."""
        cycles: list[list[Path]] = []
        visited: set[Path] = set()
        rec_stack: set[Path] = set()
        path: list[Path] = []

        def dfs(node: Path) -> None:
            visited.add(node)
            rec_stack.add(node)
            path.append(node)

            for neighbor in graph.dependencies(node):
                if neighbor not in visited:
                    dfs(neighbor)
                elif neighbor in rec_stack:
                    idx = path.index(neighbor)
                    cycles.append(path[idx:] + [neighbor])

            path.pop()
            rec_stack.discard(node)

        for node in sorted(graph.nodes()):
            if node not in visited:
                dfs(node)

        return cycles

    def _resolved_imports(self, file: Path) -> list[Path]:
        resolved_paths: list[Path] = []
        for specifier in extract_module_imports(read_source(file)):
            resolved = resolve_specifier(file, specifier, self.extensions)
            if resolved is not None:
                resolved_paths.append(resolved)
            elif self.strict and is_relative_specifier(specifier):
                logger.warning("unresolved import %r in %s", specifier, file)
        return resolved_paths


def format_report(forest: dict[str, Any]) -> str:
    """Serialize a forest of dependency trees as indented JSON."""
    return json.dumps(forest, indent=2, ensure_ascii=False)
