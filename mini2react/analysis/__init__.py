"""Analysis layer: path resolution, file graphs and component dependencies."""

from mini2react.analysis.component_deps import (
    ComponentDependencyCollector,
    TraversalContext,
    collect_all_dependencies,
)
from mini2react.analysis.dependency_graph import DependencyGraphBuilder, format_report
from mini2react.analysis.graph_models import CYCLE_MARKER, DependencyGraph
from mini2react.analysis.resolver import normalize_path, resolve_specifier

__all__ = [
    "CYCLE_MARKER",
    "ComponentDependencyCollector",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "TraversalContext",
    "collect_all_dependencies",
    "format_report",
    "normalize_path",
    "resolve_specifier",
]
