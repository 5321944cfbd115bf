"""Pipeline orchestrator: whole-project graph report and per-component migration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from mini2react.analysis import (
    ComponentDependencyCollector,
    DependencyGraph,
    DependencyGraphBuilder,
)
from mini2react.exporter import copy_dependency, generate_manifest
from mini2react.models import MigrationConfig, MigrationResult
from mini2react.scanner import scan_component_dirs, scan_source_files

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def graph_builder(config: MigrationConfig) -> DependencyGraphBuilder:
    return DependencyGraphBuilder(
        extensions=config.dialect.source_extensions,
        skip_dirs=config.skip_dirs,
        restrict_to_universe=config.restrict_to_universe,
        strict=config.strict,
    )


def run_graph(config: MigrationConfig, progress: ProgressCallback | None = None) -> DependencyGraph:
    """Build the batch import graph of every source file under ``source_dir``."""
    if progress:
        progress("Scanning", 0, 1)
    graph = graph_builder(config).build_from_directory(config.source_dir)
    if progress:
        progress("Scanning", 1, 1)
    return graph


def run_graph_report(
    config: MigrationConfig,
    progress: ProgressCallback | None = None,
) -> dict[str, Any]:
    """Return the dependency forest: one nested tree per root file."""
    graph = run_graph(config, progress)
    return graph_builder(config).build_forest(graph)


def run_migration(
    config: MigrationConfig,
    progress: ProgressCallback | None = None,
) -> MigrationResult:
    """Copy every component below ``source_dir`` with its dependencies, converting markup."""
    source_root = config.source_dir.resolve()
    dialect = config.dialect

    entries = scan_component_dirs(source_root, dialect.config_filename)
    if not entries:
        raise ValueError(
            f"No component directories found in {source_root}. "
            f"A component directory contains {dialect.config_filename!r}."
        )

    result = MigrationResult(output_dir=config.output_dir)
    project_root = (config.project_root or source_root).resolve()
    collector = ComponentDependencyCollector(dialect, project_root=project_root, strict=config.strict)
    copied: set[Path] = set()

    for i, entry in enumerate(entries):
        if progress:
            progress("Migrating", i, len(entries))
        entry = entry.resolve()
        result.components.append(entry.parent)

        edges = collector.collect(entry)
        # Dependencies first, then the entry config itself
        for file in [edge.target for edge in edges] + [entry]:
            if file in copied:
                continue
            copied.add(file)
            copy_dependency(file, source_root, config.output_dir, result, dialect)

    if progress:
        progress("Migrating", len(entries), len(entries))

    result.manifest_path = generate_manifest(result, source_root)
    logger.info(
        "migrated %d component(s): %d copied, %d converted, %d error(s)",
        len(result.components), len(result.files_copied),
        len(result.files_converted), len(result.errors),
    )
    return result


def run_graph_copy(
    config: MigrationConfig,
    entry_dir: str = "components",
) -> MigrationResult:
    """Copy every source file reachable from ``<source_dir>/<entry_dir>``."""
    source_root = config.source_dir.resolve()
    roots = scan_source_files(
        source_root / entry_dir, config.dialect.source_extensions, config.skip_dirs,
    )
    graph = graph_builder(config).build_from_roots(roots)

    result = MigrationResult(output_dir=config.output_dir)
    for file in sorted(graph.nodes()):
        copy_dependency(file, source_root, config.output_dir, result, config.dialect)
    return result
