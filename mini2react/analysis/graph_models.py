"""Data models for the file dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class DependencyGraph:
    forward: dict[Path, set[Path]] = field(default_factory=dict)  # file -> {imports}
    reverse: dict[Path, set[Path]] = field(default_factory=dict)  # file -> {importers}
    all_files: set[Path] = field(default_factory=set)  # scanned node universe

    def add_edge(self, source: Path, target: Path) -> None:
        self.forward.setdefault(source, set()).add(target)
        self.reverse.setdefault(target, set()).add(source)

    def dependencies(self, file: Path) -> list[Path]:
        return sorted(self.forward.get(file, ()))

    def dependents(self, file: Path) -> list[Path]:
        return sorted(self.reverse.get(file, ()))

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.forward.values())

    def nodes(self) -> set[Path]:
        """Every file that appears anywhere in the graph."""
        result = set(self.all_files)
        for source, targets in self.forward.items():
            result.add(source)
            result.update(targets)
        return result


# Sentinel leaf rendered in place of an already-expanded file
CYCLE_MARKER = "(cycle)"
