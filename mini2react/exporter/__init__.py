"""Exporter layer."""

from mini2react.exporter.folder_exporter import copy_dependency, target_path_for
from mini2react.exporter.manifest_generator import generate_manifest

__all__ = ["copy_dependency", "generate_manifest", "target_path_for"]
