"""Extractor layer: brace matching and method extraction."""

from __future__ import annotations

from mini2react.extractor.base import extract_brace_block, find_block_end
from mini2react.extractor.method_extractor import (
    ExtractedMethod,
    extract_methods,
    extract_methods_from_file,
)

__all__ = [
    "ExtractedMethod",
    "extract_brace_block",
    "extract_methods",
    "extract_methods_from_file",
    "find_block_end",
]
