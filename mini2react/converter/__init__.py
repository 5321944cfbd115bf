"""Converter layer: markup parsing, JSX rendering and component generation."""

from __future__ import annotations

from mini2react.converter.component_generator import (
    GeneratedComponent,
    build_component,
    component_name,
    convert_markup_file,
)
from mini2react.converter.markup_converter import RenderResult, render_nodes
from mini2react.converter.markup_parser import Element, Text, parse_markup

__all__ = [
    "Element",
    "GeneratedComponent",
    "RenderResult",
    "Text",
    "build_component",
    "component_name",
    "convert_markup_file",
    "parse_markup",
    "render_nodes",
]
