"""Generate a React function component from a mini-program markup file."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from mini2react.converter.markup_converter import render_nodes
from mini2react.converter.markup_parser import parse_markup
from mini2react.extractor import ExtractedMethod, extract_methods_from_file
from mini2react.models import Dialect
from mini2react.scanner import read_source

logger = logging.getLogger(__name__)

PREAMBLE = 'import React from "react";'
BODY_INDENT = 6


@dataclass
class GeneratedComponent:
    """One converted component, alive only until it is written out."""
    name: str
    functions: list[str] = field(default_factory=list)
    body: str = ""

    def render(self) -> str:
        parts = [PREAMBLE, ""]
        if self.functions:
            parts += ["\n\n".join(self.functions), ""]
        parts += [
            f"export default function {self.name}() {{",
            "  return (",
            "    <>",
        ]
        if self.body.strip():
            parts.append(self.body.rstrip("\n"))
        parts += ["    </>", "  );", "}", ""]
        return "\n".join(parts)


def component_name(directory_name: str) -> str:
    """``my-button`` -> ``MyButton``; falls back to ``Component``."""
    name = "".join(part[:1].upper() + part[1:] for part in re.split(r"[-_\s]+", directory_name))
    name = re.sub(r"\W", "", name)
    if not name or not name[0].isalpha():
        name = "Component" + name
    return name


def stub_handler(name: str) -> str:
    return f"function {name}(e) {{\n  // not implemented: {name}\n}}"


def find_companion_script(markup_path: Path, dialect: Dialect) -> Path | None:
    for ext in dialect.companion_scripts:
        candidate = markup_path.with_suffix(ext)
        if candidate.is_file():
            return candidate
    return None


def build_component(markup_path: Path, dialect: Dialect | None = None) -> GeneratedComponent:
    """Parse, convert and merge handlers for one markup file.

    Read and parse failures degrade to an empty body or no methods.
    """
    dialect = dialect or Dialect()
    rendered = render_nodes(parse_markup(read_source(markup_path)), dialect, indent=BODY_INDENT)

    script = find_companion_script(markup_path, dialect)
    methods: list[ExtractedMethod] = extract_methods_from_file(script) if script else []
    declared = {m.name for m in methods}

    stubs = [
        stub_handler(event)
        for event in rendered.events
        if event not in declared and event.isidentifier()
    ]
    if stubs:
        logger.debug("%s: %d handler stub(s) synthesized", markup_path, len(stubs))

    return GeneratedComponent(
        name=component_name(markup_path.resolve().parent.name),
        functions=[m.source for m in methods] + stubs,
        body=rendered.text,
    )


def convert_markup_file(markup_path: Path, dialect: Dialect | None = None) -> str:
    """Return the full React component source for ``markup_path``."""
    return build_component(markup_path, dialect).render()
