"""Extract handler functions from the ``methods: { ... }`` block of a component script.

This is a lightweight heuristic, not a JS parser: the ``methods`` object is
located by pattern, and each member's body is cut out with balanced-brace
matching so nested blocks, strings and comments do not end it early.
"""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass
from pathlib import Path

from mini2react.extractor.base import find_block_end
from mini2react.scanner import read_source

_METHODS_RE = re.compile(r"\bmethods\s*:\s*\{")

# name(args) {  |  name: function (args) {  |  name: (args) => {
_MEMBER_RE = re.compile(
    r"^[ \t]*(?:"
    r"(?P<async1>async\s+)?(?P<name1>\w+)\s*\((?P<args1>[^)]*)\)\s*\{"
    r"|(?P<name2>\w+)\s*:\s*(?P<async2>async\s+)?"
    r"(?:function\b\s*\w*\s*\((?P<args2>[^)]*)\)|\((?P<args3>[^)]*)\)\s*=>)\s*\{"
    r")",
    re.MULTILINE,
)

_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "function", "return", "with"})


@dataclass(frozen=True)
class ExtractedMethod:
    name: str
    params: str
    body: str
    is_async: bool = False

    @property
    def source(self) -> str:
        """The method rewritten as a standalone function declaration."""
        prefix = "async function" if self.is_async else "function"
        header = f"{prefix} {self.name}({self.params}) {{"
        if not self.body:
            return f"{header}\n}}"
        return f"{header}\n{textwrap.indent(self.body, '  ')}\n}}"


def extract_methods(source: str) -> list[ExtractedMethod]:
    """Return the members of the first ``methods`` object in ``source``."""
    m = _METHODS_RE.search(source)
    if not m:
        return []

    open_offset = m.end() - 1
    end = find_block_end(source, open_offset)
    block = source[open_offset + 1:end - 1]

    methods: list[ExtractedMethod] = []
    pos = 0
    while True:
        member = _MEMBER_RE.search(block, pos)
        if member is None:
            break

        name = member.group("name1") or member.group("name2")
        body_open = member.end() - 1
        body_end = find_block_end(block, body_open)
        pos = max(body_end, member.end())
        if name in _KEYWORDS:
            continue

        params = next(
            (member.group(g) for g in ("args1", "args2", "args3") if member.group(g) is not None),
            "",
        )
        body = _normalize_body(block[body_open + 1:body_end - 1])
        methods.append(ExtractedMethod(
            name=name,
            params=params.strip(),
            body=body,
            is_async=bool(member.group("async1") or member.group("async2")),
        ))

    return methods


def extract_methods_from_file(script_path: Path) -> list[ExtractedMethod]:
    return extract_methods(read_source(script_path))


def _normalize_body(body: str) -> str:
    lines = body.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if len(lines) == 1:
        return lines[0].strip()
    return textwrap.dedent("\n".join(lines)).strip("\n")
