"""Balanced-brace matching for JS/TS sources, aware of strings and comments."""

from __future__ import annotations


def find_block_end(source: str, open_offset: int) -> int:
    """Return the offset just past the ``}`` matching the ``{`` at ``open_offset``.

    Braces inside string literals, template literals and comments are ignored.
    Returns ``len(source)`` if the block is never closed.
    """
    depth = 0
    in_single_quote = False
    in_double_quote = False
    in_template = False
    in_line_comment = False
    in_block_comment = False
    length = len(source)

    pos = open_offset
    while pos < length:
        ch = source[pos]
        next_ch = source[pos + 1] if pos + 1 < length else ""

        if in_line_comment:
            if ch == "\n":
                in_line_comment = False
        elif in_block_comment:
            if ch == "*" and next_ch == "/":
                in_block_comment = False
                pos += 1
        elif in_single_quote:
            if ch == "\\" and next_ch:
                pos += 1  # skip escaped char
            elif ch == "'":
                in_single_quote = False
        elif in_double_quote:
            if ch == "\\" and next_ch:
                pos += 1
            elif ch == '"':
                in_double_quote = False
        elif in_template:
            if ch == "\\" and next_ch:
                pos += 1
            elif ch == "`":
                in_template = False
        else:
            if ch == "/" and next_ch == "/":
                in_line_comment = True
                pos += 1
            elif ch == "/" and next_ch == "*":
                in_block_comment = True
                pos += 1
            elif ch == "'":
                in_single_quote = True
            elif ch == '"':
                in_double_quote = True
            elif ch == "`":
                in_template = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return pos + 1

        pos += 1

    return length


def extract_brace_block(source: str, start_offset: int) -> str:
    """Extract from ``start_offset`` through the brace block that follows it."""
    open_offset = source.index("{", start_offset)
    return source[start_offset:find_block_end(source, open_offset)]
