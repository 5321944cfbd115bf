"""Convert a parsed markup tree into JSX text.

Rendering is pure: it returns the text together with the handler names bound
by event attributes, in order of first appearance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mini2react.converter.markup_parser import Element, Node, Text
from mini2react.models import Dialect

_MUSTACHE_RE = re.compile(r"\{\{\s*(.*?)\s*\}\}")
_WHOLE_MUSTACHE_RE = re.compile(r"^\s*\{\{\s*(.*?)\s*\}\}\s*$", re.DOTALL)

# Lowercase event suffixes whose React name is not a plain capitalization
_EVENT_NAMES = {
    "tap": "onClick",
    "touchstart": "onTouchStart",
    "touchmove": "onTouchMove",
    "touchend": "onTouchEnd",
    "touchcancel": "onTouchCancel",
    "longtap": "onLongTap",
    "mousedown": "onMouseDown",
    "mouseup": "onMouseUp",
    "keydown": "onKeyDown",
    "keyup": "onKeyUp",
}

INDENT_STEP = 2


@dataclass(frozen=True)
class RenderResult:
    text: str
    events: tuple[str, ...] = ()


def convert_tag(tag: str, dialect: Dialect) -> str:
    return dialect.tag_map.get(tag, tag)


def convert_style(style: str, camelize: bool = False) -> str:
    """``"font-size: 12px; color: red"`` -> ``{{ fontsize: "12px", color: "red" }}``.

    Hyphens are stripped from keys; ``camelize`` upper-cases the letter after each one.
    """
    pairs: list[str] = []
    for part in style.split(";"):
        key, sep, value = part.partition(":")
        if not sep:
            continue
        key = key.strip()
        key = _camelize(key) if camelize else key.replace("-", "")
        value = value.strip()
        if key and value:
            pairs.append(f'{key}: "{_escape(value)}"')
    if not pairs:
        return "{{}}"
    return "{{ " + ", ".join(pairs) + " }}"


def event_prop_name(suffix: str) -> str:
    known = _EVENT_NAMES.get(suffix.lower())
    if known:
        return known
    return "on" + suffix[:1].upper() + suffix[1:]


def match_event(name: str, dialect: Dialect) -> str | None:
    """Return the event suffix if ``name`` is an event-binding attribute."""
    for prefix in dialect.event_prefixes:
        if name.startswith(prefix) and len(name) > len(prefix):
            return name[len(prefix):]
    return None


def convert_attr(name: str, value: str | None, dialect: Dialect) -> tuple[str, str | None]:
    """Return ``(prop, handler)``; ``handler`` is set for event bindings."""
    if value is None:
        return name, None
    if name == "class":
        return f'className={_attr_value(value)}', None
    if name == "style":
        return f"style={convert_style(value, dialect.camelize_style_keys)}", None

    suffix = match_event(name, dialect)
    if suffix is not None:
        whole = _WHOLE_MUSTACHE_RE.match(value)
        handler = (whole.group(1) if whole else value).strip()
        return f"{event_prop_name(suffix)}={{{handler}}}", handler

    return f"{name}={_attr_value(value)}", None


def render_nodes(nodes: tuple[Node, ...], dialect: Dialect | None = None, indent: int = 0) -> RenderResult:
    """Render top-level nodes, one JSX line per opening/closing tag or text run."""
    dialect = dialect or Dialect()
    lines: list[str] = []
    events: dict[str, None] = {}
    for node in nodes:
        _render(node, indent, dialect, lines, events)
    text = "".join(line + "\n" for line in lines)
    return RenderResult(text=text, events=tuple(events))


def _render(
    node: Node,
    indent: int,
    dialect: Dialect,
    lines: list[str],
    events: dict[str, None],
) -> None:
    pad = " " * indent
    if isinstance(node, Text):
        if node.text:
            lines.append(pad + _MUSTACHE_RE.sub(r"{\1}", node.text))
        return
    if not isinstance(node, Element) or node.tag == dialect.sjs_tag:
        return

    tag = convert_tag(node.tag, dialect)
    props: list[str] = []
    for name, value in node.attrs:
        prop, handler = convert_attr(name, value, dialect)
        props.append(prop)
        if handler:
            events.setdefault(handler, None)
    opening = tag + "".join(" " + p for p in props)

    child_lines: list[str] = []
    for child in node.children:
        _render(child, indent + INDENT_STEP, dialect, child_lines, events)

    if child_lines:
        lines.append(f"{pad}<{opening}>")
        lines.extend(child_lines)
        lines.append(f"{pad}</{tag}>")
    else:
        lines.append(f"{pad}<{opening} />")


def _attr_value(value: str) -> str:
    whole = _WHOLE_MUSTACHE_RE.match(value)
    if whole:
        return "{" + whole.group(1) + "}"
    return '"' + value.replace('"', "&quot;") + '"'


def _escape(value: str) -> str:
    return value.replace('"', '\\"')


def _camelize(key: str) -> str:
    head, *rest = key.split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)
