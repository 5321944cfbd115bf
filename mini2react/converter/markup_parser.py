"""Lenient markup parser producing an immutable Element/Text tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import Iterator, Union

logger = logging.getLogger(__name__)

# Elements that never have children, whether or not the source closes them
_VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr", "image", "import-sjs",
})


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Element:
    tag: str
    attrs: tuple[tuple[str, str | None], ...] = ()
    children: tuple["Node", ...] = ()

    def get(self, name: str) -> str | None:
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    def iter(self) -> Iterator["Element"]:
        """Yield this element and every descendant element, document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()


Node = Union[Element, Text]


class _Frame:
    __slots__ = ("tag", "attrs", "children")

    def __init__(self, tag: str, attrs: list[tuple[str, str | None]]):
        self.tag = tag
        self.attrs = tuple(attrs)
        self.children: list[Node] = []

    def freeze(self) -> Element:
        return Element(self.tag, self.attrs, tuple(self.children))


class _TreeBuilder(HTMLParser):
    """HTMLParser subclass that builds a node list, tolerating unbalanced tags."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self._root = _Frame("#document", [])
        self._stack: list[_Frame] = [self._root]

    @property
    def nodes(self) -> tuple[Node, ...]:
        return tuple(self._root.children)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]):
        frame = _Frame(tag, attrs)
        if tag in _VOID_TAGS:
            self._stack[-1].children.append(frame.freeze())
        else:
            self._stack.append(frame)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]):
        self._stack[-1].children.append(_Frame(tag, attrs).freeze())

    def handle_endtag(self, tag: str):
        # Unmatched closing tags are dropped
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag == tag:
                while len(self._stack) > depth:
                    self._close_top()
                return

    def handle_data(self, data: str):
        text = data.strip()
        if text:
            self._stack[-1].children.append(Text(text))

    def close(self):
        super().close()
        while len(self._stack) > 1:
            self._close_top()

    def _close_top(self) -> None:
        frame = self._stack.pop()
        self._stack[-1].children.append(frame.freeze())


def parse_markup(source: str) -> tuple[Node, ...]:
    """Parse markup text into top-level nodes. Failures yield an empty tree."""
    builder = _TreeBuilder()
    try:
        builder.feed(source)
        builder.close()
    except Exception as e:
        logger.debug("markup parse failed: %s", e)
        return ()
    return builder.nodes


def iter_elements(nodes: tuple[Node, ...]) -> Iterator[Element]:
    for node in nodes:
        if isinstance(node, Element):
            yield from node.iter()
