"""Trees of values and their box-drawing rendering."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, TextIO

EDGE_EMPTY = "    "
EDGE_PIPE = "│   "
EDGE_ITEM = "├── "
EDGE_LAST = "└── "


def _same(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


@dataclass
class Node:
    """A tree node holding a value and its children."""

    value: Any = None
    nodes: list["Node"] = field(default_factory=list)

    def add(self, value: Any) -> "Node":
        """Append a new child holding ``value`` and return it."""
        node = Node(value)
        self.nodes.append(node)
        return node

    def add_path(self, *args: Any) -> "Node | None":
        """Walk or create a chain of children; return the last one."""
        if not args:
            return None
        current = self
        for value in args:
            current = current.find(value) or current.add(value)
        return current

    def find(self, value: Any) -> "Node | None":
        """Return the direct child holding ``value``, if any."""
        return next((node for node in self.nodes if _same(node.value, value)), None)


def _format(value: Any) -> str:
    return "<nil>" if value is None else str(value)


class Printer:
    """Writes trees to a text stream, standard output by default."""

    def __init__(self, writer: TextIO | None = None) -> None:
        self._writer = writer

    @property
    def writer(self) -> TextIO:
        return self._writer if self._writer is not None else sys.stdout

    def print(self, root: Node) -> None:
        self._print("", root)

    def _print(self, prefix: str, node: Node) -> None:
        writer = self.writer
        writer.write(_format(node.value) + "\n")
        if not node.nodes:
            return
        *init, last = node.nodes
        for child in init:
            writer.write(prefix + EDGE_ITEM)
            self._print(prefix + EDGE_PIPE, child)
        writer.write(prefix + EDGE_LAST)
        self._print(prefix + EDGE_EMPTY, last)


def print_tree(root: Node) -> None:
    """Print ``root`` to standard output."""
    Printer().print(root)