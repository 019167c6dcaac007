"""Debug dump utilities.

A dumper turns a value into indented lines and hands each one, with its
depth and the indent unit, to a *line output* callable. Every dump ends with
one call at `ROOT_DEPTH`, which outputs use to flush. By default both dumpers
write to ``sys.stdout``; an application replaces that through its
`DumperRegistry`.

Example:
    ```py
    >>> CliDumper().dump({"a": [1, 2]})
    dict:1 {
      'a': list:2 [
        1
        2
      ]
    }
    ```
"""

from __future__ import annotations

import html
import sys
from collections.abc import Callable, Iterator, Mapping
from typing import Any, TextIO

ROOT_DEPTH = -1
DEFAULT_INDENT_PAD = "  "

LineOutput = Callable[[str, int, str], None]
Line = tuple[str, int]

_SCALARS = (str, bytes, int, float, complex, bool, type(None))
_BRACKETS = {
    list: ("[", "]"),
    tuple: ("(", ")"),
    set: ("{", "}"),
    frozenset: ("{", "}"),
}


def make_line_output(channel: TextIO) -> LineOutput:
    """Return a line output writing indented lines to `channel`.

    Nothing is written for `ROOT_DEPTH`; any other line is written as
    `indent_pad * depth + line` followed by a newline.
    """

    def line_output(line: str, depth: int, indent_pad: str) -> None:
        if depth != ROOT_DEPTH:
            channel.write(indent_pad * depth + line + "\n")

    return line_output


def _stdout_line_output(line: str, depth: int, indent_pad: str) -> None:
    if depth == ROOT_DEPTH:
        sys.stdout.flush()
        return
    sys.stdout.write(indent_pad * depth + line + "\n")


class LineDumper:
    """Walk a value into `(line, depth)` pairs and write them out."""

    def __init__(
        self,
        output: LineOutput | None = None,
        indent_pad: str = DEFAULT_INDENT_PAD,
    ) -> None:
        self.output = output or _stdout_line_output
        self.indent_pad = indent_pad

    def dump(self, value: Any) -> None:
        for line, depth in self.lines(value):
            self.output(line, depth, self.indent_pad)
        self.output("", ROOT_DEPTH, self.indent_pad)

    def lines(self, value: Any) -> list[Line]:
        """Return the lines of a dump, without the trailing root sentinel."""
        return list(self._walk(value, 0, "", set()))

    def _walk(self, value: Any, depth: int, prefix: str, seen: set[int]) -> Iterator[Line]:
        if isinstance(value, _SCALARS):
            yield prefix + repr(value), depth
            return

        if id(value) in seen:
            yield prefix + "*RECURSION*", depth
            return

        children = self._children(value)
        if children is None:
            yield prefix + repr(value), depth
            return

        head, items, close = children
        if not items:
            yield prefix + head + " " + close, depth
            return

        seen = seen | {id(value)}
        yield prefix + head, depth
        for child_prefix, child in items:
            yield from self._walk(child, depth + 1, child_prefix, seen)
        yield close, depth

    @staticmethod
    def _children(value: Any) -> tuple[str, list[tuple[str, Any]], str] | None:
        """Describe a container as (opening line, [(prefix, child)], closing line)."""
        if isinstance(value, Mapping):
            items = [(f"{key!r}: ", child) for key, child in value.items()]
            return f"{type(value).__name__}:{len(items)} {{", items, "}"

        for kind, (opening, closing) in _BRACKETS.items():
            if isinstance(value, kind):
                members = sorted(value, key=repr) if isinstance(value, (set, frozenset)) else value
                items = [("", child) for child in members]
                return f"{type(value).__name__}:{len(items)} {opening}", items, closing

        if callable(value):
            return None
        attributes = getattr(value, "__dict__", None)
        if isinstance(attributes, dict):
            items = [(f"+{name}: ", child) for name, child in attributes.items()]
            return f"{type(value).__name__} {{", items, "}"

        return None


class CliDumper(LineDumper):
    """Dumper producing plain text lines."""


class HtmlDumper(LineDumper):
    """Dumper producing HTML-escaped lines wrapped in a ``<pre>`` block."""

    OPEN_TAG = '<pre class="dump">'
    CLOSE_TAG = "</pre>"

    def lines(self, value: Any) -> list[Line]:
        lines = [(html.escape(text), depth) for text, depth in super().lines(value)]
        first, first_depth = lines[0]
        lines[0] = (self.OPEN_TAG + first, first_depth)
        last, last_depth = lines[-1]
        lines[-1] = (last + self.CLOSE_TAG, last_depth)
        return lines


class DumperRegistry:
    """Per-application registration point for the dumpers' line output.

    Dumpers created through the registry write through the registered
    output; without a registration they keep their ``sys.stdout`` default.
    """

    def __init__(self) -> None:
        self._line_output: LineOutput | None = None

    @property
    def line_output(self) -> LineOutput | None:
        return self._line_output

    def register_line_output(self, output: LineOutput) -> None:
        self._line_output = output

    def cli(self, indent_pad: str = DEFAULT_INDENT_PAD) -> CliDumper:
        return CliDumper(self._line_output, indent_pad)

    def html(self, indent_pad: str = DEFAULT_INDENT_PAD) -> HtmlDumper:
        return HtmlDumper(self._line_output, indent_pad)
