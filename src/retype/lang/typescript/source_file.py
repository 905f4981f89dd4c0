import bisect
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from tree_sitter import Node, Tree

from .parser import get_parser

_NEWLINE = re.compile(b"\n")


@dataclass(frozen=True)
class TextEdit:
    """Replace the byte range [start, end) with `replacement`."""

    start: int
    end: int
    replacement: str


class SourceFile:
    """
    A parsed TypeScript file.

    Every text change reparses the file and bumps `generation`, which is how
    declaration handles detect that they went stale. Analysis results are
    memoized in `cache`, which is reset together with the tree.
    """

    def __init__(self, path: Path, text: str):
        self.path = path
        self.generation = 0
        self.dirty = False
        self._load(text)

    def _load(self, text: str) -> None:
        self._text = text
        self._source = text.encode("utf-8")
        self._tree: Tree = get_parser(self.path).parse(self._source)
        self._line_starts = [0] + [m.end() for m in _NEWLINE.finditer(self._source)]
        self.cache: Dict[str, Any] = {}

    @property
    def text(self) -> str:
        return self._text

    @property
    def source(self) -> bytes:
        return self._source

    @property
    def tree(self) -> Tree:
        return self._tree

    @property
    def root(self) -> Node:
        return self._tree.root_node

    def replace_text(self, text: str) -> None:
        self._load(text)
        self.generation += 1
        self.dirty = True

    def apply_edits(self, edits: Iterable[TextEdit]) -> None:
        ordered = sorted(set(edits), key=lambda e: (e.start, e.end), reverse=True)
        if not ordered:
            return
        buffer = self._source
        boundary = len(buffer)
        for edit in ordered:
            if edit.end > boundary:
                raise ValueError(
                    f"Overlapping edits in {self.path} at byte {edit.start}"
                )
            buffer = buffer[: edit.start] + edit.replacement.encode("utf-8") + buffer[edit.end :]
            boundary = edit.start
        self.replace_text(buffer.decode("utf-8"))

    def mark_saved(self) -> None:
        self.dirty = False
        self.generation += 1
        # Memoized records carry the old generation.
        self.cache = {}

    def node_text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def slice(self, start: int, end: int) -> str:
        return self._source[start:end].decode("utf-8")

    def line_and_column(self, offset: int) -> Tuple[int, int]:
        """1-based line and character column of a byte offset."""
        index = bisect.bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[index]
        column = len(self._source[line_start:offset].decode("utf-8", errors="replace"))
        return index + 1, column + 1

    def line_start(self, offset: int) -> int:
        index = bisect.bisect_right(self._line_starts, offset) - 1
        return self._line_starts[index]

    def line_end(self, offset: int) -> int:
        """Offset just past the newline ending the line that holds `offset`."""
        index = bisect.bisect_right(self._line_starts, offset)
        if index < len(self._line_starts):
            return self._line_starts[index]
        return len(self._source)

    def line_text(self, line: int) -> str:
        lines = self._text.split("\n")
        if 1 <= line <= len(lines):
            return lines[line - 1].rstrip("\r")
        return ""

    def lines(self) -> List[str]:
        return self._text.split("\n")

    def __repr__(self) -> str:
        return f"<SourceFile {self.path} gen={self.generation}>"
