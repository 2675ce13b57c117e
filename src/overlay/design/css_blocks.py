"""Lightweight stylesheet block scanner.

GTK and GNOME Shell stylesheets are large (often 10k+ lines) and only a
handful of structural facts are needed from them: where each
``selector { declarations }`` block starts and ends, and where each
declaration value lives. A full CSS parser is unnecessary; this module
provides a flat scanner that is aware of comments and quoted strings so
braces or semicolons inside them never confuse block boundaries.

All offsets refer to the ORIGINAL text. Scanning happens on a masked copy in
which comments and string contents are blanked out (same length), so any
regex located on the masked text can be applied to the original at the same
positions.

Nested blocks (``@media { a { } }``) are reported individually; ``leaf`` is
True for blocks containing no nested block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List

__all__ = [
    "Block",
    "Declaration",
    "mask_comments_and_strings",
    "scan_blocks",
    "iter_declarations",
]

_DECL_RE = re.compile(r"(?<![\w-])([a-zA-Z-]+)\s*:\s*([^;{}]*)")
_COMMENT_RE = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)


@dataclass(frozen=True)
class Block:
    selector: str
    start: int  # first character of the selector
    body_start: int  # index just after '{'
    body_end: int  # index of the closing '}'
    leaf: bool

    @property
    def end(self) -> int:
        return self.body_end + 1


@dataclass(frozen=True)
class Declaration:
    prop: str
    value_start: int
    value_end: int


def mask_comments_and_strings(text: str) -> str:
    """Return ``text`` with comment and string contents replaced by spaces.

    Newlines are kept. Quote characters themselves stay so string boundaries
    remain visible; an unterminated comment or string masks to end of text.
    """
    out = list(text)
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "/" and i + 1 < n and text[i + 1] == "*":
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            for j in range(i, end):
                if out[j] != "\n":
                    out[j] = " "
            i = end
        elif ch in ("'", '"'):
            j = i + 1
            while j < n and text[j] != ch and text[j] != "\n":
                if text[j] == "\\":
                    j += 1
                j += 1
            close = min(j, n)
            for k in range(i + 1, close):
                if out[k] != "\n":
                    out[k] = " "
            i = close + 1
        else:
            i += 1
    return "".join(out)


def scan_blocks(text: str, masked: str | None = None) -> List[Block]:
    """Return every ``selector { ... }`` block, in order of their closing brace.

    Unbalanced trailing blocks are ignored.
    """
    src = masked if masked is not None else mask_comments_and_strings(text)
    blocks: List[Block] = []
    # stack entries: [selector_start, open_index, has_child]
    stack: list[list[int]] = []
    stmt_start = 0
    for i, ch in enumerate(src):
        if ch == "{":
            stack.append([stmt_start, i, 0])
            stmt_start = i + 1
        elif ch == "}":
            if not stack:
                stmt_start = i + 1
                continue
            sel_start, open_idx, has_child = stack.pop()
            # skip leading whitespace of the selector
            while sel_start < open_idx and src[sel_start].isspace():
                sel_start += 1
            blocks.append(
                Block(
                    selector=" ".join(_COMMENT_RE.sub(" ", text[sel_start:open_idx]).split()),
                    start=sel_start,
                    body_start=open_idx + 1,
                    body_end=i,
                    leaf=not has_child,
                )
            )
            if stack:
                stack[-1][2] = 1
            stmt_start = i + 1
        elif ch == ";":
            stmt_start = i + 1
    blocks.sort(key=lambda b: b.start)
    return blocks


def iter_declarations(masked: str, start: int, end: int) -> Iterator[Declaration]:
    """Yield declarations found in ``masked[start:end]`` (offsets absolute)."""
    for m in _DECL_RE.finditer(masked, start, end):
        value_start = m.start(2)
        value_end = m.end(2)
        # trim trailing whitespace from the value span
        while value_end > value_start and masked[value_end - 1].isspace():
            value_end -= 1
        yield Declaration(m.group(1).lower(), value_start, value_end)
