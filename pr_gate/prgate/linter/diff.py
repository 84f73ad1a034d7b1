"""Unified diff indexing: line classification and line number recovery.

A GitHub ``patch`` holds one file's hunks. Each line is classified once, and
line numbers are recovered from the nearest preceding hunk header:

    @@ -<oldStart>,<oldLen> +<newStart>,<newLen> @@

The recovered number is ``newStart`` plus the count of non-removed lines up to
the target, minus one. It is a diagnostic aid, not a guarantee.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from prgate.linter.models import UNKNOWN_LINE, LineNumber

HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")


class LineKind(str, Enum):
    hunk_header = "hunk_header"
    added = "added"
    removed = "removed"
    context = "context"
    file_header = "file_header"
    no_newline = "no_newline"


@dataclass(frozen=True)
class DiffLine:
    """One physical line of a patch."""

    index: int
    kind: LineKind
    raw: str

    @property
    def clean(self) -> str:
        """Line text with the diff marker stripped and whitespace trimmed."""
        if self.kind in (LineKind.added, LineKind.removed):
            return self.raw[1:].strip()
        return self.raw.strip()

    @property
    def counts_in_new_file(self) -> bool:
        return self.kind in (LineKind.added, LineKind.context)


def _split_patch(patch: str) -> list[str]:
    """Split on ``\\n`` only; other Unicode line breaks are line content."""
    raw_lines = patch.split("\n")
    if raw_lines and raw_lines[-1] == "":
        raw_lines.pop()
    return [raw[:-1] if raw.endswith("\r") else raw for raw in raw_lines]


def classify_lines(patch: str) -> list[DiffLine]:
    """Split a patch into classified lines.

    ``+++`` / ``---`` are file headers only before the first hunk; inside a
    hunk they are ordinary added/removed lines whose content starts with
    ``++`` / ``--``.
    """
    lines: list[DiffLine] = []
    seen_hunk = False
    for i, raw in enumerate(_split_patch(patch)):
        if raw.startswith("@@"):
            kind = LineKind.hunk_header
            seen_hunk = True
        elif not seen_hunk and (raw.startswith("+++") or raw.startswith("---")):
            kind = LineKind.file_header
        elif raw.startswith("+"):
            kind = LineKind.added
        elif raw.startswith("-"):
            kind = LineKind.removed
        elif raw.startswith("\\"):
            kind = LineKind.no_newline
        else:
            kind = LineKind.context
        lines.append(DiffLine(index=i, kind=kind, raw=raw))
    return lines


@dataclass
class PatchIndex:
    """Classified view of a single file's patch."""

    lines: list[DiffLine]
    added: list[DiffLine] = field(init=False)

    def __post_init__(self) -> None:
        self.added = [line for line in self.lines if line.kind == LineKind.added]

    @classmethod
    def from_patch(cls, patch: str) -> PatchIndex:
        return cls(classify_lines(patch))

    @property
    def added_text(self) -> list[str]:
        """Cleaned text of every added line, in patch order."""
        return [line.clean for line in self.added]

    def line_number(self, index: int) -> LineNumber:
        """Recover the new-file line number of the patch line at ``index``."""
        header_index = index - 1
        while header_index >= 0:
            if self.lines[header_index].kind == LineKind.hunk_header:
                break
            header_index -= 1
        if header_index < 0:
            return UNKNOWN_LINE

        match = HUNK_HEADER_RE.match(self.lines[header_index].raw)
        if not match:
            return UNKNOWN_LINE

        new_start = int(match.group(1))
        count = sum(
            1
            for line in self.lines[header_index + 1 : index + 1]
            if line.counts_in_new_file
        )
        return new_start + count - 1

    def added_line_number(self, ordinal: int) -> LineNumber:
        """Line number of the ``ordinal``-th added line (0-based)."""
        if ordinal < 0 or ordinal >= len(self.added):
            return UNKNOWN_LINE
        return self.line_number(self.added[ordinal].index)
