"""Import statement discovery across added lines.

Import lists are often split over several lines:

    import {
      FixtureBuilder,
      FixtureHelper,
    } from '../framework';

The module path lives on the closing line, so a check on the ``FixtureBuilder``
line has to look ahead (or, from the closing line, behind) to find it. Only
added lines are scanned; the scan stops at the next import statement or at a
line that closes a previous statement.
"""

from __future__ import annotations

import re

IMPORT_RE = re.compile(r"\bimport\b")


def is_import_line(line: str) -> bool:
    return bool(IMPORT_RE.search(line))


def _opens_brace_list(line: str) -> bool:
    return "{" in line and "}" not in line


def _find_import_start(lines: list[str], index: int) -> int | None:
    """Walk back from ``index`` to the ``import`` line that owns it."""
    for j in range(index, -1, -1):
        line = lines[j]
        if is_import_line(line):
            return j
        if j < index and ("}" in line or line.endswith(";")):
            return None
    return None


def _find_import_end(lines: list[str], start: int) -> int:
    """Return the last line of the import statement beginning at ``start``."""
    if not _opens_brace_list(lines[start]):
        return start
    for j in range(start + 1, len(lines)):
        if is_import_line(lines[j]):
            return j - 1
        if "}" in lines[j]:
            return j
    return len(lines) - 1


def find_import_span(lines: list[str], index: int) -> tuple[int, int] | None:
    """Return the inclusive ``(start, end)`` of the import covering ``lines[index]``.

    ``None`` when the line is not part of an import statement.
    """
    start = _find_import_start(lines, index)
    if start is None:
        return None
    end = _find_import_end(lines, start)
    if end < index:
        return None
    return start, end


def span_text(lines: list[str], span: tuple[int, int]) -> str:
    start, end = span
    return "\n".join(lines[start : end + 1])


def has_module_suffix(statement: str, suffix: str) -> bool:
    """True if a quoted module path in ``statement`` ends with ``suffix``."""
    return bool(re.search(re.escape(suffix) + r"['\"`]", statement))
