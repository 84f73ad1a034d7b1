"""Per-line rules evaluated against every added line of a patch.

Rules are independent predicates over the cleaned line. They run in a fixed
order (import rules in configuration order, then the getter rule) so the
issues for one line always come out the same way.

Import rules resolve the whole statement around a line, so every line of a
multi-line import that names a restricted symbol is flagged, including middle
lines such as ``FixtureBuilder,`` that carry no ``import`` keyword.
"""

from __future__ import annotations

import re

from prgate.linter.config import ImportRule, RuleSet
from prgate.linter.diff import PatchIndex
from prgate.linter.imports import find_import_span, has_module_suffix, span_text
from prgate.linter.models import CheckKind, Issue

GETTER_RE = re.compile(r"\bget\s+\w+\s*\(")
TYPED_GETTER_RE = re.compile(r"\bget\s+\w+\s*\(\s*\)\s*:\s*([A-Za-z0-9_<>]+)")
PROMISE_RE = re.compile(r"^Promise<([A-Za-z0-9_]+)>$")


def check_import_rule(rule: ImportRule, lines: list[str], index: int) -> bool:
    """Return True if ``lines[index]`` violates ``rule``.

    ``lines`` is the cleaned text of every added line, so multi-line import
    statements can be resolved around ``index``.
    """
    line = lines[index]
    if not any(symbol in line for symbol in rule.symbols):
        return False

    span = find_import_span(lines, index)
    if span is None:
        return False
    statement = span_text(lines, span)

    if rule.required_fragment is not None and rule.required_fragment not in statement:
        return True
    if rule.forbidden_suffix is not None and has_module_suffix(
        statement, rule.forbidden_suffix
    ):
        return True
    return False


def is_allowed_getter_type(type_name: str, allowed: list[str]) -> bool:
    """Check a return type directly or as ``Promise<AllowedType>``."""
    if type_name in allowed:
        return True
    match = PROMISE_RE.match(type_name)
    return bool(match and match.group(1) in allowed)


def _has_typed_access(line: str, allowed: list[str]) -> bool:
    return any(
        f"{t}.prototype.get" in line
        or f"{t}['prototype']['get" in line
        or f"{t}.get" in line
        or f"{t}['get" in line
        or f'{t}["get' in line
        for t in allowed
    )


def check_getter_type(line: str, allowed: list[str]) -> bool:
    """Return True if ``line`` declares a getter without an allowed type."""
    if not GETTER_RE.search(line):
        return False

    annotated = TYPED_GETTER_RE.search(line)
    if annotated:
        return not is_allowed_getter_type(annotated.group(1), allowed)

    return not _has_typed_access(line, allowed)


def line_violations(lines: list[str], ordinal: int, rules: RuleSet) -> list[CheckKind]:
    """Return the check kinds violated by one added line, in rule order."""
    kinds = [
        rule.check_kind
        for rule in rules.import_rules
        if check_import_rule(rule, lines, ordinal)
    ]
    if check_getter_type(lines[ordinal], rules.getter_types):
        kinds.append(CheckKind.getter_type)
    return kinds


def run_line_rules(filename: str, index: PatchIndex, rules: RuleSet) -> list[Issue]:
    """Evaluate every per-line rule against every added line."""
    issues: list[Issue] = []
    lines = index.added_text

    for ordinal, line in enumerate(lines):
        kinds = line_violations(lines, ordinal, rules)
        if not kinds:
            continue
        line_number = index.added_line_number(ordinal)
        issues.extend(
            Issue(file=filename, line=line_number, snippet=line, check_kind=kind)
            for kind in kinds
        )

    return issues
