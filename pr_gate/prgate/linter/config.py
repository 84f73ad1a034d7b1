"""Rule set defaults, YAML loading and the rule catalog."""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from prgate.errors import RulesConfigError
from prgate.linter.models import CheckKind

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

FRAMEWORK_PATH = "/framework"

# Types allowed as a getter's return type (directly or wrapped in Promise<...>)
DEFAULT_GETTER_TYPES = [
    "DetoxElement",
    "TappableElement",
    "TypableElement",
    "WebElement",
    "IndexableNativeElement",
    "NativeElement",
    "SystemElement",
    "DeviceLaunchAppConfig",
    "DetoxMatcher",
]


class ImportRule(BaseModel):
    """An import-statement rule for a group of restricted symbols.

    The rule fires when an import mentioning any of ``symbols`` either lacks
    ``required_fragment`` or has a module path ending in ``forbidden_suffix``.
    """

    check_kind: CheckKind
    symbols: list[str] = Field(min_length=1)
    required_fragment: str | None = FRAMEWORK_PATH
    forbidden_suffix: str | None = None


def _default_import_rules() -> list[ImportRule]:
    return [
        ImportRule(
            check_kind=CheckKind.assertions_framework,
            symbols=["Assertions"],
        ),
        ImportRule(
            check_kind=CheckKind.gestures_framework,
            symbols=["gestures"],
        ),
        ImportRule(
            check_kind=CheckKind.matchers_framework,
            symbols=["Matchers"],
        ),
        ImportRule(
            check_kind=CheckKind.fixture_utils_framework,
            symbols=["FixtureBuilder", "FixtureHelper", "FixtureUtils"],
        ),
        ImportRule(
            check_kind=CheckKind.assertions_no_ts,
            symbols=["Assertions"],
            required_fragment=None,
            forbidden_suffix=".ts",
        ),
        ImportRule(
            check_kind=CheckKind.fixtures_framework,
            symbols=["withFixtures"],
            required_fragment=f"{FRAMEWORK_PATH}/fixtures",
        ),
    ]


class RuleSet(BaseModel):
    """Everything the diff rule engine needs to know about the migration policy."""

    import_rules: list[ImportRule] = Field(default_factory=_default_import_rules)
    getter_types: list[str] = Field(default_factory=lambda: list(DEFAULT_GETTER_TYPES))
    fixture_token: str = "withFixtures"
    test_file_suffixes: list[str] = Field(default_factory=lambda: [".spec.ts"])
    include_paths: list[str] = Field(default_factory=list)


class RuleInfo(BaseModel):
    id: CheckKind
    title: str
    description: str


RULE_CATALOG: list[RuleInfo] = [
    RuleInfo(
        id=CheckKind.assertions_framework,
        title="Assertions Framework Path",
        description=(
            "All Assertions imports must include the /framework path so the "
            "framework version of the Assertions module is used."
        ),
    ),
    RuleInfo(
        id=CheckKind.assertions_no_ts,
        title="No .ts Extension in Assertions Imports",
        description=(
            "Assertions imports must not include the .ts file extension."
        ),
    ),
    RuleInfo(
        id=CheckKind.gestures_framework,
        title="Gestures Framework Path",
        description="All gestures imports must include the /framework path.",
    ),
    RuleInfo(
        id=CheckKind.fixtures_framework,
        title="withFixtures Framework Path",
        description="All withFixtures imports must come from /framework/fixtures.",
    ),
    RuleInfo(
        id=CheckKind.matchers_framework,
        title="Matchers Framework Path",
        description="All Matchers imports must include the /framework path.",
    ),
    RuleInfo(
        id=CheckKind.fixture_utils_framework,
        title="Fixture Helpers Framework Path",
        description=(
            "FixtureBuilder, FixtureHelper and FixtureUtils imports must include "
            "the /framework path, including imports split across several lines."
        ),
    ),
    RuleInfo(
        id=CheckKind.getter_type,
        title="Getter Method Types",
        description=(
            "Getter methods must declare one of the element/matcher types "
            "(DetoxElement, TappableElement, TypableElement, WebElement, "
            "IndexableNativeElement, NativeElement, SystemElement, "
            "DeviceLaunchAppConfig, DetoxMatcher) or a Promise of one."
        ),
    ),
    RuleInfo(
        id=CheckKind.test_withfixtures,
        title="Test Blocks Use withFixtures",
        description=(
            "Every it() block in a .spec.ts file must call withFixtures."
        ),
    ),
]


def load_rules(path: Path | None) -> RuleSet:
    """Load a rule set from a YAML file, falling back to defaults.

    A missing path, missing file or empty document yields the default rules.
    Keys that are absent from the file keep their default values.
    """
    if path is None or not path.exists():
        return RuleSet()

    content = path.read_text(encoding="utf-8")
    if not content.strip():
        return RuleSet()

    try:
        parsed = _yaml.load(StringIO(content))
    except YAMLError as e:
        raise RulesConfigError(f"Invalid YAML in rules file {path}: {e}") from e

    if parsed is None:
        return RuleSet()
    if not isinstance(parsed, dict):
        raise RulesConfigError(
            f"Rules file {path} must contain a mapping, got {type(parsed).__name__}"
        )

    try:
        rules = RuleSet.model_validate(parsed)
    except ValidationError as e:
        raise RulesConfigError(f"Invalid rules in {path}: {e}") from e

    logger.info(
        "Loaded %d import rules and %d getter types from %s",
        len(rules.import_rules),
        len(rules.getter_types),
        path,
    )
    return rules
