"""Tests for style validation."""

import pytest

from mdl_style.catalog import RuleCatalog
from mdl_style.models import IssueSeverity, has_errors
from mdl_style.style.parser import parse_style
from mdl_style.validation import validate_style


def _messages(text: str, catalog: RuleCatalog) -> list[tuple[str, int, str, str]]:
    return [
        (item.severity.value, item.line, item.subject, item.message)
        for item in validate_style(parse_style(text), catalog)
    ]


def test_shipped_style_is_valid(shipped_text: str, catalog: RuleCatalog) -> None:
    assert validate_style(parse_style(shipped_text), catalog) == []


def test_unknown_rule(catalog: RuleCatalog) -> None:
    assert _messages("all\nexclude_rule 'MD999'\n", catalog) == [
        ("error", 2, "MD999", "Unknown rule")
    ]


def test_unknown_tag(catalog: RuleCatalog) -> None:
    issues = validate_style(parse_style("exclude_tag :nope\n"), catalog)
    assert len(issues) == 1
    assert issues[0].severity == IssueSeverity.ERROR
    assert "Unknown tag" in issues[0].message


def test_rule_configured_twice(catalog: RuleCatalog) -> None:
    assert _messages(
        "rule 'MD013', :line_length => 90\nrule 'line-length', :tables => false\n",
        catalog,
    ) == [("error", 2, "MD013", "Rule is configured more than once")]


@pytest.mark.parametrize(
    "text",
    [
        "rule 'MD013'\nexclude_rule 'MD013'\n",
        "exclude_rule 'MD013'\nrule 'MD013'\n",
    ],
)
def test_rule_configured_and_excluded(text: str, catalog: RuleCatalog) -> None:
    assert _messages(text, catalog) == [
        ("error", 2, "MD013", "Rule is both configured and excluded")
    ]


def test_warnings_do_not_count_as_errors(catalog: RuleCatalog) -> None:
    issues = validate_style(
        parse_style("all\nall\nexclude_rule 'MD014'\nexclude_rule 'MD014'\n"),
        catalog,
    )
    assert [(item.severity, item.line) for item in issues] == [
        (IssueSeverity.WARNING, 2),
        (IssueSeverity.WARNING, 4),
    ]
    assert has_errors(issues) is False


@pytest.mark.parametrize(
    ("text", "fragment"),
    [
        ("rule 'MD013', :line_length => 'long'\n", "line_length"),
        ("rule 'MD013', :line_length => true\n", "line_length"),
        ("rule 'MD013', :foo => 1\n", "'foo' was unexpected"),
        ("rule 'MD029', :style => 'roman'\n", "'roman' is not one of"),
        ("rule 'MD033', :allowed => 'br'\n", "Additional properties"),
    ],
)
def test_invalid_options(text: str, fragment: str, catalog: RuleCatalog) -> None:
    issues = validate_style(parse_style(text), catalog)
    assert len(issues) == 1
    assert issues[0].severity == IssueSeverity.ERROR
    assert issues[0].message.startswith("Invalid option")
    assert fragment in issues[0].message


def test_options_of_unknown_rule_are_not_checked(catalog: RuleCatalog) -> None:
    assert _messages("rule 'MD999', :anything => 1\n", catalog) == [
        ("error", 1, "MD999", "Unknown rule")
    ]
