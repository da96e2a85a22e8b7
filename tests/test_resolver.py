"""Tests for style resolution."""

from mdl_style.catalog import RuleCatalog
from mdl_style.models import Directive, DirectiveKind, Style
from mdl_style.resolver import apply_rule_filters, resolve_style
from mdl_style.style.parser import parse_style


def test_resolve_shipped_style(shipped_text: str, catalog: RuleCatalog) -> None:
    resolved = resolve_style(parse_style(shipped_text), catalog)

    assert resolved.enable_all is True
    assert len(resolved.rules) == len(catalog)

    md013 = resolved.get("MD013")
    assert md013.enabled is True
    assert md013.options == {"line_length": 500}
    assert md013.params["line_length"] == 500
    assert md013.params["tables"] is True
    assert md013.source == DirectiveKind.CONFIGURE_RULE

    assert resolved.get("MD024").params == {"allow_different_nesting": True}
    assert resolved.get("MD029").params == {"style": "ordered"}

    for rule_id in ("MD014", "MD025", "MD033", "MD034", "MD036"):
        assert resolved.is_enabled(rule_id) is False

    md001 = resolved.get("MD001")
    assert md001.enabled is True
    assert md001.source == DirectiveKind.ENABLE_ALL


def test_without_all_only_mentioned_rules_are_enabled(catalog: RuleCatalog) -> None:
    style = Style(directives=[Directive.configure("MD013", {"line_length": 100})])
    resolved = resolve_style(style, catalog)
    assert resolved.enable_all is False
    assert [item.rule_id for item in resolved.enabled_rules] == ["MD013"]
    assert resolved.get("MD001").source is None


def test_last_directive_wins(catalog: RuleCatalog) -> None:
    style = Style(
        directives=[
            Directive.exclude("MD013"),
            Directive.configure("MD013", {"line_length": 100}),
            Directive.configure("MD029", {"style": "one"}),
            Directive.exclude("MD029"),
        ]
    )
    resolved = resolve_style(style, catalog)
    assert resolved.is_enabled("MD013") is True
    md029 = resolved.get("MD029")
    assert md029.enabled is False
    assert md029.options == {"style": "one"}


def test_all_position_does_not_override_mentions(catalog: RuleCatalog) -> None:
    style = Style(directives=[Directive.exclude("MD001"), Directive.enable_all()])
    resolved = resolve_style(style, catalog)
    assert resolved.is_enabled("MD001") is False
    assert resolved.is_enabled("MD002") is True


def test_directive_order_of_independent_rules_is_irrelevant(
    shipped_text: str, catalog: RuleCatalog
) -> None:
    style = parse_style(shipped_text)
    reversed_style = style.replace_directives(list(reversed(style.directives)))
    assert resolve_style(style, catalog) == resolve_style(reversed_style, catalog)


def test_aliases_and_lowercase_ids(catalog: RuleCatalog) -> None:
    style = parse_style("rule 'line-length', :line_length => 90\nexclude_rule 'md014'\n")
    resolved = resolve_style(style, catalog)
    assert resolved.get("MD013").options == {"line_length": 90}
    assert resolved.get("MD014").enabled is False


def test_configured_options_accumulate(catalog: RuleCatalog) -> None:
    style = parse_style(
        "rule 'MD013', :line_length => 90\nrule 'MD013', :tables => false\n"
    )
    assert resolve_style(style, catalog).get("MD013").options == {
        "line_length": 90,
        "tables": False,
    }


def test_tags(catalog: RuleCatalog) -> None:
    style = parse_style("all\nexclude_tag :headers\nrule 'MD001'\n")
    resolved = resolve_style(style, catalog)
    assert resolved.is_enabled("MD003") is False
    assert resolved.get("MD003").source == DirectiveKind.EXCLUDE_TAG
    assert resolved.is_enabled("MD001") is True
    assert resolved.is_enabled("MD013") is True


def test_include_tag_without_all(catalog: RuleCatalog) -> None:
    resolved = resolve_style(parse_style("tag :line_length\n"), catalog)
    assert [item.rule_id for item in resolved.enabled_rules] == ["MD013"]


def test_unknown_rules_are_kept(catalog: RuleCatalog) -> None:
    resolved = resolve_style(parse_style("all\nrule 'MD999', :x => 1\n"), catalog)
    item = resolved.get("MD999")
    assert item.known is False
    assert item.enabled is True
    assert item.params == {"x": 1}
    assert resolved.is_enabled("not-in-style") is True


def test_apply_rule_filters(shipped_text: str, catalog: RuleCatalog) -> None:
    resolved = resolve_style(parse_style(shipped_text), catalog)

    assert apply_rule_filters(resolved, catalog) is resolved

    only = apply_rule_filters(resolved, catalog, rules=["MD013", "MD014"])
    assert [item.rule_id for item in only.enabled_rules] == ["MD013"]

    excluded = apply_rule_filters(resolved, catalog, exclude_rules=["line-length"])
    assert excluded.is_enabled("MD013") is False
    assert excluded.get("MD013").options == {"line_length": 500}
    assert excluded.is_enabled("MD001") is True
