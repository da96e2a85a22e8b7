"""Tests for the bundled rule catalog."""

from pathlib import Path

from mdl_style.catalog import RuleCatalog


def test_catalog_loads_bundled_rules(catalog: RuleCatalog) -> None:
    assert "MD001" in catalog
    assert "MD047" in catalog
    assert catalog.rule_ids() == sorted(catalog.rule_ids())
    assert len(catalog) == len(catalog.rules())


def test_catalog_is_cached() -> None:
    assert RuleCatalog.load() is RuleCatalog.load()


def test_normalize_alias_and_case(catalog: RuleCatalog) -> None:
    assert catalog.normalize("line-length") == "MD013"
    assert catalog.normalize("md013") == "MD013"
    assert catalog.normalize(" MD013 ") == "MD013"
    assert catalog.normalize("something-else") == "something-else"


def test_get_returns_spec_with_defaults(catalog: RuleCatalog) -> None:
    spec = catalog.get("no-duplicate-header")
    assert spec is not None
    assert spec.rule_id == "MD024"
    assert spec.params == {"allow_different_nesting": False}
    assert catalog.get("MD999") is None


def test_tags(catalog: RuleCatalog) -> None:
    assert catalog.has_tag("headers")
    assert not catalog.has_tag("nope")
    ids = [spec.rule_id for spec in catalog.rules_with_tag("line_length")]
    assert ids == ["MD013"]
    assert "MD001" in [spec.rule_id for spec in catalog.rules_with_tag("headers")]


def test_params_schema(catalog: RuleCatalog) -> None:
    schema = catalog.get("MD029").params_schema()
    assert schema["additionalProperties"] is False
    assert schema["properties"]["style"] == {
        "type": "string",
        "enum": ["one", "ordered", "zero"],
    }
    md013 = catalog.get("MD013").params_schema()
    assert md013["properties"]["line_length"] == {"type": "integer"}
    assert md013["properties"]["tables"] == {"type": "boolean"}


def test_from_payload_skips_malformed_entries() -> None:
    catalog = RuleCatalog.from_payload(
        {"rules": [{"id": "md900", "alias": "custom", "tags": ["x"]}, {"alias": "no-id"}, "junk"]}
    )
    assert catalog.rule_ids() == ["MD900"]
    assert catalog.normalize("custom") == "MD900"


def test_load_custom_file(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text(
        "rules:\n  - id: MD900\n    params:\n      width: 10\n", encoding="utf-8"
    )
    catalog = RuleCatalog.load(path)
    assert catalog.get("MD900").params == {"width": 10}
