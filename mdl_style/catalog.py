"""Bundled markdownlint rule catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from mdl_style.constants import RULE_ID_PREFIX

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "rules.yaml"

_CATALOG_CACHE: dict[str, "RuleCatalog"] = {}


def _json_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, list):
        return "array"
    return "string"


@dataclass(frozen=True)
class RuleSpec:
    rule_id: str
    alias: str = ""
    tags: list[str] = field(default_factory=list)
    description: str = ""
    params: dict[str, Any] = field(default_factory=dict)
    choices: dict[str, list[Any]] = field(default_factory=dict)

    def params_schema(self) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        for name, default in self.params.items():
            prop: dict[str, Any] = {"type": _json_type(default)}
            if name in self.choices:
                prop["enum"] = list(self.choices[name])
            properties[name] = prop
        return {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "type": "object",
            "properties": properties,
            "additionalProperties": False,
        }


class RuleCatalog:
    def __init__(self, rules: list[RuleSpec]) -> None:
        self._rules: dict[str, RuleSpec] = {rule.rule_id: rule for rule in rules}
        self._aliases: dict[str, str] = {
            rule.alias: rule.rule_id for rule in rules if rule.alias
        }

    @classmethod
    def from_payload(cls, payload: Any) -> RuleCatalog:
        raw_rules = payload.get("rules", []) if isinstance(payload, dict) else []
        rules: list[RuleSpec] = []
        for item in raw_rules:
            if not isinstance(item, dict) or "id" not in item:
                continue
            rules.append(
                RuleSpec(
                    rule_id=str(item["id"]).upper(),
                    alias=str(item.get("alias", "")),
                    tags=[str(tag) for tag in item.get("tags") or []],
                    description=str(item.get("description", "")),
                    params=dict(item.get("params") or {}),
                    choices={
                        str(key): list(values)
                        for key, values in (item.get("choices") or {}).items()
                    },
                )
            )
        return cls(rules)

    @classmethod
    def load(cls, path: Path = DEFAULT_CATALOG_PATH) -> RuleCatalog:
        key = str(path.resolve())
        cached = _CATALOG_CACHE.get(key)
        if cached is not None:
            return cached
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        catalog = cls.from_payload(payload)
        _CATALOG_CACHE[key] = catalog
        return catalog

    def __contains__(self, rule_id: str) -> bool:
        return self.normalize(rule_id) in self._rules

    def __iter__(self):
        return iter(self.rules())

    def __len__(self) -> int:
        return len(self._rules)

    def rules(self) -> list[RuleSpec]:
        return [self._rules[key] for key in sorted(self._rules)]

    def rule_ids(self) -> list[str]:
        return sorted(self._rules)

    def normalize(self, rule_id: str) -> str:
        """Map an alias or a lowercase id onto the canonical ``MDxxx`` id."""
        text = rule_id.strip()
        if text in self._aliases:
            return self._aliases[text]
        if text.upper().startswith(RULE_ID_PREFIX):
            return text.upper()
        return text

    def get(self, rule_id: str) -> Optional[RuleSpec]:
        return self._rules.get(self.normalize(rule_id))

    def tags(self) -> list[str]:
        found: set[str] = set()
        for rule in self._rules.values():
            found.update(rule.tags)
        return sorted(found)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags()

    def rules_with_tag(self, tag: str) -> list[RuleSpec]:
        return [rule for rule in self.rules() if tag in rule.tags]
