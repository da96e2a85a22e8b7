"""JSON/YAML document form of a style."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from jsonschema import Draft202012Validator

from mdl_style.errors import InvalidStyleDocumentError
from mdl_style.models import Directive, DirectiveKind, Style
from mdl_style.validation import format_schema_error

_VALUE_SCHEMA: dict[str, Any] = {
    "anyOf": [
        {"type": ["string", "number", "boolean", "null"]},
        {
            "type": "array",
            "items": {"type": ["string", "number", "boolean", "null"]},
        },
    ]
}

STYLE_DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["directives"],
    "properties": {
        "directives": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["kind"],
                "properties": {
                    "kind": {"enum": [kind.value for kind in DirectiveKind]},
                    "rule": {"type": "string", "minLength": 1},
                    "tag": {"type": "string", "minLength": 1},
                    "options": {
                        "type": "object",
                        "additionalProperties": _VALUE_SCHEMA,
                    },
                    "comment": {"type": ["string", "null"]},
                },
                "additionalProperties": False,
                "allOf": [
                    {
                        "if": {
                            "properties": {
                                "kind": {"enum": ["rule", "exclude_rule"]}
                            }
                        },
                        "then": {"required": ["rule"], "not": {"required": ["tag"]}},
                    },
                    {
                        "if": {"properties": {"kind": {"enum": ["tag", "exclude_tag"]}}},
                        "then": {"required": ["tag"], "not": {"required": ["rule"]}},
                    },
                    {
                        "if": {"properties": {"kind": {"const": "all"}}},
                        "then": {
                            "not": {"anyOf": [{"required": ["rule"]}, {"required": ["tag"]}]}
                        },
                    },
                    {
                        "if": {"properties": {"kind": {"not": {"const": "rule"}}}},
                        "then": {"not": {"required": ["options"]}},
                    },
                ],
            },
        }
    },
}

_VALIDATOR = Draft202012Validator(STYLE_DOCUMENT_SCHEMA)


def directive_to_document(directive: Directive) -> dict[str, Any]:
    item: dict[str, Any] = {"kind": directive.kind.value}
    if directive.is_rule:
        item["rule"] = directive.target
    elif directive.is_tag:
        item["tag"] = directive.target
    if directive.options:
        item["options"] = dict(directive.options)
    if directive.comment:
        item["comment"] = directive.comment
    return item


def style_to_document(style: Style) -> dict[str, Any]:
    return {"directives": [directive_to_document(item) for item in style.directives]}


def style_from_document(payload: Any, path: Optional[Path] = None) -> Style:
    error = next(iter(_VALIDATOR.iter_errors(payload)), None)
    if error is not None:
        raise InvalidStyleDocumentError(path, format_schema_error(error))

    directives: list[Directive] = []
    for item in payload["directives"]:
        kind = DirectiveKind(item["kind"])
        target = ""
        if kind in (DirectiveKind.CONFIGURE_RULE, DirectiveKind.EXCLUDE_RULE):
            target = item["rule"]
        elif kind in (DirectiveKind.INCLUDE_TAG, DirectiveKind.EXCLUDE_TAG):
            target = item["tag"]
        directives.append(
            Directive(
                kind=kind,
                target=target,
                options=dict(item.get("options") or {}),
                comment=item.get("comment") or None,
            )
        )
    return Style(directives=directives, source_path=path)


def dump_yaml_document(style: Style) -> str:
    return yaml.safe_dump(
        style_to_document(style), default_flow_style=False, sort_keys=False
    )


def load_yaml_document(text: str, path: Optional[Path] = None) -> Style:
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidStyleDocumentError(path, str(exc)) from exc
    return style_from_document(payload, path=path)
