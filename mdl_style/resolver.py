"""Resolve a style into the effective per-rule state."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional

from mdl_style.catalog import RuleCatalog
from mdl_style.models import DirectiveKind, ResolvedRule, ResolvedStyle, Style


@dataclass
class _RuleState:
    enabled: bool
    source: DirectiveKind
    options: dict[str, Any] = field(default_factory=dict)


def _apply(
    states: dict[str, _RuleState], rule_id: str, enabled: bool, source: DirectiveKind
) -> _RuleState:
    state = states.get(rule_id)
    if state is None:
        state = _RuleState(enabled=enabled, source=source)
        states[rule_id] = state
    else:
        state.enabled = enabled
        state.source = source
    return state


def resolve_style(style: Style, catalog: RuleCatalog) -> ResolvedStyle:
    """Return rule_id -> {enabled, options, params} for every known rule.

    ``all`` only sets the default for rules no other directive mentions,
    so its position in the file does not matter. For everything else the
    last directive touching a rule wins; configured options accumulate.
    """
    enable_all = False
    states: dict[str, _RuleState] = {}

    for directive in style.directives:
        kind = directive.kind
        if kind == DirectiveKind.ENABLE_ALL:
            enable_all = True
        elif kind == DirectiveKind.CONFIGURE_RULE:
            state = _apply(states, catalog.normalize(directive.target), True, kind)
            state.options.update(directive.options)
        elif kind == DirectiveKind.EXCLUDE_RULE:
            _apply(states, catalog.normalize(directive.target), False, kind)
        elif kind in (DirectiveKind.INCLUDE_TAG, DirectiveKind.EXCLUDE_TAG):
            enabled = kind == DirectiveKind.INCLUDE_TAG
            for spec in catalog.rules_with_tag(directive.target):
                _apply(states, spec.rule_id, enabled, kind)

    rules: dict[str, ResolvedRule] = {}
    for spec in catalog.rules():
        state = states.pop(spec.rule_id, None)
        if state is None:
            source = DirectiveKind.ENABLE_ALL if enable_all else None
            rules[spec.rule_id] = ResolvedRule(
                rule_id=spec.rule_id,
                enabled=enable_all,
                params=dict(spec.params),
                source=source,
            )
            continue
        rules[spec.rule_id] = ResolvedRule(
            rule_id=spec.rule_id,
            enabled=state.enabled,
            options=dict(state.options),
            params={**spec.params, **state.options},
            source=state.source,
        )

    for rule_id, state in states.items():
        rules[rule_id] = ResolvedRule(
            rule_id=rule_id,
            enabled=state.enabled,
            options=dict(state.options),
            params=dict(state.options),
            known=False,
            source=state.source,
        )

    return ResolvedStyle(rules=rules, enable_all=enable_all)


def apply_rule_filters(
    resolved: ResolvedStyle,
    catalog: RuleCatalog,
    rules: Optional[Iterable[str]] = None,
    exclude_rules: Optional[Iterable[str]] = None,
) -> ResolvedStyle:
    """Narrow a resolved style with ``.mdlrc`` / command-line rule lists."""
    only = {catalog.normalize(item) for item in rules or []}
    excluded = {catalog.normalize(item) for item in exclude_rules or []}
    if not only and not excluded:
        return resolved

    filtered: dict[str, ResolvedRule] = {}
    for rule_id, item in resolved.rules.items():
        enabled = item.enabled
        if only and rule_id not in only:
            enabled = False
        if rule_id in excluded:
            enabled = False
        filtered[rule_id] = replace(item, enabled=enabled)
    return ResolvedStyle(rules=filtered, enable_all=resolved.enable_all)
