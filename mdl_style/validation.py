"""Style validation against the rule catalog."""

from __future__ import annotations

from typing import Any

from jsonschema import Draft202012Validator

from mdl_style.catalog import RuleCatalog
from mdl_style.models import Directive, DirectiveKind, IssueSeverity, Style, StyleIssue


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


def _error(directive: Directive, subject: str, message: str) -> StyleIssue:
    return StyleIssue(
        severity=IssueSeverity.ERROR,
        subject=subject,
        message=message,
        line=directive.line,
    )


def _warning(directive: Directive, subject: str, message: str) -> StyleIssue:
    return StyleIssue(
        severity=IssueSeverity.WARNING,
        subject=subject,
        message=message,
        line=directive.line,
    )


class StyleValidator:
    def __init__(self, catalog: RuleCatalog) -> None:
        self.catalog = catalog
        self._validators: dict[str, Draft202012Validator] = {}

    def _validator_for(self, rule_id: str) -> Draft202012Validator | None:
        spec = self.catalog.get(rule_id)
        if spec is None:
            return None
        if spec.rule_id not in self._validators:
            self._validators[spec.rule_id] = Draft202012Validator(spec.params_schema())
        return self._validators[spec.rule_id]

    def validate(self, style: Style) -> list[StyleIssue]:
        issues: list[StyleIssue] = []
        seen_all = False
        configured: dict[str, Directive] = {}
        excluded: dict[str, Directive] = {}

        for directive in style.directives:
            if directive.kind == DirectiveKind.ENABLE_ALL:
                if seen_all:
                    issues.append(_warning(directive, "all", "'all' is repeated"))
                seen_all = True
                continue

            if directive.is_tag:
                if not self.catalog.has_tag(directive.target):
                    issues.append(
                        _error(
                            directive,
                            directive.target,
                            f"Unknown tag in {directive.kind.value}",
                        )
                    )
                continue

            rule_id = self.catalog.normalize(directive.target)
            if rule_id not in self.catalog:
                issues.append(_error(directive, directive.target, "Unknown rule"))

            if directive.kind == DirectiveKind.CONFIGURE_RULE:
                if rule_id in configured:
                    issues.append(
                        _error(directive, rule_id, "Rule is configured more than once")
                    )
                if rule_id in excluded:
                    issues.append(
                        _error(directive, rule_id, "Rule is both configured and excluded")
                    )
                configured.setdefault(rule_id, directive)
                issues.extend(self._option_issues(directive, rule_id))
            else:
                if rule_id in excluded:
                    issues.append(
                        _warning(directive, rule_id, "Rule is excluded more than once")
                    )
                if rule_id in configured:
                    issues.append(
                        _error(directive, rule_id, "Rule is both configured and excluded")
                    )
                excluded.setdefault(rule_id, directive)

        return issues

    def _option_issues(self, directive: Directive, rule_id: str) -> list[StyleIssue]:
        validator = self._validator_for(rule_id)
        if validator is None:
            return []
        errors = sorted(
            validator.iter_errors(directive.options), key=lambda item: list(item.path)
        )
        return [
            _error(directive, rule_id, f"Invalid option ({format_schema_error(error)})")
            for error in errors
        ]


def validate_style(style: Style, catalog: RuleCatalog) -> list[StyleIssue]:
    return StyleValidator(catalog).validate(style)
