"""Style data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class DirectiveKind(str, Enum):
    ENABLE_ALL = "all"
    CONFIGURE_RULE = "rule"
    EXCLUDE_RULE = "exclude_rule"
    INCLUDE_TAG = "tag"
    EXCLUDE_TAG = "exclude_tag"


RULE_KINDS = (DirectiveKind.CONFIGURE_RULE, DirectiveKind.EXCLUDE_RULE)
TAG_KINDS = (DirectiveKind.INCLUDE_TAG, DirectiveKind.EXCLUDE_TAG)
INCLUDE_KINDS = (
    DirectiveKind.ENABLE_ALL,
    DirectiveKind.CONFIGURE_RULE,
    DirectiveKind.INCLUDE_TAG,
)


def normalize_comment(comment: Optional[str]) -> Optional[str]:
    """Fold a comment onto one line; blank comments become ``None``."""
    if comment is None:
        return None
    folded = " ".join(part.strip() for part in comment.splitlines()).strip()
    return folded or None


@dataclass(frozen=True)
class Directive:
    """One statement of a style file.

    ``target`` holds the rule id for rule directives and the tag name for
    tag directives; it is empty for ``all``. ``line`` is informational and
    does not take part in equality.
    """

    kind: DirectiveKind
    target: str = ""
    options: dict[str, Any] = field(default_factory=dict)
    comment: Optional[str] = None
    line: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "comment", normalize_comment(self.comment))

    @classmethod
    def enable_all(cls, comment: Optional[str] = None) -> Directive:
        return cls(kind=DirectiveKind.ENABLE_ALL, comment=comment)

    @classmethod
    def configure(
        cls,
        rule_id: str,
        options: Optional[dict[str, Any]] = None,
        comment: Optional[str] = None,
    ) -> Directive:
        return cls(
            kind=DirectiveKind.CONFIGURE_RULE,
            target=rule_id,
            options=dict(options or {}),
            comment=comment,
        )

    @classmethod
    def exclude(cls, rule_id: str, comment: Optional[str] = None) -> Directive:
        return cls(kind=DirectiveKind.EXCLUDE_RULE, target=rule_id, comment=comment)

    @classmethod
    def include_tag(cls, tag: str, comment: Optional[str] = None) -> Directive:
        return cls(kind=DirectiveKind.INCLUDE_TAG, target=tag, comment=comment)

    @classmethod
    def exclude_tag(cls, tag: str, comment: Optional[str] = None) -> Directive:
        return cls(kind=DirectiveKind.EXCLUDE_TAG, target=tag, comment=comment)

    @property
    def is_rule(self) -> bool:
        return self.kind in RULE_KINDS

    @property
    def is_tag(self) -> bool:
        return self.kind in TAG_KINDS

    @property
    def is_include(self) -> bool:
        return self.kind in INCLUDE_KINDS


@dataclass(frozen=True)
class Style:
    """Ordered directives of a style file.

    ``dropped_comments`` counts comment-only lines the parser skipped.
    Writing the style back does not keep them.
    """

    directives: list[Directive] = field(default_factory=list)
    source_path: Optional[Path] = field(default=None, compare=False)
    dropped_comments: int = field(default=0, compare=False)

    @classmethod
    def default(cls) -> Style:
        return cls(directives=[Directive.enable_all()])

    def of_kind(self, kind: DirectiveKind) -> list[Directive]:
        return [item for item in self.directives if item.kind == kind]

    def for_rule(self, rule_id: str) -> list[Directive]:
        return [
            item
            for item in self.directives
            if item.is_rule and item.target.upper() == rule_id.upper()
        ]

    @property
    def enables_all(self) -> bool:
        return any(item.kind == DirectiveKind.ENABLE_ALL for item in self.directives)

    @property
    def excluded_rules(self) -> list[str]:
        return [item.target for item in self.of_kind(DirectiveKind.EXCLUDE_RULE)]

    @property
    def configured_rules(self) -> dict[str, dict[str, Any]]:
        return {
            item.target: dict(item.options)
            for item in self.of_kind(DirectiveKind.CONFIGURE_RULE)
        }

    def replace_directives(self, directives: list[Directive]) -> Style:
        return Style(
            directives=list(directives),
            source_path=self.source_path,
            dropped_comments=self.dropped_comments,
        )


@dataclass(frozen=True)
class ResolvedRule:
    rule_id: str
    enabled: bool
    options: dict[str, Any] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    known: bool = True
    source: Optional[DirectiveKind] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule_id,
            "enabled": self.enabled,
            "options": dict(self.options),
            "params": dict(self.params),
            "known": self.known,
            "source": self.source.value if self.source is not None else None,
        }


@dataclass(frozen=True)
class ResolvedStyle:
    rules: dict[str, ResolvedRule] = field(default_factory=dict)
    enable_all: bool = False

    def get(self, rule_id: str) -> Optional[ResolvedRule]:
        found = self.rules.get(rule_id)
        if found is None:
            found = self.rules.get(rule_id.upper())
        return found

    def is_enabled(self, rule_id: str) -> bool:
        item = self.get(rule_id)
        if item is None:
            return self.enable_all
        return item.enabled

    @property
    def enabled_rules(self) -> list[ResolvedRule]:
        return [item for item in self.rules.values() if item.enabled]

    @property
    def disabled_rules(self) -> list[ResolvedRule]:
        return [item for item in self.rules.values() if not item.enabled]


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class StyleIssue:
    severity: IssueSeverity
    subject: str
    message: str
    line: Optional[int] = None

    def as_dict(self) -> dict[str, str]:
        return {
            "severity": self.severity.value,
            "line": str(self.line) if self.line is not None else "",
            "subject": self.subject,
            "message": self.message,
        }


def has_errors(issues: list[StyleIssue]) -> bool:
    return any(item.severity == IssueSeverity.ERROR for item in issues)
