"""Repository for loading, saving and editing style files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from mdl_style.catalog import RuleCatalog
from mdl_style.config import MdlConfig, load_config
from mdl_style.constants import DEFAULT_STYLE_FILENAME
from mdl_style.documents import dump_yaml_document, load_yaml_document
from mdl_style.errors import MissingStyleFileError, UnknownRuleError
from mdl_style.models import Directive, DirectiveKind, Style
from mdl_style.style.parser import parse_style_file
from mdl_style.style.serializer import serialize_style
from mdl_style.utils import read_text, write_text

YAML_SUFFIXES = (".yaml", ".yml")


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


class StyleRepository:
    def __init__(
        self,
        root: Path,
        style_path: Optional[Path] = None,
        catalog: Optional[RuleCatalog] = None,
    ) -> None:
        self._root = root
        self._explicit_path = style_path
        self._catalog = catalog
        self._config: Optional[MdlConfig] = None

    @property
    def root(self) -> Path:
        return self._root

    @property
    def catalog(self) -> RuleCatalog:
        if self._catalog is None:
            self._catalog = RuleCatalog.load()
        return self._catalog

    @property
    def config(self) -> MdlConfig:
        if self._config is None:
            self._config = load_config(self._root)
        return self._config

    @property
    def style_path(self) -> Optional[Path]:
        if self._explicit_path is not None:
            return self._explicit_path
        configured = self.config.style_path
        if configured is not None:
            return configured
        candidate = self._root / DEFAULT_STYLE_FILENAME
        if candidate.exists():
            return candidate
        return None

    @property
    def target_path(self) -> Path:
        return self.style_path or self._root / DEFAULT_STYLE_FILENAME

    def load(self) -> Style:
        path = self.style_path
        if path is None:
            return Style.default()
        if _is_yaml(path):
            if not path.exists():
                raise MissingStyleFileError(path)
            return load_yaml_document(read_text(path), path=path)
        return parse_style_file(path)

    def load_or_empty(self) -> Style:
        path = self.target_path
        if not path.exists():
            return Style(directives=Style.default().directives, source_path=path)
        return self.load()

    def render(self, style: Style, path: Optional[Path] = None) -> str:
        target = path or self.target_path
        if _is_yaml(target):
            return dump_yaml_document(style)
        return serialize_style(style)

    def save(self, style: Style, path: Optional[Path] = None) -> Style:
        target = path or self.target_path
        write_text(target, self.render(style, target))
        return Style(
            directives=list(style.directives),
            source_path=target,
            dropped_comments=style.dropped_comments,
        )

    def is_canonical(self) -> bool:
        path = self.style_path
        if path is None:
            return True
        style = self.load()
        return self.render(style, path) == read_text(path)

    def _canonical_rule(self, rule_id: str) -> str:
        spec = self.catalog.get(rule_id)
        if spec is None:
            raise UnknownRuleError(rule_id)
        return spec.rule_id

    def _matches(self, directive: Directive, rule_id: str) -> bool:
        return directive.is_rule and self.catalog.normalize(directive.target) == rule_id

    @staticmethod
    def _insert_include(directives: list[Directive], directive: Directive) -> None:
        index = 0
        for position, item in enumerate(directives):
            if item.is_include:
                index = position + 1
        directives.insert(index, directive)

    def configure_rule(
        self,
        rule_id: str,
        options: Optional[dict[str, Any]] = None,
        comment: Optional[str] = None,
    ) -> Style:
        canonical = self._canonical_rule(rule_id)
        style = self.load_or_empty()
        directives: list[Directive] = []
        updated = False
        for item in style.directives:
            if not self._matches(item, canonical):
                directives.append(item)
                continue
            if item.kind == DirectiveKind.EXCLUDE_RULE or updated:
                continue
            directives.append(
                Directive.configure(
                    canonical,
                    {**item.options, **(options or {})},
                    comment=comment or item.comment,
                )
            )
            updated = True
        if not updated:
            self._insert_include(
                directives, Directive.configure(canonical, options, comment=comment)
            )
        return self.save(style.replace_directives(directives))

    def exclude_rule(self, rule_id: str, comment: Optional[str] = None) -> Style:
        canonical = self._canonical_rule(rule_id)
        style = self.load_or_empty()
        directives: list[Directive] = []
        updated = False
        for item in style.directives:
            if not self._matches(item, canonical):
                directives.append(item)
                continue
            if item.kind == DirectiveKind.CONFIGURE_RULE or updated:
                continue
            directives.append(Directive.exclude(canonical, comment or item.comment))
            updated = True
        if not updated:
            directives.append(Directive.exclude(canonical, comment))
        return self.save(style.replace_directives(directives))

    def include_rule(self, rule_id: str) -> Style:
        canonical = self._canonical_rule(rule_id)
        style = self.load_or_empty()
        directives = [
            item
            for item in style.directives
            if not (
                self._matches(item, canonical)
                and item.kind == DirectiveKind.EXCLUDE_RULE
            )
        ]
        configured = any(
            self._matches(item, canonical) and item.kind == DirectiveKind.CONFIGURE_RULE
            for item in directives
        )
        if not configured and not style.enables_all:
            self._insert_include(directives, Directive.configure(canonical))
        return self.save(style.replace_directives(directives))

