"""Per-format style compilers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from mdl_style.catalog import RuleCatalog
from mdl_style.constants import (
    DEFAULT_STYLE_FILENAME,
    MARKDOWNLINT_FILENAME,
    YAML_STYLE_FILENAME,
)
from mdl_style.documents import dump_yaml_document
from mdl_style.models import DirectiveKind, Style
from mdl_style.resolver import resolve_style
from mdl_style.style.serializer import serialize_style
from mdl_style.utils import dump_json


class ExportFormat(str, Enum):
    MDL = "mdl"
    YAML = "yaml"
    MARKDOWNLINT = "markdownlint"


class IStyleCompiler(ABC):
    @abstractmethod
    def compile(self, style: Style, catalog: RuleCatalog) -> tuple[str, str]:
        """Return (filename, compiled_content) for the target format."""


class MdlStyleCompiler(IStyleCompiler):
    """Compile back to the mdl ``markdown.rb`` DSL."""

    def compile(self, style: Style, catalog: RuleCatalog) -> tuple[str, str]:
        return DEFAULT_STYLE_FILENAME, serialize_style(style)


class YamlStyleCompiler(IStyleCompiler):
    """Compile to a YAML directive document."""

    def compile(self, style: Style, catalog: RuleCatalog) -> tuple[str, str]:
        return YAML_STYLE_FILENAME, dump_yaml_document(style)


class MarkdownlintCompiler(IStyleCompiler):
    """Compile to a markdownlint ``.markdownlint.json`` config."""

    def compile(self, style: Style, catalog: RuleCatalog) -> tuple[str, str]:
        resolved = resolve_style(style, catalog)
        payload: dict[str, Any] = {"default": resolved.enable_all}
        for rule_id, item in resolved.rules.items():
            if item.source in (None, DirectiveKind.ENABLE_ALL):
                continue
            if not item.enabled:
                payload[rule_id] = False
            elif item.options:
                payload[rule_id] = dict(item.options)
            else:
                payload[rule_id] = True
        return MARKDOWNLINT_FILENAME, dump_json(payload)


COMPILERS: dict[ExportFormat, type[IStyleCompiler]] = {
    ExportFormat.MDL: MdlStyleCompiler,
    ExportFormat.YAML: YamlStyleCompiler,
    ExportFormat.MARKDOWNLINT: MarkdownlintCompiler,
}


def create_compiler(export_format: ExportFormat | str) -> IStyleCompiler:
    return COMPILERS[ExportFormat(export_format)]()
