from collections import Counter
from typing import Any, Optional

from rich.markup import escape
from rich.table import Column, Table

from mdl_style.catalog import RuleCatalog, RuleSpec
from mdl_style.models import ResolvedRule, ResolvedStyle, StyleIssue
from mdl_style.style.serializer import format_value
from mdl_style.tui.enums import ISSUE_SEVERITY_STYLE, UIStyle


def _format_options(options: dict[str, Any]) -> str:
    return ", ".join(f"{key}={format_value(value)}" for key, value in options.items())


class RulesTable:
    @staticmethod
    def summary_block(resolved: ResolvedStyle, style_path: Optional[str]):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Style", style_path or "built-in default")
        table.add_row("Baseline", "all rules" if resolved.enable_all else "explicit rules")
        table.add_row("Enabled", str(len(resolved.enabled_rules)))
        table.add_row("Disabled", str(len(resolved.disabled_rules)))
        return table

    @staticmethod
    def rules_table(rules: list[ResolvedRule], catalog: RuleCatalog) -> Table:
        table = Table(
            Column(header="Rule", width=8),
            Column(header="Alias", overflow="ellipsis", max_width=30),
            Column(header="Status", width=9),
            Column(header="Params", overflow="fold"),
            Column(header="Source", width=12),
            expand=True,
            header_style="bold",
        )
        for item in rules:
            spec = catalog.get(item.rule_id)
            alias = escape(spec.alias) if spec is not None else "[red]unknown[/red]"
            if item.enabled:
                status = f"[{UIStyle.GREEN.value}]enabled[/{UIStyle.GREEN.value}]"
            else:
                status = f"[{UIStyle.DIM.value}]disabled[/{UIStyle.DIM.value}]"
            params = escape(_format_options(item.params))
            if item.options:
                params = f"[bold]{params}[/bold]"
            source = item.source.value if item.source is not None else "default"
            table.add_row(escape(item.rule_id), alias, status, params, source)
        return table


class IssuesTable:
    @staticmethod
    def summary_block(issues: list[StyleIssue]):
        counts = Counter(item.severity.value for item in issues)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Issues", str(len(issues)))
        table.add_row("Severity", "  ".join(chips))
        return table

    @staticmethod
    def issues_table(issues: list[StyleIssue]) -> Table:
        table = Table(
            Column(header="Line", width=6, justify="right"),
            Column(header="Severity", width=9),
            Column(header="Subject", width=14),
            Column(header="Message", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for item in issues:
            row = item.as_dict()
            style = ISSUE_SEVERITY_STYLE.get(item.severity, UIStyle.WHITE.value)
            table.add_row(
                row["line"],
                f"[{style}]{row['severity']}[/{style}]",
                escape(row["subject"]),
                escape(row["message"]),
            )
        return table


class CatalogTable:
    @staticmethod
    def catalog_table(specs: list[RuleSpec]) -> Table:
        table = Table(
            Column(header="Rule", width=8),
            Column(header="Alias", overflow="ellipsis", max_width=30),
            Column(header="Tags", overflow="fold", max_width=28),
            Column(header="Defaults", overflow="fold"),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for spec in specs:
            table.add_row(
                escape(spec.rule_id),
                escape(spec.alias),
                escape(", ".join(spec.tags)),
                escape(_format_options(spec.params)),
                escape(spec.description),
            )
        return table
