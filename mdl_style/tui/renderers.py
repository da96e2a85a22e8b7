from pathlib import Path
from typing import Optional

from rich.console import Console, RenderableType
from rich.markup import escape
from rich.panel import Panel

from mdl_style.catalog import RuleCatalog, RuleSpec
from mdl_style.models import IssueSeverity, ResolvedStyle, StyleIssue, has_errors
from mdl_style.tui.enums import UIStyle
from mdl_style.tui.tables import CatalogTable, IssuesTable, RulesTable
from mdl_style.utils import compact_home_path


def _section(
    title: str,
    body: RenderableType,
    style: str,
    subtitle: Optional[str] = None,
) -> Panel:
    return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))


def _dropped_comments_note(count: int, verb: str) -> str:
    noun = "line" if count == 1 else "lines"
    style = UIStyle.YELLOW.value
    return f"[{style}]{verb} {count} comment-only {noun}.[/{style}]"


def _display_path(path: Optional[Path]) -> Optional[str]:
    if path is None:
        return None
    return escape(compact_home_path(path))


class StyleConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_rules(
        self,
        resolved: ResolvedStyle,
        catalog: RuleCatalog,
        style_path: Optional[Path],
        show_all: bool = False,
    ) -> None:
        self.console.print(
            _section(
                "style overview",
                RulesTable.summary_block(resolved, _display_path(style_path)),
                style=UIStyle.BLUE.value,
            )
        )

        rules = list(resolved.rules.values())
        if not show_all:
            rules = [item for item in rules if item.enabled]
        if not rules:
            self.console.print(
                _section("rules", "No rules enabled.", style=UIStyle.DIM.value)
            )
            return

        self.console.print(
            _section(
                "rules" if show_all else "enabled rules",
                RulesTable.rules_table(rules, catalog),
                style=UIStyle.CYAN.value,
            )
        )

        unknown = [item.rule_id for item in resolved.rules.values() if not item.known]
        if unknown:
            self.console.print(
                _section(
                    "unknown rules",
                    "\n".join([f"- {escape(item)}" for item in unknown]),
                    style=UIStyle.YELLOW.value,
                )
            )

    def render_issues(self, issues: list[StyleIssue], style_path: Optional[Path]) -> None:
        if has_errors(issues):
            border_style = UIStyle.RED.value
        elif issues:
            border_style = UIStyle.YELLOW.value
        else:
            border_style = UIStyle.GREEN.value

        self.console.print(
            _section(
                "check",
                IssuesTable.summary_block(issues),
                style=border_style,
                subtitle=_display_path(style_path),
            )
        )
        if not issues:
            self.console.print(
                _section("issues", "Style is valid.", style=UIStyle.GREEN.value)
            )
            return

        self.console.print(
            _section(
                "issues", IssuesTable.issues_table(issues), style=border_style
            )
        )
        errors = [item for item in issues if item.severity == IssueSeverity.ERROR]
        if errors:
            self.console.print(
                _section(
                    "next",
                    "Fix the errors above, then run check again.\n"
                    "- mdl-style check",
                    style=UIStyle.DIM.value,
                )
            )

    def render_format_result(
        self, path: Path, changed: bool, check: bool, dropped_comments: int = 0
    ) -> None:
        if not changed:
            self.console.print(
                _section(
                    "fmt",
                    f"Already formatted: {_display_path(path)}",
                    style=UIStyle.GREEN.value,
                )
            )
            return
        if check:
            body = f"Would reformat: {_display_path(path)}"
            if dropped_comments:
                body += f"\n{_dropped_comments_note(dropped_comments, 'Would drop')}"
            self.console.print(
                _section(
                    "fmt",
                    f"{body}\n- mdl-style fmt",
                    style=UIStyle.YELLOW.value,
                )
            )
            return
        body = f"Reformatted: {_display_path(path)}"
        if dropped_comments:
            body += f"\n{_dropped_comments_note(dropped_comments, 'Dropped')}"
        self.console.print(_section("fmt", body, style=UIStyle.GREEN.value))

    def render_export_saved(self, path: Path, export_format: str) -> None:
        self.console.print(
            _section(
                "export",
                f"Exported [bold]{export_format}[/bold]\n{_display_path(path)}",
                style=UIStyle.GREEN.value,
            )
        )

    def render_rule_saved(
        self,
        rule_id: str,
        action: str,
        path: Optional[Path],
        dropped_comments: int = 0,
    ) -> None:
        border_style = UIStyle.YELLOW.value if action == "excluded" else UIStyle.GREEN.value
        body = f"Rule {action}: [bold]{escape(rule_id)}[/bold]\n{_display_path(path) or ''}"
        if dropped_comments:
            body += f"\n{_dropped_comments_note(dropped_comments, 'Dropped')}"
        self.console.print(_section("style", body, style=border_style))

    def render_catalog(self, specs: list[RuleSpec]) -> None:
        if not specs:
            self.console.print(
                _section("catalog", "No rules found.", style=UIStyle.YELLOW.value)
            )
            return
        self.console.print(
            _section(
                "catalog", CatalogTable.catalog_table(specs), style=UIStyle.BLUE.value
            )
        )
