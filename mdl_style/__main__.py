from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console

from mdl_style.compilers import ExportFormat, create_compiler
from mdl_style.errors import StyleAppError
from mdl_style.models import has_errors
from mdl_style.repository import StyleRepository
from mdl_style.resolver import apply_rule_filters, resolve_style
from mdl_style.style.parser import parse_value_text
from mdl_style.tui import StyleConsoleUI
from mdl_style.utils import split_csv, write_text
from mdl_style.validation import validate_style


FORMAT_VALUES = [item.value for item in ExportFormat]


def _repository_from_obj(obj: Dict[str, Any]) -> StyleRepository:
    return StyleRepository(root=obj["root"], style_path=obj.get("style"))


def _parse_option_pairs(pairs: tuple[str, ...]) -> dict[str, Any]:
    options: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(
                f"expected key=value, got {pair!r}", param_hint="--option"
            )
        options[key.strip()] = parse_value_text(value.strip())
    return options


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--style",
    "style_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Style file to use instead of .mdlrc discovery.",
)
@click.option(
    "--root",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory to discover .mdlrc and markdown.rb from.",
)
@click.pass_context
def cli(ctx: click.Context, style_path: Optional[Path], root: Optional[Path]) -> None:
    """Inspect and edit markdownlint style files."""
    ctx.obj = {
        "root": (root or Path.cwd()).expanduser().resolve(),
        "style": style_path.expanduser() if style_path is not None else None,
    }


@cli.command(help="Show the resolved rule set.")
@click.option("--all", "show_all", is_flag=True, help="Include disabled rules.")
@click.option("-r", "--rules", "only_rules", default="", help="Only these rules (comma separated).")
@click.option("-e", "--exclude-rules", default="", help="Also exclude these rules (comma separated).")
@click.pass_obj
def show(obj: Dict[str, Any], show_all: bool, only_rules: str, exclude_rules: str) -> None:
    ui = StyleConsoleUI(Console())
    repository = _repository_from_obj(obj)

    try:
        style = repository.load()
        config = repository.config
    except StyleAppError as exc:
        raise click.ClickException(str(exc))

    resolved = resolve_style(style, repository.catalog)
    resolved = apply_rule_filters(
        resolved,
        repository.catalog,
        rules=split_csv(only_rules) or config.rules,
        exclude_rules=split_csv(exclude_rules) + config.exclude_rules,
    )
    ui.render_rules(resolved, repository.catalog, style.source_path, show_all=show_all)


@cli.command(help="Validate the style file against the rule catalog.")
@click.pass_obj
def check(obj: Dict[str, Any]) -> None:
    ui = StyleConsoleUI(Console())
    repository = _repository_from_obj(obj)

    try:
        style = repository.load()
    except StyleAppError as exc:
        raise click.ClickException(str(exc))

    issues = validate_style(style, repository.catalog)
    ui.render_issues(issues, style.source_path)

    if has_errors(issues):
        raise click.exceptions.Exit(1)


@cli.command(help="Rewrite the style file in canonical form.")
@click.option("--check", "check_only", is_flag=True, help="Only report whether changes are needed.")
@click.pass_obj
def fmt(obj: Dict[str, Any], check_only: bool) -> None:
    ui = StyleConsoleUI(Console())
    repository = _repository_from_obj(obj)

    try:
        path = repository.style_path
        if path is None:
            raise click.ClickException("No style file found.")
        style = repository.load()
        changed = not repository.is_canonical()
        if changed and not check_only:
            repository.save(style, path)
    except StyleAppError as exc:
        raise click.ClickException(str(exc))

    ui.render_format_result(
        path, changed=changed, check=check_only, dropped_comments=style.dropped_comments
    )

    if changed and check_only:
        raise click.exceptions.Exit(1)


@cli.command(help="Export the style in another format.")
@click.option(
    "--format",
    "export_format",
    type=click.Choice(FORMAT_VALUES, case_sensitive=False),
    default=ExportFormat.MDL.value,
    show_default=True,
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write to this file instead of stdout.",
)
@click.pass_obj
def export(obj: Dict[str, Any], export_format: str, output: Optional[Path]) -> None:
    repository = _repository_from_obj(obj)

    try:
        style = repository.load()
    except StyleAppError as exc:
        raise click.ClickException(str(exc))

    _, content = create_compiler(export_format.lower()).compile(style, repository.catalog)
    if output is None:
        click.echo(content, nl=False)
        return

    write_text(output, content)
    StyleConsoleUI(Console()).render_export_saved(output, export_format.lower())


@cli.group(help="Browse the rule catalog.")
def rules() -> None:
    pass


@rules.command("list", help="List catalog rules.")
@click.option("--tag", default=None, help="Only rules carrying this tag.")
@click.pass_obj
def rules_list(obj: Dict[str, Any], tag: Optional[str]) -> None:
    ui = StyleConsoleUI(Console())
    catalog = _repository_from_obj(obj).catalog
    specs = catalog.rules_with_tag(tag) if tag else catalog.rules()
    ui.render_catalog(specs)


@cli.group(help="Edit rules in the style file.")
def rule() -> None:
    pass


@rule.command("set", help="Configure rule options.")
@click.argument("rule_id")
@click.option("-o", "--option", "pairs", multiple=True, help="Option as key=value.")
@click.option("--comment", default=None, help="Comment stored next to the rule.")
@click.pass_obj
def rule_set(obj: Dict[str, Any], rule_id: str, pairs: tuple[str, ...], comment: Optional[str]) -> None:
    ui = StyleConsoleUI(Console())
    repository = _repository_from_obj(obj)
    options = _parse_option_pairs(pairs)
    try:
        style = repository.configure_rule(rule_id, options, comment=comment)
    except StyleAppError as exc:
        raise click.ClickException(str(exc))
    ui.render_rule_saved(
        repository.catalog.normalize(rule_id),
        "configured",
        style.source_path,
        dropped_comments=style.dropped_comments,
    )


@rule.command("exclude", help="Exclude a rule.")
@click.argument("rule_id")
@click.option("--comment", default=None, help="Why the rule is excluded.")
@click.pass_obj
def rule_exclude(obj: Dict[str, Any], rule_id: str, comment: Optional[str]) -> None:
    ui = StyleConsoleUI(Console())
    repository = _repository_from_obj(obj)
    try:
        style = repository.exclude_rule(rule_id, comment=comment)
    except StyleAppError as exc:
        raise click.ClickException(str(exc))
    ui.render_rule_saved(
        repository.catalog.normalize(rule_id),
        "excluded",
        style.source_path,
        dropped_comments=style.dropped_comments,
    )


@rule.command("include", help="Re-enable an excluded rule.")
@click.argument("rule_id")
@click.pass_obj
def rule_include(obj: Dict[str, Any], rule_id: str) -> None:
    ui = StyleConsoleUI(Console())
    repository = _repository_from_obj(obj)
    try:
        style = repository.include_rule(rule_id)
    except StyleAppError as exc:
        raise click.ClickException(str(exc))
    ui.render_rule_saved(
        repository.catalog.normalize(rule_id),
        "included",
        style.source_path,
        dropped_comments=style.dropped_comments,
    )


def main() -> int:
    try:
        code = cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
