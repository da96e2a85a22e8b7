"""Tests for the show and check commands."""

from pathlib import Path


def test_show_enabled_rules(shipped_style: Path, run_cli) -> None:
    result = run_cli("show")
    assert result.exit_code == 0
    assert "MD013" in result.output
    assert "line_length=500" in result.output
    assert "MD014" not in result.output


def test_show_all_rules(shipped_style: Path, run_cli) -> None:
    result = run_cli("show", "--all")
    assert result.exit_code == 0
    assert "MD014" in result.output
    assert "disabled" in result.output


def test_show_exclude_flag(shipped_style: Path, run_cli) -> None:
    result = run_cli("show", "-e", "MD013")
    assert result.exit_code == 0
    assert "MD013" not in result.output
    assert "MD001" in result.output


def test_show_uses_mdlrc_rules(
    project_root: Path, write_style, shipped_text: str, run_cli
) -> None:
    write_style(shipped_text, name="lint/style.rb")
    (project_root / ".mdlrc").write_text(
        'style "lint/style.rb"\nrules "MD013"\n', encoding="utf-8"
    )
    result = run_cli("show")
    assert result.exit_code == 0
    assert "MD013" in result.output
    assert "MD001" not in result.output


def test_show_default_style_without_files(run_cli) -> None:
    result = run_cli("show")
    assert result.exit_code == 0
    assert "built-in default" in result.output


def test_show_reports_syntax_error(write_style, run_cli) -> None:
    write_style("all\nenable 'MD001'\n")
    result = run_cli("show")
    assert result.exit_code != 0
    assert "line 2" in result.output


def test_check_valid_style(shipped_style: Path, run_cli) -> None:
    result = run_cli("check")
    assert result.exit_code == 0
    assert "Style is valid" in result.output


def test_check_reports_errors(write_style, run_cli) -> None:
    write_style("all\nrule 'MD013'\nexclude_rule 'MD013'\nexclude_rule 'MD999'\n")
    result = run_cli("check")
    assert result.exit_code == 1
    assert "both configured and excluded" in result.output
    assert "Unknown rule" in result.output


def test_check_warnings_exit_zero(write_style, run_cli) -> None:
    write_style("all\nall\n")
    result = run_cli("check")
    assert result.exit_code == 0
    assert "warning" in result.output


def test_check_explicit_style(project_root: Path, shipped_text: str, run_cli) -> None:
    path = project_root / "other.rb"
    path.write_text(shipped_text, encoding="utf-8")
    result = run_cli("--style", str(path), "check")
    assert result.exit_code == 0


def test_check_missing_explicit_style(project_root: Path, run_cli) -> None:
    result = run_cli("--style", str(project_root / "nope.rb"), "check")
    assert result.exit_code != 0
    assert "Missing style file" in result.output


def test_show_escapes_markup_in_rule_ids(write_style, run_cli) -> None:
    write_style("all\nrule '[/red]'\nrule '[bold]x'\n")
    result = run_cli("show")
    assert result.exit_code == 0
    assert "[/red]" in result.output
    assert "[bold]x" in result.output
