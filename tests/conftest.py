import sys
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


SHIPPED_STYLE = (
    "all\n"
    "rule 'MD013', :line_length => 500\n"
    "rule 'MD024', :allow_different_nesting => true\n"
    "rule 'MD029', :style => 'ordered'\n"
    "\n"
    "exclude_rule 'MD014'\n"
    "exclude_rule 'MD025'\n"
    "exclude_rule 'MD033'\n"
    "exclude_rule 'MD034' # doesn't work for urls in code blocks\n"
    "exclude_rule 'MD036' # this will prevent __! text __\n"
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def shipped_text() -> str:
    return SHIPPED_STYLE


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_style(project_root: Path):
    def _write(text: str, name: str = "markdown.rb") -> Path:
        path = project_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def shipped_style(write_style) -> Path:
    return write_style(SHIPPED_STYLE)


@pytest.fixture
def catalog():
    from mdl_style.catalog import RuleCatalog

    return RuleCatalog.load()


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("COLUMNS", "160")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()


@pytest.fixture
def run_cli(cli_runner: CliRunner, project_root: Path):
    from mdl_style.__main__ import cli

    def _run(*args: str):
        return cli_runner.invoke(cli, ["--root", str(project_root), *args])

    return _run
