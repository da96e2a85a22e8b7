"""Read ``.mdlrc`` linter configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from mdl_style.constants import MDLRC_FILENAME, MDLRC_LIST_KEYS
from mdl_style.errors import InvalidConfigError
from mdl_style.utils import read_text, split_csv

_LINE_RE = re.compile(r"^(?P<key>[A-Za-z_][A-Za-z0-9_]*)\s*(?:=\s*|\s+)(?P<value>.+)$")
_QUOTED_RE = re.compile(r"""^(?P<quote>['"])(?P<body>.*)(?P=quote)(?:\s+#.*)?$""")


@dataclass(frozen=True)
class MdlConfig:
    path: Optional[Path] = None
    style: Optional[str] = None
    rules: list[str] = field(default_factory=list)
    exclude_rules: list[str] = field(default_factory=list)
    extra: dict[str, str] = field(default_factory=dict)

    @property
    def style_path(self) -> Optional[Path]:
        if not self.style:
            return None
        candidate = Path(self.style).expanduser()
        if candidate.is_absolute() or self.path is None:
            return candidate
        return self.path.parent / candidate


def _parse_value(raw: str) -> str:
    text = raw.strip()
    quoted = _QUOTED_RE.match(text)
    if quoted:
        return quoted.group("body")
    if " #" in text:
        text = text.split(" #", 1)[0]
    return text.strip()


def parse_mdlrc(text: str, path: Path) -> MdlConfig:
    values: dict[str, str] = {}
    for number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        match = _LINE_RE.match(line)
        if match is None:
            raise InvalidConfigError(path, number, f"cannot parse {line!r}")
        values[match.group("key")] = _parse_value(match.group("value"))

    lists = {key: split_csv(values.pop(key, "")) for key in MDLRC_LIST_KEYS}
    return MdlConfig(
        path=path,
        style=values.pop("style", None) or None,
        rules=lists["rules"],
        exclude_rules=lists["exclude_rules"],
        extra=values,
    )


def find_mdlrc(root: Path) -> Optional[Path]:
    for candidate in (root / MDLRC_FILENAME, Path.home() / MDLRC_FILENAME):
        if candidate.is_file():
            return candidate
    return None


def load_config(root: Path) -> MdlConfig:
    path = find_mdlrc(root)
    if path is None:
        return MdlConfig()
    return parse_mdlrc(read_text(path), path)
