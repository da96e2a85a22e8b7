"""Parse markdownlint style files (the ``markdown.rb`` Ruby DSL subset)."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

from mdl_style.errors import MissingStyleFileError, StyleSyntaxError
from mdl_style.models import Directive, DirectiveKind, Style
from mdl_style.utils import read_text

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>[ \t\r]+)
    | (?P<comment>\#.*)
    | (?P<sq>'(?:[^'\\]|\\.)*')
    | (?P<dq>"(?:[^"\\]|\\.)*")
    | (?P<rocket>=>)
    | (?P<label>[A-Za-z_][A-Za-z0-9_]*:(?!:))
    | (?P<symbol>:[A-Za-z_][A-Za-z0-9_]*[?!]?)
    | (?P<number>[+-]?\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d+)?)
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<punct>[,()\[\]])
    """,
    re.VERBOSE,
)

_DQ_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "s": " ",
    "e": "\x1b",
    '"': '"',
    "\\": "\\",
    "#": "#",
}

_KEYWORDS: dict[str, Any] = {"true": True, "false": False, "nil": None}

_STATEMENTS = {kind.value: kind for kind in DirectiveKind}

Token = tuple[str, str]


def _tokenize(text: str, path: Optional[Path], line: int) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            char = text[pos]
            if char in "'\"":
                raise StyleSyntaxError(path, line, "unterminated string")
            raise StyleSyntaxError(path, line, f"unexpected character {char!r}")
        kind = match.lastgroup or ""
        if kind != "ws":
            tokens.append((kind, match.group()))
        pos = match.end()
    return tokens


_DQ_ESCAPE_RE = re.compile(r"\\(u\{[0-9A-Fa-f]+\}|u[0-9A-Fa-f]{4}|x[0-9A-Fa-f]{1,2}|.)")


def _unescape_dq(match: re.Match) -> str:
    sequence = match.group(1)
    if len(sequence) == 1:
        return _DQ_ESCAPES.get(sequence, sequence)
    return chr(int(sequence[1:].strip("{}"), 16))


def _unquote(token: Token, path: Optional[Path], line: int) -> str:
    kind, raw = token
    body = raw[1:-1]
    if kind == "sq":
        return re.sub(r"\\([\\'])", r"\1", body)
    if re.search(r"(?<!\\)#\{", body):
        raise StyleSyntaxError(path, line, "string interpolation is not supported")
    try:
        return _DQ_ESCAPE_RE.sub(_unescape_dq, body)
    except (ValueError, OverflowError):
        raise StyleSyntaxError(path, line, "invalid unicode escape")


def _parse_number(raw: str) -> int | float:
    cleaned = raw.replace("_", "")
    if "." in cleaned or "e" in cleaned.lower():
        return float(cleaned)
    return int(cleaned)


class _StatementParser:
    def __init__(self, tokens: list[Token], path: Optional[Path], line: int) -> None:
        self.tokens = tokens
        self.path = path
        self.line = line
        self.index = 0

    def error(self, detail: str) -> StyleSyntaxError:
        return StyleSyntaxError(self.path, self.line, detail)

    def peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def take(self) -> Token:
        token = self.peek()
        if token is None:
            raise self.error("unexpected end of statement")
        self.index += 1
        return token

    def accept(self, value: str) -> bool:
        token = self.peek()
        if token is not None and token[0] == "punct" and token[1] == value:
            self.index += 1
            return True
        return False

    def expect(self, value: str) -> None:
        if not self.accept(value):
            token = self.peek()
            found = token[1] if token is not None else "end of statement"
            raise self.error(f"expected {value!r}, found {found!r}")

    def at_end(self) -> bool:
        return self.index >= len(self.tokens)

    def parse(self, comment: Optional[str]) -> Directive:
        kind_token = self.take()
        if kind_token[0] != "name" or kind_token[1] not in _STATEMENTS:
            raise self.error(f"unknown directive {kind_token[1]!r}")
        kind = _STATEMENTS[kind_token[1]]

        wrapped = self.accept("(")
        target = ""
        options: dict[str, Any] = {}
        if kind != DirectiveKind.ENABLE_ALL:
            target = self.parse_target(kind)
        if kind == DirectiveKind.CONFIGURE_RULE:
            while self.accept(","):
                key, value = self.parse_option()
                if key in options:
                    raise self.error(f"duplicate option {key!r}")
                options[key] = value
        if wrapped:
            self.expect(")")
        if not self.at_end():
            raise self.error(f"unexpected {self.take()[1]!r}")
        return Directive(
            kind=kind,
            target=target,
            options=options,
            comment=comment,
            line=self.line,
        )

    def parse_target(self, kind: DirectiveKind) -> str:
        token = self.take()
        if token[0] in ("sq", "dq"):
            value = _unquote(token, self.path, self.line)
        elif token[0] == "symbol":
            value = token[1][1:]
        else:
            raise self.error(f"{kind.value} expects a quoted name, found {token[1]!r}")
        if not value.strip():
            raise self.error(f"{kind.value} expects a non-empty name")
        return value

    def parse_option(self) -> tuple[str, Any]:
        token = self.take()
        if token[0] == "label":
            return token[1][:-1], self.parse_value()
        if token[0] == "symbol":
            key = token[1][1:]
        elif token[0] in ("sq", "dq"):
            key = _unquote(token, self.path, self.line)
        else:
            raise self.error(f"expected option name, found {token[1]!r}")
        arrow = self.take()
        if arrow[0] != "rocket":
            raise self.error(f"expected '=>' after option {key!r}")
        return key, self.parse_value()

    def parse_value(self) -> Any:
        token = self.take()
        kind, raw = token
        if kind in ("sq", "dq"):
            return _unquote(token, self.path, self.line)
        if kind == "number":
            return _parse_number(raw)
        if kind == "symbol":
            return raw[1:]
        if kind == "name" and raw in _KEYWORDS:
            return _KEYWORDS[raw]
        if kind == "punct" and raw == "[":
            items: list[Any] = []
            if self.accept("]"):
                return items
            while True:
                items.append(self.parse_value())
                if self.accept("]"):
                    return items
                self.expect(",")
        raise self.error(f"unsupported value {raw!r}")


def parse_value_text(text: str) -> Any:
    """Parse a single option value written in style syntax.

    Bare words that are not valid values (``ordered``) are taken as strings.
    """
    try:
        parser = _StatementParser(_tokenize(text, None, 1), None, 1)
        value = parser.parse_value()
        if not parser.at_end():
            return text
        return value
    except StyleSyntaxError:
        return text


def _is_continued(tokens: list[Token]) -> bool:
    depth = 0
    for kind, raw in tokens:
        if kind != "punct":
            continue
        if raw in "([":
            depth += 1
        elif raw in ")]":
            depth -= 1
    if depth > 0:
        return True
    return bool(tokens) and tokens[-1] == ("punct", ",")


def parse_style(text: str, path: Optional[Path] = None) -> Style:
    directives: list[Directive] = []
    pending: list[Token] = []
    pending_comment: Optional[str] = None
    start_line = 0
    dropped_comments = 0

    lines = text.splitlines()
    for number, raw_line in enumerate(lines, start=1):
        tokens = _tokenize(raw_line, path, number)
        comment: Optional[str] = None
        has_comment = bool(tokens) and tokens[-1][0] == "comment"
        if has_comment:
            comment = tokens.pop()[1][1:].strip() or None
        if not tokens and not pending:
            if has_comment:
                dropped_comments += 1
            continue
        if not pending:
            start_line = number
        pending.extend(tokens)
        if comment is not None:
            pending_comment = comment
        if _is_continued(pending) and number < len(lines):
            continue
        directives.append(
            _StatementParser(pending, path, start_line).parse(pending_comment)
        )
        pending = []
        pending_comment = None

    return Style(
        directives=directives, source_path=path, dropped_comments=dropped_comments
    )


def parse_style_file(path: Path) -> Style:
    if not path.exists():
        raise MissingStyleFileError(path)
    return parse_style(read_text(path), path=path)
