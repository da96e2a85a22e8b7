"""Serialize styles back to the ``markdown.rb`` DSL."""

from __future__ import annotations

import re
from typing import Any

from mdl_style.models import Directive, DirectiveKind, Style

_SYMBOL_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_DQ_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "#": "\\#",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\x1b": "\\e",
}


def _escape_char(char: str) -> str:
    if char in _DQ_ESCAPES:
        return _DQ_ESCAPES[char]
    if char.isprintable():
        return char
    code = ord(char)
    if code < 0x100:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\u{{{code:x}}}"


def format_string(value: str) -> str:
    """Quote ``value`` for a style file.

    Plain text is single-quoted. Text with control or line-break characters
    is double-quoted with escapes so it stays on one line.
    """
    if all(char.isprintable() for char in value):
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    return '"' + "".join(_escape_char(char) for char in value) + '"'


def format_value(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return format_string(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    raise TypeError(f"Cannot serialize option value of type {type(value).__name__}")


def format_option_key(key: str) -> str:
    if _SYMBOL_RE.fullmatch(key):
        return f":{key}"
    return format_string(key)


def format_directive(directive: Directive) -> str:
    if directive.kind == DirectiveKind.ENABLE_ALL:
        statement = "all"
    elif directive.is_tag:
        target = directive.target
        name = f":{target}" if _SYMBOL_RE.fullmatch(target) else format_string(target)
        statement = f"{directive.kind.value} {name}"
    else:
        parts = [f"{directive.kind.value} {format_string(directive.target)}"]
        for key, value in directive.options.items():
            parts.append(f"{format_option_key(key)} => {format_value(value)}")
        statement = ", ".join(parts)

    if directive.comment:
        statement = f"{statement} # {directive.comment}"
    return statement


def serialize_style(style: Style) -> str:
    lines: list[str] = []
    previous: Directive | None = None
    for directive in style.directives:
        if previous is not None and previous.is_include and not directive.is_include:
            lines.append("")
        lines.append(format_directive(directive))
        previous = directive
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
