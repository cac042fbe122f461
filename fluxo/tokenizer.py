"""Position-tracking tokenizer for Fluxo source lines."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    start: int
    end: int


TOKEN_RE = re.compile(
    r"""
    (?P<COMMENT>//[^\n]*)
  | (?P<STRING>"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')
  | (?P<NUMBER>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)
  | (?P<IDENT>[A-Za-z_$][A-Za-z0-9_$]*)
  | (?P<DOT>\.)
  | (?P<COLON>:)
  | (?P<LPAREN>\()
  | (?P<RPAREN>\))
  | (?P<COMMA>,)
  | (?P<EQ>=)
  | (?P<SKIP>\s+)
  | (?P<OTHER>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'"}


def unquote(literal: str) -> str:
    """Strip the quotes from a STRING token and resolve simple escapes."""
    body = literal[1:-1]
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


def tokenize(source: str) -> list[Token]:
    """Split source into tokens. Never fails: stray characters become OTHER."""
    tokens: list[Token] = []
    for match in TOKEN_RE.finditer(source):
        kind = match.lastgroup or "OTHER"
        if kind in {"SKIP", "COMMENT"}:
            continue
        tokens.append(Token(kind, match.group(0), match.start(), match.end()))
    tokens.append(Token("EOF", "", len(source), len(source)))
    return tokens
