"""Fixed-grammar parser producing the Fluxo statement tree.

Grammar, applied left to right over the token stream::

    program      := { print_call | binding | method_call | <any token> }
    print_call   := "console" "." "log" ":" "(" expr ")"
    binding      := ("local" | "var") NAME "=" "window" "(" STRING ")"
    method_call  := NAME "." METHOD ":" "(" [ arg { "," arg } ] ")"

Anything that does not start one of the productions is skipped one token at
a time, so arbitrary text parses to a (possibly empty) program.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from fluxo.tokenizer import Token, tokenize, unquote

BINDING_KEYWORDS = {"local", "var"}


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class NumberLiteral:
    value: int | float


@dataclass(frozen=True)
class RawText:
    """Expression the grammar does not interpret; printed verbatim."""

    text: str


Expr = StringLiteral | NumberLiteral | RawText


@dataclass(frozen=True)
class PrintCall:
    expr: Expr


@dataclass(frozen=True)
class WindowBinding:
    name: str
    window_id: str


@dataclass(frozen=True)
class MethodCall:
    target: str
    method: str
    args: tuple[str, ...]


Statement = PrintCall | WindowBinding | MethodCall


@dataclass
class Program:
    statements: list[Statement] = field(default_factory=list)

    def of_type(self, kind: type) -> list:
        return [stmt for stmt in self.statements if isinstance(stmt, kind)]


def parse_number(text: str) -> int | float | None:
    """Read a decimal number the way a terminal user writes one.

    Returns None for anything else, including NaN and infinities.
    """
    text = text.strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


class Parser:
    """Recursive-descent parser over one tokenized line (or script)."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.tokens = tokenize(source)
        self.pos = 0

    def _peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def _at(self, offset: int, kind: str, value: str | None = None) -> bool:
        token = self._peek(offset)
        return token.kind == kind and (value is None or token.value == value)

    def parse(self) -> Program:
        program = Program()
        while not self._at(0, "EOF"):
            statement = self._statement()
            if statement is None:
                self.pos += 1
            else:
                program.statements.append(statement)
        return program

    def _statement(self) -> Statement | None:
        token = self._peek()
        if token.kind != "IDENT":
            return None
        if token.value == "console" and self._at(1, "DOT") and self._at(2, "IDENT", "log"):
            printed = self._print_call()
            if printed is not None:
                return printed
        if token.value in BINDING_KEYWORDS:
            binding = self._binding()
            if binding is not None:
                return binding
        if self._at(1, "DOT") and self._at(2, "IDENT"):
            return self._method_call()
        return None

    def _call_body(self, open_offset: int) -> tuple[list[list[Token]], int] | None:
        """Collect comma-separated token groups inside a parenthesized call.

        `open_offset` points at the opening parenthesis. Returns the groups and
        the offset just past the closing parenthesis, or None when unclosed.
        """
        if not self._at(open_offset, "LPAREN"):
            return None
        groups: list[list[Token]] = [[]]
        depth = 0
        offset = open_offset + 1
        while True:
            token = self._peek(offset)
            if token.kind == "EOF":
                return None
            if token.kind == "RPAREN" and depth == 0:
                return groups, offset + 1
            if token.kind == "LPAREN":
                depth += 1
            elif token.kind == "RPAREN":
                depth -= 1
            if token.kind == "COMMA" and depth == 0:
                groups.append([])
            else:
                groups[-1].append(token)
            offset += 1

    def _text(self, group: list[Token]) -> str:
        if not group:
            return ""
        return self.source[group[0].start : group[-1].end].strip()

    def _print_call(self) -> PrintCall | None:
        # console . log : ( ... )
        if not self._at(3, "COLON"):
            return None
        body = self._call_body(4)
        if body is None:
            return self._unbalanced_print()
        groups, end = body
        inner = [token for group in groups for token in group]
        text = self.source[self._peek(4).end : self._peek(end - 1).start].strip()
        self.pos += end
        return PrintCall(self._expression(inner, text))

    def _unbalanced_print(self) -> PrintCall | None:
        """Print whose parentheses never balance: the text runs to the first `)`."""
        if not self._at(4, "LPAREN"):
            return None
        start = self._peek(4).end
        offset = 5
        while not self._at(offset, "EOF") and not self._at(offset, "RPAREN"):
            offset += 1
        closing = self._peek(offset)
        self.pos += offset if closing.kind == "EOF" else offset + 1
        return PrintCall(RawText(self.source[start : closing.start].strip()))

    def _expression(self, tokens: list[Token], text: str) -> Expr:
        if len(tokens) == 1 and tokens[0].kind == "STRING":
            return StringLiteral(unquote(tokens[0].value))
        number = parse_number(text)
        if number is not None:
            return NumberLiteral(number)
        return RawText(text)

    def _binding(self) -> WindowBinding | None:
        # local NAME = window ( "ID" )
        if not (
            self._at(1, "IDENT")
            and self._at(2, "EQ")
            and self._at(3, "IDENT", "window")
            and self._at(4, "LPAREN")
            and self._at(5, "STRING")
            and self._at(6, "RPAREN")
        ):
            return None
        binding = WindowBinding(self._peek(1).value, unquote(self._peek(5).value))
        self.pos += 7
        return binding

    def _method_call(self) -> MethodCall | None:
        # NAME . METHOD : ( args )
        if not self._at(3, "COLON"):
            return None
        body = self._call_body(4)
        if body is None:
            return None
        groups, end = body
        args = tuple(text for text in (self._text(group) for group in groups) if text)
        call = MethodCall(self._peek().value, self._peek(2).value, args)
        self.pos += end
        return call


def parse(source: str) -> Program:
    return Parser(source).parse()
