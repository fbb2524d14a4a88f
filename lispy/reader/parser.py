"""
  Lispy Lexer and Parser

Turns source text into a generic labelled parse tree. The evaluator never
sees this tree; `lispy.reader.reader.read` converts it into values.

Grammar (tags follow the same scheme, e.g. `expr|number|regex`):

    number  : /-?[0-9]+(\\.[0-9]+)?/ ;
    symbol  : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&%]+/ ;
    string  : /"(\\\\.|[^"])*"/ ;
    comment : /;[^\\r\\n]*/ ;
    sexpr   : '(' <expr>* ')' ;
    qexpr   : '{' <expr>* '}' ;
    expr    : <number> | <symbol> | <string> | <comment> | <sexpr> | <qexpr> ;
    lispy   : /^/ <expr>* /$/ ;
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Optional

from lispy.errors import LispySyntaxError


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\r\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r"|(?P<atom>[a-zA-Z0-9_+\-*/\\=<>!&%.]+)",  # numbers and symbols
    re.DOTALL,
)

NUMBER_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")
SYMBOL_RE = re.compile(r"[a-zA-Z0-9_+\-*/\\=<>!&%]+")

OPENERS = {"lparen": ("sexpr", "(", ")"), "lbrace": ("qexpr", "{", "}")}
CLOSERS = {"rparen": ")", "rbrace": "}"}


class Token(NamedTuple):
    kind: str
    text: str
    line: int
    column: int


@dataclass
class ParseNode:
    """One node of the parse tree: `tag`, matched `contents`, `children`."""

    tag: str
    contents: str = ""
    children: list[ParseNode] = field(default_factory=list)
    line: int = 1
    column: int = 1


def lex(source: str, filename: str = "<input>") -> Iterator[Token]:
    """Token generator: yields Tokens, skipping whitespace."""
    pos = 0
    line = 1
    line_start = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        column = pos - line_start + 1
        if not m:
            if source[pos] == '"':
                raise LispySyntaxError("unterminated string", line, column, filename)
            raise LispySyntaxError(f"unexpected character {source[pos]!r}", line, column, filename)

        kind = m.lastgroup
        text = m.group(kind)
        if kind == "atom":
            if NUMBER_RE.fullmatch(text):
                kind = "number"
            elif SYMBOL_RE.fullmatch(text):
                kind = "symbol"
            else:
                raise LispySyntaxError(f"invalid token {text!r}", line, column, filename)

        if kind != "whitespace":
            yield Token(kind, text, line, column)

        # keep line/column in step with multi-line whitespace and strings
        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rindex("\n") + 1
        pos = m.end()


class TokenStream:
    def __init__(self, token_iter: Iterator[Token], filename: str = "<input>"):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.filename = filename
        self.last: Optional[Token] = None

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        tok = self.buffer.pop(0) if self.buffer else next(self.tokens, None)
        if tok is not None:
            self.last = tok
        return tok

    def _error(self, message: str, tok: Optional[Token]) -> LispySyntaxError:
        if tok is None:
            tok = self.last
        line, column = (tok.line, tok.column) if tok else (1, 1)
        return LispySyntaxError(message, line, column, self.filename)

    def parse_expr(self) -> Optional[ParseNode]:
        tok = self.peek()
        if tok is None:
            return None

        if tok.kind in ("number", "symbol", "string", "comment"):
            self.advance()
            return ParseNode(f"expr|{tok.kind}|regex", tok.text, [], tok.line, tok.column)

        if tok.kind in OPENERS:
            self.advance()
            name, open_char, close_char = OPENERS[tok.kind]
            node = ParseNode(f"expr|{name}|>", "", [], tok.line, tok.column)
            node.children.append(ParseNode("char", open_char, [], tok.line, tok.column))
            while True:
                nxt = self.peek()
                if nxt is None:
                    raise self._error(f"unexpected end of input, expected '{close_char}'", None)
                if nxt.kind in CLOSERS:
                    self.advance()
                    if CLOSERS[nxt.kind] != close_char:
                        raise self._error(
                            f"unexpected '{nxt.text}', expected '{close_char}'", nxt
                        )
                    node.children.append(ParseNode("char", close_char, [], nxt.line, nxt.column))
                    return node
                node.children.append(self.parse_expr())

        if tok.kind in CLOSERS:
            raise self._error(f"unexpected '{tok.text}'", tok)

        raise self._error(f"Unknown token: {tok.kind} {tok.text}", tok)

    def parse_all(self) -> Iterator[ParseNode]:
        while self.peek() is not None:
            yield self.parse_expr()

    def parse_program(self) -> ParseNode:
        """Parse the whole input into the root (`>`) node."""
        root = ParseNode(">", "")
        root.children.append(ParseNode("regex", ""))
        root.children.extend(self.parse_all())
        root.children.append(ParseNode("regex", ""))
        return root


def parse(source: str, filename: str = "<input>") -> ParseNode:
    """Parse `source` into a parse tree, raising LispySyntaxError on bad input."""
    return TokenStream(lex(source, filename), filename).parse_program()
