"""
  CI LISP Reader, Lexer and Parser

- Streaming, lazy parsing
- Builds AST nodes through cilisp.construction instead of returning raw lists:

    - int literals    -> NumberNode(INT)
    - double literals -> NumberNode(DOUBLE)     (anything with a '.')
    - symbols         -> SymbolRefNode
    - (f e1 e2 ...)   -> FunctionCallNode       (f may be outside the catalogue)
    - ((let (x e) (int y e) (double z e)) body) -> ScopeNode
    - quit            -> QUIT                   (top level only)

Grammar:

    program     := s_expr | 'quit'
    s_expr      := number | symbol | '(' symbol s_expr* ')' | '(' let_section s_expr ')'
    let_section := '(' 'let' let_elem+ ')'
    let_elem    := '(' [ 'int' | 'double' ] symbol s_expr ')'
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional, Union

from cilisp.construction import (
    append_operand,
    make_binding,
    make_function_call,
    make_number,
    make_scope,
    make_symbol_ref,
    merge_binding_into_table,
)
from cilisp.diagnostics import Diagnostics
from cilisp.errors import CilispSyntaxError
from cilisp.types.ast import Node
from cilisp.types.number import NumType
from cilisp.types.symbol_table import SymbolTable

logger = logging.getLogger("cilisp.reader")

_END = r"(?![^\s();])"

TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<double>[+-]?(?:\d+\.\d*|\.\d+)" + _END + r")"  # 1.5  1.  .5
    r"|(?P<int>[+-]?\d+" + _END + r")"  # 42  -7
    r"|(?P<symbol>[^\s();]+)"  # fallback: symbols
    r")",
    re.DOTALL,
)

TYPE_KEYWORDS: dict[str, NumType] = {
    "int": NumType.INT,
    "double": NumType.DOUBLE,
}


class QuitType:
    def __repr__(self): return "quit"


QUIT = QuitType()


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            if source[pos:].isspace():
                break
            raise CilispSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        if m.group("comment"):
            continue
        for nm in ("lparen", "rparen", "double", "int", "symbol"):
            if m.group(nm):
                logger.debug("token %s %r", nm, m.group(nm))
                yield nm, m.group(nm)
                break


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]], diagnostics: Optional[Diagnostics] = None):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def peek(self, offset: int = 0) -> tuple[Optional[str], Optional[str]]:
        while len(self.buffer) <= offset:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[offset]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def expect(self, tok_type: str, tok_val: Optional[str] = None) -> str:
        got_type, got_val = self.advance()
        if got_type != tok_type or (tok_val is not None and got_val != tok_val):
            wanted = tok_val if tok_val is not None else tok_type
            found = "end of input" if got_type is None else repr(got_val)
            raise CilispSyntaxError(f"Expected {wanted!r}, found {found}")
        return got_val

    def parse_program(self) -> Union[Node, QuitType, None]:
        """Parse one top-level form; None at end of input."""
        tok_type, tok_val = self.peek()
        if tok_type == "symbol" and tok_val == "quit":
            self.advance()
            return QUIT
        return self.parse_expr()

    def parse_expr(self) -> Optional[Node]:
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "int":
            self.advance()
            return make_number(int(tok_val), NumType.INT)

        if tok_type == "double":
            self.advance()
            return make_number(float(tok_val), NumType.DOUBLE)

        if tok_type == "symbol":
            self.advance()
            return make_symbol_ref(tok_val)

        if tok_type == "rparen":
            raise CilispSyntaxError("Unexpected ')'")

        # '(' starts either a scope or a function call
        self.advance()
        if self.peek()[0] == "lparen" and self.peek(1) == ("symbol", "let"):
            table = self.parse_let_section()
            body = self._require_expr()
            self.expect("rparen")
            return make_scope(table, body)

        tok_type, name = self.advance()
        if tok_type is None:
            raise CilispSyntaxError("Unmatched '('")
        if tok_type != "symbol":
            raise CilispSyntaxError(f"Expected a function name, found {name!r}")
        items: list[Node] = []
        while self.peek()[0] != "rparen":
            items.append(self._require_expr())
        self.advance()

        # Operand lists are assembled right to left
        operands = None
        for item in reversed(items):
            operands = append_operand(item, operands)
        return make_function_call(name, operands)

    def parse_let_section(self) -> SymbolTable:
        self.expect("lparen")
        self.expect("symbol", "let")
        table: Optional[SymbolTable] = None
        while self.peek()[0] == "lparen":
            table = merge_binding_into_table(self.parse_let_elem(), table, self.diagnostics)
        self.expect("rparen")
        if table is None:
            raise CilispSyntaxError("let requires at least one binding")
        return table

    def parse_let_elem(self):
        self.expect("lparen")
        forced_cast = None
        tok_type, tok_val = self.peek()
        if tok_type == "symbol" and tok_val in TYPE_KEYWORDS and self.peek(1)[0] == "symbol":
            self.advance()
            forced_cast = TYPE_KEYWORDS[tok_val]
        name = self.expect("symbol")
        value = self._require_expr()
        self.expect("rparen")
        return make_binding(name, value, forced_cast)

    def _require_expr(self) -> Node:
        if self.peek()[0] is None:
            raise CilispSyntaxError("Unmatched '('")
        return self.parse_expr()

    def parse_all(self) -> Iterator[Union[Node, QuitType]]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_program()


def read(source: str, diagnostics: Optional[Diagnostics] = None) -> Optional[Node]:
    """Parse the first expression of `source`."""
    return TokenStream(lex(source), diagnostics).parse_expr()
