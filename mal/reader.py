"""Recursive-descent reader: mal source text to a value tree."""

import logging
from typing import Optional

from .errors import (
    NestingTooDeep,
    NoInput,
    ParseError,
    TokenizeError,
    UnevenHashMap,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnhashableType,
)
from .tokenizer import Token, TokenType, tokenize
from .types import FALSE, NIL, TRUE, Atom, HashMap, Int, Keyword, List, String, Symbol, Value, Vector

logger = logging.getLogger(__name__)

# Reader macros: token type -> symbol the following form is wrapped with.
MACROS = {
    TokenType.QUOTE: "quote",
    TokenType.QUASIQUOTE: "quasiquote",
    TokenType.UNQUOTE: "unquote",
    TokenType.SPLICE_UNQUOTE: "splice-unquote",
    TokenType.DEREF: "deref",
}

_CONSTANTS = {
    TokenType.NIL: NIL,
    TokenType.TRUE: TRUE,
    TokenType.FALSE: FALSE,
}


class Reader:
    """Walks a token list once; `end` is the position reported when it runs out."""

    __slots__ = ("tokens", "index", "end")

    def __init__(self, tokens: list[Token], end: int = 0):
        self.tokens = tokens
        self.index = 0
        self.end = end

    def peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def next(self) -> Token:
        tok = self.peek()
        if tok is None:
            raise UnexpectedEndOfInput(self.end)
        self.index += 1
        return tok

    def read_form(self) -> Value:
        tok = self.peek()
        if tok is None:
            raise UnexpectedEndOfInput(self.end)
        if tok.type == TokenType.LPAREN:
            self.next()
            return List(self._read_items(TokenType.RPAREN))
        if tok.type == TokenType.LBRACKET:
            self.next()
            return Vector(self._read_items(TokenType.RBRACKET))
        if tok.type == TokenType.LBRACE:
            self.next()
            return self._read_map()
        return self._read_atom()

    def _read_items(self, closer: TokenType) -> list[Value]:
        items: list[Value] = []
        while True:
            tok = self.peek()
            if tok is None:
                raise UnexpectedEndOfInput(self.end)
            if tok.type == closer:
                self.next()
                return items
            items.append(self.read_form())

    def _read_map(self) -> HashMap:
        starts = []
        forms = []
        while True:
            tok = self.peek()
            if tok is None:
                raise UnexpectedEndOfInput(self.end)
            if tok.type == TokenType.RBRACE:
                closer = self.next()
                break
            starts.append(tok.pos)
            forms.append(self.read_form())

        # Pairs are checked in order, so a bad key ahead of a dangling
        # form is reported as unhashable.
        mapping = {}
        for i in range(0, len(forms), 2):
            if i + 1 == len(forms):
                raise UnevenHashMap(closer.pos)
            key = forms[i]
            if not isinstance(key, Atom):
                raise UnhashableType(key, starts[i])
            mapping[key] = forms[i + 1]
        return HashMap(mapping)

    def _read_atom(self) -> Value:
        tok = self.next()
        kind = tok.type

        if kind in MACROS:
            return List([Symbol(MACROS[kind]), self.read_form()])
        if kind == TokenType.WITH_META:
            meta = self.read_form()
            return List([Symbol("with-meta"), self.read_form(), meta])

        if kind == TokenType.SYMBOL:
            return Symbol(tok.value)
        if kind == TokenType.KEYWORD:
            return Keyword(tok.value)
        if kind == TokenType.STRING:
            return String(tok.value)
        if kind == TokenType.INT:
            return Int(tok.value)
        if kind in _CONSTANTS:
            return _CONSTANTS[kind]

        raise UnexpectedToken(tok, tok.pos)


def read_str(src: str) -> Value:
    """Read the first form in `src`.

    Raises NoInput when `src` holds no tokens at all (blank or comment-only),
    TokenizeError wrapping the tokenizer's error, NestingTooDeep when the
    forms nest past the interpreter's recursion limit, or another ReadError.
    """
    try:
        tokens = tokenize(src)
    except ParseError as e:
        raise TokenizeError(e) from e
    if not tokens:
        raise NoInput()

    reader = Reader(tokens, len(src))
    try:
        value = reader.read_form()
    except RecursionError:
        tok = reader.peek()
        raise NestingTooDeep(tok.pos if tok is not None else reader.end) from None
    logger.debug("read %s from %d tokens", value.type_name, len(tokens))
    return value
