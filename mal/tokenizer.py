"""Tokenizer for mal source text."""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .errors import ParseIntError, UnexpectedCharacter, UnexpectedEndOfInput, UnknownEscapeSequence
from .types import INT_MAX, INT_MIN

logger = logging.getLogger(__name__)

SYMBOL_PUNCTUATION = "!£$%&*-_=+<>.#|¬/?"

_INT_RE = re.compile(r"[+-]?[0-9]+")


class TokenType(Enum):
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    QUOTE = "'"
    QUASIQUOTE = "`"
    UNQUOTE = "~"
    SPLICE_UNQUOTE = "~@"
    DEREF = "@"
    WITH_META = "^"
    SYMBOL = "symbol"
    KEYWORD = "keyword"
    STRING = "string"
    INT = "int"
    NIL = "nil"
    TRUE = "true"
    FALSE = "false"


# Characters that are a complete token on their own. `~` is handled apart
# because it may start `~@`.
_SINGLE = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "'": TokenType.QUOTE,
    "`": TokenType.QUASIQUOTE,
    "@": TokenType.DEREF,
    "^": TokenType.WITH_META,
}

_NAMED = {
    "nil": TokenType.NIL,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

_ESCAPES = {'"': '"', "\\": "\\", "n": "\n"}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any = None
    pos: int = field(default=0, compare=False)

    def __str__(self):
        if self.value is None:
            return self.type.value
        return f"{self.type.name}({self.value!r})"


def is_symbol_character(ch: str) -> bool:
    return ch.isalnum() or ch in SYMBOL_PUNCTUATION


def parse_int(text: str, pos: int = 0) -> int:
    """Parse `text` as a 32-bit signed integer.

    Accepts an optional sign followed by ASCII digits only. Raises
    ParseIntError otherwise, or when the value does not fit in 32 bits.
    """
    if not _INT_RE.fullmatch(text):
        raise ParseIntError(text, pos)
    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        raise ParseIntError(text, pos)
    return value


class _Cursor:
    __slots__ = ("src", "pos")

    def __init__(self, src: str):
        self.src = src
        self.pos = 0

    def peek(self) -> Optional[str]:
        if self.pos < len(self.src):
            return self.src[self.pos]
        return None

    def advance(self) -> None:
        self.pos += 1

    def expect(self, expected: str) -> None:
        ch = self.peek()
        if ch is None:
            raise UnexpectedEndOfInput(self.pos)
        if ch != expected:
            raise UnexpectedCharacter(ch, self.pos, expected)
        self.advance()

    def take_while(self, predicate) -> str:
        start = self.pos
        while (ch := self.peek()) is not None and predicate(ch):
            self.advance()
        return self.src[start:self.pos]


def _skip_insignificant(cur: _Cursor) -> None:
    while (ch := cur.peek()) is not None:
        if ch == "," or ch.isspace():
            cur.advance()
        elif ch == ";":
            cur.take_while(lambda c: c != "\n")
        else:
            break


def _read_keyword(cur: _Cursor) -> Token:
    start = cur.pos
    cur.expect(":")
    return Token(TokenType.KEYWORD, cur.take_while(str.isalnum), start)


def _read_string(cur: _Cursor) -> Token:
    start = cur.pos
    cur.expect('"')
    out: list[str] = []
    while True:
        ch = cur.peek()
        if ch is None:
            raise UnexpectedEndOfInput(cur.pos)
        if ch == '"':
            break
        cur.advance()
        if ch == "\\":
            esc = cur.peek()
            if esc is None:
                raise UnexpectedEndOfInput(cur.pos)
            if esc not in _ESCAPES:
                raise UnknownEscapeSequence(esc, cur.pos)
            out.append(_ESCAPES[esc])
            cur.advance()
        else:
            out.append(ch)
    cur.expect('"')
    return Token(TokenType.STRING, "".join(out), start)


def _read_bare(cur: _Cursor) -> Token:
    start = cur.pos
    text = cur.take_while(is_symbol_character)
    if text in _NAMED:
        return Token(_NAMED[text], None, start)
    try:
        return Token(TokenType.INT, parse_int(text, start), start)
    except ParseIntError:
        return Token(TokenType.SYMBOL, text, start)


def _next_token(cur: _Cursor) -> Optional[Token]:
    _skip_insignificant(cur)
    ch = cur.peek()
    if ch is None:
        return None
    start = cur.pos
    if ch in _SINGLE:
        cur.advance()
        return Token(_SINGLE[ch], None, start)
    if ch == "~":
        cur.advance()
        if cur.peek() == "@":
            cur.advance()
            return Token(TokenType.SPLICE_UNQUOTE, None, start)
        return Token(TokenType.UNQUOTE, None, start)
    if ch == ":":
        return _read_keyword(cur)
    if ch == '"':
        return _read_string(cur)
    if is_symbol_character(ch):
        return _read_bare(cur)
    raise UnexpectedCharacter(ch, start)


def tokenize(src: str) -> list[Token]:
    cur = _Cursor(src)
    tokens: list[Token] = []
    while (tok := _next_token(cur)) is not None:
        tokens.append(tok)
    logger.debug("tokenized %d characters into %d tokens", len(src), len(tokens))
    return tokens
