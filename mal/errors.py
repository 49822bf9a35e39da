"""Error taxonomy shared by the tokenizer and the reader.

Every error records the character offset it was detected at in ``pos``
(``None`` where no position applies).
"""

from typing import Any, Optional


class MalError(SyntaxError):
    def __init__(self, message: str, pos: Optional[int] = None):
        super().__init__(message)
        self.pos = pos


class ParseError(MalError):
    """Raised by the tokenizer."""


class ReadError(MalError):
    """Raised by the reader."""


class UnexpectedCharacter(ParseError):
    def __init__(self, got: str, pos: int, expected: Optional[str] = None):
        message = f"unexpected character: {got} at position {pos}"
        if expected is not None:
            message += f", expected: {expected}"
        super().__init__(message, pos)
        self.got = got
        self.expected = expected


class UnknownEscapeSequence(ParseError):
    def __init__(self, char: str, pos: int):
        super().__init__(f"unknown escape sequence: \\{char} at position {pos}", pos)
        self.char = char


class ParseIntError(ParseError):
    def __init__(self, text: str, pos: int):
        super().__init__(f"parse int error at position {pos}: invalid integer {text!r}", pos)
        self.text = text


class UnexpectedEndOfInput(ParseError, ReadError):
    """Input ran out in the middle of a string, collection or reader macro."""

    def __init__(self, pos: int):
        super().__init__(f"unexpected end of input at position {pos}", pos)


class UnexpectedToken(ReadError):
    def __init__(self, got: Any, pos: int, expected: Any = None):
        message = f"unexpected token: {got} at position {pos}"
        if expected is not None:
            message += f", expected {expected}"
        super().__init__(message, pos)
        self.got = got
        self.expected = expected


class UnhashableType(ReadError):
    def __init__(self, value: Any, pos: int):
        super().__init__(f"unhashable type {value.type_name} at position {pos}", pos)
        self.value = value


class UnevenHashMap(ReadError):
    def __init__(self, pos: int):
        super().__init__(f"odd number of elements for hashmap at position {pos}", pos)


class TokenizeError(ReadError):
    """A tokenizer failure surfaced through the reader; see ``error``."""

    def __init__(self, error: ParseError):
        super().__init__(str(error), error.pos)
        self.error = error


class NoInput(ReadError):
    """The input held no form. Callers skip it without printing anything."""

    def __init__(self):
        super().__init__("")


class NestingTooDeep(ReadError):
    def __init__(self, pos: int):
        super().__init__(f"input nested too deeply at position {pos}", pos)
