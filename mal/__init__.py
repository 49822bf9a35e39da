from .errors import MalError, NoInput, ParseError, ReadError
from .printer import pr_str
from .reader import read_str
from .repl import rep
from .tokenizer import tokenize

__all__ = ["read_str", "pr_str", "tokenize", "rep", "MalError", "ParseError", "ReadError", "NoInput"]
