"""Read-eval-print glue around the reader and printer.

Evaluation is the identity in this stage: what is read is printed back.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TextIO

from .errors import NoInput, ReadError
from .printer import pr_str
from .reader import read_str
from .types import Value

logger = logging.getLogger(__name__)

PROMPT = "user> "
HISTFILE = ".mal_history"


@dataclass
class ReplConfig:
    prompt: str = PROMPT
    history_file: Optional[str] = HISTFILE
    pretty: bool = False
    debug: bool = False


def mal_read(src: str) -> Value:
    logger.debug("read: %s", src)
    return read_str(src)


def mal_eval(value: Value) -> Value:
    logger.debug("eval: %r", value)
    return value


def mal_print(value: Value, pretty: bool = False) -> str:
    logger.debug("print: %r", value)
    return pr_str(value, pretty)


def rep(src: str, pretty: bool = False) -> str:
    return mal_print(mal_eval(mal_read(src)), pretty)


def _readline():
    # Importing readline also enables line editing for input().
    try:
        import readline
    except ImportError:
        logger.debug("readline unavailable, history disabled")
        return None
    return readline


def load_history(path: Optional[str]) -> None:
    readline = _readline()
    if readline is None or not path or not Path(path).exists():
        return
    try:
        readline.read_history_file(path)
    except OSError as e:
        logger.warning("could not load history from %s: %s", path, e)


def save_history(path: Optional[str]) -> None:
    readline = _readline()
    if readline is None or not path:
        return
    try:
        readline.write_history_file(path)
    except OSError as e:
        logger.warning("could not save history to %s: %s", path, e)


def repl(
    config: Optional[ReplConfig] = None,
    input_fn: Optional[Callable[[str], str]] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> None:
    """Run the loop until end of input.

    Blank lines and NoInput produce no output; any other ReadError is
    reported on `err` and the loop carries on.
    """
    config = config or ReplConfig()
    input_fn = input_fn or input
    out = out or sys.stdout
    err = err or sys.stderr
    while True:
        try:
            line = input_fn(config.prompt)
        except KeyboardInterrupt:
            print(file=out)
            continue
        except EOFError:
            print(file=out)
            break

        line = line.strip()
        if not line:
            continue
        try:
            print(rep(line, config.pretty), file=out)
        except NoInput:
            continue
        except ReadError as e:
            print(f"error: {e}", file=err)
