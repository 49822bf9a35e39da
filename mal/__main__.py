"""CLI: python -m mal [--pretty] [--debug] [--history FILE]"""

import argparse
import logging

from .repl import HISTFILE, ReplConfig, load_history, repl, save_history


def main(argv=None):
    parser = argparse.ArgumentParser(prog="mal", description="Read and print mal forms.")
    parser.add_argument("--pretty", action="store_true", help="print strings without escaping")
    parser.add_argument("--debug", action="store_true", help="log each read/eval/print step")
    parser.add_argument("--history", default=HISTFILE, help="history file (empty to disable)")
    args = parser.parse_args(argv)

    config = ReplConfig(pretty=args.pretty, debug=args.debug, history_file=args.history or None)
    if config.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    load_history(config.history_file)
    try:
        repl(config)
    finally:
        save_history(config.history_file)


if __name__ == "__main__":
    main()
