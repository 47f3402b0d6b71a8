"""Uses the emolang implementation to interpret emolang files/run in command-line mode. Also uses error handling
context manager. Called from the emolang executable script.
"""

import argparse
import logging
import sys

from emolang.lang.error import ErrorHandler
from emolang.lang.session import Session
from emolang.lang.shell import Shell

RECURSION_LIMIT = 5000  # each emolang call takes a handful of Python frames


def main():
    """Runs the emolang interpreter. Called from the emolang executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="emolang")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--debug", help="log tokens, syntax trees and function calls", action="store_true")
        args = parser.parse_args()

        sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

        logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                            format="%(levelname)s:%(name)s: %(message)s")

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
