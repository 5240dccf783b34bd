"""Runs the ccalc interpreter over a file, over expressions given with -e, or in command-line mode. Installed as the
ccalc executable script.
"""

import argparse
import logging
import sys

from ccalc.lang.environment import Environment
from ccalc.lang.error import ErrorHandler
from ccalc.lang.session import Session
from ccalc.lang.shell import Shell


def main(argv=None):
    """Runs ccalc interpreter. Returns the process exit status: 1 if any line failed in file or -e mode."""
    parser = argparse.ArgumentParser(prog="ccalc", description="Interactive calculator over complex numbers.")
    parser.add_argument("file", help="file to evaluate line by line (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-e", "--eval", dest="exprs", action="append", metavar="EXPR",
                        help="evaluate EXPR and print its value (may be repeated, shares bindings)")
    parser.add_argument("--strict", action="store_true", help="stop at the first error")
    parser.add_argument("-v", "--verbose", action="store_true", help="log tokens, reductions and bindings")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    with ErrorHandler(fatal=args.strict) as error_handler:
        if args.file is not None or args.exprs:
            env = Environment()
            if args.file is not None:
                Session(error_handler, args.file, cmd_line=False, env=env).run(echo=True)

            # -e expressions run after the file, against the same bindings, and are reported without a file prefix
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, env=env)
            for line_num, expr in enumerate(args.exprs or [], start=1):
                sess.add(expr, line_num)
            sess.run(echo=True)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()

    return 1 if error_handler.errors else 0


if __name__ == "__main__":
    sys.exit(main())
