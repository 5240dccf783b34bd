"""Error handling for the ccalc language. Only GenericExceptions should be encountered while evaluating a line: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every GenericException ends the line it was raised on, never the session: bindings made by earlier lines survive.
"""

import logging
import sys

from termcolor import colored

logger = logging.getLogger(__name__)


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a ccalc error. exprs are the snippets substituted
    into msg (bolded when printed); expr is the full line the error occurred in, and start/end are the columns of the
    offending text within it.
    """
    label = "error"

    def __init__(self, msg, exprs=None, expr="", start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ()
        if isinstance(exprs, str):
            exprs = (exprs,)

        self.raw_msg = msg.format(*exprs)
        self.msg = msg.format(*(colored(e, attrs=["bold"]) for e in exprs))  # color expr snippets
        self.expr = expr
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.raw_msg)


class LexicalError(GenericException):
    """No token pattern matches the input at some column."""
    label = "lexical error"

    def __init__(self, char, expr, column):
        super().__init__("unexpected character '{}'", char, expr=expr, start=column, end=column + 1)
        self.char = char
        self.column = column


class ParseError(GenericException):
    """The token sequence does not reduce to a line. token is None when the input ended too early. expected holds the
    tokens that could have been shifted instead, as they are shown to the user.
    """
    label = "syntax error"

    def __init__(self, token, expr, expected=()):
        self.token = token
        self.expected = sorted(expected)

        hint, exprs = "", ()
        if self.expected:
            hint = ", expected {}" if len(self.expected) == 1 else ", expected one of {}"
            exprs = (", ".join(self.expected),)

        if token is None:
            column = len(expr.rstrip())
            super().__init__("unexpected end of input" + hint, exprs, expr=expr, start=column, end=column + 1)
        else:
            column = token.start_pos or 0
            super().__init__("unexpected token '{}'" + hint, (str(token),) + exprs, expr=expr, start=column,
                             end=column + len(token))


class SemanticError(GenericException):
    """A well-formed line references a name that was never bound."""
    label = "semantic error"

    def __init__(self, name, expr="", start=0, end=-1):
        super().__init__("'{}' is not defined", name, expr=expr, start=start, end=end)
        self.name = name


class ErrorHandler:
    """Context manager that reports ccalc errors instead of letting them unwind the interpreter."""
    ERROR = "red"

    def __init__(self, fatal=False):
        self.fatal = fatal
        self.errors = 0
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a line has been evaluated."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error):
        """Returns error.expr with the offending columns highlighted, and a caret line underneath."""
        end = max(error.end, error.start + 1)

        diagnosis = "  " + error.expr[:error.start]
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def format(self, error):
        """Returns the full report for error: location (if known), label, message and diagnosis."""
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line is not None and line_num is not None and file != "<in>":
                error_msg += colored(f"{file}:{line_num}: ", attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.label}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg

        if not error.internal and error.expr and error.diagnosis:
            error_msg += "\n" + ErrorHandler.diagnose(error)

        return error_msg

    def throw(self, error):
        """Reports error. Exits the process if this handler is fatal, otherwise the caller carries on with its next
        line.
        """
        self.errors += 1
        logger.debug("%s: %s", error.label, error.raw_msg)
        print(self.format(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("expression is nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
