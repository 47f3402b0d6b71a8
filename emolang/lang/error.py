"""Error handling for emolang. Only GenericExceptions should be encountered during running: if another type of error
is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

There are two independent error channels:
    1. Parse errors: collected (never raised) by the parser, one string per failed statement. The session wraps the
       whole list in a ParseFailure so that it can be displayed at once.
    2. Evaluation errors: raised as EvaluationError and abort the rest of the program.
Malformed source that cannot even be tokenized (an unterminated string) raises ScanError.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw an emolang error. msg is a format string whose
    placeholders are filled with exprs, the offending snippets of source.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = [str(expr) for expr in exprs]
        self.msg = msg.format(*self.exprs)
        self.expr = self.exprs[0] if self.exprs else ""  # should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def render(self):
        """Returns msg with its expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class ScanError(GenericException):
    """Source text could not be tokenized."""


class ParseError(GenericException):
    """A single statement could not be parsed. The parser records its msg and carries on with the next statement."""


class ParseFailure(GenericException):
    """All parse errors of a program, raised by the session once parsing is over."""

    def __init__(self, errors):
        super().__init__("{} parse error(s)", str(len(errors)), diagnosis=False)
        self.errors = list(errors)


class EvaluationError(GenericException):
    """Evaluation of a program failed. Fatal for the current program."""

    def __init__(self, msg, exprs=None, **kwargs):
        kwargs.setdefault("diagnosis", False)
        super().__init__(msg, exprs, **kwargs)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom emolang errors."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.file = None

    def register_file(self, path):
        """Registers path, shown on top of errors raised while it runs."""
        self.file = path

    def remove_file(self):
        """Forgets the registered path. Should be called after the file ran successfully."""
        self.file = None

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error, a GenericException. Exits the process if this handler is fatal."""
        error_msg = ""
        if self.file:
            error_msg += f"  File '{self.file}':\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        if isinstance(error, ParseFailure):
            error_msg += "\n".join(colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + msg
                                   for msg in error.errors)
        else:
            error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.render()
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.file = None  # if error occurred, reset file (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
