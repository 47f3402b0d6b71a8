"""Session control for emolang. Runs the tokenizer, parser and evaluator over source text, either in command-line
mode or file interpretation mode.
"""

import logging

from emolang.core.environment import Environment
from emolang.core.evaluator import evaluate
from emolang.core.parser import parse_program
from emolang.core.token import TokenKind
from emolang.core.tokenizer import tokenize
from emolang.lang.error import GenericException, ParseFailure, ScanError

logger = logging.getLogger(__name__)


def parse(source):
    """Tokenizes and parses source. Raises a ParseFailure holding every parse error if any statement failed."""
    tokens = tokenize(source)
    logger.debug("tokens: %s", tokens)

    program, errors = parse_program(tokens)
    if errors:
        raise ParseFailure(errors)

    logger.debug("syntax tree:\n%s", program.display())
    return program


def interpret(source, env=None):
    """Runs source as one program in env (a fresh environment if None) and returns its final value."""
    return evaluate(parse(source), env if env is not None else Environment())


class Session:
    """Governs an emolang session. All programs of a session share one top-level environment."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()
        self.to_exec = []  # parsed programs waiting to be run
        self.results = []  # values of programs that ran, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Appends line to prev, the unfinished input so far. Returns the joined text and whether or not a line
        continuation is necessary, i.e. whether more blocks were opened than closed. Braces inside strings and
        comments do not count.
        """
        if prev:
            line = prev + "\n" + line

        try:
            kinds = [token.kind for token in tokenize(line)]
        except ScanError:
            return line, False  # reported once the line runs
        return line, kinds.count(TokenKind.LBRACE) > kinds.count(TokenKind.RBRACE)

    def add(self, source):
        """Parses source and queues it for execution. Evaluation is delayed until run is called."""
        program = parse(source)
        if not program.statements and self.cmd_line:
            return  # nothing but whitespace and comments
        self.to_exec.append(program)

    def run(self):
        """Runs every queued program in order and stores their values in results. Will raise any errors that are
        encountered; the failing program is dropped either way.
        """
        while self.to_exec:
            program = self.to_exec.pop(0)
            self.results.append(evaluate(program, self.env))

        if not self.cmd_line:
            self.error_handler.remove_file()  # no error was raised

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
