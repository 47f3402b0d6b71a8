"""Operator-precedence (Pratt) parser for emolang.

All grammar can be loosely defined as follows:

```
<program>     ::= <statement>*
<statement>   ::= <identifier> "⬅️" <expression> ["↙️"]       ; assign statement
                | "🔙" <expression> ["↙️"]                   ; return statement
                | <block>
                | <expression> ["↙️"]                        ; expression statement
<block>       ::= "🫸" <statement>* "🫷"

<expression>  ::= <prefix-op> <expression>                  ; ➖ and ⏸️, bound at PREFIX precedence
                | <expression> <infix-op> <expression>      ; left associative, see PRECEDENCES
                | <expression> "🌜" [<expression> ("🦶" <expression>)*] "🌛"   ; call
                | "🌜" <expression> "🌛"
                | "❓" <expression> <block> ["❗" <block>]
                | "⭕" <expression> <block>
                | "📛" [<identifier>] "🌜" [<identifier> ("🦶" <identifier>)*] "🌛" <block>
                | <identifier> | <integer> | <float> | <string> | "✔️" | "❌"
```

Each token kind that can start an expression has a prefix parser, each token kind that can continue one has an infix
parser; both are looked up in per-instance dispatch tables, so new operators only need a registration.

Errors never escape parse_program: a failed statement is recorded and the parser resynchronizes by skipping to the end
of that statement, i.e. past the next "↙️" outside of any block, or past the "🫷" that closes the outermost block that
was open when the error happened.
"""

import enum
import logging
import math

from emolang.core.node import (AssignStatement, BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement,
                               FloatLiteral, FunctionLiteral, Identifier, IfExpression, InfixExpression,
                               IntegerLiteral, PrefixExpression, Program, ReturnStatement, StringLiteral,
                               WhileExpression)
from emolang.core.token import SPELLINGS, TokenKind
from emolang.core.tokenizer import numeric_text
from emolang.lang.error import ParseError

logger = logging.getLogger(__name__)

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class Precedence(enum.IntEnum):
    LOWEST = enum.auto()
    OR = enum.auto()            # 🔀
    AND = enum.auto()           # 🔁
    EQUALS = enum.auto()        # 🟰 ❗🟰
    LESS_GREATER = enum.auto()  # ▶️ ▶️🟰 ◀️ ◀️🟰
    SUM = enum.auto()           # ➕ ➖
    PRODUCT = enum.auto()       # ✖️ ➗ 〰️
    PREFIX = enum.auto()        # ➖x ⏸️x
    CALL = enum.auto()          # f🌜x🌛


PRECEDENCES = {
    TokenKind.OR: Precedence.OR,
    TokenKind.AND: Precedence.AND,
    TokenKind.EQUAL: Precedence.EQUALS,
    TokenKind.NOT_EQUAL: Precedence.EQUALS,
    TokenKind.LESS_THAN: Precedence.LESS_GREATER,
    TokenKind.LESS_THAN_OR_EQUAL: Precedence.LESS_GREATER,
    TokenKind.GREATER_THAN: Precedence.LESS_GREATER,
    TokenKind.GREATER_THAN_OR_EQUAL: Precedence.LESS_GREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.MULTIPLY: Precedence.PRODUCT,
    TokenKind.DIVIDE: Precedence.PRODUCT,
    TokenKind.MODULO: Precedence.PRODUCT,
    TokenKind.LPARENTHESIS: Precedence.CALL,
}


def precedence_of(kind):
    """Binding power of kind when it appears between two expressions."""
    return PRECEDENCES.get(kind, Precedence.LOWEST)


def spelling(kind):
    """Human readable name of kind for error messages."""
    return SPELLINGS.get(kind, str(kind))


class Parser:
    """Consumes a token list exactly once through a cursor. current is the next unconsumed token."""

    def __init__(self, tokens):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].kind is not TokenKind.END:
            raise ValueError("tokens must end with an END token")
        if self.tokens[0].kind is TokenKind.START:
            self.tokens.pop(0)

        self.pos = 0
        self.depth = 0  # blocks opened but not yet closed, used to resynchronize after errors
        self.errors = []

        self.prefix_parsers = {}
        self.infix_parsers = {}

        self.register_prefix(TokenKind.IDENTIFIER, Parser.parse_identifier)
        self.register_prefix(TokenKind.INTEGER, Parser.parse_integer_literal)
        self.register_prefix(TokenKind.FLOAT, Parser.parse_float_literal)
        self.register_prefix(TokenKind.TRUE, Parser.parse_boolean_literal)
        self.register_prefix(TokenKind.FALSE, Parser.parse_boolean_literal)
        self.register_prefix(TokenKind.STRING, Parser.parse_string_literal)
        self.register_prefix(TokenKind.NOT, Parser.parse_prefix_expression)
        self.register_prefix(TokenKind.MINUS, Parser.parse_prefix_expression)
        self.register_prefix(TokenKind.LPARENTHESIS, Parser.parse_grouped_expression)
        self.register_prefix(TokenKind.IF, Parser.parse_if_expression)
        self.register_prefix(TokenKind.WHILE, Parser.parse_while_expression)
        self.register_prefix(TokenKind.FUNCTION, Parser.parse_function_literal)

        for kind in PRECEDENCES:
            self.register_infix(kind, Parser.parse_infix_expression)
        self.register_infix(TokenKind.LPARENTHESIS, Parser.parse_call_expression)

    def register_prefix(self, kind, parse):
        """Registers parse(parser) as the parser of expressions starting with kind."""
        self.prefix_parsers[kind] = parse

    def register_infix(self, kind, parse):
        """Registers parse(parser, left) as the parser of expressions continued by kind."""
        self.infix_parsers[kind] = parse

    @property
    def current(self):
        return self.tokens[self.pos]

    def peek(self):
        """Token after current. The END token is returned when there is none."""
        return self.tokens[min(self.pos + 1, len(self.tokens) - 1)]

    def advance(self):
        """Consumes current and returns it. The END token is never consumed."""
        token = self.current
        if token.kind is not TokenKind.END:
            self.pos += 1
        return token

    def check(self, kind):
        return self.current.kind is kind

    def describe_current(self):
        """Literal of current for error messages."""
        return "end of input" if self.check(TokenKind.END) else self.current.literal

    def expect(self, kind):
        """Consumes current if it is of kind, otherwise raises a ParseError."""
        if not self.check(kind):
            raise ParseError("expected '{}', got '{}'", (spelling(kind), self.describe_current()))
        return self.advance()

    def parse_program(self):
        """Parses statements until the END token. Returns the Program; errors are accumulated in self.errors."""
        statements = []
        while not self.check(TokenKind.END):
            start = self.pos
            try:
                statements.append(self.parse_statement())
            except ParseError as error:
                logger.debug("statement starting at token %d failed: %s", start, error.msg)
                self.errors.append(error.msg)
                self.synchronize(start)

        return Program(statements)

    def synchronize(self, start):
        """Skips to the end of the statement that started at token index start."""
        depth = self.depth
        self.depth = 0

        while not self.check(TokenKind.END):
            token = self.advance()
            if token.kind is TokenKind.LBRACE:
                depth += 1
            elif token.kind is TokenKind.RBRACE:
                depth -= 1
                if depth <= 0:
                    if self.check(TokenKind.SEMICOLON):
                        self.advance()
                    break
            elif token.kind is TokenKind.SEMICOLON and depth <= 0:
                break

        if self.pos == start:
            self.advance()

    def parse_statement(self):
        if self.check(TokenKind.IDENTIFIER) and self.peek().kind is TokenKind.ASSIGN:
            return self.parse_assign_statement()
        if self.check(TokenKind.RETURN):
            return self.parse_return_statement()
        if self.check(TokenKind.LBRACE):
            return self.parse_block_statement()
        return self.parse_expression_statement()

    def skip_semicolon(self):
        """Consumes an optional statement terminator."""
        if self.check(TokenKind.SEMICOLON):
            self.advance()

    def parse_assign_statement(self):
        name = self.parse_identifier()
        token = self.expect(TokenKind.ASSIGN)
        value = self.parse_expression(Precedence.LOWEST)
        self.skip_semicolon()
        return AssignStatement(token, name, value)

    def parse_return_statement(self):
        token = self.expect(TokenKind.RETURN)
        value = self.parse_expression(Precedence.LOWEST)
        self.skip_semicolon()
        return ReturnStatement(token, value)

    def parse_block_statement(self):
        """Parses statements up to and including the closing brace."""
        token = self.expect(TokenKind.LBRACE)
        self.depth += 1

        statements = []
        while not self.check(TokenKind.RBRACE):
            if self.check(TokenKind.END):
                raise ParseError("expected '{}', got '{}'", (spelling(TokenKind.RBRACE), self.describe_current()))
            statements.append(self.parse_statement())

        self.advance()
        self.depth -= 1
        return BlockStatement(token, statements)

    def parse_expression_statement(self):
        token = self.current
        expression = self.parse_expression(Precedence.LOWEST)
        self.skip_semicolon()
        return ExpressionStatement(token, expression)

    def parse_expression(self, precedence):
        """Parses an expression whose operators all bind tighter than precedence."""
        parse_prefix = self.prefix_parsers.get(self.current.kind)
        if parse_prefix is None:
            raise ParseError("no expression associated with token '{}'", self.describe_current())

        expression = parse_prefix(self)
        while precedence < precedence_of(self.current.kind):
            parse_infix = self.infix_parsers.get(self.current.kind)
            if parse_infix is None:
                return expression
            expression = parse_infix(self, expression)
        return expression

    def parse_identifier(self):
        token = self.expect(TokenKind.IDENTIFIER)
        return Identifier(token, token.literal)

    def parse_integer_literal(self):
        token = self.advance()
        try:
            value = int(numeric_text(token.literal))
        except ValueError:
            value = None
        if value is None or not INT64_MIN <= value <= INT64_MAX:
            raise ParseError("could not parse '{}' as integer", token.literal)
        return IntegerLiteral(token, value)

    def parse_float_literal(self):
        token = self.advance()
        try:
            value = float(numeric_text(token.literal))
        except ValueError:
            value = math.inf
        if not math.isfinite(value):
            raise ParseError("could not parse '{}' as float", token.literal)
        return FloatLiteral(token, value)

    def parse_boolean_literal(self):
        token = self.advance()
        return BooleanLiteral(token, token.kind is TokenKind.TRUE)

    def parse_string_literal(self):
        token = self.advance()
        return StringLiteral(token, token.literal)

    def parse_prefix_expression(self):
        token = self.advance()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(token, token.literal, right)

    def parse_grouped_expression(self):
        self.expect(TokenKind.LPARENTHESIS)
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect(TokenKind.RPARENTHESIS)
        return expression

    def parse_if_expression(self):
        token = self.expect(TokenKind.IF)
        condition = self.parse_expression(Precedence.LOWEST)
        consequence = self.parse_block_statement()

        alternative = None
        if self.check(TokenKind.ELSE):
            self.advance()
            alternative = self.parse_block_statement()

        return IfExpression(token, condition, consequence, alternative)

    def parse_while_expression(self):
        token = self.expect(TokenKind.WHILE)
        condition = self.parse_expression(Precedence.LOWEST)
        body = self.parse_block_statement()
        return WhileExpression(token, condition, body)

    def parse_function_literal(self):
        token = self.expect(TokenKind.FUNCTION)
        name = self.parse_identifier() if self.check(TokenKind.IDENTIFIER) else None
        parameters = self.parse_list(Parser.parse_identifier)
        body = self.parse_block_statement()
        return FunctionLiteral(token, name, parameters, body)

    def parse_infix_expression(self, left):
        """Generic parser of all binary operators. The right operand is parsed at the operator's own precedence, which
        makes operators of equal precedence associate to the left.
        """
        token = self.advance()
        right = self.parse_expression(precedence_of(token.kind))
        return InfixExpression(token, left, token.literal, right)

    def parse_call_expression(self, function):
        token = self.current
        arguments = self.parse_list(lambda parser: parser.parse_expression(Precedence.LOWEST))
        return CallExpression(token, function, arguments)

    def parse_list(self, parse_element):
        """Parses a parenthesized, comma separated list of elements."""
        self.expect(TokenKind.LPARENTHESIS)

        elements = []
        if self.check(TokenKind.RPARENTHESIS):
            self.advance()
            return elements

        elements.append(parse_element(self))
        while self.check(TokenKind.COMMA):
            self.advance()
            elements.append(parse_element(self))

        self.expect(TokenKind.RPARENTHESIS)
        return elements


def parse_program(tokens):
    """Parses tokens into a Program. Returns (program, errors); callers must check errors before trusting the tree."""
    parser = Parser(tokens)
    program = parser.parse_program()
    return program, parser.errors
