"""Abstract syntax tree of emolang.

Every node is an immutable dataclass that owns its children outright (the tree has no back references) and keeps
the token that defined it, for literal reproduction and error messages. Tokens take no part in node equality, so two
trees compare equal whenever they have the same structure and values, whatever symbols spelled them.

string() regenerates surface syntax. Its output is chosen so that parsing it again yields an equal tree: prefix and
infix expressions are parenthesized, statements are terminated and blocks are closed explicitly.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import List, Optional

from emolang.core.token import Symbols, Token


def keycaps(text):
    """Spells decimal text with keycap digits and a white circle as decimal dot."""
    spelled = []
    for char in text:
        if char.isdigit():
            spelled.append(Symbols.DIGITS[int(char)])
        elif char == Symbols.DECIMAL_DOT:
            spelled.append(Symbols.DOTS[0])
        else:
            spelled.append(char)
    return "".join(spelled)


def positional(value):
    """Shortest decimal text that reads back as value, without exponent and always with a decimal dot."""
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    if Symbols.DECIMAL_DOT not in text:
        text += ".0"
    return text


class Node(ABC):
    """Superclass of all syntax tree nodes."""

    @abstractmethod
    def token_literal(self):
        """Literal of the token that defined this node."""

    @abstractmethod
    def string(self):
        """Source text equivalent to this node."""

    @property
    def nodes(self):
        """Direct children of this node, in source order."""
        children = []
        for node_field in fields(self):
            value = getattr(self, node_field.name)
            if isinstance(value, Node):
                children.append(value)
            elif isinstance(value, list):
                children.extend(child for child in value if isinstance(child, Node))
        return children

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(expr='<string>', nodes=[
            <Node>(expr='<string>', nodes=[
                ...
                <Node>(expr='<string>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self.string()}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __str__(self):
        return self.string()


class Statement(Node, ABC):
    """Node that can appear directly in a program or block."""


class Expression(Node, ABC):
    """Node that produces a value."""


@dataclass(frozen=True)
class Program(Node):
    statements: List[Statement]

    def token_literal(self):
        return self.statements[0].token_literal() if self.statements else ""

    def string(self):
        return " ".join(statement.string() for statement in self.statements)


@dataclass(frozen=True)
class Identifier(Expression):
    token: Token = field(compare=False)
    value: str

    def token_literal(self):
        return self.token.literal

    def string(self):
        return self.value


@dataclass(frozen=True)
class AssignStatement(Statement):
    token: Token = field(compare=False)
    name: Identifier
    value: Expression

    def token_literal(self):
        return self.token.literal

    def string(self):
        return f"{self.name.string()} {self.token.literal} {self.value.string()}{Symbols.SEMICOLON}"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token = field(compare=False)
    value: Expression

    def token_literal(self):
        return self.token.literal

    def string(self):
        return f"{self.token.literal} {self.value.string()}{Symbols.SEMICOLON}"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token = field(compare=False)
    expression: Expression

    def token_literal(self):
        return self.token.literal

    def string(self):
        return f"{self.expression.string()}{Symbols.SEMICOLON}"


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token = field(compare=False)
    statements: List[Statement]

    def token_literal(self):
        return self.token.literal

    def string(self):
        inner = " ".join(statement.string() for statement in self.statements)
        return f"{self.token.literal} {inner} {Symbols.RBRACE}" if inner else f"{self.token.literal} {Symbols.RBRACE}"


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token = field(compare=False)
    value: int

    def token_literal(self):
        return self.token.literal

    def string(self):
        return keycaps(str(self.value))


@dataclass(frozen=True)
class FloatLiteral(Expression):
    token: Token = field(compare=False)
    value: float

    def token_literal(self):
        return self.token.literal

    def string(self):
        return keycaps(positional(self.value))


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    token: Token = field(compare=False)
    value: bool

    def token_literal(self):
        return self.token.literal

    def string(self):
        return Symbols.TRUE if self.value else Symbols.FALSE


@dataclass(frozen=True)
class StringLiteral(Expression):
    token: Token = field(compare=False)
    value: str

    def token_literal(self):
        return self.token.literal

    def string(self):
        return f"{Symbols.STRING_OPEN}{self.value}{Symbols.STRING_CLOSE}"


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token = field(compare=False)
    operator: str
    right: Expression

    def token_literal(self):
        return self.token.literal

    def string(self):
        return f"{Symbols.LPARENTHESIS}{self.operator}{self.right.string()}{Symbols.RPARENTHESIS}"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token = field(compare=False)
    left: Expression
    operator: str
    right: Expression

    def token_literal(self):
        return self.token.literal

    def string(self):
        return f"{Symbols.LPARENTHESIS}{self.left.string()} {self.operator} {self.right.string()}{Symbols.RPARENTHESIS}"


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token = field(compare=False)
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def token_literal(self):
        return self.token.literal

    def string(self):
        result = f"{self.token.literal} {self.condition.string()} {self.consequence.string()}"
        if self.alternative is not None:
            result += f" {Symbols.ELSE} {self.alternative.string()}"
        return result


@dataclass(frozen=True)
class WhileExpression(Expression):
    token: Token = field(compare=False)
    condition: Expression
    body: BlockStatement

    def token_literal(self):
        return self.token.literal

    def string(self):
        return f"{self.token.literal} {self.condition.string()} {self.body.string()}"


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token = field(compare=False)
    name: Optional[Identifier]
    parameters: List[Identifier]
    body: BlockStatement

    def token_literal(self):
        return self.token.literal

    def string(self):
        name = f"{self.name.string()} " if self.name is not None else ""
        parameters = f" {Symbols.COMMA} ".join(parameter.string() for parameter in self.parameters)
        return (f"{self.token.literal} {name}{Symbols.LPARENTHESIS}{parameters}{Symbols.RPARENTHESIS} "
                f"{self.body.string()}")


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token = field(compare=False)
    function: Expression
    arguments: List[Expression]

    def token_literal(self):
        return self.token.literal

    def string(self):
        arguments = f" {Symbols.COMMA} ".join(argument.string() for argument in self.arguments)
        return f"{self.function.string()}{Symbols.LPARENTHESIS}{arguments}{Symbols.RPARENTHESIS}"
