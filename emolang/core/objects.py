"""Runtime values of emolang. Equality is structural within a variant and always false across variants, except for
functions, which are only equal to themselves.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from emolang.core.node import BlockStatement, Identifier
from emolang.core.token import Symbols


class Object(ABC):
    """Superclass of all runtime values."""

    @property
    def type_name(self):
        return type(self).__name__

    @abstractmethod
    def inspect(self):
        """Display form of this value, as printed by the shell."""

    def __str__(self):
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    value: int

    def inspect(self):
        return str(self.value)


@dataclass(frozen=True)
class Float(Object):
    value: float

    def inspect(self):
        return repr(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    value: bool

    def inspect(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String(Object):
    value: str

    def inspect(self):
        return self.value


@dataclass(frozen=True)
class Null(Object):

    def inspect(self):
        return "null"


@dataclass(frozen=True)
class ReturnValue(Object):
    """Carries the value of a return statement up to the enclosing function call or program. Never visible to user
    code.
    """
    value: Object

    def inspect(self):
        return self.value.inspect()


@dataclass(eq=False)
class Function(Object):
    """A function literal together with the environment it was defined in (its closure)."""
    parameters: List[Identifier]
    body: BlockStatement
    env: "Environment" = field(repr=False)
    name: str = None

    def inspect(self):
        parameters = f" {Symbols.COMMA} ".join(parameter.string() for parameter in self.parameters)
        name = f"{self.name} " if self.name else ""
        return f"{Symbols.FUNCTION} {name}{Symbols.LPARENTHESIS}{parameters}{Symbols.RPARENTHESIS} {self.body.string()}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def to_boolean(value):
    """Returns the Boolean singleton for a Python bool."""
    return TRUE if value else FALSE

