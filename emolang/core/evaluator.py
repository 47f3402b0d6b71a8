"""Tree-walking evaluator for emolang.

evaluate(node, env) dispatches on the node type through a plain lookup table. A single environment is threaded through
the whole call tree, so assignments are visible to later statements and nested scopes. Early return is signaled with
ReturnValue wrappers: blocks pass them upwards untouched, and the enclosing function call or program unwraps them.

Numbers follow these rules:
    - Integer op Integer stays an Integer for ➕ ➖ ✖️ ➗ 〰️, and must fit in a signed 64-bit integer
    - ➗ truncates toward zero, 〰️ takes the sign of the dividend, and both fail on an Integer zero divisor
    - as soon as a Float is involved, both operands are promoted to Float
    - Float division by zero follows IEEE 754: ±inf, or NaN for 0 ➗ 0 and for any 〰️ by zero
"""

import logging
import math

from emolang.core.node import (AssignStatement, BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement,
                               FloatLiteral, FunctionLiteral, Identifier, IfExpression, InfixExpression,
                               IntegerLiteral, PrefixExpression, Program, ReturnStatement, StringLiteral,
                               WhileExpression)
from emolang.core.objects import NULL, Boolean, Float, Function, Integer, Null, ReturnValue, String, to_boolean
from emolang.core.parser import INT64_MAX, INT64_MIN
from emolang.core.token import TokenKind
from emolang.lang.error import EvaluationError

logger = logging.getLogger(__name__)

COMPARISONS = {
    TokenKind.EQUAL: lambda left, right: left == right,
    TokenKind.NOT_EQUAL: lambda left, right: left != right,
    TokenKind.GREATER_THAN: lambda left, right: left > right,
    TokenKind.GREATER_THAN_OR_EQUAL: lambda left, right: left >= right,
    TokenKind.LESS_THAN: lambda left, right: left < right,
    TokenKind.LESS_THAN_OR_EQUAL: lambda left, right: left <= right,
}


def evaluate(node, env):
    """Evaluates node in env and returns its value. Raises an EvaluationError if evaluation fails."""
    try:
        evaluator = EVALUATORS[type(node)]
    except KeyError:
        raise EvaluationError("cannot evaluate '{}'", type(node).__name__, internal=True)
    return evaluator(node, env)


def is_truthy(obj):
    """Truthiness used by ⏸️, 🔁 and 🔀: positive numbers, true and non-empty strings are truthy, null is not."""
    if isinstance(obj, (Integer, Float)):
        return obj.value > 0
    if isinstance(obj, (Boolean, String)):
        return bool(obj.value)
    if isinstance(obj, Null):
        return False
    return True


def is_satisfied(obj):
    """Truthiness used by conditions: null is false, booleans are themselves, anything else is true."""
    if isinstance(obj, Null):
        return False
    if isinstance(obj, Boolean):
        return obj.value
    return True


def checked(value):
    """Wraps value in an Integer if it fits in 64 bits."""
    if not INT64_MIN <= value <= INT64_MAX:
        raise EvaluationError("integer overflow: '{}'", str(value))
    return Integer(value)


def eval_program(program, env):
    if not program.statements:
        raise EvaluationError("cannot evaluate an empty program")

    result = NULL
    for statement in program.statements:
        result = evaluate(statement, env)
        if isinstance(result, ReturnValue):
            return result.value
    return result


def eval_block_statement(block, env):
    """Like eval_program, except that a ReturnValue is passed on as is for the enclosing call or program."""
    if not block.statements:
        raise EvaluationError("cannot evaluate an empty block")

    result = NULL
    for statement in block.statements:
        result = evaluate(statement, env)
        if isinstance(result, ReturnValue):
            return result
    return result


def eval_expression_statement(statement, env):
    return evaluate(statement.expression, env)


def eval_assign_statement(statement, env):
    value = evaluate(statement.value, env)
    if isinstance(value, ReturnValue):
        return value  # a return inside the right-hand side leaves before anything is bound
    return env.set(statement.name.value, value)


def eval_return_statement(statement, env):
    value = evaluate(statement.value, env)
    if isinstance(value, ReturnValue):
        return value
    return ReturnValue(value)


def eval_identifier(identifier, env):
    return env.get(identifier.value)


def eval_integer_literal(literal, env):
    return Integer(literal.value)


def eval_float_literal(literal, env):
    return Float(literal.value)


def eval_boolean_literal(literal, env):
    return to_boolean(literal.value)


def eval_string_literal(literal, env):
    return String(literal.value)


def eval_prefix_expression(expression, env):
    right = evaluate(expression.right, env)
    kind = expression.token.kind

    if kind is TokenKind.NOT:
        return to_boolean(not truthiness(right, expression.operator))

    if kind is TokenKind.MINUS:
        if isinstance(right, ReturnValue):
            return right
        if isinstance(right, Integer):
            return checked(-right.value)
        if isinstance(right, Float):
            return Float(-right.value)
        raise EvaluationError("unsupported operand for '{}': '{}'", (expression.operator, right.type_name))

    raise EvaluationError("unknown operator: '{}'", expression.operator)


def truthiness(obj, operator):
    """is_truthy of an operand of operator. Pending return values are not operands."""
    if isinstance(obj, ReturnValue):
        raise EvaluationError("'{}' cannot be applied to a return value", operator)
    return is_truthy(obj)


def eval_infix_expression(expression, env):
    kind = expression.token.kind

    if kind in (TokenKind.AND, TokenKind.OR):
        left = truthiness(evaluate(expression.left, env), expression.operator)
        if left is (kind is TokenKind.OR):
            return to_boolean(left)  # short circuit
        return to_boolean(truthiness(evaluate(expression.right, env), expression.operator))

    left = evaluate(expression.left, env)
    if isinstance(left, ReturnValue):
        return left
    right = evaluate(expression.right, env)
    if isinstance(right, ReturnValue):
        return right
    return infix(kind, expression.operator, left, right)


def infix(kind, operator, left, right):
    """Applies the binary operator of kind (spelled operator) to two values."""
    if isinstance(left, Integer) and isinstance(right, Integer):
        return integer_infix(kind, operator, left.value, right.value)

    if isinstance(left, (Integer, Float)) and isinstance(right, (Integer, Float)):
        return float_infix(kind, operator, float(left.value), float(right.value))

    if kind is TokenKind.EQUAL:
        return to_boolean(left == right)
    if kind is TokenKind.NOT_EQUAL:
        return to_boolean(left != right)

    if type(left) is not type(right):
        raise EvaluationError("type mismatch: '{}' '{}' '{}'", (left.type_name, operator, right.type_name))
    raise EvaluationError("unknown operator: '{}' '{}' '{}'", (left.type_name, operator, right.type_name))


def integer_infix(kind, operator, left, right):
    if kind in COMPARISONS:
        return to_boolean(COMPARISONS[kind](left, right))

    if kind is TokenKind.PLUS:
        return checked(left + right)
    if kind is TokenKind.MINUS:
        return checked(left - right)
    if kind is TokenKind.MULTIPLY:
        return checked(left * right)

    if kind in (TokenKind.DIVIDE, TokenKind.MODULO):
        if right == 0:
            raise EvaluationError("division by zero: '{} {} {}'", (str(left), operator, str(right)))

        quotient = abs(left) // abs(right)
        if (left < 0) != (right < 0):
            quotient = -quotient

        if kind is TokenKind.DIVIDE:
            return checked(quotient)
        return checked(left - right * quotient)

    raise EvaluationError("unknown operator: 'Integer' '{}' 'Integer'", operator)


def float_infix(kind, operator, left, right):
    if kind in COMPARISONS:
        return to_boolean(COMPARISONS[kind](left, right))

    if kind is TokenKind.PLUS:
        return Float(left + right)
    if kind is TokenKind.MINUS:
        return Float(left - right)
    if kind is TokenKind.MULTIPLY:
        return Float(left * right)

    if kind is TokenKind.DIVIDE:
        if right == 0.0:
            if left == 0.0 or math.isnan(left):
                return Float(math.nan)
            return Float(math.copysign(math.inf, left) * math.copysign(1.0, right))
        return Float(left / right)

    if kind is TokenKind.MODULO:
        if right == 0.0 or math.isinf(left):
            return Float(math.nan)
        return Float(math.fmod(left, right))

    raise EvaluationError("unknown operator: 'Float' '{}' 'Float'", operator)


def eval_if_expression(expression, env):
    condition = evaluate(expression.condition, env)
    if isinstance(condition, ReturnValue):
        return condition

    if is_satisfied(condition):
        return evaluate(expression.consequence, env)
    if expression.alternative is not None:
        return evaluate(expression.alternative, env)
    return NULL


def eval_while_expression(expression, env):
    while True:
        condition = evaluate(expression.condition, env)
        if isinstance(condition, ReturnValue):
            return condition
        if not is_satisfied(condition):
            return NULL

        result = evaluate(expression.body, env)
        if isinstance(result, ReturnValue):
            return result


def eval_function_literal(literal, env):
    name = literal.name.value if literal.name is not None else None
    function = Function(literal.parameters, literal.body, env, name)
    if name is not None:
        env.set(name, function)
    return function


def eval_call_expression(expression, env):
    function = evaluate(expression.function, env)
    if isinstance(function, ReturnValue):
        return function
    if not isinstance(function, Function):
        raise EvaluationError("not a function: '{}'", function.inspect())

    arguments = []
    for argument in expression.arguments:
        value = evaluate(argument, env)
        if isinstance(value, ReturnValue):
            return value
        arguments.append(value)

    return apply_function(function, arguments)


def apply_function(function, arguments):
    """Calls function with already evaluated arguments, in a new scope nested in the function's closure."""
    if len(arguments) != len(function.parameters):
        raise EvaluationError("wrong number of arguments: expected {}, got {}",
                              (str(len(function.parameters)), str(len(arguments))))

    logger.debug("calling %s with %d argument(s)", function.name or "anonymous function", len(arguments))

    scope = function.env.enclosed()
    for parameter, argument in zip(function.parameters, arguments):
        scope.set(parameter.value, argument)

    try:
        result = evaluate(function.body, scope)
    except RecursionError:
        raise EvaluationError("maximum recursion depth exceeded")
    if isinstance(result, ReturnValue):
        return result.value
    return result


EVALUATORS = {
    Program: eval_program,
    BlockStatement: eval_block_statement,
    ExpressionStatement: eval_expression_statement,
    AssignStatement: eval_assign_statement,
    ReturnStatement: eval_return_statement,
    Identifier: eval_identifier,
    IntegerLiteral: eval_integer_literal,
    FloatLiteral: eval_float_literal,
    BooleanLiteral: eval_boolean_literal,
    StringLiteral: eval_string_literal,
    PrefixExpression: eval_prefix_expression,
    InfixExpression: eval_infix_expression,
    IfExpression: eval_if_expression,
    WhileExpression: eval_while_expression,
    FunctionLiteral: eval_function_literal,
    CallExpression: eval_call_expression,
}
