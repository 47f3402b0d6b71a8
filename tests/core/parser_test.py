import unittest

from emolang.core.node import (AssignStatement, BlockStatement, CallExpression, ExpressionStatement, FloatLiteral,
                               FunctionLiteral, IfExpression, IntegerLiteral, WhileExpression, keycaps)
from emolang.core.parser import Parser, Precedence, parse_program, precedence_of
from emolang.core.token import Token, TokenKind
from emolang.core.tokenizer import tokenize


def parse(source):
    return parse_program(tokenize(source))


class ParserTestCase(unittest.TestCase):

    def parse_expression(self, source):
        program, errors = parse(source)
        self.assertEqual(errors, [], source)
        self.assertEqual(len(program.statements), 1, source)
        self.assertIsInstance(program.statements[0], ExpressionStatement)
        return program.statements[0].expression

    def test_integer_literal(self):
        for value in [0, 7, 42, 1234567890, 2 ** 63 - 1]:
            expression = self.parse_expression(keycaps(str(value)))
            self.assertIsInstance(expression, IntegerLiteral)
            self.assertEqual(expression.value, value)

    def test_float_literal(self):
        should_pass = {"1️⃣⚪3️⃣": 1.3, "0️⃣🔴5️⃣": 0.5, "1️⃣2️⃣🟢": 12.0, "3️⃣⚪1️⃣4️⃣1️⃣5️⃣": 3.1415}
        for case, result in should_pass.items():
            expression = self.parse_expression(case)
            self.assertIsInstance(expression, FloatLiteral)
            self.assertEqual(expression.value, result)

    def test_precedence(self):
        should_pass = {
            "1️⃣ ➕ 2️⃣ ✖️ 3️⃣": "🌜1️⃣ ➕ 🌜2️⃣ ✖️ 3️⃣🌛🌛↙️",
            "1️⃣ ➖ 2️⃣ ➖ 3️⃣": "🌜🌜1️⃣ ➖ 2️⃣🌛 ➖ 3️⃣🌛↙️",
            "🌜1️⃣ ➕ 2️⃣🌛 ✖️ 3️⃣": "🌜🌜1️⃣ ➕ 2️⃣🌛 ✖️ 3️⃣🌛↙️",
            "➖8️⃣ ▶️🟰 ➖3️⃣⚪9️⃣ ✖️ 2️⃣": "🌜🌜➖8️⃣🌛 ▶️🟰 🌜🌜➖3️⃣⚪9️⃣🌛 ✖️ 2️⃣🌛🌛↙️",
            "⏸️✔️ 🟰 ❌": "🌜🌜⏸️✔️🌛 🟰 ❌🌛↙️",
            "a 🔀 b 🔁 c": "🌜a 🔀 🌜b 🔁 c🌛🌛↙️",
            "a ◀️ b 🟰 ✔️": "🌜🌜a ◀️ b🌛 🟰 ✔️🌛↙️",
            "f🌜1️⃣ 🦶 2️⃣ ➕ 3️⃣🌛": "f🌜1️⃣ 🦶 🌜2️⃣ ➕ 3️⃣🌛🌛↙️",
            "➖f🌜🌛": "🌜➖f🌜🌛🌛↙️",
        }
        for case, result in should_pass.items():
            program, errors = parse(case)
            self.assertEqual(errors, [], case)
            self.assertEqual(program.string(), result)

    def test_statements(self):
        program, errors = parse("🅰️ ⬅️ 5️⃣↙️ 🔙 🅰️ 🫸 🅰️ 🫷")
        self.assertEqual(errors, [])
        self.assertEqual([type(statement).__name__ for statement in program.statements],
                         ["AssignStatement", "ReturnStatement", "BlockStatement"])
        self.assertEqual(program.statements[0].name.value, "🅰️")

        # terminators are optional
        program, errors = parse("🅰️ ⬅️ 5️⃣ 🅱️ ⬅️ 6️⃣")
        self.assertEqual(errors, [])
        self.assertTrue(all(isinstance(statement, AssignStatement) for statement in program.statements))

    def test_compound_expressions(self):
        expression = self.parse_expression("❓ x ▶️ 0️⃣ 🫸 x 🫷 ❗ 🫸 0️⃣ 🫷")
        self.assertIsInstance(expression, IfExpression)
        self.assertIsInstance(expression.consequence, BlockStatement)
        self.assertIsNotNone(expression.alternative)

        self.assertIsNone(self.parse_expression("❓ ✔️ 🫸 1️⃣ 🫷").alternative)

        expression = self.parse_expression("⭕ i ◀️ 3️⃣ 🫸 i ⬅️ i ➕ 1️⃣ 🫷")
        self.assertIsInstance(expression, WhileExpression)
        self.assertIsInstance(expression.body.statements[0], AssignStatement)

        expression = self.parse_expression("📛 add🌜a 🦶 b🌛 🫸 🔙 a ➕ b 🫷")
        self.assertIsInstance(expression, FunctionLiteral)
        self.assertEqual(expression.name.value, "add")
        self.assertEqual([parameter.value for parameter in expression.parameters], ["a", "b"])

        expression = self.parse_expression("📛🌜🌛 🫸 1️⃣ 🫷")
        self.assertIsNone(expression.name)
        self.assertEqual(expression.parameters, [])

        expression = self.parse_expression("📛🌜x🌛 🫸 x 🫷🌜1️⃣🌛")
        self.assertIsInstance(expression, CallExpression)
        self.assertIsInstance(expression.function, FunctionLiteral)

    def test_round_trip(self):
        should_pass = [
            "🅰️ ⬅️ 5️⃣ ➕ 2️⃣ ✖️ 🌜3️⃣ ➖ 1️⃣🌛↙️",
            "🔙 ⏸️⏸️✔️",
            "❓ 🅰️ ▶️ 0️⃣ 🫸 🔙 🅰️ 🫷 ❗ 🫸 🔙 ➖🅰️ 🫷",
            "⭕ i ◀️🟰 1️⃣0️⃣ 🫸 i ⬅️ i ➕ 1️⃣↙️ 🫷",
            "📛 🈯🌜🅰️🌛 🫸 ❓ 🅰️ ▶️ 0️⃣ 🫸 🔙 🅰️ 🫷 🫷 🈯🌜4️⃣🌛",
            "f ⬅️ 📛🌜a 🦶 b🌛 🫸 a 〰️ b 🫷↙️ f🌜7️⃣ 🦶 2️⃣🌛",
            "🗨️some text💬 🟰 🗨️other text💬 🔀 ❌",
            "1️⃣⚪0️⃣ ➗ 3️⃣ ❗🟰 0️⃣⚪0️⃣0️⃣0️⃣0️⃣0️⃣0️⃣1️⃣",
            "🫸 🫸 🫷 🫷",
        ]
        for case in should_pass:
            program, errors = parse(case)
            self.assertEqual(errors, [], case)

            printed = program.string()
            reparsed, errors = parse(printed)
            self.assertEqual(errors, [], printed)
            self.assertEqual(reparsed, program, printed)
            self.assertEqual(reparsed.string(), printed)

    def test_errors(self):
        should_fail = {
            "⬅️ 5️⃣": "no expression associated with token '⬅️'",
            "🌜1️⃣ ➕ 2️⃣": "expected '🌛', got 'end of input'",
            "❓ ✔️ 1️⃣": "expected '🫸', got '1️⃣'",
            "🫸 1️⃣": "expected '🫷', got 'end of input'",
            "📛🌜a 🦶🌛 🫸 a 🫷": "expected 'IDENTIFIER', got '🌛'",
            "⁉️": "no expression associated with token '⁉️'",
            "9️⃣" * 20: "could not parse",
            keycaps(str(2 ** 63)): "could not parse '",
            "9️⃣" * 400 + "⚪0️⃣": "as float",
        }
        for case, message in should_fail.items():
            __, errors = parse(case)
            self.assertEqual(len(errors), 1, case)
            self.assertIn(message, errors[0])

    def test_synchronization(self):
        # the bad statement is skipped up to its terminator
        program, errors = parse("1️⃣ ➕ ↙️ 2️⃣ ➕ 3️⃣↙️")
        self.assertEqual(len(errors), 1)
        self.assertEqual(program.string(), "🌜2️⃣ ➕ 3️⃣🌛↙️")

        # terminators inside a block do not end the statement that opened it
        program, errors = parse("❓ ✔️ 🫸 ➕ ↙️ 1️⃣↙️ 🫷 5️⃣↙️")
        self.assertEqual(len(errors), 1)
        self.assertEqual(program.string(), "5️⃣↙️")

        # one error per failed statement
        program, errors = parse("➕↙️ ✖️↙️ 7️⃣↙️")
        self.assertEqual(len(errors), 2)
        self.assertEqual(len(program.statements), 1)

        # without a terminator, the rest of the input belongs to the failed statement
        program, errors = parse("⁉️ ⁉️ ⁉️")
        self.assertEqual(len(errors), 1)
        self.assertEqual(program.statements, [])

    def test_precedence_table(self):
        self.assertLess(precedence_of(TokenKind.OR), precedence_of(TokenKind.AND))
        self.assertLess(precedence_of(TokenKind.AND), precedence_of(TokenKind.EQUAL))
        self.assertLess(precedence_of(TokenKind.PLUS), precedence_of(TokenKind.MULTIPLY))
        self.assertEqual(precedence_of(TokenKind.LPARENTHESIS), Precedence.CALL)
        self.assertEqual(precedence_of(TokenKind.SEMICOLON), Precedence.LOWEST)

    def test_parser_requires_end(self):
        self.assertRaises(ValueError, Parser, [Token(TokenKind.INTEGER, "1️⃣")])

        program = Parser([Token(TokenKind.START, ""), Token(TokenKind.END, "")]).parse_program()
        self.assertEqual(program.statements, [])


if __name__ == '__main__':
    unittest.main()
