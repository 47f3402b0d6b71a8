import unittest

from emolang.core.node import BooleanLiteral, Identifier, IntegerLiteral, keycaps, positional
from emolang.core.parser import parse_program
from emolang.core.token import Token, TokenKind
from emolang.core.tokenizer import tokenize


class NodeTestCase(unittest.TestCase):

    def test_keycaps(self):
        should_pass = {"0": "0️⃣", "42": "4️⃣2️⃣", "1.5": "1️⃣⚪5️⃣", "-3": "-3️⃣"}
        for case, result in should_pass.items():
            self.assertEqual(keycaps(case), result)

    def test_positional(self):
        should_pass = {2.0: "2.0", 10.3: "10.3", 1e20: "100000000000000000000.0", 1e-7: "0.0000001"}
        for case, result in should_pass.items():
            self.assertEqual(positional(case), result)

    def test_equality_ignores_tokens(self):
        self.assertEqual(IntegerLiteral(Token(TokenKind.INTEGER, "7️⃣"), 7),
                         IntegerLiteral(Token(TokenKind.INTEGER, "7⃣"), 7))
        self.assertEqual(Identifier(Token(TokenKind.IDENTIFIER, "x"), "x"), Identifier(None, "x"))

        token = Token(TokenKind.TRUE, "✔️")
        self.assertNotEqual(BooleanLiteral(token, True), BooleanLiteral(token, False))

    def test_display(self):
        program, __ = parse_program(tokenize("1️⃣ ➕ 2️⃣"))
        self.assertEqual(program.display(),
                         "Program(expr='🌜1️⃣ ➕ 2️⃣🌛↙️', nodes=[\n"
                         "    ExpressionStatement(expr='🌜1️⃣ ➕ 2️⃣🌛↙️', nodes=[\n"
                         "        InfixExpression(expr='🌜1️⃣ ➕ 2️⃣🌛', nodes=[\n"
                         "            IntegerLiteral(expr='1️⃣'),\n"
                         "            IntegerLiteral(expr='2️⃣')\n"
                         "        ])\n"
                         "    ])\n"
                         "])")

    def test_token_literal(self):
        program, __ = parse_program(tokenize("🔙 5️⃣"))
        self.assertEqual(program.token_literal(), "🔙")
        self.assertEqual(program.statements[0].value.token_literal(), "5️⃣")

        program, __ = parse_program(tokenize(""))
        self.assertEqual(program.token_literal(), "")


if __name__ == '__main__':
    unittest.main()
