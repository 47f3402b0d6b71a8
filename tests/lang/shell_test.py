import contextlib
import io
import os
import unittest
from unittest import mock

from emolang.lang.error import ErrorHandler
from emolang.lang.session import Session
from emolang.lang.shell import Shell, username


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def run_lines(self, *lines):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            for line in lines:
                self.assertFalse(self.shell.onecmd(line))
        return output.getvalue()

    def test_values(self):
        self.assertEqual(self.run_lines("x ⬅️ 4️⃣ ➕ 2️⃣", "x", "🗨️hi💬", "x ▶️ 1️⃣0️⃣"), "6\n6\nhi\nfalse\n")

    def test_continuation(self):
        self.run_lines("📛 double🌜n🌛 🫸")
        self.assertEqual(self.shell.prompt, Shell.secondary_prompt)

        self.run_lines("", "🔙 n ✖️ 2️⃣")
        self.assertEqual(self.shell.prompt, Shell.secondary_prompt)

        self.assertIn("📛 double", self.run_lines("🫷"))
        self.assertEqual(self.shell.prompt, Shell._tmp_prompt)

        self.assertEqual(self.run_lines("double🌜2️⃣1️⃣🌛"), "42\n")

    def test_errors(self):
        output = self.run_lines("1️⃣ ➗ 0️⃣")
        self.assertIn("division by zero", output)

        output = self.run_lines("⬅️↙️ ➕↙️")
        self.assertEqual(output.count("error: "), 2)

        # the session survives errors
        self.assertEqual(self.run_lines("1️⃣ ➕ 1️⃣"), "2\n")

    def test_exit(self):
        self.assertEqual(self.shell.onecmd(""), "")
        self.assertTrue(self.shell.onecmd("exit"))
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertTrue(self.shell.onecmd("EOF"))

    def test_commands_are_bare_words(self):
        self.assertEqual(self.run_lines("help ⬅️ 1️⃣", "help ➕ 1️⃣"), "1\n2\n")
        self.assertIn("Welcome to emolang!", self.run_lines("help"))
        self.assertIn("Welcome to emolang!", self.run_lines("  ?  "))

        # a brace inside a string does not start a continuation
        self.assertEqual(self.run_lines("🗨️🫸💬"), "🫸\n")
        self.assertEqual(self.shell.prompt, Shell._tmp_prompt)

    def test_greeting(self):
        with mock.patch.dict(os.environ, {"USER": "ada"}):
            self.assertEqual(username(), "ada")
            self.assertIn("Hello ada!", Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True)).intro)

        with mock.patch.dict(os.environ, {"USER": "", "USERNAME": "", "LOGNAME": "grace"}):
            self.assertEqual(username(), "grace")


if __name__ == '__main__':
    unittest.main()
