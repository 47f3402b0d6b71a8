"""Handles interactive/command-line mode for the emolang interpreter. Uses cmd as backend."""

import cmd
import os


def username():
    """Name of the current user, taken from the environment."""
    for variable in ("USER", "USERNAME", "LOGNAME"):
        if os.environ.get(variable):
            return os.environ[variable]
    return "there"


class Shell(cmd.Cmd):
    """emolang interpreter shell."""
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations
    COMMANDS = ("help", "?", "exit", "EOF")

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.intro = (f"Hello {username()}! This is the emolang programming language.\n"
                      f"Type 'help' for more information.")

        self._tmp_line = ""

    def parseline(self, line):
        """Only the bare words in COMMANDS are shell commands, anything else is emolang source. This keeps names
        like 'help' usable as identifiers.
        """
        line = line.strip()
        if line in self.COMMANDS:
            return super().parseline(line)
        return None, None, line

    def default(self, line):
        """Executes arbitrary emolang source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line)
                self.sess.run()

                while self.sess.results:
                    print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to emolang!\n\n"
              "emolang is a small dynamically typed language written entirely in emoji. Numbers are spelled with \n"
              "keycaps (4️⃣2️⃣, 3️⃣⚪1️⃣4️⃣), strings sit between 🗨️ and 💬, and blocks between 🫸 and 🫷.\n\n"
              "Try it out by typing 'x ⬅️ 4️⃣ ➕ 2️⃣'. This will bind 6 to 'x'. Next, try typing \n"
              "'📛 double🌜n🌛 🫸 🔙 n ✖️ 2️⃣ 🫷' and then 'double🌜x🌛', giving 12 as the result.")

    def emptyline(self):
        """Do not repeat previous command on empty line, but keep empty lines inside unfinished blocks."""
        if self._tmp_line:
            return self.default("")
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
