"""Interactive mode for the Lox interpreter. Uses cmd as backend."""

import cmd

from .scanner import scan
from .tokens import TokenType


def open_groups(source: str) -> int:
    """Counts braces and parentheses still open at the end of ``source``."""
    tokens, _ = scan(source)
    depth = 0
    for token in tokens:
        if token.type in (TokenType.LEFT_BRACE, TokenType.LEFT_PAREN):
            depth += 1
        elif token.type in (TokenType.RIGHT_BRACE, TokenType.RIGHT_PAREN):
            depth -= 1
    return depth


class Shell(cmd.Cmd):
    """Lox interpreter shell.

    Every entry runs in the interpreter's global environment, so variables
    and functions declared at one prompt stay visible at the next.
    """
    intro = "Lox interpreter :: Python backend\nType 'help' for more information, 'exit' to leave."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "

    def __init__(self, interpreter, reporter, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.interpreter = interpreter
        self.reporter = reporter

        self._tmp_line = ""

    def default(self, line):
        """Executes Lox source, waiting for more input while a group is open."""
        source = self._tmp_line + line + "\n"
        if open_groups(source) > 0:
            self._tmp_line = source
            self.prompt = self.secondary_prompt
            return

        self._tmp_line = ""
        self.prompt = self._tmp_prompt

        self.reporter.set_source(source)
        self.reporter.report(self.interpreter.run(source))
        self.reporter.reset()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Lox interpreter!\n\n"
              "Type statements such as 'var a = 1;' or 'print a + 2;'. Declarations are\n"
              "kept between prompts. A line that leaves a '{' or '(' open continues on\n"
              "the next prompt. Type 'exit' or press Ctrl-D to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            self._tmp_line += "\n"
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit("")

    def do_exit(self, arg):
        """Exits interpreter."""
        # 'exit' followed by more text is an ordinary Lox statement
        if arg:
            return self.default("exit " + arg)
        return True
