"""Console reporting for Lox diagnostics.

The interpreter core only returns ``Diagnostic`` values; this module is the
driver-side piece that prints them. Each diagnostic is shown as a bold
``file:line:`` location, a colored ``error:`` tag and the message, followed
by the offending source line when it is known.
"""

import sys

from termcolor import colored

from .types import Diagnostic


class Reporter:
    """Prints diagnostics for one script or interactive session."""
    ERROR = "red"
    FATAL = "magenta"

    def __init__(self, path="<stdin>", source="", stream=None):
        self.path = path
        self.lines = source.splitlines()
        self.stream = stream if stream is not None else sys.stderr
        self.had_error = False
        self.had_runtime_error = False

    def set_source(self, source):
        """Registers the text that later diagnostics refer to."""
        self.lines = source.splitlines()

    def format(self, diagnostic: Diagnostic) -> str:
        color = Reporter.FATAL if diagnostic.kind == 'fatal' else Reporter.ERROR

        msg = colored(f"{self.path}:{diagnostic.line}: ", attrs=["bold"])
        msg += colored(f"{diagnostic.kind} error: ", color, attrs=["bold"])
        msg += diagnostic.message
        if diagnostic.where == 'end':
            msg += " (at end)"
        elif diagnostic.where:
            msg += " (at " + colored(diagnostic.where, attrs=["bold"]) + ")"

        if 0 < diagnostic.line <= len(self.lines):
            msg += "\n    " + self.lines[diagnostic.line - 1].strip()
        return msg

    def report(self, diagnostics):
        for diagnostic in diagnostics:
            if diagnostic.kind in ('runtime', 'fatal'):
                self.had_runtime_error = True
            else:
                self.had_error = True
            print(self.format(diagnostic), file=self.stream)

    def reset(self):
        self.had_error = False
        self.had_runtime_error = False

    def exit_code(self) -> int:
        if self.had_error:
            return 65
        if self.had_runtime_error:
            return 70
        return 0
