from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .tokens import Token, TokenType
from .types import Diagnostic


def token_location(token: Token) -> str:
    return 'end' if token.type is TokenType.EOF else token.lexeme


class LoxError(Exception):
    """Base exception carrying a Lox diagnostic."""
    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic


class ScanError(LoxError):
    def __init__(self, line: int, message: str):
        super().__init__(Diagnostic('scan', line, message))


class ParseError(LoxError):
    def __init__(self, token: Token, message: str):
        super().__init__(Diagnostic('parse', token.line, message, token_location(token)))
        self.token = token


class LoxRuntimeError(LoxError):
    """Raised when an operation violates a dynamic precondition."""
    def __init__(self, token: Optional[Token], message: str):
        if token is None:
            diagnostic = Diagnostic('runtime', 0, message)
        else:
            diagnostic = Diagnostic('runtime', token.line, message, token_location(token))
        super().__init__(diagnostic)
        self.token = token
        self.message = message


class UndefinedVariable(LoxRuntimeError):
    def __init__(self, name: str, token: Optional[Token] = None):
        super().__init__(token, f"Undefined variable '{name}'.")
        self.name = name


@dataclass
class ReturnSignal:
    """Result of executing a ``return`` statement.

    Not an exception: ``execute`` hands it back to its caller, and every
    enclosing block, ``if`` and ``while`` passes it outwards unchanged until
    the function call that owns it unwraps ``value``.
    """
    value: Any
    keyword: Optional[Token] = None
