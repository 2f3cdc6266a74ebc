"""Token definitions for the Lox scanner and parser.

A token is a tagged kind plus the source line it started on. Literal
carrying kinds (identifiers, numbers and strings) keep their payload in
``literal``; every other kind is fully described by its ``TokenType``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class TokenType(Enum):
    # Single-character tokens.
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_BRACE = '{'
    RIGHT_BRACE = '}'
    COMMA = ','
    DOT = '.'
    MINUS = '-'
    PLUS = '+'
    SEMICOLON = ';'
    SLASH = '/'
    STAR = '*'

    # One or two character tokens.
    BANG = '!'
    BANG_EQUAL = '!='
    EQUAL = '='
    EQUAL_EQUAL = '=='
    GREATER = '>'
    GREATER_EQUAL = '>='
    LESS = '<'
    LESS_EQUAL = '<='

    # Literals.
    IDENTIFIER = 'identifier'
    NUMBER = 'number'
    STRING = 'string'

    # Keywords.
    AND = 'and'
    CLASS = 'class'
    ELSE = 'else'
    FALSE = 'false'
    FOR = 'for'
    FUN = 'fun'
    IF = 'if'
    NIL = 'nil'
    OR = 'or'
    PRINT = 'print'
    RETURN = 'return'
    SUPER = 'super'
    THIS = 'this'
    TRUE = 'true'
    VAR = 'var'
    WHILE = 'while'

    EOF = 'eof'


KEYWORDS: Dict[str, TokenType] = {
    t.value: t for t in (
        TokenType.AND, TokenType.CLASS, TokenType.ELSE, TokenType.FALSE,
        TokenType.FOR, TokenType.FUN, TokenType.IF, TokenType.NIL,
        TokenType.OR, TokenType.PRINT, TokenType.RETURN, TokenType.SUPER,
        TokenType.THIS, TokenType.TRUE, TokenType.VAR, TokenType.WHILE,
    )
}

LITERAL_TYPES = (TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.STRING)


@dataclass(frozen=True)
class Token:
    """A single lexical unit.

    Two tokens compare equal when their kind and payload match. The line
    number is only used for diagnostics and does not take part in
    equality, so ASTs built from different sources can be compared.
    """
    type: TokenType
    literal: Any = None
    line: int = field(default=1, compare=False)

    @property
    def lexeme(self) -> str:
        if self.type is TokenType.EOF:
            return ''
        if self.type is TokenType.NUMBER:
            text = repr(self.literal)
            return text[:-2] if text.endswith('.0') else text
        if self.type in LITERAL_TYPES:
            return self.literal
        return self.type.value

    def __repr__(self) -> str:
        if self.type in LITERAL_TYPES:
            return f"Token({self.type.name}, {self.literal!r}, line={self.line})"
        return f"Token({self.type.name}, line={self.line})"


def identifier(name: str, line: int = 1) -> Token:
    return Token(TokenType.IDENTIFIER, name, line)


def symbol(token_type: TokenType, line: int = 1) -> Token:
    return Token(token_type, None, line)
