# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .environment import Environment
from .errors import LoxError, LoxRuntimeError, ParseError, ScanError, UndefinedVariable
from .interpreter import Interpreter, run
from .parser import parse_expression, parse_program
from .scanner import scan
from .types import NIL, Diagnostic

__all__ = [
    'Diagnostic',
    'Environment',
    'Interpreter',
    'LoxError',
    'LoxRuntimeError',
    'NIL',
    'ParseError',
    'ScanError',
    'UndefinedVariable',
    'parse_expression',
    'parse_program',
    'run',
    'scan',
]
