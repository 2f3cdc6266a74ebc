"""Grammar-driven front end for Lox.

This module describes the same language as ``lox.parser`` in EBNF and
builds a LALR parser for it with Lark. The parse tree is transformed into
the very AST classes the recursive-descent parser produces, so either
front end can feed the interpreter.

Unlike the hand-written parser there is no error recovery: the first
syntax error stops the parse and is reported as a single diagnostic.
"""

from __future__ import annotations

from typing import List, Tuple

from lark import Lark, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .ast import (
    Assign, Binary, Block, Call, Expression, Function, Grouping, If,
    Literal, Logical, Print, Return, Stmt, Unary, Var, Variable, While,
)
from .tokens import Token, TokenType
from .types import NIL, Diagnostic


LOX_GRAMMAR = r"""
    start: declaration*

    ?declaration: fun_decl
                | var_decl
                | statement

    fun_decl: "fun" IDENTIFIER "(" [parameters] ")" block
    parameters: IDENTIFIER ("," IDENTIFIER)*
    var_decl: "var" IDENTIFIER "=" expression ";"

    ?statement: expr_stmt
              | print_stmt
              | return_stmt
              | if_stmt
              | while_stmt
              | block_stmt

    expr_stmt: expression ";"
    print_stmt: "print" expression ";"
    return_stmt: RETURN expression ";"
    if_stmt: "if" expression statement ["else" statement]
    while_stmt: "while" expression statement
    block_stmt: block
    block: "{" declaration* "}"

    // Expressions with precedence
    ?expression: assignment
    ?assignment: IDENTIFIER "=" assignment -> assign
               | logic_or
    ?logic_or: logic_and (OR logic_and)*
    ?logic_and: equality (AND equality)*
    ?equality: comparison ((BANG_EQUAL | EQUAL_EQUAL) comparison)*
    ?comparison: term ((GREATER | GREATER_EQUAL | LESS | LESS_EQUAL) term)*
    ?term: factor ((MINUS | PLUS) factor)*
    ?factor: unary ((SLASH | STAR) unary)*
    ?unary: (BANG | MINUS) unary -> unary_op
          | call
    ?call: primary
         | call "(" [arguments] RIGHT_PAREN -> call_expr
    arguments: expression ("," expression)*
    ?primary: NUMBER -> number
            | STRING -> string
            | "true" -> true
            | "false" -> false
            | "nil" -> nil
            | "(" expression ")" -> grouping
            | IDENTIFIER -> variable

    // Tokens
    AND: "and"
    OR: "or"
    RETURN: "return"
    BANG_EQUAL: "!="
    EQUAL_EQUAL: "=="
    GREATER: ">"
    GREATER_EQUAL: ">="
    LESS: "<"
    LESS_EQUAL: "<="
    MINUS: "-"
    PLUS: "+"
    SLASH: "/"
    STAR: "*"
    BANG: "!"
    RIGHT_PAREN: ")"
    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/

    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT
    %ignore /[ \t\r\n]+/
"""


LOX_PARSER = Lark(
    LOX_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=True,
)

# Lark terminal name -> Lox token type, for operator tokens kept in the tree
TERMINAL_TYPES = {
    'AND': TokenType.AND,
    'OR': TokenType.OR,
    'RETURN': TokenType.RETURN,
    'BANG_EQUAL': TokenType.BANG_EQUAL,
    'EQUAL_EQUAL': TokenType.EQUAL_EQUAL,
    'GREATER': TokenType.GREATER,
    'GREATER_EQUAL': TokenType.GREATER_EQUAL,
    'LESS': TokenType.LESS,
    'LESS_EQUAL': TokenType.LESS_EQUAL,
    'MINUS': TokenType.MINUS,
    'PLUS': TokenType.PLUS,
    'SLASH': TokenType.SLASH,
    'STAR': TokenType.STAR,
    'BANG': TokenType.BANG,
    'RIGHT_PAREN': TokenType.RIGHT_PAREN,
}


def to_token(lark_token) -> Token:
    """Convert a Lark token into a Lox token."""
    if lark_token.type == 'IDENTIFIER':
        return Token(TokenType.IDENTIFIER, str(lark_token), lark_token.line)
    return Token(TERMINAL_TYPES[lark_token.type], None, lark_token.line)


def fold_binary(items, node_class):
    # items: operand (operator operand)*
    left = items[0]
    for i in range(1, len(items), 2):
        left = node_class(left, to_token(items[i]), items[i + 1])
    return left


class ASTTransformer(Transformer):
    """Transforms the Lark parse tree into Lox AST nodes."""

    def start(self, items) -> List[Stmt]:
        return list(items)

    # Declarations

    def fun_decl(self, items):
        name, params, body = items
        return Function(to_token(name), tuple(params or ()), body)

    def parameters(self, items):
        return [to_token(item) for item in items]

    def var_decl(self, items):
        name, initializer = items
        return Var(str(name), initializer)

    # Statements

    def expr_stmt(self, items):
        return Expression(items[0])

    def print_stmt(self, items):
        return Print(items[0])

    def return_stmt(self, items):
        keyword, value = items
        return Return(to_token(keyword), value)

    def if_stmt(self, items):
        condition, then_branch, else_branch = items
        return If(condition, then_branch, else_branch)

    def while_stmt(self, items):
        condition, body = items
        return While(condition, body)

    def block_stmt(self, items):
        return Block(items[0])

    def block(self, items):
        return tuple(items)

    # Expressions

    def assign(self, items):
        name, value = items
        return Assign(to_token(name), value)

    def logic_or(self, items):
        return fold_binary(items, Logical)

    def logic_and(self, items):
        return fold_binary(items, Logical)

    def equality(self, items):
        return fold_binary(items, Binary)

    def comparison(self, items):
        return fold_binary(items, Binary)

    def term(self, items):
        return fold_binary(items, Binary)

    def factor(self, items):
        return fold_binary(items, Binary)

    def unary_op(self, items):
        op, operand = items
        return Unary(to_token(op), operand)

    def call_expr(self, items):
        callee, arguments, paren = items
        return Call(callee, to_token(paren), tuple(arguments or ()))

    def arguments(self, items):
        return list(items)

    def number(self, items):
        return Literal(float(items[0]))

    def string(self, items):
        # strip the quotes; Lox strings have no escape sequences
        return Literal(str(items[0])[1:-1])

    def true(self, items):
        return Literal(True)

    def false(self, items):
        return Literal(False)

    def nil(self, items):
        return Literal(NIL)

    def grouping(self, items):
        return Grouping(items[0])

    def variable(self, items):
        return Variable(to_token(items[0]))


def describe_error(err: UnexpectedInput) -> Diagnostic:
    line = max(getattr(err, 'line', 1) or 1, 1)
    if isinstance(err, UnexpectedCharacters):
        # STRING only fails to match when the closing quote is missing
        if err.char == '"':
            return Diagnostic('scan', line, "Unterminated string.")
        return Diagnostic('scan', line, f"Unexpected character: {err.char}")
    if isinstance(err, UnexpectedEOF):
        return Diagnostic('parse', line, "Unexpected end of input.", 'end')
    if isinstance(err, UnexpectedToken):
        if err.token.type == '$END':
            return Diagnostic('parse', line, "Unexpected end of input.", 'end')
        return Diagnostic('parse', err.token.line, "Unexpected token.", str(err.token))
    return Diagnostic('parse', line, str(err))


def parse_with_grammar(source: str) -> Tuple[List[Stmt], List[Diagnostic]]:
    """Parse Lox source with the Lark grammar.

    Returns the statements and a list holding at most one diagnostic.
    """
    try:
        tree = LOX_PARSER.parse(source)
    except UnexpectedInput as err:
        return [], [describe_error(err)]
    return ASTTransformer().transform(tree), []
