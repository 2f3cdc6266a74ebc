"""Recursive-descent parser for Lox.

Grammar, from lowest to highest precedence::

    program     -> declaration* EOF
    declaration -> funDecl | varDecl | statement
    funDecl     -> "fun" IDENTIFIER "(" parameters? ")" block
    varDecl     -> "var" IDENTIFIER "=" expression ";"
    statement   -> exprStmt | printStmt | returnStmt | ifStmt | whileStmt | block
    ifStmt      -> "if" expression statement ( "else" statement )?
    whileStmt   -> "while" expression statement
    returnStmt  -> "return" expression ";"
    block       -> "{" declaration* "}"
    expression  -> assignment
    assignment  -> IDENTIFIER "=" assignment | logic_or
    logic_or    -> logic_and ( "or" logic_and )*
    logic_and   -> equality ( "and" equality )*
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | call
    call        -> primary ( "(" arguments? ")" )*
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | "(" expression ")" | IDENTIFIER

A syntax error inside a declaration is recorded, the parser skips ahead to
the next statement boundary and carries on, so a single parse can report
several independent errors.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .ast import (
    Assign, Binary, Block, Call, Expr, Expression, Function, Grouping, If,
    Literal, Logical, Print, Return, Stmt, Unary, Var, Variable, While,
)
from .errors import LoxError, ParseError
from .scanner import scan
from .tokens import Token, TokenType
from .types import NIL, Diagnostic

T = TokenType

# Tokens that begin a new declaration or statement
STATEMENT_STARTS = {T.CLASS, T.FOR, T.FUN, T.IF, T.PRINT, T.RETURN, T.VAR, T.WHILE}


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.current = 0
        self.errors: List[Diagnostic] = []
        self.first_error: Optional[ParseError] = None

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def parse_expression(self) -> Expr:
        """Parse a single expression; a syntax error raises ``ParseError``."""
        return self.expression()

    # Declarations

    def declaration(self) -> Optional[Stmt]:
        try:
            if self.match(T.FUN):
                return self.function_declaration()
            if self.match(T.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def function_declaration(self) -> Function:
        name = self.consume(T.IDENTIFIER, "Expect function name.")
        self.consume(T.LEFT_PAREN, "Expect '(' after function name.")
        params: List[Token] = []
        if not self.check(T.RIGHT_PAREN):
            params.append(self.consume(T.IDENTIFIER, "Expect parameter name."))
            while self.match(T.COMMA):
                params.append(self.consume(T.IDENTIFIER, "Expect parameter name."))
        self.consume(T.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(T.LEFT_BRACE, "Expect '{' before function body.")
        body = self.block()
        return Function(name, tuple(params), body)

    def var_declaration(self) -> Var:
        name = self.consume(T.IDENTIFIER, "Expect variable name.")
        # The initializer is mandatory in this dialect
        self.consume(T.EQUAL, "Expect '=' after variable name.")
        initializer = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name.lexeme, initializer)

    # Statements

    def statement(self) -> Stmt:
        if self.match(T.PRINT):
            return self.print_statement()
        if self.match(T.RETURN):
            return self.return_statement()
        if self.match(T.IF):
            return self.if_statement()
        if self.match(T.WHILE):
            return self.while_statement()
        if self.match(T.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def print_statement(self) -> Print:
        value = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def return_statement(self) -> Return:
        keyword = self.previous()
        value = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after return value.")
        return Return(keyword, value)

    def if_statement(self) -> If:
        condition = self.expression()
        then_branch = self.statement()
        else_branch = None
        if self.match(T.ELSE):
            else_branch = self.statement()
        return If(condition, then_branch, else_branch)

    def while_statement(self) -> While:
        condition = self.expression()
        body = self.statement()
        return While(condition, body)

    def block(self) -> Tuple[Stmt, ...]:
        statements: List[Stmt] = []
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(T.RIGHT_BRACE, "Expect '}' after block.")
        return tuple(statements)

    def expression_statement(self) -> Expression:
        expr = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()
        if self.match(T.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # Reported without unwinding; parsing carries on after the value
            self.error(equals, "Invalid assignment target.")
        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(T.OR):
            operator = self.previous()
            right = self.logic_and()
            expr = Logical(expr, operator, right)
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(T.AND):
            operator = self.previous()
            right = self.equality()
            expr = Logical(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        expr = self.comparison()
        while self.match(T.BANG_EQUAL, T.EQUAL_EQUAL):
            operator = self.previous()
            right = self.comparison()
            expr = Binary(expr, operator, right)
        return expr

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match(T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL):
            operator = self.previous()
            right = self.term()
            expr = Binary(expr, operator, right)
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match(T.MINUS, T.PLUS):
            operator = self.previous()
            right = self.factor()
            expr = Binary(expr, operator, right)
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match(T.SLASH, T.STAR):
            operator = self.previous()
            right = self.unary()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self) -> Expr:
        if self.match(T.BANG, T.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.call()

    def call(self) -> Expr:
        expr = self.primary()
        while self.match(T.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee: Expr) -> Call:
        arguments: List[Expr] = []
        if not self.check(T.RIGHT_PAREN):
            arguments.append(self.expression())
            while self.match(T.COMMA):
                arguments.append(self.expression())
        paren = self.consume(T.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, tuple(arguments))

    def primary(self) -> Expr:
        if self.match(T.FALSE):
            return Literal(False)
        if self.match(T.TRUE):
            return Literal(True)
        if self.match(T.NIL):
            return Literal(NIL)
        if self.match(T.NUMBER, T.STRING):
            return Literal(self.previous().literal)
        if self.match(T.IDENTIFIER):
            return Variable(self.previous())
        if self.match(T.LEFT_PAREN):
            expr = self.expression()
            self.consume(T.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), "Expect expression.")

    # Error recovery

    def synchronize(self) -> None:
        """Discard tokens until the start of the next statement."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type is T.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()

    def error(self, token: Token, message: str) -> ParseError:
        err = ParseError(token, message)
        self.errors.append(err.diagnostic)
        if self.first_error is None:
            self.first_error = err
        return err

    # Token helpers

    def match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message)

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type is token_type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type is T.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]


def parse_program(source: str) -> Tuple[List[Stmt], List[Diagnostic]]:
    """Scan and parse Lox source, returning statements and all diagnostics."""
    tokens, diagnostics = scan(source)
    parser = Parser(tokens)
    statements = parser.parse()
    return statements, diagnostics + parser.errors


def parse_expression(source: str) -> Expr:
    """Parse source consisting of a single expression.

    Raises ``ParseError`` on any syntax error, including an invalid
    assignment target or tokens left over after the expression, and
    ``LoxError`` for a scan error.
    """
    tokens, diagnostics = scan(source)
    if diagnostics:
        raise LoxError(diagnostics[0])
    parser = Parser(tokens)
    expr = parser.parse_expression()
    if parser.first_error is not None:
        raise parser.first_error
    if not parser.is_at_end():
        raise parser.error(parser.peek(), "Expect end of expression.")
    return expr
