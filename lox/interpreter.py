"""Tree-walking interpreter for Lox.

The interpreter evaluates the AST produced by ``lox.parser`` directly
against a chain of ``Environment`` objects. Statements are executed by
``execute``, which returns ``None`` when a statement completes normally and
a ``ReturnSignal`` when a ``return`` ran; expressions are evaluated by
``evaluate``. Runtime errors are raised as ``LoxRuntimeError`` and turned
into diagnostics at the ``run`` boundary.
"""

from __future__ import annotations

import math
from typing import Any, IO, List, Optional

from .ast import (
    Assign, Binary, Block, Call, Expr, Expression, Function, Grouping, If,
    Literal, Logical, Print, Return, Stmt, Unary, Var, Variable, While,
)
from .environment import Environment
from .errors import LoxRuntimeError, ReturnSignal
from .function import LoxFunction
from .parser import parse_program
from .tokens import Token, TokenType
from .types import NIL, Diagnostic, is_number, is_truthy, to_string, type_name, values_equal

T = TokenType


def divide(a: float, b: float) -> float:
    """IEEE-754 division: dividing by zero gives an infinity or nan."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


class Interpreter:
    """Core interpreter that executes Lox statements.

    ``global_env`` is created once per interpreter and reused by every
    ``run`` that is not given an explicit environment, which is how an
    interactive session keeps its declarations between prompts.
    """
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 out: Optional[IO[str]] = None):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self.out = out
        self.call_line = 0

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Public API

    def run(self, source: str, env: Optional[Environment] = None) -> List[Diagnostic]:
        """Scan, parse and execute ``source``; return every diagnostic.

        Nothing executes if scanning or parsing reported an error.
        """
        try:
            statements, diagnostics = parse_program(source)
        except RecursionError:
            return [Diagnostic('fatal', source.count('\n') + 1, 'Too much nesting.')]
        self.debug(f"parsed {len(statements)} statements, {len(diagnostics)} errors")
        if diagnostics:
            for diagnostic in diagnostics:
                self.debug(f"  {diagnostic}")
            return diagnostics
        return self.run_statements(statements, env)

    def run_statements(self, statements: List[Stmt], env: Optional[Environment] = None) -> List[Diagnostic]:
        """Execute already-parsed statements, stopping at the first runtime error."""
        if env is None:
            env = self.global_env
        try:
            result = self.execute_block(statements, env)
            if isinstance(result, ReturnSignal):
                raise LoxRuntimeError(result.keyword, "Can't return from top-level code.")
        except LoxRuntimeError as err:
            self.debug(f"runtime error: {err.diagnostic}")
            return [err.diagnostic]
        except RecursionError:
            self.debug(f"stack overflow near line {self.call_line}")
            return [Diagnostic('fatal', self.call_line, 'Stack overflow.')]
        return []

    # Statements

    def execute_block(self, statements, env: Environment) -> Optional[ReturnSignal]:
        for stmt in statements:
            result = self.execute(stmt, env)
            # propagate return signals
            if isinstance(result, ReturnSignal):
                return result
        return None

    def execute(self, node: Stmt, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(node, Expression):
            self.evaluate(node.expression, env)
            return None
        if isinstance(node, Print):
            value = self.evaluate(node.expression, env)
            print(to_string(value), file=self.out)
            return None
        if isinstance(node, Var):
            value = NIL
            if node.initializer is not None:
                value = self.evaluate(node.initializer, env)
            env.define(node.name, value)
            self.debug(f"define {node.name}: {type_name(value)} = {to_string(value)}", 2)
            return None
        if isinstance(node, Block):
            self.debug(f"enter block of {len(node.statements)} statements", 4)
            return self.execute_block(node.statements, Environment(env))
        if isinstance(node, If):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            self.debug(f"if condition {to_string(cond)} -> {truthy}", 3)
            if truthy:
                return self.execute(node.then_branch, env)
            if node.else_branch is not None:
                return self.execute(node.else_branch, env)
            return None
        if isinstance(node, While):
            # The body runs in the loop's own environment, no scope per iteration
            while is_truthy(self.evaluate(node.condition, env)):
                result = self.execute(node.body, env)
                if isinstance(result, ReturnSignal):
                    return result
            return None
        if isinstance(node, Function):
            env.define(node.name.lexeme, LoxFunction(node, env))
            self.debug(f"define function {node.name.lexeme}/{len(node.params)}", 2)
            return None
        if isinstance(node, Return):
            return ReturnSignal(self.evaluate(node.value, env), node.keyword)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    # Expressions

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            return value
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            # The deciding operand is returned as is, not coerced to bool
            if node.operator.type is T.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, Unary):
            right = self.evaluate(node.right, env)
            return self.apply_unary_op(node.operator, right)
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee, env)
            args = [self.evaluate(arg, env) for arg in node.arguments]
            return self.call_function(callee, node.paren, args)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Any, paren: Token, args: List[Any]) -> Any:
        if not isinstance(func, LoxFunction):
            raise LoxRuntimeError(paren, "Can only call functions.")
        if len(args) != func.arity:
            raise LoxRuntimeError(paren, f"Expected {func.arity} arguments but got {len(args)}.")
        self.call_line = paren.line
        self.debug(f"call {func.name.lexeme}({', '.join(to_string(a) for a in args)})", 3)
        # The call scope hangs off the closure, not off the caller's scope
        call_env = Environment(func.closure)
        for param, arg in zip(func.params, args):
            call_env.define(param.lexeme, arg)
        result = self.execute_block(func.declaration.body, call_env)
        if isinstance(result, ReturnSignal):
            return result.value
        return NIL

    def apply_unary_op(self, op: Token, operand: Any) -> Any:
        if op.type is T.MINUS:
            if not is_number(operand):
                raise LoxRuntimeError(op, "Operand must be a number.")
            return -operand
        if op.type is T.BANG:
            if not isinstance(operand, bool):
                raise LoxRuntimeError(op, "Operand must be a boolean.")
            return not operand
        raise LoxRuntimeError(op, f"Unknown unary operator {op.lexeme}.")

    def apply_binary_op(self, op: Token, a: Any, b: Any) -> Any:
        t = op.type
        if t is T.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            # Concatenation needs two strings; mixed operands are an error
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxRuntimeError(op, "Operands must be two numbers or two strings.")
        if t is T.EQUAL_EQUAL:
            return values_equal(a, b)
        if t is T.BANG_EQUAL:
            return not values_equal(a, b)
        if t in (T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL):
            return self.compare(op, a, b)
        if not (is_number(a) and is_number(b)):
            raise LoxRuntimeError(op, "Operands must be numbers.")
        if t is T.MINUS:
            return a - b
        if t is T.STAR:
            return a * b
        if t is T.SLASH:
            return divide(a, b)
        raise LoxRuntimeError(op, f"Unknown binary operator {op.lexeme}.")

    def compare(self, op: Token, a: Any, b: Any) -> bool:
        # Ordering exists only between two numbers or two strings
        if not ((is_number(a) and is_number(b)) or (isinstance(a, str) and isinstance(b, str))):
            raise LoxRuntimeError(op, "Operands must be two numbers or two strings.")
        if op.type is T.GREATER:
            return a > b
        if op.type is T.GREATER_EQUAL:
            return a >= b
        if op.type is T.LESS:
            return a < b
        return a <= b


def run(source: str, env: Optional[Environment] = None, out: Optional[IO[str]] = None) -> List[Diagnostic]:
    """Convenience function to run Lox source with a default interpreter."""
    interpreter = Interpreter(out=out)
    return interpreter.run(source, env)
