"""JSON serialization/deserialization for the Lox AST.

This module converts between Lox AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Nodes are written as
``{"type": <class name>, <field>: ...}``, tokens and nil get a ``__type__``
tag, and tuples become lists. ``ast_from_obj(ast_to_obj(x)) == x`` for
every tree the parsers produce.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Dict

from . import ast
from .tokens import Token, TokenType
from .types import NIL

NODE_TYPES: Dict[str, type] = {
    cls.__name__: cls for cls in (
        ast.Literal, ast.Grouping, ast.Unary, ast.Binary, ast.Logical,
        ast.Variable, ast.Assign, ast.Call,
        ast.Expression, ast.Print, ast.Var, ast.Block, ast.If, ast.While,
        ast.Function, ast.Return,
    )
}

# Node fields holding a sequence; everything else decodes to a single value
SEQUENCE_FIELDS = {
    ('Call', 'arguments'), ('Block', 'statements'),
    ('Function', 'params'), ('Function', 'body'),
}


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "__type__": "Token",
        "type": token.type.name,
        "literal": token.literal,
        "line": token.line,
    }


def token_from_obj(o: Dict[str, Any]) -> Token:
    try:
        token_type = TokenType[o["type"]]
    except KeyError:
        raise ValueError(f"unknown token type {o.get('type')!r}") from None
    return Token(token_type, o.get("literal"), o.get("line", 1))


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if node is NIL:
        return {"__type__": "Nil"}
    if isinstance(node, (bool, float, str)):
        return node

    if isinstance(node, Token):
        return token_to_obj(node)

    if isinstance(node, (list, tuple)):
        return [ast_to_obj(n) for n in node]

    if is_dataclass(node) and type(node).__name__ in NODE_TYPES:
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj

    raise TypeError(f"cannot serialize {type(node).__name__}")


def ast_from_obj(o: Any) -> Any:
    if o is None:
        return None
    if isinstance(o, (bool, str)):
        return o
    if isinstance(o, (int, float)):
        # JSON may hand back integral numbers as int
        return float(o)
    if isinstance(o, list):
        return [ast_from_obj(x) for x in o]
    if isinstance(o, dict):
        tag = o.get("__type__")
        if tag == "Nil":
            return NIL
        if tag == "Token":
            return token_from_obj(o)
        name = o.get("type")
        if name not in NODE_TYPES:
            raise ValueError(f"unknown AST node type {name!r}")
        cls = NODE_TYPES[name]
        kwargs = {}
        for f in fields(cls):
            value = ast_from_obj(o.get(f.name))
            if (name, f.name) in SEQUENCE_FIELDS:
                value = tuple(value or ())
            kwargs[f.name] = value
        return cls(**kwargs)
    raise ValueError(f"cannot deserialize {o!r}")


def program_to_obj(statements) -> Dict[str, Any]:
    return {"type": "Program", "body": [ast_to_obj(s) for s in statements]}


def program_from_obj(o: Dict[str, Any]):
    if o.get("type") != "Program":
        raise ValueError("expected a Program object")
    return [ast_from_obj(s) for s in o.get("body", [])]
