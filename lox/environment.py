from __future__ import annotations

from typing import Any, Dict, Optional, Union

from .errors import UndefinedVariable
from .tokens import Token

Name = Union[Token, str]


def _split(name: Name):
    if isinstance(name, Token):
        return name.lexeme, name
    return name, None


class Environment:
    """A scope mapping identifiers to values, linked to its enclosing scope.

    Environments are shared: the call frame or block that created one and
    every closure that captured it hold the same object, so a scope lives as
    long as its longest-lived holder.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any) -> None:
        # Redeclaration replaces the existing binding
        self.values[name] = value

    def get(self, name: Name) -> Any:
        key, token = _split(name)
        if key in self.values:
            return self.values[key]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise UndefinedVariable(key, token)

    def assign(self, name: Name, value: Any) -> None:
        # Never creates a binding: the name must already exist in the chain
        key, token = _split(name)
        if key in self.values:
            self.values[key] = value
        elif self.enclosing is not None:
            self.enclosing.assign(name, value)
        else:
            raise UndefinedVariable(key, token)

    def __contains__(self, name: str) -> bool:
        if name in self.values:
            return True
        return self.enclosing is not None and name in self.enclosing

    def __repr__(self) -> str:
        depth = 0
        env = self.enclosing
        while env is not None:
            depth += 1
            env = env.enclosing
        return f"<Environment depth={depth} names={sorted(self.values)}>"
