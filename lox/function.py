from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .ast import Function
    from .environment import Environment
    from .tokens import Token


class LoxFunction:
    """A user-defined function together with the environment it closes over.

    The closure is the environment that was active when the ``fun``
    declaration executed, not the one active at call time. Functions compare
    by identity.
    """
    def __init__(self, declaration: 'Function', closure: 'Environment'):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self) -> 'Token':
        return self.declaration.name

    @property
    def params(self) -> Tuple['Token', ...]:
        return self.declaration.params

    @property
    def arity(self) -> int:
        return len(self.declaration.params)

    def __repr__(self) -> str:
        return f"<fn {self.name.lexeme}>"
