"""AST node variants for cilisp.

The tree is a strict ownership tree: a FunctionCallNode owns its operands, a
ScopeNode owns its symbol table (and through it every bound expression) and its
body. On top of that every node carries a non-owning ``enclosing`` reference to
its innermost enclosing ScopeNode, held as a ``weakref.ref`` so it can never
keep a scope alive or be mistaken for an ownership edge. The reference is
assigned once, by ``make_scope``, and only ever followed outward during symbol
resolution.
"""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, List, Optional

from cilisp.errors import CilispInvariantError
from cilisp.types.builtin_op import BuiltinOp
from cilisp.types.number import NumType, TypedResult

if TYPE_CHECKING:
    from cilisp.types.symbol_table import SymbolTable


class Node:
    """Base class of the four AST variants."""

    __slots__ = ("_enclosing", "released", "__weakref__")

    def __init__(self):
        self._enclosing: Optional[weakref.ref] = None
        self.released = False

    @property
    def enclosing(self) -> Optional[ScopeNode]:
        if self._enclosing is None:
            return None
        return self._enclosing()

    def set_enclosing(self, scope: ScopeNode) -> None:
        if self._enclosing is not None:
            raise CilispInvariantError(f"enclosing scope of {self!r} is already set")
        self._enclosing = weakref.ref(scope)

    def clear_enclosing(self) -> None:
        self._enclosing = None

    def children(self) -> List[Node]:
        """Owned child nodes, in evaluation order."""
        return []

    def scopes(self):
        """Yield the chain of enclosing scopes, innermost first."""
        scope = self.enclosing
        while scope is not None:
            yield scope
            scope = scope.enclosing


class NumberNode(Node):
    __slots__ = ("type", "value")

    def __init__(self, value: float, type: NumType = NumType.INT):
        super().__init__()
        self.type = NumType(type)
        self.value = float(value)

    def as_result(self) -> TypedResult:
        return TypedResult(self.type, self.value)

    def __repr__(self):
        return f"NumberNode({self.type.name}, {self.value!r})"


class FunctionCallNode(Node):
    __slots__ = ("operator", "name", "operands")

    def __init__(self, operator: BuiltinOp, operands: List[Node], name: Optional[str] = None):
        super().__init__()
        self.operator = operator
        # Name as written, kept for operators outside the catalogue
        self.name = name if name is not None else operator.op_name
        self.operands: List[Node] = list(operands)

    def children(self) -> List[Node]:
        return list(self.operands)

    def __repr__(self):
        return f"FunctionCallNode({self.name}, {self.operands!r})"


class SymbolRefNode(Node):
    __slots__ = ("id",)

    def __init__(self, id: str):
        super().__init__()
        self.id = id

    def __repr__(self):
        return f"SymbolRefNode({self.id!r})"


class ScopeNode(Node):
    __slots__ = ("bindings", "body")

    def __init__(self, bindings: SymbolTable, body: Node):
        super().__init__()
        self.bindings = bindings
        self.body = body

    def children(self) -> List[Node]:
        # Bound expressions first, then the body; a released scope owns nothing
        nodes = [b.value for b in self.bindings]
        if self.body is not None:
            nodes.append(self.body)
        return nodes

    def __repr__(self):
        return f"ScopeNode({self.bindings!s}, {self.body!r})"
