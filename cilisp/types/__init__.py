"""Data model for cilisp: numbers, AST nodes, symbol tables and the operator catalogue."""

from cilisp.types.number import NumType, TypedResult, ZERO, NAN_VALUE
from cilisp.types.builtin_op import BuiltinOp, resolve_func
from cilisp.types.ast import Node, NumberNode, FunctionCallNode, SymbolRefNode, ScopeNode
from cilisp.types.symbol_table import Binding, SymbolTable

__all__ = [
    "NumType",
    "TypedResult",
    "ZERO",
    "NAN_VALUE",
    "BuiltinOp",
    "resolve_func",
    "Node",
    "NumberNode",
    "FunctionCallNode",
    "SymbolRefNode",
    "ScopeNode",
    "Binding",
    "SymbolTable",
]
