"""AST construction API.

These are the only functions a front end needs to build an expression tree.
Trees are assembled bottom-up: leaves first, then calls wrapping their operand
lists, then ``make_scope`` wrapping a finished binding table and body and
fixing the enclosing-scope references of everything below it.
"""

from __future__ import annotations

from typing import Optional, Union

from cilisp import Expression, OperandList
from cilisp.diagnostics import Diagnostics
from cilisp.errors import CilispInvariantError
from cilisp.lifecycle import release
from cilisp.types.ast import Node, NumberNode, FunctionCallNode, SymbolRefNode, ScopeNode
from cilisp.types.builtin_op import BuiltinOp, resolve_func
from cilisp.types.number import NumType
from cilisp.types.symbol_table import Binding, SymbolTable


def _require_node(node, what: str) -> Node:
    if not isinstance(node, Node):
        raise CilispInvariantError(f"{what} must be an AST node, got {node!r}")
    return node


def make_number(value: float, type: NumType = NumType.INT) -> NumberNode:
    return NumberNode(value, type)


def make_function_call(operator: Union[BuiltinOp, str], operands: Optional[OperandList] = None) -> FunctionCallNode:
    """Wrap an operand list in a call node.

    `operator` may be a catalogue entry or the operator name as written; names
    outside the catalogue resolve to BuiltinOp.CUSTOM and keep their spelling.
    """
    if isinstance(operator, BuiltinOp):
        op, name = operator, None
    else:
        op, name = resolve_func(operator), operator
    operands = [] if operands is None else operands
    for operand in operands:
        _require_node(operand, "operand")
    return FunctionCallNode(op, operands, name)


def make_symbol_ref(id: str) -> SymbolRefNode:
    return SymbolRefNode(id)


def append_operand(new_expr: Expression, existing_list: Optional[OperandList] = None) -> OperandList:
    """Prepend `new_expr`, returning the new list head.

    Front ends that reduce right to left build operand lists with this.
    """
    _require_node(new_expr, "operand")
    return [new_expr] + list(existing_list or [])


def make_binding(id: str, value_expr: Expression, forced_cast: Optional[NumType] = None) -> Binding:
    return Binding(id, _require_node(value_expr, "bound value"), forced_cast)


def merge_binding_into_table(
    new_binding: Optional[Binding],
    table: Optional[SymbolTable],
    diagnostics: Optional[Diagnostics] = None,
) -> SymbolTable:
    """Add `new_binding` to `table`.

    If the id is already bound in this table the existing slot keeps its
    position and its forced cast but takes the new value; the old value is
    released and one warning is emitted. There is never a second entry for an id.
    """
    if table is None:
        table = SymbolTable()
    if new_binding is None:
        return table

    if new_binding.id in table:
        if diagnostics is None:
            diagnostics = Diagnostics()
        diagnostics.warning("Duplicate assignment to symbol %s", new_binding.id)
        old = table.replace_value(new_binding.id, new_binding.value)
        release(old)
        return table

    table.insert(new_binding)
    return table


def _adopt(node: Node, scope: ScopeNode) -> None:
    """Point every node of `node`'s subtree at `scope`, stopping at nested scopes."""
    stack = [node]
    while stack:
        current = stack.pop()
        current.set_enclosing(scope)
        # A nested scope already owns the references below it
        if not isinstance(current, ScopeNode):
            stack.extend(current.children())


def make_scope(table: Optional[SymbolTable], body: Expression) -> ScopeNode:
    table = SymbolTable() if table is None else table
    scope = ScopeNode(table, _require_node(body, "scope body"))
    for binding in table:
        _adopt(binding.value, scope)
    _adopt(body, scope)
    return scope
