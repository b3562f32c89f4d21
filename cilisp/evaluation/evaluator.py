"""Core evaluator for cilisp.

Plain structural recursion over the four node variants. Builtins receive their
operand nodes unevaluated together with a callback, so each arity class decides
how many operands actually get evaluated. Symbol references are resolved by
walking the enclosing-scope chain and re-evaluating the bound expression on
every reference (call-by-name).
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from cilisp.builtins import BUILTINS
from cilisp.config import get_max_depth
from cilisp.diagnostics import Diagnostics
from cilisp.errors import CilispInvariantError, CilispRecursionError
from cilisp.types.ast import Node, NumberNode, FunctionCallNode, SymbolRefNode, ScopeNode
from cilisp.types.builtin_op import BuiltinOp
from cilisp.types.number import NumType, TypedResult, NAN_VALUE


def evaluate(
    node: Node,
    diagnostics: Optional[Diagnostics] = None,
    *,
    max_depth: Optional[int] = None,
) -> TypedResult:
    """
    Evaluate a top-level AST and return its typed value.

    Warnings go to `diagnostics` (a private sink is used when none is given).
    Raises CilispRecursionError past `max_depth` nested evaluations and
    CilispInvariantError when handed a null or released node.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    limit = max_depth if max_depth is not None else get_max_depth()
    try:
        return evaluate0(node, diagnostics, limit, 1)
    except RecursionError:
        raise CilispRecursionError(
            f"Python stack exhausted before the depth limit of {limit}"
        ) from None


def evaluate0(node: Node, diagnostics: Diagnostics, limit: int, depth: int) -> TypedResult:
    """
    Single evaluation step at nesting level `depth`.
    """
    if depth > limit:
        raise CilispRecursionError(f"Maximum evaluation depth of {limit} exceeded")
    if node is None:
        raise CilispInvariantError("NULL ast node passed into evaluate")
    if node.released:
        raise CilispInvariantError(f"Released node passed into evaluate: {node!r}")

    def ev(child: Node) -> TypedResult:
        return evaluate0(child, diagnostics, limit, depth + 1)

    match node:
        case NumberNode():
            return node.as_result()

        case FunctionCallNode():
            if node.operator is BuiltinOp.CUSTOM:
                diagnostics.warning("unknown function %s, nan returned", node.name)
                return NAN_VALUE
            handler = BUILTINS[node.operator]
            return handler(node.name, node.operands, ev, diagnostics)

        case SymbolRefNode():
            for scope in node.scopes():
                binding = scope.bindings.find(node.id)
                if binding is not None:
                    # Re-evaluated on every reference, never cached
                    return cast_result(ev(binding.value), binding.forced_cast)
            diagnostics.warning("undefined symbol %s, nan returned", node.id)
            return NAN_VALUE

        case ScopeNode():
            return ev(node.body)

    raise CilispInvariantError(f"Unknown node variant passed into evaluate: {node!r}")


def cast_result(result: TypedResult, forced_cast: Optional[NumType]) -> TypedResult:
    """Apply a binding's declared type: INT truncates toward zero, DOUBLE widens."""
    if forced_cast is None:
        return result
    if forced_cast is NumType.INT:
        with np.errstate(all="ignore"):
            return TypedResult(NumType.INT, float(np.trunc(result.value)))
    return TypedResult(NumType.DOUBLE, result.value)
