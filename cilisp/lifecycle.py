"""Deterministic teardown of cilisp ASTs.

``release`` walks ownership edges only (call operands, scope bindings, scope
bodies) and never the non-owning enclosing-scope references. The walk uses an
explicit stack so teardown depth is not bounded by the interpreter's call stack.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from cilisp.errors import CilispInvariantError
from cilisp.types.ast import Node, FunctionCallNode, ScopeNode


def owned_nodes(root: Optional[Node]) -> Iterator[Node]:
    """Yield every node owned by `root` (including root), parents before children."""
    if root is None:
        return
    if root.released:
        raise CilispInvariantError(f"{root!r} was already released")
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        # reversed so siblings come out in evaluation order
        stack.extend(reversed(node.children()))


def release(root: Optional[Node]) -> int:
    """Release `root` and everything it owns. Returns the number of nodes released.

    Releasing None is a no-op. Releasing a node twice is an invariant violation.
    """
    if root is None:
        return 0
    if root.released:
        raise CilispInvariantError(f"{root!r} was already released")

    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        if node.released:
            raise CilispInvariantError(f"{node!r} is owned twice")
        stack.extend(node.children())
        node.released = True
        node.clear_enclosing()
        if isinstance(node, FunctionCallNode):
            node.operands.clear()
        elif isinstance(node, ScopeNode):
            node.bindings.clear()
            node.body = None
        count += 1
    return count


@contextmanager
def managed(root: Node):
    """Hold `root` for the duration of the block, then release it."""
    try:
        yield root
    finally:
        if root is not None and not root.released:
            release(root)
