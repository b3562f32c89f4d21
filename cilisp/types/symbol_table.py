"""Symbol tables for cilisp scopes.

A SymbolTable is the ordered list of bindings introduced by one ``let``. Ids are
unique within a table; lookup is a linear scan. Resolution across nested scopes
is done by the evaluator, which walks the enclosing-scope chain and asks each
table in turn.
"""

from __future__ import annotations

import sys
from io import StringIO
from typing import Iterator, List, Optional

from cilisp.types.ast import Node
from cilisp.types.number import NumType


class Binding:
    __slots__ = ("id", "value", "forced_cast")

    def __init__(self, id: str, value: Node, forced_cast: Optional[NumType] = None):
        # Intern to ensure fast equality during the linear scan
        self.id = sys.intern(id)
        self.value = value
        self.forced_cast = NumType(forced_cast) if forced_cast is not None else None

    def __repr__(self):
        cast = f", {self.forced_cast.name}" if self.forced_cast is not None else ""
        return f"Binding({self.id!r}, {self.value!r}{cast})"


class SymbolTable:
    """Ordered bindings with unique ids.

    Tables start empty; bindings arrive through ``merge_binding_into_table``,
    which owns the duplicate-id rule.
    """

    __slots__ = ("bindings",)

    def __init__(self):
        self.bindings: List[Binding] = []

    def find(self, id: str) -> Optional[Binding]:
        """Find the binding for `id`, or None."""
        for binding in self.bindings:
            if binding.id == id:
                return binding
        return None

    def insert(self, binding: Binding) -> None:
        """Append a binding whose id is not yet present."""
        if self.find(binding.id) is not None:
            raise KeyError(binding.id)
        self.bindings.append(binding)

    def replace_value(self, id: str, value: Node) -> Node:
        """Swap the value bound to `id` in place, returning the previous value."""
        binding = self.find(id)
        if binding is None:
            raise KeyError(id)
        old, binding.value = binding.value, value
        return old

    def clear(self) -> None:
        self.bindings.clear()

    def ids(self) -> List[str]:
        return [b.id for b in self.bindings]

    def __contains__(self, id: str) -> bool:
        return self.find(id) is not None

    def __iter__(self) -> Iterator[Binding]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def _write_bindings(self, buffer: StringIO) -> None:
        """Write the bindings into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for b in self.bindings:
            if not first:
                buffer.write(", ")
            if b.forced_cast is not None:
                buffer.write(f"{b.forced_cast.name.lower()} ")
            buffer.write(f"{b.id}: {b.value!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_bindings(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<SymbolTable ")
            self._write_bindings(buffer)
            buffer.write(">")
            return buffer.getvalue()
