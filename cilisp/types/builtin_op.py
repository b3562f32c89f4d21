from __future__ import annotations

from enum import IntEnum


class BuiltinOp(IntEnum):
    # Unary
    NEG = 0x00
    ABS = 0x01

    # Arithmetic
    ADD = 0x02
    SUB = 0x03
    MULT = 0x04
    DIV = 0x05
    REMAINDER = 0x06

    # Exponential / logarithmic
    EXP = 0x07
    EXP2 = 0x08
    POW = 0x09
    LOG = 0x0A
    SQRT = 0x0B
    CBRT = 0x0C

    # Variadic
    HYPOT = 0x0D
    MAX = 0x0E
    MIN = 0x0F

    # Any name outside the catalogue
    CUSTOM = 0xFF

    @property
    def op_name(self) -> str:
        return self.name.lower()


_BY_NAME = {op.op_name: op for op in BuiltinOp if op is not BuiltinOp.CUSTOM}


def resolve_func(name: str) -> BuiltinOp:
    """Map an operator name to its catalogue entry, or CUSTOM if unknown."""
    return _BY_NAME.get(name, BuiltinOp.CUSTOM)
