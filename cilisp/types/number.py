from __future__ import annotations

import math
from enum import IntEnum
from typing import NamedTuple


class NumType(IntEnum):
    INT = 0
    DOUBLE = 1
    NO_TYPE = 2

    @classmethod
    def promote(cls, *kinds: NumType) -> NumType:
        """DOUBLE if any operand kind is DOUBLE, else INT."""
        return cls.DOUBLE if cls.DOUBLE in kinds else cls.INT


class TypedResult(NamedTuple):
    kind: NumType
    value: float

    @property
    def is_nan(self) -> bool:
        return math.isnan(self.value)

    def __repr__(self):
        return f"TypedResult({self.kind.name}, {self.value!r})"


ZERO = TypedResult(NumType.INT, 0.0)
NAN_VALUE = TypedResult(NumType.DOUBLE, math.nan)
