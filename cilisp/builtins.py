from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, List

import numpy as np

from cilisp import EvaluatorFn
from cilisp.diagnostics import Diagnostics
from cilisp.types.ast import Node
from cilisp.types.builtin_op import BuiltinOp
from cilisp.types.number import NumType, TypedResult, ZERO, NAN_VALUE

Handler = Callable[[str, List[Node], EvaluatorFn, Diagnostics], TypedResult]


class Arity(Enum):
    UNARY = "exactly 1"
    BINARY = "exactly 2"
    VARIADIC = "any"


def ieee(fn, *args: float) -> float:
    """Apply a numpy ufunc with float64 semantics: no exceptions, inf/nan results."""
    with np.errstate(all="ignore"):
        return float(fn(*(np.float64(a) for a in args)))


# -------------------------------
# Arity classes
# -------------------------------
def unary(compute: Callable[[TypedResult], TypedResult]) -> Handler:
    def handler(name: str, operands: List[Node], ev: EvaluatorFn, diagnostics: Diagnostics) -> TypedResult:
        if not operands:
            diagnostics.warning("%s called with no operands, nan returned", name)
            return NAN_VALUE
        if len(operands) > 1:
            diagnostics.warning("%s called with extra operands, ignoring extra", name)
        return compute(ev(operands[0]))
    handler.arity = Arity.UNARY
    return handler

def binary(compute: Callable[[float, float], float]) -> Handler:
    def handler(name: str, operands: List[Node], ev: EvaluatorFn, diagnostics: Diagnostics) -> TypedResult:
        if not operands:
            diagnostics.warning("%s called with no operands, 0 returned", name)
            return ZERO
        if len(operands) == 1:
            diagnostics.warning("%s called with 1 operand, nan returned", name)
            return NAN_VALUE
        first = ev(operands[0])
        second = ev(operands[1])
        if len(operands) > 2:
            diagnostics.warning("%s called with too many operands, ignoring extra", name)
        kind = NumType.promote(first.kind, second.kind)
        return TypedResult(kind, compute(first.value, second.value))
    handler.arity = Arity.BINARY
    return handler

def variadic(compute: Callable[[List[TypedResult]], TypedResult]) -> Handler:
    def handler(name: str, operands: List[Node], ev: EvaluatorFn, diagnostics: Diagnostics) -> TypedResult:
        if not operands:
            diagnostics.warning("%s called with no operands, 0 returned", name)
            return ZERO
        return compute([ev(op) for op in operands])
    handler.arity = Arity.VARIADIC
    return handler

# -------------------------------
# Unary
# -------------------------------
def neg(x: TypedResult) -> TypedResult:
    return TypedResult(x.kind, -x.value)

def abs_(x: TypedResult) -> TypedResult:
    return TypedResult(x.kind, ieee(np.fabs, x.value))

def exp(x: TypedResult) -> TypedResult:
    return TypedResult(NumType.DOUBLE, ieee(np.exp, x.value))

def exp2(x: TypedResult) -> TypedResult:
    value = ieee(np.exp2, x.value)
    return TypedResult(NumType.DOUBLE if value < 0 else x.kind, value)

def log(x: TypedResult) -> TypedResult:
    return TypedResult(NumType.DOUBLE, ieee(np.log, x.value))

def sqrt(x: TypedResult) -> TypedResult:
    return TypedResult(NumType.DOUBLE, ieee(np.sqrt, x.value))

def cbrt(x: TypedResult) -> TypedResult:
    return TypedResult(NumType.DOUBLE, ieee(np.cbrt, x.value))

# -------------------------------
# Binary
# -------------------------------
def sub(a: float, b: float) -> float:
    return ieee(np.subtract, a, b)

def mult(a: float, b: float) -> float:
    return ieee(np.multiply, a, b)

def div(a: float, b: float) -> float:
    return ieee(np.divide, a, b)

def remainder(a: float, b: float) -> float:
    return abs(ieee(np.fmod, a, b))

def power(a: float, b: float) -> float:
    return ieee(np.power, a, b)

# -------------------------------
# Variadic
# -------------------------------
def add(values: List[TypedResult]) -> TypedResult:
    total = 0.0
    for v in values:
        total = ieee(np.add, total, v.value)
    return TypedResult(NumType.promote(*(v.kind for v in values)), total)

def hypot(values: List[TypedResult]) -> TypedResult:
    total = 0.0
    for v in values:
        total = ieee(np.add, total, ieee(np.square, v.value))
    return TypedResult(NumType.DOUBLE, ieee(np.sqrt, total))

def minimum(values: List[TypedResult]) -> TypedResult:
    # Only a strictly smaller operand displaces the current winner
    result = values[0]
    for v in values[1:]:
        if result.value > v.value:
            result = v
    return result

def maximum(values: List[TypedResult]) -> TypedResult:
    result = values[0]
    for v in values[1:]:
        if result.value < v.value:
            result = v
    return result

# -------------------------------
# Dispatch table
# -------------------------------
BUILTINS: Dict[BuiltinOp, Handler] = {
    BuiltinOp.NEG: unary(neg),
    BuiltinOp.ABS: unary(abs_),
    BuiltinOp.ADD: variadic(add),
    BuiltinOp.SUB: binary(sub),
    BuiltinOp.MULT: binary(mult),
    BuiltinOp.DIV: binary(div),
    BuiltinOp.REMAINDER: binary(remainder),
    BuiltinOp.EXP: unary(exp),
    BuiltinOp.EXP2: unary(exp2),
    BuiltinOp.POW: binary(power),
    BuiltinOp.LOG: unary(log),
    BuiltinOp.SQRT: unary(sqrt),
    BuiltinOp.CBRT: unary(cbrt),
    BuiltinOp.HYPOT: variadic(hypot),
    BuiltinOp.MAX: variadic(maximum),
    BuiltinOp.MIN: variadic(minimum),
}


def arity_of(op: BuiltinOp) -> Arity:
    return BUILTINS[op].arity
