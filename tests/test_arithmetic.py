import math

import pytest

from cilisp.types.number import NumType
from tests.helpers import same_value

INT, DOUBLE = NumType.INT, NumType.DOUBLE
NAN = math.nan
INF = math.inf


@pytest.mark.parametrize(
    "source,kind,value,n_warnings",
    [
        # add
        ("(add)", INT, 0, 1),
        ("(add 3 4.5)", DOUBLE, 7.5, 0),
        ("(add 1 2 3)", INT, 6, 0),
        ("(add 7)", INT, 7, 0),
        ("(add 1.5)", DOUBLE, 1.5, 0),
        ("(add 1 (mult 2 3))", INT, 7, 0),
        # binary operators
        ("(sub)", INT, 0, 1),
        ("(sub 5)", DOUBLE, NAN, 1),
        ("(sub 5 2)", INT, 3, 0),
        ("(sub 5 2 9)", INT, 3, 1),
        ("(sub 5 2.5)", DOUBLE, 2.5, 0),
        ("(mult 2 3)", INT, 6, 0),
        ("(mult 2 3.0)", DOUBLE, 6.0, 0),
        ("(mult 2)", DOUBLE, NAN, 1),
        ("(div 1 1)", INT, 1, 0),
        ("(div 1.0 1)", DOUBLE, 1.0, 0),
        ("(div 7 2)", INT, 3.5, 0),
        ("(div 1 0)", INT, INF, 0),
        ("(div -1.0 0)", DOUBLE, -INF, 0),
        ("(div 0 0)", INT, NAN, 0),
        ("(remainder 7 3)", INT, 1, 0),
        ("(remainder -7 3)", INT, 1, 0),
        ("(remainder 7.5 2)", DOUBLE, 1.5, 0),
        ("(remainder 1 0)", INT, NAN, 0),
        ("(pow 2 10)", INT, 1024, 0),
        ("(pow 2 0.5)", DOUBLE, math.sqrt(2), 0),
        ("(pow 2 -1)", INT, 0.5, 0),
        ("(pow)", INT, 0, 1),
        # unary operators
        ("(neg 5)", INT, -5, 0),
        ("(neg 5.5)", DOUBLE, -5.5, 0),
        ("(neg)", DOUBLE, NAN, 1),
        ("(neg 1 2)", INT, -1, 1),
        ("(abs -3)", INT, 3, 0),
        ("(abs -3.25)", DOUBLE, 3.25, 0),
        ("(abs)", DOUBLE, NAN, 1),
        ("(exp 0)", DOUBLE, 1.0, 0),
        ("(exp 1 2)", DOUBLE, math.e, 1),
        ("(exp2 3)", INT, 8, 0),
        ("(exp2 3.0)", DOUBLE, 8.0, 0),
        ("(exp2 -1)", INT, 0.5, 0),
        ("(log 1)", DOUBLE, 0.0, 0),
        ("(log 0)", DOUBLE, -INF, 0),
        ("(log -1)", DOUBLE, NAN, 0),
        ("(sqrt 4)", DOUBLE, 2.0, 0),
        ("(sqrt 4.0)", DOUBLE, 2.0, 0),
        ("(sqrt -1)", DOUBLE, NAN, 0),
        ("(sqrt)", DOUBLE, NAN, 1),
        ("(cbrt 27)", DOUBLE, 3.0, 0),
        ("(cbrt -8)", DOUBLE, -2.0, 0),
        # variadic
        ("(hypot 3 4)", DOUBLE, 5.0, 0),
        ("(hypot 3)", DOUBLE, 3.0, 0),
        ("(hypot 1 2 2)", DOUBLE, 3.0, 0),
        ("(hypot)", INT, 0, 1),
        ("(min 5)", INT, 5, 0),
        ("(max 2.5)", DOUBLE, 2.5, 0),
        ("(min 3 1.5 2)", DOUBLE, 1.5, 0),
        ("(max 3 1.5 2)", INT, 3, 0),
        ("(min 1 1.0)", INT, 1, 0),
        ("(max 1.0 1)", DOUBLE, 1.0, 0),
        ("(max)", INT, 0, 1),
        ("(min)", INT, 0, 1),
        # nested
        ("(sqrt (add (mult 3 3) (mult 4 4)))", DOUBLE, 5.0, 0),
        ("(add (div 1 2) (div 1 2))", INT, 1.0, 0),
    ],
)
def test_builtin_catalogue(interp, diagnostics, source, kind, value, n_warnings):
    result = interp.eval(source)
    assert result.kind == kind
    assert same_value(result.value, value)
    assert len(diagnostics.warnings) == n_warnings


def test_unknown_operator_warns_and_returns_nan(interp, diagnostics):
    result = interp.eval("(foo 1 2)")
    assert result.kind == DOUBLE
    assert math.isnan(result.value)
    assert diagnostics.warnings == ["unknown function foo, nan returned"]


def test_unknown_operator_does_not_evaluate_operands(interp, diagnostics):
    interp.eval("(foo undefined_a undefined_b)")
    assert len(diagnostics.warnings) == 1


@pytest.mark.parametrize(
    "source",
    [
        "(neg 1 undefined_x)",
        "(sqrt 4 undefined_x)",
        "(sub 5 2 undefined_x)",
        "(pow 2 2 undefined_x undefined_y)",
    ],
)
def test_extra_operands_are_not_evaluated(interp, diagnostics, source):
    interp.eval(source)
    # only the arity warning, no undefined-symbol warning
    assert len(diagnostics.warnings) == 1
    assert "undefined" not in diagnostics.warnings[0]


@pytest.mark.parametrize("source, message", [
    ("(sub 5)", "sub called with 1 operand, nan returned"),
    ("(sub 5 2 9)", "sub called with too many operands, ignoring extra"),
    ("(add)", "add called with no operands, 0 returned"),
])
def test_warning_messages_name_the_operator(interp, diagnostics, source, message):
    interp.eval(source)
    assert diagnostics.warnings == [message]


def test_warning_inside_operand_does_not_abort_enclosing_call(interp, diagnostics):
    result = interp.eval("(add 1 (sub 5) 2)")
    assert result.kind == DOUBLE
    assert math.isnan(result.value)
    assert len(diagnostics.warnings) == 1

    result = interp.eval("(max 1 (add) 3)")
    assert result == (INT, 3.0)
