import logging

import pytest

from cilisp.construction import make_binding, make_number, merge_binding_into_table
from cilisp.types.number import NumType
from cilisp.types.symbol_table import Binding, SymbolTable


def _table(*bindings):
    table = SymbolTable()
    for b in bindings:
        table.insert(b)
    return table


def _merge_all(bindings, diagnostics):
    table = None
    for b in bindings:
        table = merge_binding_into_table(b, table, diagnostics)
    return table


def test_merge_into_none_creates_table(diagnostics):
    table = merge_binding_into_table(make_binding("x", make_number(1)), None, diagnostics)
    assert isinstance(table, SymbolTable)
    assert table.ids() == ["x"]


def test_merge_none_binding_returns_table_unchanged(diagnostics):
    table = SymbolTable()
    assert merge_binding_into_table(None, table, diagnostics) is table
    assert len(table) == 0


def test_duplicate_keeps_slot_and_takes_later_value(diagnostics):
    table = _merge_all(
        [
            make_binding("x", make_number(1)),
            make_binding("y", make_number(2)),
            make_binding("x", make_number(3)),
        ],
        diagnostics,
    )
    assert table.ids() == ["x", "y"]
    assert table.find("x").value.value == 3.0
    assert diagnostics.warnings == ["Duplicate assignment to symbol x"]


def test_duplicate_keeps_first_cast(diagnostics):
    table = _merge_all(
        [
            make_binding("x", make_number(1.5, NumType.DOUBLE), NumType.INT),
            make_binding("x", make_number(2.5, NumType.DOUBLE), NumType.DOUBLE),
        ],
        diagnostics,
    )
    assert table.find("x").forced_cast is NumType.INT


def test_three_declarations_warn_twice(diagnostics):
    table = _merge_all([make_binding("x", make_number(i)) for i in range(3)], diagnostics)
    assert len(table) == 1
    assert table.find("x").value.value == 2.0
    assert len(diagnostics.warnings) == 2


def test_merge_without_sink_still_replaces_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="cilisp.diagnostics"):
        table = _merge_all([make_binding("x", make_number(1)), make_binding("x", make_number(9))], None)
    assert table.find("x").value.value == 9.0
    assert caplog.messages == ["Duplicate assignment to symbol x"]


def test_insert_rejects_existing_id():
    table = _table(Binding("x", make_number(1)))
    with pytest.raises(KeyError):
        table.insert(Binding("x", make_number(2)))


def test_later_declaration_wins_over_earlier(diagnostics):
    first = make_number(1)
    table = _merge_all([make_binding("x", first), make_binding("x", make_number(2))], diagnostics)
    assert len(table) == 1
    assert table.find("x").value.value == 2.0
    assert first.released


def test_new_table_is_empty():
    assert len(SymbolTable()) == 0


def test_lookup_and_membership():
    table = _table(Binding("a", make_number(1)), Binding("b", make_number(2)))
    assert "a" in table
    assert "c" not in table
    assert table.find("c") is None
    assert [b.id for b in table] == ["a", "b"]


def test_replace_value_unknown_id():
    with pytest.raises(KeyError):
        SymbolTable().replace_value("x", make_number(1))


def test_str_and_repr():
    table = _table(Binding("x", make_number(1), NumType.INT))
    assert str(table) == "{int x: NumberNode(INT, 1.0)}"
    assert repr(table) == "<SymbolTable {int x: NumberNode(INT, 1.0)}>"
