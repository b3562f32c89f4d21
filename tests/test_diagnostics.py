import logging

from cilisp.diagnostics import Diagnostic, Diagnostics


def test_records_and_logs(caplog):
    sink = Diagnostics()
    with caplog.at_level(logging.WARNING, logger="cilisp.diagnostics"):
        sink.warning("%s called with no operands, %s returned", "add", 0)
    assert sink.warnings == ["add called with no operands, 0 returned"]
    assert caplog.messages == ["add called with no operands, 0 returned"]


def test_message_with_percent_and_no_args():
    sink = Diagnostics()
    sink.warning("100% literal")
    assert sink.warnings == ["100% literal"]


def test_custom_logger(caplog):
    sink = Diagnostics(logging.getLogger("custom.sink"))
    with caplog.at_level(logging.WARNING, logger="custom.sink"):
        sink.warning("hello")
    assert caplog.records[0].name == "custom.sink"


def test_drain_and_clear():
    sink = Diagnostics()
    sink.warning("one")
    sink.warning("two")
    assert len(sink) == 2
    drained = sink.drain()
    assert drained == [Diagnostic("warning", "one"), Diagnostic("warning", "two")]
    assert len(sink) == 0
    sink.warning("three")
    sink.clear()
    assert list(sink) == []


def test_diagnostic_str():
    assert str(Diagnostic("warning", "undefined symbol x, nan returned")) == "WARNING: undefined symbol x, nan returned"
