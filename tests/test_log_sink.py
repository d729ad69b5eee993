import logging

from invoice_renamer.log_sink import CollectingSink, logging_sink


def test_collecting_sink_keeps_order_and_forwards():
    forwarded = []
    sink = CollectingSink(forward=lambda message, level: forwarded.append((message, level)))
    sink("one", "info")
    sink("two", "error")
    assert [m.message for m in sink.messages] == ["one", "two"]
    assert [m.message for m in sink.errors()] == ["two"]
    assert forwarded == [("one", "info"), ("two", "error")]


def test_logging_sink_maps_levels(caplog):
    log = logging_sink(logging.getLogger("invoice_renamer.test"))
    with caplog.at_level(logging.INFO, logger="invoice_renamer.test"):
        log("parsed", "success")
        log("broken", "error")
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.INFO, "✓ parsed"),
        (logging.ERROR, "broken"),
    ]
