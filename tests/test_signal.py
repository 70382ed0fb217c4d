from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from roiPicker.events.signal import ObservableProperty, Signal


def test_signal_emits_to_every_handler_once():
    signal = Signal()
    handler = MagicMock()
    signal.connect(handler)
    signal.connect(handler)

    signal.emit(1, key="value")

    handler.assert_called_once_with(1, key="value")
    assert signal.handler_count == 1


def test_signal_disconnect_stops_delivery():
    signal = Signal()
    handler = MagicMock()
    signal.connect(handler)
    signal.disconnect(handler)

    signal.emit()

    handler.assert_not_called()
    assert signal.handler_count == 0


def test_failing_handler_does_not_block_others(caplog):
    signal = Signal()
    received = []

    def broken(_value):
        raise RuntimeError("boom")

    signal.connect(broken)
    signal.connect(received.append)

    with caplog.at_level(logging.ERROR, logger="roiPicker.events.signal"):
        signal.emit(5)

    assert received == [5]
    assert "boom" in caplog.text


def test_observable_property_notifies_on_change_only():
    prop = ObservableProperty(0)
    changes = []
    prop.changed.connect(lambda new, old: changes.append((new, old)))

    prop.value = 0
    prop.value = 3
    prop.value = 3

    assert prop.value == 3
    assert changes == [(3, 0)]


def test_disconnect_unknown_handler_raises():
    with pytest.raises(ValueError):
        Signal("hover.changed").disconnect(print)


def test_handler_may_disconnect_during_emit():
    signal = Signal()
    calls = []

    def once(value):
        calls.append(value)
        signal.disconnect(once)

    signal.connect(once)
    signal.emit(1)
    signal.emit(2)

    assert calls == [1]


def test_observable_set_reports_whether_it_notified():
    prop = ObservableProperty("", name="export_text")

    assert prop.set("{}") is True
    assert prop.set("{}") is False
    assert prop.changed.name == "export_text.changed"
