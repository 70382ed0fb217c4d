"""Qt-free observer primitives.

``Signal`` fans a call out to any number of handlers; ``ObservableProperty``
pairs a value with a ``changed(new, old)`` signal so view models can publish
state that both widgets and headless code subscribe to.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

_LOGGER = logging.getLogger(__name__)


class Signal:
    """A named list of callbacks invoked in connection order.

    Handlers are stored in an immutable tuple that is swapped under a lock, so
    emission iterates a snapshot and handlers may connect or disconnect while a
    signal is being delivered.  A handler that raises is logged and skipped.
    """

    def __init__(self, name: str = "signal") -> None:
        self.name = name
        self._handlers: tuple[Callable[..., Any], ...] = ()
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<Signal {self.name} handlers={len(self._handlers)}>"

    def connect(self, handler: Callable[..., Any]) -> None:
        with self._lock:
            if handler not in self._handlers:
                self._handlers = self._handlers + (handler,)

    def disconnect(self, handler: Callable[..., Any]) -> None:
        """Remove *handler*; raises ``ValueError`` when it was never connected."""
        with self._lock:
            if handler not in self._handlers:
                raise ValueError(f"{handler!r} is not connected to {self.name}")
            self._handlers = tuple(h for h in self._handlers if h != handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        for handler in self._handlers:
            try:
                handler(*args, **kwargs)
            except Exception:
                _LOGGER.exception("Handler %r for %s failed", handler, self.name)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)


class ObservableProperty:
    """A value that emits ``changed(new_value, old_value)`` when it differs.

    Values are compared with ``!=``, so the frozen dataclasses produced by the
    selection engine only notify when their content changes.
    """

    def __init__(self, initial_value: Any = None, *, name: str = "value") -> None:
        self._value = initial_value
        self.changed = Signal(f"{name}.changed")

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        self.set(new_value)

    def set(self, new_value: Any) -> bool:
        """Store *new_value* and return True when observers were notified."""
        if self._value == new_value:
            return False
        old_value, self._value = self._value, new_value
        self.changed.emit(new_value, old_value)
        return True
