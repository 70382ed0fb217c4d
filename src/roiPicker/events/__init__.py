"""Observer primitives shared by the view models and the error handler."""

from .signal import ObservableProperty, Signal

__all__ = ["ObservableProperty", "Signal"]
