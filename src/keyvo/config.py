"""Process-wide settings.

Call set_error_handler() once at startup, before any observers are registered:

    keyvo.config.set_error_handler(lambda exc, obj, key: report(exc))

With a handler installed, observer faults raised during announce() are handed
to it one by one and announce() returns normally. Without one (the default),
announce() raises ObserverDeliveryError after the delivery pass completes.
"""

from __future__ import annotations

from typing import Callable

ErrorHandler = Callable[[Exception, object, str], None]

_error_handler: ErrorHandler | None = None


def set_error_handler(handler: ErrorHandler | None) -> None:
    """Install (or clear, with None) the observer fault handler."""
    global _error_handler
    _error_handler = handler


def get_error_handler() -> ErrorHandler | None:
    return _error_handler
