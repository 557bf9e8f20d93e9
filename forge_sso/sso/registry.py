"""Ordered registry of SSO methods."""

from collections.abc import Iterable

import structlog

from .errors import log_and_continue
from .models import SingleSignOn

logger = structlog.get_logger()


class MethodRegistry:
    """Ordered list of SSO methods.

    Order decides precedence: the first method that resolves an identity
    wins. ``register`` is meant for startup only; it takes no lock and does
    not initialize the method it appends, so a method registered after
    ``init`` runs un-initialized.
    """

    def __init__(self, methods: Iterable[SingleSignOn] = ()):
        self._methods: list[SingleSignOn] = list(methods)

    def methods(self) -> tuple[SingleSignOn, ...]:
        """Return a snapshot of the registered methods in order."""
        return tuple(self._methods)

    def register(self, method: SingleSignOn) -> None:
        """Append a method to the end of the chain."""
        self._methods.append(method)
        logger.debug("SSO method registered", method=method.name)

    def init(self) -> None:
        """Initialize every method; one failure does not stop the others."""
        for method in self.methods():
            with log_and_continue("Could not initialize SSO method", method=method.name):
                method.init()

    def free(self) -> None:
        """Release every method; one failure does not stop the others."""
        for method in self.methods():
            with log_and_continue("Could not free SSO method", method=method.name):
                method.free()
