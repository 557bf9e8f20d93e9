"""Ordered single sign-on resolution for a code-hosting HTTP server."""

__version__ = "0.1.0"
