"""Shared fixtures for the SSO tests."""

import logging
from collections.abc import Callable
from unittest.mock import AsyncMock, Mock

import pytest
import structlog
from starlette.requests import Request

from forge_sso.sso.models import Identity


def make_request(
    method: str = "GET",
    path: str = "/",
    headers: dict[str, str] | None = None,
    query_string: str = "",
) -> Request:
    """Build a Starlette request without a running app."""
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "root_path": "",
        "scheme": "http",
        "server": ("testserver", 80),
        "query_string": query_string.encode("latin-1"),
        "headers": [
            (key.lower().encode("latin-1"), value.encode("latin-1"))
            for key, value in (headers or {}).items()
        ],
    }
    return Request(scope)


@pytest.fixture
def request_factory() -> Callable[..., Request]:
    return make_request


def make_method(
    name: str,
    identity: Identity | None = None,
    applicable: bool = True,
) -> Mock:
    """A SingleSignOn double that resolves to ``identity``."""
    method = Mock()
    method.name = name
    method.is_applicable = Mock(return_value=applicable)
    method.resolve = AsyncMock(return_value=identity)
    return method


@pytest.fixture
def method_factory() -> Callable[..., Mock]:
    return make_method


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logging configuration done by a test or by build_app."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
