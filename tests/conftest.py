"""Shared fixtures: scripted httpx transports."""

import httpx
import pytest


class ScriptedTransport:
    """Builds an httpx.MockTransport from a {url: response} table.

    Values may be an int status, an (status, body) tuple, an
    (status, body, headers) tuple, or an exception instance to raise.
    Unknown URLs return 200 with an empty body. Every request is recorded.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests = []

    def _handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))

        if isinstance(route, Exception):
            raise type(route)(str(route), request=request)
        if route is None:
            return httpx.Response(200, text="")
        if isinstance(route, int):
            return httpx.Response(route, text="")

        status, body, *rest = route
        headers = rest[0] if rest else {}
        return httpx.Response(status, text=body, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handler)

    @property
    def urls(self):
        return [str(request.url) for request in self.requests]


@pytest.fixture
def scripted():
    """Factory for ScriptedTransport instances."""
    return ScriptedTransport


def _padded_page(length: int, with_script: bool = True) -> str:
    head = '<html><head><script src="x.js"></script></head><body>' if with_script else "<html><body>"
    tail = "</body></html>"
    return head + "x" * (length - len(head) - len(tail)) + tail


@pytest.fixture
def padded_page():
    """HTML of exactly `length` characters, optionally loading a script."""
    return _padded_page

