"""Pytest configuration for the providers test suite.

Every test runs with provider environment variables cleared so a developer's
real ``OPENROUTER_API_KEY`` never leaks into assertions or network calls.
HTTP is faked with ``httpx.MockTransport``; no test touches the network.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable, Iterator, List

import httpx
import pytest

from taskmaster_providers.base.http import close_all_clients
from taskmaster_providers.openrouter import ClientConfig, OpenRouterClient

_ENV_VARS = (
    "OPENROUTER_API_KEY",
    "OPENROUTER_BASE_URL",
    "OPENROUTER_MODEL",
    "TASKMASTER_PROVIDERS_CONFIG",
    "TASKMASTER_LOG_LEVEL",
    "TASKMASTER_CONNECT_TIMEOUT_SECONDS",
    "TASKMASTER_HTTP_TIMEOUT_SECONDS",
)

TEST_CREDENTIAL = "sk-or-unit-test-credential"


class TrackingStream(httpx.SyncByteStream):
    """Response body stream recording how far it was read and whether it was closed."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = list(chunks)
        self.yielded = 0
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            self.yielded += 1
            yield chunk

    def close(self) -> None:
        self.closed = True


def delta_record(content: Any) -> str:
    """Return one ``data:`` line carrying ``content`` as the delta text."""
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}) + "\n"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    close_all_clients()


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(credential=TEST_CREDENTIAL)


@pytest.fixture()
def make_client(config: ClientConfig) -> Iterator[Callable[[Callable[[httpx.Request], httpx.Response]], OpenRouterClient]]:
    """Factory building an ``OpenRouterClient`` whose HTTP goes to ``handler``."""
    created: List[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> OpenRouterClient:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        created.append(http_client)
        return OpenRouterClient(config, http_client=http_client)

    yield _make
    for c in created:
        c.close()


@pytest.fixture()
def sse_response() -> Callable[..., httpx.Response]:
    """Build a 200 streaming response from text records split into chunks.

    Each positional argument becomes one network chunk.
    """

    def _build(*chunks: str) -> httpx.Response:
        return httpx.Response(200, stream=TrackingStream(c.encode("utf-8") for c in chunks))

    return _build
