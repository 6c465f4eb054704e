"""Shared fixtures: a temporary contact store, a deterministic clock, and a mock import source."""

from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

from simple_contacts import ContactRepository, ContactStore, RemoteContactSource

IMPORT_URL = "https://contacts.example.test/people"


class FakeClock:
    """Millisecond clock that advances by one on every read."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


def json_source(payload: Any, status_code: int = 200) -> RemoteContactSource:
    """Import source whose endpoint always answers with the given JSON payload."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return RemoteContactSource(transport=httpx.MockTransport(handler))


def raw_source(body: bytes, status_code: int = 200) -> RemoteContactSource:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=body)

    return RemoteContactSource(transport=httpx.MockTransport(handler))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "contacts.db"


@pytest_asyncio.fixture
async def store(db_path, clock):
    store = ContactStore(db_path, clock=clock)
    try:
        yield store
    finally:
        await store.close()


@pytest.fixture
def make_repo(store, clock) -> Callable[..., ContactRepository]:
    """Build a repository over the test store, optionally with a mock import payload."""

    def _make(payload: Any = None, source: RemoteContactSource = None) -> ContactRepository:
        if source is None:
            source = json_source(payload if payload is not None else [])
        return ContactRepository(store, source, import_url=IMPORT_URL, clock=clock)

    return _make


@pytest_asyncio.fixture
async def repo(make_repo):
    repo = make_repo()
    await repo.refresh()
    return repo
