from collections.abc import Generator

import pytest

from pyreqchain.client import HttpClient, PresetStore
from pyreqchain.pytest_plugin import HttpClientMock

from tests.servers.echo_transport import EchoTransport


@pytest.fixture
def echo_transport() -> EchoTransport:
    return EchoTransport()


@pytest.fixture
def store() -> PresetStore:
    return PresetStore()


@pytest.fixture
def client(store: PresetStore, echo_transport: EchoTransport) -> HttpClient:
    return HttpClient(store=store, transport=echo_transport)


@pytest.fixture
def client_mock(client: HttpClient) -> Generator[HttpClientMock]:
    with HttpClientMock().installed(client) as mock:
        yield mock
