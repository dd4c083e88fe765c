"""
Pytest configuration and fixtures for Shipit client tests.
"""
import os
from typing import Callable, List

import httpx
import pytest

# Shell credentials must not leak into the tests
for _var in ("SHIPIT_EMAIL", "SHIPIT_ACCESS_TOKEN", "SHIPIT_DEVELOPMENT", "SHIPIT_API_BASE",
             "SHIPIT_TIMEOUT_SECONDS"):
    os.environ.pop(_var, None)

from shipit.services.shipit_client import ShipitClient

TEST_EMAIL = "store@example.com"
TEST_TOKEN = "test-access-token-1234"


@pytest.fixture
def captured_requests() -> List[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(captured_requests) -> Callable[..., ShipitClient]:
    """
    Build a ShipitClient backed by httpx.MockTransport.

    `handler` is either a callable taking an httpx.Request, or a JSON-able
    payload returned with status 200.
    """
    clients = []

    def factory(handler, is_development: bool = False, **kwargs) -> ShipitClient:
        if not callable(handler):
            payload = handler

            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(200, json=payload)

        def recording_handler(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        clients.append(http_client)
        return ShipitClient(
            TEST_EMAIL,
            TEST_TOKEN,
            is_development,
            http_client=http_client,
            **kwargs,
        )

    yield factory

    for http_client in clients:
        http_client.close()
