"""Shared fixtures: an in-memory HttpTransport and a client wired to it."""

import json
from typing import Any

import pytest

from roam_api.roam_client import RoamBackendClient
from roam_api.roam_transport import HttpTransport, RoamRequest, RoamResponse

TEST_TOKEN = "roam-graph-token-test"
TEST_GRAPH = "test-graph"


class FakeResponse:
    """Scripted ``RoamResponse``."""

    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        reason: str = "OK",
        url: str = "https://api.roamresearch.com/",
        redirected: bool = False,
        json_error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.url = url
        self.redirected = redirected
        self._payload = payload
        self._json_error = json_error

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class FakeTransport(HttpTransport):
    """Records every request and replays queued responses in order."""

    def __init__(self) -> None:
        self.requests: list[RoamRequest] = []
        self._responses: list[FakeResponse] = []

    def respond(self, **kwargs: Any) -> FakeResponse:
        """Queue a ``FakeResponse`` built from ``kwargs`` and return it."""
        response = FakeResponse(**kwargs)
        self._responses.append(response)
        return response

    def call(self, request: RoamRequest) -> RoamResponse:
        self.requests.append(request)
        return self._responses.pop(0)

    @property
    def last_request(self) -> RoamRequest:
        return self.requests[-1]

    @property
    def last_body(self) -> Any:
        return json.loads(self.requests[-1].body)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> RoamBackendClient:
    return RoamBackendClient(TEST_TOKEN, TEST_GRAPH, transport)
