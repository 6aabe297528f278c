"""HTTP transport abstraction used by the Roam backend client.

The client never talks to the network directly. It builds a ``RoamRequest`` and
hands it to an ``HttpTransport``, whose ``call`` performs exactly one exchange
and returns a ``RoamResponse``. ``RequestsTransport`` is the default
implementation; tests and alternate stacks substitute their own subclass.
"""

from abc import ABC, abstractmethod
from typing import Any, Final, Literal, Protocol, final
import logging

from pydantic import BaseModel, ConfigDict, Field
import requests

logger = logging.getLogger(__name__)


class RoamRequest(BaseModel):
    """Immutable description of a single HTTP request to the Roam backend.

    ``mode`` and ``cache`` mirror the fetch request options of browser
    transports; transports without those concepts translate or ignore them.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1, description="Absolute request URL")
    method: str = Field(default="POST", description="HTTP method")
    headers: dict[str, str] = Field(default_factory=dict, description="Request headers")
    body: str = Field(..., description="JSON-encoded request body")
    mode: Literal["cors", "no-cors", "same-origin"] = "cors"
    cache: Literal["default", "no-store", "reload", "no-cache", "force-cache"] = "no-cache"

    def __repr__(self) -> str:
        # Headers carry the bearer token.
        return f"RoamRequest(method={self.method!r}, url={self.url!r})"

    __str__ = __repr__


class RoamResponse(Protocol):
    """What the client needs from the response returned by a transport."""

    @property
    def status_code(self) -> int: ...

    @property
    def reason(self) -> str:
        """Status text sent with the status code (e.g. ``'Not Found'``)."""
        ...

    @property
    def url(self) -> str:
        """Final URL of the response, after any redirects."""
        ...

    @property
    def redirected(self) -> bool: ...

    @property
    def ok(self) -> bool: ...

    def json(self) -> Any: ...


class HttpTransport(ABC):
    """Capability performing one network exchange per ``call``."""

    @abstractmethod
    def call(self, request: RoamRequest) -> RoamResponse:
        """Send ``request`` and return the response, following redirects.

        Network failures raise; non-2xx statuses are returned, not raised.
        """


@final
class RequestsResponse:
    """Adapts a ``requests.Response`` to the ``RoamResponse`` interface."""

    def __init__(self, response: requests.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason(self) -> str:
        return self._response.reason or ""

    @property
    def url(self) -> str:
        return self._response.url

    @property
    def redirected(self) -> bool:
        return bool(self._response.history)

    @property
    def ok(self) -> bool:
        return self._response.ok

    @property
    def text(self) -> str:
        return self._response.text

    def json(self) -> Any:
        return self._response.json()


@final
class RequestsTransport(HttpTransport):
    """Default transport, backed by ``requests``.

    A fresh connection is used for every call. ``timeout`` is passed through to
    ``requests``; ``None`` waits indefinitely.
    """

    NO_CACHE_HEADERS: Final[dict[str, str]] = {"Cache-Control": "no-cache", "Pragma": "no-cache"}

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def call(self, request: RoamRequest) -> RoamResponse:
        headers: dict[str, str] = dict(request.headers)
        if request.cache in ("no-cache", "no-store"):
            headers.update(RequestsTransport.NO_CACHE_HEADERS)

        logger.debug(f"{request.method} {request.url}")
        response: requests.Response = requests.request(
            request.method,
            request.url,
            data=request.body.encode("utf-8"),
            headers=headers,
            timeout=self.timeout,
            allow_redirects=True,
        )
        logger.debug(f"{request.method} {request.url} -> {response.status_code} ({response.url})")
        return RequestsResponse(response)
