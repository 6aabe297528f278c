"""Authenticated client for the Roam Research backend graph API."""

from typing import Any, Final, final
import json
import logging
import re

from pydantic import BaseModel, ConfigDict, Field, SecretStr, validate_call

from roam_api.roam_errors import (
    RoamApiError,
    RoamBadRequestError,
    RoamGraphNotReadyError,
    RoamServerError,
    RoamUnauthorizedError,
)
from roam_api.roam_transport import HttpTransport, RequestsTransport, RoamRequest, RoamResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL: Final[str] = "https://api.roamresearch.com"

PEER_URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"(https://peer-\d+.*?:\d+)/.*")
"""Matches the final URL of a redirect to a backend peer; group 1 is ``scheme://host:port``."""

UNAUTHORIZED_MESSAGE: Final[str] = "Invalid token or token doesn't have enough privileges."
GRAPH_NOT_READY_MESSAGE: Final[str] = (
    "HTTP Status: 503. Your graph is not ready yet for a request, please retry in a few seconds."
)


@final
class RoamBackendClient:
    """Sends authenticated requests to one Roam graph and classifies the responses.

    The backend may redirect a request to a peer host
    (``https://peer-<n>.api.roamresearch.com:<port>``). When that happens the
    peer's base URL is remembered and used for every later request made by this
    instance. The peer is written without locking; with concurrent calls on one
    instance the last observed redirect wins.

    Attributes:
        graph: Name of the graph every request is scoped to.
    """

    def __init__(
        self,
        token: str,
        graph: str,
        transport: HttpTransport,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._token: str = token
        self._graph: str = graph
        self._transport: HttpTransport = transport
        self._base_url: str = base_url.rstrip("/")
        self._peer: str | None = None

    @property
    def graph(self) -> str:
        return self._graph

    @property
    def peer(self) -> str | None:
        """Base URL of the discovered peer, or None before any peer redirect."""
        return self._peer

    @property
    def base_url(self) -> str:
        """Base URL the next request will be sent to."""
        return self._peer if self._peer is not None else self._base_url

    def __repr__(self) -> str:
        return f"RoamBackendClient(graph={self._graph!r}, base_url={self.base_url!r})"

    def build_request(self, path: str, method: str = "POST", body: Any = None) -> RoamRequest:
        """Build the request for ``path`` without sending it.

        ``path`` and ``body`` are not validated; that is the caller's job.
        """
        bearer: str = f"Bearer {self._token}"
        headers: dict[str, str] = {
            "Content-Type": "application/json; charset=utf-8",
            "Authorization": bearer,
            # Some proxies strip or rename Authorization.
            "x-authorization": bearer,
        }
        return RoamRequest(
            url=self.base_url + path,
            method=method,
            headers=headers,
            body=json.dumps(body, ensure_ascii=False),
            mode="cors",
            cache="no-cache",
        )

    def api(self, path: str, method: str, body: Any) -> RoamResponse:
        """Send one request and return the response if its status is 200.

        Args:
            path: Route below the base URL, e.g. ``/api/graph/<graph>/q``.
            method: HTTP method.
            body: JSON-serializable request body.

        Returns:
            The transport's response, undecoded.

        Raises:
            RoamBadRequestError: On HTTP 400.
            RoamServerError: On HTTP 500.
            RoamUnauthorizedError: On HTTP 401.
            RoamGraphNotReadyError: On HTTP 503.
            RoamApiError: On any other non-200 status.
            requests.exceptions.RequestException: Transport failures, unwrapped.
            ValueError: If a 400/500 error body is not valid JSON.
        """
        request: RoamRequest = self.build_request(path, method, body)
        logger.debug(f"request: {request}")

        response: RoamResponse = self._transport.call(request)

        if response.redirected:
            self._remember_peer(response.url)

        status: int = response.status_code
        if status == 200:
            return response

        error: RoamApiError
        if status in (400, 500):
            error_cls = RoamBadRequestError if status == 400 else RoamServerError
            error = error_cls(f"Error: {self._error_detail(response)}", status, response)
        elif status == 401:
            error = RoamUnauthorizedError(UNAUTHORIZED_MESSAGE, status, response)
        elif status == 503:
            error = RoamGraphNotReadyError(GRAPH_NOT_READY_MESSAGE, status, response)
        else:
            error = RoamApiError(response.reason, status, response)

        logger.error(f"{method} {path} failed. Status Code: {status}, Error: {error}")
        raise error

    def _remember_peer(self, final_url: str) -> None:
        match: re.Match[str] | None = PEER_URL_PATTERN.search(final_url)
        if match is None:
            logger.debug(f"redirected to non-peer url: {final_url}")
            return
        self._peer = match.group(1)
        logger.info(f"Using backend peer: {self._peer}")

    @staticmethod
    def _error_detail(response: RoamResponse) -> str:
        # Decode failures propagate; only a missing message falls back.
        payload: Any = response.json()
        message: Any = payload.get("message") if isinstance(payload, dict) else None
        if message is None:
            return f"HTTP {response.status_code}"
        return str(message)


class RoamGraphConfig(BaseModel):
    """Immutable settings for connecting to one Roam graph.

    Attributes:
        token: Roam API token for the graph. Hidden from repr.
        graph: Graph name.
        transport: Transport to use; ``RequestsTransport`` when omitted.
        base_url: Backend base URL.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    token: SecretStr = Field(..., description="Roam API token")
    graph: str = Field(..., min_length=1, description="Name of the Roam graph")
    transport: HttpTransport | None = Field(default=None, description="Transport; defaults to RequestsTransport")
    base_url: str = Field(default=DEFAULT_BASE_URL, pattern=r"^https?://", description="Backend base URL")


@validate_call
def initialize_graph(config: RoamGraphConfig) -> RoamBackendClient:
    """Create a client for the graph described by ``config``.

    ``config`` may also be a plain dict with the same keys. No request is sent.

    Raises:
        ValidationError: If the token or graph is missing, or the transport is
            not an ``HttpTransport``.
    """
    transport: HttpTransport = config.transport if config.transport is not None else RequestsTransport()
    logger.debug(f"initializing client for graph {config.graph!r} at {config.base_url}")
    return RoamBackendClient(
        config.token.get_secret_value(),
        config.graph,
        transport,
        base_url=config.base_url,
    )
