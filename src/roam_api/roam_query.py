"""Read operations against a Roam graph: Datalog queries and entity pulls."""

from typing import Any, TypedDict, cast
import logging

from pydantic import ConfigDict, validate_call

from roam_api.roam_client import RoamBackendClient
from roam_api.roam_transport import RoamResponse

logger = logging.getLogger(__name__)


class _QPayload(TypedDict, total=False):
    """Typed structure for a ``q`` request body; ``args`` is present only when supplied."""

    query: str
    args: list[Any]


class _PullPayload(TypedDict):
    """Typed structure for a ``pull`` request body."""

    eid: str | int
    selector: str


class _ResultResponse(TypedDict, total=False):
    """Typed structure for the JSON body returned by ``q`` and ``pull``."""

    result: Any


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def q(client: RoamBackendClient, query: str, args: list[Any] | None = None) -> Any:
    """Run a Datalog query against the client's graph.

    Args:
        client: The backend client.
        query: Datalog query text, e.g. ``[:find ?uid :where [?b :block/uid ?uid]]``.
        args: Values bound to the query's ``:in`` inputs after ``$``. Omitted from
            the request body when None; an empty list is sent as-is.

    Returns:
        The ``result`` field of the response, typically a list of result tuples.

    Raises:
        ValidationError: If any parameter is None or invalid.
        RoamApiError: If the backend answers with a non-200 status.
    """
    path: str = f"/api/graph/{client.graph}/q"
    body: _QPayload = {"query": query}
    if args is not None:
        body["args"] = args

    response: RoamResponse = client.api(path, "POST", body)
    payload: _ResultResponse = cast(_ResultResponse, response.json())
    logger.debug(f"q result: {payload}")
    return payload.get("result")


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def pull(client: RoamBackendClient, pattern: str, eid: str | int) -> Any:
    """Pull the entity ``eid`` shaped by the selector ``pattern``.

    Args:
        client: The backend client.
        pattern: Pull selector, e.g. ``[:block/uid :node/title {:block/children ...}]``.
        eid: Entity id: a lookup ref such as ``[:block/uid "08-30-2022"]`` or a numeric id.

    Returns:
        The ``result`` field of the response, unmodified.
    """
    path: str = f"/api/graph/{client.graph}/pull"
    body: _PullPayload = {"eid": eid, "selector": pattern}

    response: RoamResponse = client.api(path, "POST", body)
    payload: _ResultResponse = cast(_ResultResponse, response.json())
    logger.debug(f"pull result: {payload}")
    return payload.get("result")
