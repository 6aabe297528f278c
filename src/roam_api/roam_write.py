"""Write operations against a Roam graph.

Every mutation posts to the graph's ``write`` route. The body is built fresh from
the validated payload model with the ``action`` discriminator stamped last, so a
caller-supplied ``action`` never reaches the backend and the caller's object is
never modified.
"""

from typing import Any
import logging

from pydantic import ConfigDict, validate_call

from roam_api.roam_client import RoamBackendClient
from roam_api.roam_model import (
    CreateBlock,
    CreatePage,
    DeleteBlock,
    DeletePage,
    MoveBlock,
    RoamPayload,
    UpdateBlock,
    UpdatePage,
    WriteAction,
)
from roam_api.roam_transport import RoamResponse

logger = logging.getLogger(__name__)


def _write(client: RoamBackendClient, action: WriteAction, payload: RoamPayload) -> bool:
    path: str = f"/api/graph/{client.graph}/write"
    body: dict[str, Any] = {**payload.to_wire(), "action": action}

    response: RoamResponse = client.api(path, "POST", body)
    logger.info(f"{action} succeeded on graph {client.graph!r}")
    return response.ok


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def create_block(client: RoamBackendClient, body: CreateBlock) -> bool:
    """Create a block at ``body.location``.

    Args:
        client: The backend client.
        body: A ``CreateBlock`` or a dict such as
            ``{"location": {"parent-uid": "01-02-2023", "order": "last"}, "block": {"string": "hello"}}``.

    Returns:
        True once the backend accepted the write.

    Raises:
        ValidationError: If ``body`` does not match ``CreateBlock``.
        RoamApiError: If the backend answers with a non-200 status.
    """
    return _write(client, "create-block", body)


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def move_block(client: RoamBackendClient, body: MoveBlock) -> bool:
    """Move the block ``body.block.uid`` to ``body.location``."""
    return _write(client, "move-block", body)


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def update_block(client: RoamBackendClient, body: UpdateBlock) -> bool:
    """Update the fields set in ``body.block`` on the block with that uid."""
    return _write(client, "update-block", body)


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def delete_block(client: RoamBackendClient, body: DeleteBlock) -> bool:
    """Delete a block and its children."""
    return _write(client, "delete-block", body)


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def create_page(client: RoamBackendClient, body: CreatePage) -> bool:
    """Create a page titled ``body.page.title``."""
    return _write(client, "create-page", body)


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def update_page(client: RoamBackendClient, body: UpdatePage) -> bool:
    return _write(client, "update-page", body)


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def delete_page(client: RoamBackendClient, body: DeletePage) -> bool:
    return _write(client, "delete-page", body)
