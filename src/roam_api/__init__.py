"""roam-api - Python client for the Roam Research backend graph API."""

from roam_api.roam_client import DEFAULT_BASE_URL, RoamBackendClient, RoamGraphConfig, initialize_graph
from roam_api.roam_errors import (
    RoamApiError,
    RoamBadRequestError,
    RoamGraphNotReadyError,
    RoamServerError,
    RoamUnauthorizedError,
)
from roam_api.roam_model import (
    Block,
    BlockLocation,
    BlockRef,
    BlockUpdate,
    CreateBlock,
    CreatePage,
    DeleteBlock,
    DeletePage,
    MoveBlock,
    Page,
    PageRef,
    PageUpdate,
    UpdateBlock,
    UpdatePage,
)
from roam_api.roam_page import RoamPage, fetch_page
from roam_api.roam_query import pull, q
from roam_api.roam_transport import HttpTransport, RequestsTransport, RoamRequest, RoamResponse
from roam_api.roam_write import (
    create_block,
    create_page,
    delete_block,
    delete_page,
    move_block,
    update_block,
    update_page,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "RoamBackendClient",
    "RoamGraphConfig",
    "initialize_graph",
    "RoamApiError",
    "RoamBadRequestError",
    "RoamGraphNotReadyError",
    "RoamServerError",
    "RoamUnauthorizedError",
    "Block",
    "BlockLocation",
    "BlockRef",
    "BlockUpdate",
    "CreateBlock",
    "CreatePage",
    "DeleteBlock",
    "DeletePage",
    "MoveBlock",
    "Page",
    "PageRef",
    "PageUpdate",
    "UpdateBlock",
    "UpdatePage",
    "RoamPage",
    "fetch_page",
    "pull",
    "q",
    "HttpTransport",
    "RequestsTransport",
    "RoamRequest",
    "RoamResponse",
    "create_block",
    "create_page",
    "delete_block",
    "delete_page",
    "move_block",
    "update_block",
    "update_page",
]
