"""Roam Research page lookup by title via the backend ``q`` route."""

from typing import Any, Final, cast
import logging

from pydantic import BaseModel, ConfigDict, Field, validate_call

from roam_api.roam_client import RoamBackendClient
from roam_api.roam_query import q

logger = logging.getLogger(__name__)

PAGE_BY_TITLE_QUERY: Final[str] = "[:find (pull ?page [*]) :in $ ?title :where [?page :node/title ?title]]"
"""Pulls every attribute of the page whose ``:node/title`` is bound to ``?title``."""


class RoamPage(BaseModel):
    """Immutable representation of a Roam Research page fetched from the backend.

    Contains the page title, its stable UID, and the full raw PullBlock tree returned
    by the Roam graph query. The pull_block is the nested dict exactly as returned by
    ``(pull ?page [*])``; nested refs such as ``:block/children`` are ``{":db/id": n}``
    stubs.

    Once created, instances cannot be modified (frozen). All fields are required
    and validated at construction time.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="The page title as queried")
    uid: str = Field(..., min_length=1, description="The page's :block/uid (9-character stable identifier)")
    pull_block: dict[str, Any] = Field(..., description="Full raw PullBlock tree from (pull ?page [*])")


def roam_page_from_result(result: list[list[dict[str, Any]]] | None, title: str) -> RoamPage | None:
    """Build a RoamPage from the ``result`` of a page-by-title query.

    Args:
        result: The ``result`` field of the ``q`` response.
        title: The page title that was queried (carried through to populate RoamPage.title).

    Returns:
        A RoamPage instance if the page was found, or None if the result set is empty.

    Raises:
        KeyError: If the pulled entity has no ``:block/uid``.
    """
    if not result:
        logger.info(f"No page found with title: {title!r}")
        return None

    # Datalog :find returns an array-of-arrays; (pull ...) value is at result[0][0]
    pull_block: dict[str, Any] = result[0][0]
    uid: str = cast(str, pull_block[":block/uid"])

    logger.info(f"Successfully fetched page: {title!r} (uid={uid})")
    return RoamPage(title=title, uid=uid, pull_block=pull_block)


@validate_call(config=ConfigDict(arbitrary_types_allowed=True))
def fetch_page(client: RoamBackendClient, title: str) -> RoamPage | None:
    """Fetch a Roam page by its exact title.

    Args:
        client: The backend client.
        title: The exact title of the Roam page to fetch.

    Returns:
        A RoamPage containing the page's uid and full PullBlock tree, or None if no
        page with that title exists in the graph.

    Raises:
        ValidationError: If any parameter is None or invalid.
        RoamApiError: If the backend answers with a non-200 status.
    """
    logger.debug(f"graph: {client.graph!r}, title: {title!r}")
    result: Any = q(client, PAGE_BY_TITLE_QUERY, [title])
    return roam_page_from_result(result, title)
