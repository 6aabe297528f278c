"""Tests for the roam_write module."""

import logging
from typing import Any, Callable

import pytest
from pydantic import ValidationError

from roam_api.roam_client import RoamBackendClient
from roam_api.roam_errors import RoamBadRequestError
from roam_api.roam_model import BlockLocation, Block, CreateBlock
from roam_api.roam_write import (
    create_block,
    create_page,
    delete_block,
    delete_page,
    move_block,
    update_block,
    update_page,
)

from conftest import FakeTransport

logger = logging.getLogger(__name__)

WRITE_URL = "https://api.roamresearch.com/api/graph/test-graph/write"
LOCATION: dict[str, Any] = {"parent-uid": "01-02-2023", "order": "last"}


class TestCreateBlock:
    """Tests for create_block."""

    def test_body_and_route(self, client: RoamBackendClient, transport: FakeTransport) -> None:
        """Test that the block is posted to the write route with its action."""
        transport.respond(payload={})

        assert create_block(client, {"location": LOCATION, "block": {"string": "coucou"}}) is True

        assert transport.last_request.url == WRITE_URL
        assert transport.last_body == {
            "action": "create-block",
            "location": {"parent-uid": "01-02-2023", "order": "last"},
            "block": {"string": "coucou"},
        }

    def test_caller_action_is_overwritten(self, client: RoamBackendClient, transport: FakeTransport) -> None:
        """Test that a caller-supplied action cannot change the mutation performed."""
        transport.respond(payload={})
        body: dict[str, Any] = {"action": "delete-block", "location": LOCATION, "block": {"string": "x"}}

        create_block(client, body)

        assert transport.last_body["action"] == "create-block"
        assert body["action"] == "delete-block"

    def test_accepts_model(self, client: RoamBackendClient, transport: FakeTransport) -> None:
        """Test that a CreateBlock model built with Python field names is serialized by alias."""
        transport.respond(payload={})
        body = CreateBlock(
            location=BlockLocation(parent_uid="abc123xyz", order=0),
            block=Block(string="Heading", heading=2, text_align="center", children_view_type="numbered"),
        )

        create_block(client, body)

        assert transport.last_body == {
            "action": "create-block",
            "location": {"parent-uid": "abc123xyz", "order": 0},
            "block": {"string": "Heading", "heading": 2, "text-align": "center", "children-view-type": "numbered"},
        }

    def test_unknown_block_fields_pass_through(self, client: RoamBackendClient, transport: FakeTransport) -> None:
        """Test that block attributes not modelled here still reach the backend."""
        transport.respond(payload={})

        create_block(client, {"location": LOCATION, "block": {"string": "x", "block-view-type": "side"}})

        assert transport.last_body["block"] == {"string": "x", "block-view-type": "side"}

    def test_missing_location_raises_validation_error(
        self, client: RoamBackendClient, transport: FakeTransport
    ) -> None:
        """Test that an invalid body is rejected before any request."""
        with pytest.raises(ValidationError):
            create_block(client, {"block": {"string": "x"}})

        assert transport.requests == []

    def test_loosely_typed_values_rejected(self, client: RoamBackendClient, transport: FakeTransport) -> None:
        """Test that values of the wrong type are rejected rather than silently converted."""
        body: dict[str, Any] = {
            "location": {"parent-uid": "01-02-2023", "order": "3"},
            "block": {"string": "x", "open": "yes"},
        }

        with pytest.raises(ValidationError):
            create_block(client, body)

        assert transport.requests == []

    def test_error_status_raises_instead_of_returning(
        self, client: RoamBackendClient, transport: FakeTransport
    ) -> None:
        """Test that a failed write raises rather than returning False."""
        transport.respond(status_code=400, payload={"message": "Parent entity doesn't exist"})

        with pytest.raises(RoamBadRequestError, match="Error: Parent entity doesn't exist"):
            create_block(client, {"location": LOCATION, "block": {"string": "x"}})


WriteCase = tuple[Callable[..., bool], dict[str, Any], dict[str, Any]]

WRITE_CASES: list[WriteCase] = [
    (
        move_block,
        {"location": {"parent-uid": "parent001", "order": 3}, "block": {"uid": "block0001"}},
        {"action": "move-block", "location": {"parent-uid": "parent001", "order": 3}, "block": {"uid": "block0001"}},
    ),
    (
        update_block,
        {"block": {"uid": "block0001", "string": "edited", "open": False}},
        {"action": "update-block", "block": {"uid": "block0001", "string": "edited", "open": False}},
    ),
    (
        delete_block,
        {"block": {"uid": "block0001"}},
        {"action": "delete-block", "block": {"uid": "block0001"}},
    ),
    (
        create_page,
        {"page": {"title": "List of books I want to read", "children-view-type": "numbered"}},
        {"action": "create-page", "page": {"title": "List of books I want to read", "children-view-type": "numbered"}},
    ),
    (
        update_page,
        {"page": {"uid": "page00001", "title": "Books"}},
        {"action": "update-page", "page": {"uid": "page00001", "title": "Books"}},
    ),
    (
        delete_page,
        {"page": {"uid": "page00001"}},
        {"action": "delete-page", "page": {"uid": "page00001"}},
    ),
]


class TestWriteActions:
    """Tests shared by the remaining write wrappers."""

    @pytest.mark.parametrize("operation, body, expected", WRITE_CASES)
    def test_action_stamped_and_posted(
        self,
        client: RoamBackendClient,
        transport: FakeTransport,
        operation: Callable[..., bool],
        body: dict[str, Any],
        expected: dict[str, Any],
    ) -> None:
        """Test that each wrapper posts its own action to the write route and returns True."""
        transport.respond(payload={})

        assert operation(client, body) is True

        assert transport.last_request.url == WRITE_URL
        assert transport.last_body == expected

    @pytest.mark.parametrize("operation, body, expected", WRITE_CASES)
    def test_spoofed_action_ignored(
        self,
        client: RoamBackendClient,
        transport: FakeTransport,
        operation: Callable[..., bool],
        body: dict[str, Any],
        expected: dict[str, Any],
    ) -> None:
        """Test that each wrapper overwrites a caller-supplied action."""
        transport.respond(payload={})

        operation(client, {**body, "action": "delete-page"})

        assert transport.last_body["action"] == expected["action"]

    def test_update_block_requires_uid(self, client: RoamBackendClient) -> None:
        """Test that update_block rejects a block without uid."""
        with pytest.raises(ValidationError):
            update_block(client, {"block": {"string": "no uid"}})

    def test_delete_page_requires_uid(self, client: RoamBackendClient) -> None:
        """Test that delete_page rejects an empty uid."""
        with pytest.raises(ValidationError):
            delete_page(client, {"page": {"uid": ""}})
