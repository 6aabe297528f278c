#!/usr/bin/env python3
"""Command-line access to a Roam Research graph through the backend API.

Example:
    roam-api -g my-graph -t roam-graph-token q '[:find ?t :where [?p :node/title ?t]]'
    roam-api create-block --parent-uid 01-02-2023 --order last --string "hello"
"""

import json
import logging
from typing import Any, Callable, TypeVar

import requests
import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from roam_api.roam_client import RoamBackendClient, initialize_graph
from roam_api.roam_page import fetch_page
from roam_api.roam_query import pull, q
from roam_api.roam_write import (
    create_block,
    create_page,
    delete_block,
    delete_page,
    move_block,
    update_block,
    update_page,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)8s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True)

T = TypeVar("T")


def _client(ctx: typer.Context) -> RoamBackendClient:
    """Build the client from the global options stored on ``ctx``."""
    options: dict[str, str | None] = ctx.obj
    if not options["graph"]:
        raise typer.BadParameter("Missing graph name.", param_hint="'--graph' / ROAM_GRAPH_NAME")
    if not options["token"]:
        raise typer.BadParameter("Missing API token.", param_hint="'--token' / ROAM_API_TOKEN")
    try:
        return initialize_graph({"token": options["token"], "graph": options["graph"]})
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)


def _run(ctx: typer.Context, operation: Callable[[RoamBackendClient], T]) -> T:
    """Run ``operation`` with a client built from ``ctx``, exiting 1 on any API failure."""
    client: RoamBackendClient = _client(ctx)
    try:
        return operation(client)
    except (requests.exceptions.RequestException, ValidationError, ValueError) as e:
        logger.error(f"Error: {e}")
        raise typer.Exit(code=1)


def _echo_json(value: Any) -> None:
    typer.echo(json.dumps(value, indent=2, ensure_ascii=False))


@app.callback()
def main(
    ctx: typer.Context,
    graph_name: Annotated[
        str | None,
        typer.Option(
            "--graph",
            "-g",
            envvar="ROAM_GRAPH_NAME",
            help="Name of the Roam graph",
        ),
    ] = None,
    api_token: Annotated[
        str | None,
        typer.Option(
            "--token",
            "-t",
            envvar="ROAM_API_TOKEN",
            help="Roam API token for the graph",
        ),
    ] = None,
) -> None:
    """Query and edit a Roam Research graph through the backend API."""
    # Credentials are checked when a command runs, in _client.
    ctx.obj = {"graph": graph_name, "token": api_token}


@app.command("q")
def q_command(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Datalog query text")],
    args: Annotated[
        list[str] | None,
        typer.Option("--arg", "-a", help="Value bound to the next :in input; repeatable"),
    ] = None,
) -> None:
    """Run a Datalog query and print its result as JSON."""
    _echo_json(_run(ctx, lambda client: q(client, query, args or None)))


@app.command("pull")
def pull_command(
    ctx: typer.Context,
    pattern: Annotated[str, typer.Argument(help="Pull selector pattern")],
    eid: Annotated[str, typer.Argument(help='Entity id, e.g. [:block/uid "08-30-2022"]')],
) -> None:
    """Pull an entity and print it as JSON."""
    _echo_json(_run(ctx, lambda client: pull(client, pattern, eid)))


@app.command("page")
def page_command(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Exact page title")],
) -> None:
    """Print the pulled page with the given title as JSON."""
    page = _run(ctx, lambda client: fetch_page(client, title))
    if page is None:
        logger.error(f"Page not found: {title!r}")
        raise typer.Exit(code=1)
    _echo_json(page.pull_block)


def _parse_order(order: str) -> int | str:
    return int(order) if order.lstrip("-").isdigit() else order


@app.command("create-block")
def create_block_command(
    ctx: typer.Context,
    parent_uid: Annotated[str, typer.Option("--parent-uid", help="Uid of the parent block or page")],
    string: Annotated[str, typer.Option("--string", "-s", help="Block text")],
    order: Annotated[str, typer.Option("--order", help="Zero-based index, 'first' or 'last'")] = "last",
    uid: Annotated[str | None, typer.Option("--uid", help="Uid for the new block")] = None,
) -> None:
    """Create a block."""
    body: dict[str, Any] = {
        "location": {"parent-uid": parent_uid, "order": _parse_order(order)},
        "block": {"string": string, "uid": uid},
    }
    _echo_json(_run(ctx, lambda client: create_block(client, body)))


@app.command("move-block")
def move_block_command(
    ctx: typer.Context,
    uid: Annotated[str, typer.Option("--uid", help="Uid of the block to move")],
    parent_uid: Annotated[str, typer.Option("--parent-uid", help="Uid of the new parent")],
    order: Annotated[str, typer.Option("--order", help="Zero-based index, 'first' or 'last'")] = "last",
) -> None:
    """Move a block under a new parent."""
    body: dict[str, Any] = {
        "location": {"parent-uid": parent_uid, "order": _parse_order(order)},
        "block": {"uid": uid},
    }
    _echo_json(_run(ctx, lambda client: move_block(client, body)))


@app.command("update-block")
def update_block_command(
    ctx: typer.Context,
    uid: Annotated[str, typer.Option("--uid", help="Uid of the block to update")],
    string: Annotated[str | None, typer.Option("--string", "-s", help="New block text")] = None,
    heading: Annotated[int | None, typer.Option("--heading", help="Heading level 0-3")] = None,
) -> None:
    """Update a block's text or heading level."""
    body: dict[str, Any] = {"block": {"uid": uid, "string": string, "heading": heading}}
    _echo_json(_run(ctx, lambda client: update_block(client, body)))


@app.command("delete-block")
def delete_block_command(
    ctx: typer.Context,
    uid: Annotated[str, typer.Option("--uid", help="Uid of the block to delete")],
) -> None:
    """Delete a block and its children."""
    _echo_json(_run(ctx, lambda client: delete_block(client, {"block": {"uid": uid}})))


@app.command("create-page")
def create_page_command(
    ctx: typer.Context,
    title: Annotated[str, typer.Option("--title", help="Title of the new page")],
    uid: Annotated[str | None, typer.Option("--uid", help="Uid for the new page")] = None,
) -> None:
    """Create a page."""
    _echo_json(_run(ctx, lambda client: create_page(client, {"page": {"title": title, "uid": uid}})))


@app.command("update-page")
def update_page_command(
    ctx: typer.Context,
    uid: Annotated[str, typer.Option("--uid", help="Uid of the page to update")],
    title: Annotated[str, typer.Option("--title", help="New page title")],
) -> None:
    """Rename a page."""
    _echo_json(_run(ctx, lambda client: update_page(client, {"page": {"uid": uid, "title": title}})))


@app.command("delete-page")
def delete_page_command(
    ctx: typer.Context,
    uid: Annotated[str, typer.Option("--uid", help="Uid of the page to delete")],
) -> None:
    """Delete a page and all of its blocks."""
    _echo_json(_run(ctx, lambda client: delete_page(client, {"page": {"uid": uid}})))


if __name__ == "__main__":
    app()
