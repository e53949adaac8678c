"""CLI commands for the GraphQL API: one-off queries and the HTTP server."""

from __future__ import annotations

import dataclasses
import json
import sys

import click

from storefront.infrastructure import bootstrap
from storefront.infrastructure.config import Settings
from storefront.infrastructure.graphql.handler import GraphQLHandler
from storefront.infrastructure.graphql.schema import schema
from storefront.infrastructure.web.server import StorefrontServer


@click.command("query")
@click.argument("query_text", metavar="QUERY")
@click.option("--variables", default=None, help="Variables as a JSON object.")
def query(query_text: str, variables: str | None) -> None:
    """Execute a GraphQL QUERY against the local database."""
    payload = {"query": query_text, "variables": variables}
    with bootstrap.session() as db:
        output = GraphQLHandler(schema).handle(payload, bootstrap.storefront_context(db))

    click.echo(json.dumps(output, indent=2))
    if "error" in output or "errors" in output:
        sys.exit(1)


@click.command("serve")
@click.option("--host", default=None, help="Bind address (default from STOREFRONT_HOST).")
@click.option("--port", default=None, type=int, help="Port (default from STOREFRONT_PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Serve the GraphQL endpoint over HTTP."""
    settings = Settings.from_env()
    overrides = {k: v for k, v in (("host", host), ("port", port)) if v is not None}
    StorefrontServer(dataclasses.replace(settings, **overrides)).run()
