"""Flask front door for the GraphQL endpoint.

CORS and preflight requests are answered by flask-cors before any
storefront code runs. Every POST gets its own database connection and
repositories.
"""

from __future__ import annotations

import logging
from typing import Callable

from flask import Flask, jsonify, request
from flask_cors import CORS

from storefront.infrastructure import bootstrap
from storefront.infrastructure.config import Settings
from storefront.infrastructure.graphql.handler import GraphQLHandler
from storefront.infrastructure.graphql.schema import schema
from storefront.infrastructure.persistence.database import Database

logger = logging.getLogger(__name__)

ENDPOINT_INFO = {
    "message": "GraphQL endpoint is ready",
    "endpoint": "/graphql",
    "methods": ["POST"],
    "example": {"query": "query { categories { id name } }"},
}


class StorefrontServer:
    """Flask application serving the storefront GraphQL API."""

    def __init__(
        self,
        settings: Settings | None = None,
        connect: Callable[[], Database] | None = None,
    ) -> None:
        """
        Args:
            settings: runtime settings; read from the environment if omitted
            connect: opens a database connection for one request
        """
        self.settings = settings or Settings.from_env()
        self._connect = connect or (lambda: bootstrap.database(self.settings))
        self.handler = GraphQLHandler(schema)
        self.app = Flask(__name__)
        CORS(self.app, origins=self.settings.cors_origins)

        self._setup_routes()

    def _setup_routes(self) -> None:

        @self.app.route("/", methods=["GET", "POST"])
        @self.app.route("/graphql", methods=["GET", "POST"])
        def graphql():
            """GET describes the endpoint; POST executes a GraphQL request."""
            if request.method == "GET":
                return jsonify(ENDPOINT_INFO)

            db = self._connect()
            try:
                output = self.handler.handle(
                    request.get_data(), bootstrap.storefront_context(db)
                )
            finally:
                db.close()
            return jsonify(output)

    def run(self) -> None:
        logger.info(
            "Serving GraphQL on http://%s:%s/graphql", self.settings.host, self.settings.port
        )
        self.app.run(host=self.settings.host, port=self.settings.port)


def create_app(settings: Settings | None = None) -> Flask:
    """Application factory, e.g. for ``flask --app storefront.infrastructure.web.server``."""
    return StorefrontServer(settings).app
