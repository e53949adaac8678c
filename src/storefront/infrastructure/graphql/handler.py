"""GraphQL request handling.

``GraphQLHandler.handle()`` is the single fault boundary for a request:
anything that goes wrong before or around execution is turned into an
``{"error": {"message": ...}}`` envelope. Errors raised inside resolvers
are reported by the execution engine in the ``errors`` list instead.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import strawberry

from storefront.infrastructure.graphql.schema import StorefrontContext

logger = logging.getLogger(__name__)


class GraphQLRequestError(Exception):
    """The request payload cannot be executed."""


class GraphQLHandler:

    def __init__(self, schema: strawberry.Schema) -> None:
        self._schema = schema

    def handle(
        self,
        payload: Mapping[str, Any] | str | bytes | None,
        context: StorefrontContext,
    ) -> dict:
        """Execute a ``{query, variables?, operationName?}`` payload.

        *payload* is either an already-decoded mapping (direct call) or the
        raw JSON request body.
        """
        try:
            request = self._decode(payload)
            query = request.get("query")
            if not query:
                raise GraphQLRequestError("No query provided")

            result = self._schema.execute_sync(
                query,
                variable_values=self._variables(request.get("variables")),
                context_value=context,
                operation_name=request.get("operationName"),
            )
        except Exception as exc:
            logger.exception("GraphQL request failed")
            return {"error": {"message": str(exc)}}

        output: dict[str, Any] = {"data": result.data}
        if result.errors:
            output["errors"] = [error.formatted for error in result.errors]
        return output

    # --- Decoding -------------------------------------------------------------

    @staticmethod
    def _decode(payload: Mapping[str, Any] | str | bytes | None) -> Mapping[str, Any]:
        if isinstance(payload, Mapping):
            return payload
        if payload is None or not payload.strip():
            raise GraphQLRequestError("Empty request body")
        try:
            decoded = json.loads(payload)
        except (TypeError, ValueError):
            raise GraphQLRequestError("Invalid JSON in request body") from None
        if not isinstance(decoded, Mapping):
            raise GraphQLRequestError("Invalid JSON in request body")
        return decoded

    @staticmethod
    def _variables(raw: Any) -> dict[str, Any] | None:
        if raw is None or raw == "":
            return None
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except ValueError:
                raise GraphQLRequestError("Invalid JSON in variables") from None
        if not isinstance(raw, Mapping):
            raise GraphQLRequestError("Variables must be a JSON object")
        return dict(raw)
