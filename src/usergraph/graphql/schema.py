"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..logging import get_logger
from ..store import UserProvider
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


class SchemaValidationError(Exception):
    """Raised when the GraphQL schema fails validation at startup."""


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Runs graphql-core's structural validation and a full introspection query so
    that unresolved types fail the process before it starts serving.

    Raises:
        SchemaValidationError: If the schema is invalid or introspection fails
    """
    graphql_schema = schema._schema

    errors = gql_validate_schema(graphql_schema)
    if errors:
        message = "; ".join(str(e) for e in errors)
        logger.error("GraphQL schema validation failed", error=message)
        raise SchemaValidationError(f"GraphQL schema validation failed: {message}")

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        message = "; ".join(str(e) for e in result.errors)
        logger.error("GraphQL introspection failed", error=message)
        raise SchemaValidationError(f"GraphQL introspection failed: {message}")

    logger.info("GraphQL schema validation successful")


def print_schema() -> str:
    """Return the schema in SDL form."""
    return schema.as_str()


def create_graphql_router(
    users: UserProvider,
    path: str = "/graphql",
    graphiql: bool = False,
) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI.

    Args:
        users: Provider exposed to resolvers as ``info.context["users"]``
        path: Mount path of the operation endpoint
        graphiql: Serve the GraphiQL IDE on GET requests that accept HTML
    """

    async def get_context(request: Request) -> dict[str, Any]:
        return {
            "request": request,
            "users": users,
        }

    return GraphQLRouter(
        schema,
        path=path,
        graphql_ide="graphiql" if graphiql else None,
        context_getter=get_context,
    )
