"""GraphQL endpoint."""

from strawberry.fastapi import GraphQLRouter

from rally.interface.graphql.context import get_graphql_context
from rally.interface.graphql.schema import schema


def create_graphql_router() -> GraphQLRouter:
    """Create the ``/graphql`` router.

    The router relies on the dishka middleware installed by ``setup_di`` for
    ``request.state.dishka_container``.
    """
    return GraphQLRouter(
        schema,
        path="/graphql",
        context_getter=get_graphql_context,
        graphql_ide="graphiql",
    )
