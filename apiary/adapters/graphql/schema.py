"""
GraphQL schema for the Apiary Statistics Service.
Defines the complete GraphQL schema using Strawberry.
"""

import strawberry
from strawberry.fastapi import GraphQLRouter

from ...core.ports.hive_service import HiveService
from ...core.ports.note_service import NoteService
from .resolvers import create_graphql_query


def create_graphql_schema(hive_service: HiveService, note_service: NoteService) -> strawberry.Schema:
    """
    Create the complete GraphQL schema with dependency injection.

    Args:
        hive_service: Implementation of the HiveService port
        note_service: Implementation of the NoteService port

    Returns:
        Strawberry GraphQL schema
    """
    query = create_graphql_query(hive_service, note_service)
    return strawberry.Schema(query=query)


def create_graphql_router(
    hive_service: HiveService,
    note_service: NoteService,
    playground_enabled: bool = False
) -> GraphQLRouter:
    """
    Create GraphQL router with FastAPI integration and playground support.

    Args:
        hive_service: Implementation of the HiveService port
        note_service: Implementation of the NoteService port
        playground_enabled: Whether to enable GraphiQL

    Returns:
        GraphQL router for FastAPI integration
    """
    schema = create_graphql_schema(hive_service, note_service)
    return GraphQLRouter(schema, graphiql=playground_enabled)
