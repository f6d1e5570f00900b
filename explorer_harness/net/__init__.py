"""Network helpers: port allocation and the GraphQL transport."""

from .graphql_client import GraphQlClient, QueryBody
from .ports import get_available_port

__all__ = ["GraphQlClient", "QueryBody", "get_available_port"]
