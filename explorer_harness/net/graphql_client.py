"""
explorer_harness/net/graphql_client.py
GraphQL transport for the explorer.

Every query the harness sends goes through GraphQlClient.run(): one POST of
{"query", "operationName", "variables"} to the explorer's query endpoint.
Decoding is left to the caller; this module only moves bytes and optionally
logs them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from explorer_harness.errors import GraphQlClientError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryBody:
    """A named query document plus its variables."""

    query: str
    operation_name: str
    variables: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "operationName": self.operation_name,
            "variables": self.variables,
        }


class GraphQlClient:
    """
    Synchronous GraphQL client bound to one explorer address.

    The address is fixed at construction. `print_log` only controls whether
    requests and responses are echoed to the logger.
    """

    def __init__(
        self,
        address: str,
        graphql_path: str = "/explorer/graphql",
        timeout: float = 30.0,
        print_log: bool = True,
        underlying_client: Optional[httpx.Client] = None,
    ):
        self._address = address
        self._graphql_path = graphql_path
        self._timeout = timeout
        self.print_log = print_log
        self._owns_client = underlying_client is None
        self.client = underlying_client or httpx.Client(timeout=timeout, trust_env=False)

    @property
    def address(self) -> str:
        return self._address

    def base_url(self) -> str:
        return f"http://{self._address}{self._graphql_path}"

    def root_url(self) -> str:
        return f"http://{self._address}/"

    def enable_print(self) -> None:
        self.print_log = True

    def disable_print(self) -> None:
        self.print_log = False

    def set_verbose(self, on: bool) -> None:
        self.print_log = on

    def run(self, query: QueryBody) -> httpx.Response:
        """
        Send one query and return the raw response.

        Raises:
            GraphQlClientError: on any httpx transport/request failure.
        """
        uri = self.base_url()
        payload = query.to_payload()

        if self.print_log:
            logger.info(f"Request: {json.dumps(payload)} -> {uri}")

        try:
            response = self.client.post(uri, json=payload)
        except httpx.HTTPError as e:
            raise GraphQlClientError(uri, e) from e

        if self.print_log:
            logger.info(f"Response: {response.status_code} {response.text}")

        return response

    def clone(self) -> "GraphQlClient":
        """Same address, current verbose flag. Injected transports are shared."""
        return GraphQlClient(
            self._address,
            graphql_path=self._graphql_path,
            timeout=self._timeout,
            print_log=self.print_log,
            underlying_client=None if self._owns_client else self.client,
        )

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
