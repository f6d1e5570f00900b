"""
explorer_harness/explorer.py
Public facade over a running explorer.

An Explorer couples three things: the GraphQL client bound to the explorer's
address, a reference to the shared process handle, and the query catalog.
Every query method follows the same path:

    build request -> log it -> run it -> decode envelope -> log it -> return

Clones share the process. The process is killed when the last clone is
closed, whichever one that is.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Type

import httpx
from pydantic import ValidationError

from explorer_harness import process as supervisor
from explorer_harness.bootstrap import wait_ready
from explorer_harness.config import ExplorerConfig, get_config
from explorer_harness.errors import (
    ErrorCode,
    ExplorerClientError,
    ExplorerSerializationError,
    ExplorerTransportError,
    GraphQlClientError,
    ProcessClosedError,
    classify_transport_error,
)
from explorer_harness.net.graphql_client import GraphQlClient, QueryBody
from explorer_harness.net.ports import get_available_port
from explorer_harness.process import ProcessHandle
from explorer_harness.queries.catalog import DEFAULT_CATALOG, QueryCatalog
from explorer_harness.queries.models import (
    AddressData,
    AllBlocksData,
    AllStakePoolsData,
    AllVotePlansData,
    BlocksByChainLengthData,
    EpochData,
    QueryResponse,
    SettingsData,
    StakePoolData,
    TransactionByIdData,
)
from explorer_harness.wrappers import BlockDate, LastBlockResponse

logger = logging.getLogger(__name__)


class Explorer:
    def __init__(
        self,
        client: GraphQlClient,
        process: ProcessHandle,
        print_log: bool = True,
        catalog: QueryCatalog = DEFAULT_CATALOG,
    ):
        self.client = client
        self.print_log = print_log
        self._process = process
        self._catalog = catalog
        self._released = False

    @classmethod
    def launch(
        cls,
        node_address: str,
        logs_dir: Optional[Path] = None,
        config: Optional[ExplorerConfig] = None,
        catalog: QueryCatalog = DEFAULT_CATALOG,
    ) -> "Explorer":
        """
        Spawn an explorer observing `node_address` and wait for it to answer.

        `logs_dir` overrides the configured diagnostics directory. A binary
        that cannot be started raises ExplorerLaunchError straight through.
        """
        cfg = config or get_config()
        if logs_dir is None:
            logs_dir = cfg.logs_dir

        listen_address = f"{cfg.host}:{get_available_port(cfg.host)}"
        handle = supervisor.launch(cfg.binary, node_address, listen_address, logs_dir)

        client = GraphQlClient(
            listen_address,
            graphql_path=cfg.graphql_path,
            timeout=cfg.request_timeout,
            print_log=cfg.print_log,
        )

        try:
            wait_ready(
                client.root_url(),
                cfg.bootstrap.interval,
                cfg.bootstrap.max_attempts,
                strict=cfg.bootstrap.strict,
            )
        except BaseException:
            # Not-ready in strict mode, or an interrupt while waiting.
            client.close()
            handle.release(failed=True)
            raise

        return cls(client, handle, print_log=cfg.print_log, catalog=catalog)

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------

    @property
    def process(self) -> ProcessHandle:
        return self._process

    @property
    def closed(self) -> bool:
        return self._released

    def clone(self) -> "Explorer":
        """Another facade on the same process; the verbose flag is copied, not shared."""
        if self._released:
            raise ProcessClosedError("cannot clone an explorer that was already closed")
        return Explorer(
            self.client.clone(),
            self._process.acquire(),
            print_log=self.print_log,
            catalog=self._catalog,
        )

    def close(self, failed: bool = False) -> bool:
        """
        Release this facade's reference to the process.

        Returns True when this call was the last reference and tore the
        process down. Closing the same facade twice is a no-op.
        """
        if self._released:
            return False
        self._released = True
        self.client.close()
        return self._process.release(failed)

    def __enter__(self) -> "Explorer":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close(failed=exc_type is not None)
        return False

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def uri(self) -> str:
        return self.client.base_url()

    def disable_logs(self) -> None:
        self.print_log = False
        self.client.disable_print()

    def enable_logs(self) -> None:
        self.print_log = True
        self.client.enable_print()

    def print_request(self, query: QueryBody) -> None:
        if not self.print_log:
            return
        logger.info(f"running query: {query.operation_name}, against: {self.uri()}")

    def _print_log(self, response: Any) -> None:
        if self.print_log:
            logger.info(f"Response: {response!r}")

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def query(self, kind_name: str, **variables: Any) -> QueryResponse:
        """Run the catalog entry `kind_name` with `variables` and decode it."""
        kind = self._catalog.get(kind_name)
        query = kind.build(**variables)
        self.print_request(query)
        response = self._execute(query)
        response_body = self._decode(response, kind.response_model)
        self._print_log(response_body)
        return response_body

    def run(self, query: QueryBody) -> httpx.Response:
        """Run an arbitrary query body and return the undecoded response."""
        self.print_request(query)
        response = self._execute(query)
        self._print_log(response)
        return response

    def _execute(self, query: QueryBody) -> httpx.Response:
        try:
            return self.client.run(query)
        except GraphQlClientError as e:
            raise ExplorerClientError(
                classify_transport_error(e),
                "graph client error",
                details={"uri": e.uri, "operation": query.operation_name, "cause": str(e.error)},
            ) from e

    @staticmethod
    def _decode(response: httpx.Response, model: Type[QueryResponse]) -> QueryResponse:
        try:
            # No-op for bodies the client already read; streamed bodies are read here.
            response.read()
            payload = response.json()
        except httpx.HTTPError as e:
            raise ExplorerTransportError(
                classify_transport_error(e),
                "request error",
                details={"cause": str(e)},
            ) from e
        except ValueError as e:
            raise ExplorerSerializationError(
                ErrorCode.SERIAL_JSON_PARSE_ERROR,
                "json serialization error",
                details={"status_code": response.status_code, "cause": str(e)},
            ) from e

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise ExplorerSerializationError(
                ErrorCode.SERIAL_SHAPE_MISMATCH,
                "json serialization error",
                details={"status_code": response.status_code, "cause": str(e)},
            ) from e

    # ------------------------------------------------------------------
    # Query kinds
    # ------------------------------------------------------------------

    def address(self, bech32_address: str) -> QueryResponse[AddressData]:
        return self.query("address", bech32=bech32_address)

    def stake_pools(self, limit: int) -> QueryResponse[AllStakePoolsData]:
        return self.query("stake_pools", first=limit)

    def blocks(self, limit: int) -> QueryResponse[AllBlocksData]:
        return self.query("blocks", last=limit)

    def last_block(self) -> LastBlockResponse:
        return LastBlockResponse(self.query("last_block"))

    def blocks_at_chain_length(self, length: int) -> QueryResponse[BlocksByChainLengthData]:
        return self.query("blocks_at_chain_length", length=str(length))

    def epoch(self, epoch_number: int, limit: int) -> QueryResponse[EpochData]:
        return self.query("epoch", id=str(epoch_number), blocks_limit=limit)

    def stake_pool(self, pool_id: str, limit: int) -> QueryResponse[StakePoolData]:
        return self.query("stake_pool", id=pool_id, first=limit)

    def settings(self) -> QueryResponse[SettingsData]:
        return self.query("settings")

    def vote_plans(self, limit: int) -> QueryResponse[AllVotePlansData]:
        return self.query("vote_plans", first=limit)

    def transaction(self, tx_id: str) -> QueryResponse[TransactionByIdData]:
        return self.query("transaction", id=str(tx_id))

    def current_time(self) -> BlockDate:
        # Assumes a running explorer: any failure propagates to the caller.
        return self.last_block().block_date()
