"""
explorer_harness/queries/catalog.py
Query kind table: name -> (document, operation, typed data shape).

The facade never hard-codes a query. It looks the kind up here, builds the
request body from keyword variables and decodes the envelope into
QueryResponse[kind.data_model]. Swap the catalog to point the harness at a
different explorer schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Type

from pydantic import BaseModel

from explorer_harness.net.graphql_client import QueryBody
from . import documents
from .models import (
    AddressData,
    AllBlocksData,
    AllStakePoolsData,
    AllVotePlansData,
    BlocksByChainLengthData,
    EpochData,
    LastBlockData,
    QueryResponse,
    SettingsData,
    StakePoolData,
    TransactionByIdData,
)


@dataclass(frozen=True)
class QueryKind:
    name: str
    operation_name: str
    document: str
    data_model: Type[BaseModel]

    def build(self, **variables: Any) -> QueryBody:
        return QueryBody(
            query=self.document,
            operation_name=self.operation_name,
            variables=dict(variables),
        )

    @property
    def response_model(self) -> Type[QueryResponse]:
        return QueryResponse[self.data_model]


class QueryCatalog:
    """Registry of QueryKind by name."""

    def __init__(self, kinds: Iterable[QueryKind] = ()):
        self._kinds: Dict[str, QueryKind] = {}
        for kind in kinds:
            self.register(kind)

    def register(self, kind: QueryKind) -> None:
        self._kinds[kind.name] = kind

    def get(self, name: str) -> QueryKind:
        try:
            return self._kinds[name]
        except KeyError:
            raise KeyError(f"unknown query kind {name!r}; known: {', '.join(self.names())}") from None

    def names(self) -> List[str]:
        return sorted(self._kinds)

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[QueryKind]:
        return iter(self._kinds.values())

    def __len__(self) -> int:
        return len(self._kinds)


DEFAULT_CATALOG = QueryCatalog([
    QueryKind("address", "Address", documents.ADDRESS, AddressData),
    QueryKind("stake_pools", "AllStakePools", documents.ALL_STAKE_POOLS, AllStakePoolsData),
    QueryKind("blocks", "AllBlocks", documents.ALL_BLOCKS, AllBlocksData),
    QueryKind(
        "blocks_at_chain_length",
        "BlocksByChainLength",
        documents.BLOCKS_BY_CHAIN_LENGTH,
        BlocksByChainLengthData,
    ),
    QueryKind("epoch", "Epoch", documents.EPOCH, EpochData),
    QueryKind("stake_pool", "StakePool", documents.STAKE_POOL, StakePoolData),
    QueryKind("settings", "Settings", documents.SETTINGS, SettingsData),
    QueryKind("vote_plans", "AllVotePlans", documents.ALL_VOTE_PLANS, AllVotePlansData),
    QueryKind("transaction", "TransactionById", documents.TRANSACTION_BY_ID, TransactionByIdData),
    QueryKind("last_block", "LastBlock", documents.LAST_BLOCK, LastBlockData),
])
