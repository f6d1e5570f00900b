from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")
NodeT = TypeVar("NodeT")


class ExplorerModel(BaseModel):
    """camelCase on the wire, snake_case in Python; unknown fields are kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------

class GraphQlErrorLocation(BaseModel):
    line: int
    column: int


class GraphQlErrorEntry(BaseModel):
    message: str
    locations: Optional[List[GraphQlErrorLocation]] = None
    path: Optional[List[Union[str, int]]] = None
    extensions: Optional[Dict[str, Any]] = None


class QueryResponse(BaseModel, Generic[DataT]):
    data: Optional[DataT] = None
    errors: Optional[List[GraphQlErrorEntry]] = None


# ---------------------------------------------------------------------------
# Shared shapes
# ---------------------------------------------------------------------------

class Edge(ExplorerModel, Generic[NodeT]):
    node: NodeT
    cursor: Optional[str] = None


class Connection(ExplorerModel, Generic[NodeT]):
    edges: List[Edge[NodeT]] = Field(default_factory=list)
    total_count: Optional[int] = None

    def nodes(self) -> List[NodeT]:
        return [edge.node for edge in self.edges]


class EpochRef(ExplorerModel):
    id: str


class BlockDateModel(ExplorerModel):
    epoch: EpochRef
    slot: str


class BlockRef(ExplorerModel):
    id: str


class BlockSummary(ExplorerModel):
    id: str
    date: Optional[BlockDateModel] = None
    chain_length: Optional[str] = None


class PoolRef(ExplorerModel):
    id: str


class AddressRef(ExplorerModel):
    id: str


# ---------------------------------------------------------------------------
# Per-query data sections
# ---------------------------------------------------------------------------

class AddressNode(ExplorerModel):
    id: str
    delegation: Optional[PoolRef] = None


class AddressData(ExplorerModel):
    address: Optional[AddressNode] = None


class AllStakePoolsData(ExplorerModel):
    all_stake_pools: Connection[PoolRef]


class AllBlocksData(ExplorerModel):
    all_blocks: Connection[BlockSummary]


class BlocksByChainLengthData(ExplorerModel):
    blocks_by_chain_length: List[BlockSummary] = Field(default_factory=list)


class EpochNode(ExplorerModel):
    id: str
    first_block: Optional[BlockRef] = None
    last_block: Optional[BlockRef] = None
    total_blocks: Optional[int] = None
    blocks: Optional[Connection[BlockRef]] = None


class EpochData(ExplorerModel):
    epoch: Optional[EpochNode] = None


class PoolRegistration(ExplorerModel):
    pool: Optional[PoolRef] = None
    start_validity: Optional[str] = None
    management_threshold: Optional[int] = None
    owners: List[str] = Field(default_factory=list)
    operators: List[str] = Field(default_factory=list)


class PoolRetirement(ExplorerModel):
    pool_id: str


class StakePoolNode(ExplorerModel):
    id: str
    registration: Optional[PoolRegistration] = None
    retirement: Optional[PoolRetirement] = None
    blocks: Optional[Connection[BlockRef]] = None


class StakePoolData(ExplorerModel):
    stake_pool: Optional[StakePoolNode] = None


class FeeSettings(ExplorerModel):
    constant: str
    coefficient: str
    certificate: str


class SettingsNode(ExplorerModel):
    fees: FeeSettings
    epoch_stability_depth: str


class SettingsData(ExplorerModel):
    settings: SettingsNode


class ProposalRef(ExplorerModel):
    proposal_id: str


class VotePlanNode(ExplorerModel):
    id: str
    vote_start: Optional[BlockDateModel] = None
    vote_end: Optional[BlockDateModel] = None
    committee_end: Optional[BlockDateModel] = None
    payload_type: Optional[str] = None
    proposals: List[ProposalRef] = Field(default_factory=list)


class AllVotePlansData(ExplorerModel):
    all_vote_plans: Connection[VotePlanNode]


class TransactionIo(ExplorerModel):
    amount: str
    address: AddressRef


class TransactionNode(ExplorerModel):
    id: str
    blocks: List[BlockSummary] = Field(default_factory=list)
    inputs: List[TransactionIo] = Field(default_factory=list)
    outputs: List[TransactionIo] = Field(default_factory=list)


class TransactionByIdData(ExplorerModel):
    transaction: Optional[TransactionNode] = None


class TipNode(ExplorerModel):
    block: BlockSummary


class LastBlockData(ExplorerModel):
    tip: TipNode
