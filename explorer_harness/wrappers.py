# explorer_harness/wrappers.py
# Convenience views over decoded explorer responses.

from __future__ import annotations

from dataclasses import dataclass

from explorer_harness.errors import ErrorCode, ExplorerSerializationError
from explorer_harness.queries.models import BlockDateModel, BlockSummary, LastBlockData, QueryResponse


@dataclass(frozen=True, order=True)
class BlockDate:
    """Ledger time as `epoch.slot`."""

    epoch: int
    slot: int

    @classmethod
    def from_str(cls, value: str) -> "BlockDate":
        epoch, sep, slot = value.partition(".")
        if not sep:
            raise ValueError(f"invalid block date {value!r}, expected 'epoch.slot'")
        return cls(int(epoch), int(slot))

    @classmethod
    def from_model(cls, date: BlockDateModel) -> "BlockDate":
        return cls(int(date.epoch.id), int(date.slot))

    def __str__(self) -> str:
        return f"{self.epoch}.{self.slot}"


class LastBlockResponse:
    def __init__(self, response: QueryResponse[LastBlockData]):
        self.response = response

    @property
    def data(self) -> LastBlockData:
        if self.response.data is None:
            errors = [e.message for e in self.response.errors or []]
            raise ExplorerSerializationError(
                ErrorCode.SERIAL_SHAPE_MISMATCH,
                "last block response carries no data",
                details={"errors": errors},
            )
        return self.response.data

    def block(self) -> BlockSummary:
        return self.data.tip.block

    def block_id(self) -> str:
        return self.block().id

    def chain_length(self) -> int:
        return int(self.block().chain_length or 0)

    def block_date(self) -> BlockDate:
        date = self.block().date
        if date is None:
            raise ExplorerSerializationError(
                ErrorCode.SERIAL_SHAPE_MISMATCH,
                "last block response carries no block date",
                details={"block_id": self.block_id()},
            )
        return BlockDate.from_model(date)

    def __repr__(self) -> str:
        return f"LastBlockResponse({self.response!r})"
