# ============================================================================
# explorer_harness/__init__.py
# Test fixture for a ledger explorer process
# ============================================================================
#
# PURPOSE:
# Launch the explorer binary against a running node, wait for it to come up,
# query it over GraphQL and kill it once every handle on it is closed.
#
# ENTRY POINTS:
#   Explorer.launch(node_address, logs_dir=...)   -> Explorer
#   compare_schema(actual_path)                    -> bool
#
# ============================================================================

from explorer_harness.errors import (
    ErrorCode,
    ExplorerClientError,
    ExplorerError,
    ExplorerLaunchError,
    ExplorerNotReadyError,
    ExplorerSerializationError,
    ExplorerTransportError,
    HarnessError,
)
from explorer_harness.explorer import Explorer
from explorer_harness.schema import compare_schema
from explorer_harness.wrappers import BlockDate, LastBlockResponse

__version__ = "0.1.0"

__all__ = [
    "BlockDate",
    "ErrorCode",
    "Explorer",
    "ExplorerClientError",
    "ExplorerError",
    "ExplorerLaunchError",
    "ExplorerNotReadyError",
    "ExplorerSerializationError",
    "ExplorerTransportError",
    "HarnessError",
    "LastBlockResponse",
    "compare_schema",
]
