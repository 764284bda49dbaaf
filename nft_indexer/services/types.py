"""
Record types passed between the chain source, decoder and reconciler.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class LogItem:
    """Raw log as delivered by the chain source."""

    id: str
    address: str
    topics: list[str]
    data: str
    log_index: int
    transaction_hash: str


@dataclass(frozen=True)
class BlockHeader:
    """Block height, hash and timestamp (seconds since epoch)."""

    height: int
    hash: str
    timestamp: int


@dataclass(frozen=True)
class BlockData:
    """One block and its matching logs in log-index order."""

    header: BlockHeader
    logs: list[LogItem] = field(default_factory=list)


@dataclass(frozen=True)
class BlockBatch:
    """
    Contiguous block range delivered in one piece.

    ``blocks`` only holds blocks with matching logs, so it may be empty
    while the range itself still has to be checkpointed.
    """

    from_block: int
    to_block: int
    blocks: list[BlockData] = field(default_factory=list)

    @property
    def log_count(self) -> int:
        """Total number of logs in the batch."""
        return sum(len(block.logs) for block in self.blocks)


@dataclass(frozen=True)
class DecodedTransfer:
    """Typed fields of a Transfer log."""

    from_address: str
    to_address: str
    token_id: int


@dataclass(frozen=True)
class TransferData:
    """Decoded transfer plus the block context it was emitted in."""

    id: str
    block_number: int
    timestamp: datetime
    tx_hash: str
    from_address: str
    to_address: str
    token_id: int


@dataclass(frozen=True)
class BatchContext:
    """Block range of the batch being committed."""

    from_block: int
    to_block: int


@dataclass
class ReconcileResult:
    """Counters reported after a batch was committed."""

    to_block: int
    transfers: int = 0
    owners: int = 0
    owners_created: int = 0
    tokens: int = 0
    tokens_created: int = 0


def format_log_id(height: int, block_hash: str, log_index: int) -> str:
    """
    Build the unique, chain-ordered id of a log.

    Example:
        >>> format_log_id(15584000, "0xabcdef0123", 7)
        '0015584000-abcde-000007'
    """
    hash_part = block_hash[2:7] if block_hash.startswith("0x") else block_hash[:5]
    return f"{height:010d}-{hash_part}-{log_index:06d}"
