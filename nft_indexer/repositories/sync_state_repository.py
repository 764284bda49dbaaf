"""
Sync State repository.

Reads and advances the per-contract indexing checkpoint.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from nft_indexer.models.sync_state import SyncState
from nft_indexer.repositories.base import BaseRepository


class SyncStateRepository(BaseRepository[SyncState]):
    """Repository for indexing checkpoints."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(SyncState, session)

    async def get_last_block(self, contract_address: str) -> int | None:
        """
        Get the last committed block for a contract.

        Args:
            contract_address: Watched contract address

        Returns:
            Last committed block height, or None if nothing was indexed yet
        """
        state = await self.get_by_id(contract_address.lower())
        return state.last_block if state else None

    async def advance(self, contract_address: str, last_block: int) -> SyncState:
        """
        Move the checkpoint forward to ``last_block``.

        Does not commit; the caller commits it together with the batch.

        Args:
            contract_address: Watched contract address
            last_block: Last block height covered by the batch

        Returns:
            Updated sync state
        """
        key = contract_address.lower()
        state = await self.get_by_id(key)
        if state is None:
            state = SyncState(id=key, last_block=last_block)
        else:
            state.last_block = max(state.last_block, last_block)

        await self.save_all([state])
        return state
