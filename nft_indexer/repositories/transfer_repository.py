"""
Transfer repository.

Data access layer for the append-only transfer history.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from nft_indexer.models.transfer import Transfer
from nft_indexer.repositories.base import BaseRepository


class TransferRepository(BaseRepository[Transfer]):
    """Repository for Transfer entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(Transfer, session)

    async def insert_all(self, transfers: list[Transfer]) -> int:
        """
        Insert new transfers.

        Transfers are never updated, so every instance must be new.

        Args:
            transfers: Transfers in event order

        Returns:
            Number of transfers staged
        """
        return await self.save_all(transfers)
