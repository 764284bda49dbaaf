"""
Owner repository.

Data access layer for token holders.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from nft_indexer.models.owner import Owner
from nft_indexer.repositories.base import BaseRepository


class OwnerRepository(BaseRepository[Owner]):
    """Repository for Owner entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(Owner, session)
