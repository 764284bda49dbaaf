"""
Token repository.

Data access layer for tokens and their current owners.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from nft_indexer.models.token import Token
from nft_indexer.repositories.base import BaseRepository


class TokenRepository(BaseRepository[Token]):
    """Repository for Token entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(Token, session)
