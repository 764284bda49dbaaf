"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from nft_indexer.models.base import Base
from nft_indexer.models.owner import Owner
from nft_indexer.models.sync_state import SyncState
from nft_indexer.models.token import Token
from nft_indexer.models.transfer import Transfer

__all__ = [
    "Base",
    "Owner",
    "SyncState",
    "Token",
    "Transfer",
]
