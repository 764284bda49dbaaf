"""
Sync State model.

Tracks how far the Transfer history of a contract has been committed.
"""

from datetime import UTC, datetime

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from nft_indexer.models.base import Base


class SyncState(Base):
    """
    Indexing checkpoint for one watched contract.

    Written in the same transaction as the batch it describes, so a
    restart resumes right after the last durably committed batch.
    """

    __tablename__ = "sync_state"

    # Watched contract address (lowercase)
    id: Mapped[str] = mapped_column(String(42), primary_key=True)

    last_block: Mapped[int] = mapped_column(BigInteger, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<SyncState(id={self.id}, last_block={self.last_block})>"
