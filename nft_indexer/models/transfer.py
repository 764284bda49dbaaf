"""
Transfer model.

Append-only history of Transfer events of the watched contract.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nft_indexer.models.base import Base
from nft_indexer.models.owner import Owner
from nft_indexer.models.token import Token


class Transfer(Base):
    """
    One decoded Transfer log.

    Identified by the log id (block height, block hash prefix, log index),
    so ids sort in chain order. Immutable once written.
    """

    __tablename__ = "transfers"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    block_number: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    tx_hash: Mapped[str] = mapped_column(
        String(66), nullable=False, index=True
    )

    from_id: Mapped[str] = mapped_column(
        String(42), ForeignKey("owners.id"), nullable=False, index=True
    )
    to_id: Mapped[str] = mapped_column(
        String(42), ForeignKey("owners.id"), nullable=False, index=True
    )
    token_id: Mapped[str] = mapped_column(
        String(78), ForeignKey("tokens.id"), nullable=False, index=True
    )

    from_: Mapped[Owner] = relationship(foreign_keys=[from_id], lazy="raise")
    to: Mapped[Owner] = relationship(foreign_keys=[to_id], lazy="raise")
    token: Mapped[Token] = relationship(lazy="raise")

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Transfer(id={self.id}, token={self.token_id}, "
            f"from={self.from_id}, to={self.to_id})>"
        )
