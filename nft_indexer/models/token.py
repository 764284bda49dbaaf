"""
Token model.

One row per token id of the watched contract.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nft_indexer.models.base import Base
from nft_indexer.models.owner import Owner


class Token(Base):
    """
    Non-fungible token and its current owner.

    ``uri`` is resolved once, when the token is first seen, and is never
    rewritten by later transfers. ``owner`` always points at the receiver
    of the most recently applied transfer.
    """

    __tablename__ = "tokens"

    # uint256 rendered as decimal string (up to 78 digits)
    id: Mapped[str] = mapped_column(String(78), primary_key=True)

    uri: Mapped[str] = mapped_column(Text, nullable=False)

    owner_id: Mapped[str] = mapped_column(
        String(42), ForeignKey("owners.id"), nullable=False, index=True
    )
    owner: Mapped[Owner] = relationship(lazy="joined")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Token(id={self.id}, owner={self.owner_id})>"
