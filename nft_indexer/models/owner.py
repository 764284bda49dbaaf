"""
Owner model.

An address that has sent or received at least one token.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from nft_indexer.models.base import Base


class Owner(Base):
    """
    Token holder, identified by its address (lowercase hex).

    Created on first reference as a transfer sender or receiver and
    never deleted. Carries no mutable state.
    """

    __tablename__ = "owners"

    id: Mapped[str] = mapped_column(String(42), primary_key=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Owner(id={self.id})>"
