"""Indexer of ERC-721 ownership and transfer history."""

__version__ = "0.1.0"
