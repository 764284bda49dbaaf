"""
Shared fixtures for unit tests.

This module provides raw-log builders used by the decoder and
pipeline tests.
"""

import pytest

from nft_indexer.config.constants import TRANSFER_TOPIC
from nft_indexer.services.types import BlockBatch, BlockData, BlockHeader, LogItem

CONTRACT = "0xac5c7493036de60e63eb81c5e9a440b42f47ebf5"


def address_topic(address: str) -> str:
    """ABI-encode an address as a 32-byte topic."""
    return "0x" + "0" * 24 + address[2:].lower()


def uint_topic(value: int) -> str:
    """ABI-encode a uint256 as a 32-byte topic."""
    return "0x" + f"{value:064x}"


@pytest.fixture
def make_log():
    """
    Factory for raw ERC-721 Transfer logs.

    Returns:
        Callable building a LogItem; ``topics``/``data``/``address``
        can be overridden to produce malformed logs
    """
    def factory(
        from_address,
        to_address,
        token_id,
        log_index=0,
        address=CONTRACT,
        topics=None,
        data="0x",
    ):
        if topics is None:
            topics = [
                TRANSFER_TOPIC,
                address_topic(from_address),
                address_topic(to_address),
                uint_topic(token_id),
            ]
        return LogItem(
            id=f"0000000100-abcde-{log_index:06d}",
            address=address,
            topics=topics,
            data=data,
            log_index=log_index,
            transaction_hash="0x" + f"{log_index + 1:064x}",
        )

    return factory


@pytest.fixture
def make_batch():
    """Factory for a one-block batch holding the given logs."""
    def factory(logs, height=100, from_block=None, to_block=None):
        header = BlockHeader(height=height, hash="0x" + "ab" * 32, timestamp=1663804800)
        return BlockBatch(
            from_block=height if from_block is None else from_block,
            to_block=height if to_block is None else to_block,
            blocks=[BlockData(header=header, logs=list(logs))] if logs else [],
        )

    return factory
