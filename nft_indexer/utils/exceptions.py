"""
Exception handling utilities.

Defines the indexer error taxonomy and categorized third-party exceptions.
"""

from eth_abi.exceptions import DecodingError
from web3.exceptions import BadFunctionCallOutput


class IndexerError(Exception):
    """Base class for indexer errors."""
    pass


class DecodeError(IndexerError):
    """Raised when a log does not match the expected Transfer layout."""
    pass


class ContractCallError(IndexerError):
    """Raised when a point-in-time contract call fails."""
    pass


class ContractCallDecodingError(ContractCallError):
    """Raised when a contract call returned data that could not be decoded."""

    def __init__(self, function_name: str, block_height: int, reason: str) -> None:
        self.function_name = function_name
        self.block_height = block_height
        self.reason = reason
        super().__init__(
            f"{function_name} result could not be decoded "
            f"at block {block_height}: {reason}"
        )


class StoreWriteError(IndexerError):
    """Raised when a batch could not be committed to the store."""
    pass


# Exception categories based on handling strategy

# "Result could not be decoded" - recovered with the fallback token URI
METADATA_DECODING_ERRORS = (
    BadFunctionCallOutput,  # Empty or malformed eth_call output
    DecodingError,          # ABI decoder rejected the returned bytes
)
