"""
Event Decoder.

Turns raw ERC-721 Transfer logs into typed transfer records.
"""

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_bytes

from nft_indexer.config.constants import TRANSFER_TOPIC
from nft_indexer.services.types import DecodedTransfer, LogItem
from nft_indexer.utils.exceptions import DecodeError

# from, to, tokenId are all indexed: signature + 3 argument topics
TRANSFER_TOPIC_COUNT = 4
TOPIC_SIZE = 32


class EventDecoder:
    """
    Decoder for ``Transfer(address indexed, address indexed, uint256 indexed)``.

    Pure and side-effect free. A log whose layout does not match raises
    DecodeError, which is fatal to the batch: the source is trusted, so a
    mismatch means a misconfigured contract or ABI.
    """

    topic = TRANSFER_TOPIC

    def matches(self, log: LogItem, contract_address: str) -> bool:
        """
        Check whether a log is a Transfer of the watched contract.

        Args:
            log: Raw log
            contract_address: Watched contract address

        Returns:
            True if the log should be decoded
        """
        if log.address.lower() != contract_address.lower():
            return False
        return bool(log.topics) and log.topics[0].lower() == self.topic

    def decode(self, log: LogItem) -> DecodedTransfer:
        """
        Decode a Transfer log.

        Args:
            log: Raw log whose topic0 is the Transfer signature

        Returns:
            Sender, receiver (lowercase addresses) and token id

        Raises:
            DecodeError: If the log does not have the ERC-721 Transfer layout
        """
        if len(log.topics) != TRANSFER_TOPIC_COUNT:
            raise DecodeError(
                f"Log {log.id}: expected {TRANSFER_TOPIC_COUNT} topics, "
                f"got {len(log.topics)}"
            )
        if log.topics[0].lower() != self.topic:
            raise DecodeError(
                f"Log {log.id}: unexpected topic0 {log.topics[0]}"
            )

        try:
            data = to_bytes(hexstr=log.data) if log.data else b""
            topics = [to_bytes(hexstr=topic) for topic in log.topics[1:]]
        except ValueError as e:
            raise DecodeError(f"Log {log.id}: malformed hex: {e}") from e

        if data:
            raise DecodeError(
                f"Log {log.id}: Transfer carries no data, got {len(data)} bytes"
            )
        if any(len(topic) != TOPIC_SIZE for topic in topics):
            raise DecodeError(f"Log {log.id}: topics must be {TOPIC_SIZE} bytes")

        try:
            from_address, to_address, token_id = decode(
                ["address", "address", "uint256"], b"".join(topics)
            )
        except DecodingError as e:
            raise DecodeError(f"Log {log.id}: {e}") from e

        return DecodedTransfer(
            from_address=from_address.lower(),
            to_address=to_address.lower(),
            token_id=token_id,
        )
