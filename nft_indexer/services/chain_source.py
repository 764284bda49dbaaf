"""
Chain Source.

Streams Transfer logs of one contract as ordered block batches using
``eth_getLogs`` over fixed-size block ranges.
"""

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from typing import Any

from eth_utils import to_checksum_address, to_hex
from loguru import logger
from web3 import AsyncWeb3

from nft_indexer.config.constants import RPC_MAX_CONCURRENT, RPC_TIMEOUT, TRANSFER_TOPIC
from nft_indexer.services.rpc_wrapper import rpc_call_with_retry
from nft_indexer.services.types import (
    BlockBatch,
    BlockData,
    BlockHeader,
    LogItem,
    format_log_id,
)


def _hex(value: Any) -> str:
    """Render bytes-like RPC values as 0x-prefixed hex."""
    if isinstance(value, bytes | bytearray):
        return to_hex(value)
    return str(value)


class Web3LogSource:
    """
    Block batch source backed by a JSON-RPC node.

    Each batch covers ``batch_blocks`` consecutive blocks (fewer at the
    head). Only blocks ``confirmations`` behind the head are served. When
    caught up the source polls every ``poll_interval`` seconds; with
    ``to_block`` set it stops after that block.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        contract_address: str,
        from_block: int,
        *,
        topic: str = TRANSFER_TOPIC,
        to_block: int | None = None,
        batch_blocks: int = 2000,
        confirmations: int = 6,
        poll_interval: float = 3,
        header_concurrency: int = RPC_MAX_CONCURRENT,
        rpc_timeout: float = RPC_TIMEOUT,
        max_retries: int = 3,
    ) -> None:
        """
        Initialize source.

        Args:
            w3: AsyncWeb3 instance
            contract_address: Contract whose logs are requested
            from_block: First block to deliver
            topic: topic0 filter (Transfer signature hash)
            to_block: Optional last block to deliver
            batch_blocks: Blocks per batch
            confirmations: Blocks behind head treated as final
            poll_interval: Seconds between head polls when caught up
            header_concurrency: Maximum in-flight header requests
            rpc_timeout: Timeout per RPC attempt
            max_retries: Attempts per RPC call
        """
        self.w3 = w3
        self.contract_address = to_checksum_address(contract_address)
        self.topic = topic
        self.from_block = from_block
        self.to_block = to_block
        self.batch_blocks = batch_blocks
        self.confirmations = confirmations
        self.poll_interval = poll_interval
        self.header_concurrency = header_concurrency
        self.rpc_timeout = rpc_timeout
        self.max_retries = max_retries

    async def safe_head(self) -> int:
        """Highest block considered final."""
        head = await rpc_call_with_retry(
            lambda: self.w3.eth.block_number,
            max_retries=self.max_retries,
            timeout=self.rpc_timeout,
            operation_name="eth_blockNumber",
        )
        return max(0, head - self.confirmations)

    async def batches(self) -> AsyncIterator[BlockBatch]:
        """
        Yield block batches in ascending order.

        The next range is only requested when the consumer asks for the
        next batch, so a slow consumer throttles the source.
        """
        cursor = self.from_block
        logger.info(
            f"[ChainSource] Streaming {self.contract_address} from block {cursor}"
            + (f" to {self.to_block}" if self.to_block is not None else "")
        )

        while self.to_block is None or cursor <= self.to_block:
            safe = await self.safe_head()
            if cursor > safe:
                logger.debug(
                    f"[ChainSource] Caught up at {safe}, "
                    f"sleeping {self.poll_interval}s"
                )
                await asyncio.sleep(self.poll_interval)
                continue

            end = min(cursor + self.batch_blocks - 1, safe)
            if self.to_block is not None:
                end = min(end, self.to_block)

            yield await self.fetch_range(cursor, end)
            cursor = end + 1

        logger.info(f"[ChainSource] Reached end block {self.to_block}")

    async def fetch_range(self, from_block: int, to_block: int) -> BlockBatch:
        """
        Fetch matching logs and their block headers for an inclusive range.

        Args:
            from_block: First block of the range
            to_block: Last block of the range

        Returns:
            Batch with blocks in height order and logs in log-index order
        """
        raw_logs = await rpc_call_with_retry(
            lambda: self.w3.eth.get_logs({
                "fromBlock": from_block,
                "toBlock": to_block,
                "address": self.contract_address,
                "topics": [self.topic],
            }),
            max_retries=self.max_retries,
            timeout=self.rpc_timeout,
            operation_name=f"eth_getLogs {from_block}-{to_block}",
        )

        by_block: dict[int, list[Any]] = defaultdict(list)
        for raw in raw_logs:
            by_block[int(raw["blockNumber"])].append(raw)

        heights = sorted(by_block)
        headers = await self.fetch_headers(heights)

        blocks = []
        for height in heights:
            header = headers[height]
            ordered = sorted(by_block[height], key=lambda raw: int(raw["logIndex"]))
            blocks.append(
                BlockData(
                    header=header,
                    logs=[self._to_log_item(header, raw) for raw in ordered],
                )
            )

        return BlockBatch(from_block=from_block, to_block=to_block, blocks=blocks)

    async def fetch_headers(self, heights: list[int]) -> dict[int, BlockHeader]:
        """Fetch block headers with bounded concurrency."""
        semaphore = asyncio.Semaphore(self.header_concurrency)

        async def fetch_one(height: int) -> BlockHeader:
            async with semaphore:
                block = await rpc_call_with_retry(
                    lambda: self.w3.eth.get_block(height),
                    max_retries=self.max_retries,
                    timeout=self.rpc_timeout,
                    operation_name=f"eth_getBlockByNumber {height}",
                )
            return BlockHeader(
                height=int(block["number"]),
                hash=_hex(block["hash"]),
                timestamp=int(block["timestamp"]),
            )

        headers = await asyncio.gather(*(fetch_one(height) for height in heights))
        return {header.height: header for header in headers}

    @staticmethod
    def _to_log_item(header: BlockHeader, raw: Any) -> LogItem:
        log_index = int(raw["logIndex"])
        return LogItem(
            id=format_log_id(header.height, header.hash, log_index),
            address=_hex(raw["address"]).lower(),
            topics=[_hex(topic).lower() for topic in raw["topics"]],
            data=_hex(raw["data"]),
            log_index=log_index,
            transaction_hash=_hex(raw["transactionHash"]),
        )
