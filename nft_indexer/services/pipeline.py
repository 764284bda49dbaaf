"""
Indexer Pipeline.

Drives the collect -> commit cycle: one block batch is decoded and
committed before the next one is requested from the source.
"""

from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import Protocol

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from nft_indexer.repositories.sync_state_repository import SyncStateRepository
from nft_indexer.services.batch_reconciler import BatchReconciler
from nft_indexer.services.event_decoder import EventDecoder
from nft_indexer.services.metadata_resolver import MetadataResolver
from nft_indexer.services.types import (
    BatchContext,
    BlockBatch,
    ReconcileResult,
    TransferData,
)


class BlockBatchSource(Protocol):
    """Anything that yields ordered block batches."""

    def batches(self) -> AsyncIterator[BlockBatch]: ...


async def get_resume_height(
    session_maker: async_sessionmaker[AsyncSession],
    contract_address: str,
    start_block: int,
) -> int:
    """
    First block to index for a contract.

    Args:
        session_maker: Session factory
        contract_address: Watched contract
        start_block: Configured start height

    Returns:
        The block after the last committed batch, or ``start_block``
        when nothing was committed yet
    """
    async with session_maker() as session:
        last_block = await SyncStateRepository(session).get_last_block(
            contract_address
        )

    if last_block is None:
        return start_block
    return max(start_block, last_block + 1)


class IndexerPipeline:
    """
    Sequential batch pipeline.

    Any error (undecodable log, fatal metadata call, failed commit) stops
    the pipeline. Nothing of the failing batch is persisted, so a restart
    resumes at that batch.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        source: BlockBatchSource,
        decoder: EventDecoder,
        resolver: MetadataResolver,
        contract_address: str,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            session_maker: Session factory; one session per batch
            source: Block batch source
            decoder: Transfer log decoder
            resolver: Metadata resolver for new tokens
            contract_address: Watched contract
        """
        self.session_maker = session_maker
        self.source = source
        self.decoder = decoder
        self.resolver = resolver
        self.contract_address = contract_address.lower()
        self.last_committed_block: int | None = None

    async def run(self) -> int | None:
        """
        Consume the source until it is exhausted or an error occurs.

        Returns:
            Last committed block height (None if no batch was committed)
        """
        async for batch in self.source.batches():
            try:
                await self.process_batch(batch)
            except Exception as e:
                logger.exception(
                    f"[Pipeline] Halting at blocks {batch.from_block}-{batch.to_block}: "
                    f"{type(e).__name__}: {e}"
                )
                raise

        return self.last_committed_block

    def collect(self, batch: BlockBatch) -> list[TransferData]:
        """
        Decode the relevant logs of a batch in chain order.

        Raises:
            DecodeError: If a Transfer log of the contract cannot be decoded
        """
        records: list[TransferData] = []
        for block in batch.blocks:
            timestamp = datetime.fromtimestamp(block.header.timestamp, UTC)
            for log in block.logs:
                if not self.decoder.matches(log, self.contract_address):
                    continue

                decoded = self.decoder.decode(log)
                records.append(
                    TransferData(
                        id=log.id,
                        block_number=block.header.height,
                        timestamp=timestamp,
                        tx_hash=log.transaction_hash,
                        from_address=decoded.from_address,
                        to_address=decoded.to_address,
                        token_id=decoded.token_id,
                    )
                )
        return records

    async def process_batch(self, batch: BlockBatch) -> ReconcileResult:
        """
        Collect and commit one batch.

        Args:
            batch: Block batch from the source

        Returns:
            Counters of the committed batch
        """
        records = self.collect(batch)

        async with self.session_maker() as session:
            reconciler = BatchReconciler(session, self.resolver, self.contract_address)
            result = await reconciler.reconcile(
                records, BatchContext(batch.from_block, batch.to_block)
            )

        self.last_committed_block = batch.to_block
        if result.transfers:
            logger.info(
                f"[Pipeline] Blocks {batch.from_block}-{batch.to_block}: "
                f"{result.transfers} transfers, {result.tokens_created} new tokens, "
                f"{result.owners_created} new owners"
            )
        else:
            logger.debug(
                f"[Pipeline] Blocks {batch.from_block}-{batch.to_block}: no transfers"
            )
        return result
