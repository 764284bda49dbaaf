"""
Indexer main entry point.

Starts the pipeline from the configured (or checkpointed) block height
and runs until END_BLOCK is reached or an error stops it.
"""

import asyncio
import sys

from loguru import logger
from web3 import AsyncHTTPProvider, AsyncWeb3

from nft_indexer.config.database import create_engine, create_session_maker
from nft_indexer.config.settings import settings
from nft_indexer.initialization.logging import setup_logging
from nft_indexer.services.chain_source import Web3LogSource
from nft_indexer.services.contract_caller import ContractCaller
from nft_indexer.services.event_decoder import EventDecoder
from nft_indexer.services.metadata_resolver import MetadataResolver
from nft_indexer.services.pipeline import IndexerPipeline, get_resume_height
from nft_indexer.utils.formatters import mask_address


async def main() -> None:
    """Initialize collaborators and run the pipeline."""
    setup_logging()

    engine = create_engine()
    session_maker = create_session_maker(engine)
    w3 = AsyncWeb3(AsyncHTTPProvider(settings.rpc_url))

    try:
        head = await w3.eth.block_number
        start = await get_resume_height(
            session_maker, settings.contract_address, settings.start_block
        )
        logger.info(
            f"Connected, head={head}. Indexing "
            f"{mask_address(settings.contract_address)} from block {start}"
        )

        source = Web3LogSource(
            w3,
            settings.contract_address,
            start,
            to_block=settings.end_block,
            batch_blocks=settings.batch_blocks,
            confirmations=settings.confirmations,
            poll_interval=settings.poll_interval,
            header_concurrency=settings.header_concurrency,
            rpc_timeout=settings.rpc_timeout,
            max_retries=settings.rpc_max_retries,
        )
        resolver = MetadataResolver(
            ContractCaller(w3, timeout=settings.rpc_timeout),
            settings.contract_address,
            max_concurrency=settings.metadata_concurrency,
        )
        pipeline = IndexerPipeline(
            session_maker,
            source,
            EventDecoder(),
            resolver,
            settings.contract_address,
        )

        last_block = await pipeline.run()
        logger.success(f"Indexing finished at block {last_block}")
    finally:
        await engine.dispose()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Indexer stopped by user")
    except Exception as e:
        logger.critical(f"Indexer stopped: {type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
