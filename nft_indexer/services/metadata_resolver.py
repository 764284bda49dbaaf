"""
Metadata Resolver.

Fetches ``tokenURI`` for new tokens at the height they were first seen.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from nft_indexer.config.constants import RPC_MAX_CONCURRENT, UNKNOWN_TOKEN_URI
from nft_indexer.services.contract_caller import ContractCaller
from nft_indexer.utils.exceptions import ContractCallDecodingError


class LookupStatus(Enum):
    """Outcome of a tokenURI call."""

    OK = "ok"
    UNDECODABLE = "undecodable"
    FAILED = "failed"


@dataclass(frozen=True)
class UriLookup:
    """Result of one tokenURI call."""

    token_id: int
    block_height: int
    status: LookupStatus
    uri: str | None = None
    error: Exception | None = None


class MetadataResolver:
    """
    Resolve token metadata URIs with a fallback for undecodable results.

    Only the "result could not be decoded" failure is recovered (the token
    gets UNKNOWN_TOKEN_URI, permanently). Anything else is fatal, including
    a tokenURI call that reverts: a revert halts the pipeline at that batch
    instead of storing the fallback.
    """

    def __init__(
        self,
        caller: ContractCaller,
        contract_address: str,
        max_concurrency: int = RPC_MAX_CONCURRENT,
    ) -> None:
        """
        Initialize resolver.

        Args:
            caller: Contract call client
            contract_address: Watched ERC-721 contract
            max_concurrency: Maximum in-flight calls in resolve_many()
        """
        self.caller = caller
        self.contract_address = contract_address
        self.max_concurrency = max_concurrency

    async def lookup(self, token_id: int, block_height: int) -> UriLookup:
        """
        Call ``tokenURI(token_id)`` at ``block_height`` and classify the outcome.

        Never raises for call failures; they come back as FAILED.
        """
        try:
            uri = await self.caller.call(
                self.contract_address, "tokenURI", [token_id], block_height
            )
        except ContractCallDecodingError as e:
            return UriLookup(token_id, block_height, LookupStatus.UNDECODABLE, error=e)
        except Exception as e:
            return UriLookup(token_id, block_height, LookupStatus.FAILED, error=e)

        return UriLookup(token_id, block_height, LookupStatus.OK, uri=str(uri))

    async def resolve(self, token_id: int, block_height: int) -> str:
        """
        Resolve the metadata URI of a token.

        Args:
            token_id: Token id
            block_height: Block the state is read at

        Returns:
            The URI, or UNKNOWN_TOKEN_URI if the result could not be decoded

        Raises:
            Exception: Any non-decoding call failure, unchanged
        """
        result = await self.lookup(token_id, block_height)

        if result.status is LookupStatus.OK:
            return result.uri
        if result.status is LookupStatus.UNDECODABLE:
            logger.warning(
                f"[Metadata] Token {token_id} @ {block_height}: "
                f"{result.error}; storing '{UNKNOWN_TOKEN_URI}'"
            )
            return UNKNOWN_TOKEN_URI

        logger.error(
            f"[Metadata] Token {token_id} @ {block_height} failed: {result.error}"
        )
        raise result.error

    async def resolve_many(self, pending: dict[int, int]) -> dict[int, str]:
        """
        Resolve several tokens concurrently.

        At most ``max_concurrency`` calls are in flight. The first fatal
        error propagates once all started calls have settled.

        Args:
            pending: token id -> block height to resolve at

        Returns:
            token id -> URI (or fallback)
        """
        if not pending:
            return {}

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def resolve_one(token_id: int, block_height: int) -> str:
            async with semaphore:
                return await self.resolve(token_id, block_height)

        results = await asyncio.gather(
            *(resolve_one(token_id, height) for token_id, height in pending.items()),
            return_exceptions=True,
        )

        uris: dict[int, str] = {}
        for token_id, result in zip(pending, results):
            if isinstance(result, BaseException):
                raise result
            uris[token_id] = result

        logger.debug(f"[Metadata] Resolved {len(uris)} token URIs")
        return uris
