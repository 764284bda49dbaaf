"""
RPC Wrapper with Timeout and Retry Logic.

Provides centralized timeout and retry functionality for blockchain RPC calls.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger

from nft_indexer.config.constants import RPC_TIMEOUT

T = TypeVar("T")


class BlockchainTimeoutError(Exception):
    """Raised when blockchain RPC call times out."""
    pass


class BlockchainError(Exception):
    """Base exception for blockchain errors."""
    pass


async def with_timeout(
    coro: Awaitable[T],
    timeout: float = RPC_TIMEOUT,
    operation_name: str = "RPC call",
) -> T:
    """
    Execute async coroutine with timeout.

    Args:
        coro: Coroutine to execute
        timeout: Timeout in seconds (default: RPC_TIMEOUT)
        operation_name: Operation name for logging

    Returns:
        Result of the coroutine

    Raises:
        BlockchainTimeoutError: If operation times out
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except TimeoutError as e:
        error_msg = f"{operation_name} timed out after {timeout}s"
        logger.error(error_msg)
        raise BlockchainTimeoutError(error_msg) from e


async def rpc_call_with_retry(
    coro_factory: Callable[[], Awaitable[Any]],
    max_retries: int = 3,
    timeout: float = RPC_TIMEOUT,
    operation_name: str = "RPC call",
    exponential_backoff: bool = True,
) -> Any:
    """
    Execute RPC call with retry logic and timeout.

    Args:
        coro_factory: Factory function that returns a coroutine
        max_retries: Maximum number of retry attempts
        timeout: Timeout per attempt in seconds
        operation_name: Operation name for logging
        exponential_backoff: Use exponential backoff between retries

    Returns:
        Result of the RPC call

    Raises:
        BlockchainTimeoutError: If all attempts time out
        BlockchainError: If all attempts fail with errors
    """
    last_error: Exception | None = None

    for attempt in range(max_retries):
        try:
            result = await with_timeout(
                coro_factory(),
                timeout=timeout,
                operation_name=f"{operation_name} (attempt {attempt + 1}/{max_retries})",
            )

            if attempt > 0:
                logger.success(
                    f"{operation_name} succeeded on attempt {attempt + 1}"
                )

            return result

        except Exception as e:
            last_error = e

            if attempt < max_retries - 1:
                delay = 2 ** attempt if exponential_backoff else 2

                logger.warning(
                    f"{operation_name} failed on attempt {attempt + 1}/{max_retries}: {e}. "
                    f"Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)
            else:
                logger.error(
                    f"{operation_name} failed after {max_retries} attempts: {e}"
                )

    if isinstance(last_error, BlockchainTimeoutError):
        raise last_error
    raise BlockchainError(
        f"{operation_name} failed after {max_retries} attempts: {last_error}"
    ) from last_error
