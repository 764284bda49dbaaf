"""
Base service class.

Provides session management, bound logging and the transaction decorator
shared by services that write to the store.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nft_indexer.utils.exceptions import StoreWriteError

T = TypeVar("T")


class BaseService:
    """
    Base service class.

    Provides common functionality for store-writing services:
    - Session management
    - Logging with bound service context
    - Transaction helpers
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize base service.

        Args:
            session: Async database session
        """
        self.session = session
        self.logger = logger.bind(service=self.__class__.__name__)

    async def commit(self) -> None:
        """Commit current transaction."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Rollback current transaction."""
        await self.session.rollback()


def transaction(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Decorator to run a service method as one all-or-nothing unit.

    Commits on success, rolls back on any exception and re-raises it.
    SQLAlchemy errors are re-raised as StoreWriteError.

    Usage:
        @transaction
        async def my_service_method(self, ...):
            # Your code here
            pass

    Args:
        func: Async method to wrap

    Returns:
        Wrapped async method
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> T:
        try:
            result = await func(self, *args, **kwargs)
            await self.commit()
            return result
        except Exception as e:
            await self.rollback()
            self.logger.error(
                f"Transaction failed in {func.__name__}: {type(e).__name__}: {e}"
            )
            if isinstance(e, SQLAlchemyError):
                raise StoreWriteError(
                    f"{func.__name__} could not be committed: {e}"
                ) from e
            raise

    return wrapper
