"""
Base repository.

Generic bulk operations shared by all entity repositories.
"""

from collections.abc import Iterable
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nft_indexer.models.base import Base

# Generic type for model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with generic bulk operations.

    All entities handled here use a string primary key named ``id``.

    Type Parameters:
        ModelType: SQLAlchemy model class

    Example:
        class OwnerRepository(BaseRepository[Owner]):
            def __init__(self, session: AsyncSession):
                super().__init__(Owner, session)
    """

    def __init__(
        self, model: type[ModelType], session: AsyncSession
    ) -> None:
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def get_by_id(self, id: str) -> ModelType | None:
        """
        Get entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None if not found
        """
        return await self.session.get(self.model, id)

    async def find_by_ids(self, ids: Iterable[str]) -> dict[str, ModelType]:
        """
        Load all entities whose id is in ``ids`` with a single query.

        Args:
            ids: Entity IDs to look up

        Returns:
            Mapping id -> entity; missing ids are simply absent
        """
        id_list = list(ids)
        if not id_list:
            return {}

        stmt = select(self.model).where(self.model.id.in_(id_list))
        result = await self.session.execute(stmt)
        return {entity.id: entity for entity in result.scalars().all()}

    async def save_all(self, entities: Iterable[ModelType]) -> int:
        """
        Insert or update entities by primary key.

        Entities loaded through this session are updated in place,
        new instances are inserted. Nothing is committed here.

        Args:
            entities: Entities to save

        Returns:
            Number of entities staged
        """
        items = list(entities)
        if not items:
            return 0

        self.session.add_all(items)
        await self.session.flush()
        return len(items)
