"""
Generic async repository shared by the model-specific repositories.
Every write commits on its own and rolls the session back if the commit fails.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from listing_api.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Persistence operations keyed by integer primary key.

    Subclasses pass their model class and the request's session and add
    the queries specific to their table.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def _name(self) -> str:
        return self.model.__name__

    async def _commit(self, action: str, *instances: ModelType) -> None:
        """
        Commit pending changes and reload the given instances.

        Args:
            action: Verb used in the failure log line, e.g. "create"
            instances: Objects to refresh from the database after the commit

        Raises:
            Exception: Whatever the commit raised, after rolling back
        """
        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to {action} {self._name}: {e}")
            raise

        for instance in instances:
            await self.db.refresh(instance)

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Insert one record.

        Args:
            obj_in: Column values for the new record

        Returns:
            The stored instance with its generated id and timestamps
        """
        db_obj = self.model(**obj_in)
        self.db.add(db_obj)
        await self._commit("create", db_obj)
        logger.debug(f"Created {self._name} {db_obj.id}")
        return db_obj

    async def bulk_create(self, objects_in: List[Dict[str, Any]]) -> List[ModelType]:
        """Insert several records in a single transaction."""
        db_objects = [self.model(**values) for values in objects_in]
        self.db.add_all(db_objects)
        await self._commit("bulk create", *db_objects)
        logger.debug(f"Bulk created {len(db_objects)} {self._name} records")
        return db_objects

    async def get_by_id(self, id: int, load_relationships: bool = False) -> Optional[ModelType]:
        """
        Fetch a record by primary key.

        Args:
            id: Primary key
            load_relationships: Eagerly load every writable relationship,
                needed before a delete so ORM cascades avoid lazy loads

        Returns:
            The instance, or None when no row has that id
        """
        query = select(self.model).where(self.model.id == id)

        if load_relationships:
            query = query.options(*(
                selectinload(getattr(self.model, rel.key))
                for rel in self.model.__mapper__.relationships
                if not rel.viewonly
            ))

        result = await self.db.execute(query)
        obj = result.scalar_one_or_none()
        if obj is None:
            logger.debug(f"{self._name} {id} not found")
        return obj

    async def exists(self, id: int) -> bool:
        result = await self.db.execute(select(select(self.model.id).where(self.model.id == id).exists()))
        return bool(result.scalar())

    async def update(self, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """
        Assign the given values to a loaded record and persist them.

        Args:
            db_obj: Instance previously loaded through this session
            obj_in: Attribute values to change

        Returns:
            The refreshed instance
        """
        for field, value in obj_in.items():
            setattr(db_obj, field, value)

        await self._commit("update", db_obj)
        logger.debug(f"Updated {self._name} {db_obj.id}: {sorted(obj_in)}")
        return db_obj

    async def delete(self, id: int) -> bool:
        """
        Delete a record and, through ORM cascades, its dependent rows.

        Returns:
            False when no row has that id
        """
        db_obj = await self.get_by_id(id, load_relationships=True)
        if db_obj is None:
            return False

        await self.db.delete(db_obj)
        await self._commit("delete")
        logger.debug(f"Deleted {self._name} {id}")
        return True
