"""
DeskMap - Entity Store
Thin persistence facade over an AsyncSession, injected into routers and services
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type, TypeVar

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from deskmap.database import Base, get_db
from deskmap.errors import NotFoundError, StoreConflictError, UnexpectedStoreError
from deskmap.models.employee import Employee
from deskmap.models.location import Location
from deskmap.models.map import Map

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Eager-load recipes, so no lazy load ever happens under the async session
MAP_WITH_EMPLOYEES: Sequence[LoaderOption] = (
    selectinload(Map.locations).selectinload(Location.employee),
)
EMPLOYEE_WITH_MAPS: Sequence[LoaderOption] = (
    selectinload(Employee.locations).selectinload(Location.map),
)
LOCATION_WITH_RELATIONS: Sequence[LoaderOption] = (
    selectinload(Location.map),
    selectinload(Location.employee),
)


class EntityStore:
    """
    Persistence for Map, Employee and Location.

    Every mutation is a single-row write committed immediately. Update and
    delete against an unknown id raise NotFoundError; callers normally check
    existence first, so that is a backstop.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(
        self,
        model: Type[ModelT],
        entity_id: str,
        include: Sequence[LoaderOption] = ()
    ) -> Optional[ModelT]:
        """Find one row by id, or None."""
        stmt = (
            select(model)
            .where(model.id == entity_id)
            .options(*include)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt, f"get {model.__name__}")
        return result.scalar_one_or_none()

    async def require(
        self,
        model: Type[ModelT],
        entity_id: str,
        include: Sequence[LoaderOption] = ()
    ) -> ModelT:
        """Find one row by id or raise NotFoundError."""
        entity = await self.get(model, entity_id, include)
        if entity is None:
            raise NotFoundError(model.__name__, entity_id)
        return entity

    async def find_many(
        self,
        model: Type[ModelT],
        where: Iterable[Any] = (),
        order_by: Iterable[Any] = (),
        include: Sequence[LoaderOption] = ()
    ) -> List[ModelT]:
        """Find rows matching every criterion in `where`."""
        stmt = (
            select(model)
            .where(*where)
            .order_by(*order_by)
            .options(*include)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt, f"list {model.__name__}")
        return list(result.scalars().all())

    async def create(
        self,
        model: Type[ModelT],
        values: Dict[str, Any],
        include: Sequence[LoaderOption] = ()
    ) -> ModelT:
        entity = model(**values)
        self.session.add(entity)
        await self._commit(f"create {model.__name__}")
        logger.info(f"Created {model.__name__} {entity.id}")
        return await self.require(model, entity.id, include)

    async def update(
        self,
        model: Type[ModelT],
        entity_id: str,
        changes: Dict[str, Any],
        include: Sequence[LoaderOption] = ()
    ) -> ModelT:
        """Apply a partial update; only keys present in `changes` are written."""
        entity = await self.require(model, entity_id)
        for field, value in changes.items():
            setattr(entity, field, value)
        await self._commit(f"update {model.__name__}")
        logger.info(f"Updated {model.__name__} {entity_id}: {sorted(changes)}")
        return await self.require(model, entity_id, include)

    async def delete(self, model: Type[ModelT], entity_id: str) -> ModelT:
        """Delete one row (and, through the ORM cascade, its dependent locations)."""
        entity = await self.require(model, entity_id)
        try:
            await self.session.delete(entity)
        except SQLAlchemyError as e:
            raise UnexpectedStoreError(f"delete {model.__name__}", e) from e
        await self._commit(f"delete {model.__name__}")
        logger.info(f"Deleted {model.__name__} {entity_id}")
        return entity

    async def find_employee_id_by_email(self, email: str) -> Optional[str]:
        result = await self._execute(
            select(Employee.id).where(Employee.email == email),
            "lookup employee email"
        )
        return result.scalar_one_or_none()

    async def _execute(self, stmt, operation: str):
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise UnexpectedStoreError(operation, e) from e

    async def _commit(self, operation: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise StoreConflictError(operation, e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise UnexpectedStoreError(operation, e) from e


async def get_store(db: AsyncSession = Depends(get_db)) -> EntityStore:
    """Dependency providing a request-scoped EntityStore."""
    return EntityStore(db)
