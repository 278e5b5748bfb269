"""Base CRUD Repository — Parent class for all domain repositories.

Provides generic create/read operations, pagination, and the versioned
conditional update every lifecycle write goes through.

Usage:
    class AssetRepository(BaseRepository[Asset]):
        def __init__(self) -> None:
            super().__init__(Asset)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base

# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic repository providing common database operations.

    Attributes:
        model: The SQLAlchemy model class
    """

    def __init__(self, model: type[ModelType]) -> None:
        """Initialize the repository with a model class.

        Args:
            model: SQLAlchemy model class this repository manages
        """
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType | None:
        """Retrieve a single record by its UUID.

        Args:
            db: Async database session
            record_id: UUID of the record to retrieve

        Returns:
            ModelType | None: Found record or None
        """
        result = await db.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_by_field(
        self,
        db: AsyncSession,
        column_name: str,
        value: Any,
    ) -> ModelType | None:
        """Retrieve a single record by a unique column (e.g. asset_code, request_id).

        Args:
            db: Async database session
            column_name: Name of a unique column
            value: Value to match

        Returns:
            ModelType | None: Found record or None
        """
        query: Select = select(self.model).where(getattr(self.model, column_name) == value)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_paginated(
        self,
        db: AsyncSession,
        query: Select,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ModelType], int]:
        """Retrieve a paginated list of records.

        Args:
            db: Async database session
            query: Base SELECT query
            page: Current page number, 1-based
            per_page: Number of records per page

        Returns:
            tuple[Sequence[ModelType], int]: (List of records, total count)
        """
        count_query: Select = select(func.count()).select_from(query.subquery())
        total: int = (await db.execute(count_query)).scalar() or 0

        offset: int = (page - 1) * per_page
        result = await db.execute(query.offset(offset).limit(per_page))
        items: Sequence[ModelType] = result.scalars().all()

        return items, total

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """Create a new record in the database.

        Args:
            db: Async database session
            obj_data: Dictionary of data for the new record

        Returns:
            ModelType: The created record
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def count(self, db: AsyncSession, filters: dict[str, Any] | None = None) -> int:
        """Count records matching equality filters.

        Args:
            db: Async database session
            filters: Filter criteria dictionary {'column_name': value}

        Returns:
            int: Number of matching records
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in (filters or {}).items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)
        return (await db.execute(query)).scalar() or 0

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> bool:
        """Check if a record matching the given filters exists."""
        return await self.count(db, filters) > 0

    async def conditional_update(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        update_data: dict[str, Any],
        expected: dict[str, Any],
    ) -> bool:
        """Apply ``update_data`` only if the row still matches what was read.

        Issues ``UPDATE ... WHERE id = :id AND version = :version AND <expected>``
        and bumps the version. The object is refreshed on success.

        Args:
            db: Async database session
            db_obj: Previously loaded record (must have a ``version`` column)
            update_data: Fields and values to write
            expected: Additional column values the row must still hold

        Returns:
            bool: False when another writer changed the row first
        """
        stmt = (
            update(self.model)
            .where(self.model.id == db_obj.id, self.model.version == db_obj.version)
            .values(**update_data, version=db_obj.version + 1)
            .execution_options(synchronize_session=False)
        )
        for column_name, value in expected.items():
            stmt = stmt.where(getattr(self.model, column_name) == value)

        result = await db.execute(stmt)
        if result.rowcount != 1:
            return False

        await db.refresh(db_obj)
        return True
