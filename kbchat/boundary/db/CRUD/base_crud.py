"""
Base CRUD operations for tenant-owned SQLAlchemy models.

Provides generic Create, Read, Update, Delete operations that can be
inherited and extended by model-specific CRUD classes. Every read and
write takes the tenant id and filters on it.

Dependencies: sqlalchemy, uuid
System role: Foundation for all database CRUD operations
"""

from typing import Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from kbchat.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for tenant-scoped CRUD operations.

    Subclasses pass the model class and can override or extend these
    methods for model-specific behavior. The model must carry
    ``TenantMixin`` and ``UUIDMixin``.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, tenant_id: str, **kwargs) -> ModelT:
        """
        Create a new record owned by the tenant.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(tenant_id=tenant_id, **kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(
        self,
        session: AsyncSession,
        tenant_id: str,
        id: UUID,
    ) -> ModelT | None:
        """
        Retrieve a single record by primary key within a tenant.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            id: UUID primary key

        Returns:
            Model instance if found for this tenant, None otherwise
        """
        stmt = select(self.model).where(
            self.model.id == id,
            self.model.tenant_id == tenant_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        session: AsyncSession,
        tenant_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Retrieve the tenant's records, newest first, with optional pagination.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip

        Returns:
            Sequence of model instances
        """
        stmt = (
            select(self.model)
            .where(self.model.tenant_id == tenant_id)
            .order_by(self.model.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(
        self,
        session: AsyncSession,
        tenant_id: str,
        id: UUID,
        **kwargs,
    ) -> ModelT | None:
        """
        Update a tenant's record by primary key.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            id: UUID primary key
            **kwargs: Fields to update with new values

        Returns:
            Updated model instance if found, None otherwise
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id, self.model.tenant_id == tenant_id)
            .values(**kwargs)
            .returning(self.model)
            # Refresh instances already loaded in this session with the returned row
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, tenant_id: str, id: UUID) -> bool:
        """
        Delete a tenant's record by primary key.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            id: UUID primary key

        Returns:
            True if record was deleted, False if not found
        """
        stmt = delete(self.model).where(
            self.model.id == id,
            self.model.tenant_id == tenant_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def count(self, session: AsyncSession, tenant_id: str) -> int:
        """
        Count the tenant's records.

        Args:
            session: Async database session
            tenant_id: Owning tenant

        Returns:
            Number of rows owned by the tenant
        """
        stmt = select(func.count()).select_from(self.model).where(
            self.model.tenant_id == tenant_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())
