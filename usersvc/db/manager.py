"""
Database integration with SQLAlchemy async for usersvc
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from sqlalchemy import delete, func, select, text, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, defer
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.expression import ColumnElement

from ..exceptions import UserServiceException
from .models import Model

logger = logging.getLogger(__name__)

SORT_DIRECTIONS = ("ASC", "DESC")

# Operators accepted in ``{"field": {"op": operand}}`` filters.
FILTER_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "eq": lambda column, value: column == value,
    "ne": lambda column, value: column != value,
    "gt": lambda column, value: column > value,
    "gte": lambda column, value: column >= value,
    "lt": lambda column, value: column < value,
    "lte": lambda column, value: column <= value,
    "in": lambda column, value: column.in_(list(value)),
    "not_in": lambda column, value: column.not_in(list(value)),
    "like": lambda column, value: column.like(value),
    "ilike": lambda column, value: column.ilike(value),
}


def is_memory_sqlite(database_url: str) -> bool:
    """True for SQLite URLs that point at a private in-memory database"""
    if not database_url.startswith("sqlite"):
        return False
    path = database_url.split("://", 1)[-1]
    return path in ("", "/") or ":memory:" in path or "mode=memory" in path


class DatabaseManager:
    """Manages database connections and sessions for usersvc"""

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
    ):
        """Initialize database manager

        Args:
            database_url: Database connection URL
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool
            max_overflow: Maximum overflow connections
            pool_timeout: Connection timeout in seconds
            pool_recycle: Connection recycle time in seconds
        """
        self.database_url = database_url
        self.echo = echo

        # Engine configuration
        self.engine_kwargs: Dict[str, Any] = {
            "echo": echo,
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "pool_recycle": pool_recycle,
        }

        # Handle SQLite special cases
        if database_url.startswith("sqlite"):
            self.engine_kwargs["connect_args"] = {"check_same_thread": False}
            if is_memory_sqlite(database_url):
                # An in-memory database lives only as long as its connection, so every
                # session must share that one connection. File databases keep a real
                # pool: one connection, and one transaction, per session.
                self.engine_kwargs["poolclass"] = StaticPool
                del self.engine_kwargs["pool_size"]
                del self.engine_kwargs["max_overflow"]
                del self.engine_kwargs["pool_timeout"]
                del self.engine_kwargs["pool_recycle"]

        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        """Connect to the database"""
        try:
            self.engine = create_async_engine(self.database_url, **self.engine_kwargs)
            self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

            # Test the connection
            async with self.engine.begin() as conn:
                await conn.run_sync(lambda sync_conn: None)

        except Exception as e:
            raise UserServiceException(f"Failed to connect to database: {e}") from e

        logger.info("Connected to database %s", self.safe_url)

    async def disconnect(self) -> None:
        """Disconnect from the database"""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("Disconnected from database %s", self.safe_url)

    @property
    def safe_url(self) -> str:
        """Database URL with credentials stripped"""
        return self.database_url.split("@")[-1] if "@" in self.database_url else self.database_url

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session

        The session commits when the block exits normally and rolls back when
        it raises.

        Yields:
            AsyncSession: Database session

        Raises:
            RuntimeError: If database is not connected
        """
        if not self.session_factory:
            raise RuntimeError("Database not connected. Call connect() first.")

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_tables(self, base: Type[DeclarativeBase] = Model) -> None:
        """Create all tables

        Args:
            base: Base class containing table definitions
        """
        if not self.engine:
            raise RuntimeError("Database not connected")

        async with self.engine.begin() as conn:
            await conn.run_sync(base.metadata.create_all)

    async def drop_tables(self, base: Type[DeclarativeBase] = Model) -> None:
        """Drop all tables

        Args:
            base: Base class containing table definitions
        """
        if not self.engine:
            raise RuntimeError("Database not connected")

        async with self.engine.begin() as conn:
            await conn.run_sync(base.metadata.drop_all)

    async def truncate_tables(self, base: Type[DeclarativeBase] = Model) -> None:
        """Delete every row of every mapped table, children before parents

        Args:
            base: Base class containing table definitions
        """
        if not self.engine:
            raise RuntimeError("Database not connected")

        async with self.engine.begin() as conn:
            for table in reversed(base.metadata.sorted_tables):
                await conn.execute(table.delete())

    async def health_check(self) -> Dict[str, Any]:
        """Perform database health check

        Returns:
            Dictionary with health status
        """
        if not self.engine:
            return {"status": "disconnected", "error": "Database not connected"}

        try:
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))

            return {"status": "healthy", "database_url": self.safe_url}

        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}


class Repository:
    """Base repository class for database operations"""

    def __init__(self, session: AsyncSession, model_class: Type[Model]):
        """Initialize repository.

        Args:
            session: Database session.
            model_class: SQLAlchemy model class.
        """
        self.session = session
        self.model_class = model_class

    def _column(self, name: str):
        return getattr(self.model_class, name)

    def _comparisons(self, column, operators: Dict[str, Any]) -> List[Any]:
        clauses = []
        for name, operand in operators.items():
            compare = FILTER_OPERATORS.get(name)
            if compare is None:
                raise ValueError(f"Invalid filter operator for {column.key!r}: {name!r}")
            clauses.append(compare(column, operand))
        return clauses

    def _apply_filters(
        self,
        stmt,
        filters: Optional[Dict[str, Any]] = None,
        filter_expressions: Optional[Sequence[Any]] = None,
    ):
        if filters:
            for field, value in filters.items():
                if isinstance(value, ColumnElement):
                    # A ready-made comparison such as ``User.id > 1``.
                    stmt = stmt.where(value)
                    continue

                column = self._column(field)
                if value is None:
                    stmt = stmt.where(column.is_(None))
                elif isinstance(value, dict):
                    stmt = stmt.where(*self._comparisons(column, value))
                elif isinstance(value, (list, tuple, set, frozenset)):
                    stmt = stmt.where(column.in_(list(value)))
                else:
                    stmt = stmt.where(column == value)
        if filter_expressions:
            stmt = stmt.where(*filter_expressions)
        return stmt

    def _exclusions(self, exclude: Optional[Iterable[str]]) -> list:
        # Raise-on-load so an excluded column can never be fetched lazily.
        return [defer(self._column(name), raiseload=True) for name in exclude or ()]

    def order_clauses(self, pairs: Sequence[Tuple[str, str]]) -> List[Any]:
        """Turn ``(field, direction)`` pairs into ORDER BY expressions."""
        clauses = []
        for field, direction in pairs:
            column = getattr(self.model_class, field, None)
            if column is None or field not in self.model_class.__table__.columns:
                raise ValueError(f"Invalid sort field: {field!r}")
            normalized = direction.upper()
            if normalized not in SORT_DIRECTIONS:
                raise ValueError(f"Invalid sort direction for {field!r}: {direction!r}")
            clauses.append(column.desc() if normalized == "DESC" else column.asc())
        return clauses

    async def find_and_count_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by_args: Optional[List[Any]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        exclude: Optional[Iterable[str]] = None,
        filter_expressions: Optional[Sequence[Any]] = None,
    ) -> Tuple[int, List[Model]]:
        """Return the total number of matching records and one page of them."""
        total = await self.count(filters, filter_expressions)

        stmt = self._apply_filters(select(self.model_class), filters, filter_expressions)
        stmt = stmt.options(*self._exclusions(exclude))

        if order_by_args:
            stmt = stmt.order_by(*order_by_args)

        stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return total, list(result.scalars().all())

    async def find_one(self, filters: Dict[str, Any]) -> Optional[Model]:
        """Find a single record matching the criteria."""
        stmt = self._apply_filters(select(self.model_class), filters)

        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_id(self, id: Any, exclude: Optional[Iterable[str]] = None) -> Optional[Model]:
        """Get record by primary key."""
        return await self.session.get(self.model_class, id, options=self._exclusions(exclude))

    async def create(self, **kwargs) -> Model:
        """Create a new record."""
        instance = self.model_class(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_where(self, values: Dict[str, Any], filters: Dict[str, Any]) -> int:
        """Update every record matching ``filters``; returns the affected row count."""
        stmt = self._apply_filters(update(self.model_class), filters)
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        result = await self.session.execute(stmt)
        return result.rowcount

    async def destroy(self, filters: Dict[str, Any]) -> int:
        """Delete every record matching ``filters``; returns the affected row count."""
        stmt = self._apply_filters(delete(self.model_class), filters)
        stmt = stmt.execution_options(synchronize_session=False)

        result = await self.session.execute(stmt)
        return result.rowcount

    async def count(
        self, filters: Optional[Dict[str, Any]] = None, filter_expressions: Optional[Sequence[Any]] = None
    ) -> int:
        """Count total records, optionally with filters."""
        stmt = select(func.count()).select_from(self.model_class)
        stmt = self._apply_filters(stmt, filters, filter_expressions)

        result = await self.session.execute(stmt)
        count = result.scalar()
        return count if count is not None else 0


async def init_database(database_url: Optional[str] = None, create_tables: bool = True) -> DatabaseManager:
    """Initialize database with default configuration

    Args:
        database_url: Database connection URL, taken from settings when omitted
        create_tables: Whether to create tables

    Returns:
        Configured DatabaseManager instance
    """
    from ..settings import get_settings

    config = get_settings().database
    db_manager = DatabaseManager(database_url or config.url, echo=config.echo, pool_size=config.pool_size)
    await db_manager.connect()

    if create_tables:
        await db_manager.create_tables()

    return db_manager
