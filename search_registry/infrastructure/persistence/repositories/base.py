"""Searchable repository: key lookups and batch fetches for one model type."""

import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from search_registry.domain.exceptions import ConfigurationException
from search_registry.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class SearchableRepository(Generic[ModelType]):
    """Stateless query facade over a session factory for one model type.

    Each call opens its own session, so one instance can be registered once
    and shared across concurrent requests. Keys arrive serialized (strings from
    the index) and are coerced to the key column's Python type.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[ModelType],
    ) -> None:
        self.session_factory = session_factory
        self.model = model

    async def find_by_key(
        self, key: Any, *, key_field: str = "id"
    ) -> ModelType | None:
        """Return the record whose key_field equals key, or None."""
        column = self._key_column(key_field)
        coerced = self._coerce_keys(column, [key])
        if not coerced:
            return None
        async with self.session_factory() as session:
            result = await session.execute(
                select(self.model).where(column == coerced[0])
            )
            return result.scalars().first()

    async def find_by_keys(
        self,
        keys: Sequence[Any],
        *,
        key_field: str = "id",
        eager_load: Sequence[str] = (),
    ) -> list[ModelType]:
        """Return records whose key_field is in keys, with eager_load relations loaded.

        One SELECT ... WHERE key IN (...); no query when keys is empty.
        Relation names the model does not define are skipped.
        """
        column = self._key_column(key_field)
        coerced = self._coerce_keys(column, keys)
        if not coerced:
            return []
        stmt = select(self.model).where(column.in_(coerced))
        options = self._eager_options(eager_load)
        if options:
            stmt = stmt.options(*options)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    def normalize_key(self, key: Any, *, key_field: str = "id") -> Any | None:
        """Return key in the column's canonical form, or None if it cannot match.

        "05" and 5 both normalize to 5 for an integer column, so a fetched
        record can be matched back to the serialized key that found it.
        """
        coerced = self._coerce_keys(self._key_column(key_field), [key])
        return coerced[0] if coerced else None

    def check_key_field(self, key_field: str) -> None:
        """Raise ConfigurationException unless the model maps key_field."""
        self._key_column(key_field)

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[ModelType]:
        """Return records ordered by primary key, with pagination."""
        mapper = sa_inspect(self.model)
        stmt = (
            select(self.model)
            .order_by(*mapper.primary_key)
            .offset(skip)
            .limit(limit)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    def _key_column(self, key_field: str) -> Any:
        """Return the mapped column attribute for key_field.

        Raises:
            ConfigurationException: The model maps no column named key_field.
        """
        mapper = sa_inspect(self.model)
        if key_field not in mapper.column_attrs:
            raise ConfigurationException(
                f"{self.model.__name__} has no column '{key_field}' to look up by",
                type_name=self.model.__name__,
                key_field=key_field,
            )
        return getattr(self.model, key_field)

    @staticmethod
    def _coerce_keys(column: Any, keys: Sequence[Any]) -> list[Any]:
        """Convert serialized keys to the column's Python type.

        Keys that cannot be converted cannot match any row and are dropped.
        """
        try:
            python_type = column.expression.type.python_type
        except NotImplementedError:
            return list(keys)
        coerced: list[Any] = []
        for key in keys:
            if isinstance(key, python_type):
                coerced.append(key)
                continue
            try:
                coerced.append(python_type(key))
            except (TypeError, ValueError):
                logger.debug("Dropping key %r: not convertible to %s", key, python_type)
        return coerced

    def _eager_options(self, eager_load: Sequence[str]) -> list[LoaderOption]:
        relationships = sa_inspect(self.model).relationships
        options: list[LoaderOption] = []
        for name in eager_load:
            if name not in relationships:
                logger.debug(
                    "Skipping eager load of %s.%s: no such relationship",
                    self.model.__name__,
                    name,
                )
                continue
            options.append(selectinload(getattr(self.model, name)))
        return options
