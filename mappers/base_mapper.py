"""
mappers/base_mapper.py
----------------------
Shared CRUD skeleton for the entity mappers.

A concrete mapper declares its table, its sequence and its writable
columns, and implements two hooks:

    - ``_hydrate(row)``: build an entity from a selected row.
    - ``_values(entity)``: column values for INSERT/UPDATE, in ``columns`` order.

Every read goes through the mapper's IdentityMap, every write runs inside
``db.connection.transaction()`` and touches the cache only after commit.
Storage errors (``psycopg2.Error``) are logged and turned into ``None``,
``WriteResult.FAILED`` or an empty set; they never reach the caller.
"""

from enum import Enum
from functools import partial
from typing import Any, Callable, Generic, Optional, TypeVar, Union

import psycopg2

from db.connection import read_cursor, transaction
from db.sequence import SequenceAllocator
from mappers.identity_map import IdentityMap
from models.reference import Reference, ref_id
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class WriteResult(Enum):
    """Outcome of an update or delete. Only ``OK`` is truthy."""

    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"

    def __bool__(self) -> bool:
        return self is WriteResult.OK


class BaseMapper(Generic[T]):
    """Row <-> entity translation, identity map and CRUD for one table."""

    entity_type: type
    table: str
    sequence: str
    columns: tuple[str, ...] = ()
    id_column: str = "numero"

    def __init__(
        self,
        identity_map: Optional[IdentityMap[T]] = None,
        allocator: Optional[SequenceAllocator] = None,
    ) -> None:
        self.identity_map: IdentityMap[T] = (
            identity_map if identity_map is not None else IdentityMap(self.table)
        )
        self.allocator = allocator if allocator is not None else SequenceAllocator()

    @property
    def entity_name(self) -> str:
        return self.entity_type.__name__

    # ── HOOKS ─────────────────────────────────────────────

    def _select_sql(self) -> str:
        """SELECT returning the id first, then ``columns``."""
        return f"SELECT {self.id_column}, {', '.join(self.columns)} FROM {self.table}"

    def _id_filter(self) -> str:
        """Column expression used in ``WHERE ... = %s`` for a primary key lookup."""
        return self.id_column

    def _hydrate(self, row: tuple) -> T:
        raise NotImplementedError

    def _values(self, entity: T) -> tuple:
        raise NotImplementedError

    @staticmethod
    def _foreign_key(value: Any, label: str) -> int:
        """
        Id to store for a foreign key column.

        Raises:
            ValueError: If the referenced entity has not been persisted yet.
        """
        fk = ref_id(value)
        if fk is None:
            raise ValueError(f"{label} must be created before it can be referenced")
        return fk

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, entity_id: int) -> Optional[T]:
        """
        Fetch one entity by primary key.

        Args:
            entity_id: Primary key.

        Returns:
            The cached instance if there is one (no I/O), otherwise the
            freshly hydrated and cached instance, or None if no row matches.
        """
        cached = self.identity_map.get(entity_id)
        if cached is not None:
            logger.debug(f"{self.entity_name} #{entity_id} found in cache")
            return cached

        sql = f"{self._select_sql()} WHERE {self._id_filter()} = %s;"
        try:
            with read_cursor() as cur:
                cur.execute(sql, (entity_id,))
                row = cur.fetchone()
        except psycopg2.Error as e:
            logger.error(f"Failed to load {self.entity_name} #{entity_id}: {e}")
            return None

        if row is None:
            return None
        entity = self.identity_map.get_or_put(row[0], partial(self._hydrate, row))
        logger.debug(f"{self.entity_name} #{entity_id} loaded into cache")
        return entity

    def find_all(self) -> set[T]:
        """
        Load every row of the table.

        Rows sharing an id collapse to one instance. Afterwards the cache
        holds exactly the loaded rows: entries not present in storage any
        more are dropped. On a storage error the cache is left untouched
        and an empty set is returned.
        """
        try:
            with read_cursor() as cur:
                cur.execute(f"{self._select_sql()};")
                rows = cur.fetchall()
        except psycopg2.Error as e:
            logger.error(f"Failed to load all {self.table}: {e}")
            return set()

        loaded: dict[int, T] = {}
        for row in rows:
            if row[0] not in loaded:
                loaded[row[0]] = self._hydrate(row)
        self.identity_map.replace(loaded)
        logger.debug(f"find_all(): {len(loaded)} {self.table} loaded from the database")
        return set(loaded.values())

    def _find_where(
        self,
        column: str,
        value: Any,
        hydrate: Optional[Callable[[tuple], T]] = None,
    ) -> set[T]:
        """Load the rows whose ``column`` equals ``value`` through the cache."""
        sql = f"{self._select_sql()} WHERE {column} = %s;"
        try:
            with read_cursor() as cur:
                cur.execute(sql, (value,))
                rows = cur.fetchall()
        except psycopg2.Error as e:
            logger.error(f"Failed to load {self.table} where {column} = {value}: {e}")
            return set()

        hydrate = hydrate or self._hydrate
        return {self.identity_map.get_or_put(row[0], partial(hydrate, row)) for row in rows}

    def exists(self, entity_id: int) -> bool:
        """True if a row with this id is in storage (False on storage error)."""
        sql = f"SELECT 1 FROM {self.table} WHERE {self.id_column} = %s;"
        try:
            with read_cursor() as cur:
                cur.execute(sql, (entity_id,))
                return cur.fetchone() is not None
        except psycopg2.Error as e:
            logger.error(f"Failed to check {self.entity_name} #{entity_id}: {e}")
            return False

    def count(self) -> Optional[int]:
        """Number of rows in the table, or None on storage error."""
        try:
            with read_cursor() as cur:
                cur.execute(f"SELECT COUNT(*) FROM {self.table};")
                return int(cur.fetchone()[0])
        except psycopg2.Error as e:
            logger.error(f"Failed to count {self.table}: {e}")
            return None

    # ── CREATE ────────────────────────────────────────────

    def create(self, entity: T) -> Optional[T]:
        """
        Insert a new row for ``entity``.

        The id is drawn from the table's sequence inside the INSERT's own
        transaction and is only set on the entity after commit.

        Returns:
            The same entity with its ``id`` populated and cached, or None if
            the sequence or the INSERT failed.

        Raises:
            ValueError: If ``entity`` already has an id, or a referenced
                entity has no id yet.
        """
        if entity.id is not None:
            raise ValueError(
                f"{self.entity_name} #{entity.id} is already created, use update()"
            )
        values = self._values(entity)
        placeholders = ", ".join(["%s"] * (len(self.columns) + 1))
        sql = (
            f"INSERT INTO {self.table} ({self.id_column}, {', '.join(self.columns)}) "
            f"VALUES ({placeholders});"
        )
        try:
            with transaction() as cur:
                new_id = self.allocator.next(cur, self.sequence)
                cur.execute(sql, (new_id, *values))
        except psycopg2.Error as e:
            logger.error(f"Failed to create {self.entity_name}: {e}")
            return None

        entity.id = new_id
        self.identity_map.put(new_id, entity)
        logger.info(f"Created {self.entity_name} #{new_id}")
        return entity

    # ── UPDATE ────────────────────────────────────────────

    def update(self, entity: T) -> WriteResult:
        """
        Write every mutable column of ``entity`` to its row.

        Returns:
            OK (cache entry overwritten with ``entity``), NOT_FOUND if no
            row has this id (any stale cache entry is dropped), or FAILED.

        Raises:
            ValueError: If ``entity`` or one of its references has no id.
        """
        if entity.id is None:
            raise ValueError(f"Cannot update a {self.entity_name} that was never created")
        values = self._values(entity)
        assignments = ", ".join(f"{column} = %s" for column in self.columns)
        sql = f"UPDATE {self.table} SET {assignments} WHERE {self.id_column} = %s;"
        try:
            with transaction() as cur:
                cur.execute(sql, (*values, entity.id))
                affected = cur.rowcount
        except psycopg2.Error as e:
            logger.error(f"Failed to update {self.entity_name} #{entity.id}: {e}")
            return WriteResult.FAILED

        if affected == 0:
            self.identity_map.remove(entity.id)
            logger.warning(f"Update of {self.entity_name} #{entity.id} matched no row")
            return WriteResult.NOT_FOUND
        self.identity_map.put(entity.id, entity)
        logger.info(f"Updated {self.entity_name} #{entity.id}")
        return WriteResult.OK

    # ── DELETE ────────────────────────────────────────────

    def delete(self, entity: T) -> WriteResult:
        """Delete the row of ``entity`` and drop it from the cache."""
        if entity.id is None:
            return WriteResult.NOT_FOUND
        sql = f"DELETE FROM {self.table} WHERE {self.id_column} = %s;"
        try:
            with transaction() as cur:
                cur.execute(sql, (entity.id,))
                affected = cur.rowcount
        except psycopg2.Error as e:
            logger.error(f"Failed to delete {self.entity_name} #{entity.id}: {e}")
            return WriteResult.FAILED

        self.identity_map.remove(entity.id)
        if affected == 0:
            logger.warning(f"Delete of {self.entity_name} #{entity.id} matched no row")
            return WriteResult.NOT_FOUND
        logger.info(f"Deleted {self.entity_name} #{entity.id}")
        return WriteResult.OK

    def delete_by_id(self, entity_id: int) -> WriteResult:
        """Look the entity up, then delete it. NOT_FOUND if there is none."""
        entity = self.find_by_id(entity_id)
        if entity is None:
            return WriteResult.NOT_FOUND
        return self.delete(entity)

    # ── RELATIONS ─────────────────────────────────────────

    def cached(self, entity_id: int) -> Optional[T]:
        """Cached instance for ``entity_id``, without any I/O."""
        return self.identity_map.get(entity_id)

    def owner_for(
        self, entity_id: int, candidate: Optional[T] = None
    ) -> Union[T, Reference[T]]:
        """
        Instance another mapper should link to for ``entity_id``.

        The cached instance wins over ``candidate``, so a caller holding an
        instance this mapper no longer caches never spreads it. Without
        either, a Reference.
        """
        cached = self.identity_map.get(entity_id)
        if cached is not None:
            return cached
        if candidate is not None:
            return candidate
        return Reference(self.entity_type, entity_id)

    def adopt(self, entity_id: int, factory: Callable[[], T]) -> T:
        """
        Register an instance built from columns another mapper already read.

        The cache is consulted first, so an instance this mapper already
        owns always wins over the freshly built one.
        """
        return self.identity_map.get_or_put(entity_id, factory)

    def resolve(self, value: Union[T, Reference[T], None]) -> Optional[T]:
        """
        Turn a Reference into the loaded entity (via ``find_by_id``).

        A loaded entity (or None) is returned unchanged.

        Raises:
            TypeError: If the reference points at another entity type.
        """
        if not isinstance(value, Reference):
            return value
        if value.entity_type is not self.entity_type:
            raise TypeError(
                f"{self.__class__.__name__} cannot resolve {value!r}"
            )
        return self.find_by_id(value.id)
