import sqlite3
from datetime import date
from typing import Generator, Optional

import psycopg2
import pytest

import db.connection
from db.init_db import create_tables
from mappers.registry import MapperRegistry
from models.city import City
from models.evaluation import CompleteEvaluation
from models.evaluation_criteria import EvaluationCriteria
from models.restaurant import Localisation, Restaurant
from models.restaurant_type import RestaurantType

sqlite3.register_adapter(date, lambda value: value.isoformat())
sqlite3.register_converter("DATE", lambda raw: date.fromisoformat(raw.decode()))


class SqliteCursor:
    """psycopg2-style cursor on top of sqlite3 (``%s`` placeholders, context manager)."""

    def __init__(self, store: "SqliteStore", raw: sqlite3.Cursor) -> None:
        self._store = store
        self._raw = raw

    def __enter__(self) -> "SqliteCursor":
        return self

    def __exit__(self, *exc) -> bool:
        self._raw.close()
        return False

    def execute(self, sql: str, params: tuple = ()) -> None:
        self._store.statements.append(" ".join(sql.split()))
        if self._store.fail_on and sql.lstrip().upper().startswith(self._store.fail_on):
            raise psycopg2.OperationalError(f"injected failure on {self._store.fail_on}")
        try:
            self._raw.execute(sql.replace("%s", "?"), tuple(params))
        except sqlite3.Error as e:
            raise psycopg2.DatabaseError(str(e)) from e

    def fetchone(self) -> Optional[tuple]:
        return self._raw.fetchone()

    def fetchall(self) -> list[tuple]:
        return self._raw.fetchall()

    @property
    def rowcount(self) -> int:
        return self._raw.rowcount


class SqliteStore:
    """
    In-memory database playing both the psycopg2 pool and its single connection.

    ``nextval(name)`` is provided as a SQL function so the real
    SequenceAllocator runs unchanged.
    """

    def __init__(self) -> None:
        self.conn = sqlite3.connect(":memory:", detect_types=sqlite3.PARSE_DECLTYPES)
        self.conn.execute("PRAGMA foreign_keys = ON")
        self.conn.create_function("nextval", 1, self._nextval)
        self.sequences: dict[str, int] = {}
        self.statements: list[str] = []
        self.fail_on: Optional[str] = None
        self.fail_sequences = False
        self.released = 0

    def _nextval(self, name: str) -> int:
        if self.fail_sequences:
            raise RuntimeError(f"sequence {name} unavailable")
        self.sequences[name] = self.sequences.get(name, 0) + 1
        return self.sequences[name]

    # pool
    def getconn(self) -> "SqliteStore":
        return self

    def putconn(self, conn) -> None:
        self.released += 1

    def closeall(self) -> None:
        self.conn.close()

    # connection
    def cursor(self) -> SqliteCursor:
        return SqliteCursor(self, self.conn.cursor())

    def commit(self) -> None:
        self.conn.commit()

    def rollback(self) -> None:
        self.conn.rollback()

    # helpers for assertions
    def rows(self, sql: str) -> list[tuple]:
        return self.conn.execute(sql).fetchall()

    def ids(self, table: str) -> set[int]:
        return {row[0] for row in self.rows(f"SELECT numero FROM {table}")}


@pytest.fixture()
def store(monkeypatch: pytest.MonkeyPatch) -> Generator[SqliteStore, None, None]:
    store = SqliteStore()
    monkeypatch.setattr(db.connection, "_pool", store)
    create_tables(with_sequences=False)
    store.statements.clear()
    yield store
    store.conn.close()


@pytest.fixture()
def registry(store: SqliteStore) -> MapperRegistry:
    return MapperRegistry()


@pytest.fixture()
def neuchatel(registry: MapperRegistry) -> City:
    return registry.cities.create(City(zip_code="2000", city_name="Neuchâtel"))


@pytest.fixture()
def pizzeria(registry: MapperRegistry) -> RestaurantType:
    return registry.restaurant_types.create(
        RestaurantType(label="Pizzeria", description="Pizzas au feu de bois")
    )


@pytest.fixture()
def da_mario(registry: MapperRegistry, neuchatel: City, pizzeria: RestaurantType) -> Restaurant:
    return registry.restaurants.create(
        Restaurant(
            name="Da Mario",
            address=Localisation(street="Rue Pourtalès 1", city=neuchatel),
            restaurant_type=pizzeria,
            website="https://damario.ch",
        )
    )


@pytest.fixture()
def review(registry: MapperRegistry, da_mario: Restaurant) -> CompleteEvaluation:
    return registry.complete_evaluations.create(
        CompleteEvaluation(
            comment="Great",
            username="bob",
            visit_date=date(2024, 3, 14),
            restaurant=da_mario,
        )
    )


@pytest.fixture()
def service(registry: MapperRegistry) -> EvaluationCriteria:
    return registry.criteria.create(
        EvaluationCriteria(name="Service", description="Qualité du service")
    )
