"""
Common repository behaviour for store tables.

Every repository maps one pydantic record model onto one table through
hand-written parameterized ``text()`` statements. Each public call runs a
single statement in its own transaction, unless an explicit transaction
scope is open on the store handle, in which case it joins that scope.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..database.connection import StoreHandle
from ..exceptions import ConstraintViolation, NotFound, StoreError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConflictPolicy(str, Enum):
    """What an insert does when the primary key already exists."""
    ABORT = "abort"        # raise ConstraintViolation
    REPLACE = "replace"    # overwrite the existing row


class BaseRepository(Generic[ModelT]):
    """
    Typed CRUD operations over one table.

    Subclasses set ``table``, ``model`` and ``columns`` (the non-id column
    names, which are also the model's field aliases) and add their own
    filtered queries on top of ``_select``.
    """

    table: str = ""
    model: Type[ModelT]
    columns: Tuple[str, ...] = ()
    default_order: str = "id DESC"
    default_conflict_policy: ConflictPolicy = ConflictPolicy.ABORT

    def __init__(self, handle: StoreHandle):
        self.handle = handle

    @contextmanager
    def _connect(self) -> Iterator[Connection]:
        """Get a connection, translating driver errors into store errors."""
        try:
            with self.handle.connection() as conn:
                yield conn
        except IntegrityError as e:
            logger.debug(f"Constraint violation on {self.table}: {e.orig}")
            raise ConstraintViolation(f"{self.table}: {e.orig}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"{self.table}: {e}") from e

    @staticmethod
    def _quote(name: str) -> str:
        return f'"{name}"'

    def _to_params(self, record: ModelT, with_id: bool = False) -> Dict[str, Any]:
        values = record.model_dump(by_alias=True)
        keys = ("id",) + self.columns if with_id else self.columns
        return {key: values[key] for key in keys}

    def _to_model(self, row) -> ModelT:
        return self.model.model_validate(dict(row._mapping))

    def _fetch_all(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[ModelT]:
        with self._connect() as conn:
            result = conn.execute(text(sql), params or {})
            return [self._to_model(row) for row in result]

    def _fetch_one(self, sql: str, params: Optional[Dict[str, Any]] = None) -> Optional[ModelT]:
        with self._connect() as conn:
            row = conn.execute(text(sql), params or {}).fetchone()
            return self._to_model(row) if row is not None else None

    def _scalar_int(self, sql: str, params: Optional[Dict[str, Any]] = None) -> int:
        with self._connect() as conn:
            return conn.execute(text(sql), params or {}).scalar() or 0

    def _execute(self, sql: str, params: Optional[Dict[str, Any]] = None) -> int:
        with self._connect() as conn:
            return conn.execute(text(sql), params or {}).rowcount

    def _select(self, where: str = "", order: Optional[str] = None, limit: Optional[int] = None) -> str:
        sql = f"SELECT * FROM {self._quote(self.table)}"
        if where:
            sql += f" WHERE {where}"
        sql += f" ORDER BY {order or self.default_order}"
        if limit is not None:
            sql += f" LIMIT {int(limit)}"
        return sql

    @staticmethod
    def _escape_like(term: str) -> str:
        return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

    @classmethod
    def _contains(cls, term: str) -> str:
        """Wrap a search term into a substring LIKE pattern matching it literally."""
        return f"%{cls._escape_like(term)}%"

    @staticmethod
    def _like(column: str, param: str = "term") -> str:
        return f"{column} LIKE :{param} ESCAPE '\\'"

    # Write operations

    def insert(self, record: ModelT, on_conflict: Optional[ConflictPolicy] = None) -> int:
        """
        Insert a record.

        Args:
            record: Record to store; its id is kept when set, otherwise the
                engine assigns one
            on_conflict: Primary-key conflict policy, defaults to the
                repository's policy

        Returns:
            Identifier of the stored row

        Raises:
            ConstraintViolation: On primary-key collision under ABORT
        """
        policy = on_conflict or self.default_conflict_policy
        with_id = record.id is not None
        keys = ("id",) + self.columns if with_id else self.columns
        verb = "INSERT OR REPLACE" if policy is ConflictPolicy.REPLACE else "INSERT"
        sql = (
            f"{verb} INTO {self._quote(self.table)} "
            f"({', '.join(self._quote(key) for key in keys)}) "
            f"VALUES ({', '.join(':' + key for key in keys)})"
        )
        with self._connect() as conn:
            result = conn.execute(text(sql), self._to_params(record, with_id=with_id))
            new_id = record.id if with_id else result.lastrowid
        logger.debug(f"Inserted {self.table} id={new_id}")
        return new_id

    def insert_many(self, records: Iterable[ModelT]) -> List[int]:
        """
        Insert several records atomically.

        Either every record is stored or, if any insert fails, none is.

        Returns:
            Identifiers of the stored rows, in input order
        """
        with self.handle.transaction():
            return [self.insert(record) for record in records]

    def update(self, record: ModelT) -> int:
        """
        Replace every column of the row with the record's id.

        Returns:
            Number of rows changed; 0 when no row has that id
        """
        if record.id is None:
            return 0
        assignments = ", ".join(f"{self._quote(col)} = :{col}" for col in self.columns)
        sql = f"UPDATE {self._quote(self.table)} SET {assignments} WHERE id = :id"
        return self._execute(sql, self._to_params(record, with_id=True))

    def delete(self, record: ModelT) -> int:
        """
        Delete the row matching the record's id.

        Returns:
            Number of rows removed (0 or 1)
        """
        if record.id is None:
            return 0
        return self.delete_by_id(record.id)

    def delete_by_id(self, record_id: int) -> int:
        """
        Delete a row by id.

        Returns:
            Number of rows removed (0 or 1)
        """
        sql = f"DELETE FROM {self._quote(self.table)} WHERE id = :id"
        return self._execute(sql, {"id": record_id})

    # Read operations

    def find_all(self) -> List[ModelT]:
        return self._fetch_all(self._select())

    def find_by_id(self, record_id: int) -> Optional[ModelT]:
        return self._fetch_one(self._select("id = :id"), {"id": record_id})

    def require(self, record_id: int) -> ModelT:
        """
        Get a record by id.

        Raises:
            NotFound: If no row has that id
        """
        record = self.find_by_id(record_id)
        if record is None:
            raise NotFound(f"{self.table} id={record_id} not found")
        return record

    def count(self) -> int:
        return self._scalar_int(f"SELECT COUNT(*) FROM {self._quote(self.table)}")


__all__ = [
    "ConflictPolicy",
    "BaseRepository",
]
