import contextlib
import logging
from typing import Any, AsyncIterator, Iterator

import sqlalchemy
from databases import Database
from databases.interfaces import Record
from sqlalchemy.sql import ClauseElement

from .errors import ConstraintViolation, GameNightError, StoreError
from .tables import metadata

logger = logging.getLogger(__name__)

Query = ClauseElement | str

# Matched by name so we don't have to import every driver.
_INTEGRITY_ERRORS = {
    "IntegrityError",
    "IntegrityConstraintViolationError",
    "UniqueViolationError",
    "ForeignKeyViolationError",
    "NotNullViolationError",
    "CheckViolationError",
}


def _is_integrity_error(e: BaseException) -> bool:
    return any(cls.__name__ in _INTEGRITY_ERRORS for cls in type(e).__mro__)


@contextlib.contextmanager
def _store_errors(what: str) -> Iterator[None]:
    try:
        yield
    except GameNightError:
        raise
    except Exception as e:
        if _is_integrity_error(e):
            raise ConstraintViolation(f"Constraint violated during {what}.", e) from e
        raise StoreError(f"Store failed during {what}.", e) from e


class Store:
    """
    The relational store everything else talks to.
    Call `connect` at startup and `disconnect` at shutdown. Each task gets its
    own connection from the pool, and a transaction holds that connection
    until it commits or rolls back.
    """

    def __init__(self, database_url: str, **options: Any):
        self.database_url = database_url
        self.database = Database(database_url, **options)

    @property
    def is_connected(self) -> bool:
        return self.database.is_connected

    async def connect(self) -> None:
        with _store_errors("connect"):
            await self.database.connect()

    async def disconnect(self) -> None:
        with _store_errors("disconnect"):
            await self.database.disconnect()

    async def create_schema(self) -> None:
        async with self.transaction():
            for table in metadata.sorted_tables:
                await self.execute(
                    sqlalchemy.schema.CreateTable(table, if_not_exists=True)
                )
                for index in table.indexes:
                    await self.execute(
                        sqlalchemy.schema.CreateIndex(index, if_not_exists=True)
                    )

    async def execute(self, query: Query, values: dict[str, Any] | None = None) -> Any:
        with _store_errors("execute"):
            return await self.database.execute(query=query, values=values)

    async def fetch_all(
        self, query: Query, values: dict[str, Any] | None = None
    ) -> list[Record]:
        with _store_errors("fetch_all"):
            return await self.database.fetch_all(query=query, values=values)

    async def fetch_one(
        self, query: Query, values: dict[str, Any] | None = None
    ) -> Record | None:
        with _store_errors("fetch_one"):
            return await self.database.fetch_one(query=query, values=values)

    async def fetch_val(
        self,
        query: Query,
        values: dict[str, Any] | None = None,
        column: Any = 0,
    ) -> Any:
        with _store_errors("fetch_val"):
            return await self.database.fetch_val(
                query=query, values=values, column=column
            )

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """
        Begin, then commit if the block finishes or roll back if anything
        (cancellation included) escapes it.
        """
        with _store_errors("begin"):
            transaction = await self.database.transaction()
        try:
            yield
        except BaseException:
            try:
                await transaction.rollback()
            except Exception:
                logger.exception("Rollback failed.")
            raise
        with _store_errors("commit"):
            await transaction.commit()
