import sqlalchemy as sa
import sqlalchemy.orm as so
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Optional

from ...exceptions import StoreUnavailable

if TYPE_CHECKING:
    from ...identifiers import IdentifierFormat

logger = logging.getLogger(__name__)

# errors meaning "the store could not answer", as opposed to a bad query.
# SQLite reports a missing table as OperationalError; PostgreSQL raises
# ProgrammingError, which deliberately propagates.
_UNAVAILABLE = (
    sa.exc.OperationalError,
    sa.exc.InterfaceError,
    sa.exc.TimeoutError,
)


class SqlIdentifierStore:
    """
    Identifier store backed by one string column of a mapped table.

    Reads go through the caller's session, so a store is as thread-bound as
    the session it wraps. Uniqueness of the column is expected to be enforced
    by the database itself; this class only answers the allocator's queries.
    """

    def __init__(self, session: so.Session, column):
        self.session = session
        self.column = column

    def __repr__(self) -> str:
        return f"SqlIdentifierStore({self.column})"

    def highest_value(self, fmt: "IdentifierFormat") -> Optional[str]:
        # Well-formed values never carry a leading zero beyond the minimum
        # width, so ordering by length then text is ordering by numeral.
        # Malformed rows that pass the LIKE pre-filter are skipped here.
        stmt = (
            sa.select(self.column)
            .where(self.column.startswith(fmt.like_prefix, autoescape=True))
            .order_by(sa.func.length(self.column).desc(), self.column.desc())
        )
        skipped = 0
        with self._unavailable_on_error("highest_value"):
            result = self.session.scalars(stmt)
            try:
                for value in result:
                    if fmt.matches(value):
                        return value
                    skipped += 1
            finally:
                result.close()
                if skipped:
                    logger.debug(f"Ignored {skipped} malformed values in {self.column}")
        return None

    def value_exists(self, value: str) -> bool:
        stmt = sa.select(sa.literal(1)).where(self.column == value).limit(1)
        with self._unavailable_on_error("value_exists"):
            return self.session.execute(stmt).first() is not None

    @contextmanager
    def _unavailable_on_error(self, operation: str):
        try:
            yield
        except _UNAVAILABLE as e:
            self.session.rollback()
            reason = getattr(e, "orig", None) or e
            raise StoreUnavailable(f"{operation} on {self.column} failed: {reason}") from e
