import logging
from contextlib import contextmanager
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

@contextmanager
def bulk_load_context(session: Session, *, no_autoflush: bool = True):
    """
    Wrap a bulk import: pending ORM objects are not flushed mid-import, and
    any exception rolls back the whole import before propagating, so a failed
    file leaves no partial tickets behind. The caller commits.

    Constraints stay enforced throughout; the unique ticket number is the
    guard that keeps imported rows from colliding with issued ones.
    """
    try:
        if no_autoflush:
            with session.no_autoflush:
                yield
        else:
            yield
    except Exception:
        logger.warning("Bulk load failed, rolling back")
        session.rollback()
        raise
