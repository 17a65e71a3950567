import logging

import pytest
import sqlalchemy as sa
import sqlalchemy.orm as so

from ticketdesk import AllocatorConfig, Base, Ticket, TicketNumberAllocator


@pytest.fixture
def engine():
    engine = sa.create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session(engine):
    with so.Session(engine) as s:
        yield s

@pytest.fixture
def file_engine(tmp_path):
    """File-backed SQLite so that each thread can hold its own connection."""
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'tickets.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()

@pytest.fixture
def store(session):
    return Ticket.identifier_store(session, "ticket_number")

@pytest.fixture
def allocator():
    return TicketNumberAllocator(AllocatorConfig())

@pytest.fixture
def add_tickets(session):
    """Insert tickets directly, bypassing any allocator."""
    def _add(*numbers):
        for n in numbers:
            session.add(
                Ticket(
                    ticket_number=n,
                    title=f"legacy {n}",
                    description="imported",
                    category="general",
                    priority="low",
                    customer_id=1,
                )
            )
        session.commit()
    return _add

@pytest.fixture(autouse=True)
def _debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="ticketdesk")
