"""
Ticket creation path.

``create_ticket`` is what an HTTP handler calls: it asks the shared
allocator for a number, inserts the ticket and commits. Verification in the
allocator keeps numbers distinct within one process; the unique constraint
on ``tickets.ticket_number`` catches writers in other processes that raced
past verification, and such a rejection is treated like one more collision.
"""

import logging
from typing import Iterable, Optional

import sqlalchemy as sa
import sqlalchemy.exc
import sqlalchemy.orm as so

from .exceptions import AllocationExhausted
from .tables import Ticket, TicketNumberAllocator, IdentifierStoreProtocol, PRIORITIES, STATUSES
from .tables.models import utcnow

logger = logging.getLogger(__name__)


def create_ticket(
    session: so.Session,
    allocator: TicketNumberAllocator,
    *,
    title: str,
    description: str,
    category: str,
    priority: str,
    customer_id: int,
    assigned_to: Optional[int] = None,
    language: str = "en",
    store: Optional[IdentifierStoreProtocol] = None,
) -> Ticket:
    """
    Allocate a ticket number, insert the ticket and commit.

    Args:
        session: Session owned by the calling request; committed here.
        allocator: The process-wide allocator.
        store: Identifier store to verify against. Defaults to the tickets
            table seen through ``session``.

    Raises:
        ValueError: unknown priority.
        StoreUnavailable: the store could not be queried during allocation.
        AllocationExhausted: no number could be allocated, or every insert
            attempt was rejected by the unique constraint.
    """
    if priority not in PRIORITIES:
        raise ValueError(f"Unknown priority '{priority}', expected one of {PRIORITIES}")

    tickets = Ticket.identifier_store(session, "ticket_number")
    if store is None:
        store = tickets

    attempts = allocator.config.insert_attempts
    ticket_number = None
    for attempt in range(1, attempts + 1):
        ticket_number = allocator.allocate(store)
        ticket = Ticket(
            ticket_number=ticket_number,
            title=title,
            description=description,
            category=category,
            priority=priority,
            status="open",
            customer_id=customer_id,
            assigned_to=assigned_to,
            language=language,
        )
        session.add(ticket)
        try:
            session.commit()
        except sqlalchemy.exc.IntegrityError as e:
            session.rollback()
            if not tickets.value_exists(ticket_number):
                # some other constraint failed
                raise
            logger.warning(
                f"Insert of {ticket_number} rejected (attempt {attempt}/{attempts}): {e.orig}"
            )
            continue

        logger.info(f"Created ticket {ticket_number} (id={ticket.id})")
        return ticket

    raise AllocationExhausted(
        f"Ticket insert rejected {attempts} times, last number {ticket_number}",
        attempts=attempts,
        last_candidate=ticket_number,
    )


def update_status(session: so.Session, ticket: Ticket, status: str) -> Ticket:
    if status not in STATUSES:
        raise ValueError(f"Unknown status '{status}', expected one of {STATUSES}")
    ticket.status = status
    ticket.updated_at = utcnow()
    session.commit()
    logger.info(f"Ticket {ticket.ticket_number} is now {status}")
    return ticket


def get_ticket(session: so.Session, ticket_number: str) -> Optional[Ticket]:
    return session.scalars(
        sa.select(Ticket).where(Ticket.ticket_number == ticket_number)
    ).one_or_none()


def list_tickets(
    session: so.Session,
    *,
    customer_id: Optional[int] = None,
    statuses: Optional[Iterable[str]] = None,
    priorities: Optional[Iterable[str]] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> list[Ticket]:
    """
    Tickets matching every given filter, most recently updated first.

    ``statuses`` and ``priorities`` match any of the listed values;
    ``search`` is a case-insensitive substring match on title or description.
    """
    stmt = sa.select(Ticket)
    if customer_id is not None:
        stmt = stmt.where(Ticket.customer_id == customer_id)
    if statuses is not None:
        stmt = stmt.where(Ticket.status.in_(list(statuses)))
    if priorities is not None:
        stmt = stmt.where(Ticket.priority.in_(list(priorities)))
    if category is not None:
        stmt = stmt.where(Ticket.category == category)
    if search:
        stmt = stmt.where(
            sa.or_(
                Ticket.title.icontains(search, autoescape=True),
                Ticket.description.icontains(search, autoescape=True),
            )
        )
    stmt = stmt.order_by(Ticket.updated_at.desc(), Ticket.id.desc())
    return list(session.scalars(stmt))
