import datetime
import sqlalchemy as sa
import sqlalchemy.orm as so
from typing import Optional

from .base import SerialisableTableInterface, CSVLoadableTableInterface

PRIORITIES = ("low", "medium", "high", "urgent")
STATUSES = ("open", "in-progress", "resolved", "closed")


def utcnow() -> datetime.datetime:
    # stored naive, always UTC
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def _in(column: str, values: tuple[str, ...]) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


class Base(so.DeclarativeBase):
    pass


class Ticket(SerialisableTableInterface, CSVLoadableTableInterface, Base):
    """
    A support ticket. ``ticket_number`` is the human-facing identifier; the
    unique constraint on it is the final guard against two writers issuing
    the same number.
    """

    __tablename__ = "tickets"
    __table_args__ = (
        sa.UniqueConstraint("ticket_number", name="uq_tickets_ticket_number"),
        sa.CheckConstraint(_in("priority", PRIORITIES), name="ck_tickets_priority"),
        sa.CheckConstraint(_in("status", STATUSES), name="ck_tickets_status"),
    )
    _natural_key = ["ticket_number"]
    _identity_columns = ("ticket_number",)
    _fingerprint_exclude = frozenset({"id", "created_at", "updated_at"})

    id: so.Mapped[int] = so.mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    ticket_number: so.Mapped[str] = so.mapped_column(sa.String(32), nullable=False, index=True)
    title: so.Mapped[str] = so.mapped_column(sa.String(200), nullable=False)
    description: so.Mapped[str] = so.mapped_column(sa.Text, nullable=False)
    category: so.Mapped[str] = so.mapped_column(sa.String(64), nullable=False)
    priority: so.Mapped[str] = so.mapped_column(sa.String(16), nullable=False)
    status: so.Mapped[str] = so.mapped_column(sa.String(16), nullable=False, default="open")
    customer_id: so.Mapped[int] = so.mapped_column(sa.Integer, nullable=False)
    assigned_to: so.Mapped[Optional[int]] = so.mapped_column(sa.Integer, nullable=True)
    language: so.Mapped[str] = so.mapped_column(sa.String(8), nullable=False, default="en")
    created_at: so.Mapped[datetime.datetime] = so.mapped_column(sa.DateTime, nullable=False, default=utcnow)
    updated_at: so.Mapped[datetime.datetime] = so.mapped_column(
        sa.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<Ticket {self.ticket_number} status={self.status}>"
