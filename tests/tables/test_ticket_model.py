import pytest
import sqlalchemy as sa

from ticketdesk import Ticket


def _ticket(number, **overrides):
    fields = dict(
        ticket_number=number,
        title="VPN down",
        description="Cannot connect since this morning",
        category="network",
        priority="high",
        customer_id=7,
    )
    fields.update(overrides)
    return Ticket(**fields)


def test_defaults_applied_on_insert(session):
    t = _ticket("TKT-10001")
    session.add(t)
    session.commit()

    assert t.status == "open"
    assert t.language == "en"
    assert t.created_at is not None
    assert t.updated_at is not None
    assert t.assigned_to is None

def test_ticket_number_is_unique(session):
    session.add(_ticket("TKT-10001"))
    session.commit()

    session.add(_ticket("TKT-10001", title="dup"))
    with pytest.raises(sa.exc.IntegrityError):
        session.commit()
    session.rollback()

def test_priority_is_checked(session):
    session.add(_ticket("TKT-10001", priority="whenever"))
    with pytest.raises(sa.exc.IntegrityError):
        session.commit()
    session.rollback()

def test_repr(session):
    assert repr(_ticket("TKT-10001", status="open")) == "<Ticket TKT-10001 status=open>"
