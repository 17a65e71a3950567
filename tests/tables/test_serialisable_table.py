import datetime
import json

from ticketdesk import Ticket


def _ticket():
    t = Ticket()
    t.id = 1
    t.ticket_number = "TKT-10001"
    t.title = "Laptop"
    t.description = "Screen flickers"
    t.category = "hardware"
    t.priority = "medium"
    t.status = "open"
    t.customer_id = 3
    t.assigned_to = None
    t.language = "en"
    t.created_at = datetime.datetime(2024, 10, 2, 9, 30)
    t.updated_at = datetime.datetime(2024, 10, 2, 9, 30)
    return t


def test_to_dict_excludes_nulls():
    out = _ticket().to_dict()

    assert out["ticket_number"] == "TKT-10001"
    assert "assigned_to" not in out


def test_to_dict_includes_nulls_when_requested():
    out = _ticket().to_dict(include_nulls=True)

    assert out["assigned_to"] is None


def test_to_dict_only_and_exclude():
    t = _ticket()

    assert t.to_dict(only={"ticket_number"}) == {"ticket_number": "TKT-10001"}
    assert "description" not in t.to_dict(exclude={"description"})


def test_to_json_serialises_datetimes():
    payload = json.loads(_ticket().to_json())
    assert payload["created_at"] == "2024-10-02T09:30:00Z"


def test_fingerprint_is_stable_and_content_sensitive():
    a, b = _ticket(), _ticket()
    assert a.fingerprint() == b.fingerprint()

    b.status = "closed"
    assert a.fingerprint() != b.fingerprint()


def test_iter_yields_items():
    assert dict(_ticket())["priority"] == "medium"


def test_ticket_number_always_emitted():
    t = _ticket()

    assert t.to_dict(only={"title"}) == {"ticket_number": "TKT-10001", "title": "Laptop"}
    assert "ticket_number" in t.to_dict(exclude={"ticket_number"})


def test_fingerprint_ignores_bookkeeping_columns():
    original, imported = _ticket(), _ticket()
    imported.id = 99
    imported.created_at = datetime.datetime(2025, 1, 1)
    imported.updated_at = datetime.datetime(2025, 1, 2)

    assert original.fingerprint() == imported.fingerprint()


def test_aware_timestamps_rendered_in_utc():
    t = _ticket()
    t.created_at = datetime.datetime(
        2024, 10, 2, 11, 30, tzinfo=datetime.timezone(datetime.timedelta(hours=2))
    )
    assert json.loads(t.to_json())["created_at"] == "2024-10-02T09:30:00Z"
