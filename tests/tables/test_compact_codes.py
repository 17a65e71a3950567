import datetime
import random
import re
import threading

from ticketdesk import AllocatorConfig, CompactCodeAllocator, DateScopedCodeAllocator


def test_compact_codes_increase_from_floor():
    alloc = CompactCodeAllocator()
    assert alloc.allocate() == "T-1001"
    assert alloc.allocate() == "T-1002"

def test_compact_width_expands():
    alloc = CompactCodeAllocator(AllocatorConfig(compact_floor=9998))
    assert alloc.allocate() == "T-9999"
    assert alloc.allocate() == "T-10000"

def test_compact_codes_restart_from_floor():
    # no durable state: a new instance repeats earlier codes
    assert CompactCodeAllocator().allocate() == CompactCodeAllocator().allocate()

def test_compact_codes_unique_within_instance_under_threads():
    alloc = CompactCodeAllocator()
    out = []
    lock = threading.Lock()

    def worker():
        mine = [alloc.allocate() for _ in range(100)]
        with lock:
            out.extend(mine)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(set(out)) == 400


def _fixed_clock():
    return datetime.datetime(2024, 10, 2, 9, 30)

def test_date_codes_use_default_config():
    code = DateScopedCodeAllocator(clock=_fixed_clock, rng=random.Random(5)).allocate()
    date, ordinal = code.split("-")
    assert date == "241002"
    assert len(ordinal) == 3

def test_date_ordinal_width_from_environment():
    config = AllocatorConfig.from_env(
        dotenv=False, environ={"TICKETDESK_DATE_ORDINAL_WIDTH": "5"}
    )
    alloc = DateScopedCodeAllocator(config, clock=_fixed_clock, rng=random.Random(5))

    codes = [alloc.allocate() for _ in range(50)]
    assert all(len(c.split("-")[1]) == 5 for c in codes)
    assert any(int(c.split("-")[1]) > 999 for c in codes)

def test_date_codes_use_configured_separator():
    alloc = DateScopedCodeAllocator(
        AllocatorConfig(separator="/", date_ordinal_width=2),
        clock=_fixed_clock,
        rng=random.Random(5),
    )
    assert re.fullmatch(r"241002/\d{2}", alloc.allocate())
