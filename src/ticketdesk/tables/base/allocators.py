import logging
import threading
from typing import Optional

from ...config import AllocatorConfig
from ...exceptions import AllocationExhausted, StoreUnavailable
from ...identifiers import date_scoped_code
from .typing import IdentifierStoreProtocol

logger = logging.getLogger(__name__)


class TicketNumberAllocator:
    """
    In-process allocator for verified, strictly increasing ticket numbers.

    Construct one per process and share it between request handlers. The
    cursor is primed from the store on first use and never persisted;
    durability comes from the issued records themselves, which is why a
    restarted process re-primes from the highest stored value.

    The cursor increment is serialised by a lock. Verification against the
    store runs outside it, so callers from several threads each pass their
    own store (and session). Across processes there is no shared lock:
    verification, bounded retry and a unique constraint on the stored column
    are what keep numbers distinct.
    """

    def __init__(self, config: Optional[AllocatorConfig] = None):
        self.config = config or AllocatorConfig()
        self.format = self.config.ticket_format
        self._lock = threading.Lock()
        self._cursor: Optional[int] = None

    def __repr__(self) -> str:
        return f"TicketNumberAllocator(format={self.format.like_prefix!r}, cursor={self._cursor})"

    @property
    def cursor(self) -> Optional[int]:
        return self._cursor

    @property
    def initialized(self) -> bool:
        return self._cursor is not None

    def initialize(self, store: IdentifierStoreProtocol) -> int:
        """
        Prime the cursor from the store. Idempotent.

        If the store cannot be queried the cursor falls back to the configured
        floor and the allocator is still marked initialised; verification in
        ``allocate`` catches any collision this causes.
        """
        with self._lock:
            if self._cursor is None:
                self._cursor = self._prime(store)
            return self._cursor

    def _prime(self, store: IdentifierStoreProtocol) -> int:
        floor = self.config.floor
        try:
            highest = store.highest_value(self.format)
        except StoreUnavailable as e:
            logger.warning(
                f"Could not read highest ticket number from {store!r}, "
                f"falling back to floor {floor}: {e}"
            )
            return floor

        number = self.format.parse(highest)
        if number is None:
            logger.info(f"No existing {self.format.like_prefix}* numbers, starting at floor {floor}")
            return floor

        logger.info(f"Primed ticket number cursor from {highest}")
        return number

    def _advance(self) -> int:
        with self._lock:
            if self._cursor is None:
                raise RuntimeError("Allocator used before initialisation")
            self._cursor += 1
            return self._cursor

    def allocate(self, store: IdentifierStoreProtocol) -> str:
        """
        Return a ticket number not present in the store at verification time.

        The caller persists the record. May block on store I/O.

        Raises:
            StoreUnavailable: the verification query failed. The cursor is
                not rolled back, so the next call moves on to a fresh value.
            AllocationExhausted: every candidate within ``max_attempts``
                already existed.
        """
        if not self.initialized:
            self.initialize(store)

        candidate = None
        for attempt in range(1, self.config.max_attempts + 1):
            candidate = self.format.format(self._advance())
            if not store.value_exists(candidate):
                return candidate
            logger.info(
                f"Ticket number {candidate} already exists "
                f"(attempt {attempt}/{self.config.max_attempts})"
            )

        raise AllocationExhausted(
            f"No free ticket number after {self.config.max_attempts} attempts, "
            f"last tried {candidate}",
            attempts=self.config.max_attempts,
            last_candidate=candidate,
        )


class CompactCodeAllocator:
    """
    Short codes such as ``T-1001`` for contexts that tolerate duplicates.

    No store is consulted and the counter starts again from the floor after
    a restart, so codes repeat across process lifetimes. Use
    ``TicketNumberAllocator`` wherever uniqueness matters.
    """

    def __init__(self, config: Optional[AllocatorConfig] = None):
        self.config = config or AllocatorConfig()
        self.format = self.config.compact_format
        self._lock = threading.Lock()
        self._counter = self.config.compact_floor

    def allocate(self) -> str:
        with self._lock:
            self._counter += 1
            value = self._counter
        return self.format.format(value)


class DateScopedCodeAllocator:
    """
    Codes such as ``241002-417``: the local date plus a random ordinal of
    ``date_ordinal_width`` digits, joined by the configured separator.

    Nothing is counted or stored, so two calls on the same day can collide.
    """

    def __init__(self, config: Optional[AllocatorConfig] = None, clock=None, rng=None):
        self.config = config or AllocatorConfig()
        self.clock = clock
        self.rng = rng

    def allocate(self) -> str:
        return date_scoped_code(
            self.clock,
            self.rng,
            ordinal_width=self.config.date_ordinal_width,
            separator=self.config.separator,
        )
