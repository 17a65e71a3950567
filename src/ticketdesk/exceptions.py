class TicketDeskError(Exception):
    """Base class for errors raised by ticketdesk."""


class AllocationError(TicketDeskError):
    """A ticket number could not be issued for this request."""


class StoreUnavailable(AllocationError):
    """
    The identifier store could not be queried: connection loss, timeout, or
    (on SQLite only) a missing table. Other dialects report a missing table as
    a programming error, which is not translated.
    """


class AllocationExhausted(AllocationError):
    """Every candidate tried within the retry ceiling was already taken."""

    def __init__(self, message: str, *, attempts: int, last_candidate: str | None = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_candidate = last_candidate
