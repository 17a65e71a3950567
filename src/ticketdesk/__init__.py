from .exceptions import (
    TicketDeskError,
    AllocationError,
    StoreUnavailable,
    AllocationExhausted,
)
from .identifiers import IdentifierFormat, date_scoped_code
from .config import AllocatorConfig
from .tables import (
    TicketNumberAllocator,
    CompactCodeAllocator,
    DateScopedCodeAllocator,
    SqlIdentifierStore,
    IdentifierStoreProtocol,
    Base,
    Ticket,
)
from .services import create_ticket, update_status, get_ticket, list_tickets

__all__ = [
    "TicketDeskError",
    "AllocationError",
    "StoreUnavailable",
    "AllocationExhausted",
    "IdentifierFormat",
    "date_scoped_code",
    "AllocatorConfig",
    "TicketNumberAllocator",
    "CompactCodeAllocator",
    "DateScopedCodeAllocator",
    "SqlIdentifierStore",
    "IdentifierStoreProtocol",
    "Base",
    "Ticket",
    "create_ticket",
    "update_status",
    "get_ticket",
    "list_tickets",
]
