from .base import (
    TicketNumberAllocator,
    CompactCodeAllocator,
    DateScopedCodeAllocator,
    SqlIdentifierStore,
    CSVLoadableTableInterface,
    ORMTableBase,
    SerialisableTableInterface,
    IdentifierStoreProtocol,
    ORMTableProtocol,
    CSVTableProtocol,
    SerializedTableProtocol,
)
from .data import json_default
from .models import Base, Ticket, PRIORITIES, STATUSES

__all__ = [
    "TicketNumberAllocator",
    "CompactCodeAllocator",
    "DateScopedCodeAllocator",
    "SqlIdentifierStore",
    "ORMTableBase",
    "CSVLoadableTableInterface",
    "SerialisableTableInterface",
    "IdentifierStoreProtocol",
    "ORMTableProtocol",
    "CSVTableProtocol",
    "SerializedTableProtocol",
    "json_default",
    "Base",
    "Ticket",
    "PRIORITIES",
    "STATUSES",
]
