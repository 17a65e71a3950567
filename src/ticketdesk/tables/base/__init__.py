from .allocators import TicketNumberAllocator, CompactCodeAllocator, DateScopedCodeAllocator
from .orm_table import ORMTableBase
from .store import SqlIdentifierStore
from .serialisable_table import SerialisableTableInterface
from .loadable_table import CSVLoadableTableInterface
from .typing import (
    IdentifierStoreProtocol,
    ORMTableProtocol,
    CSVTableProtocol,
    SerializedTableProtocol,
)

__all__ = [
    "TicketNumberAllocator",
    "CompactCodeAllocator",
    "DateScopedCodeAllocator",
    "ORMTableBase",
    "SqlIdentifierStore",
    "SerialisableTableInterface",
    "CSVLoadableTableInterface",
    "IdentifierStoreProtocol",
    "ORMTableProtocol",
    "CSVTableProtocol",
    "SerializedTableProtocol",
]
