from typing import Any, Type, List, Dict, TYPE_CHECKING
from dataclasses import dataclass, field
import sqlalchemy.orm as so
from pathlib import Path

if TYPE_CHECKING:
    from ..tables.base.typing import CSVTableProtocol

@dataclass(frozen=True)
class LoaderContext:
    tableclass: Type["CSVTableProtocol"]
    session: so.Session
    path: Path

    chunksize: int | None = None
    dedupe: bool = True
    dedupe_incl_db: bool = True


@dataclass
class ColumnCastingStats:
    """
    Casting statistics for a single column.
    """
    count: int = 0
    examples: List[Any] = field(default_factory=list)

    def record(self, value: Any, example_limit: int = 3):
        self.count += 1
        if len(self.examples) < example_limit:
            self.examples.append(value)

@dataclass
class TableCastingStats:
    """
    Aggregated casting statistics for a table, keyed by column.
    """
    table_name: str
    columns: Dict[str, ColumnCastingStats] = field(default_factory=dict)
    skipped_rows: int = 0

    def record(
        self,
        *,
        column: str,
        value: Any,
        example_limit: int = 3,
    ):
        if column not in self.columns:
            self.columns[column] = ColumnCastingStats()
        self.columns[column].record(value, example_limit=example_limit)

    @property
    def total_failures(self) -> int:
        return sum(stats.count for stats in self.columns.values())

    def has_failures(self) -> bool:
        return self.total_failures > 0
    
    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {
            col: {
                "count": stats.count,
                "examples": stats.examples,
            }
            for col, stats in self.columns.items()
        }
