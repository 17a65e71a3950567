from typing import Protocol, ClassVar, runtime_checkable, TYPE_CHECKING, Optional, Dict, Any
import sqlalchemy.orm as so
import sqlalchemy as sa
from pathlib import Path
if TYPE_CHECKING:
    from ...identifiers import IdentifierFormat
    from ...loaders import LoaderContext, LoaderInterface


@runtime_checkable
class IdentifierStoreProtocol(Protocol):
    """
    The narrow view of durable storage an allocator needs.

    Implementations raise ``StoreUnavailable`` when the backing store cannot
    be queried; any other exception is a programming error and propagates.
    """

    def highest_value(self, fmt: "IdentifierFormat") -> Optional[str]:
        """Well-formed value with the largest numeric suffix, or None."""
        ...

    def value_exists(self, value: str) -> bool:
        """True when a record already carries exactly this value."""
        ...


@runtime_checkable
class ORMTableProtocol(Protocol):
    
    """
    Structural protocol for ORM-mapped *table classes*.
    """

    __tablename__: ClassVar[str]
    __table__: ClassVar[sa.Table]
    metadata: ClassVar[sa.MetaData]

    @classmethod
    def mapper_for(cls) -> so.Mapper: ...

    @classmethod
    def pk_names(cls) -> list[str]: ...

    @classmethod
    def pk_columns(cls) -> list[sa.ColumnElement]: ...

    @classmethod
    def model_columns(cls) -> dict[str, sa.ColumnElement]: ...

    @classmethod
    def natural_key(cls) -> list[str]: ...

    @classmethod
    def required_columns(cls) -> set[str]: ...


@runtime_checkable
class CSVTableProtocol(ORMTableProtocol, Protocol):
    """
    Protocol for ORM tables that support file-based bulk import.
    """

    @classmethod
    def _select_loader(cls, path: Path) -> "LoaderInterface": ...

    @classmethod
    def load_csv(
        cls,
        session: so.Session,
        path: Path,
        *,
        loader: Optional["LoaderInterface"] = None,
        dedupe: bool = True,
        dedupe_incl_db: bool = True,
        chunksize: int | None = None,
    ) -> int: ...


@runtime_checkable
class SerializedTableProtocol(Protocol):
    """
    Protocol for ORM instances that can be serialized to dict / JSON
    in a stable, deterministic way.
    """

    def to_dict(
        self,
        *,
        include_nulls: bool = False,
        only: set[str] | None = None,
        exclude: set[str] | None = None,
    ) -> Dict[str, Any]: ...

    def to_json(self, **kwargs) -> str: ...

    def fingerprint(self) -> str: ...

    def __iter__(self) -> Any: ...

    def __json__(self) -> Any: ...
