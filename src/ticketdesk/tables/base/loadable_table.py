import sqlalchemy.orm as so
import logging

from typing import Type, Optional
from pathlib import Path

from .orm_table import ORMTableBase
from .typing import CSVTableProtocol
from ...helpers.bulk import bulk_load_context
from ...loaders.data_classes import LoaderContext
from ...loaders.loader_interface import LoaderInterface, PandasLoader, ParquetLoader

logger = logging.getLogger(__name__)

class CSVLoadableTableInterface(ORMTableBase):
    """
    Mixin for ORM tables that can be bulk-imported from CSV or Parquet files.

    Imported rows keep whatever identifiers they carry; nothing here consults
    an allocator.
    """

    __abstract__ = True

    @classmethod
    def _select_loader(cls: Type[CSVTableProtocol], path: Path) -> LoaderInterface:
        suffix = path.suffix.lower()
        if suffix == ".parquet":
            return ParquetLoader()
        else:
            return PandasLoader()

    @classmethod
    def load_csv(
        cls: Type[CSVTableProtocol],
        session: so.Session,
        path: Path,
        *,
        loader: Optional[LoaderInterface] = None,
        dedupe: bool = True,
        dedupe_incl_db: bool = True,
        chunksize: int | None = None,
    ) -> int:
        """
        Insert the rows of ``path`` into this table and return how many were
        inserted. The caller commits.
        """
        path = Path(path)
        logger.debug(f"Loading {cls.__tablename__} from {path}")

        if path.stem.lower() != cls.__tablename__:
            raise ValueError(
                f"File name '{path.name}' does not match table '{cls.__tablename__}'"
            )

        loader_context = LoaderContext(
            tableclass=cls,
            session=session,
            path=path,
            chunksize=chunksize,
            dedupe=dedupe,
            dedupe_incl_db=dedupe_incl_db,
        )

        if loader is None:
            loader = cls._select_loader(path)

        with bulk_load_context(session):
            return loader.orm_file_load(loader_context)
