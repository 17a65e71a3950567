from typing import Any, Dict, Iterator, List
import logging

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import sqlalchemy as sa

from .data_classes import LoaderContext, TableCastingStats
from .loading_helpers import arrow_drop_duplicates, infer_delim, infer_encoding
from .data.converters import cast_scalar

logger = logging.getLogger(__name__)

_DEFAULT_BATCH_SIZE = 64_000


def _column_default(column: sa.Column) -> Any:
    default = column.default
    if default is None:
        return None
    if default.is_scalar:
        return default.arg
    if default.is_callable:
        return default.arg(None)
    return None


class LoaderInterface:
    """
    Reads a file in frames, casts each row to the table's column types and
    inserts it. Subclasses provide ``iter_frames`` and ``dedupe`` for their
    file format.
    """

    @classmethod
    def iter_frames(cls, ctx: LoaderContext) -> Iterator[pd.DataFrame]:
        raise NotImplementedError

    @classmethod
    def dedupe(cls, data: Any, ctx: LoaderContext) -> Any:
        raise NotImplementedError

    @classmethod
    def importable_columns(cls, ctx: LoaderContext) -> dict[str, sa.Column]:
        # surrogate integer keys are assigned by the database
        return {
            name: col
            for name, col in ctx.tableclass.model_columns().items()
            if not (col.primary_key and isinstance(col.type, sa.Integer))
        }

    @classmethod
    def normalise_columns(cls, df: pd.DataFrame, ctx: LoaderContext) -> pd.DataFrame:
        df = df.rename(columns=lambda c: str(c).strip().lower())
        wanted = cls.importable_columns(ctx)

        missing = ctx.tableclass.required_columns() - set(df.columns)
        if missing:
            raise ValueError(
                f"{ctx.path.name} is missing required columns for "
                f"{ctx.tableclass.__tablename__}: {sorted(missing)}"
            )

        extra = [c for c in df.columns if c not in wanted]
        if extra:
            logger.debug(f"Ignoring columns not on {ctx.tableclass.__tablename__}: {extra}")
        return df[[c for c in df.columns if c in wanted]]

    @classmethod
    def orm_file_load(cls, ctx: LoaderContext) -> int:
        """Load ctx.path into the target table and return the inserted row count."""
        stats = TableCastingStats(table_name=ctx.tableclass.__tablename__)
        key_names = ctx.tableclass.natural_key()
        seen: set[tuple] = set()
        total = 0

        for df in cls.iter_frames(ctx):
            df = cls.normalise_columns(df, ctx)
            records = cls._prepare_records(df, ctx, stats)

            if ctx.dedupe:
                unique = []
                for rec in records:
                    key = tuple(rec[k] for k in key_names)
                    if key in seen:
                        continue
                    seen.add(key)
                    unique.append(rec)
                if len(unique) < len(records):
                    logger.warning(
                        f"Dropping {len(records) - len(unique)} duplicate rows "
                        f"from {ctx.path.name}"
                    )
                records = unique

            if ctx.dedupe_incl_db:
                records = cls._dedupe_db(records, ctx)

            total += cls._load_chunk(ctx, records)

        if stats.has_failures():
            logger.warning(
                f"Casting failures while loading {ctx.path.name}: {stats.to_dict()}"
            )
        if stats.skipped_rows:
            logger.warning(
                f"Skipped {stats.skipped_rows} rows from {ctx.path.name} "
                f"with missing required values"
            )
        logger.info(f"Loaded {total} rows into {ctx.tableclass.__tablename__} from {ctx.path.name}")
        return total

    @classmethod
    def _prepare_records(
        cls,
        df: pd.DataFrame,
        ctx: LoaderContext,
        stats: TableCastingStats,
    ) -> List[Dict[str, Any]]:
        columns = cls.importable_columns(ctx)
        required = ctx.tableclass.required_columns()
        records = []

        for row in df.to_dict(orient="records"):
            rec: Dict[str, Any] = {}
            for name, col in columns.items():
                raw = row.get(name)
                try:
                    value = cast_scalar(raw, col.type)
                except (ValueError, TypeError):
                    stats.record(column=name, value=raw)
                    value = None
                if value is None:
                    value = _column_default(col)
                rec[name] = value

            if any(rec[name] is None for name in required):
                stats.skipped_rows += 1
                continue
            records.append(rec)
        return records

    @classmethod
    def _dedupe_db(cls, records: List[Dict[str, Any]], ctx: LoaderContext) -> List[Dict[str, Any]]:
        if not records:
            return records
        key_names = ctx.tableclass.natural_key()
        table = ctx.tableclass.__table__
        key_cols = [table.c[k] for k in key_names]
        keys = [tuple(rec[k] for k in key_names) for rec in records]

        chunk_size = max(1, 10_000 // len(key_cols))
        existing: set[tuple] = set()
        for i in range(0, len(keys), chunk_size):
            chunk = keys[i : i + chunk_size]
            if len(key_cols) == 1:
                clause = key_cols[0].in_([k[0] for k in chunk])
            else:
                clause = sa.tuple_(*key_cols).in_(chunk)
            rows = ctx.session.execute(sa.select(*key_cols).where(clause)).all()
            existing.update(tuple(r) for r in rows)

        if not existing:
            return records

        logger.warning(
            f"Dropping {len(existing)} rows from {ctx.path.name} that already "
            f"exist in {ctx.tableclass.__tablename__}"
        )
        return [rec for rec, key in zip(records, keys) if key not in existing]

    @classmethod
    def _load_chunk(cls, ctx: LoaderContext, records: List[Dict[str, Any]]) -> int:
        if not records:
            return 0
        ctx.session.execute(ctx.tableclass.__table__.insert(), records)
        ctx.session.flush()
        return len(records)


class PandasLoader(LoaderInterface):
    """Delimited text files, read as strings and cast per column."""

    @classmethod
    def iter_frames(cls, ctx: LoaderContext) -> Iterator[pd.DataFrame]:
        encoding = infer_encoding(ctx.path)["encoding"]
        delimiter = infer_delim(ctx.path, encoding=encoding)
        logger.debug(f"Reading {ctx.path.name} (encoding={encoding}, delimiter={delimiter!r})")

        read_kwargs = dict(
            sep=delimiter,
            encoding=encoding,
            dtype=str,
            keep_default_na=False,
        )
        if ctx.chunksize:
            with pd.read_csv(ctx.path, chunksize=ctx.chunksize, **read_kwargs) as reader:
                for chunk in reader:
                    yield cls.dedupe(chunk, ctx) if ctx.dedupe else chunk
        else:
            df = pd.read_csv(ctx.path, **read_kwargs)
            yield cls.dedupe(df, ctx) if ctx.dedupe else df

    @classmethod
    def dedupe(cls, data: pd.DataFrame, ctx: LoaderContext) -> pd.DataFrame:
        keys = [c for c in data.columns if str(c).strip().lower() in ctx.tableclass.natural_key()]
        if not keys:
            return data
        return data.drop_duplicates(subset=keys, keep="first")


class ParquetLoader(LoaderInterface):
    """Parquet files, read batch by batch with pyarrow."""

    @classmethod
    def iter_frames(cls, ctx: LoaderContext) -> Iterator[pd.DataFrame]:
        parquet = pq.ParquetFile(ctx.path)
        for batch in parquet.iter_batches(batch_size=ctx.chunksize or _DEFAULT_BATCH_SIZE):
            table = pa.Table.from_batches([batch])
            table = table.rename_columns([name.strip().lower() for name in table.column_names])
            if ctx.dedupe:
                table = cls.dedupe(table, ctx)
            yield table.to_pandas()

    @classmethod
    def dedupe(cls, data: pa.Table, ctx: LoaderContext) -> pa.Table:
        keys = [k for k in ctx.tableclass.natural_key() if k in data.column_names]
        if not keys:
            return data
        return arrow_drop_duplicates(data, keys)
