import sqlalchemy as sa
import sqlalchemy.orm as so
from typing import ClassVar, Optional, Type, cast
import logging
from .store import SqlIdentifierStore

logger = logging.getLogger(__name__)

class ORMTableBase:
    """
    Mixin for SQLAlchemy ORM-mapped tables providing convenience methods for:

    - primary key and natural key introspection
    - identifier store access
    - mapper access
    """

    __abstract__ = True
    _natural_key: ClassVar[Optional[list[str]]] = None

    @classmethod
    def mapper_for(cls: Type) -> so.Mapper:
        mapper = sa.inspect(cls)
        if not mapper:
            raise TypeError(f"{cls.__name__} is not a mapped ORM class")
        return cast(so.Mapper, mapper)

    @classmethod
    def pk_columns(cls) -> list[sa.ColumnElement]:
        pks = list(cls.mapper_for().primary_key)
        if not pks:
            raise ValueError(f"{cls.__name__} has no primary key")
        return pks

    @classmethod
    def pk_names(cls) -> list[str]:
        return [c.key for c in cls.pk_columns() if c.key is not None]

    @classmethod
    def natural_key(cls) -> list[str]:
        """
        Columns identifying a row for de-duplication. Defaults to the primary
        key; tables with a surrogate key override ``_natural_key``.
        """
        if cls._natural_key:
            return list(cls._natural_key)
        return cls.pk_names()

    @classmethod
    def model_columns(cls) -> dict[str, sa.Column]:
        mapper = cls.mapper_for()
        mc = {}
        for c in mapper.columns:
            if c.key is None:
                continue
            if not isinstance(c, sa.Column):
                raise TypeError(f"Unexpected column type on {cls.__name__}.{c.key}: {type(c)}")
            mc[c.key] = c
        return mc
    
    @classmethod
    def required_columns(cls) -> set[str]:
        """
        Columns that must be present in inbound data for insert to succeed,
        excluding those with defaults, server defaults or an autoincrementing
        surrogate key.
        """
        mapper = cls.mapper_for()
        return {
            c.key
            for c in mapper.columns
            if not c.nullable
            and not c.default
            and not c.server_default
            and not (c.primary_key and isinstance(c.type, sa.Integer))
            and c.key is not None
        }

    @classmethod
    def identifier_store(cls, session: so.Session, column: str) -> SqlIdentifierStore:
        """Store view over one of this table's identifier columns."""
        if column not in cls.model_columns():
            raise ValueError(f"{cls.__name__} has no column '{column}'")
        return SqlIdentifierStore(session, getattr(cls, column))
