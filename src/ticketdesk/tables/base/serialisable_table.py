from .orm_table import ORMTableBase
from typing import Any, ClassVar
import json, hashlib
from ..data.converters import json_default
    
class SerialisableTableInterface(ORMTableBase):
    """
    Mixin for ORM tables that are handed to API callers as dicts/JSON.

    ``_identity_columns`` are always emitted, whatever ``only``/``exclude``
    ask for, so a payload can always be traced back to its row (for tickets,
    the ticket number). ``_fingerprint_exclude`` lists bookkeeping columns
    that do not change what a row *says*; the fingerprint ignores them, so an
    imported copy of a ticket fingerprints the same as the original.
    """

    __abstract__ = True
    _identity_columns: ClassVar[tuple[str, ...]] = ()
    _fingerprint_exclude: ClassVar[frozenset[str]] = frozenset()

    def to_dict(
        self,
        *,
        include_nulls: bool = False,
        only: set[str] | None = None,
        exclude: set[str] | None = None,
    ) -> dict[str, Any]:
        data = {}
        for key in self.model_columns():
            pinned = key in self._identity_columns
            if not pinned and only and key not in only:
                continue
            if not pinned and exclude and key in exclude:
                continue
            value = getattr(self, key)
            if value is None and not include_nulls:
                continue
            data[key] = value
        return data

    def to_json(self, **kwargs) -> str:
        return json.dumps(
            self.to_dict(**kwargs),
            default=json_default,
            sort_keys=True,
        )
    
    def fingerprint(self) -> str:
        payload = self.to_json(include_nulls=True, exclude=set(self._fingerprint_exclude))
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()
    
    def __iter__(self):
        yield from self.to_dict().items()

    def __json__(self):
        return self.to_dict()
