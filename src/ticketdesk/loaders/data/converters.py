import datetime
from typing import Any

import pandas as pd
import sqlalchemy as sa

from ...helpers.null_handlers import normalise_null


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Refusing to cast boolean {value!r} to integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Non-integral value {value!r}")
        return int(value)
    return int(str(value).strip())


def _to_datetime(value: Any) -> datetime.datetime:
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"Unparseable datetime {value!r}")
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts.to_pydatetime()


def _to_string(value: Any) -> str:
    return str(value).strip()


def cast_scalar(value: Any, sa_type: sa.types.TypeEngine) -> Any:
    """
    Cast one inbound cell to the Python type expected by ``sa_type``.

    Null-like inputs (None, NaN, NaT, "", "null", ...) become None. Raises
    ValueError / TypeError when the value cannot be represented.
    """
    value = normalise_null(value)
    if value is None:
        return None
    if isinstance(sa_type, sa.Integer):
        return _to_int(value)
    if isinstance(sa_type, sa.DateTime):
        return _to_datetime(value)
    if isinstance(sa_type, sa.String):  # includes Text
        return _to_string(value)
    return value
