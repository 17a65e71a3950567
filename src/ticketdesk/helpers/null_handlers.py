import pandas as pd
from typing import Any

_NULL_STRINGS = {"", "nan", "nat", "null", "none", "na", "n/a"}

def normalise_null(value: Any) -> Any | None:
    if value is None:
        return None

    # pandas / numpy NaN, NaT
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None

    # string garbage
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _NULL_STRINGS:
            return None
        return value  # keep legit strings

    return value
