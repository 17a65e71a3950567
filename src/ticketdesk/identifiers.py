"""
Identifier formats
==================

Ticket numbers are a fixed prefix, a literal separator and a zero-padded
decimal numeral (``TKT-10001``). The width is a minimum: numerals that
outgrow it are written in full rather than truncated.

``date_scoped_code`` lives here as well because it is pure formatting: its
ordinal is random and carries no uniqueness or durability guarantee.
"""

import random
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable


@dataclass(frozen=True)
class IdentifierFormat:
    prefix: str
    separator: str
    width: int

    _pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # exactly `width` digits (leading zeros allowed), or a longer
        # numeral without a leading zero. This keeps "longer string" and
        # "larger number" equivalent, which the SQL ordering relies on.
        head = re.escape(self.prefix) + re.escape(self.separator)
        pattern = re.compile(
            rf"^{head}(\d{{{self.width}}}|[1-9]\d{{{self.width},}})$"
        )
        object.__setattr__(self, "_pattern", pattern)

    @property
    def like_prefix(self) -> str:
        return f"{self.prefix}{self.separator}"

    def format(self, number: int) -> str:
        if number < 0:
            raise ValueError(f"Identifier numerals must be non-negative, got {number}")
        return f"{self.prefix}{self.separator}{number:0{self.width}d}"

    def parse(self, value: str | None) -> int | None:
        """Return the numeric suffix of a well-formed value, else None."""
        if not isinstance(value, str):
            return None
        match = self._pattern.match(value)
        if match is None:
            return None
        return int(match.group(1))

    def matches(self, value: str | None) -> bool:
        return self.parse(value) is not None


def date_scoped_code(
    clock: Callable[[], datetime] | None = None,
    rng: random.Random | None = None,
    *,
    ordinal_width: int = 3,
    separator: str = "-",
) -> str:
    """
    Date-prefixed code such as ``241002-001``.

    The ordinal is drawn at random from ``1 .. 10**ordinal_width - 1``. It is
    not a count, it is not persisted and two calls on the same day may return
    the same code.
    """
    now = (clock or datetime.now)()
    ordinal = (rng or random).randint(1, 10 ** ordinal_width - 1)
    return f"{now:%y%m%d}{separator}{ordinal:0{ordinal_width}d}"
