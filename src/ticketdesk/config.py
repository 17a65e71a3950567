"""
Allocator configuration.

Defaults produce ``TKT-10001`` style ticket numbers, ``T-1001`` compact
codes and ``241002-001`` date codes. Every value can be overridden from the
environment (or a ``.env`` file) with a ``TICKETDESK_`` prefixed variable.
"""

import os
from dataclasses import dataclass, field, fields

from dotenv import find_dotenv, load_dotenv

from .identifiers import IdentifierFormat

ENV_PREFIX = "TICKETDESK_"


@dataclass(frozen=True)
class AllocatorConfig:
    prefix: str = "TKT"
    separator: str = "-"
    width: int = 5
    floor: int = 10000
    max_attempts: int = 5

    compact_prefix: str = "T"
    compact_width: int = 4
    compact_floor: int = 1000

    date_ordinal_width: int = 3

    # rejected inserts tolerated by create_ticket before giving up
    insert_attempts: int = 3

    ticket_format: IdentifierFormat = field(init=False, repr=False, compare=False)
    compact_format: IdentifierFormat = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.prefix or not self.compact_prefix:
            raise ValueError("Identifier prefixes must be non-empty")
        if not self.separator or any(ch.isdigit() for ch in self.separator):
            raise ValueError(f"Invalid separator {self.separator!r}")
        for name in ("width", "compact_width", "date_ordinal_width", "max_attempts", "insert_attempts"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        for name in ("floor", "compact_floor"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")

        object.__setattr__(
            self, "ticket_format", IdentifierFormat(self.prefix, self.separator, self.width)
        )
        object.__setattr__(
            self, "compact_format", IdentifierFormat(self.compact_prefix, self.separator, self.compact_width)
        )

    @classmethod
    def from_env(cls, *, dotenv: bool = True, environ=None) -> "AllocatorConfig":
        """
        Build a config from ``TICKETDESK_*`` variables, e.g. ``TICKETDESK_PREFIX``
        or ``TICKETDESK_MAX_ATTEMPTS``. Unset variables keep their defaults.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        env = os.environ if environ is None else environ

        overrides = {}
        for f in fields(cls):
            if not f.init:
                continue
            raw = env.get(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is None:
                continue
            if f.type in (int, "int"):
                try:
                    overrides[f.name] = int(raw)
                except ValueError:
                    raise ValueError(f"{ENV_PREFIX}{f.name.upper()} must be an integer, got {raw!r}") from None
            else:
                overrides[f.name] = raw
        return cls(**overrides)
