"""Cache TTL value object.

ONLY TTL handling - positive time-to-live in whole seconds. Entries that
should never be written use no TTL at all; there is no never-expire value.

Following maximum separation architecture - one file = one purpose.
"""

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Union

from ..exceptions.invalid_ttl import InvalidTtl


@dataclass(frozen=True)
class CacheTTL:
    """Cache TTL (Time To Live) value object.

    Always strictly positive. Invalid values raise ``InvalidTtl`` at
    construction so a bad TTL fails at the call site, not inside the store.
    """

    seconds: int

    # Common TTL durations (in seconds)
    ONE_MINUTE = 60
    FIVE_MINUTES = 300
    TEN_MINUTES = 600

    def __post_init__(self):
        """Validate TTL value."""
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise InvalidTtl(self.seconds)
        if self.seconds <= 0:
            raise InvalidTtl(self.seconds)

    @classmethod
    def of(cls, value: Union["CacheTTL", int, float, timedelta]) -> "CacheTTL":
        """Coerce a number, timedelta or CacheTTL into a CacheTTL.

        Fractional seconds round up so an entry never expires before the
        requested TTL.
        """
        if isinstance(value, CacheTTL):
            return value
        if isinstance(value, timedelta):
            value = value.total_seconds()
        if isinstance(value, float):
            if not math.isfinite(value) or value <= 0:
                raise InvalidTtl(value)
            return cls(math.ceil(value))
        return cls(value)

    @classmethod
    def minutes(cls, minutes: int) -> "CacheTTL":
        """Create TTL from minutes."""
        return cls(minutes * 60)

    @classmethod
    def hours(cls, hours: int) -> "CacheTTL":
        """Create TTL from hours."""
        return cls(hours * 3600)

    def __int__(self) -> int:
        return self.seconds

    def __str__(self) -> str:
        """Human-readable string representation."""
        if self.seconds < 60:
            return f"{self.seconds}s"
        elif self.seconds < 3600:
            return f"{self.seconds // 60}m"
        elif self.seconds < 86400:
            return f"{self.seconds // 3600}h"
        else:
            return f"{self.seconds // 86400}d"
