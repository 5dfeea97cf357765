from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Protocol


class Clock(Protocol):
    """Source of the current business time."""

    @property
    def tz(self) -> tzinfo:
        raise NotImplementedError

    def now(self) -> datetime:
        """Timezone-aware current time in the business timezone."""

        raise NotImplementedError

    def today(self) -> date:
        raise NotImplementedError
