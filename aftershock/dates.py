"""Dates as shown on the site, and a small grouping helper."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Hashable, Iterable, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

SITE_TIMEZONE = timezone(timedelta(hours=8))

_MONTH_ABBRS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class PreformattedDateTime:
    """A Unix timestamp broken down in the site's time zone (UTC+8)."""

    year: int
    month: int
    day: int
    orig: int
    human_readable: str
    machine_friendly: str

    @classmethod
    def from_timestamp(cls, timestamp: int) -> PreformattedDateTime:
        """Format a timestamp in whole seconds; out-of-range values raise ValueError."""
        try:
            moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
            local = moment.astimezone(SITE_TIMEZONE)
        except (OverflowError, OSError, ValueError) as error:
            raise ValueError(f"timestamp out of range: {timestamp}") from error
        return cls(
            year=local.year,
            month=local.month,
            day=local.day,
            orig=timestamp,
            human_readable=local.strftime("%Y-%m-%d"),
            machine_friendly=local.isoformat(),
        )

    def month_abbr(self) -> str:
        """Three-letter English month name, or an empty string for a bad month."""
        if 1 <= self.month <= len(_MONTH_ABBRS):
            return _MONTH_ABBRS[self.month - 1]
        return ""


def group_by(
    items: Iterable[T],
    key: Callable[[T], K],
    value: Callable[[T], V],
) -> dict[K, list[V]]:
    """Group selected values by key, keeping the order in which items came."""
    groups: dict[K, list[V]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(value(item))
    return groups