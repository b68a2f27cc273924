"""Working-day calculations and the persisted bank-holiday list."""

from __future__ import annotations

import json
import logging
from datetime import date, timedelta
from pathlib import Path
from typing import Iterable

from .errors import ValidationError

logger = logging.getLogger(__name__)

_SATURDAY = 5


def _parse_iso(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid ISO date: {value!r}") from exc


def is_weekend(day: date) -> bool:
    return day.weekday() >= _SATURDAY


def get_last_working_days(
    count: int,
    holidays: Iterable[str] = (),
    *,
    today: date | None = None,
) -> list[str]:
    """Return the ``count`` most recent working days before ``today``.

    Weekends and any date in ``holidays`` are skipped. Dates are ISO strings
    ordered most recent first. ``today`` defaults to the local clock, so the
    window moves as real time passes.
    """

    excluded = set(holidays)
    cursor = today or date.today()
    days: list[str] = []
    while len(days) < count:
        cursor -= timedelta(days=1)
        if is_weekend(cursor):
            continue
        iso = cursor.isoformat()
        if iso in excluded:
            continue
        days.append(iso)
    return days


def format_working_day(value: str) -> str:
    """Render an ISO day as a short label such as ``Wed 01 Jan``."""

    return _parse_iso(value).strftime("%a %d %b")


class HolidayStore:
    """Bank holidays kept as a JSON array of ISO dates in a single file.

    Reads that fail to parse degrade to an empty list. Writes replace the whole
    file, so concurrent writers race and the last one wins.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("Ignoring unreadable bank holiday file %s", self._path)
            return []
        if not isinstance(payload, list):
            return []
        return [item for item in payload if isinstance(item, str)]

    def newest_first(self) -> list[str]:
        """Return the holidays newest first, as the manager dialog lists them."""

        return sorted(self.load(), reverse=True)

    def add(self, value: str) -> list[str]:
        day = _parse_iso(value)
        if is_weekend(day):
            raise ValidationError("Weekends are already excluded from working days.")
        holidays = self.load()
        iso = day.isoformat()
        if iso in holidays:
            raise ValidationError("This date is already marked as a bank holiday.")
        holidays.append(iso)
        self._write(holidays)
        logger.info("Bank holiday %s added", iso)
        return holidays

    def remove(self, value: str) -> list[str]:
        holidays = [item for item in self.load() if item != value]
        self._write(holidays)
        logger.info("Bank holiday %s removed", value)
        return holidays

    def _write(self, holidays: list[str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(holidays), encoding="utf-8")


__all__ = [
    "HolidayStore",
    "format_working_day",
    "get_last_working_days",
    "is_weekend",
]
