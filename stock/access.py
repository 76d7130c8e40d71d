"""
Stock — Date Grouping & Access Window

One capability table decides who may write to which ledger date:

    role     | today | any other date
    ---------+-------+---------------
    admin    |  yes  |  yes
    editor   |  yes  |  no
    viewer   |  no   |  no

Everyone may read every date. ``can_toggle`` mirrors the write gate for
expanding a date group in a client, except that it is not a security
boundary; ``ensure_can_write`` is the enforcement point used by the
ledger.

@file stock/access.py
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from itertools import groupby

from django.utils import timezone

from core.exceptions import AccessDeniedError
from users.models import User

logger = logging.getLogger('stockledger')

Role = User.Role


def current_date(now: datetime | None = None) -> date:
    """Calendar date of ``now`` in the configured TIME_ZONE."""
    return timezone.localdate(now or timezone.now())


def can_write(role: str, on_date: date, today: date) -> bool:
    if role == Role.VIEWER:
        return False
    if role == Role.ADMIN:
        return True
    return role == Role.EDITOR and on_date == today


def can_toggle(role: str, on_date: date, today: date) -> bool:
    return role == Role.ADMIN or on_date == today


def ensure_can_write(actor, on_date: date, now: datetime | None = None) -> None:
    role = getattr(actor, 'role', None)
    today = current_date(now)
    if can_write(role, on_date, today):
        return
    logger.warning(
        'Ledger write denied: user=%s role=%s date=%s today=%s',
        getattr(actor, 'pk', None), role, on_date, today,
    )
    if role == Role.VIEWER:
        raise AccessDeniedError(detail='Viewers cannot modify the ledger.')
    raise AccessDeniedError(
        detail=f'Only entries dated today ({today.isoformat()}) can be modified.',
    )


@dataclass(frozen=True)
class DateGroup:
    date: date
    is_today: bool
    can_write: bool
    can_toggle: bool
    entries: list = field(default_factory=list)


def group_by_date(entries, role: str, today: date, dates=None) -> list[DateGroup]:
    """
    Partition running entries into date buckets, newest first.

    ``dates`` lists buckets that must exist even without entries; today
    is always one of them so the current day stays writable.
    """
    by_date = {
        day: list(items)
        for day, items in groupby(
            sorted(entries, key=lambda e: e.transaction.date),
            key=lambda e: e.transaction.date,
        )
    }
    wanted = set(by_date) | set(dates or ()) | {today}
    return [
        DateGroup(
            date=day,
            is_today=day == today,
            can_write=can_write(role, day, today),
            can_toggle=can_toggle(role, day, today),
            entries=by_date.get(day, []),
        )
        for day in sorted(wanted, reverse=True)
    ]
