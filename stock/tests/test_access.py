"""
Tests — Access window and date grouping.

@file stock/tests/test_access.py
"""

from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from core.exceptions import AccessDeniedError
from stock.access import (
    Role,
    can_toggle,
    can_write,
    current_date,
    ensure_can_write,
    group_by_date,
)


TODAY = date(2026, 3, 10)
YESTERDAY = TODAY - timedelta(days=1)
TOMORROW = TODAY + timedelta(days=1)
NOW = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


class TestCanWrite:

    @pytest.mark.parametrize('role,on_date,expected', [
        (Role.ADMIN, TODAY, True),
        (Role.ADMIN, YESTERDAY, True),
        (Role.ADMIN, TOMORROW, True),
        (Role.EDITOR, TODAY, True),
        (Role.EDITOR, YESTERDAY, False),
        (Role.EDITOR, TOMORROW, False),
        (Role.VIEWER, TODAY, False),
        (Role.VIEWER, YESTERDAY, False),
        (None, TODAY, False),
    ])
    def test_capability_table(self, role, on_date, expected):
        assert can_write(role, on_date, TODAY) is expected

    def test_toggle_open_for_today(self):
        assert can_toggle(Role.VIEWER, TODAY, TODAY) is True
        assert can_toggle(Role.EDITOR, YESTERDAY, TODAY) is False
        assert can_toggle(Role.ADMIN, YESTERDAY, TODAY) is True


class TestEnsureCanWrite:

    def test_current_date_uses_now(self):
        assert current_date(NOW) == TODAY

    def test_editor_today_passes(self):
        ensure_can_write(SimpleNamespace(pk=1, role=Role.EDITOR), TODAY, NOW)

    def test_editor_yesterday_denied(self):
        with pytest.raises(AccessDeniedError) as exc:
            ensure_can_write(SimpleNamespace(pk=1, role=Role.EDITOR), YESTERDAY, NOW)
        assert '2026-03-10' in str(exc.value.detail)

    def test_viewer_denied(self):
        with pytest.raises(AccessDeniedError, match='Viewers'):
            ensure_can_write(SimpleNamespace(pk=1, role=Role.VIEWER), TODAY, NOW)

    def test_admin_past_date_passes(self):
        ensure_can_write(SimpleNamespace(pk=1, role=Role.ADMIN), date(2020, 1, 1), NOW)


def _entry(on_date):
    return SimpleNamespace(transaction=SimpleNamespace(date=on_date))


class TestGroupByDate:

    def test_newest_first_with_flags(self):
        groups = group_by_date([_entry(YESTERDAY), _entry(TODAY), _entry(YESTERDAY)], Role.EDITOR, TODAY)
        assert [g.date for g in groups] == [TODAY, YESTERDAY]
        assert groups[0].is_today and groups[0].can_write
        assert not groups[1].can_write
        assert len(groups[1].entries) == 2

    def test_today_always_present(self):
        groups = group_by_date([_entry(YESTERDAY)], Role.VIEWER, TODAY)
        assert groups[0].date == TODAY
        assert groups[0].entries == []
        assert groups[0].can_write is False

    def test_requested_dates_kept_without_entries(self):
        older = TODAY - timedelta(days=5)
        groups = group_by_date([], Role.ADMIN, TODAY, dates=[older])
        assert [g.date for g in groups] == [TODAY, older]
        assert all(g.can_write for g in groups)
