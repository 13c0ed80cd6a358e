"""
Derived task status and day counts.

Run: pytest tests/test_status.py -v
"""

from datetime import datetime, timedelta

import pytest

from core.base import TaskStatus
from modules.maintenance.status import days_until, derive_status

T = datetime(2024, 6, 1, 12, 0, 0)


class TestDeriveStatus:

    @pytest.mark.parametrize("due_at, expected", [
        (T - timedelta(hours=1), TaskStatus.OVERDUE),
        (T + timedelta(days=3), TaskStatus.SOON),
        (T + timedelta(days=10), TaskStatus.NORMAL),
    ])
    def test_classification(self, due_at, expected):
        assert derive_status(due_at, T) == expected

    def test_due_exactly_now_is_soon(self):
        assert derive_status(T, T) == TaskStatus.SOON

    def test_due_exactly_at_window_edge_is_normal(self):
        assert derive_status(T + timedelta(days=7), T) == TaskStatus.NORMAL

    def test_just_inside_window_is_soon(self):
        assert derive_status(T + timedelta(days=7) - timedelta(seconds=1), T) == TaskStatus.SOON

    def test_custom_window(self):
        assert derive_status(T + timedelta(days=10), T, soon_days=14) == TaskStatus.SOON

    def test_no_due_date_is_unscheduled(self):
        assert derive_status(None, T) == TaskStatus.UNSCHEDULED


class TestDaysUntil:

    def test_future(self):
        assert days_until(T + timedelta(days=3, hours=5), T) == 3

    def test_overdue_by_one_hour_is_negative(self):
        assert days_until(T - timedelta(hours=1), T) == -1

    def test_due_now_is_zero(self):
        assert days_until(T, T) == 0

    def test_no_due_date(self):
        assert days_until(None, T) is None
