"""Tests for scheduling/rules.py"""
from datetime import date, time

import pytest

from vetclinic.scheduling.rules import ClinicRules


def test_last_start_is_one_hour_before_closing(rules):
    assert rules.last_start_time == time(15, 0)


def test_bookable_starts_cover_the_window(rules):
    starts = rules.bookable_starts()

    assert starts[0] == time(8, 0)
    assert starts[-1] == time(15, 0)
    assert len(starts) == 8


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        ClinicRules(time(8, 0), time(16, 0), date(2026, 3, 12), 0)


def test_window_must_fit_one_visit():
    with pytest.raises(ValueError):
        ClinicRules(time(8, 0), time(8, 30), date(2026, 3, 12), 8)
