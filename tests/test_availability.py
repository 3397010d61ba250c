"""Tests for the weekend check-in window and athlete prompt state."""
from datetime import date

import pytest

from spotter.checkins.availability import (
    CheckinWindow,
    PromptState,
    checkin_window,
    find_week_checkin,
    is_checkin_available,
    prompt_state,
)
from spotter.config import SpotterConfig


class TestCheckinWindow:

    @pytest.mark.parametrize("day", [4, 5, 6, 7, 8])  # Monday..Friday
    def test_unavailable_on_weekdays(self, day, local_dt, zone):
        assert checkin_window(local_dt(2024, 3, day), zone) is CheckinWindow.UNAVAILABLE

    def test_available_all_saturday(self, local_dt, zone):
        assert is_checkin_available(local_dt(2024, 3, 9, 0, 0), zone)
        assert is_checkin_available(local_dt(2024, 3, 9, 23, 59), zone)

    def test_available_sunday_until_midnight(self, local_dt, zone):
        assert is_checkin_available(local_dt(2024, 3, 10, 8, 0), zone)
        assert is_checkin_available(local_dt(2024, 3, 10, 23, 59), zone)
        assert not is_checkin_available(local_dt(2024, 3, 11, 0, 0), zone)

    def test_uses_local_day(self, zone):
        # Saturday 01:00 UTC is still Friday evening in UTC-3
        assert not is_checkin_available("2024-03-09T01:00:00Z", zone)


class TestPromptState:

    def test_hidden_midweek(self, make_checkin, local_dt, zone):
        assert prompt_state([], local_dt(2024, 3, 6), zone) is PromptState.HIDDEN

    def test_pending_on_saturday(self, local_dt, zone):
        assert prompt_state([], local_dt(2024, 3, 9), zone) is PromptState.PENDING

    def test_urgent_on_sunday(self, local_dt, zone):
        assert prompt_state([], local_dt(2024, 3, 10), zone) is PromptState.URGENT

    def test_completed_this_week(self, make_checkin, local_dt, zone):
        checkins = [make_checkin(week_start_date=date(2024, 3, 4), completed=True)]
        assert prompt_state(checkins, local_dt(2024, 3, 10), zone) is PromptState.COMPLETED

    def test_last_week_does_not_count(self, make_checkin, local_dt, zone):
        checkins = [make_checkin(week_start_date=date(2024, 2, 26), completed=True)]
        assert prompt_state(checkins, local_dt(2024, 3, 9), zone) is PromptState.PENDING

    def test_first_match_wins_on_duplicates(self, make_checkin, local_dt, zone):
        checkins = [
            make_checkin(week_start_date=date(2024, 3, 4), completed=False),
            make_checkin(week_start_date=date(2024, 3, 4), completed=True),
        ]
        assert find_week_checkin(checkins, date(2024, 3, 4)) is checkins[0]
        assert prompt_state(checkins, local_dt(2024, 3, 9), zone) is PromptState.PENDING


class TestConfiguredZone:
    """Without an explicit zone the configured one decides the local day."""

    SATURDAY_0100_UTC = "2024-03-09T01:00:00Z"

    def test_config_zone_used(self):
        config = SpotterConfig(timezone="America/Sao_Paulo")
        # Friday 22:00 in Sao Paulo
        assert not is_checkin_available(self.SATURDAY_0100_UTC, config=config)
        assert checkin_window(self.SATURDAY_0100_UTC, config=config) is CheckinWindow.UNAVAILABLE

    def test_other_config_zone_disagrees(self):
        config = SpotterConfig(timezone="Europe/Lisbon")
        assert is_checkin_available(self.SATURDAY_0100_UTC, config=config)

    def test_environment_zone_over_host(self, monkeypatch):
        monkeypatch.setenv('TZ', 'UTC')
        monkeypatch.setenv('SPOTTER_TIMEZONE', 'America/Sao_Paulo')
        assert not is_checkin_available(self.SATURDAY_0100_UTC)

    def test_prompt_state_uses_config(self):
        config = SpotterConfig(timezone="America/Sao_Paulo")
        assert prompt_state([], self.SATURDAY_0100_UTC, config=config) is PromptState.HIDDEN

    def test_explicit_zone_wins(self, zone):
        config = SpotterConfig(timezone="Europe/Lisbon")
        assert not is_checkin_available(self.SATURDAY_0100_UTC, zone, config)
