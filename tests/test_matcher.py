# standupbot - Discord Standup Reminder Bot
# Copyright (c) 2025-2026 Slash Daemon slashdaemon@protonmail.com
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 of the License.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# Commercial licensing: [slashdaemon@protonmail.com]

"""Tests for standup time matching."""

import sys
from datetime import datetime
from pathlib import Path

import pytest
import pytz

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from standups.matcher import (
    StandupTimeError,
    current_hour_minute,
    parse_standup_time,
    should_fire,
    wrap_hour,
)
from standups.store import StandupRecord


def utc(hour: int, minute: int) -> datetime:
    return pytz.UTC.localize(datetime(2026, 10, 14, hour, minute, 1))


class TestWrapHour:
    """Test offset hour wraparound."""

    def test_hours_in_range_unchanged(self):
        assert wrap_hour(0) == 0
        assert wrap_hour(23) == 23

    def test_past_midnight_subtracts_23(self):
        assert wrap_hour(24) == 1
        assert wrap_hour(36) == 13

    def test_negative_hours_left_alone(self):
        assert wrap_hour(-3) == -3


class TestParseStandupTime:
    """Test stored time parsing."""

    def test_short_and_padded_hours(self):
        assert parse_standup_time("9:30") == (9, 30)
        assert parse_standup_time("09:05") == (9, 5)
        assert parse_standup_time("24:00") == (24, 0)

    def test_rejects_non_numeric(self):
        with pytest.raises(StandupTimeError):
            parse_standup_time("abc")
        with pytest.raises(StandupTimeError):
            parse_standup_time("9:xx")

    def test_rejects_missing_minutes(self):
        with pytest.raises(StandupTimeError):
            parse_standup_time("9")


class TestCurrentHourMinute:
    """Test the clock a standup is compared against."""

    def test_offset_uses_shifted_utc(self):
        assert current_hour_minute(utc(14, 2), -5) == (9, 2)

    def test_offset_wraps_past_midnight(self):
        assert current_hour_minute(utc(22, 0), 2) == (1, 0)

    def test_no_offset_uses_configured_local_zone(self):
        tz = pytz.timezone("America/New_York")
        # 14 October is EDT (UTC-4)
        assert current_hour_minute(utc(14, 30), None, tz) == (10, 30)

    def test_no_offset_defaults_to_host_local(self):
        now = utc(14, 30)
        local = now.astimezone()
        assert current_hour_minute(now) == (local.hour, local.minute)


class TestShouldFire:
    """Test whether a standup fires for a given minute."""

    def test_offset_standup_fires(self):
        record = StandupRecord(time="9:02", channel="room", utc="-5")
        assert should_fire(record, utc(14, 2)) is True

    def test_offset_standup_wrong_minute(self):
        record = StandupRecord(time="9:02", channel="room", utc="-5")
        assert should_fire(record, utc(14, 3)) is False

    def test_wraparound_is_not_mod_24(self):
        # UTC 22:00 at +2 is matched as hour 1, not hour 0
        midnight = StandupRecord(time="0:00", channel="room", utc="+2")
        one_am = StandupRecord(time="1:00", channel="room", utc="+2")
        assert should_fire(midnight, utc(22, 0)) is False
        assert should_fire(one_am, utc(22, 0)) is True

    def test_negative_adjusted_hour_never_wraps(self):
        record = StandupRecord(time="21:00", channel="room", utc="-5")
        assert should_fire(record, utc(2, 0)) is False

    def test_local_standup_uses_local_zone(self):
        tz = pytz.timezone("Europe/Berlin")
        record = StandupRecord(time="16:15", channel="room")
        # CEST is UTC+2 in October
        assert should_fire(record, utc(14, 15), tz) is True
        assert should_fire(record, utc(16, 15), tz) is False

    def test_local_standup_host_zone(self):
        now = utc(8, 45)
        local = now.astimezone()
        record = StandupRecord(time=f"{local.hour}:{local.minute:02d}", channel="room")
        assert should_fire(record, now) is True

    def test_padded_time_matches(self):
        record = StandupRecord(time="09:02", channel="room", utc="-5")
        assert should_fire(record, utc(14, 2)) is True

    def test_hour_24_never_fires(self):
        local_record = StandupRecord(time="24:00", channel="room")
        offset_record = StandupRecord(time="24:00", channel="room", utc="+13")
        for hour in range(24):
            now = utc(hour, 0)
            assert should_fire(local_record, now, pytz.UTC) is False
            assert should_fire(offset_record, now) is False

    def test_malformed_time_never_fires(self):
        record = StandupRecord(time="abc", channel="room")
        for hour in (0, 9, 23):
            assert should_fire(record, utc(hour, 0), pytz.UTC) is False

    def test_malformed_offset_never_fires(self):
        record = StandupRecord(time="9:00", channel="room", utc="east")
        assert should_fire(record, utc(9, 0)) is False
