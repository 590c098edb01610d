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

"""
Time Matcher Module

Decides, once per tick, whether a stored standup should fire this minute.
Standups without a UTC offset are compared against server-local time;
standups with an offset are compared against UTC shifted by that many hours.
"""

from datetime import datetime
from typing import Optional

import pytz

from .store import StandupRecord


class StandupTimeError(ValueError):
    """Raised when a stored standup time cannot be parsed."""

    pass


def wrap_hour(hour: int) -> int:
    """
    Wrap an offset-adjusted hour that ran past midnight.

    Subtracts 23, not 24, so UTC 22:00 at UTC+2 gives hour 1 and a
    0:xx standup with a positive offset never matches that hour.
    Negative results are returned unchanged.
    """
    if hour > 23:
        hour -= 23
    return hour


def parse_standup_time(time: str) -> tuple[int, int]:
    """
    Split a "H:MM" string into (hour, minute).

    Raises:
        StandupTimeError: If either half is missing or not an integer
    """
    parts = str(time).split(":")
    try:
        return int(parts[0]), int(parts[1])
    except (IndexError, ValueError) as e:
        raise StandupTimeError(f"Invalid standup time: {time!r}") from e


def current_hour_minute(
    now: datetime,
    utc_offset: Optional[int] = None,
    local_tz: Optional[pytz.BaseTzInfo] = None,
) -> tuple[int, int]:
    """
    Get the (hour, minute) a standup should be compared against.

    Args:
        now: The tick instant (timezone-aware)
        utc_offset: Whole-hour offset from UTC, or None for server-local time
        local_tz: Server-local zone (None = host local time)

    Returns:
        Tuple of (hour, minute)
    """
    if utc_offset is None:
        local = now.astimezone(local_tz) if local_tz else now.astimezone()
        return local.hour, local.minute

    utc_now = now.astimezone(pytz.UTC)
    return wrap_hour(utc_now.hour + utc_offset), utc_now.minute


def should_fire(
    record: StandupRecord,
    now: datetime,
    local_tz: Optional[pytz.BaseTzInfo] = None,
) -> bool:
    """
    Check whether a standup matches the current minute.

    A record whose time or offset can't be parsed never fires.
    """
    try:
        standup_hour, standup_minute = parse_standup_time(record.time)
        current_hour, current_minute = current_hour_minute(now, record.utc_offset, local_tz)
    except ValueError:
        return False

    return standup_hour == current_hour and standup_minute == current_minute
