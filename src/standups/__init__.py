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
Standup Reminders Package

Stores daily standup times per channel and fires a reminder into the
channel on weekdays when the time comes around.
"""

from .config import StandupConfig, validate_timezone
from .store import StandupRecord, StandupStore, MemoryBrain, PostgresBrain
from .matcher import (
    StandupTimeError,
    should_fire,
    parse_standup_time,
    current_hour_minute,
    wrap_hour,
)
from .messages import STANDUP_MESSAGES, select_message
from .scheduler import FireEvent, StandupScheduler

__all__ = [
    "StandupConfig",
    "validate_timezone",
    "StandupRecord",
    "StandupStore",
    "MemoryBrain",
    "PostgresBrain",
    "StandupTimeError",
    "should_fire",
    "parse_standup_time",
    "current_hour_minute",
    "wrap_hour",
    "STANDUP_MESSAGES",
    "select_message",
    "FireEvent",
    "StandupScheduler",
]
