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
Standup Configuration

Configurable parameters for the standup scheduler.
Values can be overridden via environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import pytz

logger = logging.getLogger("standupbot.standups.config")

DEFAULT_BRAIN_KEY = "standups"


def validate_timezone(tz_name: str) -> bool:
    """
    Validate that a timezone name is valid.

    Args:
        tz_name: IANA timezone name (e.g., "America/Los_Angeles")

    Returns:
        True if valid, False otherwise
    """
    try:
        pytz.timezone(tz_name)
        return True
    except pytz.UnknownTimeZoneError:
        return False


@dataclass
class StandupConfig:
    """Configuration for the standup scheduler."""

    # Text put in front of every standup message
    prepend: str = ""

    # Key the standup list is stored under in the brain
    brain_key: str = DEFAULT_BRAIN_KEY

    # Zone used as "server-local" time (None = host local time)
    server_timezone: Optional[str] = None

    # Start the once-a-minute cadence loop
    enabled: bool = True

    database_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "StandupConfig":
        """Create config from environment variables with defaults."""
        server_timezone = os.getenv("STANDUP_TIMEZONE") or None
        if server_timezone and not validate_timezone(server_timezone):
            logger.warning(
                f"Invalid STANDUP_TIMEZONE '{server_timezone}', falling back to host local time"
            )
            server_timezone = None

        return cls(
            prepend=os.getenv("STANDUP_PREPEND", ""),
            brain_key=os.getenv("STANDUP_BRAIN_KEY", DEFAULT_BRAIN_KEY),
            server_timezone=server_timezone,
            enabled=os.getenv("STANDUP_ENABLED", "true").lower() == "true",
            database_url=os.getenv("DATABASE_URL") or None,
        )

    @property
    def local_tz(self) -> Optional[pytz.BaseTzInfo]:
        """The configured server-local zone, or None for host local time."""
        if self.server_timezone is None:
            return None
        return pytz.timezone(self.server_timezone)
