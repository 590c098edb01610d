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
Standup Store Module

Holds the list of registered standups in memory and writes it back,
whole, to a key-value "brain" after every change.
"""

import asyncio
import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Optional

import asyncpg

from .config import DEFAULT_BRAIN_KEY

logger = logging.getLogger("standupbot.standups.store")


@dataclass(frozen=True)
class StandupRecord:
    """One registered standup."""

    time: str  # "H:MM" or "HH:MM", as typed by the user
    channel: str
    utc: Optional[str] = None  # e.g. "+2", "-5"; None = server-local time

    @property
    def utc_offset(self) -> Optional[int]:
        """The UTC offset in hours, or None for server-local time."""
        if self.utc is None or self.utc == "":
            return None
        return int(self.utc)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "StandupRecord":
        """
        Build a record from brain data.

        Older entries use "room" instead of "channel". Those are chat room
        names, not Discord IDs, so the bot can't deliver to them.

        Raises:
            KeyError: If the entry has no time or no channel
        """
        channel = data.get("channel", data.get("room"))
        if channel is None:
            raise KeyError("channel")
        utc = data.get("utc")
        return cls(
            time=str(data["time"]),
            channel=str(channel),
            utc=str(utc) if utc not in (None, "") else None,
        )


class MemoryBrain:
    """Dict-backed brain. Nothing survives a restart."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, Any] = dict(initial or {})

    async def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class PostgresBrain:
    """
    Key-value brain stored in a single PostgreSQL table.

    Values are JSON-encoded into a JSONB column and upserted by key.
    """

    def __init__(self, db_pool: asyncpg.Pool):
        """
        Initialize the brain.

        Args:
            db_pool: asyncpg connection pool
        """
        self.db = db_pool

    async def ensure_schema(self) -> None:
        """Create the brain table if it doesn't exist yet."""
        await self.db.execute(
            """
            CREATE TABLE IF NOT EXISTS standup_brain (
                key TEXT PRIMARY KEY,
                value JSONB NOT NULL,
                updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """
        )

    async def get(self, key: str) -> Optional[Any]:
        raw = await self.db.fetchval(
            """
            SELECT value FROM standup_brain
            WHERE key = $1
            """,
            key,
        )
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        await self.db.execute(
            """
            INSERT INTO standup_brain (key, value, updated_at)
            VALUES ($1, $2::jsonb, NOW())
            ON CONFLICT (key)
            DO UPDATE SET value = $2::jsonb, updated_at = NOW()
            """,
            key,
            json.dumps(value),
        )


class StandupStore:
    """
    In-memory standup list backed by a brain.

    The list is loaded once with load() and every create/delete writes the
    full list back. Duplicate (channel, time) pairs are allowed.
    """

    def __init__(self, brain, key: str = DEFAULT_BRAIN_KEY):
        """
        Initialize the store.

        Args:
            brain: Object with async get(key) and set(key, value)
            key: Brain key the standup list lives under
        """
        self.brain = brain
        self.key = key
        self._standups: list[StandupRecord] = []
        self._lock = asyncio.Lock()

    async def load(self) -> int:
        """
        Load the standup list from the brain.

        Returns:
            Number of standups loaded (0 if nothing was stored yet)
        """
        async with self._lock:
            stored = await self.brain.get(self.key) or []
            standups = []
            for item in stored:
                try:
                    standups.append(StandupRecord.from_dict(item))
                except (KeyError, TypeError, AttributeError) as e:
                    logger.warning(f"Skipping unreadable standup entry {item!r}: {e!r}")
            self._standups = standups

        undeliverable = sorted({s.channel for s in standups if not s.channel.isdigit()})
        if undeliverable:
            logger.warning(
                f"Standups for non-Discord channel keys will not be delivered: {undeliverable}"
            )

        logger.info(f"Loaded {len(self._standups)} standup(s) from brain key '{self.key}'")
        return len(self._standups)

    def list_all(self) -> list[StandupRecord]:
        """Return every standup, in the order they were created."""
        return list(self._standups)

    def list_for_channel(self, channel: str) -> list[StandupRecord]:
        """Return the standups registered for one channel."""
        return [s for s in self._standups if s.channel == channel]

    async def create(
        self, channel: str, time: str, utc: Optional[str] = None
    ) -> StandupRecord:
        """
        Register a new standup and persist the list.

        Args:
            channel: Destination channel key
            time: Time of day as "H:MM" (not validated here)
            utc: Signed UTC offset such as "+2", or None for server-local time

        Returns:
            The created record
        """
        record = StandupRecord(time=time, channel=channel, utc=utc or None)

        async with self._lock:
            self._standups = self._standups + [record]
            await self._persist()

        logger.info(f"Created standup for channel {channel} at {time} (utc={utc})")
        return record

    async def delete_all(self, channel: str) -> int:
        """
        Delete every standup for a channel.

        Returns:
            Number of standups removed
        """
        removed = await self._delete_where(lambda s: s.channel == channel)
        if removed:
            logger.info(f"Deleted all {removed} standup(s) for channel {channel}")
        return removed

    async def delete_by_time(self, channel: str, time: str) -> int:
        """
        Delete the standups for a channel at an exact time string.

        "9:00" and "09:00" are different times here.

        Returns:
            Number of standups removed
        """
        removed = await self._delete_where(
            lambda s: s.channel == channel and s.time == time
        )
        if removed:
            logger.info(f"Deleted {removed} standup(s) at {time} for channel {channel}")
        return removed

    async def _delete_where(self, predicate) -> int:
        async with self._lock:
            keep = [s for s in self._standups if not predicate(s)]
            removed = len(self._standups) - len(keep)
            self._standups = keep
            await self._persist()

        return removed

    async def _persist(self) -> None:
        """Write the full list to the brain. Caller holds the lock."""
        await self.brain.set(self.key, [s.to_dict() for s in self._standups])
