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
Standup Scheduler Module

Background task loop that checks registered standups once a minute,
Monday to Friday, and posts a standup message into every channel whose
standup matches the current minute. Uses discord.ext.tasks for the loop.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

import discord
import pytz
from croniter import croniter
from discord.ext import tasks

if TYPE_CHECKING:
    from discord_bot import StandupBot

from .config import StandupConfig
from .matcher import should_fire
from .messages import select_message
from .store import StandupStore

logger = logging.getLogger("standupbot.standups.scheduler")

# Second 1 of every minute, Monday to Friday (croniter: seconds field last)
CADENCE_CRON = "* * * * 1-5 1"

SendFunc = Callable[[str, str], Awaitable[object]]


@dataclass
class FireEvent:
    """A standup that fired this tick."""

    channel: str
    message: str


def next_tick_time(now: datetime, local_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """Next cadence instant after `now`, evaluated in server-local time."""
    local_now = now.astimezone(local_tz) if local_tz else now.astimezone()
    return croniter(CADENCE_CRON, local_now).get_next(datetime)


def is_tick_day(now: datetime, local_tz: Optional[pytz.BaseTzInfo] = None) -> bool:
    """True on server-local Monday to Friday."""
    local_now = now.astimezone(local_tz) if local_tz else now.astimezone()
    return local_now.weekday() < 5


class StandupScheduler:
    """
    Background scheduler for firing standups.

    tick() does the matching and never touches the store's contents;
    the loop calls run_tick() once a minute and delivers the results.
    """

    def __init__(
        self,
        bot: "StandupBot",
        store: StandupStore,
        config: Optional[StandupConfig] = None,
        send: Optional[SendFunc] = None,
        rng=None,
    ):
        """
        Initialize the standup scheduler.

        Args:
            bot: Discord bot instance
            store: Loaded standup store
            config: Standup configuration (defaults to StandupConfig())
            send: Coroutine taking (channel, text); defaults to bot.send_message
            rng: Random source for message selection
        """
        self.bot = bot
        self.store = store
        self.config = config or StandupConfig()
        self.send = send or bot.send_message
        self.rng = rng
        self.local_tz = self.config.local_tz
        self._started = False

    def start(self) -> None:
        """Start the scheduler loop."""
        if not self._started:
            self._check_standups.start()
            self._started = True
            logger.info("Standup scheduler started")

    def stop(self) -> None:
        """Stop the scheduler loop."""
        if self._started:
            self._check_standups.cancel()
            self._started = False
            logger.info("Standup scheduler stopped")

    def tick(self, now: datetime) -> list[FireEvent]:
        """
        Work out which standups fire at `now`.

        Returns:
            One FireEvent per matching standup, duplicates included
        """
        events = []
        for record in self.store.list_all():
            if should_fire(record, now, self.local_tz):
                message = select_message(self.config.prepend, self.rng)
                events.append(FireEvent(channel=record.channel, message=message))
        return events

    async def run_tick(self, now: datetime) -> list[FireEvent]:
        """Fire and deliver every standup matching `now`."""
        events = self.tick(now)

        if events:
            logger.info(f"Firing {len(events)} standup(s)")

        for event in events:
            try:
                await self.send(event.channel, event.message)
            except Exception as e:
                logger.error(
                    f"Failed to deliver standup to channel {event.channel}: {e}",
                    exc_info=True,
                )

        return events

    @tasks.loop(seconds=60)
    async def _check_standups(self) -> None:
        """Check for standups that should fire this minute."""
        try:
            now = datetime.now(pytz.UTC)
            if not is_tick_day(now, self.local_tz):
                return
            await self.run_tick(now)

        except Exception as e:
            logger.error(f"Error in standup scheduler loop: {e}", exc_info=True)

    @_check_standups.before_loop
    async def _before_check(self) -> None:
        """Wait for the bot, then line the loop up with the cadence."""
        await self.bot.wait_until_ready()
        first_tick = next_tick_time(datetime.now(pytz.UTC), self.local_tz)
        logger.info(f"Standup scheduler ready, first check at {first_tick.isoformat()}")
        await discord.utils.sleep_until(first_tick)
