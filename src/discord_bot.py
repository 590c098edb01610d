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
standupbot Discord Bot

Reminds rooms to do their standup. Standups are registered per channel with
/standup commands and fired by a once-a-minute weekday loop.
"""

import asyncio
import os
from typing import Optional

import asyncpg
import discord
from discord.ext import commands
from dotenv import load_dotenv

from commands import standup_commands
from standups import MemoryBrain, PostgresBrain, StandupConfig, StandupScheduler, StandupStore
from utils.chunking import chunk_message

load_dotenv()

import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("standupbot")


class StandupBot(commands.Bot):
    """Discord bot that owns the standup store and scheduler."""

    def __init__(self, config: Optional[StandupConfig] = None):
        intents = discord.Intents.default()
        intents.guilds = True

        super().__init__(command_prefix="!", intents=intents)

        self.config = config or StandupConfig.from_env()
        self.db_pool: Optional[asyncpg.Pool] = None
        self.store: Optional[StandupStore] = None
        self.scheduler: Optional[StandupScheduler] = None
        self._ready_event = asyncio.Event()

    async def setup_hook(self):
        """Called when the bot is starting up."""
        logger.info(f"Setup: DATABASE_URL={'set' if self.config.database_url else 'missing'}")
        logger.info(f"Setup: STANDUP_PREPEND={self.config.prepend!r}")
        logger.info(f"Setup: STANDUP_TIMEZONE={self.config.server_timezone or 'host local'}")

        if self.config.database_url:
            self.db_pool = await asyncpg.create_pool(self.config.database_url)
            brain = PostgresBrain(self.db_pool)
            await brain.ensure_schema()
        else:
            logger.warning("No DATABASE_URL, standups will not survive a restart")
            brain = MemoryBrain()

        self.store = StandupStore(brain, key=self.config.brain_key)
        await self.store.load()

        await standup_commands.setup(self, self.store)
        synced = await self.tree.sync()
        logger.info(f"Synced {len(synced)} application command(s)")

        self.scheduler = StandupScheduler(self, self.store, self.config)
        if self.config.enabled:
            self.scheduler.start()
        else:
            logger.info("STANDUP_ENABLED=false, scheduler not started")

    async def on_ready(self):
        """Called when the bot has connected to Discord."""
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")
        self._ready_event.set()

    async def wait_until_ready(self):
        """Wait until the bot is ready."""
        await self._ready_event.wait()

    async def _resolve_destination(self, channel: str) -> discord.abc.Messageable:
        """
        Find where to post for a stored channel key.

        Tries a channel first; keys created outside a channel are user IDs
        and resolve to that user's DMs.
        """
        target_id = int(channel)

        destination = self.get_channel(target_id)
        if destination is not None:
            return destination

        try:
            return await self.fetch_channel(target_id)
        except discord.NotFound:
            user = self.get_user(target_id)
            if user is None:
                user = await self.fetch_user(target_id)
            return user

    async def send_message(self, channel: str, content: str) -> Optional[discord.Message]:
        """Send a message to a stored channel key. Returns the last message sent."""
        destination = await self._resolve_destination(channel)

        last_msg = None
        for chunk in chunk_message(content):
            last_msg = await destination.send(chunk)
        return last_msg

    async def close(self):
        """Clean up resources on shutdown."""
        if self.scheduler:
            self.scheduler.stop()
        if self.db_pool:
            await self.db_pool.close()
        await super().close()


async def main():
    """Run the bot."""
    token = os.getenv("DISCORD_BOT_TOKEN")
    if not token:
        print("Error: DISCORD_BOT_TOKEN environment variable not set")
        print("Please set it in your .env file")
        return

    bot = StandupBot()
    await bot.start(token)


if __name__ == "__main__":
    asyncio.run(main())
