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
Standup Slash Commands

Discord slash commands for managing standup reminders.
"""

import logging
import re
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from standups import StandupRecord, StandupStore
from utils.chunking import chunk_message

logger = logging.getLogger("standupbot.commands.standup")

# Hours 0-24 are accepted; a 24:xx standup is stored but never fires
CREATE_TIME_PATTERN = re.compile(r"^((?:[01]?[0-9]|2[0-4]):[0-5]?[0-9])$")
DELETE_TIME_PATTERN = re.compile(r"^([0-5]?[0-9]:[0-5]?[0-9])$")
UTC_PATTERN = re.compile(r"^UTC([+-]([0-9]|1[0-3]))$", re.IGNORECASE)

UTC_CHOICES = [f"UTC{sign}{n}" for sign in "+-" for n in range(14)]

HELP_LINES = [
    "I can remind you to do your daily standup!",
    "Use me to create a standup, and then I'll post in this room every weekday "
    "at the time you specify. Here's how:",
    "",
    "`/standup create time:hh:mm` - I'll remind you to standup in this room at hh:mm every weekday.",
    "`/standup create time:hh:mm utc:UTC+2` - I'll remind you to standup in this room at hh:mm "
    "every weekday (relative to UTC).",
    "`/standup list` - See all standups for this room.",
    "`/standup list-all` - Be nosey and see when other rooms have their standup.",
    "`/standup delete time:hh:mm` - If you have a standup at hh:mm, I'll delete it.",
    "`/standup delete-all` - Deletes all standups for this room.",
]


class StandupCommandError(Exception):
    """Raised when a command argument is not in the expected format."""

    pass


def parse_create_args(time: str, utc: Optional[str] = None) -> tuple[str, Optional[str]]:
    """
    Validate /standup create arguments.

    Returns:
        Tuple of (time, signed offset such as "+2" or None)

    Raises:
        StandupCommandError: If the time or offset is malformed
    """
    time = time.strip()
    if not CREATE_TIME_PATTERN.match(time):
        raise StandupCommandError(
            f"`{time}` isn't a time I understand. Use hh:mm, e.g. `9:30` or `14:05`."
        )

    if utc is None or not utc.strip():
        return time, None

    match = UTC_PATTERN.match(utc.strip())
    if not match:
        raise StandupCommandError(
            f"`{utc}` isn't a UTC offset I understand. Use UTC+N or UTC-N, e.g. `UTC+2` (max 13)."
        )
    return time, match.group(1)


def parse_delete_time(time: str) -> str:
    """Validate the /standup delete time argument."""
    time = time.strip()
    if not DELETE_TIME_PATTERN.match(time):
        raise StandupCommandError(
            f"`{time}` isn't a time I understand. Use hh:mm, e.g. `9:30`."
        )
    return time


def resolve_channel(interaction: discord.Interaction) -> str:
    """Channel key for an interaction, falling back to the user for DMs."""
    channel_id = interaction.channel_id
    if channel_id is None:
        channel_id = interaction.user.id
    return str(channel_id)


def format_created(time: str, utc: Optional[str] = None) -> str:
    message = f"Ok, from now on I'll remind this room to do a standup every weekday at {time}"
    if utc:
        message += f" UTC{utc}"
    return message


def format_deleted_all(count: int) -> str:
    plural = "" if count == 1 else "s"
    return f"Deleted {count} standup{plural}. No more standups for you."


def format_deleted_time(time: str, count: int) -> str:
    if count == 0:
        return f"Nice try. You don't even have a standup at {time}"
    return f"Deleted your {time} standup."


def format_channel_list(standups: list[StandupRecord]) -> str:
    """Reply for /standup list."""
    if not standups:
        return "Well this is awkward. You haven't got any standups set :-/"

    lines = ["Here's your standups:"]
    for standup in standups:
        if standup.utc:
            lines.append(f"{standup.time} UTC{standup.utc}")
        else:
            lines.append(standup.time)
    return "\n".join(lines)


def format_all_list(standups: list[StandupRecord]) -> str:
    """Reply for /standup list-all."""
    if not standups:
        return "No, because there aren't any."

    lines = ["Here's the standups for every room:"]
    lines.extend(f"Room: {s.channel}, Time: {s.time}" for s in standups)
    return "\n".join(lines)


def format_help() -> str:
    return "\n".join(HELP_LINES)


class StandupCommands(commands.Cog):
    """
    Slash commands for standup management.

    Commands:
    - /standup create - Create a standup for this room
    - /standup list - List this room's standups
    - /standup list-all - List standups in every room
    - /standup delete - Delete this room's standup at a given time
    - /standup delete-all - Delete all of this room's standups
    - /standup help - Usage
    """

    standup_group = app_commands.Group(
        name="standup",
        description="Daily standup reminders for this room",
    )

    def __init__(self, bot: commands.Bot, store: StandupStore):
        self.bot = bot
        self.store = store

    async def _reply(
        self, interaction: discord.Interaction, content: str, ephemeral: bool = False
    ) -> None:
        """Send a reply, splitting it if it's over Discord's limit."""
        chunks = chunk_message(content)
        await interaction.response.send_message(chunks[0], ephemeral=ephemeral)
        for chunk in chunks[1:]:
            await interaction.followup.send(chunk, ephemeral=ephemeral)

    async def _reply_storage_error(self, interaction: discord.Interaction, e: Exception) -> None:
        logger.error(f"Standup storage error: {e}", exc_info=True)
        await self._reply(
            interaction,
            "Sorry, I couldn't save your standups right now. Please try again later.",
            ephemeral=True,
        )

    # =========================================================================
    # /standup create
    # =========================================================================

    @standup_group.command(name="create")
    @app_commands.describe(
        time="Time of day as hh:mm (server time unless utc is given)",
        utc="Optional: UTC offset, e.g. UTC+2 or UTC-5",
    )
    async def create_standup(
        self,
        interaction: discord.Interaction,
        time: str,
        utc: Optional[str] = None,
    ):
        """Create a standup for this room."""
        try:
            time, offset = parse_create_args(time, utc)
        except StandupCommandError as e:
            await self._reply(interaction, str(e), ephemeral=True)
            return

        channel = resolve_channel(interaction)

        try:
            await self.store.create(channel, time, offset)
        except Exception as e:
            await self._reply_storage_error(interaction, e)
            return

        await self._reply(interaction, format_created(time, offset))

    @create_standup.autocomplete("utc")
    async def utc_autocomplete(
        self,
        interaction: discord.Interaction,
        current: str,
    ) -> list[app_commands.Choice[str]]:
        """Autocomplete for the utc parameter."""
        current_lower = current.lower()
        matches = [c for c in UTC_CHOICES if current_lower in c.lower()]
        return [app_commands.Choice(name=c, value=c) for c in matches[:25]]

    # =========================================================================
    # /standup list, /standup list-all
    # =========================================================================

    @standup_group.command(name="list")
    async def list_standups(self, interaction: discord.Interaction):
        """See all standups for this room."""
        standups = self.store.list_for_channel(resolve_channel(interaction))
        await self._reply(interaction, format_channel_list(standups))

    @standup_group.command(name="list-all")
    async def list_all_standups(self, interaction: discord.Interaction):
        """See all standups in every room."""
        await self._reply(interaction, format_all_list(self.store.list_all()))

    # =========================================================================
    # /standup delete, /standup delete-all
    # =========================================================================

    @standup_group.command(name="delete")
    @app_commands.describe(time="The standup time to delete, as hh:mm")
    async def delete_standup(self, interaction: discord.Interaction, time: str):
        """Delete this room's standup at a given time."""
        try:
            time = parse_delete_time(time)
        except StandupCommandError as e:
            await self._reply(interaction, str(e), ephemeral=True)
            return

        try:
            removed = await self.store.delete_by_time(resolve_channel(interaction), time)
        except Exception as e:
            await self._reply_storage_error(interaction, e)
            return

        await self._reply(interaction, format_deleted_time(time, removed))

    @delete_standup.autocomplete("time")
    async def time_autocomplete(
        self,
        interaction: discord.Interaction,
        current: str,
    ) -> list[app_commands.Choice[str]]:
        """Autocomplete with this room's existing standup times."""
        times = []
        for standup in self.store.list_for_channel(resolve_channel(interaction)):
            if current in standup.time and standup.time not in times:
                times.append(standup.time)
        return [app_commands.Choice(name=t, value=t) for t in times[:25]]

    @standup_group.command(name="delete-all")
    async def delete_all_standups(self, interaction: discord.Interaction):
        """Delete all standups for this room."""
        try:
            removed = await self.store.delete_all(resolve_channel(interaction))
        except Exception as e:
            await self._reply_storage_error(interaction, e)
            return

        await self._reply(interaction, format_deleted_all(removed))

    # =========================================================================
    # /standup help
    # =========================================================================

    @standup_group.command(name="help")
    async def standup_help(self, interaction: discord.Interaction):
        """Explain how to use standup reminders."""
        await self._reply(interaction, format_help(), ephemeral=True)


async def setup(bot: commands.Bot, store: StandupStore):
    """Register the standup cog with a loaded store."""
    await bot.add_cog(StandupCommands(bot, store))
