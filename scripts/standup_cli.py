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
Standup CLI

Command-line tool for inspecting and editing the stored standup list.

Usage:
    # List every standup (or one channel's)
    python scripts/standup_cli.py list
    python scripts/standup_cli.py list --channel 123456789

    # Add a standup
    python scripts/standup_cli.py create 123456789 9:30 --utc +2

    # Delete one channel's standups (all, or at one time)
    python scripts/standup_cli.py delete 123456789
    python scripts/standup_cli.py delete 123456789 --time 9:30

    # Show which channels would fire at a given instant (default: now)
    python scripts/standup_cli.py check --at 2026-03-02T14:02:00+00:00
"""

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime

import asyncpg
import pytz
from dotenv import load_dotenv

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from standups import PostgresBrain, StandupConfig, StandupStore, should_fire
from standups.scheduler import is_tick_day

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def format_standup(standup) -> str:
    utc = f"UTC{standup.utc}" if standup.utc else "local"
    return f"{standup.channel:<22} {standup.time:<6} {utc}"


def show_standups(store: StandupStore, channel: str = None) -> None:
    """Print stored standups."""
    standups = store.list_for_channel(channel) if channel else store.list_all()

    if not standups:
        print("No standups stored.")
        return

    print(f"{'Channel':<22} {'Time':<6} Zone")
    print("-" * 40)
    for standup in standups:
        print(format_standup(standup))
    print(f"\n{len(standups)} standup(s)")


def check_standups(store: StandupStore, config: StandupConfig, at: datetime) -> None:
    """Dry-run the matcher for one instant, the way the scheduler loop would."""
    print(f"Checking {len(store.list_all())} standup(s) at {at.isoformat()}")

    if not is_tick_day(at, config.local_tz):
        print("Nothing would fire: standups are only checked Monday to Friday.")
        return

    matches = [s for s in store.list_all() if should_fire(s, at, config.local_tz)]
    if not matches:
        print("Nothing would fire.")
        return

    for standup in matches:
        print(f"Would fire: {format_standup(standup)}")


def parse_instant(value: str) -> datetime:
    """Parse --at; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = pytz.UTC.localize(parsed)
    return parsed


async def main():
    parser = argparse.ArgumentParser(description="Standup management CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list command
    list_parser = subparsers.add_parser("list", help="List stored standups")
    list_parser.add_argument("--channel", help="Only show this channel")

    # create command
    create_parser = subparsers.add_parser("create", help="Add a standup")
    create_parser.add_argument("channel", help="Channel ID")
    create_parser.add_argument("time", help="Time of day as hh:mm")
    create_parser.add_argument("--utc", help="UTC offset such as +2 or -5")

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete standups for a channel")
    delete_parser.add_argument("channel", help="Channel ID")
    delete_parser.add_argument("--time", help="Only delete the standup at this exact time")

    # check command
    check_parser = subparsers.add_parser("check", help="Show which standups would fire")
    check_parser.add_argument(
        "--at", type=parse_instant, help="ISO 8601 instant (default: now, UTC)"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    load_dotenv()
    config = StandupConfig.from_env()
    if not config.database_url:
        print("Error: DATABASE_URL environment variable not set")
        sys.exit(1)

    pool = await asyncpg.create_pool(config.database_url, min_size=1, max_size=2)

    try:
        brain = PostgresBrain(pool)
        await brain.ensure_schema()
        store = StandupStore(brain, key=config.brain_key)
        await store.load()

        if args.command == "list":
            show_standups(store, args.channel)
        elif args.command == "create":
            record = await store.create(args.channel, args.time, args.utc)
            print(f"Created: {format_standup(record)}")
        elif args.command == "delete":
            if args.time:
                removed = await store.delete_by_time(args.channel, args.time)
            else:
                removed = await store.delete_all(args.channel)
            print(f"Deleted {removed} standup(s).")
        elif args.command == "check":
            check_standups(store, config, args.at or datetime.now(pytz.UTC))
    finally:
        await pool.close()


if __name__ == "__main__":
    asyncio.run(main())
