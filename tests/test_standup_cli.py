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

"""Tests for the standup admin CLI helpers."""

import sys
from datetime import datetime
from pathlib import Path

import pytest
import pytz

# Add src and scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from standup_cli import check_standups, parse_instant, show_standups
from standups.config import StandupConfig
from standups.store import MemoryBrain, StandupStore


async def make_store(*standups) -> StandupStore:
    brain = MemoryBrain({
        "standups": [
            {"time": time, "channel": channel, "utc": utc}
            for channel, time, utc in standups
        ]
    })
    store = StandupStore(brain)
    await store.load()
    return store


UTC_CONFIG = StandupConfig(server_timezone="UTC")


class TestParseInstant:
    """Test --at parsing."""

    def test_naive_value_is_utc(self):
        parsed = parse_instant("2026-10-14T14:02:00")
        assert parsed == pytz.UTC.localize(datetime(2026, 10, 14, 14, 2))
        assert parsed.utcoffset().total_seconds() == 0

    def test_aware_value_kept(self):
        parsed = parse_instant("2026-10-14T09:02:00-05:00")
        assert parsed == pytz.UTC.localize(datetime(2026, 10, 14, 14, 2))


class TestShowStandups:
    """Test the list command output."""

    @pytest.mark.asyncio
    async def test_channel_filter(self, capsys):
        store = await make_store(("111", "9:00", None), ("222", "10:30", "+2"))

        show_standups(store, "222")
        out = capsys.readouterr().out

        assert "222" in out
        assert "10:30" in out
        assert "UTC+2" in out
        assert "111" not in out
        assert "1 standup(s)" in out

    @pytest.mark.asyncio
    async def test_empty(self, capsys):
        show_standups(await make_store())
        assert "No standups stored." in capsys.readouterr().out


class TestCheckStandups:
    """Test the check command dry run."""

    @pytest.mark.asyncio
    async def test_only_matching_standups_reported(self, capsys):
        store = await make_store(
            ("111", "9:02", "-5"),
            ("222", "14:02", None),
            ("333", "14:03", None),
        )
        wednesday = pytz.UTC.localize(datetime(2026, 10, 14, 14, 2))

        check_standups(store, UTC_CONFIG, wednesday)
        lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith("Would fire")]

        assert len(lines) == 2
        assert "111" in lines[0]
        assert "222" in lines[1]
        assert not any("333" in l for l in lines)

    @pytest.mark.asyncio
    async def test_nothing_matches(self, capsys):
        store = await make_store(("111", "9:00", None))
        wednesday = pytz.UTC.localize(datetime(2026, 10, 14, 14, 2))

        check_standups(store, UTC_CONFIG, wednesday)
        assert "Nothing would fire." in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_weekend_never_fires(self, capsys):
        store = await make_store(("222", "14:02", None))
        saturday = pytz.UTC.localize(datetime(2026, 10, 17, 14, 2))

        check_standups(store, UTC_CONFIG, saturday)
        out = capsys.readouterr().out

        assert "Would fire" not in out
        assert "Monday to Friday" in out
