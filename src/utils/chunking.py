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

"""Splitting long replies to fit Discord's message limit."""

# Discord message length limit
DISCORD_MAX_LENGTH = 2000


def chunk_message(content: str, limit: int = DISCORD_MAX_LENGTH) -> list[str]:
    """
    Split a message into chunks no longer than `limit`.

    Prefers line breaks so standup lists stay one entry per line, then
    falls back to word breaks and finally a hard cut.
    """
    if len(content) <= limit:
        return [content]

    chunks = []
    remaining = content

    while remaining:
        if len(remaining) <= limit:
            chunks.append(remaining)
            break

        break_at = limit

        newline_idx = remaining.rfind("\n", 0, limit)
        if newline_idx > limit // 2:
            break_at = newline_idx + 1
        else:
            space_idx = remaining.rfind(" ", 0, limit)
            if space_idx > limit // 2:
                break_at = space_idx + 1

        chunks.append(remaining[:break_at].rstrip())
        remaining = remaining[break_at:].lstrip()

    return chunks
