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

"""Standup message selection."""

import random

STANDUP_MESSAGES = [
    "Standup time!",
    "Time for standup, y'all.",
    "It's standup time once again!",
    "Get up, stand up (it's time for our standup)",
    "Standup time. Get up, humans",
    "Standup time! Now! Go go go!",
]


def normalize_prepend(prepend_text: str) -> str:
    """Make sure a non-empty prefix ends with exactly one separating space."""
    if prepend_text and not prepend_text.endswith(" "):
        return prepend_text + " "
    return prepend_text or ""


def select_message(prepend_text: str = "", rng=None) -> str:
    """
    Pick a random standup message.

    Args:
        prepend_text: Optional prefix (e.g. a role mention)
        rng: Anything with a choice() method; defaults to the random module

    Returns:
        The prefixed message
    """
    rng = rng or random
    return normalize_prepend(prepend_text) + rng.choice(STANDUP_MESSAGES)
