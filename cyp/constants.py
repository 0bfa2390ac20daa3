"""Common constants used throughout the choose-your-path package."""

# SPDX-License-Identifier: GPL-3.0-or-later

DEFAULT_TREASURE = 0
DEFAULT_HEALTH = 1000
STATE_SEPARATOR = "&"

DEFAULT_ENTRY_ROUTE = "/cyp"
DEFAULT_PAGE_TITLE = "Choose Your Path"

__all__ = [
    "DEFAULT_TREASURE",
    "DEFAULT_HEALTH",
    "STATE_SEPARATOR",
    "DEFAULT_ENTRY_ROUTE",
    "DEFAULT_PAGE_TITLE",
]
