"""Decide whether a request may see level content."""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import enum


class Visibility(enum.Enum):
    """Outcome of the gate check for a single request."""

    VISIBLE = "visible"
    BLOCKED = "blocked"


def decide(had_prior_state: bool, is_entry_route: bool) -> Visibility:
    """Return ``VISIBLE`` for returning players or the entry route."""

    if had_prior_state or is_entry_route:
        return Visibility.VISIBLE
    return Visibility.BLOCKED


__all__ = ["Visibility", "decide"]
