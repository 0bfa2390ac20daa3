"""Player state carried in the client cookie and the per-level delta."""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Tuple

from .config import LevelDescriptor
from .constants import DEFAULT_HEALTH, DEFAULT_TREASURE, STATE_SEPARATOR


logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


@dataclass(frozen=True)
class PlayerState:
    """Treasure collected so far and remaining health."""

    treasure: int = DEFAULT_TREASURE
    health: int = DEFAULT_HEALTH


def parse_int(text: str | None) -> int:
    """Return the integer prefix of ``text`` or ``0`` when there is none.

    Leading whitespace and a single sign are accepted and parsing stops at
    the first non-digit, so ``"42abc"`` yields ``42`` and ``"abc"`` yields
    ``0``.
    """

    if not text:
        return 0
    match = _LEADING_INT.match(text)
    if match is None:
        logger.debug("No integer prefix in %r; using 0", text)
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        # Digit strings past the interpreter's conversion limit.
        logger.debug("Integer prefix of %d characters is too long; using 0", len(match.group(1)))
        return 0


def decode(cookie_header: str | None) -> Tuple[PlayerState, bool]:
    """Return the state in ``cookie_header`` and whether one was sent at all."""

    if cookie_header is None:
        return PlayerState(), False
    segments = cookie_header.split(STATE_SEPARATOR)
    treasure = parse_int(segments[0])
    # A token without a second field carries no health.
    health = parse_int(segments[1]) if len(segments) > 1 else 0
    return PlayerState(treasure=treasure, health=health), True


def encode(state: PlayerState) -> str:
    """Return the wire token for ``state``."""

    return f"{int(state.treasure)}{STATE_SEPARATOR}{int(state.health)}"


def apply_delta(state: PlayerState, descriptor: LevelDescriptor) -> PlayerState:
    """Return ``state`` after collecting the level's treasure and damage."""

    reward = parse_int(descriptor.treasure_reward)
    damage = parse_int(descriptor.damage_amount)
    return PlayerState(
        treasure=state.treasure + reward,
        health=state.health - damage,
    )


__all__ = ["PlayerState", "parse_int", "decode", "encode", "apply_delta"]
