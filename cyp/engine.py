"""Per-request game flow: decode state, apply the level, gate and render."""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import LevelDescriptor
from .constants import DEFAULT_ENTRY_ROUTE, DEFAULT_PAGE_TITLE
from .gatekeeper import Visibility, decide
from .player_state import PlayerState, apply_delta, decode, encode
from .render import RenderContext, render


logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/html"


@dataclass(frozen=True)
class EngineResponse:
    """Body and headers produced for one game request."""

    body: str
    set_cookie: str
    visibility: Visibility
    state: PlayerState
    content_type: str = CONTENT_TYPE
    status: int = 200


def handle_request(
    cookie_header: str | None,
    descriptor: LevelDescriptor,
    *,
    is_entry_route: bool,
    entry_route: str = DEFAULT_ENTRY_ROUTE,
    page_title: str = DEFAULT_PAGE_TITLE,
) -> EngineResponse:
    """Return the response for a visit to ``descriptor``'s level.

    ``cookie_header`` is the state token echoed by the client, or ``None``
    when the request carried none. A player arriving without state anywhere
    but the entry route gets the start-over page and a fresh game cookie.
    """

    state, had_prior_state = decode(cookie_header)
    updated = apply_delta(state, descriptor)
    visibility = decide(had_prior_state, is_entry_route)
    if visibility is Visibility.BLOCKED:
        logger.info("Blocking request without game state; sending player to %s", entry_route)
        outgoing = PlayerState()
    else:
        outgoing = updated
    # A fresh game shows the starting stats; the cookie already holds the entry level.
    displayed = updated if had_prior_state else state
    context = RenderContext(
        state=displayed,
        descriptor=descriptor,
        visibility=visibility,
        entry_route=entry_route,
        page_title=page_title,
    )
    body = render(context)
    return EngineResponse(
        body=body,
        set_cookie=encode(outgoing),
        visibility=visibility,
        state=outgoing,
    )


__all__ = ["CONTENT_TYPE", "EngineResponse", "handle_request"]
