"""HTML rendering for level pages and the start-over prompt."""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import List, Tuple

from .config import LevelDescriptor
from .constants import DEFAULT_ENTRY_ROUTE, DEFAULT_PAGE_TITLE
from .gatekeeper import Visibility
from .player_state import PlayerState
from .templating import substitute


BANNER_LINES: Tuple[str, ...] = (
    " @@@@@@@ @@@  @@@  @@@@@@   @@@@@@   @@@@@@ @@@@@@@@    @@@ @@@  @@@@@@  @@@  @@@ @@@@@@@     @@@@@@@   @@@@@@  @@@@@@@ @@@  @@@",
    "!@@      @@!  @@@ @@!  @@@ @@!  @@@ !@@     @@!         @@! !@@ @@!  @@@ @@!  @@@ @@!  @@@    @@!  @@@ @@!  @@@   @!!   @@!  @@@",
    "!@!      @!@!@!@! @!@  !@! @!@  !@!  !@@!!  @!!!:!       !@!@!  @!@  !@! @!@  !@! @!@!!@!     @!@@!@!  @!@!@!@!   @!!   @!@!@!@!",
    ":!!      !!:  !!! !!:  !!! !!:  !!!     !:! !!:           !!:   !!:  !!! !!:  !!! !!: :!!     !!:      !!:  !!!   !!:   !!:  !!!",
    " :: :: :  :   : :  : :. :   : :. :  ::.: :  : :: ::       .:     : :. :   :.:: :   :   : :     :        :   : :    :     :   : : ",
)

TITLE_TOKEN = "{{title}}"
HEALTH_TOKEN = "{{health}}"
TREASURE_TOKEN = "{{treasure}}"
CHOICES_TOKEN = "{{choices}}"
STAGE_TITLE_TOKEN = "{{stageTitle}}"
DESCRIPTION_TOKEN = "{{description}}"


@dataclass(frozen=True)
class RenderContext:
    """Everything a single response body is rendered from."""

    state: PlayerState
    descriptor: LevelDescriptor
    visibility: Visibility
    entry_route: str = DEFAULT_ENTRY_ROUTE
    page_title: str = DEFAULT_PAGE_TITLE


def _link(path: str | None, label: str | None) -> str:
    return f"<a href=\"{escape(path or '', quote=True)}\">{escape(label or '', False)}</a>"


def render_choices(descriptor: LevelDescriptor) -> str:
    """Return the navigation fragment offering the level's two moves."""

    parts: List[str] = ["<p>"]
    if descriptor.has_left_choice:
        parts.append("<--" + _link(descriptor.left_path, descriptor.left_label) + " ")
    parts.append("(O) ")
    parts.append(_link(descriptor.right_path, descriptor.right_label) + " -->")
    parts.append("</p>")
    return "".join(parts)


def render_default(context: RenderContext) -> str:
    """Return the built-in level page."""

    descriptor = context.descriptor
    banner = "<br />".join(BANNER_LINES)
    return (
        f"<pre>{banner}</pre>"
        + f"Treasure: {context.state.treasure}<br />"
        + f"Health: {context.state.health}<br />"
        + f"<h3>{descriptor.title or ''}</h3>"
        + f"<p>{descriptor.description or ''}</p>"
        + render_choices(descriptor)
        + "<p>--Stats--</p>"
        + f"<p>Gained {escape(descriptor.treasure_reward or '0', False)} treasure</p>"
        + f"<p>Took {escape(descriptor.damage_amount or '0', False)} damage</p>"
    )


def render_templated(context: RenderContext, template: str) -> str:
    """Return ``template`` with the level placeholders filled in."""

    descriptor = context.descriptor
    return substitute(
        template,
        (
            (TITLE_TOKEN, context.page_title),
            (HEALTH_TOKEN, str(context.state.health)),
            (TREASURE_TOKEN, str(context.state.treasure)),
            (CHOICES_TOKEN, render_choices(descriptor)),
            (STAGE_TITLE_TOKEN, descriptor.title or ""),
            (DESCRIPTION_TOKEN, descriptor.description or ""),
        ),
    )


def render_blocked(entry_route: str = DEFAULT_ENTRY_ROUTE) -> str:
    """Return the prompt sending a player without state back to the start."""

    href = escape(entry_route, quote=True)
    return (
        "<h2>You must start at the beginning.<br />"
        f"<a href='{href}'>Start Here</a></h2><br /><br /><br />"
    )


def render(context: RenderContext) -> str:
    """Return the body for ``context``, picking the layout it calls for."""

    if context.visibility is Visibility.BLOCKED:
        return render_blocked(context.entry_route)
    template = context.descriptor.template
    if template is None:
        return render_default(context)
    return render_templated(context, template)


__all__ = [
    "RenderContext",
    "render",
    "render_blocked",
    "render_choices",
    "render_default",
    "render_templated",
]
