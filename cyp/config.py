"""Configuration loading utilities for game settings and level descriptors."""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import logging
import os
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .constants import DEFAULT_ENTRY_ROUTE, DEFAULT_PAGE_TITLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Container for server wide game settings."""

    entry_route: str = DEFAULT_ENTRY_ROUTE
    cookie_name: str = ""
    page_title: str = DEFAULT_PAGE_TITLE


@dataclass(frozen=True)
class LevelDescriptor:
    """Content and reward settings for one level route.

    ``None`` marks a field the route did not configure; it is inherited from
    the nearest configured parent route and filled with a default once the
    table is resolved.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    left_path: Optional[str] = None
    left_label: Optional[str] = None
    right_path: Optional[str] = None
    right_label: Optional[str] = None
    treasure_reward: Optional[str] = None
    damage_amount: Optional[str] = None
    template: Optional[str] = None
    template_path: Optional[str] = None

    @property
    def has_left_choice(self) -> bool:
        return bool(self.left_path) and bool(self.left_label)


_DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "levels.yaml")

# Template text and its source path travel together during inheritance.
_TEMPLATE_FIELDS = ("template", "template_path")


def normalize_route(path: str | None) -> str:
    """Return ``path`` with a single leading slash and no trailing slash."""

    cleaned = "/" + str(path or "").strip().strip("/")
    while "//" in cleaned:
        cleaned = cleaned.replace("//", "/")
    return cleaned


def parent_routes(route: str) -> Tuple[str, ...]:
    """Return the ancestors of ``route``, nearest first, ending with ``/``."""

    normalized = normalize_route(route)
    if normalized == "/":
        return ()
    segments = normalized.strip("/").split("/")
    parents = ["/" + "/".join(segments[:index]) for index in range(len(segments) - 1, 0, -1)]
    parents.append("/")
    return tuple(parents)


def merge_descriptors(parent: LevelDescriptor, child: LevelDescriptor) -> LevelDescriptor:
    """Return ``child`` with unset fields taken from ``parent``."""

    values: Dict[str, Any] = {}
    for item in fields(LevelDescriptor):
        if item.name in _TEMPLATE_FIELDS:
            continue
        own = getattr(child, item.name)
        values[item.name] = own if own is not None else getattr(parent, item.name)
    source = child if child.template_path is not None else parent
    values["template"] = source.template
    values["template_path"] = source.template_path
    return LevelDescriptor(**values)


def finalize_descriptor(descriptor: LevelDescriptor) -> LevelDescriptor:
    """Return ``descriptor`` with every unset text field given its default."""

    left_path = descriptor.left_path or ""
    left_label = descriptor.left_label or ""
    if not left_path or not left_label:
        left_path = left_label = ""
    return replace(
        descriptor,
        title=descriptor.title or "",
        description=descriptor.description or "",
        left_path=left_path,
        left_label=left_label,
        right_path=descriptor.right_path or "",
        right_label=descriptor.right_label or "",
        treasure_reward=descriptor.treasure_reward or "0",
        damage_amount=descriptor.damage_amount or "0",
    )


class LevelTable:
    """Immutable mapping from route to fully resolved :class:`LevelDescriptor`."""

    def __init__(self, levels: Mapping[str, LevelDescriptor] | None = None) -> None:
        self._levels: Mapping[str, LevelDescriptor] = MappingProxyType(
            {normalize_route(route): level for route, level in (levels or {}).items()}
        )

    @classmethod
    def from_partials(cls, partials: Mapping[str, LevelDescriptor]) -> "LevelTable":
        """Resolve inheritance between ``partials`` and build a table."""

        normalized = {normalize_route(route): level for route, level in partials.items()}
        merged: Dict[str, LevelDescriptor] = {}
        for route in sorted(normalized, key=lambda item: item.count("/") if item != "/" else 0):
            level = normalized[route]
            for parent in parent_routes(route):
                if parent in merged:
                    level = merge_descriptors(merged[parent], level)
                    break
            merged[route] = level
        return cls({route: finalize_descriptor(level) for route, level in merged.items()})

    @property
    def levels(self) -> Mapping[str, LevelDescriptor]:
        return self._levels

    def __len__(self) -> int:
        return len(self._levels)

    def __contains__(self, route: object) -> bool:
        return isinstance(route, str) and normalize_route(route) in self._levels

    def get(self, route: str) -> LevelDescriptor | None:
        return self._levels.get(normalize_route(route))

    def resolve(self, path: str) -> Tuple[str, LevelDescriptor] | None:
        """Return the configured route governing ``path`` and its descriptor.

        An exact match wins; otherwise the nearest configured ancestor
        applies, so ``/cyp/stage2/extra`` is served by ``/cyp/stage2``.
        """

        route = normalize_route(path)
        for candidate in (route,) + parent_routes(route):
            level = self._levels.get(candidate)
            if level is not None:
                return candidate, level
        return None


def _coerce_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _coerce_amount(route: str, name: str, value: Any) -> str | None:
    """Return ``value`` as the configured amount string."""

    if value is None:
        return None
    if isinstance(value, (bool, dict, list)):
        logger.warning(
            "Invalid %s value %r for level %s; using 0", name, value, route
        )
        return "0"
    return str(value).strip()


def _coerce_choice(route: str, name: str, value: Any) -> Tuple[str | None, str | None]:
    """Return the ``(path, label)`` pair configured for a move."""

    if value is None:
        return None, None
    if isinstance(value, Mapping):
        path, label = value.get("path"), value.get("label")
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        path, label = value
    else:
        logger.warning(
            "Ignoring %s for level %s; expected [path, label], got %r",
            name,
            route,
            value,
        )
        return None, None
    return _coerce_text(path), _coerce_text(label)


def _read_template(route: str, template_path: str, base_dir: str) -> str | None:
    """Return the template text at ``template_path`` or ``None`` if unreadable."""

    full_path = template_path
    if not os.path.isabs(full_path):
        full_path = os.path.join(base_dir, template_path)
    try:
        with open(full_path, "r", encoding="utf-8") as fh:
            return fh.read()
    except OSError as exc:
        logger.warning(
            "Template %s for level %s could not be read: %s; using default layout",
            full_path,
            route,
            exc,
        )
        return None


def _parse_level(route: str, payload: Mapping[str, Any], base_dir: str) -> LevelDescriptor:
    left_path, left_label = _coerce_choice(route, "move_left", payload.get("move_left"))
    right_path, right_label = _coerce_choice(route, "move_right", payload.get("move_right"))
    template_path = _coerce_text(payload.get("template"))
    template = _read_template(route, template_path, base_dir) if template_path else None
    return LevelDescriptor(
        title=_coerce_text(payload.get("title")),
        description=_coerce_text(payload.get("description")),
        left_path=left_path,
        left_label=left_label,
        right_path=right_path,
        right_label=right_label,
        treasure_reward=_coerce_amount(route, "treasure", payload.get("treasure")),
        damage_amount=_coerce_amount(route, "damage", payload.get("damage")),
        template=template,
        template_path=template_path,
    )


def _load_payload(config_path: str) -> Dict[str, Any] | None:
    """Return the YAML mapping stored at ``config_path`` or ``None``."""

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            payload = yaml.safe_load(fh) or {}
    except FileNotFoundError:
        logger.warning(
            "Game configuration file %s not found; falling back to defaults",
            config_path,
        )
        return None
    except yaml.YAMLError as exc:
        logger.warning(
            "Failed to parse game configuration %s: %s; using defaults",
            config_path,
            exc,
        )
        return None
    if not isinstance(payload, dict):
        logger.warning("Game configuration %s is not a mapping; using defaults", config_path)
        return None
    return payload


def load_game_config(path: str | None = None) -> GameConfig:
    """Load the server settings from the ``game`` section of ``path``."""

    config_path = path or _DEFAULT_CONFIG_PATH
    payload = _load_payload(config_path)
    if payload is None:
        return GameConfig()
    data = payload.get("game")
    if not isinstance(data, dict):
        data = {}
    entry_route = normalize_route(data.get("entry_route") or DEFAULT_ENTRY_ROUTE)
    cookie_name = str(data.get("cookie_name") or "").strip()
    page_title = str(data.get("page_title") or DEFAULT_PAGE_TITLE)
    return GameConfig(
        entry_route=entry_route,
        cookie_name=cookie_name,
        page_title=page_title,
    )


def load_level_table(path: str | None = None) -> LevelTable:
    """Load every level under ``levels`` in ``path`` and resolve inheritance."""

    config_path = path or _DEFAULT_CONFIG_PATH
    payload = _load_payload(config_path)
    if payload is None:
        return LevelTable()
    levels = payload.get("levels")
    if not isinstance(levels, dict):
        logger.warning("No levels configured in %s", config_path)
        return LevelTable()
    base_dir = os.path.dirname(os.path.abspath(config_path))
    partials: Dict[str, LevelDescriptor] = {}
    for route, entry in levels.items():
        if not isinstance(entry, Mapping):
            logger.warning("Skipping level %s; expected a mapping, got %r", route, entry)
            continue
        partials[str(route)] = _parse_level(str(route), entry, base_dir)
    table = LevelTable.from_partials(partials)
    logger.info("Loaded %d levels from %s", len(table), config_path)
    return table


__all__ = [
    "GameConfig",
    "LevelDescriptor",
    "LevelTable",
    "finalize_descriptor",
    "load_game_config",
    "load_level_table",
    "merge_descriptors",
    "normalize_route",
    "parent_routes",
]
