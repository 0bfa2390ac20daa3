"""Placeholder substitution for operator supplied page templates."""

# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from typing import Iterable, Tuple


def replace_all(text: str, placeholder: str, value: str) -> str:
    """Return ``text`` with every occurrence of ``placeholder`` set to ``value``.

    Inserted ``value`` text is never searched again.
    """

    if not placeholder:
        return text
    return text.replace(placeholder, value)


def substitute(template: str, replacements: Iterable[Tuple[str, str]]) -> str:
    """Apply ``replacements`` to ``template`` one placeholder at a time, in order."""

    result = template
    for placeholder, value in replacements:
        result = replace_all(result, placeholder, str(value))
    return result


__all__ = ["replace_all", "substitute"]
