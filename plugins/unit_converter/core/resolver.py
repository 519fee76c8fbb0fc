"""Map free-text unit tokens onto catalog unit keys."""

from __future__ import annotations

from typing import Callable, Optional

from .catalog import Category, Unit

Matcher = Callable[[Unit, str], bool]


def _exact_key(unit: Unit, text: str) -> bool:
    return unit.key.lower() == text


def _exact_name(unit: Unit, text: str) -> bool:
    return unit.name.lower() == text


def _partial_key(unit: Unit, text: str) -> bool:
    key = unit.key.lower()
    return text in key or key in text


def _partial_name(unit: Unit, text: str) -> bool:
    name = unit.name.lower()
    return text in name or name in text


# Strategies in priority order; within a strategy the first unit in
# declaration order wins, so "m" may shadow "mm" on partial matches.
_MATCHERS: tuple[Matcher, ...] = (_exact_key, _exact_name, _partial_key, _partial_name)


def resolve_unit(text: str | None, category: Category) -> Optional[str]:
    """Return the key of the unit in ``category`` that ``text`` refers to.

    Matching is case-insensitive and tries exact key, exact display name,
    partial key and partial display name in that order. ``None`` is returned
    for empty input or when nothing matches.
    """

    needle = (text or "").strip().lower()
    if not needle:
        return None
    for matcher in _MATCHERS:
        for unit in category:
            if matcher(unit, needle):
                return unit.key
    return None


__all__ = ["resolve_unit"]
