# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import difflib
import typing

T = typing.TypeVar("T")


def _identity(item):
    return item


def descend_on(items: collections.abc.Iterable[T], key: collections.abc.Callable[[T], str] = _identity) -> list[T]:
    """Order items so the longest text comes first, ties broken alphabetically.

    When several literals are prefixes of one another (tap-hold, tap-hold-next, tap-hold-next-release),
    trying them in this order means the longest literal that can match is always tried first. Otherwise
    "app" would win over "apple" and leave "le" behind.
    """
    return sorted(items, key=lambda item: (-len(key(item)), key(item)))


def close_matches(name: str, candidates: collections.abc.Iterable[str], limit: int = 3) -> list[str]:
    "Return up to limit candidates that look like name, best first."
    return difflib.get_close_matches(name, list(candidates), n=limit)
