# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc

import pyparsing as pp

from ..commontypes import ClavisError
from ..util import close_matches


class ParseError(ClavisError):
    """A configuration that could not be tokenized.

    offset is a character index into source; line and column are 1-based. expected holds the labels of
    everything that was tried at the failure position.
    """

    def __init__(self, message: str, source: str, offset: int, expected: collections.abc.Iterable[str] = ()):
        self.message = message
        self.source = source
        self.offset = offset
        self.expected = tuple(expected)
        self.line = pp.lineno(offset, source)
        self.column = pp.col(offset, source)
        super().__init__(str(self))

    @property
    def byte_offset(self):
        return len(self.source[: self.offset].encode("utf-8"))

    def __str__(self):
        if self.expected:
            return f"{self.line}:{self.column}: {self.message} (expected {', '.join(self.expected)})"
        return f"{self.line}:{self.column}: {self.message}"


class KeycodeError(ParseError):
    def __init__(self, name: str, source: str, offset: int, expected=(), known_names: collections.abc.Sequence[str] = ()):
        self.name = name
        self.known_names = tuple(known_names)
        super().__init__(f"unknown keycode {name!r}", source, offset, expected)

    def suggestions(self, limit: int = 3):
        return close_matches(self.name, self.known_names, limit=limit)


class ComposeError(ParseError):
    def __init__(self, message: str, source: str, offset: int, trigger: str):
        self.trigger = trigger
        super().__init__(message, source, offset)


def describe_position(source: str, offset: int) -> str:
    if offset >= len(source):
        return "end of input"
    return repr(source[offset])
