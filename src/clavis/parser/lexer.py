# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import contextlib
import operator
import re
import typing

import pygtrie
import pyparsing as pp

from ..util import descend_on

# Characters that end a bare word without being part of it.
TERMINATORS = ')"'

WORD_PATTERN = re.compile(r'[^\s)"]+')

STRING_PATTERNS = {
    '"': re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL),
    "'": re.compile(r"'((?:[^'\\]|\\.)*)'", re.DOTALL),
}
ESCAPE_SEQUENCE = re.compile(r"\\(x[0-9A-Fa-f]{2}|u[0-9A-Fa-f]{4}|[0-7]{1,3}|.)", re.DOTALL)
SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


def literal(text: str) -> pp.ParserElement:
    return pp.Literal(text).leave_whitespace()


def regex(pattern: str) -> pp.ParserElement:
    return pp.Regex(pattern).leave_whitespace()


def end() -> pp.ParserElement:
    return pp.StringEnd().leave_whitespace()


def is_terminated(instring: str, loc: int) -> bool:
    return loc >= len(instring) or instring[loc].isspace() or instring[loc] in TERMINATORS


def terminated(expr: pp.ParserElement) -> pp.ParserElement:
    "Match expr only if whitespace, end of input or a terminator comes right after it."
    return expr + pp.FollowedBy(regex(r'[\s)"]') | end())


def prefix(expr: pp.ParserElement) -> pp.ParserElement:
    "Match expr only if it is glued to whatever comes next."
    return expr + pp.NotAny(regex(r"\s") | end())


def literal_choice(texts: collections.abc.Iterable[str]) -> pp.ParserElement:
    return pp.MatchFirst([literal(text) for text in descend_on(texts)])


def unescape(text: str) -> str:
    def replace(match: re.Match):
        escape = match.group(1)
        if len(escape) > 1 and escape[0] in "xu":
            return chr(int(escape[1:], 16))
        if escape[0] in "01234567":
            return chr(int(escape, 8))
        return SIMPLE_ESCAPES.get(escape, escape)

    return ESCAPE_SEQUENCE.sub(replace, text)


class FailureTracker:
    """Remembers the furthest position any labelled parser failed at, and every label tried there."""

    furthest: int
    expected: list[str]
    unresolved: dict[int, str]

    def __init__(self):
        self.reset()

    def reset(self):
        self.furthest = -1
        self.expected = []
        self.unresolved = {}

    def record(self, loc: int, label: str):
        if loc > self.furthest:
            self.furthest = loc
            self.expected = [label]
        elif loc == self.furthest and label not in self.expected:
            self.expected.append(label)

    def note_unresolved(self, loc: int, name: str):
        self.unresolved[loc] = name

    def snapshot(self):
        return self.furthest, list(self.expected)

    def restore(self, snapshot):
        self.furthest, expected = snapshot
        self.expected = list(expected)

    @contextlib.contextmanager
    def isolated(self):
        saved = self.furthest, self.expected, self.unresolved
        self.reset()
        try:
            yield self
        finally:
            self.furthest, self.expected, self.unresolved = saved


class Labeled(pp.ParseElementEnhance):
    """Report expr as label when it fails without getting past its starting position.

    If expr got further before failing, the labels recorded deeper inside are more useful and are left alone.
    """

    def __init__(self, expr: pp.ParserElement, label: str, tracker: FailureTracker):
        super().__init__(expr)
        self.label = label
        self.tracker = tracker
        self.errmsg = f"Expected {label}"

    def _generateDefaultName(self):
        return self.label

    def parseImpl(self, instring, loc, do_actions=True):
        snapshot = self.tracker.snapshot()
        try:
            return self.expr._parse(instring, loc, do_actions, False)
        except pp.ParseException:
            if self.tracker.furthest <= loc:
                self.tracker.restore(snapshot)
                self.tracker.record(loc, self.label)
            raise


class NamedChoice(pp.Token):
    """Match the longest terminated name from a table and produce its value.

    Candidate names are found with a trie walk over the upcoming text, so a table of a few hundred
    keycode names costs the same as a handful.
    """

    def __init__(self, pairs: collections.abc.Iterable[tuple[str, typing.Any]]):
        super().__init__()
        self.trie = pygtrie.CharTrie(pairs)
        self.names = descend_on(self.trie.keys())
        self.longest = len(self.names[0]) if self.names else 0
        self.mayReturnEmpty = False
        self.mayIndexError = False
        self.errmsg = "Expected a known name"
        self.leave_whitespace()

    def _generateDefaultName(self):
        return f"NamedChoice({len(self.names)} names)"

    def parseImpl(self, instring, loc, do_actions=True):
        window = instring[loc : loc + self.longest]
        for name, value in reversed(list(self.trie.prefixes(window))):
            if is_terminated(instring, loc + len(name)):
                return loc + len(name), [value]
        raise pp.ParseException(instring, loc, self.errmsg, self)


class StringLiteral(pp.Token):
    "A single- or double-quoted string with C-style escapes. An unclosed quote is fatal."

    def __init__(self):
        super().__init__()
        self.mayReturnEmpty = False
        self.mayIndexError = False
        self.errmsg = "Expected string literal"
        self.leave_whitespace()

    def _generateDefaultName(self):
        return "string literal"

    def parseImpl(self, instring, loc, do_actions=True):
        if loc >= len(instring) or instring[loc] not in STRING_PATTERNS:
            raise pp.ParseException(instring, loc, self.errmsg, self)
        match = STRING_PATTERNS[instring[loc]].match(instring, loc)
        if match is None:
            raise pp.ParseSyntaxException(instring, loc, "unterminated string literal", self)
        return match.end(), [unescape(match.group(1))]


class BlockComment(pp.Token):
    "A non-nesting #| ... |# comment. An unclosed comment is fatal."

    def __init__(self):
        super().__init__()
        self.mayReturnEmpty = False
        self.mayIndexError = False
        self.errmsg = "Expected block comment"
        self.leave_whitespace()

    def _generateDefaultName(self):
        return "block comment"

    def parseImpl(self, instring, loc, do_actions=True):
        if not instring.startswith("#|", loc):
            raise pp.ParseException(instring, loc, self.errmsg, self)
        close = instring.find("|#", loc + 2)
        if close < 0:
            raise pp.ParseSyntaxException(instring, loc, "unterminated block comment", self)
        return close + 2, []


class Lexer:
    """Builds the lexical layer of a grammar.

    Every parser it hands out reports failures to the same FailureTracker, so one Lexer belongs to one grammar.
    """

    def __init__(self, tracker: typing.Optional[FailureTracker] = None):
        self.tracker = tracker if tracker is not None else FailureTracker()
        whitespace = regex(r"\s+")
        line_comment = regex(r";;[^\n]*")
        self.separator = pp.ZeroOrMore(whitespace | line_comment | BlockComment()).suppress()

    def label(self, expr: pp.ParserElement, label: str) -> pp.ParserElement:
        return Labeled(expr, label, self.tracker)

    def lexeme(self, expr: pp.ParserElement) -> pp.ParserElement:
        return expr + self.separator

    def symbol(self, text: str) -> pp.ParserElement:
        return self.lexeme(self.label(literal(text), f'"{text}"')).suppress()

    def keyword(self, text: str) -> pp.ParserElement:
        # a keyword may run straight into a nested form or a comment, but never into more word characters
        follow = pp.FollowedBy(regex(r'[\s()";#]') | end())
        return self.lexeme(self.label(literal(text) + follow, f'"{text}"')).suppress()

    def paren(self, expr: pp.ParserElement) -> pp.ParserElement:
        return self.symbol("(") + expr + self.symbol(")")

    def keyword_arg(self, name: str, expr: pp.ParserElement) -> pp.ParserElement:
        "A LISP-style :name value pair, producing just the value."
        return self.lexeme(self.label(literal(f":{name}"), f'":{name}"')).suppress() + self.lexeme(expr)

    def statements(self, forms: collections.abc.Iterable[tuple[str, typing.Optional[pp.ParserElement], collections.abc.Callable]]):
        """Alternation over (keyword, body, build) forms, longest keyword first.

        build receives the body's tokens and returns the value for the whole form. A form with no body is
        just its keyword.
        """
        alternatives = []
        for keyword, body, build in descend_on(forms, key=operator.itemgetter(0)):
            expr = self.keyword(keyword) if body is None else self.keyword(keyword) + body
            alternatives.append(expr.set_parse_action(build))
        return pp.MatchFirst(alternatives)

    def named_choice(self, pairs, label: str) -> pp.ParserElement:
        return self.label(NamedChoice(pairs), label)

    def word(self, label: str = "word") -> pp.ParserElement:
        return self.label(regex(WORD_PATTERN.pattern), label)

    def number(self, label: str = "integer") -> pp.ParserElement:
        return self.label(regex(r"[0-9]+").set_parse_action(lambda t: int(t[0])), label)

    def string(self) -> pp.ParserElement:
        return self.label(StringLiteral(), "string")

    def boolean(self) -> pp.ParserElement:
        return self.named_choice([("true", True), ("false", False)], "boolean")
