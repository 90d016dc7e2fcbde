# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import typing

import pyparsing as pp

from ..commontypes import Modifier
from ..context import ParseContext
from ..tokens import (
    Around,
    AroundNext,
    AroundNextTimeout,
    Blocked,
    Command,
    ComposeSeq,
    Emit,
    LayerAdd,
    LayerDelay,
    LayerNext,
    LayerRem,
    LayerSwitch,
    LayerToggle,
    Modded,
    MultiTap,
    Pause,
    Ref,
    Simple,
    StickyKey,
    TapHold,
    TapHoldNext,
    TapHoldNextRelease,
    TapMacro,
    TapMacroRelease,
    TapNext,
    TapNextRelease,
    Transparent,
)
from .keycodes import KeycodeResolver
from .lexer import Lexer, end, literal, literal_choice, prefix, regex

logger = logging.getLogger(__name__)

MODIFIER_PREFIXES = {
    "S-": Modifier.SHIFT,
    "RS-": Modifier.RSHIFT,
    "C-": Modifier.CTRL,
    "RC-": Modifier.RCTRL,
    "A-": Modifier.ALT,
    "RA-": Modifier.RALT,
    "M-": Modifier.META,
    "RM-": Modifier.RMETA,
}

# Characters that may follow + to make a dead key.
DEAD_KEYS = ("~", "'", "^", "`", '"', ",")


class ContextDataError(pp.ParseFatalException):
    "Text taken from the parse context, such as a compose sequence, did not parse as buttons."

    def __init__(self, pstr, loc, msg, trigger):
        super().__init__(pstr, loc, msg)
        self.trigger = trigger


class ComposeTrigger(pp.Token):
    "A single character with a compose sequence in the context, expanded by the given callback."

    def __init__(self, expand: typing.Callable[[str, int], typing.Optional[ComposeSeq]]):
        super().__init__()
        self.expand = expand
        self.mayReturnEmpty = False
        self.mayIndexError = False
        self.errmsg = "Expected compose character"
        self.leave_whitespace()

    def _generateDefaultName(self):
        return "compose character"

    def parseImpl(self, instring, loc, do_actions=True):
        if loc >= len(instring):
            raise pp.ParseException(instring, loc, self.errmsg, self)
        expanded = self.expand(instring, loc)
        if expanded is None:
            raise pp.ParseException(instring, loc, self.errmsg, self)
        return loc + 1, [expanded]


class ButtonGrammar:
    """Parsers for button expressions.

    button is recursive: most keyword forms take other buttons as arguments. Alternatives are tried in a
    fixed order and the first that matches wins, so sigil forms come before bare names.
    """

    def __init__(self, lexer: Lexer, context: ParseContext, keycodes: KeycodeResolver):
        self.lexer = lexer
        self.context = context
        self.keycodes = keycodes
        self._compose_cache: dict[str, typing.Optional[ComposeSeq]] = {}

        self.button = pp.Forward().leave_whitespace()
        keyword_button = lexer.paren(lexer.statements(self.keyword_forms()))
        alternatives = [
            keyword_button,
            self.dead_key(),
            self.ref(),
            self.modded(),
            self.hash_macro(),
            self.pause(),
            self.special(),
            keycodes.shifted_button(),
            keycodes.keycode().add_parse_action(lambda t: Emit(t[0])),
            lexer.label(ComposeTrigger(self._expand_compose), "compose character"),
        ]
        self.button <<= lexer.lexeme(lexer.label(pp.MatchFirst(alternatives), "button expression"))

        underscore = lexer.lexeme(literal("_")).set_parse_action(lambda t: Simple("under"))
        self.single_button = (self.button + end()).parse_with_tabs()
        self.compose_keys = (pp.OneOrMore(underscore | self.button) + end()).parse_with_tabs()

    def _milliseconds(self):
        return self.lexer.lexeme(self.lexer.number("milliseconds"))

    def _layer(self):
        return self.lexer.lexeme(self.lexer.word("layer name"))

    def _macro_body(self):
        delay = pp.Opt(self.lexer.keyword_arg("delay", self.lexer.number("milliseconds")), default=None)
        return pp.Group(pp.OneOrMore(self.button)) + delay

    def keyword_forms(self):
        b = self.button
        ms = self._milliseconds
        string = self.lexer.lexeme(self.lexer.string())
        return [
            ("around", b + b, lambda t: Around(t[0], t[1])),
            (
                "multi-tap",
                pp.Group(pp.ZeroOrMore(pp.Group(ms() + b))) + b,
                lambda t: MultiTap(tuple((step[0], step[1]) for step in t[0]), t[1]),
            ),
            ("tap-hold", ms() + b + b, lambda t: TapHold(t[0], t[1], t[2])),
            ("tap-hold-next", ms() + b + b, lambda t: TapHoldNext(t[0], t[1], t[2])),
            ("tap-next-release", b + b, lambda t: TapNextRelease(t[0], t[1])),
            ("tap-hold-next-release", ms() + b + b, lambda t: TapHoldNextRelease(t[0], t[1], t[2])),
            ("tap-next", b + b, lambda t: TapNext(t[0], t[1])),
            ("layer-toggle", self._layer(), lambda t: LayerToggle(t[0])),
            ("layer-switch", self._layer(), lambda t: LayerSwitch(t[0])),
            ("layer-add", self._layer(), lambda t: LayerAdd(t[0])),
            ("layer-rem", self._layer(), lambda t: LayerRem(t[0])),
            ("layer-delay", ms() + self._layer(), lambda t: LayerDelay(t[0], t[1])),
            ("layer-next", self._layer(), lambda t: LayerNext(t[0])),
            ("around-next", b, lambda t: AroundNext(t[0])),
            ("around-next-timeout", ms() + b + b, lambda t: AroundNextTimeout(t[0], t[1], t[2])),
            ("tap-macro", self._macro_body(), lambda t: TapMacro(tuple(t[0]), t[1])),
            ("tap-macro-release", self._macro_body(), lambda t: TapMacroRelease(tuple(t[0]), t[1])),
            ("cmd-button", string + pp.Opt(string, default=None), lambda t: Command(t[0], t[1])),
            ("pause", ms(), lambda t: Pause(t[0])),
            ("sticky-key", ms() + b, lambda t: StickyKey(t[0], t[1])),
        ]

    def dead_key(self):
        plus = self.lexer.label(literal("+"), '"+"').suppress()
        char = self.lexer.label(literal_choice(DEAD_KEYS), "dead-key character")
        return (prefix(plus) + char).set_parse_action(self._expand_dead_key)

    def ref(self):
        at = self.lexer.label(literal("@"), '"@"').suppress()
        return (prefix(at) + self.lexer.word("alias name")).set_parse_action(lambda t: Ref(t[0]))

    def modded(self):
        modifier = self.lexer.label(literal_choice(MODIFIER_PREFIXES), "modifier prefix")
        return (modifier + self.button).set_parse_action(lambda t: Modded(MODIFIER_PREFIXES[t[0]], t[1]))

    def hash_macro(self):
        opener = self.lexer.lexeme(self.lexer.label(literal("#("), '"#("')).suppress()
        return (opener + self._macro_body() + self.lexer.symbol(")")).set_parse_action(lambda t: TapMacro(tuple(t[0]), t[1]))

    def pause(self):
        return self.lexer.label(regex(r"P[0-9]+"), "pause").set_parse_action(lambda t: Pause(int(t[0][1:])))

    def special(self):
        return self.lexer.named_choice([("_", Transparent()), ("XX", Blocked())], "special button")

    def _reparse(self, parser: pp.ParserElement, text: str, instring: str, loc: int, trigger: str):
        with self.lexer.tracker.isolated():
            try:
                return list(parser.parse_string(text))
            except pp.ParseBaseException as e:
                raise ContextDataError(instring, loc, f"could not parse {text!r} for {trigger!r}: {e}", trigger) from e

    def _expand_dead_key(self, instring, loc, tokens):
        char = tokens[0]
        (button,) = self._reparse(self.single_button, char, instring, loc, char)
        return ComposeSeq((button,))

    def _expand_compose(self, instring: str, loc: int) -> typing.Optional[ComposeSeq]:
        trigger = instring[loc]
        if trigger not in self._compose_cache:
            entry = self.context.compose_for(trigger)
            if entry is None:
                self._compose_cache[trigger] = None
            else:
                logger.debug("Expanding compose sequence %r for %r", entry.keys, trigger)
                buttons = self._reparse(self.compose_keys, entry.keys, instring, loc, trigger)
                self._compose_cache[trigger] = ComposeSeq(tuple(buttons))
        return self._compose_cache[trigger]
