# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pyparsing as pp

from ..commontypes import Keycode
from ..context import ParseContext
from ..tokens import Around, Emit
from ..util import descend_on
from .lexer import WORD_PATTERN, Labeled, Lexer, NamedChoice, regex, terminated


class UnresolvedKeycode(Labeled):
    "A labelled keycode parser that also remembers which word it could not resolve."

    def parseImpl(self, instring, loc, do_actions=True):
        try:
            return super().parseImpl(instring, loc, do_actions)
        except pp.ParseException:
            match = WORD_PATTERN.match(instring, loc)
            if match is not None and not match.group().startswith("("):
                self.tracker.note_unresolved(loc, match.group())
            raise


class KeycodeResolver:
    def __init__(self, lexer: Lexer, context: ParseContext):
        self.lexer = lexer
        self.context = context
        self.names = descend_on(context.keycodes)

    def keycode(self) -> pp.ParserElement:
        """A keycode name from the context, or a raw hex code like 0x1a.

        Each call builds a fresh parser, so callers may attach their own parse actions.
        """
        named = NamedChoice(self.context.keycodes.items())
        hexcode = terminated(regex(r"0x[0-9A-Fa-f]+").set_parse_action(lambda t: Keycode(int(t[0][2:], 16))))
        return UnresolvedKeycode(named | hexcode, "keycode", self.lexer.tracker)

    def shifted_button(self) -> pp.ParserElement:
        "A shifted character name, producing its base key emitted around the shift key."
        shift = Emit(self.context.shift_keycode)
        pairs = [(name, Around(shift, Emit(code))) for name, code in self.context.shifted.items()]
        return self.lexer.named_choice(pairs, "shifted character")
