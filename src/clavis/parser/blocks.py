# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pyparsing as pp

from ..tokens import (
    AllowCommandSetting,
    ComposeDelaySetting,
    ComposeKeySetting,
    DefAlias,
    DefCfg,
    DefLayer,
    DefSrc,
    DeviceFile,
    ExtSink,
    FallthroughSetting,
    InitSetting,
    InputSetting,
    IOKitName,
    LowLevelHook,
    OutputSetting,
    SendEventSink,
    UinputSink,
)
from .buttons import ButtonGrammar
from .keycodes import KeycodeResolver
from .lexer import Lexer


class BlockGrammar:
    "The four top-level blocks, each as a (keyword, body, build) form."

    def __init__(self, lexer: Lexer, keycodes: KeycodeResolver, buttons: ButtonGrammar):
        self.lexer = lexer
        self.keycodes = keycodes
        self.buttons = buttons

    def _optional_string(self):
        return pp.Opt(self.lexer.lexeme(self.lexer.string()), default=None)

    def input_token(self):
        lx = self.lexer
        return lx.paren(
            lx.statements(
                [
                    ("device-file", self._optional_string(), lambda t: DeviceFile(t[0])),
                    ("low-level-hook", None, lambda t: LowLevelHook()),
                    ("iokit-name", self._optional_string(), lambda t: IOKitName(t[0])),
                ]
            )
        )

    def output_token(self):
        lx = self.lexer
        return lx.paren(
            lx.statements(
                [
                    ("uinput-sink", self._optional_string() + self._optional_string(), lambda t: UinputSink(t[0], t[1])),
                    ("send-event-sink", None, lambda t: SendEventSink()),
                    ("dext", None, lambda t: ExtSink()),
                    ("kext", None, lambda t: ExtSink()),
                ]
            )
        )

    def settings(self):
        lx = self.lexer
        return lx.statements(
            [
                ("input", self.input_token(), lambda t: InputSetting(t[0])),
                ("output", self.output_token(), lambda t: OutputSetting(t[0])),
                ("cmp-seq-delay", lx.lexeme(lx.number("milliseconds")), lambda t: ComposeDelaySetting(t[0])),
                ("cmp-seq", self.buttons.button, lambda t: ComposeKeySetting(t[0])),
                ("init", lx.lexeme(lx.string()), lambda t: InitSetting(t[0])),
                ("fallthrough", lx.lexeme(lx.boolean()), lambda t: FallthroughSetting(t[0])),
                ("allow-cmd", lx.lexeme(lx.boolean()), lambda t: AllowCommandSetting(t[0])),
            ]
        )

    def forms(self):
        lx = self.lexer
        alias = pp.Group(lx.lexeme(lx.word("alias name")) + self.buttons.button)
        return [
            ("defcfg", pp.Group(pp.OneOrMore(self.settings())), lambda t: DefCfg(tuple(t[0]))),
            ("defsrc", pp.Group(pp.ZeroOrMore(lx.lexeme(self.keycodes.keycode()))), lambda t: DefSrc(tuple(t[0]))),
            ("defalias", pp.Group(pp.ZeroOrMore(alias)), lambda t: DefAlias(tuple((entry[0], entry[1]) for entry in t[0]))),
            (
                "deflayer",
                lx.lexeme(lx.word("layer name")) + pp.Group(pp.ZeroOrMore(self.buttons.button)),
                lambda t: DefLayer(t[0], tuple(t[1])),
            ),
        ]
