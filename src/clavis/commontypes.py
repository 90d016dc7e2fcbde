# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum
import typing

Keycode = typing.NewType("Keycode", int)


class ClavisError(Exception):
    pass


class ContextError(ClavisError):
    pass


@enum.unique
class Modifier(enum.Enum):
    SHIFT = "shift"
    RSHIFT = "rshift"
    CTRL = "ctrl"
    RCTRL = "rctrl"
    ALT = "alt"
    RALT = "ralt"
    META = "meta"
    RMETA = "rmeta"
