# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import typing

import msgspec

from .commontypes import Keycode, Modifier

### Buttons

# Leaves


class Emit(msgspec.Struct, frozen=True, tag=True):
    keycode: Keycode


class Transparent(msgspec.Struct, frozen=True, tag=True):
    pass


class Blocked(msgspec.Struct, frozen=True, tag=True):
    pass


class Pause(msgspec.Struct, frozen=True, tag=True):
    ms: int


class Command(msgspec.Struct, frozen=True, tag=True):
    press: str
    release: typing.Optional[str] = None


class Ref(msgspec.Struct, frozen=True, tag=True):
    alias: str


class Simple(msgspec.Struct, frozen=True, tag=True):
    "A button referred to by name only, left for the checker to resolve."
    name: str


# Combinators


class Modded(msgspec.Struct, frozen=True, tag=True):
    modifier: Modifier
    button: DefButton


class Around(msgspec.Struct, frozen=True, tag=True):
    outer: DefButton
    inner: DefButton


class AroundNext(msgspec.Struct, frozen=True, tag=True):
    button: DefButton


class AroundNextTimeout(msgspec.Struct, frozen=True, tag=True):
    timeout: int
    button: DefButton
    fallback: DefButton


class StickyKey(msgspec.Struct, frozen=True, tag=True):
    timeout: int
    button: DefButton


# Tap/hold pairs


class TapHold(msgspec.Struct, frozen=True, tag=True):
    timeout: int
    tap: DefButton
    hold: DefButton


class TapHoldNext(msgspec.Struct, frozen=True, tag=True):
    timeout: int
    tap: DefButton
    hold: DefButton


class TapNextRelease(msgspec.Struct, frozen=True, tag=True):
    tap: DefButton
    hold: DefButton


class TapHoldNextRelease(msgspec.Struct, frozen=True, tag=True):
    timeout: int
    tap: DefButton
    hold: DefButton


class TapNext(msgspec.Struct, frozen=True, tag=True):
    tap: DefButton
    hold: DefButton


# Sequences


class MultiTap(msgspec.Struct, frozen=True, tag=True):
    steps: tuple[tuple[int, DefButton], ...]
    final: DefButton


class TapMacro(msgspec.Struct, frozen=True, tag=True):
    buttons: tuple[DefButton, ...]
    delay: typing.Optional[int] = None


class TapMacroRelease(msgspec.Struct, frozen=True, tag=True):
    buttons: tuple[DefButton, ...]
    delay: typing.Optional[int] = None


class ComposeSeq(msgspec.Struct, frozen=True, tag=True):
    buttons: tuple[DefButton, ...]


# Layer operations


class LayerToggle(msgspec.Struct, frozen=True, tag=True):
    layer: str


class LayerSwitch(msgspec.Struct, frozen=True, tag=True):
    layer: str


class LayerAdd(msgspec.Struct, frozen=True, tag=True):
    layer: str


class LayerRem(msgspec.Struct, frozen=True, tag=True):
    layer: str


class LayerDelay(msgspec.Struct, frozen=True, tag=True):
    ms: int
    layer: str


class LayerNext(msgspec.Struct, frozen=True, tag=True):
    layer: str


DefButton = (
    Emit
    | Transparent
    | Blocked
    | Pause
    | Command
    | Ref
    | Simple
    | Modded
    | Around
    | AroundNext
    | AroundNextTimeout
    | StickyKey
    | TapHold
    | TapHoldNext
    | TapNextRelease
    | TapHoldNextRelease
    | TapNext
    | MultiTap
    | TapMacro
    | TapMacroRelease
    | ComposeSeq
    | LayerToggle
    | LayerSwitch
    | LayerAdd
    | LayerRem
    | LayerDelay
    | LayerNext
)

### Device tokens


class DeviceFile(msgspec.Struct, frozen=True, tag=True):
    path: typing.Optional[str] = None


class LowLevelHook(msgspec.Struct, frozen=True, tag=True):
    pass


class IOKitName(msgspec.Struct, frozen=True, tag=True):
    name: typing.Optional[str] = None


InputToken = DeviceFile | LowLevelHook | IOKitName


class UinputSink(msgspec.Struct, frozen=True, tag=True):
    name: typing.Optional[str] = None
    post_init: typing.Optional[str] = None


class SendEventSink(msgspec.Struct, frozen=True, tag=True):
    pass


class ExtSink(msgspec.Struct, frozen=True, tag=True):
    pass


OutputToken = UinputSink | SendEventSink | ExtSink

### defcfg settings


class InputSetting(msgspec.Struct, frozen=True, tag=True):
    token: InputToken


class OutputSetting(msgspec.Struct, frozen=True, tag=True):
    token: OutputToken


class ComposeDelaySetting(msgspec.Struct, frozen=True, tag=True):
    ms: int


class ComposeKeySetting(msgspec.Struct, frozen=True, tag=True):
    button: DefButton


class InitSetting(msgspec.Struct, frozen=True, tag=True):
    command: str


class FallthroughSetting(msgspec.Struct, frozen=True, tag=True):
    enabled: bool


class AllowCommandSetting(msgspec.Struct, frozen=True, tag=True):
    enabled: bool


DefSetting = (
    InputSetting | OutputSetting | ComposeDelaySetting | ComposeKeySetting | InitSetting | FallthroughSetting | AllowCommandSetting
)

### Top-level expressions


class DefCfg(msgspec.Struct, frozen=True, tag=True):
    settings: tuple[DefSetting, ...]


class DefSrc(msgspec.Struct, frozen=True, tag=True):
    keycodes: tuple[Keycode, ...]


class DefAlias(msgspec.Struct, frozen=True, tag=True):
    entries: tuple[tuple[str, DefButton], ...]


class DefLayer(msgspec.Struct, frozen=True, tag=True):
    name: str
    buttons: tuple[DefButton, ...]


KExpr = DefCfg | DefSrc | DefAlias | DefLayer


def encode_tokens(exprs: typing.Sequence[KExpr]) -> bytes:
    return msgspec.json.encode(list(exprs))


def decode_tokens(data: bytes) -> list[KExpr]:
    return msgspec.json.decode(data, type=list[KExpr])
