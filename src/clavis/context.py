# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import json
import logging
import pathlib
import typing

import attr
import cattrs

from . import keyboard_consts
from .commontypes import ContextError, Keycode

logger = logging.getLogger(__name__)


def _single_character(instance, attribute, value):
    if len(value) != 1:
        raise ValueError(f"{attribute.name} must be exactly one character, got {value!r}")


@attr.frozen(kw_only=True)
class ComposeEntry:
    trigger: str = attr.field(validator=[attr.validators.instance_of(str), _single_character])
    keys: str
    description: str = attr.field(default="")


@attr.frozen(kw_only=True)
class ParseContext:
    """The name tables a parse resolves against.

    Owned by the caller and only read by the parser, so one context can serve any number of parses.
    """

    keycodes: dict[str, Keycode]
    shifted: dict[str, Keycode] = attr.field(factory=dict)
    compose: tuple[ComposeEntry, ...] = attr.field(default=(), converter=tuple)
    shift_keycode: Keycode = attr.field(default=Keycode(keyboard_consts.LEFT_SHIFT))

    def compose_for(self, trigger: str) -> typing.Optional[ComposeEntry]:
        # first entry wins
        for entry in self.compose:
            if entry.trigger == trigger:
                return entry
        return None

    def unstructure(self):
        return context_converter.unstructure(self)

    @classmethod
    def load(cls, src: pathlib.Path):
        logger.debug("Loading parse context from %s", src)
        try:
            with src.open(encoding="utf-8") as f:
                raw = json.load(f)
            return context_converter.structure(raw, cls)
        except (cattrs.BaseValidationError, ValueError, TypeError) as e:
            raise ContextError(f"Invalid parse context in {src}") from e

    @classmethod
    def default(cls):
        return cls(
            keycodes={name: Keycode(code) for name, code in keyboard_consts.keycode_names().items()},
            shifted={name: Keycode(code) for name, code in keyboard_consts.shifted_names().items()},
            compose=[
                ComposeEntry(trigger=char, keys=keys, description=description)
                for keys, char, description in keyboard_consts.COMPOSE_SEQUENCES
            ],
        )


def structure_keycode(v: typing.Union[int, str], _) -> Keycode:
    if isinstance(v, bool):
        raise ValueError(f"Unexpected keycode {v!r}")
    if isinstance(v, int):
        return Keycode(v)
    if isinstance(v, str) and v.startswith("0x"):
        return Keycode(int(v[2:], 16))
    raise ValueError(f"Unexpected keycode {v!r}")


context_converter = cattrs.Converter()
context_converter.register_structure_hook(Keycode, structure_keycode)
