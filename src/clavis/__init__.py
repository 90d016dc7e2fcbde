# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Tokenizer for KMonad-style keyboard configurations.
# stage 1 (here): text -> top-level expressions (defcfg, defsrc, defalias, deflayer)
# stage 2 (elsewhere): check references and layer shapes, then join into a runnable keymap
from .commontypes import ClavisError, ContextError, Keycode, Modifier
from .context import ComposeEntry, ParseContext
from .parser import ComposeError, ConfigGrammar, KeycodeError, ParseError, parse_config
from .tokens import decode_tokens, encode_tokens
