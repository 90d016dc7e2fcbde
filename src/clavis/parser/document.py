# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import sys
import typing

import pyparsing as pp

from ..context import ParseContext
from ..tokens import KExpr
from .blocks import BlockGrammar
from .buttons import ButtonGrammar, ContextDataError
from .errors import ComposeError, KeycodeError, ParseError, describe_position
from .keycodes import KeycodeResolver
from .lexer import Lexer, end

logger = logging.getLogger(__name__)


class ConfigGrammar:
    """A complete configuration grammar bound to one ParseContext.

    Building the grammar is the expensive part, so reuse an instance to tokenize many documents against
    the same context. An instance must not be shared between threads.

    The keycode and shifted tables are copied into the grammar when it is built, and compose expansions
    are cached on first use, so later changes to the context are not seen by an existing grammar.

    Nesting depth is limited by the interpreter recursion limit. Input nested past it is reported as a
    ParseError rather than a RecursionError.
    """

    def __init__(self, context: ParseContext):
        self.lexer = Lexer()
        self.keycodes = KeycodeResolver(self.lexer, context)
        self.buttons = ButtonGrammar(self.lexer, context, self.keycodes)
        self.blocks = BlockGrammar(self.lexer, self.keycodes, self.buttons)
        block = self.lexer.paren(self.lexer.statements(self.blocks.forms()))
        document_end = self.lexer.label(end(), "end of input")
        self.document = (self.lexer.separator + pp.ZeroOrMore(block) + document_end).parse_with_tabs()

    def parse(self, text: str) -> list[KExpr]:
        self.lexer.tracker.reset()
        try:
            result = self.document.parse_string(text)
        except ContextDataError as e:
            raise ComposeError(e.msg, text, e.loc, e.trigger) from None
        except pp.ParseFatalException as e:
            raise ParseError(e.msg, text, e.loc) from None
        except pp.ParseException as e:
            raise self._failure(text, e) from None
        except RecursionError:
            limit = sys.getrecursionlimit()
            offset = max(self.lexer.tracker.furthest, 0)
            raise ParseError(f"input nested too deeply (recursion limit is {limit})", text, offset) from None
        return list(result)

    def _failure(self, text: str, exc: pp.ParseException) -> ParseError:
        tracker = self.lexer.tracker
        if tracker.furthest < 0:
            return ParseError(f"unexpected {describe_position(text, exc.loc)}", text, exc.loc)
        offset = tracker.furthest
        name = tracker.unresolved.get(offset)
        if name is not None:
            return KeycodeError(name, text, offset, tracker.expected, self.keycodes.names)
        return ParseError(f"unexpected {describe_position(text, offset)}", text, offset, tracker.expected)


def parse_config(text: str, context: typing.Optional[ParseContext] = None) -> list[KExpr]:
    """Tokenize a whole configuration into its top-level expressions, in source order.

    Raises ParseError (or one of its subclasses) describing the furthest point the parse reached.
    """
    if context is None:
        context = ParseContext.default()
    logger.debug("Tokenizing %d characters", len(text))
    exprs = ConfigGrammar(context).parse(text)
    logger.debug("Tokenized %d top-level expressions", len(exprs))
    return exprs
