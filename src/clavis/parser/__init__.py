# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from .document import ConfigGrammar, parse_config
from .errors import ComposeError, KeycodeError, ParseError
