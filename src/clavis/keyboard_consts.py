# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Default name tables. Codes are Linux EV_KEY codes (linux/input-event-codes.h); the parser
# treats them as opaque numbers, so a caller can supply any other table through ParseContext.

# code -> every name that resolves to it. The first name is the canonical one.
KEY_NAMES: dict[int, tuple[str, ...]] = {
    1: ("esc",),
    2: ("1",),
    3: ("2",),
    4: ("3",),
    5: ("4",),
    6: ("5",),
    7: ("6",),
    8: ("7",),
    9: ("8",),
    10: ("9",),
    11: ("0",),
    12: ("min", "minus", "-"),
    13: ("eql", "equal", "="),
    14: ("bspc", "backspace"),
    15: ("tab",),
    16: ("q",),
    17: ("w",),
    18: ("e",),
    19: ("r",),
    20: ("t",),
    21: ("y",),
    22: ("u",),
    23: ("i",),
    24: ("o",),
    25: ("p",),
    26: ("lbrc", "["),
    27: ("rbrc", "]"),
    28: ("ret", "return", "ent", "enter"),
    29: ("lctl", "lctrl"),
    30: ("a",),
    31: ("s",),
    32: ("d",),
    33: ("f",),
    34: ("g",),
    35: ("h",),
    36: ("j",),
    37: ("k",),
    38: ("l",),
    39: ("scln", "semicolon", ";"),
    40: ("apos", "apostrophe", "'"),
    41: ("grv", "grave", "`"),
    42: ("lsft", "lshift"),
    43: ("bksl", "backslash", "\\"),
    44: ("z",),
    45: ("x",),
    46: ("c",),
    47: ("v",),
    48: ("b",),
    49: ("n",),
    50: ("m",),
    51: ("comm", "comma", ","),
    52: ("dot", "."),
    53: ("slsh", "slash", "/"),
    54: ("rsft", "rshift"),
    55: ("kp*",),
    56: ("lalt",),
    57: ("spc", "space"),
    58: ("caps", "capslock"),
    59: ("f1",),
    60: ("f2",),
    61: ("f3",),
    62: ("f4",),
    63: ("f5",),
    64: ("f6",),
    65: ("f7",),
    66: ("f8",),
    67: ("f9",),
    68: ("f10",),
    69: ("nlck", "numlock"),
    70: ("slck", "scrolllock"),
    71: ("kp7",),
    72: ("kp8",),
    73: ("kp9",),
    74: ("kp-",),
    75: ("kp4",),
    76: ("kp5",),
    77: ("kp6",),
    78: ("kp+",),
    79: ("kp1",),
    80: ("kp2",),
    81: ("kp3",),
    82: ("kp0",),
    83: ("kp.",),
    86: ("102d",),
    87: ("f11",),
    88: ("f12",),
    96: ("kprt", "kpenter"),
    97: ("rctl", "rctrl"),
    98: ("kp/",),
    99: ("sys", "prnt", "sysrq"),
    100: ("ralt",),
    102: ("home",),
    103: ("up",),
    104: ("pgup",),
    105: ("left",),
    106: ("rght", "right"),
    107: ("end",),
    108: ("down",),
    109: ("pgdn",),
    110: ("ins", "insert"),
    111: ("del", "delete"),
    113: ("mute",),
    114: ("vold",),
    115: ("volu",),
    119: ("pause",),
    125: ("lmet", "lmeta"),
    126: ("rmet", "rmeta"),
    127: ("cmps", "compose"),
    183: ("f13",),
    184: ("f14",),
    185: ("f15",),
    186: ("f16",),
    187: ("f17",),
    188: ("f18",),
    189: ("f19",),
    190: ("f20",),
    191: ("f21",),
    192: ("f22",),
    193: ("f23",),
    194: ("f24",),
}

LEFT_SHIFT = 42

# code -> (unshifted character, shifted character) for a US layout.
CHARACTER_MAP: dict[int, tuple[str, str]] = {
    41: ("`", "~"),
    2: ("1", "!"),
    3: ("2", "@"),
    4: ("3", "#"),
    5: ("4", "$"),
    6: ("5", "%"),
    7: ("6", "^"),
    8: ("7", "&"),
    9: ("8", "*"),
    10: ("9", "("),
    11: ("0", ")"),
    12: ("-", "_"),
    13: ("=", "+"),
    26: ("[", "{"),
    27: ("]", "}"),
    43: ("\\", "|"),
    39: (";", ":"),
    40: ("'", '"'),
    51: (",", "<"),
    52: (".", ">"),
    53: ("/", "?"),
}
CHARACTER_MAP.update({code: (names[0], names[0].upper()) for code, names in KEY_NAMES.items() if len(names[0]) == 1 and names[0].isalpha()})

# Shifted characters that would read as list syntax if they were names.
UNNAMEABLE = frozenset("()")

# (keys to type after the compose key, character produced, description)
COMPOSE_SEQUENCES: tuple[tuple[str, str, str], ...] = (
    ("< <", "«", "left guillemet"),
    ("> >", "»", "right guillemet"),
    ("< '", "‘", "left single quote"),
    ("> '", "’", "right single quote"),
    ('< "', "“", "left double quote"),
    ('> "', "”", "right double quote"),
    (". .", "…", "ellipsis"),
    ("- - -", "—", "em dash"),
    ("- - .", "–", "en dash"),
    ("! !", "¡", "inverted exclamation mark"),
    ("? ?", "¿", "inverted question mark"),
    ("1 2", "½", "one half"),
    ("1 4", "¼", "one quarter"),
    ("3 4", "¾", "three quarters"),
    ("o c", "©", "copyright"),
    ("o r", "®", "registered"),
    ("P !", "¶", "pilcrow"),
    ("s s", "ß", "sharp s"),
    ("a e", "æ", "ae"),
    ("A E", "Æ", "AE"),
    ("o e", "œ", "oe"),
    ("O E", "Œ", "OE"),
    ("^ _ a", "ª", "feminine ordinal"),
    ("^ _ o", "º", "masculine ordinal"),
    ("` a", "à", "a grave"),
    ("' a", "á", "a acute"),
    ("^ a", "â", "a circumflex"),
    ('" a', "ä", "a diaeresis"),
    ("` e", "è", "e grave"),
    ("' e", "é", "e acute"),
    ("^ e", "ê", "e circumflex"),
    ('" e', "ë", "e diaeresis"),
    ("' i", "í", "i acute"),
    ('" i', "ï", "i diaeresis"),
    ("' o", "ó", "o acute"),
    ("^ o", "ô", "o circumflex"),
    ('" o', "ö", "o diaeresis"),
    ("` u", "ù", "u grave"),
    ("' u", "ú", "u acute"),
    ('" u', "ü", "u diaeresis"),
    ("~ n", "ñ", "n tilde"),
    ("~ N", "Ñ", "N tilde"),
    (", c", "ç", "c cedilla"),
    (", C", "Ç", "C cedilla"),
    ("' E", "É", "E acute"),
)


def keycode_names() -> dict[str, int]:
    return {name: code for code, names in KEY_NAMES.items() for name in names}


def shifted_names(character_map: dict[int, tuple[str, str]] = CHARACTER_MAP) -> dict[str, int]:
    "Each shifted character names the key that produces it while shift is held."
    return {shifted: code for code, (_, shifted) in character_map.items() if shifted not in UNNAMEABLE}
