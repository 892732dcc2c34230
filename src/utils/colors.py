"""Colour helpers and the named-colour table shared by the parser and defaults."""

from __future__ import annotations

RGB = tuple[int, int, int]

# Named colours recognised in commands, as hex strings.
NAMED_COLORS: dict[str, str] = {
    "red": "FF0000",
    "green": "00FF00",
    "blue": "0000FF",
    "yellow": "FFFF00",
    "orange": "FFA500",
    "purple": "8B00FF",
    "violet": "7F00FF",
    "pink": "FF69B4",
    "magenta": "FF00FF",
    "cyan": "00FFFF",
    "teal": "008080",
    "indigo": "4B0082",
    "lime": "32CD32",
    "coral": "FF7F50",
    "salmon": "FA8072",
    "gold": "FFD700",
    "aqua": "00FFFF",
    "navy": "000080",
    "maroon": "800000",
    "olive": "808000",
    "white": "FFFFFF",
    "warm white": "FFF4E0",
    "cool white": "C8DCFF",
    "daylight": "FFFBF0",
    "bright white": "FFFFFF",
    "soft white": "FFE4C4",
    "natural white": "F5F0E8",
    "candlelight": "FFD28E",
    "ice blue": "99CCFF",
    "sky blue": "87CEEB",
    "forest green": "228B22",
    "emerald": "50C878",
    "ruby": "E0115F",
    "amber": "FFBF00",
    "lavender": "E6E6FA",
    "mint": "98FF98",
    "peach": "FFDAB9",
    "turquoise": "40E0D0",
}

# Longest names first so "warm white" wins over "white".
NAMES_BY_LENGTH: list[str] = sorted(NAMED_COLORS, key=len, reverse=True)


def hex_to_rgb(value: str) -> RGB:
    """Convert 'RRGGBB' or '#RRGGBB' to an (r, g, b) tuple."""
    value = value.strip().lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected 6 hex digits, got {value!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def rgb_to_hex(rgb: RGB) -> str:
    return "%02X%02X%02X" % tuple(rgb)


def named_rgb(name: str) -> RGB | None:
    """Look up a named colour (case-insensitive)."""
    hex_value = NAMED_COLORS.get(name.lower().strip())
    return hex_to_rgb(hex_value) if hex_value else None


def display_name(name: str) -> str:
    """Title-case a colour name for responses ("warm white" -> "Warm White")."""
    return " ".join(word.capitalize() for word in name.split())


def coerce_rgb(value) -> RGB | None:
    """Best-effort conversion of a payload colour into an RGB triple.

    Accepts [r, g, b] / [r, g, b, w] lists or hex strings. Components are
    clamped to 0-255. Returns None for anything unrecognisable.
    """
    if isinstance(value, str):
        try:
            return hex_to_rgb(value)
        except ValueError:
            return None
    if isinstance(value, (list, tuple)) and len(value) >= 3:
        try:
            r, g, b = (max(0, min(255, int(c))) for c in value[:3])
        except (TypeError, ValueError):
            return None
        return (r, g, b)
    return None
