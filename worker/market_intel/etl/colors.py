"""Stable display colors per venue name."""

from typing import Sequence, Tuple

ColorTable = Sequence[Tuple[Tuple[str, ...], str]]

DEFAULT_COLOR_TABLE: ColorTable = (
    (("international",), "#ef4444"),
    (("iveria",), "#6366f1"),
    (("peace",), "#8b5cf6"),
    (("princess",), "#ec4899"),
    (("eclipse",), "#f43f5e"),
    (("otium",), "#10b981"),
    (("soho",), "#06b6d4"),
    (("royal",), "#f59e0b"),
    (("empire",), "#84cc16"),
    (("bellagio",), "#059669"),
    (("billionaire", "billioner"), "#0ea5e9"),
    (("colosseum", "collosseum"), "#7c3aed"),
)

DEFAULT_PALETTE: Tuple[str, ...] = (
    "#6366f1",
    "#8b5cf6",
    "#ec4899",
    "#f43f5e",
    "#ef4444",
    "#f97316",
    "#f59e0b",
    "#eab308",
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def name_hash(name: str) -> int:
    """Rolling ``ch + (h << 5) - h`` hash with 32-bit shift wraparound."""
    result = 0
    for ch in name:
        result = ord(ch) + (_to_int32(_to_int32(result) << 5) - result)
    return result


def venue_color(
    name: str,
    color_table: ColorTable = DEFAULT_COLOR_TABLE,
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> str:
    lowered = name.lower()
    for fragments, color in color_table:
        if any(fragment in lowered for fragment in fragments):
            return color
    return palette[abs(name_hash(lowered)) % len(palette)]
