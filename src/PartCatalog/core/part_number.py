"""Part-number prefix generation.

The shop's part numbers start with a material/size code derived from the
part type and its dimensions, e.g. ``024x24x18`` for a .024 aluminum sign.
The generated prefix seeds the free-text search term; whatever the
operator types is appended as a suffix.
"""

from __future__ import annotations

import re

_TRAILING_ZEROS_RE = re.compile(r"(\.\d*?)0+$")

DECAL_TYPES = frozenset({"magnet", "opus_cut_decal", "banner", "digital_print", "screenDecal", "vhbTape"})


def _parse_number(value: str | float | int | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return number


def format_gauge(value: str | float | None) -> str:
    """Format a gauge in thousandths, zero padded to three digits.

    ``"0.024"`` -> ``"024"``; ``".1"`` -> ``"100"``; invalid -> ``""``.
    """
    number = _parse_number(value)
    if number is None:
        return ""
    return str(round(number * 1000)).zfill(3)


def format_dim(value: str | float | None) -> str:
    """Format a dimension without trailing decimal zeros.

    ``"48"`` -> ``"48"``; ``"12.50"`` -> ``"12.5"``; invalid -> ``""``.
    """
    number = _parse_number(value)
    if number is None:
        return ""
    if number.is_integer():
        return str(int(number))
    text = _TRAILING_ZEROS_RE.sub(r"\1", repr(number))
    return text.rstrip(".")


def part_number_prefix(
    part_type: str,
    width: str | float | None = None,
    height: str | float | None = None,
    *,
    gauge: str | float | None = None,
    hdpe_sheet: str = ".023",
    tube_length: str | float | None = None,
) -> str:
    """Build the generated part-number prefix for a part type.

    Args:
        part_type: Part-type key (same keys as the search configs).
        width: Item width in inches.
        height: Item height in inches.
        gauge: Aluminum gauge, e.g. ``".024"``.
        hdpe_sheet: HDPE sheet option; ``".023"`` selects the thin stock.
        tube_length: Bullet marker tube length in inches.

    Returns:
        The prefix, or ``""`` when the inputs cannot produce one.
    """
    if part_type == "bullet":
        return format_dim(tube_length)

    w = format_dim(width)
    h = format_dim(height)
    if not w or not h:
        return ""

    if part_type == "aluminum_sign":
        g = format_gauge(gauge)
        return f"{g}x{w}x{h}" if g else ""
    if part_type == "acm_sign":
        return f"3mmx{w}x{h}"
    if part_type == "hdpe_sign":
        code = "023" if hdpe_sheet == ".023" else "110"
        return f"{code}x{w}x{h}"
    if part_type == "corrugated" or part_type in DECAL_TYPES:
        return f"{w}x{h}"
    return ""
