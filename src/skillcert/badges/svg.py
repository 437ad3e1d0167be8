"""Shields-style SVG badge rendering."""

from __future__ import annotations

from xml.sax.saxutils import escape

from skillcert.core.scoring.models import BadgeTier

BADGE_COLORS: dict[BadgeTier, str] = {
    BadgeTier.CERTIFIED: "#2ECC40",
    BadgeTier.CONDITIONAL: "#DFB317",
    BadgeTier.SUSPICIOUS: "#FE7D37",
    BadgeTier.REJECTED: "#E05D44",
}

BADGE_STYLES: tuple[str, ...] = ("flat", "flat-square", "plastic")

DEFAULT_LABEL: str = "SkillCert"

_LEFT_COLOR = "#555"
_CHAR_WIDTH = 6.5
_PADDING = 12
_CHECKMARK = " ✓"

_PLASTIC_GRADIENT = (
    '<linearGradient id="s" x2="0" y2="100%">'
    '<stop offset="0" stop-color="#bbb" stop-opacity=".1"/>'
    '<stop offset="1" stop-opacity=".1"/>'
    "</linearGradient>"
)


def _xml(text: str) -> str:
    return escape(text, {'"': "&quot;", "'": "&apos;"})


def _num(value: float) -> str:
    # 45.5 -> "45.5", 45.0 -> "45"
    return f"{value:g}"


def render_svg_badge(
    score: int,
    badge: BadgeTier | str,
    style: str = "flat",
    label: str = DEFAULT_LABEL,
    certified: bool = False,
) -> str:
    """Render a badge as an SVG document.

    Args:
        score: Overall trust score shown next to the tier.
        badge: Badge tier (member or value).
        style: One of ``BADGE_STYLES``.
        label: Left-hand label text.
        certified: Append a check mark for an attested certificate.

    Returns:
        The SVG markup.

    Raises:
        ValueError: If ``badge`` or ``style`` is unknown.
    """
    tier = BadgeTier(badge)
    if style not in BADGE_STYLES:
        raise ValueError(f"Unknown badge style: {style!r}")

    right_text = f"{tier.value.upper()} {score}"
    mark = _CHECKMARK if certified else ""

    left_width = len(label) * _CHAR_WIDTH + _PADDING
    right_width = (len(right_text) + len(mark)) * _CHAR_WIDTH + _PADDING
    total_width = left_width + right_width
    radius = 0 if style == "flat-square" else 3

    gradient = _PLASTIC_GRADIENT if style == "plastic" else ""
    gradient_ref = ' fill="url(#s)"' if style == "plastic" else ""

    label_xml = _xml(label)
    right_xml = _xml(right_text) + mark
    left_mid = _num(left_width / 2)
    right_mid = _num(left_width + right_width / 2)

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'xmlns:xlink="http://www.w3.org/1999/xlink" width="{_num(total_width)}" '
        f'height="20" role="img" aria-label="{label_xml}: {_xml(right_text)}">'
        f"<title>{label_xml}: {right_xml}</title>"
        f"{gradient}"
        f'<clipPath id="r"><rect width="{_num(total_width)}" height="20" '
        f'rx="{radius}" fill="#fff"/></clipPath>'
        f'<g clip-path="url(#r)">'
        f'<rect width="{_num(left_width)}" height="20" fill="{_LEFT_COLOR}"/>'
        f'<rect x="{_num(left_width)}" width="{_num(right_width)}" height="20" '
        f'fill="{BADGE_COLORS[tier]}"/>'
        f'<rect width="{_num(total_width)}" height="20"{gradient_ref}/>'
        f"</g>"
        f'<g fill="#fff" text-anchor="middle" '
        f'font-family="Verdana,Geneva,DejaVu Sans,sans-serif" '
        f'text-rendering="geometricPrecision" font-size="11">'
        f'<text aria-hidden="true" x="{left_mid}" y="15" fill="#010101" '
        f'fill-opacity=".3">{label_xml}</text>'
        f'<text x="{left_mid}" y="14">{label_xml}</text>'
        f'<text aria-hidden="true" x="{right_mid}" y="15" fill="#010101" '
        f'fill-opacity=".3">{right_xml}</text>'
        f'<text x="{right_mid}" y="14">{right_xml}</text>'
        f"</g></svg>"
    )
