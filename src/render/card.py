"""
Static face of a pose card, as SVG.

Layout (175 x 300):
* title centered at the top
* one row per position tag, evenly spread between y=70 and y=270
* left edge: colored bar when the pose belongs to that position
* right edge: colored bar when a transition is defined, plus a badge with the value (no badge for "0")
"""

from xml.sax.saxutils import escape

from src.catalog.poses import PoseAttributes
from src.core.shared_types import PosePosition

CARD_WIDTH = 175
CARD_HEIGHT = 300
BAR_WIDTH = 20
BAR_HEIGHT = 30
BADGE_RADIUS = 8

POSITION_AREA_START = 70
POSITION_AREA_END = 270

POSITION_COLORS: dict[PosePosition, str] = {
    PosePosition.INVERSION: "#8F00FF",
    PosePosition.STANDING: "#228B22",
    PosePosition.KNEELING: "#DAA520",
    PosePosition.SUPINE: "#4169E1",
    PosePosition.PRONE: "#B22222",
}


def position_row_y(index: int) -> float:
    """Top of the bars for the index-th position tag"""
    spacing = (POSITION_AREA_END - POSITION_AREA_START) / (len(PosePosition) - 1)
    return POSITION_AREA_START + spacing * index


def badge_text(value: str) -> str:
    """Value verbatim, with a '+' in front of positive numbers"""
    try:
        is_positive = float(value) > 0
    except ValueError:
        is_positive = False
    return f"+{value}" if is_positive else value


def render_card(pose: PoseAttributes) -> str:
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {CARD_WIDTH} {CARD_HEIGHT}" '
        f'width="{CARD_WIDTH}" height="{CARD_HEIGHT}">',
        f'<rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}" fill="white" stroke="black"/>',
        f'<text x="{CARD_WIDTH / 2:g}" y="30" text-anchor="middle" font-family="Arial" '
        f'font-weight="bold">{escape(pose.name)}</text>',
    ]
    for index, position in enumerate(PosePosition):
        parts.extend(_position_row(pose, position, position_row_y(index)))
    parts.append("</svg>")
    return "".join(parts)


def _position_row(pose: PoseAttributes, position: PosePosition, y: float) -> list[str]:
    color = POSITION_COLORS[position]
    row = [f'<g data-position="{position.value}">']

    if pose.has_category(position.value):
        row.append(_bar(0, y, color))

    value = pose.transition(position)
    if value is not None:
        row.append(_bar(CARD_WIDTH - BAR_WIDTH, y, color))
        if value != "0":
            center_x = CARD_WIDTH - BAR_WIDTH / 2
            center_y = y + BAR_HEIGHT / 2
            row.append(
                f'<circle cx="{center_x:g}" cy="{center_y:g}" r="{BADGE_RADIUS}" '
                f'fill="white" stroke="{color}"/>'
            )
            row.append(
                f'<text x="{center_x:g}" y="{center_y + 4:g}" text-anchor="middle" '
                f'font-size="10" fill="{color}">{escape(badge_text(value))}</text>'
            )

    row.append("</g>")
    return row


def _bar(x: float, y: float, color: str) -> str:
    return f'<rect x="{x:g}" y="{y:g}" width="{BAR_WIDTH}" height="{BAR_HEIGHT}" fill="{color}"/>'
