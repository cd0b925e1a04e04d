"""Render a whole BoardLayout (zones, drop cells, cards) as one SVG document."""

from xml.sax.saxutils import escape

from src.api.models import BoardLayout, ZoneLayout
from src.board.geometry import GridConfig, cell_rect
from src.catalog.poses import PoseCatalog
from src.render.card import render_card

ATTRIBUTE_ENTITIES = {'"': "&quot;"}

CELL_BORDER = "#E5E7EB"
HOVER_BORDER = "#60A5FA"
HOVER_FILL = "#EFF6FF"
DRAGGING_OPACITY = 0.5


def render_board(layout: BoardLayout, catalog: PoseCatalog, config: GridConfig) -> str:
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{layout.width}" height="{layout.height}" '
        f'viewBox="0 0 {layout.width} {layout.height}">'
    ]
    for zone in layout.zones:
        hovered = zone.zone_id == layout.view.hover_zone
        parts.extend(_render_zone(zone, config, hovered))

    for card in layout.cards:
        opacity = DRAGGING_OPACITY if card.card_id == layout.view.dragging else 1
        parts.append(
            f'<g class="card" data-card="{escape(card.card_id, ATTRIBUTE_ENTITIES)}" '
            f'transform="translate({card.x},{card.y})" opacity="{opacity:g}">'
        )
        parts.append(render_card(catalog.get(card.card_id)))
        parts.append("</g>")

    parts.append("</svg>")
    return "".join(parts)


def _render_zone(zone: ZoneLayout, config: GridConfig, hovered: bool) -> list[str]:
    border = HOVER_BORDER if hovered else CELL_BORDER
    fill = HOVER_FILL if hovered else "none"
    title = escape(zone.title)
    if zone.capacity is not None:
        title += f" ({zone.card_count}/{zone.capacity})"

    zone_parts = [
        f'<g class="zone" data-zone="{escape(zone.zone_id, ATTRIBUTE_ENTITIES)}" transform="translate({zone.x},{zone.y})">',
        f'<text x="0" y="-12" font-family="Arial" font-size="16">{title}</text>',
    ]
    for row in range(zone.drop_rows):
        for column in range(zone.drop_columns):
            rect = cell_rect(config, column, row)
            zone_parts.append(
                f'<rect x="{rect.x}" y="{rect.y}" width="{rect.width}" height="{rect.height}" '
                f'rx="8" fill="{fill}" stroke="{border}" stroke-width="2" stroke-dasharray="6 4"/>'
            )
    zone_parts.append("</g>")
    return zone_parts
