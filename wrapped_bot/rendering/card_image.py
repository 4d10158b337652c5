"""
Card Image Renderer - rasterises a single Wrapped card for sharing.

The card is drawn at a fixed pixel ratio onto a transparent canvas, so the
rounded corners stay see-through in the exported PNG.
"""

import io
from dataclasses import dataclass
from typing import List

from PIL import Image, ImageDraw

from wrapped_bot.constants import PaginationConstants, ShareConstants
from wrapped_bot.data_models.cards import (
    Card,
    IntroCard,
    LeaderboardHighlightCard,
    MvpCard,
    OutroCard,
    PlatformCard,
    StatCard,
    TimelineCard,
)
from wrapped_bot.rendering.palette import (
    add_glow,
    card_gradient,
    draw_centered,
    get_font,
    linear_gradient,
    wrap_text,
)


@dataclass(frozen=True)
class TextLine:
    """One block of text on a card, sized in logical (1x) pixels."""
    text: str
    size: int
    bold: bool = False
    alpha: int = 255
    gap: int = 14


def card_lines(card: Card, member_name: str, group_name: str) -> List[TextLine]:
    """Text content of a card, top to bottom."""
    if isinstance(card, IntroCard):
        lines = [
            TextLine(f"Hey {member_name.split(' ')[0]}!", 22, alpha=204),
            TextLine(card.title, 32, bold=True, gap=28),
            TextLine(f"{card.stat:,}", 72, bold=True),
            TextLine(card.stat_label, 22, alpha=230),
            TextLine(card.subtitle, 18, alpha=179),
        ]
        if card.rank:
            lines.append(TextLine(f"#{card.rank} of {card.total_users} members", 18, bold=True))
        return lines

    if isinstance(card, StatCard):
        lines = [
            TextLine(card.title, 28, bold=True, gap=28),
            TextLine(f"{card.stat:,}", 72, bold=True),
            TextLine(card.stat_label, 22, alpha=230),
            TextLine(card.subtitle, 18, alpha=179),
        ]
        if card.rank and card.rank <= PaginationConstants.RANK_BADGE_LIMIT:
            lines.append(TextLine(f"#{card.rank} in the group", 18, bold=True))
        return lines

    if isinstance(card, PlatformCard):
        lines = [
            TextLine(card.title, 28, bold=True, gap=28),
            TextLine(card.platform, 56, bold=True),
        ]
        if card.share_percent is not None:
            lines.append(TextLine(f"{card.count} links", 24, bold=True))
            lines.append(TextLine(f"{card.share_percent}% of your shares", 18, alpha=179))
        return lines

    if isinstance(card, MvpCard):
        return [
            TextLine(card.title, 28, bold=True, gap=28),
            TextLine("  ".join(str(year) for year in card.years), 30, bold=True),
            TextLine(card.subtitle, 18, alpha=179),
        ]

    if isinstance(card, TimelineCard):
        return [
            TextLine(card.title, 28, bold=True, gap=28),
            TextLine(f"{card.years_count} years", 56, bold=True),
            TextLine("of sharing music", 18, alpha=179, gap=28),
            TextLine(" • ".join(str(year) for year in card.years), 16, alpha=230),
            TextLine(f"{card.first_year} → {card.last_year}", 16, alpha=153),
        ]

    if isinstance(card, LeaderboardHighlightCard):
        return [
            TextLine(f"#{card.rank}", 110, bold=True),
            TextLine(card.board_name, 28, bold=True),
            TextLine(f"{card.value:,} total", 18, alpha=179),
        ]

    if isinstance(card, OutroCard):
        return [
            TextLine(card.title, 32, bold=True, gap=24),
            TextLine("Here's to another year of great music", 20, alpha=204, gap=28),
            TextLine(
                f"{card.messages:,} messages · {card.links:,} songs · {card.reactions:,} reactions",
                18, bold=True, gap=28,
            ),
            TextLine(f"{group_name} Wrapped", 14, alpha=153),
        ]

    raise TypeError(f"Unsupported card type: {type(card).__name__}")


def render_card_image(
    card: Card,
    member_name: str,
    card_index: int,
    total_cards: int,
    group_name: str,
    scale: int = ShareConstants.PIXEL_RATIO,
) -> Image.Image:
    """Render a card as an RGBA image of CARD_WIDTH x CARD_HEIGHT logical pixels."""
    width = ShareConstants.CARD_WIDTH * scale
    height = ShareConstants.CARD_HEIGHT * scale
    pad = 32 * scale

    start, end = card_gradient(card, card_index)
    background = linear_gradient((width, height), start, end)
    add_glow(background, (width, 0), 180 * scale)
    add_glow(background, (0, height), 180 * scale)

    # Transparent canvas with the card pasted through a rounded mask
    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    mask = Image.new("L", (width, height), 0)
    ImageDraw.Draw(mask).rounded_rectangle([0, 0, width - 1, height - 1], radius=36 * scale, fill=255)
    canvas.paste(background, (0, 0), mask)

    # Text and segments go on their own layer so translucent ink blends
    overlay = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    draw_centered(draw, pad, f"{group_name} Wrapped", get_font(16 * scale, bold=True), width,
                  fill=(255, 255, 255, 204))

    # Lay out the content block, then centre it vertically
    rows = []  # (text, font, alpha, height, gap below)
    for line in card_lines(card, member_name, group_name):
        font = get_font(line.size * scale, bold=line.bold)
        wrapped = wrap_text(draw, line.text, font, width - 2 * pad) or [""]
        for i, text in enumerate(wrapped):
            bbox = draw.textbbox((0, 0), text, font=font)
            gap = line.gap * scale if i == len(wrapped) - 1 else 6 * scale
            rows.append((text, font, line.alpha, bbox[3] - bbox[1], gap))
    total_height = sum(row[3] + row[4] for row in rows)

    y = (height - total_height) // 2
    for text, font, alpha, line_height, gap in rows:
        draw_centered(draw, y, text, font, width, fill=(255, 255, 255, alpha))
        y += line_height + gap

    # Progress segments, filled up to the current card
    bar_y = height - pad - 40 * scale
    seg_gap = 4 * scale
    seg_width = (width - 2 * pad - seg_gap * (total_cards - 1)) / max(1, total_cards)
    for i in range(total_cards):
        x0 = pad + i * (seg_width + seg_gap)
        fill = (255, 255, 255, 255) if i <= card_index else (255, 255, 255, 77)
        draw.rounded_rectangle([x0, bar_y, x0 + seg_width, bar_y + 4 * scale], radius=2 * scale, fill=fill)
    draw_centered(draw, bar_y + 16 * scale, f"{card_index + 1} / {total_cards}",
                  get_font(14 * scale), width, fill=(255, 255, 255, 153))

    canvas.alpha_composite(overlay)
    return canvas


def image_to_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format=ShareConstants.IMAGE_FORMAT, optimize=True)
    return buffer.getvalue()
