"""
Social preview images (1200x630) for the group and for individual members.
"""

from typing import Optional
from urllib.parse import urlparse

from PIL import Image, ImageDraw

from wrapped_bot.constants import ShareConstants, UIConstants
from wrapped_bot.data_models.wrapped import MemberRecord, TopLevel
from wrapped_bot.rendering.palette import add_glow, get_font, linear_gradient, wrap_text
from wrapped_bot.ui.sequencer import clamp_index

WHITE = (255, 255, 255, 255)


def preview_card_index(card_param: Optional[str], card_count: int) -> int:
    """
    Resolve a 1-based ``card`` query value to a 0-based index.

    Anything that is not an integer selects the first card; out-of-range
    numbers are clamped.
    """
    try:
        parsed = int(card_param)
    except (TypeError, ValueError):
        return 0
    return clamp_index(parsed - 1, card_count)


def _canvas(start, end) -> Image.Image:
    size = (ShareConstants.PREVIEW_WIDTH, ShareConstants.PREVIEW_HEIGHT)
    image = linear_gradient(size, start, end)
    add_glow(image, (240, 126), 420, alpha=36)
    add_glow(image, (960, 0), 340, alpha=26)
    return image


def render_member_preview(
    member: MemberRecord,
    card_index: int,
    group_name: str,
    site_url: str,
) -> Image.Image:
    """Preview of one card of a member's Wrapped."""
    gradients = UIConstants.CARD_GRADIENTS
    card_index = clamp_index(card_index, len(member.cards))
    card = member.cards[card_index]
    start, end = gradients[card_index % len(gradients)]

    image = _canvas(start, end)
    overlay = Image.new("RGBA", image.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    width, height = image.size
    pad = 48

    # Header
    draw.text((pad, pad), group_name, font=get_font(28), fill=(255, 255, 255, 217))
    draw.text((pad, pad + 40), f"{member.name}'s Wrapped", font=get_font(60, bold=True), fill=WHITE)
    draw.text((pad, pad + 116), card.title, font=get_font(24), fill=(255, 255, 255, 217))

    badge_font = get_font(22, bold=True)
    badge_text = f"Card {card_index + 1} / {len(member.cards)}"
    badge_width = int(draw.textlength(badge_text, font=badge_font)) + 36
    draw.rounded_rectangle([width - pad - badge_width, pad, width - pad, pad + 52],
                           radius=16, fill=(255, 255, 255, 36))
    draw.text((width - pad - badge_width + 18, pad + 13), badge_text, font=badge_font, fill=WHITE)

    # Headline panel
    panel_top = 250
    draw.rounded_rectangle([pad, panel_top, width - pad, panel_top + 240], radius=28, fill=(255, 255, 255, 41))
    value, label = card.headline
    y = panel_top + 32
    if value is not None:
        draw.text((pad + 32, y), f"{value:,}", font=get_font(54, bold=True), fill=WHITE)
        y += 66
    if label:
        draw.text((pad + 32, y), label, font=get_font(26), fill=(255, 255, 255, 217))
        y += 38
    subtitle = getattr(card, "subtitle", None)
    if subtitle and subtitle != label:
        sub_font = get_font(22)
        for line in wrap_text(draw, subtitle, sub_font, 720)[:2]:
            draw.text((pad + 32, y), line, font=sub_font, fill=(255, 255, 255, 191))
            y += 30

    # Footer
    footer_font = get_font(22)
    draw.text(
        (pad, height - pad - 26),
        f"{member.name} sent {member.messages:,} messages & shared {member.music_links:,} songs.",
        font=footer_font, fill=(255, 255, 255, 235),
    )
    host = urlparse(site_url).netloc or site_url
    host_font = get_font(22, bold=True)
    draw.text((width - pad - draw.textlength(host, font=host_font), height - pad - 26),
              host, font=host_font, fill=WHITE)

    image.alpha_composite(overlay)
    return image.convert("RGB")


def render_group_preview(top_level: TopLevel, group_name: str, year: int, year_range: str) -> Image.Image:
    """Preview for the group as a whole."""
    image = _canvas((139, 92, 246), (6, 182, 212))
    overlay = Image.new("RGBA", image.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    width, height = image.size
    pad = 48

    draw.text((pad, pad), group_name, font=get_font(28), fill=(255, 255, 255, 204))
    draw.text((pad, pad + 40), f"Wrapped {year}", font=get_font(64, bold=True), fill=WHITE)

    range_font = get_font(22, bold=True)
    range_width = int(draw.textlength(year_range, font=range_font)) + 36
    draw.rounded_rectangle([width - pad - range_width, pad, width - pad, pad + 48],
                           radius=24, fill=(255, 255, 255, 31))
    draw.text((width - pad - range_width + 18, pad + 11), year_range, font=range_font, fill=WHITE)

    stats = [
        (top_level.total_messages, "messages"),
        (top_level.total_music_links, "songs shared"),
        (top_level.total_reactions, "reactions"),
        (top_level.longest_streak, "day streak"),
    ]
    box_width = (width - 2 * pad - 3 * 24) // 4
    for i, (value, label) in enumerate(stats):
        x0 = pad + i * (box_width + 24)
        draw.rounded_rectangle([x0, 300, x0 + box_width, 460], radius=24, fill=(255, 255, 255, 36))
        draw.text((x0 + 24, 330), f"{value:,}", font=get_font(44, bold=True), fill=WHITE)
        draw.text((x0 + 24, 395), label, font=get_font(22), fill=(255, 255, 255, 217))

    draw.text((pad, height - pad - 26), "Your year in music sharing", font=get_font(22),
              fill=(255, 255, 255, 230))

    image.alpha_composite(overlay)
    return image.convert("RGB")
