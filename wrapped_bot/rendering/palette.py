"""
Colors, fonts and drawing helpers shared by the card and preview renderers.
"""

from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont

from wrapped_bot.constants import UIConstants
from wrapped_bot.data_models.cards import Card, PlatformCard

RGB = Tuple[int, int, int]

# Fonts are only ever read from the local filesystem
FONT_PATHS = {
    True: [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
        "/Library/Fonts/Arial Bold.ttf",
        "C:/Windows/Fonts/arialbd.ttf",
    ],
    False: [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/usr/share/fonts/TTF/DejaVuSans.ttf",
        "/Library/Fonts/Arial.ttf",
        "C:/Windows/Fonts/arial.ttf",
    ],
}

_font_cache = {}


def get_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
    """Get a TrueType font, falling back to Pillow's bundled font"""
    key = (size, bold)
    if key in _font_cache:
        return _font_cache[key]

    font = None
    for path in FONT_PATHS[bold]:
        try:
            font = ImageFont.truetype(path, size)
            break
        except OSError:
            continue
    if font is None:
        font = ImageFont.load_default(size=size)

    _font_cache[key] = font
    return font


def card_gradient(card: Card, index: int) -> Tuple[RGB, RGB]:
    """Gradient for a card: per-platform for platform cards, else by position."""
    if isinstance(card, PlatformCard):
        platform = card.platform.lower()
        for name, gradient in UIConstants.PLATFORM_GRADIENTS.items():
            if name in platform:
                return gradient
    gradients = UIConstants.CARD_GRADIENTS
    return gradients[index % len(gradients)]


def embed_color(card: Card, index: int) -> int:
    """Gradient start color packed as an int for Discord embeds."""
    (r, g, b), _ = card_gradient(card, index)
    return (r << 16) | (g << 8) | b


def linear_gradient(size: Tuple[int, int], start: RGB, end: RGB) -> Image.Image:
    """Top-to-bottom gradient as an RGBA image."""
    width, height = size
    mask = Image.linear_gradient("L").resize((width, height))
    top = Image.new("RGBA", size, (*start, 255))
    bottom = Image.new("RGBA", size, (*end, 255))
    return Image.composite(bottom, top, mask)


def add_glow(image: Image.Image, center: Tuple[int, int], radius: int, alpha: int = 26):
    """Soft white circle, like the blurred decorations behind each card."""
    overlay = Image.new("RGBA", image.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    for r in range(radius, 0, -max(1, radius // 20)):
        a = int(alpha * (1 - r / radius))
        cx, cy = center
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=(255, 255, 255, a))
    image.alpha_composite(overlay)


def wrap_text(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
    """Greedy word wrap measured with the actual font."""
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and draw.textlength(candidate, font=font) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def draw_centered(draw: ImageDraw.ImageDraw, y: int, text: str, font, width: int,
                  fill=(255, 255, 255, 255)) -> int:
    """Draw one line centered horizontally; returns the y below it."""
    bbox = draw.textbbox((0, 0), text, font=font)
    text_width = bbox[2] - bbox[0]
    text_height = bbox[3] - bbox[1]
    draw.text(((width - text_width) // 2 - bbox[0], y - bbox[1]), text, fill=fill, font=font)
    return y + text_height
