"""
Bot-wide constants for the Wrapped Discord Bot.

Fixed values for the card viewer, share exporter and Discord presentation.
Deployment-specific values live in config.py instead.
"""

class ViewerConstants:
    """Constants for the card viewer state machine."""

    # Dwell time per card before automatic progression
    AUTO_ADVANCE_SECONDS = 30.0

    # Horizontal release displacement a swipe must exceed
    SWIPE_THRESHOLD = 50

    # Tap zones as fractions of the viewport width; the band between is dead
    TAP_RETREAT_ZONE = 0.4
    TAP_ADVANCE_ZONE = 0.6

    # Keys (DOM KeyboardEvent.key names)
    ADVANCE_KEYS = ("ArrowRight", " ")
    RETREAT_KEYS = ("ArrowLeft",)
    SUPPRESSED_KEYS = ("ArrowUp", "ArrowDown")

    # Element id prefix of a rendered card
    CARD_ELEMENT_PREFIX = "card-"


class ShareConstants:
    """Constants for image capture and share handoff."""

    # Fixed pixel-density multiplier for captures
    PIXEL_RATIO = 2

    # Logical size of a portrait card (before the pixel ratio is applied)
    CARD_WIDTH = 540
    CARD_HEIGHT = 960

    # Social preview size
    PREVIEW_WIDTH = 1200
    PREVIEW_HEIGHT = 630

    IMAGE_FORMAT = "PNG"


class PaginationConstants:
    """Constants for paginated displays."""

    # Default page size for leaderboards
    DEFAULT_PAGE_SIZE = 10

    # Members listed per page of the directory
    MEMBERS_PER_PAGE = 10

    # Longest member name shown in a directory row; keeps a page under the 1024-character field limit
    DIRECTORY_NAME_LENGTH = 32

    # Leaderboard rows shown in a leaderboard-highlight panel
    HIGHLIGHT_PANEL_SIZE = 3

    # Stat cards only show a rank badge inside this range
    RANK_BADGE_LIMIT = 10


class UIConstants:
    """Constants for Discord UI elements."""

    # Embed colors
    DEFAULT_EMBED_COLOR = 0x8b5cf6  # Purple
    GOLD_RANK_COLOR = 0xffd700     # Gold for #1 ranked members

    # Card colors by position, (start, end) of the gradient
    CARD_GRADIENTS = [
        ((147, 51, 234), (236, 72, 153)),   # purple -> pink
        ((6, 182, 212), (37, 99, 235)),     # cyan -> blue
        ((34, 197, 94), (20, 184, 166)),    # green -> teal
        ((249, 115, 22), (239, 68, 68)),    # orange -> red
        ((124, 58, 237), (99, 102, 241)),   # violet -> indigo
        ((245, 158, 11), (249, 115, 22)),   # amber -> orange
        ((244, 63, 94), (219, 39, 119)),    # rose -> pink
        ((16, 185, 129), (6, 182, 212)),    # emerald -> cyan
    ]

    # Platform cards override the positional color
    PLATFORM_GRADIENTS = {
        "spotify": ((34, 197, 94), (22, 163, 74)),
        "soundcloud": ((249, 115, 22), (234, 88, 12)),
        "youtube": ((239, 68, 68), (220, 38, 38)),
        "bandcamp": ((6, 182, 212), (59, 130, 246)),
    }

    # Emoji for UI elements
    TROPHY_EMOJI = "🏆"
    MUSIC_EMOJI = "🎵"
    PAUSED_EMOJI = "⏸️"
    PLAYING_EMOJI = "▶️"

    # Progress segments
    SEGMENT_DONE = "▰"
    SEGMENT_PENDING = "▱"
