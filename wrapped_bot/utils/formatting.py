"""
Small text formatting helpers shared by embeds and views.
"""

from wrapped_bot.constants import UIConstants


def initials(name: str) -> str:
    """Up to two upper-case initials from a display name."""
    return "".join(part[0] for part in name.split() if part).upper()[:2]


def progress_segments(current_index: int, total: int) -> str:
    """One segment per card, filled up to and including the current card."""
    return "".join(
        UIConstants.SEGMENT_DONE if i <= current_index else UIConstants.SEGMENT_PENDING
        for i in range(total)
    )


def progress_bar(progress: float, width: int = 20) -> str:
    """Fixed-width bar for the current card's dwell progress."""
    progress = min(1.0, max(0.0, progress))
    filled = int(round(progress * width))
    return "█" * filled + "░" * (width - filled)


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - 1] + "…"
