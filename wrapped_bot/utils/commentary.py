"""
Playful one-liners driven by a member's share of group activity.

Each metric has thresholds checked from the highest down; the first one the
member's percentage reaches picks the line.
"""

from typing import List, Optional, Tuple

from wrapped_bot.data_models.cards import (
    Card,
    IntroCard,
    LeaderboardHighlightCard,
    OutroCard,
    PlatformCard,
    StatCard,
)
from wrapped_bot.data_models.wrapped import MemberRecord

MESSAGE_LINES: List[Tuple[float, str]] = [
    (20.0, "That's {pct:.1f}% of everything said in here. You ARE the group chat."),
    (10.0, "{pct:.1f}% of all messages. The conversation leans on you."),
    (5.0, "{pct:.1f}% of the chat came from your thumbs. Solid presence."),
    (1.0, "{pct:.1f}% of the messages. Quality over quantity, right?"),
    (0.0, "{pct:.1f}% of the messages. A mysterious lurker."),
]

LINK_LINES: List[Tuple[float, str]] = [
    (20.0, "You posted {pct:.1f}% of every song shared. Resident DJ."),
    (10.0, "{pct:.1f}% of the group's music came from you. Tastemaker."),
    (3.0, "{pct:.1f}% of the songs. The playlist would miss you."),
    (0.0, "{pct:.1f}% of the songs. Saving the good ones for later?"),
]

REACTION_LINES: List[Tuple[float, str]] = [
    (15.0, "{pct:.1f}% of all reactions landed on your posts. Crowd favourite."),
    (5.0, "{pct:.1f}% of the reactions were for you. People notice."),
    (0.0, "{pct:.1f}% of the reactions. Tough crowd this year."),
]

REPLY_LINES: List[Tuple[float, str]] = [
    (15.0, "{pct:.1f}% of all replies. You keep the threads alive."),
    (5.0, "{pct:.1f}% of the replies. Always part of the conversation."),
    (0.0, "{pct:.1f}% of the replies. Short and sweet."),
]


def _pick(lines: List[Tuple[float, str]], pct: float) -> str:
    for threshold, template in lines:
        if pct >= threshold:
            return template.format(pct=pct)
    return lines[-1][1].format(pct=pct)


def _metric_for_label(label: str) -> Optional[str]:
    label = label.lower()
    if "message" in label:
        return "messages"
    if "song" in label or "link" in label:
        return "links"
    if "reaction" in label:
        return "reactions"
    if "repl" in label:
        return "replies"
    return None


def commentary_for(member: MemberRecord, metric: str) -> str:
    """Line for one metric: messages, links, reactions or replies."""
    if metric == "messages":
        return _pick(MESSAGE_LINES, member.pct_messages)
    if metric == "links":
        return _pick(LINK_LINES, member.pct_links)
    if metric == "reactions":
        return _pick(REACTION_LINES, member.pct_reactions)
    if metric == "replies":
        return _pick(REPLY_LINES, member.pct_replies)
    raise ValueError(f"Unknown metric: {metric}")


def card_commentary(card: Card, member: MemberRecord) -> Optional[str]:
    """Commentary to show under a card, if its content maps to a metric."""
    if isinstance(card, IntroCard):
        return commentary_for(member, "messages")
    if isinstance(card, PlatformCard):
        return commentary_for(member, "links")
    if isinstance(card, StatCard):
        metric = _metric_for_label(card.stat_label)
        return commentary_for(member, metric) if metric else None
    if isinstance(card, LeaderboardHighlightCard):
        metric = _metric_for_label(card.board_name)
        return commentary_for(member, metric) if metric else None
    if isinstance(card, OutroCard):
        return commentary_for(member, "reactions")
    return None
