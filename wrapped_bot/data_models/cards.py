"""
Card data models for the Wrapped viewer.

One immutable dataclass per card kind, each carrying only the fields that kind
displays. Cards are produced by the offline analytics step and never mutated.
"""

from dataclasses import MISSING, dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from wrapped_bot.utils.exceptions import DatasetError


class CardKind(str, Enum):
    """Discriminant of a card record."""
    INTRO = "intro"
    STAT = "stat"
    PLATFORM = "platform"
    MVP = "mvp"
    TIMELINE = "timeline"
    LEADERBOARD_HIGHLIGHT = "leaderboard_highlight"
    OUTRO = "outro"


# (numeric value, label) shown on a social preview
Headline = Tuple[Optional[int], Optional[str]]


@dataclass(frozen=True)
class IntroCard:
    """Opening card with the member's message total."""
    title: str
    stat: int
    stat_label: str
    subtitle: str
    rank: Optional[int] = None
    total_users: Optional[int] = None
    emoji: Optional[str] = None
    kind = CardKind.INTRO

    @property
    def headline(self) -> Headline:
        return self.stat, self.stat_label


@dataclass(frozen=True)
class StatCard:
    """Single counter with an optional group rank."""
    title: str
    emoji: str
    stat: int
    stat_label: str
    subtitle: str
    rank: Optional[int] = None
    kind = CardKind.STAT

    @property
    def headline(self) -> Headline:
        return self.stat, self.stat_label


@dataclass(frozen=True)
class PlatformCard:
    """Member's favourite music platform."""
    title: str
    emoji: str
    platform: str
    count: Optional[int] = None
    total_links: Optional[int] = None
    kind = CardKind.PLATFORM

    @property
    def share_percent(self) -> Optional[int]:
        """Share of the member's links posted from this platform."""
        if not self.count or not self.total_links:
            return None
        return round(self.count / self.total_links * 100)

    @property
    def headline(self) -> Headline:
        return self.count, self.platform


@dataclass(frozen=True)
class MvpCard:
    """Years in which the member was the group's MVP."""
    title: str
    emoji: str
    years: Tuple[int, ...]
    subtitle: str
    kind = CardKind.MVP

    @property
    def headline(self) -> Headline:
        return len(self.years), self.subtitle


@dataclass(frozen=True)
class TimelineCard:
    """Span of years the member has been sharing."""
    title: str
    emoji: str
    years: Tuple[int, ...]
    years_count: int
    first_year: int
    last_year: int
    kind = CardKind.TIMELINE

    @property
    def headline(self) -> Headline:
        return self.years_count, f"{self.first_year} → {self.last_year}"


@dataclass(frozen=True)
class LeaderboardHighlightCard:
    """Member's best placement on one of the group leaderboards."""
    title: str
    emoji: str
    rank: int
    board_name: str
    value: int
    kind = CardKind.LEADERBOARD_HIGHLIGHT

    @property
    def headline(self) -> Headline:
        return self.rank, self.board_name


@dataclass(frozen=True)
class OutroCard:
    """Closing card summarising the member's year."""
    title: str
    emoji: str
    messages: int
    links: int
    reactions: int
    kind = CardKind.OUTRO

    @property
    def headline(self) -> Headline:
        return self.messages, "messages"


Card = Union[
    IntroCard,
    StatCard,
    PlatformCard,
    MvpCard,
    TimelineCard,
    LeaderboardHighlightCard,
    OutroCard,
]

CARD_TYPES = {
    CardKind.INTRO: IntroCard,
    CardKind.STAT: StatCard,
    CardKind.PLATFORM: PlatformCard,
    CardKind.MVP: MvpCard,
    CardKind.TIMELINE: TimelineCard,
    CardKind.LEADERBOARD_HIGHLIGHT: LeaderboardHighlightCard,
    CardKind.OUTRO: OutroCard,
}


def parse_card(raw: Mapping[str, Any]) -> Card:
    """
    Build the card variant named by ``raw["type"]``.

    Fields the variant does not declare are ignored; missing required fields
    raise DatasetError.
    """
    try:
        kind = CardKind(raw.get("type"))
    except ValueError:
        raise DatasetError(f"unknown card type {raw.get('type')!r}")

    card_type = CARD_TYPES[kind]
    kwargs: Dict[str, Any] = {}
    missing = []
    for field_def in fields(card_type):
        value = raw.get(field_def.name)
        if value is None:
            if field_def.default is MISSING:
                missing.append(field_def.name)
            continue
        if field_def.name == "years":
            value = tuple(int(year) for year in value)
        kwargs[field_def.name] = value

    if missing:
        raise DatasetError(f"{kind.value} card missing {', '.join(sorted(missing))}")

    return card_type(**kwargs)
