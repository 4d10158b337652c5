"""
Wrapped dataset models.

The whole dataset is parsed once into these frozen objects and handed to the
services and views that need it; nothing reads the JSON blob directly.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from wrapped_bot.data_models.cards import Card, parse_card
from wrapped_bot.data_models.leaderboard import (
    LEADERBOARD_META,
    Leaderboard,
    LeaderboardEntry,
)
from wrapped_bot.utils.exceptions import DatasetError


@dataclass(frozen=True)
class MemberRecord:
    """Precomputed stats and card deck for one chat member."""
    name: str
    messages: int
    music_links: int
    reactions_received: int
    replies_sent: int
    replies_received: int
    longest_streak: int
    pct_messages: float
    pct_links: float
    pct_reactions: float
    pct_replies: float
    cards: Tuple[Card, ...]
    links_by_platform: Dict[str, int] = field(default_factory=dict)
    messages_by_year: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, name: str, raw: Mapping[str, Any]) -> "MemberRecord":
        cards = tuple(parse_card(card) for card in raw.get("cards") or ())
        if not cards:
            raise DatasetError(f"member '{name}' has no cards")
        try:
            return cls(
                name=name,
                messages=int(raw["messages"]),
                music_links=int(raw["music_links"]),
                reactions_received=int(raw.get("reactions_received", 0)),
                replies_sent=int(raw.get("replies_sent", 0)),
                replies_received=int(raw.get("replies_received", 0)),
                longest_streak=int(raw.get("longest_streak", 0)),
                pct_messages=float(raw.get("pct_messages", 0.0)),
                pct_links=float(raw.get("pct_links", 0.0)),
                pct_reactions=float(raw.get("pct_reactions", 0.0)),
                pct_replies=float(raw.get("pct_replies", 0.0)),
                cards=cards,
                links_by_platform=dict(raw.get("links_by_platform") or {}),
                messages_by_year=dict(raw.get("messages_by_year") or {}),
            )
        except KeyError as e:
            raise DatasetError(f"member '{name}' missing {e.args[0]}")

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0]


@dataclass(frozen=True)
class TopLevel:
    """Group-wide aggregate counters."""
    total_messages: int
    total_music_links: int
    unique_music_links: int
    total_reactions: int
    total_replies: int
    longest_streak: int
    messages_by_year: Dict[str, int] = field(default_factory=dict)
    most_active_month: Tuple[Any, ...] = ()
    most_active_day: Tuple[Any, ...] = ()
    busiest_hour: Tuple[int, ...] = ()
    busiest_dow: Tuple[Any, ...] = ()
    reaction_breakdown: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "TopLevel":
        return cls(
            total_messages=int(raw.get("total_messages", 0)),
            total_music_links=int(raw.get("total_music_links", 0)),
            unique_music_links=int(raw.get("unique_music_links", 0)),
            total_reactions=int(raw.get("total_reactions", 0)),
            total_replies=int(raw.get("total_replies", 0)),
            longest_streak=int(raw.get("longest_streak", 0)),
            messages_by_year=dict(raw.get("messages_by_year") or {}),
            most_active_month=tuple(raw.get("most_active_month") or ()),
            most_active_day=tuple(raw.get("most_active_day") or ()),
            busiest_hour=tuple(raw.get("busiest_hour") or ()),
            busiest_dow=tuple(raw.get("busiest_dow") or ()),
            reaction_breakdown=dict(raw.get("reaction_breakdown") or {}),
        )


@dataclass(frozen=True)
class WrappedData:
    """Read-only configuration object holding the full precomputed dataset."""
    top_level: TopLevel
    leaderboards: Dict[str, Leaderboard]
    yearly_mvps: Dict[str, Tuple[Any, ...]]
    members: Dict[str, MemberRecord]

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "WrappedData":
        if not isinstance(raw, Mapping):
            raise DatasetError("top-level JSON value must be an object")

        leaderboards = {}
        raw_boards = raw.get("leaderboards") or {}
        for key, meta in LEADERBOARD_META.items():
            rows = raw_boards.get(key) or []
            try:
                entries = tuple(LeaderboardEntry.from_row(row) for row in rows)
            except (TypeError, ValueError):
                raise DatasetError(f"leaderboard '{key}' has malformed rows")
            leaderboards[key] = Leaderboard(meta=meta, entries=entries)

        members = {
            name: MemberRecord.from_dict(name, record)
            for name, record in (raw.get("users") or {}).items()
        }

        return cls(
            top_level=TopLevel.from_dict(raw.get("top_level") or {}),
            leaderboards=leaderboards,
            yearly_mvps={
                year: tuple(value) for year, value in (raw.get("yearly_mvps") or {}).items()
            },
            members=members,
        )

    def leaderboard_for_board_name(self, board_name: str) -> Optional[Leaderboard]:
        """Resolve a card's ``board_name`` against leaderboard keys and titles."""
        wanted = board_name.strip().lower()
        for key, board in self.leaderboards.items():
            if wanted in (key, key.replace("_", " "), board.meta.title.lower()):
                return board
        return None
