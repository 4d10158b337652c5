"""
Leaderboard data models for the group Wrapped.

Provides immutable data transfer objects for the precomputed rankings.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class LeaderboardEntry:
    """Single leaderboard row. Tied members share a rank."""
    name: str
    value: int
    rank: int

    @classmethod
    def from_row(cls, row) -> "LeaderboardEntry":
        """Build from the ``[name, value, rank]`` triple of the dataset."""
        name, value, rank = row
        return cls(name=str(name), value=int(value), rank=int(rank))


@dataclass(frozen=True)
class LeaderboardMeta:
    """Display metadata for one ranking category."""
    key: str
    title: str
    description: str
    metric_label: str
    color: int


LEADERBOARD_META: Dict[str, LeaderboardMeta] = {
    meta.key: meta for meta in (
        LeaderboardMeta("messages", "Messages sent",
                        "Who kept the conversation alive the most.", "messages", 0x8b5cf6),
        LeaderboardMeta("music_links", "Music shared",
                        "Most songs linked in the chat.", "songs", 0xec4899),
        LeaderboardMeta("reactions_received", "Reactions received",
                        "Most kudos, laughs, and hype from others.", "reactions", 0x10b981),
        LeaderboardMeta("replies_received", "Replies received",
                        "Who sparked the longest threads.", "replies", 0x3b82f6),
        LeaderboardMeta("replies_sent", "Replies sent",
                        "The most responsive conversationalists.", "replies", 0xf59e0b),
        LeaderboardMeta("longest_streak", "Longest streak",
                        "Most consecutive days of sharing.", "days", 0xf43f5e),
        LeaderboardMeta("spotify", "Spotify shares",
                        "Top Spotify linkers.", "links", 0x22c55e),
        LeaderboardMeta("soundcloud", "SoundCloud shares",
                        "Most SoundCloud drops.", "links", 0xf97316),
        LeaderboardMeta("youtube", "YouTube shares",
                        "Most YouTube embeds.", "links", 0xef4444),
    )
}


@dataclass(frozen=True)
class Leaderboard:
    """One ranking category with its rows in display order."""
    meta: LeaderboardMeta
    entries: Tuple[LeaderboardEntry, ...]

    @property
    def peak_value(self) -> int:
        return max((entry.value for entry in self.entries), default=0)

    def percent_of_peak(self, entry: LeaderboardEntry) -> int:
        """Entry value as a whole percentage of the leader's value."""
        peak = self.peak_value
        if peak <= 0:
            return 0
        return round(entry.value / peak * 100)

    def entry_for(self, name: str) -> Optional[LeaderboardEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def top(self, count: int) -> List[LeaderboardEntry]:
        return list(self.entries[:count])


@dataclass(frozen=True)
class LeaderboardPage:
    """Paginated leaderboard data."""
    leaderboard: Leaderboard
    entries: List[LeaderboardEntry]
    current_page: int
    total_pages: int
    total_members: int
