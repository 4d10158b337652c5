"""
Dataset service for the group Wrapped.

Loads the precomputed JSON blob once and answers member lookups, directory
searches and leaderboard pages from the resulting read-only WrappedData.
"""

import json
import logging
import math
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlencode

from wrapped_bot.data_models.leaderboard import LEADERBOARD_META, LeaderboardPage
from wrapped_bot.data_models.wrapped import MemberRecord, WrappedData
from wrapped_bot.utils.exceptions import DatasetError, MemberNotFoundError

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    """URL slug for a member name: lower-case, dashes for spaces, [a-z0-9-] only."""
    slug = re.sub(r"\s+", "-", name.lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def load_wrapped_data(path) -> WrappedData:
    """Read and parse the dataset file."""
    file_path = Path(path)
    if not file_path.exists():
        raise DatasetError(f"{file_path} not found")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise DatasetError(f"{file_path} is not valid JSON ({e.msg} at line {e.lineno})")

    data = WrappedData.from_dict(raw)
    logger.info(f"Loaded wrapped dataset from {file_path}: {len(data.members)} members")
    return data


class WrappedDataService:
    """Read-only queries over the precomputed dataset."""

    def __init__(self, data: WrappedData, site_url: str, group_name: str):
        """
        Initialize the service.

        Args:
            data: Parsed dataset, never mutated
            site_url: Base URL share links point at
            group_name: Display name of the group chat
        """
        self.data = data
        self.site_url = site_url.rstrip("/")
        self.group_name = group_name
        self._slug_index: Dict[str, str] = {}
        for name in data.members:
            slug = slugify(name)
            if slug in self._slug_index:
                logger.warning(f"Slug collision for '{name}' and '{self._slug_index[slug]}'; keeping the first")
                continue
            self._slug_index[slug] = name

    def find_member(self, name_or_slug: str) -> MemberRecord:
        """Look a member up by exact name or by slug."""
        if name_or_slug in self.data.members:
            return self.data.members[name_or_slug]
        name = self._slug_index.get(slugify(name_or_slug))
        if name is None:
            raise MemberNotFoundError(name_or_slug)
        return self.data.members[name]

    def members_by_activity(self) -> List[MemberRecord]:
        """All members, most messages first."""
        return sorted(self.data.members.values(), key=lambda m: m.messages, reverse=True)

    def search_members(self, query: str) -> List[MemberRecord]:
        """Case-insensitive substring search; an empty query returns everyone."""
        needle = query.strip().lower()
        members = self.members_by_activity()
        if not needle:
            return members
        return [member for member in members if needle in member.name.lower()]

    def member_metadata(self, member: MemberRecord) -> Tuple[str, str]:
        """Title and description used for a member's Wrapped."""
        title = f"{member.name}'s {self.group_name} Wrapped"
        description = (
            f"{member.name} sent {member.messages} messages and shared "
            f"{member.music_links} songs in {self.group_name}"
        )
        return title, description

    def share_url(self, member: MemberRecord, card_index: Optional[int] = None) -> str:
        """Link to a member's Wrapped, optionally pinned to a 0-based card index."""
        url = f"{self.site_url}/wrapped/{slugify(member.name)}"
        if card_index is not None:
            url += "?" + urlencode({"card": card_index + 1})
        return url

    def get_page(self, board_key: str, page: int = 1, page_size: int = 10) -> LeaderboardPage:
        """Get one page of a leaderboard."""
        if board_key not in LEADERBOARD_META:
            raise ValueError(f"Unknown leaderboard: {board_key}")
        if not isinstance(page, int) or page < 1:
            raise ValueError("page must be a positive integer")
        if not isinstance(page_size, int) or page_size < 1 or page_size > 50:
            raise ValueError("page_size must be between 1 and 50")

        board = self.data.leaderboards[board_key]
        total = len(board.entries)
        total_pages = max(1, math.ceil(total / page_size))
        page = min(page, total_pages)
        offset = (page - 1) * page_size

        return LeaderboardPage(
            leaderboard=board,
            entries=list(board.entries[offset:offset + page_size]),
            current_page=page,
            total_pages=total_pages,
            total_members=total,
        )
