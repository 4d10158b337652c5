"""
Member Directory Pagination View

Discord UI component for paging through the searchable member directory.
"""

import math
from typing import List, Optional

import discord

from wrapped_bot.constants import PaginationConstants
from wrapped_bot.data_models.wrapped import MemberRecord, TopLevel
from wrapped_bot.utils.embeds import build_home_embed
from wrapped_bot.utils.logger import setup_logger

logger = setup_logger(__name__)


class MemberPaginationView(discord.ui.View):
    """
    Pagination view for the group home directory.

    Each page is rebuilt from the filtered member list, so the group header
    stays on every page.
    """

    def __init__(
        self,
        top_level: TopLevel,
        members: List[MemberRecord],
        group_name: str,
        year_range: str,
        search: str = "",
        per_page: int = PaginationConstants.MEMBERS_PER_PAGE,
        timeout: int = 300,
        image_url: Optional[str] = None,
    ):
        """
        Initialize pagination view over a member list.

        Args:
            top_level: Group aggregates shown in the header
            members: Members already filtered by the search, in display order
            group_name: Group chat display name
            year_range: Years covered by the dataset
            search: Search text, echoed in the footer
            per_page: Members per page
            timeout: Seconds before view expires (default 5 minutes)
            image_url: Embed image kept on every page, e.g. an attachment:// URL
        """
        super().__init__(timeout=timeout)
        self.top_level = top_level
        self.members = members
        self.group_name = group_name
        self.year_range = year_range
        self.search = search
        self.per_page = per_page
        self.image_url = image_url
        self.current_page = 0
        self.total_pages = max(1, math.ceil(len(members) / per_page))

        self._update_button_states()

    def _update_button_states(self):
        """Update enabled/disabled state of navigation buttons"""
        self.previous_button.disabled = self.current_page == 0
        self.next_button.disabled = self.current_page >= self.total_pages - 1

    def current_embed(self) -> discord.Embed:
        start = self.current_page * self.per_page
        embed = build_home_embed(
            self.top_level,
            self.members[start:start + self.per_page],
            page=self.current_page + 1,
            total_pages=self.total_pages,
            group_name=self.group_name,
            year_range=self.year_range,
            search=self.search,
        )
        if self.image_url:
            embed.set_image(url=self.image_url)
        return embed

    @discord.ui.button(label="◀ Previous", style=discord.ButtonStyle.primary)
    async def previous_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        """Navigate to previous page"""
        if self.current_page > 0:
            self.current_page -= 1
            self._update_button_states()

        await interaction.response.edit_message(embed=self.current_embed(), view=self)

    @discord.ui.button(label="Next ▶", style=discord.ButtonStyle.primary)
    async def next_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        """Navigate to next page"""
        if self.current_page < self.total_pages - 1:
            self.current_page += 1
            self._update_button_states()

        await interaction.response.edit_message(embed=self.current_embed(), view=self)

    async def on_timeout(self):
        """Called when the view times out"""
        for item in self.children:
            item.disabled = True

        logger.debug("MemberPaginationView timed out")
