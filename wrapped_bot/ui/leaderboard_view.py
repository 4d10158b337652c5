"""
Leaderboard view components.

Provides interactive Discord UI components for the group leaderboards.
"""

import discord
from discord.ui import View, Button, Select

from wrapped_bot.constants import PaginationConstants
from wrapped_bot.data_models.leaderboard import LEADERBOARD_META
from wrapped_bot.utils.embeds import build_leaderboard_embed
from wrapped_bot.utils.logger import setup_logger

logger = setup_logger(__name__)


class LeaderboardView(View):
    """Paginated leaderboard view with a category picker."""

    def __init__(
        self,
        wrapped_service,
        category: str,
        current_page: int,
        total_pages: int,
        *,
        timeout: int = 900
    ):
        super().__init__(timeout=timeout)
        self.wrapped_service = wrapped_service
        self.category = category
        self.current_page = current_page
        self.total_pages = total_pages

        self._update_buttons()

    def _update_buttons(self):
        """Update button states based on current page."""
        self.clear_items()

        prev_button = Button(
            label="Previous",
            style=discord.ButtonStyle.primary,
            disabled=self.current_page <= 1,
        )
        prev_button.callback = self.previous_page
        self.add_item(prev_button)

        page_indicator = Button(
            label=f"Page {self.current_page}/{self.total_pages}",
            style=discord.ButtonStyle.secondary,
            disabled=True
        )
        self.add_item(page_indicator)

        next_button = Button(
            label="Next",
            style=discord.ButtonStyle.primary,
            disabled=self.current_page >= self.total_pages,
        )
        next_button.callback = self.next_page
        self.add_item(next_button)

        self.add_item(CategorySelect(self.category))

    async def previous_page(self, interaction: discord.Interaction):
        """Navigate to previous page."""
        await interaction.response.defer()
        if self.current_page > 1:
            self.current_page -= 1
            await self._update_leaderboard(interaction)

    async def next_page(self, interaction: discord.Interaction):
        """Navigate to next page."""
        await interaction.response.defer()
        if self.current_page < self.total_pages:
            self.current_page += 1
            await self._update_leaderboard(interaction)

    async def _update_leaderboard(self, interaction: discord.Interaction):
        """Rebuild the current page and edit it into the message."""
        try:
            page_data = self.wrapped_service.get_page(
                self.category,
                page=self.current_page,
                page_size=PaginationConstants.DEFAULT_PAGE_SIZE
            )
            self.current_page = page_data.current_page
            self.total_pages = page_data.total_pages
            self._update_buttons()

            await interaction.followup.edit_message(
                message_id=interaction.message.id,
                embed=build_leaderboard_embed(page_data),
                view=self
            )
        except Exception as e:
            logger.error(f"Error updating leaderboard {self.category}: {e}", exc_info=True)
            await interaction.followup.send(f"Error updating leaderboard: {e}", ephemeral=True)

    async def on_timeout(self):
        for item in self.children:
            item.disabled = True
        logger.debug(f"LeaderboardView for {self.category} timed out")


class CategorySelect(Select):
    """Dropdown for switching leaderboard category."""

    def __init__(self, current_category: str):
        options = [
            discord.SelectOption(
                label=meta.title,
                value=key,
                description=meta.description[:100],
                default=current_category == key
            )
            for key, meta in LEADERBOARD_META.items()
        ]

        super().__init__(
            placeholder="Choose a leaderboard...",
            options=options,
        )

    async def callback(self, interaction: discord.Interaction):
        """Handle category change."""
        await interaction.response.defer()

        view: LeaderboardView = self.view
        view.category = self.values[0]
        view.current_page = 1
        await view._update_leaderboard(interaction)
