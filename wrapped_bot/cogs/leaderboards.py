import discord
from discord import app_commands
from discord.ext import commands
from typing import Optional
from wrapped_bot.constants import PaginationConstants, UIConstants
from wrapped_bot.data_models.leaderboard import LEADERBOARD_META
from wrapped_bot.ui.leaderboard_view import LeaderboardView
from wrapped_bot.utils.embeds import build_leaderboard_embed
from wrapped_bot.utils.error_embeds import ErrorEmbeds
import logging

logger = logging.getLogger(__name__)

CATEGORY_CHOICES = [
    app_commands.Choice(name=meta.title, value=key)
    for key, meta in LEADERBOARD_META.items()
]


class LeaderboardsCog(commands.Cog):
    """Group leaderboards across every ranking category"""

    def __init__(self, bot):
        self.bot = bot

    @app_commands.command(name="leaderboards", description="See how every member stacks up")
    @app_commands.describe(category="Leaderboard to open first")
    @app_commands.choices(category=CATEGORY_CHOICES)
    async def leaderboards(
        self,
        interaction: discord.Interaction,
        category: Optional[app_commands.Choice[str]] = None
    ):
        """Display a leaderboard with a category picker."""
        await interaction.response.defer()

        service = self.bot.wrapped_service
        if service is None:
            await interaction.followup.send(embed=ErrorEmbeds.dataset_unavailable())
            return

        category_key = category.value if category else "messages"
        try:
            page_data = service.get_page(
                category_key,
                page=1,
                page_size=PaginationConstants.DEFAULT_PAGE_SIZE
            )

            view = LeaderboardView(
                wrapped_service=service,
                category=category_key,
                current_page=1,
                total_pages=page_data.total_pages
            )

            await interaction.followup.send(embed=build_leaderboard_embed(page_data), view=view)

        except ValueError as e:
            await interaction.followup.send(embed=ErrorEmbeds.invalid_input(str(e)))
        except Exception as e:
            logger.error(f"Error in leaderboards command: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.command_error("An error occurred while fetching leaderboard data. Please try again later."))

    @commands.command(name='ranks')
    async def show_ranks(self, ctx):
        """Show the #1 of every leaderboard"""
        service = self.bot.wrapped_service
        if service is None:
            await ctx.send(embed=ErrorEmbeds.dataset_unavailable())
            return

        embed = discord.Embed(
            title=f"{UIConstants.TROPHY_EMOJI} {service.group_name} Leaders",
            description="Use `/leaderboards` for the full rankings.",
            color=UIConstants.GOLD_RANK_COLOR
        )
        for key, board in service.data.leaderboards.items():
            top = board.top(1)
            value = f"**{top[0].name}** ({top[0].value:,} {board.meta.metric_label})" if top else "No entries"
            embed.add_field(name=board.meta.title, value=value, inline=True)

        await ctx.send(embed=embed)


async def setup(bot):
    await bot.add_cog(LeaderboardsCog(bot))
