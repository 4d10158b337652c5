import asyncio
import io
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from wrapped_bot.config import Config
from wrapped_bot.constants import UIConstants
from wrapped_bot.rendering.card_image import image_to_png
from wrapped_bot.rendering.og_image import preview_card_index, render_group_preview, render_member_preview
from wrapped_bot.services.dataset import slugify
from wrapped_bot.services.rate_limiter import rate_limit
from wrapped_bot.ui.member_pagination import MemberPaginationView
from wrapped_bot.ui.wrapped_viewer import WrappedViewerView
from wrapped_bot.utils.error_embeds import ErrorEmbeds
from wrapped_bot.utils.exceptions import MemberNotFoundError, WrappedException
import logging

logger = logging.getLogger(__name__)


class WrappedCog(commands.Cog):
    """Per-member Wrapped viewer, group home and share previews"""

    def __init__(self, bot):
        self.bot = bot

    @property
    def wrapped_service(self):
        return self.bot.wrapped_service

    @app_commands.command(name="wrapped", description="Play a member's Wrapped year in review")
    @app_commands.describe(
        member="Member name (start typing to search)",
        card="Card number to start on"
    )
    async def wrapped(
        self,
        interaction: discord.Interaction,
        member: str,
        card: Optional[app_commands.Range[int, 1, 100]] = None
    ):
        """Open the card viewer for a member."""
        await interaction.response.defer()

        if self.wrapped_service is None:
            await interaction.followup.send(embed=ErrorEmbeds.dataset_unavailable())
            return

        view = None
        try:
            record = self.wrapped_service.find_member(member)
            view = WrappedViewerView(
                self.wrapped_service,
                record,
                owner_id=interaction.user.id,
                start_index=card - 1 if card is not None else None,
            )
            view.message = await interaction.followup.send(embed=view.current_embed(), view=view, wait=True)
            logger.info(f"{interaction.user} opened the Wrapped of {record.name}")

        except MemberNotFoundError:
            await interaction.followup.send(embed=ErrorEmbeds.member_not_found(member))
        except WrappedException as e:
            await interaction.followup.send(embed=ErrorEmbeds.command_error(e.user_message))
        except Exception as e:
            logger.error(f"Error in wrapped command: {e}", exc_info=True)
            if view is not None:
                view.stop()
            await interaction.followup.send(embed=ErrorEmbeds.command_error("An error occurred while opening this Wrapped. Please try again later."))

    @app_commands.command(name="wrapped-home", description="Browse the group's Wrapped and find a member")
    @app_commands.describe(search="Filter members by name")
    @rate_limit("wrapped-home", limit=3, window=60)
    async def wrapped_home(
        self,
        interaction: discord.Interaction,
        search: Optional[str] = None
    ):
        """Show the group header and the member directory."""
        await interaction.response.defer()

        if self.wrapped_service is None:
            await interaction.followup.send(embed=ErrorEmbeds.dataset_unavailable())
            return

        try:
            data = self.wrapped_service.data
            members = self.wrapped_service.search_members(search or "")
            view = MemberPaginationView(
                data.top_level,
                members,
                group_name=self.wrapped_service.group_name,
                year_range=Config.YEAR_RANGE,
                search=search or "",
                image_url="attachment://wrapped.png",
            )
            embed = view.current_embed()

            image = await asyncio.to_thread(
                render_group_preview, data.top_level, self.wrapped_service.group_name,
                Config.WRAPPED_YEAR, Config.YEAR_RANGE
            )
            png = await asyncio.to_thread(image_to_png, image)
            file = discord.File(io.BytesIO(png), filename="wrapped.png")

            await interaction.followup.send(embed=embed, file=file, view=view)

        except Exception as e:
            logger.error(f"Error in wrapped-home command: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.command_error("An error occurred while loading the group Wrapped. Please try again later."))

    @app_commands.command(name="wrapped-preview", description="Post the share preview image for a member's Wrapped")
    @app_commands.describe(
        member="Member name (start typing to search)",
        card="Card number to preview (defaults to the first)"
    )
    @rate_limit("wrapped-preview", limit=3, window=60)
    async def wrapped_preview(
        self,
        interaction: discord.Interaction,
        member: str,
        card: Optional[int] = None
    ):
        """Render the 1200x630 preview for one card of a member's Wrapped."""
        await interaction.response.defer()

        if self.wrapped_service is None:
            await interaction.followup.send(embed=ErrorEmbeds.dataset_unavailable())
            return

        try:
            record = self.wrapped_service.find_member(member)
            index = preview_card_index(None if card is None else str(card), len(record.cards))

            image = await asyncio.to_thread(
                render_member_preview, record, index,
                self.wrapped_service.group_name, self.wrapped_service.site_url
            )
            png = await asyncio.to_thread(image_to_png, image)

            title, description = self.wrapped_service.member_metadata(record)
            embed = discord.Embed(
                title=title,
                description=description,
                url=self.wrapped_service.share_url(record, index),
                color=UIConstants.DEFAULT_EMBED_COLOR
            )
            filename = f"{slugify(record.name) or 'member'}-preview.png"
            embed.set_image(url=f"attachment://{filename}")

            await interaction.followup.send(embed=embed, file=discord.File(io.BytesIO(png), filename=filename))

        except MemberNotFoundError:
            await interaction.followup.send(embed=ErrorEmbeds.member_not_found(member))
        except WrappedException as e:
            await interaction.followup.send(embed=ErrorEmbeds.command_error(e.user_message))
        except Exception as e:
            logger.error(f"Error in wrapped-preview command: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.command_error("An error occurred while rendering the preview. Please try again later."))

    @wrapped.autocomplete('member')
    @wrapped_preview.autocomplete('member')
    async def member_autocomplete(
        self,
        interaction: discord.Interaction,
        current: str,
    ) -> list[app_commands.Choice[str]]:
        """Provide member name suggestions, most active first."""
        try:
            if self.wrapped_service is None:
                return []
            return [
                app_commands.Choice(name=record.name, value=record.name)
                for record in self.wrapped_service.search_members(current)
            ][:25]  # Discord limit
        except Exception as e:
            logger.error(f"Error in member autocomplete: {e}")
            return []


async def setup(bot):
    await bot.add_cog(WrappedCog(bot))
