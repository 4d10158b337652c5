"""
Help Commands Cog

Interactive help for the Wrapped bot: how the viewer plays, how sharing
works and where the leaderboards live.

Features:
- /wrapped-help with section buttons
- !wrapped-info prefix summary of the loaded dataset
"""

import discord
from discord.ext import commands
from discord import app_commands

from wrapped_bot.config import Config
from wrapped_bot.constants import ViewerConstants
from wrapped_bot.utils.logger import setup_logger

logger = setup_logger(__name__)

# Help content sections with dynamic placeholders
HELP_CONTENT = {
    "viewer": {
        "title": "🎵 Playing your Wrapped",
        "description": (
            "Open anyone's year in review with:\n"
            "```\n"
            "/wrapped member:{example_member}\n"
            "```\n"
            "Cards advance on their own every **{dwell} seconds**.\n\n"
            "**Controls:**\n"
            "• **◀ Previous** / **Next ▶** step through the cards (they wrap around)\n"
            "• **⏸ Pause** freezes the progress bar; **▶ Resume** carries on where it stopped\n"
            "• Add `card:3` to jump straight to the third card\n\n"
            "Only the person who opened a viewer can press its buttons."
        )
    },
    "sharing": {
        "title": "📤 Sharing a Card",
        "description": (
            "Press **📤 Share** on any card.\n\n"
            "• The viewer pauses while the card image is made\n"
            "• If I can post here, the card is shared to this channel with a link\n"
            "• If I can post but not attach files, only the link is shared\n"
            "• Otherwise the image is sent privately to you with a link to copy\n\n"
            "Playback resumes automatically once sharing finishes.\n\n"
            "Want a link preview instead? Try `/wrapped-preview member:{example_member}`."
        )
    },
    "leaderboards": {
        "title": "🏆 Leaderboards",
        "description": (
            "`/leaderboards` ranks every member of {group_name} by messages, songs shared, "
            "reactions, replies, streaks and platform.\n\n"
            "• Pick a category from the dropdown\n"
            "• Each row shows how close you are to the leader\n"
            "• `/wrapped-home` lists everyone, with a search"
        )
    },
}


class HelpView(discord.ui.View):
    """Interactive help view with navigation buttons"""

    def __init__(self, author, example_member: str, group_name: str):
        super().__init__(timeout=180.0)
        self.author = author
        self.example_member = example_member
        self.group_name = group_name
        self.current_section = "viewer"

    def _get_embed(self, section_key: str) -> discord.Embed:
        """Create embed for the specified section"""
        section = HELP_CONTENT[section_key]

        format_args = {
            "example_member": self.example_member,
            "group_name": self.group_name,
            "dwell": int(ViewerConstants.AUTO_ADVANCE_SECONDS),
        }

        embed = discord.Embed(
            title=section["title"],
            description=section["description"].format(**format_args),
            color=discord.Color.blue()
        )
        embed.set_footer(text=f"Requested by {self.author.display_name} • Use buttons to navigate")

        return embed

    async def _update_embed(self, interaction: discord.Interaction, section_key: str):
        """Update the embed to show the specified section"""
        self.current_section = section_key
        embed = self._get_embed(section_key)

        for child in self.children:
            if isinstance(child, discord.ui.Button):
                button_section = child.custom_id.split(":")[-1] if child.custom_id else ""
                child.disabled = (button_section == section_key)

        try:
            await interaction.response.edit_message(embed=embed, view=self)
        except discord.NotFound:
            logger.debug("Help message was deleted before it could be updated")

    @discord.ui.button(label="🎵 Viewer", style=discord.ButtonStyle.secondary, custom_id="help:viewer")
    async def viewer_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self._update_embed(interaction, "viewer")

    @discord.ui.button(label="📤 Sharing", style=discord.ButtonStyle.secondary, custom_id="help:sharing")
    async def sharing_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self._update_embed(interaction, "sharing")

    @discord.ui.button(label="🏆 Leaderboards", style=discord.ButtonStyle.secondary, custom_id="help:leaderboards")
    async def leaderboards_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self._update_embed(interaction, "leaderboards")

    async def on_timeout(self):
        """Disable all buttons when the view times out"""
        for child in self.children:
            if isinstance(child, discord.ui.Button):
                child.disabled = True


class HelpCommandsCog(commands.Cog):
    """User help commands for the Wrapped viewer"""

    def __init__(self, bot):
        self.bot = bot
        self.logger = logger

    def _example_member(self) -> str:
        service = self.bot.wrapped_service
        if service is None:
            return "Alex"
        members = service.members_by_activity()
        return members[0].name if members else "Alex"

    @app_commands.command(name="wrapped-help", description="How to play, share and compare Wrapped cards")
    async def wrapped_help(self, interaction: discord.Interaction):
        """Display interactive help guide"""
        try:
            help_view = HelpView(interaction.user, self._example_member(), Config.GROUP_NAME)
            embed = help_view._get_embed("viewer")
            help_view.viewer_button.disabled = True

            await interaction.response.send_message(embed=embed, view=help_view, ephemeral=True)

        except Exception as e:
            self.logger.error(f"Error in help command: {e}", exc_info=True)
            error_embed = discord.Embed(
                title="❌ Help System Error",
                description="Unable to load help information. Please try again later.",
                color=discord.Color.red()
            )
            await interaction.response.send_message(embed=error_embed, ephemeral=True)

    @commands.command(name='wrapped-info')
    async def wrapped_info(self, ctx):
        """Summary of the loaded Wrapped dataset"""
        service = self.bot.wrapped_service
        if service is None:
            await ctx.send("❌ The Wrapped data is unavailable right now.")
            return

        top_level = service.data.top_level
        embed = discord.Embed(
            title=f"{Config.GROUP_NAME} Wrapped {Config.WRAPPED_YEAR}",
            description=f"{Config.YEAR_RANGE}\nUse `/wrapped-help` to get started!",
            color=discord.Color.green()
        )
        embed.add_field(name="Members", value=str(len(service.data.members)), inline=True)
        embed.add_field(name="Messages", value=f"{top_level.total_messages:,}", inline=True)
        embed.add_field(name="Songs shared", value=f"{top_level.total_music_links:,}", inline=True)
        embed.add_field(
            name="Quick Commands",
            value="`/wrapped` - Play a member's Wrapped\n"
                  "`/wrapped-home` - Browse everyone\n"
                  "`/leaderboards` - Group rankings",
            inline=False
        )
        await ctx.send(embed=embed)


async def setup(bot):
    """Add the HelpCommandsCog to the bot"""
    await bot.add_cog(HelpCommandsCog(bot))
