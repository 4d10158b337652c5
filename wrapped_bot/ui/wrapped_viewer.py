"""
Wrapped Viewer View

Interactive message that plays a member's card deck. The embed is redrawn
whenever the sequencer transitions and, while playing, every
Config.VIEWER_REFRESH_SECONDS so the progress bar moves.
"""

import asyncio
from typing import Optional

import discord

from wrapped_bot.config import Config
from wrapped_bot.data_models.wrapped import MemberRecord
from wrapped_bot.rendering.card_image import image_to_png, render_card_image
from wrapped_bot.ui.exporter import ShareExporter, ShareFailure, ShareMethod, share_filename
from wrapped_bot.ui.scheduler import ViewerHandle, mount
from wrapped_bot.ui.sequencer import ViewerState
from wrapped_bot.ui.share_targets import EphemeralLinkCopier, InteractionDownload, share_surface_for
from wrapped_bot.utils.embeds import build_card_embed
from wrapped_bot.utils.error_embeds import ErrorEmbeds
from wrapped_bot.utils.logger import setup_logger

logger = setup_logger(__name__)


class WrappedViewerView(discord.ui.View):
    """
    Story-style player for one member's Wrapped.

    Previous / Pause / Next map onto the sequencer's retreat, toggle and
    advance; Share runs the exporter against the card on screen. Only the
    member who opened the viewer can drive it.
    """

    def __init__(
        self,
        wrapped_service,
        member: MemberRecord,
        owner_id: int,
        start_index: Optional[int] = None,
        *,
        timeout: float = Config.VIEWER_TIMEOUT_SECONDS,
        refresh_interval: float = Config.VIEWER_REFRESH_SECONDS,
    ):
        """
        Initialize and mount the viewer.

        Must be constructed inside a running event loop.

        Args:
            wrapped_service: WrappedDataService for the dataset and share links
            member: Member whose cards are played
            owner_id: Discord user id allowed to press the buttons
            start_index: First card to show, clamped into range
            timeout: Seconds of inactivity before the viewer stops
            refresh_interval: Minimum seconds between progress redraws
        """
        super().__init__(timeout=timeout)
        self.wrapped_service = wrapped_service
        self.member = member
        self.owner_id = owner_id
        self.message: Optional[discord.Message] = None
        self._edit_lock = asyncio.Lock()

        self.handle: ViewerHandle = mount(
            member.cards,
            start_index,
            refresh_interval=refresh_interval,
            on_refresh=self._refresh,
        )
        self._sync_buttons(self.handle.state)

    # Rendering

    def current_embed(self, state: Optional[ViewerState] = None) -> discord.Embed:
        state = state or self.handle.state
        return build_card_embed(
            self.member.cards[state.current_index],
            self.member,
            state,
            self.wrapped_service.data,
            self.wrapped_service.group_name,
            share_url=self.wrapped_service.share_url(self.member, state.current_index),
        )

    def _sync_buttons(self, state: ViewerState):
        self.pause_button.label = "▶ Resume" if state.is_paused else "⏸ Pause"
        self.pause_button.style = discord.ButtonStyle.success if state.is_paused else discord.ButtonStyle.secondary
        self.share_button.disabled = state.is_sharing

    async def _refresh(self, state: ViewerState):
        if self.message is None or self.is_finished():
            return
        async with self._edit_lock:
            self._sync_buttons(state)
            try:
                await self.message.edit(embed=self.current_embed(state), view=self)
            except discord.NotFound:
                logger.info(f"Viewer message for {self.member.name} was deleted; stopping viewer")
                self.stop()
            except discord.HTTPException as e:
                logger.warning(f"Failed to refresh viewer for {self.member.name}: {e}")

    # Controls

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.owner_id:
            await interaction.response.send_message(embed=ErrorEmbeds.not_viewer_owner(), ephemeral=True)
            return False
        return True

    @discord.ui.button(label="◀ Previous", style=discord.ButtonStyle.primary)
    async def previous_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.defer()
        self.handle.retreat()

    @discord.ui.button(label="⏸ Pause", style=discord.ButtonStyle.secondary)
    async def pause_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.defer()
        self.handle.toggle_pause()

    @discord.ui.button(label="Next ▶", style=discord.ButtonStyle.primary)
    async def next_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.defer()
        self.handle.advance()

    @discord.ui.button(label="📤 Share", style=discord.ButtonStyle.success)
    async def share_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.defer(ephemeral=True, thinking=True)

        if self.handle.state.is_sharing:
            await interaction.followup.send("⏳ This card is already being shared.", ephemeral=True)
            return

        exporter = ShareExporter(
            self.handle.sequencer,
            capture=self._capture,
            share_text=f"Check out my {self.wrapped_service.group_name} Wrapped!",
            share_url=lambda index: self.wrapped_service.share_url(self.member, index),
            filename=lambda index: share_filename(self.member.name, index),
            share_surface=share_surface_for(interaction),
            downloader=InteractionDownload(interaction),
            link_copier=EphemeralLinkCopier(interaction),
        )
        result = await exporter.export_current_card(f"card-{self.handle.state.current_index}")

        if isinstance(result, ShareFailure):
            await interaction.followup.send(embed=ErrorEmbeds.share_failed(result.user_message), ephemeral=True)
        elif result.method is not ShareMethod.DOWNLOADED:
            await interaction.followup.send("✅ Shared to the channel!", ephemeral=True)

    def _capture(self, index: int) -> bytes:
        """Render one card to PNG. Runs in a worker thread."""
        image = render_card_image(
            self.member.cards[index],
            self.member.name,
            index,
            len(self.member.cards),
            self.wrapped_service.group_name,
        )
        return image_to_png(image)

    # Lifecycle

    def stop(self):
        self.handle.dispose()
        super().stop()

    async def on_timeout(self):
        """Called when the view times out"""
        self.handle.dispose()
        for item in self.children:
            item.disabled = True

        if self.message is not None:
            try:
                await self.message.edit(view=self)
            except discord.HTTPException as e:
                logger.debug(f"Could not disable expired viewer: {e}")

        logger.debug(f"WrappedViewerView for {self.member.name} timed out")
