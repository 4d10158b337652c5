"""
Discord implementations of the exporter's share targets.

The channel the viewer was opened in is the native share surface; when the
bot may not post there, the image is delivered to the requester as an
ephemeral followup together with a copyable link.
"""

import io
from typing import Optional

import discord

from wrapped_bot.utils.logger import setup_logger

logger = setup_logger(__name__)


class ChannelShareSurface:
    """Posts the shared card into a text channel."""

    def __init__(self, channel: discord.abc.Messageable, can_share_files: bool, sender: str):
        self.channel = channel
        self.can_share_files = can_share_files
        self.sender = sender

    async def share(self, text: str, url: str, filename: Optional[str] = None,
                    image: Optional[bytes] = None) -> None:
        content = f"{self.sender}: {text}\n{url}"
        if filename and image is not None:
            await self.channel.send(content=content, file=discord.File(io.BytesIO(image), filename=filename))
        else:
            await self.channel.send(content=content)


class InteractionDownload:
    """Sends the image privately to whoever pressed Share."""

    def __init__(self, interaction: discord.Interaction):
        self.interaction = interaction

    async def download(self, filename: str, image: bytes) -> None:
        await self.interaction.followup.send(
            "📥 Here's your card. Save it and share it anywhere!",
            file=discord.File(io.BytesIO(image), filename=filename),
            ephemeral=True,
        )


class EphemeralLinkCopier:
    """Shows the link in a private message so it can be copied."""

    def __init__(self, interaction: discord.Interaction):
        self.interaction = interaction

    async def copy_link(self, url: str) -> None:
        await self.interaction.followup.send(f"🔗 Copy this link: {url}", ephemeral=True)


def share_surface_for(interaction: discord.Interaction) -> Optional[ChannelShareSurface]:
    """Channel surface when the bot may post in the interaction's channel, else None."""
    channel = interaction.channel
    if channel is None or interaction.guild is None:
        return None

    permissions = channel.permissions_for(interaction.guild.me)
    if not permissions.send_messages:
        logger.debug(f"No send permission in channel {channel.id}; falling back to download")
        return None

    return ChannelShareSurface(
        channel,
        can_share_files=permissions.attach_files,
        sender=interaction.user.mention,
    )
