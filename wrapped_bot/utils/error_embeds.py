"""
Centralized error embeds for consistent error handling across the Wrapped bot.

Provides standardized error messages so every command and view reports
problems the same way.
"""

import math
from typing import Optional

import discord


class ErrorEmbeds:
    """Centralized error embed factory for consistent error handling."""

    @staticmethod
    def member_not_found(name: str) -> discord.Embed:
        """Create embed for when no member matches a name or slug."""
        return discord.Embed(
            title="Member Not Found",
            description=f"No Wrapped found for **{name}**.\n\nUse `/wrapped-home` to browse everyone.",
            color=discord.Color.red()
        )

    @staticmethod
    def dataset_unavailable() -> discord.Embed:
        """Create embed for when the dataset failed to load."""
        return discord.Embed(
            title="Wrapped Unavailable",
            description="The Wrapped data couldn't be loaded. Please contact an administrator.",
            color=discord.Color.red()
        )

    @staticmethod
    def command_error(error: str) -> discord.Embed:
        """Create embed for general command errors."""
        return discord.Embed(
            title="Command Error",
            description=f"An error occurred: {error}\n\nPlease try again or contact an administrator.",
            color=discord.Color.red()
        )

    @staticmethod
    def invalid_input(message: str) -> discord.Embed:
        """Create embed for invalid user input."""
        return discord.Embed(
            title="Invalid Input",
            description=message,
            color=discord.Color.red()
        )

    @staticmethod
    def rate_limited(command: str, retry_after: Optional[float] = None) -> discord.Embed:
        """Create embed for rate limiting errors."""
        wait = f"in {math.ceil(retry_after)}s" if retry_after else "in a moment"
        return discord.Embed(
            title="Rate Limited",
            description=f"You're using `/{command}` too quickly. Please try again {wait}.",
            color=discord.Color.orange()
        )

    @staticmethod
    def share_failed(reason: str) -> discord.Embed:
        return discord.Embed(
            title="Share Failed",
            description=f"{reason}\n\nThe viewer has resumed; you can try sharing again.",
            color=discord.Color.orange()
        )

    @staticmethod
    def not_viewer_owner() -> discord.Embed:
        """Create embed for someone pressing another member's viewer buttons."""
        return discord.Embed(
            title="Not Your Wrapped",
            description="Only the person who opened this Wrapped can control it.\n\nUse `/wrapped` to open your own!",
            color=discord.Color.orange()
        )
