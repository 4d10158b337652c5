import asyncio
import logging
import traceback
from typing import Optional

import discord
from discord.ext import commands
from discord import app_commands

from wrapped_bot.config import Config
from wrapped_bot.services.dataset import WrappedDataService, load_wrapped_data
from wrapped_bot.services.rate_limiter import SimpleRateLimiter
from wrapped_bot.utils.exceptions import DatasetError
from wrapped_bot.utils.logger import setup_logger

class WrappedBot(commands.Bot):
    def __init__(self):
        intents = discord.Intents.default()
        intents.message_content = True
        intents.guilds = True

        super().__init__(
            command_prefix=Config.COMMAND_PREFIX,
            intents=intents,
            help_command=None
        )

        # Attach app command error handler
        self.tree.on_error = self.on_app_command_error

        self.wrapped_service: Optional[WrappedDataService] = None
        self.rate_limiter = SimpleRateLimiter()
        self.logger = setup_logger(__name__)

    async def setup_hook(self):
        """Called when the bot is starting up"""
        self.logger.info("Setting up Wrapped Bot...")

        # Load the precomputed dataset once; commands report it unavailable on failure
        try:
            data = await asyncio.to_thread(load_wrapped_data, Config.WRAPPED_DATA_PATH)
            self.wrapped_service = WrappedDataService(data, Config.SITE_URL, Config.GROUP_NAME)
        except DatasetError as e:
            self.logger.error(f"Wrapped dataset unavailable: {e}")

        await self.load_cogs()
        await self._sync_commands()

        self.logger.info("Wrapped Bot setup complete!")

    async def load_cogs(self):
        """Load all cogs"""
        cogs_to_load = [
            'wrapped_bot.cogs.wrapped',
            'wrapped_bot.cogs.leaderboards',
            'wrapped_bot.cogs.help_commands'
        ]

        for cog in cogs_to_load:
            try:
                await self.load_extension(cog)
                self.logger.info(f"Loaded cog: {cog}")
            except Exception as e:
                self.logger.error(f"Failed to load cog {cog}: {e}", exc_info=True)

    async def _sync_commands(self):
        """Sync slash commands with Discord"""
        if not self.tree.get_commands():
            self.logger.warning("No application commands found to sync. Check for cog loading errors.")
            return

        try:
            guild_ids = Config.get_guild_ids()

            if guild_ids:
                # Guild-specific sync (instant updates, works in specified servers)
                self.logger.info(f"Attempting to sync commands to {len(guild_ids)} guild(s): {guild_ids}...")

                total_synced = 0
                for guild_id in guild_ids:
                    try:
                        guild = discord.Object(id=guild_id)
                        self.tree.copy_global_to(guild=guild)
                        synced = await self.tree.sync(guild=guild)
                        self.logger.info(f"Successfully synced {len(synced)} command(s) to guild {guild_id}")
                        total_synced += len(synced)
                    except discord.errors.Forbidden:
                        self.logger.error(f"Permission error syncing to guild {guild_id}. Ensure the bot has the 'application.commands' scope and is in the guild.", exc_info=True)
                    except discord.errors.HTTPException as e:
                        self.logger.error(f"HTTP error syncing to guild {guild_id}. Status: {e.status}, Response: {e.text}", exc_info=True)

                self.logger.info(f"Multi-guild sync complete: {total_synced} total command instances deployed")
            else:
                # Global sync (can take up to 1 hour, works everywhere)
                self.logger.info("Attempting to sync commands globally... (Note: This can take up to an hour to propagate)")
                synced = await self.tree.sync()
                self.logger.info(f"Successfully synced {len(synced)} command(s) globally")
                for cmd in synced:
                    self.logger.info(f"  - {cmd.name}: {cmd.description}")
        except Exception as e:
            self.logger.error(f"Failed to sync commands: {e}", exc_info=True)
            # Don't raise - prefix commands still work

    async def on_ready(self):
        """Called when the bot is ready"""
        self.logger.info(f'{self.user} has connected to Discord!')
        self.logger.info(f'Bot is in {len(self.guilds)} guilds')

        await self.change_presence(
            activity=discord.Game(name=f"{Config.GROUP_NAME} Wrapped | /wrapped-help")
        )

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global error handler for slash commands"""
        command_name = interaction.command.name if interaction.command else 'Unknown'
        if isinstance(error, app_commands.CheckFailure):
            self.logger.info(f"Check failed for command '{command_name}' by user {interaction.user}")
        else:
            self.logger.error(f"Error in app command '{command_name}': {error}", exc_info=True)

        if isinstance(error, app_commands.CommandOnCooldown):
            error_message = f"❌ Command is on cooldown. Try again in {error.retry_after:.2f} seconds."
        elif isinstance(error, app_commands.BotMissingPermissions):
            error_message = "❌ I don't have the required permissions to execute this command."
        elif isinstance(error, app_commands.CheckFailure):
            error_message = "❌ Permission Denied\n\nYou don't have the required permissions to use this command."
        else:
            error_message = "❌ An unexpected error occurred while processing your command. The developers have been notified."

        try:
            error_embed = discord.Embed(
                title=error_message.split('\n')[0],
                description='\n'.join(error_message.split('\n')[1:]) if '\n' in error_message else None,
                color=discord.Color.red()
            )

            if interaction.response.is_done():
                await interaction.followup.send(embed=error_embed, ephemeral=True)
            else:
                await interaction.response.send_message(embed=error_embed, ephemeral=True)
        except Exception as e:
            self.logger.error(f"Failed to send error response: {e}")

    async def on_command_error(self, ctx: commands.Context, error: Exception):
        """Global error handler for commands"""
        if isinstance(error, commands.CommandNotFound):
            return

        if isinstance(error, commands.CheckFailure):
            self.logger.info(f"Check failed for command '{ctx.command.name if ctx.command else 'Unknown'}' by user {ctx.author}")
            await ctx.send("❌ You don't have permission to use this command.")
            return

        if isinstance(error, commands.CommandOnCooldown):
            await ctx.send(f"❌ Command is on cooldown. Try again in {error.retry_after:.2f} seconds.")
            return

        if isinstance(error, commands.MissingRequiredArgument):
            await ctx.send(f"❌ Missing required argument: `{error.param.name}`")
            return

        self.logger.error(f"Unexpected error in command {ctx.command}: {error}")
        self.logger.error(''.join(traceback.format_exception(type(error), error, error.__traceback__)))

        embed = discord.Embed(
            title="❌ An error occurred",
            description="An unexpected error occurred while processing your command. The developers have been notified.",
            color=discord.Color.red()
        )
        await ctx.send(embed=embed)

    async def close(self):
        """Cleanup when bot is shutting down"""
        self.logger.info("Shutting down Wrapped Bot...")
        await super().close()

async def main():
    """Main entry point"""
    Config.validate()

    bot = WrappedBot()

    try:
        await bot.start(Config.DISCORD_TOKEN)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        traceback.print_exc()
    finally:
        await bot.close()

def run():
    """Console script entry point"""
    asyncio.run(main())

if __name__ == "__main__":
    run()
