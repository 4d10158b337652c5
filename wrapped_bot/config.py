import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Bot configuration settings"""

    # Discord settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
    DISCORD_GUILD_ID = int(os.getenv('DISCORD_GUILD_ID', 0))
    DISCORD_GUILD_IDS = os.getenv('DISCORD_GUILD_IDS', '')  # Comma-separated for multi-guild support
    OWNER_DISCORD_ID = int(os.getenv('OWNER_DISCORD_ID', 0))

    # Bot settings
    COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', '!')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', '')  # Overrides the DEBUG-derived level, e.g. WARNING
    LOG_DIR = os.getenv('LOG_DIR', 'logs')  # Empty disables the file log

    # Wrapped dataset (precomputed offline)
    WRAPPED_DATA_PATH = os.getenv('WRAPPED_DATA_PATH', 'data/wrapped.json')
    GROUP_NAME = os.getenv('GROUP_NAME', 'Music Rec')
    WRAPPED_YEAR = int(os.getenv('WRAPPED_YEAR', 2025))
    YEAR_RANGE = os.getenv('YEAR_RANGE', '2016 - 2025')
    SITE_URL = os.getenv('SITE_URL', 'https://music-rec-wrapped.vercel.app')

    # Viewer settings
    VIEWER_REFRESH_SECONDS = float(os.getenv('VIEWER_REFRESH_SECONDS', 5))  # Discord edit throttle
    VIEWER_TIMEOUT_SECONDS = int(os.getenv('VIEWER_TIMEOUT_SECONDS', 900))

    @classmethod
    def get_guild_ids(cls):
        """Get list of guild IDs for command syncing"""
        if cls.DISCORD_GUILD_IDS:
            # Multi-guild support: comma-separated IDs
            try:
                return [int(guild_id.strip()) for guild_id in cls.DISCORD_GUILD_IDS.split(',') if guild_id.strip()]
            except ValueError:
                raise ValueError("DISCORD_GUILD_IDS must be comma-separated integers")
        elif cls.DISCORD_GUILD_ID:
            return [cls.DISCORD_GUILD_ID]
        else:
            # Global sync
            return []

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if not cls.WRAPPED_DATA_PATH:
            raise ValueError("WRAPPED_DATA_PATH is required")
        if cls.VIEWER_REFRESH_SECONDS <= 0:
            raise ValueError("VIEWER_REFRESH_SECONDS must be positive")
