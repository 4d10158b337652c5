"""
Services package for the Wrapped bot.
"""

from .dataset import WrappedDataService, load_wrapped_data, slugify
from .rate_limiter import SimpleRateLimiter

__all__ = ['WrappedDataService', 'SimpleRateLimiter', 'load_wrapped_data', 'slugify']
