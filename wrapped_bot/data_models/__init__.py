"""
Data models for the Wrapped bot.

Immutable data transfer objects for the precomputed dataset: cards,
leaderboards, members and group aggregates.
"""
