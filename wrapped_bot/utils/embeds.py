"""
Shared embed utilities for the Wrapped bot.

Every embed here is a pure function of the dataset objects and viewer state
it is given, so cogs and views can rebuild them on each refresh.
"""

import discord
from typing import List, Optional

from wrapped_bot.constants import PaginationConstants, UIConstants
from wrapped_bot.data_models.cards import (
    Card,
    IntroCard,
    LeaderboardHighlightCard,
    MvpCard,
    OutroCard,
    PlatformCard,
    StatCard,
    TimelineCard,
)
from wrapped_bot.data_models.leaderboard import Leaderboard, LeaderboardPage
from wrapped_bot.data_models.wrapped import MemberRecord, TopLevel, WrappedData
from wrapped_bot.rendering.palette import embed_color
from wrapped_bot.ui.sequencer import ViewerState
from wrapped_bot.utils.commentary import card_commentary
from wrapped_bot.utils.formatting import initials, progress_bar, progress_segments, truncate


def _card_body(card: Card, member: MemberRecord) -> List[str]:
    """Description lines for a card, mirroring the web card layouts."""
    if isinstance(card, IntroCard):
        lines = [
            f"Hey {member.first_name}!",
            "",
            f"# {card.stat:,}",
            f"**{card.stat_label}**",
            card.subtitle,
        ]
        if card.rank:
            lines.append(f"`#{card.rank} of {card.total_users} members`")
        return lines

    if isinstance(card, StatCard):
        lines = [f"# {card.stat:,}", f"**{card.stat_label}**", card.subtitle]
        if card.rank and card.rank <= PaginationConstants.RANK_BADGE_LIMIT:
            lines.append(f"`#{card.rank} in the group`")
        return lines

    if isinstance(card, PlatformCard):
        lines = [f"# {card.platform}"]
        if card.share_percent is not None:
            lines.append(f"**{card.count} links**")
            lines.append(f"{card.share_percent}% of your shares")
        return lines

    if isinstance(card, MvpCard):
        return ["  ".join(f"`{year}`" for year in card.years), "", card.subtitle]

    if isinstance(card, TimelineCard):
        return [
            f"# {card.years_count} years",
            "of sharing music",
            "",
            " ─ ".join("●" for _ in card.years),
            f"{card.first_year} → {card.last_year}",
        ]

    if isinstance(card, LeaderboardHighlightCard):
        return [f"# #{card.rank}", f"**{card.board_name}**", f"{card.value:,} total"]

    if isinstance(card, OutroCard):
        return [
            "Here's to another year of great music",
            "",
            f"**{card.messages:,}** messages · **{card.links:,}** songs · **{card.reactions:,}** reactions",
        ]

    raise TypeError(f"Unsupported card type: {type(card).__name__}")


def leaderboard_panel(board: Leaderboard, member_name: str) -> str:
    """Top rows of a board plus the member's own row when outside them."""
    top = board.top(PaginationConstants.HIGHLIGHT_PANEL_SIZE)
    rows = list(top)
    own = board.entry_for(member_name)
    if own is not None and own not in rows:
        rows.append(own)

    lines = ["```"]
    for entry in rows:
        marker = "▶" if entry.name == member_name else " "
        lines.append(f"{marker}{entry.rank:<3} {truncate(entry.name, 16):<17} {entry.value:>7,}")
    lines.append("```")
    return "\n".join(lines)


def build_card_embed(
    card: Card,
    member: MemberRecord,
    state: ViewerState,
    data: WrappedData,
    group_name: str,
    share_url: Optional[str] = None,
) -> discord.Embed:
    """
    Build the embed for the card currently shown in a viewer.

    Args:
        card: Card at ``state.current_index``
        member: Owner of the deck
        state: Viewer snapshot (index, progress, paused, sharing)
        data: Dataset, for leaderboard panels
        group_name: Group chat display name
        share_url: Link to this card, shown as the embed URL

    Returns:
        Embed ready to be sent or edited into the viewer message
    """
    emoji = getattr(card, "emoji", None) or UIConstants.MUSIC_EMOJI
    embed = discord.Embed(
        title=f"{emoji} {card.title}",
        description="\n".join(_card_body(card, member)),
        color=embed_color(card, state.current_index),
        url=share_url,
    )
    embed.set_author(name=f"{member.name}'s {group_name} Wrapped")

    if isinstance(card, LeaderboardHighlightCard):
        board = data.leaderboard_for_board_name(card.board_name)
        if board is not None and board.entries:
            embed.add_field(name=f"{UIConstants.TROPHY_EMOJI} {board.meta.title}",
                            value=leaderboard_panel(board, member.name), inline=False)

    comment = card_commentary(card, member)
    if comment:
        embed.add_field(name="​", value=f"*{comment}*", inline=False)

    status = UIConstants.PAUSED_EMOJI if state.is_paused else UIConstants.PLAYING_EMOJI
    if state.is_sharing:
        status = "📤"
    embed.add_field(
        name="​",
        value=(
            f"{progress_segments(state.current_index, state.card_count)}\n"
            f"{status} `{progress_bar(state.progress)}` {int(state.progress * 100)}%"
        ),
        inline=False,
    )
    embed.set_footer(text=f"{state.current_index + 1} / {state.card_count}")
    return embed


def build_leaderboard_embed(page: LeaderboardPage) -> discord.Embed:
    """Leaderboard page with a percent-of-peak column."""
    board = page.leaderboard
    embed = discord.Embed(
        title=f"{UIConstants.TROPHY_EMOJI} {board.meta.title}",
        description=board.meta.description,
        color=board.meta.color,
    )

    if not page.entries:
        embed.description += "\n\nThe leaderboard is empty for this category."
        return embed

    lines = ["```", f"{'#':<4} {'Member':<18} {board.meta.metric_label.title():>9} {'Peak':>5}", "-" * 40]
    for entry in page.entries:
        lines.append(
            f"{entry.rank:<4} {truncate(entry.name, 18):<18} {entry.value:>9,} {board.percent_of_peak(entry):>4}%"
        )
    lines.append("```")
    embed.description += "\n" + "\n".join(lines)

    embed.set_footer(
        text=f"Page {page.current_page}/{page.total_pages} | Total Members: {page.total_members}"
    )
    return embed


def build_home_embed(
    top_level: TopLevel,
    members: List[MemberRecord],
    page: int,
    total_pages: int,
    group_name: str,
    year_range: str,
    search: str = "",
) -> discord.Embed:
    """Group header plus one page of the member directory."""
    embed = discord.Embed(
        title=f"{group_name} Wrapped",
        description=f"{year_range} • {top_level.total_messages:,} messages",
        color=UIConstants.DEFAULT_EMBED_COLOR,
    )
    embed.add_field(name="Songs shared", value=f"{top_level.total_music_links:,}", inline=True)
    embed.add_field(name="Reactions", value=f"{top_level.total_reactions:,}", inline=True)

    if not members:
        embed.add_field(name="Choose your Wrapped", value="No users found. Try a different name.", inline=False)
    else:
        value = "\n".join(
            f"`{initials(member.name):<2}` **{truncate(member.name, PaginationConstants.DIRECTORY_NAME_LENGTH)}** — {member.messages} messages • {member.music_links} songs"
            for member in members
        )
        embed.add_field(name="Choose your Wrapped", value=value, inline=False)

    footer = f"Page {page}/{total_pages}"
    if search:
        footer += f" | Search: {search}"
    embed.set_footer(text=footer + " | Use /wrapped to open one")
    return embed
