"""Tests for text formatting, commentary and Discord embeds."""

import asyncio
from dataclasses import replace

import pytest

from wrapped_bot.data_models.cards import MvpCard
from wrapped_bot.data_models.leaderboard import Leaderboard, LeaderboardEntry
from wrapped_bot.ui.member_pagination import MemberPaginationView
from wrapped_bot.ui.sequencer import ViewerState
from wrapped_bot.utils.commentary import card_commentary, commentary_for
from wrapped_bot.utils.embeds import (
    build_card_embed,
    build_home_embed,
    build_leaderboard_embed,
    leaderboard_panel,
)
from wrapped_bot.utils.formatting import initials, progress_bar, progress_segments, truncate


def state(index=0, count=7, paused=False, progress=0.0, sharing=False):
    return ViewerState(index, count, paused, progress, sharing)


class TestFormatting:

    def test_progress_segments(self):
        assert progress_segments(2, 5) == "▰▰▰▱▱"

    def test_progress_bar_bounds(self):
        assert progress_bar(0.5, width=10) == "█████░░░░░"
        assert progress_bar(2.0, width=4) == "████"
        assert progress_bar(-1.0, width=4) == "░░░░"

    def test_initials_and_truncate(self):
        assert initials("alex rivera") == "AR"
        assert initials("Jordan") == "J"
        assert truncate("abcdef", 4) == "abc…"
        assert truncate("abc", 4) == "abc"


class TestCommentary:

    def test_thresholds(self, wrapped_data):
        alex = wrapped_data.members["Alex Rivera"]
        jordan = wrapped_data.members["Jordan"]
        assert commentary_for(alex, "messages").startswith("That's 60.0%")
        assert commentary_for(jordan, "messages") == "10.0% of all messages. The conversation leans on you."

    def test_unknown_metric(self, wrapped_data):
        with pytest.raises(ValueError):
            commentary_for(wrapped_data.members["Jordan"], "vibes")

    def test_card_commentary(self, wrapped_data):
        sam = wrapped_data.members["Sam Lee"]
        assert "reactions" in card_commentary(sam.cards[1], sam)
        assert "reactions" in card_commentary(sam.cards[2], sam)
        mvp = MvpCard("MVP", "👑", (2025,), "x")
        assert card_commentary(mvp, sam) is None


class TestEmbeds:

    def test_card_embed(self, service):
        alex = service.find_member("alex-rivera")
        embed = build_card_embed(alex.cards[0], alex, state(progress=0.25), service.data, "Music Rec",
                                 share_url=service.share_url(alex, 0))

        assert embed.title == "🎵 Your year in Music Rec"
        assert "Hey Alex!" in embed.description
        assert embed.footer.text == "1 / 7"
        assert embed.url.endswith("?card=1")
        assert "▰▱▱▱▱▱▱" in embed.fields[-1].value
        assert "25%" in embed.fields[-1].value

    def test_paused_marker(self, service):
        alex = service.find_member("alex-rivera")
        embed = build_card_embed(alex.cards[1], alex, state(1, paused=True), service.data, "Music Rec")
        assert "⏸️" in embed.fields[-1].value

    def test_highlight_card_has_leaderboard_panel(self, service):
        alex = service.find_member("alex-rivera")
        embed = build_card_embed(alex.cards[5], alex, state(5), service.data, "Music Rec")
        assert embed.fields[0].name == "🏆 Messages sent"
        assert "Alex Rivera" in embed.fields[0].value

    def test_panel_keeps_own_row_inside_top(self, wrapped_data):
        panel = leaderboard_panel(wrapped_data.leaderboards["messages"], "Jordan")
        assert panel.count("\n") == 4  # fence, three rows, fence
        assert "▶3" in panel

    def test_panel_appends_own_row_outside_top(self, wrapped_data):
        meta = wrapped_data.leaderboards["messages"].meta
        entries = tuple(LeaderboardEntry(f"M{i}", 100 - i, i) for i in range(1, 7))
        panel = leaderboard_panel(Leaderboard(meta, entries), "M6")
        assert panel.count("\n") == 5
        assert "▶6" in panel
        assert "M4" not in panel

    def test_leaderboard_embed(self, service):
        embed = build_leaderboard_embed(service.get_page("messages"))
        assert "100%" in embed.description and "17%" in embed.description
        assert embed.footer.text == "Page 1/1 | Total Members: 3"

    def test_empty_leaderboard_embed(self, service):
        embed = build_leaderboard_embed(service.get_page("youtube"))
        assert "empty" in embed.description

    def test_home_embed(self, service):
        members = service.search_members("")
        embed = build_home_embed(service.data.top_level, members, 1, 1, "Music Rec", "2016 - 2025", search="a")
        assert embed.title == "Music Rec Wrapped"
        assert "Alex Rivera" in embed.fields[-1].value
        assert "Search: a" in embed.footer.text

    def test_home_embed_no_results(self, service):
        embed = build_home_embed(service.data.top_level, [], 1, 1, "Music Rec", "2016 - 2025")
        assert "No users found" in embed.fields[-1].value

    def test_home_embed_truncates_long_names(self, service):
        alex = service.find_member("alex-rivera")
        members = [replace(alex, name=f"{i} " + "x" * 200) for i in range(10)]
        embed = build_home_embed(service.data.top_level, members, 1, 1, "Music Rec", "2016 - 2025")

        assert len(embed.fields[-1].value) <= 1024
        assert "x" * 40 not in embed.fields[-1].value


class TestMemberPagination:

    def test_preview_image_kept_when_paging(self, service):
        async def scenario():
            members = service.search_members("") * 5
            view = MemberPaginationView(
                service.data.top_level, members, "Music Rec", "2016 - 2025",
                per_page=10, image_url="attachment://wrapped.png",
            )
            first = view.current_embed()
            view.current_page = 1
            return first, view.current_embed()

        first, second = asyncio.run(scenario())
        assert first.image.url == second.image.url == "attachment://wrapped.png"
        assert second.footer.text.startswith("Page 2/2")

    def test_no_image_by_default(self, service):
        async def scenario():
            view = MemberPaginationView(service.data.top_level, service.search_members(""), "Music Rec", "2016 - 2025")
            return view.current_embed()

        assert asyncio.run(scenario()).image.url is None
