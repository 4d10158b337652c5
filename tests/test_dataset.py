"""Tests for card parsing, dataset loading and the dataset service."""

import json

import pytest

from wrapped_bot.data_models.cards import (
    CardKind,
    IntroCard,
    LeaderboardHighlightCard,
    MvpCard,
    PlatformCard,
    parse_card,
)
from wrapped_bot.data_models.leaderboard import LeaderboardEntry
from wrapped_bot.data_models.wrapped import WrappedData
from wrapped_bot.services.dataset import load_wrapped_data, slugify
from wrapped_bot.utils.exceptions import DatasetError, MemberNotFoundError


class TestParseCard:

    def test_each_kind_maps_to_its_variant(self, wrapped_data):
        cards = wrapped_data.members["Alex Rivera"].cards
        assert [card.kind for card in cards] == [
            CardKind.INTRO, CardKind.STAT, CardKind.PLATFORM, CardKind.MVP,
            CardKind.TIMELINE, CardKind.LEADERBOARD_HIGHLIGHT, CardKind.OUTRO,
        ]

    def test_unknown_kind_rejected(self):
        with pytest.raises(DatasetError, match="unknown card type"):
            parse_card({"type": "bonus", "title": "?"})

    def test_missing_required_field_rejected(self):
        with pytest.raises(DatasetError, match="missing stat_label"):
            parse_card({"type": "intro", "title": "Hi", "stat": 3, "subtitle": "x"})

    def test_optional_fields_default_and_extras_ignored(self):
        card = parse_card({
            "type": "intro", "title": "Hi", "stat": 3, "stat_label": "messages",
            "subtitle": "x", "platform": "ignored",
        })
        assert isinstance(card, IntroCard)
        assert card.rank is None and card.total_users is None

    def test_years_become_int_tuple(self):
        card = parse_card({"type": "mvp", "title": "MVP", "emoji": "👑",
                           "years": ["2024", 2025], "subtitle": "x"})
        assert isinstance(card, MvpCard)
        assert card.years == (2024, 2025)

    def test_platform_share_percent(self):
        card = PlatformCard("Fav", "📱", "Spotify", count=180, total_links=250)
        assert card.share_percent == 72
        assert PlatformCard("Fav", "📱", "Spotify").share_percent is None

    def test_headline(self):
        card = LeaderboardHighlightCard("Top", "🏆", 2, "Messages sent", 400)
        assert card.headline == (2, "Messages sent")


class TestLoading:

    def test_loads_members_and_boards(self, wrapped_data):
        assert set(wrapped_data.members) == {"Alex Rivera", "Sam Lee", "Jordan"}
        assert len(wrapped_data.leaderboards) == 9
        assert wrapped_data.top_level.total_messages == 1500
        assert wrapped_data.yearly_mvps["2025"] == ("Alex Rivera", 520)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetError, match="not found"):
            load_wrapped_data(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DatasetError, match="not valid JSON"):
            load_wrapped_data(path)

    def test_member_without_cards_rejected(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"users": {"Ghost": {"messages": 1, "music_links": 0, "cards": []}}}))
        with pytest.raises(DatasetError, match="no cards"):
            load_wrapped_data(path)

    def test_malformed_leaderboard_rows_rejected(self):
        with pytest.raises(DatasetError, match="messages"):
            WrappedData.from_dict({"leaderboards": {"messages": [["only name"]]}})

    def test_top_level_must_be_object(self):
        with pytest.raises(DatasetError):
            WrappedData.from_dict([])


class TestLeaderboards:

    def test_percent_of_peak(self, wrapped_data):
        board = wrapped_data.leaderboards["messages"]
        assert [board.percent_of_peak(e) for e in board.entries] == [100, 50, 17]

    def test_percent_of_peak_with_zero_peak(self, wrapped_data):
        board = wrapped_data.leaderboards["youtube"]
        assert board.peak_value == 0
        assert board.percent_of_peak(LeaderboardEntry("x", 0, 1)) == 0

    def test_ties_share_rank(self, wrapped_data):
        ranks = [e.rank for e in wrapped_data.leaderboards["replies_received"].entries]
        assert ranks == [1, 1, 3]

    @pytest.mark.parametrize("board_name, key", [
        ("Messages sent", "messages"),
        ("reactions_received", "reactions_received"),
        ("music links", "music_links"),
    ])
    def test_leaderboard_for_board_name(self, wrapped_data, board_name, key):
        assert wrapped_data.leaderboard_for_board_name(board_name).meta.key == key

    def test_unknown_board_name(self, wrapped_data):
        assert wrapped_data.leaderboard_for_board_name("Vibes") is None


class TestService:

    @pytest.mark.parametrize("name, slug", [
        ("Alex Rivera", "alex-rivera"),
        ("  Sam   Lee ", "-sam-lee-"),
        ("Zoë O'Brien", "zo-obrien"),
    ])
    def test_slugify(self, name, slug):
        assert slugify(name) == slug

    def test_find_member_by_name_or_slug(self, service):
        for record in service.data.members.values():
            assert service.find_member(slugify(record.name)) is record
            assert service.find_member(record.name) is record

    def test_find_unknown_member(self, service):
        with pytest.raises(MemberNotFoundError):
            service.find_member("nobody")

    def test_members_by_activity(self, service):
        assert [m.name for m in service.members_by_activity()] == ["Alex Rivera", "Sam Lee", "Jordan"]

    def test_search_members(self, service):
        assert [m.name for m in service.search_members("LE")] == ["Alex Rivera", "Sam Lee"]
        assert len(service.search_members("  ")) == 3
        assert service.search_members("zzz") == []

    def test_member_metadata(self, service):
        title, description = service.member_metadata(service.find_member("jordan"))
        assert title == "Jordan's Music Rec Wrapped"
        assert description == "Jordan sent 150 messages and shared 50 songs in Music Rec"

    def test_share_url(self, service):
        member = service.find_member("alex-rivera")
        assert service.share_url(member) == "https://wrapped.example.com/wrapped/alex-rivera"
        assert service.share_url(member, 0).endswith("/wrapped/alex-rivera?card=1")

    def test_get_page(self, service):
        page = service.get_page("messages", page=1, page_size=2)
        assert [e.name for e in page.entries] == ["Alex Rivera", "Sam Lee"]
        assert (page.current_page, page.total_pages, page.total_members) == (1, 2, 3)

    def test_get_page_clamps_past_the_end(self, service):
        page = service.get_page("messages", page=9, page_size=2)
        assert page.current_page == 2
        assert [e.name for e in page.entries] == ["Jordan"]

    def test_get_page_empty_board(self, service):
        page = service.get_page("youtube")
        assert page.entries == [] and page.total_pages == 1

    @pytest.mark.parametrize("kwargs", [
        {"board_key": "vibes"},
        {"board_key": "messages", "page": 0},
        {"board_key": "messages", "page_size": 100},
    ])
    def test_get_page_invalid_input(self, service, kwargs):
        with pytest.raises(ValueError):
            service.get_page(**kwargs)
