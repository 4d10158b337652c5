"""Tests for the card sequencer state machine and input classification."""

import pytest

from wrapped_bot.constants import ViewerConstants
from wrapped_bot.ui.sequencer import (
    CardSequencer,
    NavAction,
    clamp_index,
    classify_key,
    classify_swipe,
    classify_tap,
)

DURATION = ViewerConstants.AUTO_ADVANCE_SECONDS


def make(card_count=5, start_index=None, clock=None):
    kwargs = {"clock": clock} if clock is not None else {}
    return CardSequencer(card_count, start_index, **kwargs)


class TestNavigation:

    @pytest.mark.parametrize("card_count", [1, 2, 5, 7])
    def test_advance_n_times_returns_to_start(self, card_count, clock):
        for start in range(card_count):
            seq = make(card_count, start, clock)
            for _ in range(card_count):
                seq.advance()
            assert seq.current_index == start

    @pytest.mark.parametrize("card_count", [1, 3, 5])
    def test_retreat_inverts_advance(self, card_count, clock):
        for start in range(card_count):
            seq = make(card_count, start, clock)
            seq.advance()
            seq.retreat()
            assert seq.current_index == start

    def test_five_card_scenario(self, clock):
        seq = make(5, clock=clock)
        visited = []
        for _ in range(5):
            seq.advance()
            visited.append(seq.current_index)
        assert visited == [1, 2, 3, 4, 0]

    def test_retreat_wraps_to_last_card(self, clock):
        seq = make(4, clock=clock)
        seq.retreat()
        assert seq.current_index == 3

    @pytest.mark.parametrize("start, expected", [(None, 0), (-3, 0), (2, 2), (99, 4)])
    def test_start_index_is_clamped(self, start, expected, clock):
        assert make(5, start, clock).current_index == expected

    def test_clamp_index(self):
        assert clamp_index(-1, 3) == 0
        assert clamp_index(1, 3) == 1
        assert clamp_index(3, 3) == 2

    def test_empty_deck_rejected(self):
        with pytest.raises(ValueError):
            CardSequencer(0)

    def test_non_positive_duration_rejected(self):
        with pytest.raises(ValueError):
            CardSequencer(3, duration=0)


class TestProgress:

    def test_starts_playing_at_zero(self, clock):
        seq = make(clock=clock)
        assert not seq.is_paused
        assert seq.progress == 0.0

    def test_progress_grows_monotonically_while_playing(self, clock):
        seq = make(clock=clock)
        last = seq.progress
        for _ in range(10):
            clock.advance(DURATION / 20)
            assert seq.progress >= last
            last = seq.progress
        assert last == pytest.approx(0.5)

    def test_progress_frozen_while_paused(self, clock):
        seq = make(clock=clock)
        clock.advance(DURATION * 0.25)
        seq.toggle_pause()
        frozen = seq.progress
        clock.advance(DURATION * 3)
        assert seq.is_paused
        assert seq.progress == frozen

    def test_progress_bounded(self, clock):
        seq = make(clock=clock)
        clock.advance(DURATION * 5)
        assert seq.progress == 1.0
        assert seq.remaining_seconds() == 0.0
        clock.now -= DURATION * 10  # a clock that steps backwards still reads as 0..1
        assert 0.0 <= seq.progress <= 1.0

    @pytest.mark.parametrize("move", ["advance", "retreat"])
    def test_navigation_resets_progress(self, move, clock):
        seq = make(clock=clock)
        clock.advance(DURATION * 0.7)
        getattr(seq, move)()
        assert seq.progress == 0.0

    def test_navigation_while_paused_stays_paused_at_zero(self, clock):
        seq = make(clock=clock)
        clock.advance(DURATION * 0.5)
        seq.pause()
        seq.advance()
        clock.advance(DURATION)
        assert seq.is_paused
        assert seq.progress == 0.0

    def test_pause_resume_preserves_elapsed_time(self, clock):
        seq = make(clock=clock)
        clock.advance(DURATION * 0.4)
        seq.toggle_pause()
        assert seq.progress == pytest.approx(0.4)

        clock.advance(DURATION * 0.1)
        seq.toggle_pause()
        assert not seq.is_paused
        assert seq.progress == pytest.approx(0.4)

        clock.advance(DURATION * 0.1)
        assert seq.progress == pytest.approx(0.5)


class TestTick:

    def test_tick_advances_when_card_is_used_up(self, clock):
        seq = make(clock=clock)
        clock.advance(DURATION)
        assert seq.tick(seq.generation) is True
        assert seq.current_index == 1
        assert seq.progress == 0.0

    def test_tick_before_time_does_nothing(self, clock):
        seq = make(clock=clock)
        clock.advance(DURATION * 0.9)
        assert seq.tick(seq.generation) is False
        assert seq.current_index == 0

    def test_tick_while_paused_does_nothing(self, clock):
        seq = make(clock=clock)
        clock.advance(DURATION)
        seq.pause()
        assert seq.tick(seq.generation) is False
        assert seq.current_index == 0

    def test_stale_tick_cannot_double_advance(self, clock):
        seq = make(clock=clock)
        scheduled_under = seq.generation
        clock.advance(DURATION)
        seq.advance()  # manual gesture lands first
        clock.advance(DURATION)
        assert seq.tick(scheduled_under) is False
        assert seq.current_index == 1

    def test_every_transition_bumps_generation(self, clock):
        seq = make(clock=clock)
        generations = [seq.generation]
        for action in (seq.advance, seq.retreat, seq.pause, seq.resume, seq.toggle_pause):
            action()
            generations.append(seq.generation)
        assert generations == sorted(set(generations))

    def test_redundant_pause_is_not_a_transition(self, clock):
        seq = make(clock=clock)
        seq.pause()
        generation = seq.generation
        seq.pause()
        assert seq.generation == generation


class TestListeners:

    def test_listeners_receive_state_snapshots(self, clock):
        seq = make(3, clock=clock)
        seen = []
        seq.add_listener(seen.append)
        seq.advance()
        seq.toggle_pause()
        assert [s.current_index for s in seen] == [1, 1]
        assert [s.is_paused for s in seen] == [False, True]
        assert all(s.card_count == 3 for s in seen)

    def test_removed_listener_is_not_called(self, clock):
        seq = make(clock=clock)
        seen = []
        seq.add_listener(seen.append)
        seq.remove_listener(seen.append)
        seq.advance()
        assert seen == []

    def test_share_pauses_and_end_share_resumes(self, clock):
        seq = make(clock=clock)
        clock.advance(DURATION * 0.3)
        seq.begin_share()
        assert seq.is_paused and seq.is_sharing

        clock.advance(DURATION * 0.5)
        seq.end_share()
        assert not seq.is_paused and not seq.is_sharing
        assert seq.progress == pytest.approx(0.3)

    def test_end_share_resumes_even_if_paused_before(self, clock):
        seq = make(clock=clock)
        seq.pause()
        seq.begin_share()
        seq.end_share()
        assert not seq.is_paused


class TestInputClassification:

    @pytest.mark.parametrize("dx, dy, expected", [
        (-51, 10, NavAction.ADVANCE),
        (51, 10, NavAction.RETREAT),
        (-49, 10, NavAction.NONE),
        (49, -10, NavAction.NONE),
        (-50, 0, NavAction.NONE),
        (-60, 70, NavAction.NONE),
        (60, -70, NavAction.NONE),
    ])
    def test_swipe(self, dx, dy, expected):
        assert classify_swipe(dx, dy) is expected

    @pytest.mark.parametrize("fraction, expected", [
        (0.35, NavAction.RETREAT),
        (0.65, NavAction.ADVANCE),
        (0.5, NavAction.NONE),
        (0.4, NavAction.NONE),
        (0.6, NavAction.NONE),
        (0.0, NavAction.RETREAT),
        (0.99, NavAction.ADVANCE),
    ])
    def test_tap(self, fraction, expected):
        assert classify_tap(fraction * 400, 400) is expected

    def test_tap_on_control_is_ignored(self):
        assert classify_tap(390, 400, on_control=True) is NavAction.NONE

    @pytest.mark.parametrize("key, expected", [
        ("ArrowRight", NavAction.ADVANCE),
        (" ", NavAction.ADVANCE),
        ("ArrowLeft", NavAction.RETREAT),
        ("ArrowUp", NavAction.SUPPRESS),
        ("ArrowDown", NavAction.SUPPRESS),
        ("Enter", NavAction.NONE),
    ])
    def test_key(self, key, expected):
        assert classify_key(key) is expected

    def test_handlers_drive_the_sequencer(self, clock):
        seq = make(5, clock=clock)
        seq.handle_swipe(-80, 5)
        seq.handle_tap(390, 400)
        seq.handle_key("ArrowLeft")
        assert seq.current_index == 1

    def test_suppressed_key_does_not_navigate(self, clock):
        seq = make(5, clock=clock)
        generation = seq.generation
        assert seq.handle_key("ArrowDown") is NavAction.SUPPRESS
        assert seq.current_index == 0
        assert seq.generation == generation
