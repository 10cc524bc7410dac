"""Tests for the beat locator and interval lookup."""

import math

import pytest

from dancerate.analysis.models import Beat, BeatState, Section, Segment
from dancerate.rate.beats import locate_beat
from dancerate.rate.intervals import find_enclosing, last_started, next_usable
from tests.conftest import make_beats


def test_empty_beats_is_pre_beat():
    assert locate_beat(1.0, []).state == BeatState.PRE_BEAT
    assert locate_beat(1.0, None).state == BeatState.PRE_BEAT


def test_position_before_first_beat_is_pre_beat():
    beats = make_beats(4, start=2.0)
    ctx = locate_beat(0.5, beats)
    assert ctx.state == BeatState.PRE_BEAT
    assert ctx.current is None


def test_last_beat_is_post_beat():
    beats = make_beats(4, ibi=0.5, confidence=0.7)
    ctx = locate_beat(10.0, beats)
    assert ctx.state == BeatState.POST_BEAT
    assert ctx.current == beats[-1]
    assert ctx.confidence == pytest.approx(0.7)


def test_in_beat_context():
    beats = make_beats(4, ibi=0.5)
    ctx = locate_beat(0.625, beats)
    assert ctx.state == BeatState.IN_BEAT
    assert ctx.current == beats[1]
    assert ctx.next == beats[2]
    assert ctx.span == pytest.approx(0.5)
    assert ctx.bpm == pytest.approx(120.0)
    assert ctx.phase == pytest.approx(0.25)


def test_position_on_beat_start_has_zero_phase():
    beats = make_beats(4, ibi=0.5)
    ctx = locate_beat(1.0, beats)
    assert ctx.current == beats[2]
    assert ctx.phase == 0.0


def test_phase_stays_below_one():
    """Next beat start uses spacing, not the beat's own (possibly short) duration."""
    beats = (Beat(0.0, 0.1, 0.9), Beat(1.0, 0.1, 0.9), Beat(2.0, 0.1, 0.9))
    ctx = locate_beat(math.nextafter(1.0, 0.0), beats)
    assert ctx.current == beats[0]
    assert 0.99 < ctx.phase < 1.0


def test_confidence_is_clamped():
    beats = (Beat(0.0, 0.5, 1.7), Beat(0.5, 0.5, -0.2))
    assert locate_beat(0.1, beats).confidence == 1.0
    assert locate_beat(0.6, beats).confidence == 0.0


def test_non_monotonic_beats_never_give_negative_tempo():
    beats = (Beat(0.0, 0.5, 0.9), Beat(1.0, 0.5, 0.9), Beat(0.5, 0.5, 0.9), Beat(2.0, 0.5, 0.9))
    for t in range(0, 25):
        ctx = locate_beat(t / 10, beats)
        assert ctx.state != BeatState.PRE_BEAT
        assert ctx.bpm >= 0
        assert 0.0 <= ctx.phase < 1.0


def test_unusable_span_yields_gap():
    """A span that is not a positive finite number must not reach the division."""
    nan_start = (Beat(0.0, 0.5, 0.9), Beat(float("nan"), 0.5, 0.9), Beat(1.0, 0.5, 0.9))
    assert locate_beat(0.5, nan_start).state == BeatState.GAP

    inf_start = (Beat(0.0, 0.5, 0.9), Beat(float("inf"), 0.5, 0.9))
    assert locate_beat(1.0, inf_start).state == BeatState.GAP


def test_duplicate_beat_starts():
    beats = (Beat(0.0, 0.5, 0.9), Beat(0.0, 0.5, 0.9), Beat(0.5, 0.5, 0.9))
    ctx = locate_beat(0.25, beats)
    assert ctx.state == BeatState.IN_BEAT
    assert ctx.bpm == pytest.approx(120.0)


def test_nan_position_is_pre_beat():
    assert locate_beat(float("nan"), make_beats(4)).state == BeatState.PRE_BEAT


def test_last_started():
    beats = make_beats(4, ibi=1.0, start=1.0)
    assert last_started(beats, 0.5) == -1
    assert last_started(beats, 1.0) == 0
    assert last_started(beats, 2.5) == 1
    assert last_started(beats, 99.0) == 3


def test_find_enclosing_half_open():
    segments = (
        Segment(start=0.0, duration=0.2, loudness_max=-10.0),
        Segment(start=0.2, duration=0.2, loudness_max=-10.0),
        Segment(start=1.0, duration=0.2, loudness_max=-10.0),
    )
    assert find_enclosing(segments, 0.0) == 0
    assert find_enclosing(segments, 0.2) == 1
    assert find_enclosing(segments, 0.5) == -1  # gap between segments
    assert find_enclosing(segments, 1.2) == -1  # end is exclusive
    assert find_enclosing(None, 0.1) == -1
    assert find_enclosing((), 0.1) == -1


def test_find_enclosing_ignores_zero_duration():
    segments = (Segment(start=0.0, duration=0.0, loudness_max=-10.0),)
    assert find_enclosing(segments, 0.0) == -1


def test_find_enclosing_skips_zero_duration_tie():
    """A zero-length entry sharing a start does not hide the real interval."""
    sections = (
        Section(start=0.0, duration=20.0, loudness=-5.0),
        Section(start=0.0, duration=0.0, loudness=-30.0),
    )
    assert find_enclosing(sections, 5.0) == 0


def test_find_enclosing_skips_later_zero_duration():
    segments = (
        Segment(start=1.0, duration=0.2, loudness_max=0.0),
        Segment(start=1.1, duration=0.0, loudness_max=-60.0),
    )
    assert find_enclosing(segments, 1.15) == 0
    assert find_enclosing(segments, 1.2) == -1


def test_find_enclosing_stops_at_earlier_interval():
    segments = (
        Segment(start=0.0, duration=0.2, loudness_max=-10.0),
        Segment(start=0.5, duration=0.2, loudness_max=-10.0),
        Segment(start=0.6, duration=0.0, loudness_max=-10.0),
    )
    assert find_enclosing(segments, 0.8) == -1
    assert find_enclosing(segments, 0.65) == 1


def test_next_usable_skips_zero_duration():
    sections = (
        Section(start=0.0, duration=20.0, loudness=-10.0),
        Section(start=20.0, duration=0.0, loudness=-30.0),
        Section(start=20.0, duration=20.0, loudness=-6.0),
    )
    assert next_usable(sections, 0) == sections[2]
    assert next_usable(sections, 2) is None
    assert next_usable(None, 0) is None
