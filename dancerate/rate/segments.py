"""Segment reactivity: bass/loudness punch from short transient segments."""

from __future__ import annotations

from typing import Sequence

from dancerate.analysis.models import Segment
from dancerate.rate.intervals import find_enclosing
from dancerate.rate.utils import clamp01

LOUDNESS_FLOOR_DB = -60.0

LOUDNESS_WEIGHT = 0.6
BASS_WEIGHT = 0.4


def loudness_component(segment: Segment) -> float:
    return clamp01((segment.loudness_max - LOUDNESS_FLOOR_DB) / -LOUDNESS_FLOOR_DB)


def bass_component(segment: Segment) -> float:
    """Darker timbre (negative brightness) reads as more bass."""
    return clamp01((-segment.brightness + 100.0) / 200.0)


def estimate_segment_punch(position_seconds: float, segments: Sequence[Segment] | None) -> float | None:
    """Punch in [0, 1] of the segment at *position_seconds*, or None."""
    idx = find_enclosing(segments, position_seconds)
    if idx < 0:
        return None
    segment = segments[idx]
    punch = LOUDNESS_WEIGHT * loudness_component(segment) + BASS_WEIGHT * bass_component(segment)
    return clamp01(punch)
