"""Simple strategy: confidence and loudness multipliers over a coarse beat phase."""

from __future__ import annotations

import math

from dancerate.analysis.models import AnalysisSnapshot, BeatContext, BeatState
from dancerate.rate.config import RateConfig
from dancerate.rate.intervals import find_enclosing
from dancerate.rate.utils import clamp

MIN_RATE = 0.3
MAX_RATE = 3.0
INTRO_RATE = 0.3
OUTRO_GAIN = 1.5

# Slow but confident tracks (e.g. 100 BPM bangers) get a tempo boost
SLOW_RATIO = 0.8
SLOW_CONFIDENCE = 0.5
SLOW_BOOST = 1.25

LOUDNESS_FLOOR = 0.65

# (upper phase bound, multiplier)
PHASE_STEPS = (
    (0.1, 1.2),   # attack
    (0.4, 1.1),   # early decay
    (0.7, 0.95),  # mid-beat
    (1.0, 1.0),   # preparing for next beat
)


def loudness_multiplier(position_seconds: float, snapshot: AnalysisSnapshot) -> float:
    """Section and segment loudness relative to the track, floored at 0.65."""
    multiplier = 1.0
    if snapshot.track is None:
        return multiplier

    idx = find_enclosing(snapshot.sections, position_seconds)
    if idx >= 0:
        diff = snapshot.sections[idx].loudness - snapshot.track.loudness
        # Boost loud sections hard, hold back quiet ones gently
        multiplier += clamp(diff * 0.15, -0.15, 0.6)

    idx = find_enclosing(snapshot.segments, position_seconds)
    if idx >= 0:
        diff = snapshot.segments[idx].loudness_max - snapshot.track.loudness
        multiplier += clamp(diff * 0.12, -0.1, 0.4)

    return clamp(multiplier, LOUDNESS_FLOOR, math.inf)


def phase_multiplier(phase: float) -> float:
    for bound, multiplier in PHASE_STEPS:
        if phase < bound:
            return multiplier
    return PHASE_STEPS[-1][1]


def rate_simple(
    position_seconds: float,
    ctx: BeatContext,
    snapshot: AnalysisSnapshot,
    config: RateConfig,
) -> float:
    if ctx.state == BeatState.PRE_BEAT:
        return INTRO_RATE
    if ctx.state == BeatState.POST_BEAT:
        return clamp(0.5 + ctx.confidence * OUTRO_GAIN, MIN_RATE, MAX_RATE)

    tempo_ratio = ctx.bpm / config.target_base_bpm
    if tempo_ratio < SLOW_RATIO and ctx.confidence > SLOW_CONFIDENCE:
        tempo_ratio *= SLOW_BOOST

    rate = (
        tempo_ratio
        * (0.4 + ctx.confidence * 1.2)
        * loudness_multiplier(position_seconds, snapshot)
        * phase_multiplier(ctx.phase)
    )
    return clamp(rate, MIN_RATE, MAX_RATE)
