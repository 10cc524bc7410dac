"""Beat locator: place a playback position inside the beat grid."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from dancerate.analysis.models import Beat, BeatContext, BeatState
from dancerate.rate.intervals import last_started

logger = logging.getLogger(__name__)

# Largest float below 1.0, so phase stays in [0, 1)
_MAX_PHASE = math.nextafter(1.0, 0.0)

PRE_BEAT = BeatContext(state=BeatState.PRE_BEAT)
GAP = BeatContext(state=BeatState.GAP)


def locate_beat(position_seconds: float, beats: Sequence[Beat] | None) -> BeatContext:
    """Find the beat interval enclosing *position_seconds*.

    Returns a PRE_BEAT context before the first beat (or with no beats),
    a POST_BEAT context carrying the last beat once it has started, and a
    GAP context when the spacing to the next beat is not positive.
    """
    if not beats:
        return PRE_BEAT

    idx = last_started(beats, position_seconds)
    if idx < 0:
        return PRE_BEAT

    current = beats[idx]
    if idx == len(beats) - 1:
        return BeatContext(state=BeatState.POST_BEAT, current=current)

    nxt = beats[idx + 1]
    span = nxt.start - current.start
    if not span > 0 or not math.isfinite(span):
        logger.debug(f"Non-positive beat span {span!r} at index {idx}")
        return GAP

    phase = (position_seconds - current.start) / span
    return BeatContext(
        state=BeatState.IN_BEAT,
        current=current,
        next=nxt,
        span=span,
        bpm=60.0 / span,
        phase=min(max(phase, 0.0), _MAX_PHASE),
    )
