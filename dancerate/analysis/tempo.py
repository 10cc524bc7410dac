"""Base tempo selection: the danceability/energy heuristic and static BPM rate."""

from __future__ import annotations

import logging

from dancerate.analysis.models import AnalysisSnapshot

logger = logging.getLogger(__name__)

MAX_BPM = 100.0
MIN_BETTER_BPM = 70.0


def better_bpm(
    danceability: float,
    energy: float,
    track_bpm: float,
    adjust_faster_songs: bool = True,
) -> float:
    """Estimate a "felt" BPM from danceability and energy (both 0.0-1.0).

    Low danceability or energy pulls the estimate down; slow tracks weigh
    their own BPM more. An estimate above the track BPM is averaged with it
    (or discarded when *adjust_faster_songs* is False); one below is floored
    at 70 BPM.
    """
    danceability_weight = 0.9
    energy_weight = 0.6
    bpm_weight = 0.6

    # Features arrive as 0..1 floats but the heuristic was tuned on whole percents
    normalized_danceability = round(100 * danceability) / 100
    normalized_energy = round(100 * energy) / 100
    normalized_bpm = track_bpm / 100

    if normalized_danceability < 0.5:
        danceability_weight *= normalized_danceability
    if normalized_energy < 0.5:
        energy_weight *= normalized_energy
    if normalized_bpm < 0.8:
        bpm_weight = 0.9

    weighted_average = (
        normalized_danceability * danceability_weight
        + normalized_energy * energy_weight
        + normalized_bpm * bpm_weight
    ) / (1 - danceability_weight + 1 - energy_weight + bpm_weight)
    bpm = weighted_average * MAX_BPM

    logger.debug(
        f"better_bpm: danceability_weight={danceability_weight:.2f} energy_weight={energy_weight:.2f} "
        f"bpm_weight={bpm_weight:.2f} weighted_average={weighted_average:.3f} -> {bpm:.1f}"
    )

    if bpm > track_bpm:
        bpm = (bpm + track_bpm) / 2 if adjust_faster_songs else track_bpm
    if bpm < track_bpm:
        bpm = max(bpm, MIN_BETTER_BPM)
    return bpm


def static_playback_rate(
    snapshot: AnalysisSnapshot | None,
    video_bpm: float,
    base_bpm: float | None = None,
) -> float:
    """Fixed rate for the whole song: song BPM over the clip's own BPM.

    *base_bpm* overrides the track tempo (e.g. with ``better_bpm``). Without
    a track descriptor the clip plays at natural speed.
    """
    if snapshot is None or snapshot.track is None:
        logger.warning("BPM data not available for this track, using natural clip speed")
        return 1.0
    bpm = base_bpm if base_bpm else snapshot.track.tempo
    if not bpm or video_bpm <= 0:
        return 1.0
    return bpm / video_bpm
