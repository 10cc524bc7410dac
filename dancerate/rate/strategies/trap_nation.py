"""Trap-nation strategy: beat pulse, section swell, build-ups and bass hits."""

from __future__ import annotations

from dancerate.analysis.models import AnalysisSnapshot, BeatContext, BeatState
from dancerate.rate.config import RateConfig
from dancerate.rate.envelope import beat_pulse
from dancerate.rate.sections import estimate_section_energy
from dancerate.rate.segments import estimate_segment_punch
from dancerate.rate.utils import clamp

# Used for tempo intensity when the track descriptor is missing
FALLBACK_TRACK_TEMPO = 120.0

# (tempo - 70) / 60, i.e. 70 BPM and below is a ballad, 130 BPM and above full energy
INTENSITY_TEMPO_FLOOR = 70.0
INTENSITY_TEMPO_SPAN = 60.0
MIN_TEMPO_INTENSITY = 0.3

SECTION_BAND_BASE = 0.15
SECTION_BAND_SCALE = 0.35
BUILD_UP_GAIN = 0.25
SEGMENT_CEILING_BASE = 0.1
SEGMENT_CEILING_SCALE = 0.3


def tempo_intensity(snapshot: AnalysisSnapshot) -> float:
    """How energetic the whole song is, in [0.3, 1.0]."""
    tempo = snapshot.track.tempo if snapshot.track and snapshot.track.tempo > 0 else FALLBACK_TRACK_TEMPO
    return clamp((tempo - INTENSITY_TEMPO_FLOOR) / INTENSITY_TEMPO_SPAN, MIN_TEMPO_INTENSITY, 1.0)


def section_multiplier(energy: float, intensity: float) -> float:
    """1.0 at neutral energy; the band widens for energetic songs."""
    band = SECTION_BAND_BASE + SECTION_BAND_SCALE * intensity
    return 1.0 + (energy - 0.5) * band


def build_up_multiplier(build_up: float | None, intensity: float) -> float:
    if build_up is None:
        return 1.0
    return 1.0 + build_up * BUILD_UP_GAIN * intensity


def segment_boost(punch: float | None, energy: float, intensity: float) -> float:
    if punch is None:
        return 1.0
    ceiling = SEGMENT_CEILING_BASE + SEGMENT_CEILING_SCALE * energy * intensity
    return 1.0 + punch * ceiling


def rate_trap_nation(
    position_seconds: float,
    ctx: BeatContext,
    snapshot: AnalysisSnapshot,
    config: RateConfig,
) -> float:
    """Compose a clamped playback rate from every analysis layer."""
    if ctx.state == BeatState.PRE_BEAT:
        return clamp(config.intro_rate, config.min_rate, config.max_rate)
    if ctx.state == BeatState.POST_BEAT:
        return clamp(0.5 + ctx.confidence * config.outro_gain, config.min_rate, config.max_rate)

    tempo_ratio = clamp(
        ctx.bpm / config.target_base_bpm,
        config.min_tempo_ratio,
        config.max_tempo_ratio,
    )
    intensity = tempo_intensity(snapshot)

    track_loudness = snapshot.track.loudness if snapshot.track else None
    section = estimate_section_energy(position_seconds, snapshot.sections, track_loudness)

    pulse = beat_pulse(
        ctx.phase,
        ctx.confidence,
        section.energy,
        intensity,
        attack_end=config.attack_end,
        decay_end=config.decay_end,
    )
    punch = estimate_segment_punch(position_seconds, snapshot.segments)

    rate = (
        tempo_ratio
        * section_multiplier(section.energy, intensity)
        * build_up_multiplier(section.build_up, intensity)
        * pulse
        * segment_boost(punch, section.energy, intensity)
    )
    return clamp(rate, config.min_rate, config.max_rate)
