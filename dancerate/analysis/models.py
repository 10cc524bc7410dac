"""Core data models for track analysis snapshots."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Track:
    """Whole-song descriptors."""
    tempo: float  # BPM
    loudness: float  # dB, typically -60..0
    duration: float = 0.0  # seconds


@dataclass(frozen=True)
class Beat:
    """A single detected beat."""
    start: float  # seconds
    duration: float
    confidence: float = 1.0  # 0.0-1.0


@dataclass(frozen=True)
class Section:
    """A macro-structural part of a song (intro, verse, chorus...)."""
    start: float
    duration: float
    loudness: float  # dB
    tempo: float = 0.0
    confidence: float = 1.0
    # Musical metadata, carried through but not used for rate shaping
    tempo_confidence: float = 0.0
    key: int = -1
    key_confidence: float = 0.0
    mode: int = -1
    mode_confidence: float = 0.0
    time_signature: int = 4
    time_signature_confidence: float = 0.0

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass(frozen=True)
class Segment:
    """A short transient-level slice (~100-300ms)."""
    start: float
    duration: float
    loudness_max: float  # peak dB in the window
    timbre: tuple[float, ...] = ()  # 12 coefficients; index 1 ~ brightness
    confidence: float = 1.0
    loudness_start: float = -60.0
    loudness_max_time: float = 0.0
    loudness_end: float = -60.0
    pitches: tuple[float, ...] = ()

    @property
    def brightness(self) -> float:
        return self.timbre[1] if len(self.timbre) > 1 else 0.0


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Everything known about the current song.

    Every part is independently optional: the analysis provider may return
    partial results. A snapshot is never mutated, only replaced.
    """
    track: Track | None = None
    beats: tuple[Beat, ...] | None = None
    sections: tuple[Section, ...] | None = None
    segments: tuple[Segment, ...] | None = None


class BeatState(str, Enum):
    PRE_BEAT = "pre_beat"  # before the first beat, or no beats
    IN_BEAT = "in_beat"
    POST_BEAT = "post_beat"  # at or after the last beat
    GAP = "gap"  # malformed spacing, cannot place the position


@dataclass(frozen=True)
class BeatContext:
    """Where a playback position falls in the beat grid."""
    state: BeatState
    current: Beat | None = None
    next: Beat | None = None
    span: float = 0.0  # seconds between current and next beat
    bpm: float = 0.0  # instantaneous tempo, 60 / span
    phase: float = 0.0  # 0.0 <= phase < 1.0 inside the beat

    @property
    def confidence(self) -> float:
        """Current beat confidence clamped to [0, 1]; 0 with no beat."""
        if self.current is None:
            return 0.0
        return min(1.0, max(0.0, self.current.confidence))


@dataclass(frozen=True)
class SectionEnergy:
    """Section-level energy at a position, with optional build-up progress."""
    energy: float = 0.5  # 0.0-1.0
    build_up: float | None = None  # 0.0-1.0 ramp before a louder section
    section: Section | None = None

