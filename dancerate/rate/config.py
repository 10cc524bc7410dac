"""Engine tunables: strategy selection, base tempo and clamp bounds."""

from dataclasses import dataclass
from enum import Enum

DEFAULT_VIDEO_BPM = 130.0


class RateStrategy(str, Enum):
    TRAP_NATION = "trap-nation"
    SIMPLE = "simple"


@dataclass(frozen=True)
class RateConfig:
    """Configuration record for ``compute_rate``.

    The defaults match the trap-nation strategy. The simple strategy keeps
    its own fixed bounds and only reads ``target_base_bpm``.
    """
    target_base_bpm: float = DEFAULT_VIDEO_BPM
    strategy: RateStrategy = RateStrategy.TRAP_NATION

    intro_rate: float = 0.4  # before the first beat
    outro_gain: float = 1.5  # after the last beat: 0.5 + confidence * gain

    min_tempo_ratio: float = 0.6
    max_tempo_ratio: float = 1.4

    min_rate: float = 0.4
    max_rate: float = 2.5

    attack_end: float = 0.15
    decay_end: float = 0.5

    def __post_init__(self):
        if not self.target_base_bpm > 0:
            raise ValueError(f"target_base_bpm must be positive, got {self.target_base_bpm}")
        if not 0 < self.min_rate <= self.max_rate:
            raise ValueError(f"Invalid rate band [{self.min_rate}, {self.max_rate}]")
        if not 0 < self.min_tempo_ratio <= self.max_tempo_ratio:
            raise ValueError(
                f"Invalid tempo ratio band [{self.min_tempo_ratio}, {self.max_tempo_ratio}]"
            )
        if not 0 < self.attack_end < self.decay_end <= 1.0:
            raise ValueError(
                f"Phase boundaries must satisfy 0 < attack_end < decay_end <= 1, "
                f"got {self.attack_end}, {self.decay_end}"
            )
        if self.intro_rate <= 0:
            raise ValueError(f"intro_rate must be positive, got {self.intro_rate}")
        # Accept plain strings from settings / request bodies
        object.__setattr__(self, "strategy", RateStrategy(self.strategy))


DEFAULT_CONFIG = RateConfig()
