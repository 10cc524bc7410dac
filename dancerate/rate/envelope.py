"""Beat pulse envelope: fast attack, smooth decay, gentle breathing."""

import math

from dancerate.rate.utils import clamp01

ATTACK_END = 0.15
DECAY_END = 0.5

BREATH_DEPTH = 0.1


def ease_out_cubic(t: float) -> float:
    return 1.0 - (1.0 - t) ** 3


def ease_in_quad(t: float) -> float:
    return t * t


def pulse_intensity(section_energy: float, tempo_intensity: float) -> float:
    """Louder sections and faster songs pulse harder."""
    return (0.3 + 0.7 * clamp01(section_energy)) * (0.4 + 0.6 * clamp01(tempo_intensity))


def beat_pulse(
    phase: float,
    confidence: float,
    section_energy: float,
    tempo_intensity: float,
    attack_end: float = ATTACK_END,
    decay_end: float = DECAY_END,
) -> float:
    """Multiplicative pulse for a position inside a beat.

    The envelope is 1.0 at phase 0, rises to ``1 + strength`` at
    *attack_end*, falls back to 1.0 at *decay_end* and then breathes around
    1.0 for one sine period, ending at 1.0 again for the next beat.
    """
    phase = min(max(phase, 0.0), 1.0)
    confidence = clamp01(confidence)
    intensity = pulse_intensity(section_energy, tempo_intensity)
    strength = (0.3 + 0.5 * confidence) * intensity

    if phase < attack_end:
        return 1.0 + strength * ease_out_cubic(phase / attack_end)

    if phase < decay_end:
        t = (phase - attack_end) / (decay_end - attack_end)
        return 1.0 + strength * (1.0 - ease_in_quad(t))

    rest = (phase - decay_end) / (1.0 - decay_end) if decay_end < 1.0 else 0.0
    amplitude = BREATH_DEPTH * confidence * intensity
    return 1.0 + amplitude * math.sin(2.0 * math.pi * rest)
