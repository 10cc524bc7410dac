"""Section-level energy and build-up (pre-drop) detection."""

from __future__ import annotations

from typing import Sequence

from dancerate.analysis.models import Section, SectionEnergy
from dancerate.rate.intervals import find_enclosing, next_usable
from dancerate.rate.utils import clamp01

# Section loudness relative to the track, mapped onto [0, 1]
ENERGY_DB_LOW = -5.0
ENERGY_DB_HIGH = 3.0

# Next section must be this much louder to count as a drop
BUILD_UP_THRESHOLD_DB = 1.5
BUILD_UP_WINDOW_SECONDS = 8.0

NEUTRAL = SectionEnergy()


def section_energy(section: Section, track_loudness: float | None) -> float:
    """Normalized loudness of *section* relative to the whole track."""
    if track_loudness is None:
        return NEUTRAL.energy
    diff = section.loudness - track_loudness
    return clamp01((diff - ENERGY_DB_LOW) / (ENERGY_DB_HIGH - ENERGY_DB_LOW))


def build_up_progress(position_seconds: float, section: Section, following: Section | None) -> float | None:
    """Ramp 0 -> 1 over the window that ends where *following* takes over.

    Only applies when *following* is markedly louder than *section*.
    """
    if following is None:
        return None
    if not following.loudness - section.loudness > BUILD_UP_THRESHOLD_DB:
        return None

    remaining = section.end - position_seconds
    if remaining > BUILD_UP_WINDOW_SECONDS or remaining <= 0:
        return None
    return clamp01(1.0 - remaining / BUILD_UP_WINDOW_SECONDS)


def estimate_section_energy(
    position_seconds: float,
    sections: Sequence[Section] | None,
    track_loudness: float | None,
) -> SectionEnergy:
    """Energy of the section playing at *position_seconds*, plus build-up.

    No enclosing section gives neutral energy (0.5) and no build-up.
    """
    idx = find_enclosing(sections, position_seconds)
    if idx < 0:
        return NEUTRAL

    section = sections[idx]
    following = next_usable(sections, idx)
    return SectionEnergy(
        energy=section_energy(section, track_loudness),
        build_up=build_up_progress(position_seconds, section, following),
        section=section,
    )
