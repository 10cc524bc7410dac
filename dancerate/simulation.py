"""Sweep the rate engine over time ranges and build synthetic test songs."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from dancerate.analysis.models import AnalysisSnapshot, Beat, Section, Track
from dancerate.rate.config import RateConfig
from dancerate.rate.engine import compute_rate


@dataclass
class RateCurve:
    """Engine output sampled across a time range."""
    positions_ms: np.ndarray
    rates: np.ndarray

    def summary(self) -> dict[str, float]:
        return summarize_rates(self.rates)


def sample_rate_curve(
    snapshot: AnalysisSnapshot | None,
    start_ms: float,
    end_ms: float,
    step_ms: float = 100.0,
    config: RateConfig | None = None,
) -> RateCurve:
    """Evaluate ``compute_rate`` every *step_ms* in ``[start_ms, end_ms)``."""
    if step_ms <= 0:
        raise ValueError(f"step_ms must be positive, got {step_ms}")
    positions = np.arange(start_ms, end_ms, step_ms, dtype=np.float64)
    rates = np.array(
        [compute_rate(float(p), snapshot, config=config) for p in positions],
        dtype=np.float64,
    )
    return RateCurve(positions_ms=positions, rates=rates)


def summarize_rates(rates: np.ndarray) -> dict[str, float]:
    if len(rates) == 0:
        return {"min": 0.0, "max": 0.0, "mean": 0.0}
    return {
        "min": float(np.min(rates)),
        "max": float(np.max(rates)),
        "mean": float(np.mean(rates)),
    }


def synthetic_song(
    tempo: float,
    loudness: float = -8.0,
    section_loudness: list[float] | None = None,
    section_seconds: float = 30.0,
    n_beats: int | None = None,
    confidence: float = 0.8,
) -> AnalysisSnapshot:
    """A steady-tempo song with equal-length sections at the given loudness.

    With no explicit *n_beats* the beat grid covers every section.
    """
    section_loudness = section_loudness or []
    ibi = 60.0 / tempo
    duration = max(section_seconds * len(section_loudness), 0.0)
    if n_beats is None:
        n_beats = int(duration / ibi) + 1 if duration else 0

    beats = tuple(
        Beat(start=i * ibi, duration=ibi, confidence=confidence)
        for i in range(n_beats)
    )
    sections = tuple(
        Section(start=i * section_seconds, duration=section_seconds, loudness=db, tempo=tempo)
        for i, db in enumerate(section_loudness)
    )
    return AnalysisSnapshot(
        track=Track(tempo=tempo, loudness=loudness, duration=duration or n_beats * ibi),
        beats=beats,
        sections=sections,
        segments=(),
    )


def compare_sections(
    snapshot: AnalysisSnapshot,
    quiet_range_ms: tuple[float, float],
    loud_range_ms: tuple[float, float],
    step_ms: float = 500.0,
    config: RateConfig | None = None,
) -> dict[str, dict[str, float] | float]:
    """Rate statistics in a quiet and a loud stretch, plus their mean ratio."""
    quiet = sample_rate_curve(snapshot, *quiet_range_ms, step_ms=step_ms, config=config).summary()
    loud = sample_rate_curve(snapshot, *loud_range_ms, step_ms=step_ms, config=config).summary()
    ratio = loud["mean"] / quiet["mean"] if quiet["mean"] > 0 else 0.0
    return {"quiet": quiet, "loud": loud, "ratio": ratio}
