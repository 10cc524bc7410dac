"""Shared test fixtures for playback-rate engine tests."""

import pytest
from fastapi.testclient import TestClient

from dancerate.analysis.models import AnalysisSnapshot, Beat, Section, Segment, Track
from dancerate.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


def make_beats(n: int, ibi: float = 0.5, start: float = 0.0, confidence: float = 0.9) -> tuple[Beat, ...]:
    """Evenly spaced beats, *ibi* seconds apart."""
    return tuple(
        Beat(start=start + i * ibi, duration=ibi, confidence=confidence)
        for i in range(n)
    )


def make_sections(loudness: list[float], seconds: float = 20.0, tempo: float = 120.0) -> tuple[Section, ...]:
    """Back-to-back sections of equal length."""
    return tuple(
        Section(start=i * seconds, duration=seconds, loudness=db, tempo=tempo)
        for i, db in enumerate(loudness)
    )


def make_snapshot(
    n_beats: int = 120,
    ibi: float = 0.5,
    confidence: float = 0.9,
    tempo: float | None = 120.0,
    loudness: float = -8.0,
    section_loudness: list[float] | None = None,
    segments: tuple[Segment, ...] | None = None,
) -> AnalysisSnapshot:
    """Steady-tempo snapshot; pass ``tempo=None`` to leave out the track."""
    track = Track(tempo=tempo, loudness=loudness, duration=n_beats * ibi) if tempo else None
    return AnalysisSnapshot(
        track=track,
        beats=make_beats(n_beats, ibi=ibi, confidence=confidence),
        sections=make_sections(section_loudness) if section_loudness is not None else None,
        segments=segments,
    )


def analysis_payload(n_beats: int = 8, ibi: float = 0.5, confidence: float = 0.9) -> dict:
    """Audio-analysis JSON as the music client returns it."""
    return {
        "track": {"tempo": 60.0 / ibi, "loudness": -8.0, "duration": n_beats * ibi},
        "beats": [
            {"start": i * ibi, "duration": ibi, "confidence": confidence}
            for i in range(n_beats)
        ],
        "sections": [
            {"start": 0.0, "duration": n_beats * ibi, "loudness": -6.0, "tempo": 60.0 / ibi,
             "key": 5, "mode": 1, "time_signature": 4},
        ],
        "segments": [],
    }
