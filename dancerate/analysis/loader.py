"""Build analysis snapshots from audio-analysis JSON payloads.

The payload follows the shape returned by the music client's audio-analysis
endpoint: a ``track`` object plus ``beats``, ``sections`` and ``segments``
arrays. Any of these may be missing. Individual malformed entries are
skipped with a warning rather than failing the whole snapshot.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar

from dancerate.analysis.models import AnalysisSnapshot, Beat, Section, Segment, Track

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalysisFormatError(ValueError):
    """The payload is not an audio-analysis object at all."""


def _num(entry: Mapping[str, Any], key: str, default: float | None = None) -> float:
    value = entry.get(key, default)
    if value is None or isinstance(value, bool):
        raise ValueError(f"missing numeric field {key!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value for {key!r}")
    return value


def _floats(entry: Mapping[str, Any], key: str) -> tuple[float, ...]:
    values = entry.get(key) or ()
    return tuple(float(v) for v in values)


def _track(entry: Mapping[str, Any]) -> Track:
    return Track(
        tempo=_num(entry, "tempo"),
        loudness=_num(entry, "loudness"),
        duration=_num(entry, "duration", 0.0),
    )


def _beat(entry: Mapping[str, Any]) -> Beat:
    return Beat(
        start=_num(entry, "start"),
        duration=_num(entry, "duration"),
        confidence=_num(entry, "confidence", 1.0),
    )


def _section(entry: Mapping[str, Any]) -> Section:
    return Section(
        start=_num(entry, "start"),
        duration=_num(entry, "duration"),
        loudness=_num(entry, "loudness"),
        tempo=_num(entry, "tempo", 0.0),
        confidence=_num(entry, "confidence", 1.0),
        tempo_confidence=_num(entry, "tempo_confidence", 0.0),
        key=int(_num(entry, "key", -1)),
        key_confidence=_num(entry, "key_confidence", 0.0),
        mode=int(_num(entry, "mode", -1)),
        mode_confidence=_num(entry, "mode_confidence", 0.0),
        time_signature=int(_num(entry, "time_signature", 4)),
        time_signature_confidence=_num(entry, "time_signature_confidence", 0.0),
    )


def _segment(entry: Mapping[str, Any]) -> Segment:
    return Segment(
        start=_num(entry, "start"),
        duration=_num(entry, "duration"),
        loudness_max=_num(entry, "loudness_max"),
        timbre=_floats(entry, "timbre"),
        confidence=_num(entry, "confidence", 1.0),
        loudness_start=_num(entry, "loudness_start", -60.0),
        loudness_max_time=_num(entry, "loudness_max_time", 0.0),
        loudness_end=_num(entry, "loudness_end", -60.0),
        pitches=_floats(entry, "pitches"),
    )


def _parse_list(payload: Mapping[str, Any], key: str, parse: Callable[[Mapping[str, Any]], T]) -> tuple[T, ...] | None:
    raw = payload.get(key)
    if raw is None:
        return None
    if not isinstance(raw, list):
        logger.warning(f"Ignoring {key!r}: expected a list, got {type(raw).__name__}")
        return None

    items = []
    skipped = 0
    for entry in raw:
        try:
            if not isinstance(entry, Mapping):
                raise ValueError("not an object")
            items.append(parse(entry))
        except (TypeError, ValueError):
            skipped += 1
    if skipped:
        logger.warning(f"Skipped {skipped}/{len(raw)} malformed {key}")
    # Keep time order even if the provider did not
    items.sort(key=lambda item: item.start)
    return tuple(items)


def snapshot_from_dict(payload: Mapping[str, Any] | None) -> AnalysisSnapshot:
    """Parse an audio-analysis payload into an immutable snapshot."""
    if payload is None:
        return AnalysisSnapshot()
    if not isinstance(payload, Mapping):
        raise AnalysisFormatError(f"Expected a JSON object, got {type(payload).__name__}")

    track = None
    raw_track = payload.get("track")
    if isinstance(raw_track, Mapping):
        try:
            track = _track(raw_track)
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed track descriptor: {e}")

    return AnalysisSnapshot(
        track=track,
        beats=_parse_list(payload, "beats", _beat),
        sections=_parse_list(payload, "sections", _section),
        segments=_parse_list(payload, "segments", _segment),
    )


def load_snapshot(path: str | Path) -> AnalysisSnapshot:
    """Read an audio-analysis JSON file from disk."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise AnalysisFormatError(f"{path}: invalid JSON ({e})") from e
    return snapshot_from_dict(payload)
