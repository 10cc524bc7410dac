"""Rate composer - the public entry point of the playback-rate engine."""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Callable

from dancerate.analysis.models import AnalysisSnapshot, BeatContext, BeatState
from dancerate.rate.beats import locate_beat
from dancerate.rate.config import DEFAULT_CONFIG, RateConfig, RateStrategy
from dancerate.rate.strategies import rate_simple, rate_trap_nation

logger = logging.getLogger(__name__)

NEUTRAL_RATE = 1.0

StrategyFn = Callable[[float, BeatContext, AnalysisSnapshot, RateConfig], float]

STRATEGIES: dict[RateStrategy, StrategyFn] = {
    RateStrategy.TRAP_NATION: rate_trap_nation,
    RateStrategy.SIMPLE: rate_simple,
}


def resolve_config(target_base_bpm: float | None = None, config: RateConfig | None = None) -> RateConfig:
    """Apply a per-call base BPM override on top of *config*."""
    config = config or DEFAULT_CONFIG
    if target_base_bpm is not None and target_base_bpm != config.target_base_bpm:
        config = dataclasses.replace(config, target_base_bpm=target_base_bpm)
    return config


def compute_rate(
    position_ms: float,
    snapshot: AnalysisSnapshot | None,
    target_base_bpm: float | None = None,
    config: RateConfig | None = None,
) -> float:
    """Playback-speed multiplier for the clip at *position_ms*.

    Pure function of its inputs. Missing analysis parts contribute a neutral
    value; with no beats at all the clip plays at its natural speed.
    """
    config = resolve_config(target_base_bpm, config)
    if snapshot is None or not snapshot.beats:
        return NEUTRAL_RATE

    position_seconds = position_ms / 1000.0
    ctx = locate_beat(position_seconds, snapshot.beats)
    if ctx.state == BeatState.GAP:
        return NEUTRAL_RATE

    rate = STRATEGIES[config.strategy](position_seconds, ctx, snapshot, config)
    if not math.isfinite(rate):
        logger.debug(f"Non-finite rate at {position_ms}ms, falling back to neutral")
        return NEUTRAL_RATE
    return rate


def describe_position(position_ms: float, snapshot: AnalysisSnapshot | None) -> BeatContext:
    """Beat context at *position_ms*, for diagnostics and API responses."""
    beats = snapshot.beats if snapshot else None
    return locate_beat(position_ms / 1000.0, beats)
