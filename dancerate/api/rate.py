"""Rate computation endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from dancerate.analysis.loader import AnalysisFormatError, snapshot_from_dict
from dancerate.analysis.models import BeatState
from dancerate.analysis.tempo import better_bpm
from dancerate.api.schemas import (
    BetterBpmRequest,
    BetterBpmResponse,
    CurvePointResponse,
    CurveRequest,
    CurveResponse,
    RateRequest,
    RateResponse,
)
from dancerate.config import settings
from dancerate.rate.config import RateConfig
from dancerate.rate.engine import compute_rate, describe_position
from dancerate.simulation import sample_rate_curve

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_config(target_base_bpm: float | None, strategy) -> RateConfig:
    try:
        return settings.rate_config(target_base_bpm=target_base_bpm, strategy=strategy)
    except ValueError as e:
        raise HTTPException(400, f"Invalid rate configuration: {e}")


def _parse_analysis(payload):
    try:
        return snapshot_from_dict(payload)
    except AnalysisFormatError as e:
        raise HTTPException(400, str(e))


@router.post("/rate", response_model=RateResponse)
async def rate(request: RateRequest):
    """Playback rate for one position in the song."""
    config = _build_config(request.target_base_bpm, request.strategy)
    snapshot = _parse_analysis(request.analysis)

    ctx = describe_position(request.position_ms, snapshot)
    in_beat = ctx.state == BeatState.IN_BEAT
    return RateResponse(
        rate=compute_rate(request.position_ms, snapshot, config=config),
        strategy=config.strategy,
        beat_state=ctx.state.value,
        instant_bpm=round(ctx.bpm, 2) if in_beat else None,
        phase=ctx.phase if in_beat else None,
    )


@router.post("/rate/curve", response_model=CurveResponse)
async def rate_curve(request: CurveRequest):
    """Playback rate sampled across a time range."""
    if request.end_ms <= request.start_ms:
        raise HTTPException(400, "end_ms must be greater than start_ms")
    n_points = (request.end_ms - request.start_ms) / request.step_ms
    if n_points > settings.max_curve_points:
        raise HTTPException(400, f"Too many points (max {settings.max_curve_points})")

    config = _build_config(request.target_base_bpm, request.strategy)
    snapshot = _parse_analysis(request.analysis)

    curve = sample_rate_curve(snapshot, request.start_ms, request.end_ms, request.step_ms, config=config)
    stats = curve.summary()
    logger.info(f"Sampled {len(curve.rates)} rates ({config.strategy.value})")
    return CurveResponse(
        strategy=config.strategy,
        points=[
            CurvePointResponse(position_ms=float(p), rate=float(r))
            for p, r in zip(curve.positions_ms, curve.rates)
        ],
        min_rate=stats["min"],
        max_rate=stats["max"],
        mean_rate=stats["mean"],
    )


@router.post("/tempo/better-bpm", response_model=BetterBpmResponse)
async def tempo_better_bpm(request: BetterBpmRequest):
    """Base BPM estimate from danceability and energy."""
    adjust = request.adjust_faster_songs
    if adjust is None:
        adjust = settings.better_bpm_for_faster_songs
    bpm = better_bpm(request.danceability, request.energy, request.track_bpm, adjust_faster_songs=adjust)
    return BetterBpmResponse(bpm=round(bpm, 2), track_bpm=request.track_bpm)
