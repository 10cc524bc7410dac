"""Pydantic request/response models for API."""

from typing import Any

from pydantic import BaseModel, Field

from dancerate.rate.config import RateStrategy


class RateRequest(BaseModel):
    position_ms: float
    # Raw audio-analysis payload; parsed leniently, bad entries are dropped
    analysis: dict[str, Any] | None = None
    target_base_bpm: float | None = Field(default=None, gt=0)
    strategy: RateStrategy | None = None


class RateResponse(BaseModel):
    rate: float
    strategy: RateStrategy
    beat_state: str
    instant_bpm: float | None = None
    phase: float | None = None


class CurveRequest(BaseModel):
    analysis: dict[str, Any] | None = None
    start_ms: float = Field(default=0.0, ge=0)
    end_ms: float
    step_ms: float = Field(default=100.0, gt=0)
    target_base_bpm: float | None = Field(default=None, gt=0)
    strategy: RateStrategy | None = None


class CurvePointResponse(BaseModel):
    position_ms: float
    rate: float


class CurveResponse(BaseModel):
    strategy: RateStrategy
    points: list[CurvePointResponse]
    min_rate: float
    max_rate: float
    mean_rate: float


class BetterBpmRequest(BaseModel):
    danceability: float = Field(ge=0, le=1)
    energy: float = Field(ge=0, le=1)
    track_bpm: float = Field(gt=0)
    adjust_faster_songs: bool | None = None


class BetterBpmResponse(BaseModel):
    bpm: float
    track_bpm: float
