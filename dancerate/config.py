"""Application configuration."""

from pydantic_settings import BaseSettings

from dancerate.rate.config import RateConfig, RateStrategy


class Settings(BaseSettings):
    """App settings with env var overrides."""

    # Rate engine
    target_base_bpm: float = 130.0  # BPM the clip was animated at
    strategy: RateStrategy = RateStrategy.TRAP_NATION
    intro_rate: float = 0.4
    min_rate: float = 0.4
    max_rate: float = 2.5

    # Base tempo
    better_bpm_for_faster_songs: bool = True

    # Playback driver
    tick_interval_ms: int = 50
    fetch_retry_delay_ms: int = 200
    fetch_max_retries: int = 10

    # Curve sampling
    max_curve_points: int = 20000

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_prefix": "DANCERATE_"}

    def rate_config(self, **overrides) -> RateConfig:
        """Engine configuration built from these settings."""
        values = {
            "target_base_bpm": self.target_base_bpm,
            "strategy": self.strategy,
            "intro_rate": self.intro_rate,
            "min_rate": self.min_rate,
            "max_rate": self.max_rate,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RateConfig(**values)


settings = Settings()
