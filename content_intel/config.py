"""Thresholds and tuning knobs for the content intelligence engine."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()



def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw.strip())



def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw.strip())



def _env_optional_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    if raw.strip().lower() in {"none", "off", "0"}:
        return None
    return int(raw.strip())


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Every threshold the analyzers use.

    Defaults:
    - short_threshold_seconds: 180 (<= 180s and > 0s is a Short)
    - title_min_videos: 10, title_top_fraction: 0.2, title_top_min: 3
    - min_pattern_matches: 2 (smallest sample a pattern result is built from)
    - title_display_count: 10
    - schedule_min_videos: 5, correlation_min_weeks: 4
    - outlier_min_multiplier: 2.5, outlier_window_days: 90,
      outlier_min_videos: 2, outlier_limit: 20
    - gap_min_distinct_competitors: 2, gap_example_count: 2, gap_limit: 5
    - gap_denominator_floor: 1.0 (count metrics such as views),
      ratio_denominator_floor: 0.001 (0-1 ratios such as CTR),
      benchmark_at_band: 20.0 (percent)
    - example_video_count: 3
    - max_workers: 4
    """

    short_threshold_seconds: int = 180

    title_min_videos: int = 10
    title_top_fraction: float = 0.2
    title_top_min: int = 3
    min_pattern_matches: int = 2
    title_display_count: int = 10

    schedule_min_videos: int = 5
    correlation_min_weeks: int = 4

    outlier_min_multiplier: float = 2.5
    outlier_window_days: int = 90
    outlier_min_videos: int = 2
    outlier_limit: Optional[int] = 20

    gap_min_distinct_competitors: int = 2
    gap_example_count: int = 2
    gap_limit: Optional[int] = 5

    gap_denominator_floor: float = 1.0
    ratio_denominator_floor: float = 0.001
    benchmark_at_band: float = 20.0

    example_video_count: int = 3
    max_workers: int = 4

    def __post_init__(self) -> None:
        if self.short_threshold_seconds < 0:
            raise ValueError("short_threshold_seconds must be >= 0")
        if not 0 < self.title_top_fraction <= 1:
            raise ValueError("title_top_fraction must be in (0, 1]")
        if self.gap_denominator_floor <= 0 or self.ratio_denominator_floor <= 0:
            raise ValueError("gap denominator floors must be > 0")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @staticmethod
    def from_env() -> "AnalysisConfig":
        defaults = AnalysisConfig()
        return AnalysisConfig(
            short_threshold_seconds=_env_int("INTEL_SHORT_THRESHOLD_SECONDS", defaults.short_threshold_seconds),
            title_min_videos=_env_int("INTEL_TITLE_MIN_VIDEOS", defaults.title_min_videos),
            title_top_fraction=_env_float("INTEL_TITLE_TOP_FRACTION", defaults.title_top_fraction),
            title_top_min=_env_int("INTEL_TITLE_TOP_MIN", defaults.title_top_min),
            min_pattern_matches=_env_int("INTEL_MIN_PATTERN_MATCHES", defaults.min_pattern_matches),
            title_display_count=_env_int("INTEL_TITLE_DISPLAY_COUNT", defaults.title_display_count),
            schedule_min_videos=_env_int("INTEL_SCHEDULE_MIN_VIDEOS", defaults.schedule_min_videos),
            correlation_min_weeks=_env_int("INTEL_CORRELATION_MIN_WEEKS", defaults.correlation_min_weeks),
            outlier_min_multiplier=_env_float("INTEL_OUTLIER_MIN_MULTIPLIER", defaults.outlier_min_multiplier),
            outlier_window_days=_env_int("INTEL_OUTLIER_WINDOW_DAYS", defaults.outlier_window_days),
            outlier_min_videos=_env_int("INTEL_OUTLIER_MIN_VIDEOS", defaults.outlier_min_videos),
            outlier_limit=_env_optional_int("INTEL_OUTLIER_LIMIT", defaults.outlier_limit),
            gap_min_distinct_competitors=_env_int(
                "INTEL_GAP_MIN_DISTINCT_COMPETITORS", defaults.gap_min_distinct_competitors
            ),
            gap_example_count=_env_int("INTEL_GAP_EXAMPLE_COUNT", defaults.gap_example_count),
            gap_limit=_env_optional_int("INTEL_GAP_LIMIT", defaults.gap_limit),
            gap_denominator_floor=_env_float("INTEL_GAP_DENOMINATOR_FLOOR", defaults.gap_denominator_floor),
            ratio_denominator_floor=_env_float("INTEL_RATIO_DENOMINATOR_FLOOR", defaults.ratio_denominator_floor),
            benchmark_at_band=_env_float("INTEL_BENCHMARK_AT_BAND", defaults.benchmark_at_band),
            example_video_count=_env_int("INTEL_EXAMPLE_VIDEO_COUNT", defaults.example_video_count),
            max_workers=_env_int("INTEL_MAX_WORKERS", defaults.max_workers),
        )

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_CONFIG = AnalysisConfig()
