"""Result types returned by the analyzers. All immutable; built fresh per call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from content_intel.records import VideoRecord


@dataclass(frozen=True)
class InsufficientData:
    """Returned (never raised) when a sample is below an analyzer's minimum."""

    analyzer: str
    required: int
    available: int
    reason: str = ""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class WeightedMetrics:
    ctr: Optional[float]
    retention: Optional[float]
    engagement_rate: float


@dataclass(frozen=True)
class PatternStat:
    name: str
    count: int
    total_views: int
    avg_views: float
    weighted_metrics: WeightedMetrics
    example_videos: Tuple[VideoRecord, ...]


@dataclass(frozen=True)
class TitlePattern:
    name: str
    top_count: int
    all_count: int
    top_frequency: float
    all_frequency: float
    lift: float
    stats: PatternStat
    weight_hint: Optional[str] = None
    insight: str = ""


@dataclass(frozen=True)
class TitleAnalysis:
    patterns: Tuple[TitlePattern, ...]
    avg_top_title_length: float
    avg_all_title_length: float
    top_video_count: int
    total_video_count: int
    top_videos: Tuple[VideoRecord, ...]
    skipped: int = 0


@dataclass(frozen=True)
class ScheduleBucket:
    name: str
    index: int
    count: int
    avg_views: float
    total_views: int


@dataclass(frozen=True)
class ScheduleProfile:
    day_stats: Tuple[ScheduleBucket, ...]
    best_day: Optional[ScheduleBucket]
    time_stats: Tuple[ScheduleBucket, ...]
    best_time: Optional[ScheduleBucket]
    average_interval_days: float
    consistency_score: float
    frequency_views_correlation: float
    weeks_analyzed: int
    uploads_per_week: float
    videos_analyzed: int
    timezone: str
    skipped: int = 0


@dataclass(frozen=True)
class FormatBucket:
    name: str
    count: int
    percentage: float
    avg_views: float
    total_views: int
    weighted_metrics: WeightedMetrics
    top_video: Optional[VideoRecord] = None


@dataclass(frozen=True)
class FormatAnalysis:
    type_stats: Tuple[FormatBucket, ...]
    duration_stats: Tuple[FormatBucket, ...]
    total_videos: int
    duration_threshold_seconds: int
    skipped: int = 0


@dataclass(frozen=True)
class BenchmarkGap:
    metric: str
    subject_value: float
    competitor_average: float
    gap_percent: float
    competitor_count: int
    status: str


@dataclass(frozen=True)
class ChannelMetrics:
    channel: str
    videos_analyzed: int
    total_views: int
    avg_views: float
    median_views: float
    engagement_rate: float
    avg_ctr: Optional[float]
    avg_retention: Optional[float]
    uploads_per_week: float
    shorts_ratio: float
    size_tier: str


@dataclass(frozen=True)
class ViewDistribution:
    p25: float
    median: float
    p75: float
    count: int


@dataclass(frozen=True)
class PeerDistribution:
    peer_count: int
    videos_analyzed: int
    all: ViewDistribution
    long_form: ViewDistribution
    short_form: ViewDistribution
    engagement_median: float


@dataclass(frozen=True)
class OutlierVideo:
    video: VideoRecord
    baseline_views: float
    multiplier: float
    channel: str = ""


@dataclass(frozen=True)
class GapExample:
    video_id: str
    title: str
    channel: str
    views: int


@dataclass(frozen=True)
class ContentGap:
    pattern: str
    competitors: Tuple[str, ...]
    usage_count: int
    examples: Tuple[GapExample, ...]
