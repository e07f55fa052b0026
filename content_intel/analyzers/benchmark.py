"""
Benchmark Engine

Per-metric gaps between a subject channel and the mean of a competitor set.
Ratio metrics (CTR, retention, engagement) are always weighted averages of
the underlying videos: Σ(metric × weight) / Σ(weight), never a plain mean of
per-video ratios.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from content_intel.aggregates import uploads_per_week, weighted_metrics
from content_intel.config import DEFAULT_CONFIG, AnalysisConfig
from content_intel.records import SHORT, ChannelSnapshot, VideoRecord, split_valid
from content_intel.results import BenchmarkGap, ChannelMetrics, PeerDistribution, ViewDistribution
from content_intel.stats import mean, median, percentile, safe_ratio

SIZE_TIERS = (
    ("emerging", 10_000),
    ("growing", 100_000),
    ("established", 500_000),
    ("major", 1_000_000),
)
TOP_TIER = "elite"

ABOVE = "above"
AT = "at"
BELOW = "below"



def classify_size_tier(subscriber_count: int) -> str:
    for name, upper_bound in SIZE_TIERS:
        if subscriber_count < upper_bound:
            return name
    return TOP_TIER



def gap_status(gap_percent: float, band: float) -> str:
    if gap_percent >= band:
        return ABOVE
    if gap_percent >= -band:
        return AT
    return BELOW



def compute_benchmark_gap(
    subject_value: float,
    competitor_values: Sequence[float],
    metric: str = "",
    floor: Optional[float] = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> BenchmarkGap:
    """
    gap_percent = (subject - avg) / max(avg, floor) * 100.

    The floor (default config.gap_denominator_floor, 1) keeps a zero or
    near-zero competitor mean from producing an infinite gap. An empty
    competitor list averages to 0. Metrics living in 0-1 should pass a
    smaller floor (config.ratio_denominator_floor), otherwise every gap is
    measured against 1.
    """
    if floor is None:
        floor = config.gap_denominator_floor
    values = [float(value) for value in competitor_values if value is not None]
    average = mean(values)
    gap_percent = (subject_value - average) / max(average, floor) * 100
    return BenchmarkGap(
        metric=metric,
        subject_value=float(subject_value),
        competitor_average=average,
        gap_percent=gap_percent,
        competitor_count=len(values),
        status=gap_status(gap_percent, config.benchmark_at_band),
    )



def channel_metrics(snapshot: ChannelSnapshot, config: AnalysisConfig = DEFAULT_CONFIG) -> ChannelMetrics:
    """Channel-level aggregates, always computed from the snapshot's own videos."""
    videos, _ = split_valid(snapshot.videos)
    views = [v.views for v in videos]
    weighted = weighted_metrics(videos)
    return ChannelMetrics(
        channel=snapshot.name,
        videos_analyzed=len(videos),
        total_views=sum(views),
        avg_views=mean(views),
        median_views=median(views),
        engagement_rate=weighted.engagement_rate,
        avg_ctr=weighted.ctr,
        avg_retention=weighted.retention,
        uploads_per_week=uploads_per_week(videos),
        shorts_ratio=safe_ratio(sum(1 for v in videos if v.video_type == SHORT), len(videos)),
        size_tier=classify_size_tier(snapshot.subscriber_count),
    )


# (metric name, accessor, is 0-1 ratio); accessors may return None when a channel lacks the data
BENCHMARK_METRICS: Tuple[Tuple[str, Callable[[ChannelMetrics], Optional[float]], bool], ...] = (
    ("avgViews", lambda m: m.avg_views, False),
    ("medianViews", lambda m: m.median_views, False),
    ("engagementRate", lambda m: m.engagement_rate, True),
    ("uploadsPerWeek", lambda m: m.uploads_per_week, False),
    ("ctr", lambda m: m.avg_ctr, True),
    ("retention", lambda m: m.avg_retention, True),
)



def benchmark_channels(
    subject: ChannelSnapshot,
    competitors: Sequence[ChannelSnapshot],
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> List[BenchmarkGap]:
    """
    One BenchmarkGap per metric. Channels with no analyzable videos are left
    out of the competitor mean; CTR/retention gaps are only produced when the
    subject and at least one competitor report them.
    """
    subject_metrics = channel_metrics(subject, config)
    competitor_metrics = [channel_metrics(c, config) for c in competitors]
    competitor_metrics = [m for m in competitor_metrics if m.videos_analyzed > 0]

    gaps = []
    for name, accessor, is_ratio in BENCHMARK_METRICS:
        subject_value = accessor(subject_metrics)
        if subject_value is None:
            continue
        values = [accessor(m) for m in competitor_metrics]
        values = [value for value in values if value is not None]
        if not values:
            continue
        floor = config.ratio_denominator_floor if is_ratio else config.gap_denominator_floor
        gaps.append(compute_benchmark_gap(subject_value, values, metric=name, floor=floor, config=config))
    return gaps



def _distribution(values: Sequence[float]) -> ViewDistribution:
    return ViewDistribution(
        p25=percentile(values, 25),
        median=percentile(values, 50),
        p75=percentile(values, 75),
        count=len(values),
    )



def peer_distribution(competitors: Sequence[ChannelSnapshot]) -> PeerDistribution:
    """Quartiles of competitor video views, overall and per duration bucket."""
    pooled: List[VideoRecord] = []
    for competitor in competitors:
        videos, _ = split_valid(competitor.videos)
        pooled.extend(videos)

    return PeerDistribution(
        peer_count=len(competitors),
        videos_analyzed=len(pooled),
        all=_distribution([v.views for v in pooled]),
        long_form=_distribution([v.views for v in pooled if v.video_type != SHORT]),
        short_form=_distribution([v.views for v in pooled if v.video_type == SHORT]),
        engagement_median=median([v.engagement_rate for v in pooled]),
    )
