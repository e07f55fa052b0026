"""Per-group aggregation shared by the pattern, format and benchmark analyzers."""

from __future__ import annotations

from typing import Optional, Sequence

from content_intel.records import VideoRecord
from content_intel.results import PatternStat, WeightedMetrics
from content_intel.stats import safe_ratio, weighted_average



def by_views(videos: Sequence[VideoRecord]) -> list:
    """Views descending; sorted() is stable so ties keep input order."""
    return sorted(videos, key=lambda video: -video.views)



def weighted_metrics(videos: Sequence[VideoRecord]) -> WeightedMetrics:
    """
    CTR weighted by impressions, retention weighted by views.
    A metric nobody reported stays None instead of averaging to 0.
    """
    with_ctr = [v for v in videos if v.ctr is not None and v.impressions]
    with_retention = [v for v in videos if v.retention is not None and v.views > 0]

    ctr: Optional[float] = None
    if with_ctr:
        ctr = weighted_average([v.ctr for v in with_ctr], [v.impressions for v in with_ctr])

    retention: Optional[float] = None
    if with_retention:
        retention = weighted_average([v.retention for v in with_retention], [v.views for v in with_retention])

    total_views = sum(v.views for v in videos)
    interactions = sum(v.likes + v.comments for v in videos)
    return WeightedMetrics(
        ctr=ctr,
        retention=retention,
        engagement_rate=safe_ratio(interactions, total_views),
    )



def uploads_per_week(videos: Sequence[VideoRecord]) -> float:
    """
    Dated uploads divided by the number of weeks between the first and last
    one. The span is floored at one week so a burst of same-day uploads
    reads as that many uploads in a week.
    """
    dates = sorted(v.published_at for v in videos if v.published_at is not None)
    if len(dates) < 2:
        return 0.0
    weeks = (dates[-1] - dates[0]).total_seconds() / (7 * 24 * 60 * 60)
    return len(dates) / max(1.0, weeks)



def pattern_stat(name: str, videos: Sequence[VideoRecord], example_count: int) -> PatternStat:
    total_views = sum(v.views for v in videos)
    return PatternStat(
        name=name,
        count=len(videos),
        total_views=total_views,
        avg_views=safe_ratio(total_views, len(videos)),
        weighted_metrics=weighted_metrics(videos),
        example_videos=tuple(by_views(videos)[:example_count]),
    )
