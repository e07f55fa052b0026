"""Serializer helpers: analyzer results to JSON-ready dicts."""

from __future__ import annotations

from typing import Any, Optional

from content_intel.records import VideoRecord
from content_intel.results import (
    BenchmarkGap,
    ChannelMetrics,
    ContentGap,
    FormatAnalysis,
    FormatBucket,
    InsufficientData,
    OutlierVideo,
    PatternStat,
    PeerDistribution,
    ScheduleBucket,
    ScheduleProfile,
    TitleAnalysis,
    TitlePattern,
    ViewDistribution,
    WeightedMetrics,
)



def _round(value: Optional[float], digits: int = 1) -> Optional[float]:
    if value is None:
        return None
    return round(float(value), digits)



def video_to_dict(video: VideoRecord) -> dict:
    return {
        "video_id": video.id,
        "video_url": f"https://youtube.com/watch?v={video.id}" if video.id else "",
        "title": video.title,
        "channel": video.channel,
        "publishedAt": video.published_at.isoformat() if video.published_at else None,
        "durationSeconds": video.duration_seconds,
        "type": video.video_type,
        "views": video.views,
        "likes": video.likes,
        "comments": video.comments,
        "engagementRate": round(video.engagement_rate * 100, 2),
    }



def insufficient_data_to_dict(result: InsufficientData) -> dict:
    return {
        "status": "insufficient_data",
        "analyzer": result.analyzer,
        "required": result.required,
        "available": result.available,
        "reason": result.reason,
    }



def weighted_metrics_to_dict(metrics: WeightedMetrics) -> dict:
    return {
        "ctr": _round(metrics.ctr, 4),
        "retention": _round(metrics.retention, 4),
        "engagementRate": round(metrics.engagement_rate * 100, 2),
    }



def pattern_stat_to_dict(stat: PatternStat) -> dict:
    return {
        "count": stat.count,
        "totalViews": stat.total_views,
        "avgViews": _round(stat.avg_views),
        "weightedMetrics": weighted_metrics_to_dict(stat.weighted_metrics),
        "exampleVideos": [video_to_dict(v) for v in stat.example_videos],
    }



def title_pattern_to_dict(pattern: TitlePattern) -> dict:
    return {
        "name": pattern.name,
        "icon": pattern.weight_hint,
        "insight": pattern.insight,
        "topCount": pattern.top_count,
        "allCount": pattern.all_count,
        "topFrequency": round(pattern.top_frequency, 3),
        "allFrequency": round(pattern.all_frequency, 3),
        "lift": round(pattern.lift, 2),
        **pattern_stat_to_dict(pattern.stats),
    }



def title_analysis_to_dict(analysis: TitleAnalysis) -> dict:
    return {
        "patterns": [title_pattern_to_dict(p) for p in analysis.patterns],
        "avgTopTitleLength": round(analysis.avg_top_title_length),
        "avgAllTitleLength": round(analysis.avg_all_title_length),
        "topVideoCount": analysis.top_video_count,
        "totalVideoCount": analysis.total_video_count,
        "top10Videos": [video_to_dict(v) for v in analysis.top_videos],
        "skippedRecords": analysis.skipped,
    }



def schedule_bucket_to_dict(bucket: Optional[ScheduleBucket]) -> Optional[dict]:
    if bucket is None:
        return None
    return {
        "name": bucket.name,
        "index": bucket.index,
        "count": bucket.count,
        "avgViews": _round(bucket.avg_views),
        "totalViews": bucket.total_views,
    }



def schedule_profile_to_dict(profile: ScheduleProfile) -> dict:
    return {
        "dayStats": [schedule_bucket_to_dict(b) for b in profile.day_stats],
        "bestDay": schedule_bucket_to_dict(profile.best_day),
        "timeStats": [schedule_bucket_to_dict(b) for b in profile.time_stats],
        "bestTime": schedule_bucket_to_dict(profile.best_time),
        "avgInterval": _round(profile.average_interval_days),
        "consistencyScore": round(profile.consistency_score),
        "correlation": _round(profile.frequency_views_correlation, 2),
        "weeksAnalyzed": profile.weeks_analyzed,
        "uploadsPerWeek": _round(profile.uploads_per_week, 2),
        "totalVideosAnalyzed": profile.videos_analyzed,
        "timezone": profile.timezone,
        "skippedRecords": profile.skipped,
    }



def format_bucket_to_dict(bucket: FormatBucket) -> dict:
    return {
        "name": bucket.name,
        "count": bucket.count,
        "percentage": _round(bucket.percentage),
        "avgViews": _round(bucket.avg_views),
        "totalViews": bucket.total_views,
        "weightedMetrics": weighted_metrics_to_dict(bucket.weighted_metrics),
        "topVideo": video_to_dict(bucket.top_video) if bucket.top_video else None,
    }



def format_analysis_to_dict(analysis: FormatAnalysis) -> dict:
    return {
        "typeStats": [format_bucket_to_dict(b) for b in analysis.type_stats],
        "durationStats": [format_bucket_to_dict(b) for b in analysis.duration_stats],
        "totalVideos": analysis.total_videos,
        "durationThresholdSeconds": analysis.duration_threshold_seconds,
        "skippedRecords": analysis.skipped,
    }



def benchmark_gap_to_dict(gap: BenchmarkGap) -> dict:
    return {
        "metric": gap.metric,
        "subjectValue": _round(gap.subject_value, 4),
        "competitorAverage": _round(gap.competitor_average, 4),
        "gapPercent": _round(gap.gap_percent),
        "competitorCount": gap.competitor_count,
        "status": gap.status,
    }



def channel_metrics_to_dict(metrics: ChannelMetrics) -> dict:
    return {
        "channel": metrics.channel,
        "videosAnalyzed": metrics.videos_analyzed,
        "totalViews": metrics.total_views,
        "avgViews": _round(metrics.avg_views),
        "medianViews": _round(metrics.median_views),
        "engagementRate": round(metrics.engagement_rate * 100, 2),
        "avgCtr": _round(metrics.avg_ctr, 4),
        "avgRetention": _round(metrics.avg_retention, 4),
        "uploadsPerWeek": _round(metrics.uploads_per_week, 2),
        "shortsRatio": round(metrics.shorts_ratio * 100),
        "sizeTier": metrics.size_tier,
    }



def _distribution_to_dict(distribution: ViewDistribution) -> dict:
    return {
        "p25": _round(distribution.p25),
        "median": _round(distribution.median),
        "p75": _round(distribution.p75),
        "count": distribution.count,
    }



def peer_distribution_to_dict(distribution: PeerDistribution) -> dict:
    return {
        "peerCount": distribution.peer_count,
        "videosAnalyzed": distribution.videos_analyzed,
        "all": _distribution_to_dict(distribution.all),
        "longForm": _distribution_to_dict(distribution.long_form),
        "shortForm": _distribution_to_dict(distribution.short_form),
        "engagementRateMedian": round(distribution.engagement_median * 100, 2),
    }



def outlier_to_dict(outlier: OutlierVideo) -> dict:
    return {
        **video_to_dict(outlier.video),
        "channel": outlier.channel,
        "channelAvgViews": round(outlier.baseline_views),
        "outlierScore": _round(outlier.multiplier),
    }



def content_gap_to_dict(gap: ContentGap) -> dict:
    return {
        "pattern": gap.pattern,
        "competitors": list(gap.competitors),
        "competitorCount": len(gap.competitors),
        "usageCount": gap.usage_count,
        "examples": [
            {"video_id": ex.video_id, "title": ex.title, "channel": ex.channel, "views": ex.views}
            for ex in gap.examples
        ],
    }


_SERIALIZERS = (
    (InsufficientData, insufficient_data_to_dict),
    (TitleAnalysis, title_analysis_to_dict),
    (ScheduleProfile, schedule_profile_to_dict),
    (FormatAnalysis, format_analysis_to_dict),
    (BenchmarkGap, benchmark_gap_to_dict),
    (ChannelMetrics, channel_metrics_to_dict),
    (PeerDistribution, peer_distribution_to_dict),
    (OutlierVideo, outlier_to_dict),
    (ContentGap, content_gap_to_dict),
    (VideoRecord, video_to_dict),
)



def result_to_dict(result: Any) -> Any:
    """Serialize any analyzer result; lists are serialized item by item."""
    if isinstance(result, (list, tuple)):
        return [result_to_dict(item) for item in result]
    for result_type, serializer in _SERIALIZERS:
        if isinstance(result, result_type):
            return serializer(result)
    raise TypeError(f"No serializer for {type(result).__name__}")
