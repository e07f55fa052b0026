"""
Format Categorizer

Puts every video in exactly one content-type bucket (rules.classify_first,
first match wins, "Other" otherwise) and exactly one duration bucket.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union

from content_intel.aggregates import by_views, weighted_metrics
from content_intel.config import DEFAULT_CONFIG, AnalysisConfig
from content_intel.records import LONG, SHORT, VideoRecord, classify_duration, split_valid
from content_intel.results import FormatAnalysis, FormatBucket, InsufficientData
from content_intel.rules import OTHER_LABEL, PatternRule, classify_first, default_content_type_rules

DURATION_LABELS = {
    SHORT: "Short Form",
    LONG: "Long Form",
}



def _bucket(name: str, members: Sequence[VideoRecord], total: int) -> FormatBucket:
    total_views = sum(v.views for v in members)
    ranked = by_views(members)
    return FormatBucket(
        name=name,
        count=len(members),
        percentage=(len(members) / total) * 100 if total else 0.0,
        avg_views=total_views / len(members) if members else 0.0,
        total_views=total_views,
        weighted_metrics=weighted_metrics(members),
        top_video=ranked[0] if ranked else None,
    )



def duration_bucket(video: VideoRecord, threshold_seconds: int) -> str:
    return classify_duration(video.duration_seconds, threshold_seconds, fallback=video.video_type)



def categorize_formats(
    videos: Sequence[VideoRecord],
    type_rules: Optional[Sequence[PatternRule]] = None,
    duration_threshold_seconds: Optional[int] = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> Union[FormatAnalysis, InsufficientData]:
    """
    Content-type and duration breakdowns with per-bucket aggregates.

    Type buckets come back by count (ties keep rule order) with "Other" last;
    both duration buckets are always present, short first. Percentages in
    each dimension add up to 100.
    """
    if type_rules is None:
        type_rules = default_content_type_rules()
    if duration_threshold_seconds is None:
        duration_threshold_seconds = config.short_threshold_seconds

    valid, skipped = split_valid(videos)
    total = len(valid)
    if total == 0:
        return InsufficientData(
            analyzer="contentFormats",
            required=1,
            available=0,
            reason="No videos to categorize",
        )

    by_type: Dict[str, List[VideoRecord]] = {}
    by_duration: Dict[str, List[VideoRecord]] = {SHORT: [], LONG: []}
    for video in valid:
        by_type.setdefault(classify_first(video.title, type_rules), []).append(video)
        by_duration[duration_bucket(video, duration_threshold_seconds)].append(video)

    rule_names = []
    for rule in type_rules:
        if rule.name in by_type and rule.name not in rule_names and rule.name != OTHER_LABEL:
            rule_names.append(rule.name)
    type_stats = [_bucket(name, by_type[name], total) for name in rule_names]
    type_stats.sort(key=lambda bucket: -bucket.count)
    if by_type.get(OTHER_LABEL):
        type_stats.append(_bucket(OTHER_LABEL, by_type[OTHER_LABEL], total))

    duration_stats = tuple(
        _bucket(DURATION_LABELS[kind], by_duration[kind], total) for kind in (SHORT, LONG)
    )

    return FormatAnalysis(
        type_stats=tuple(type_stats),
        duration_stats=duration_stats,
        total_videos=total,
        duration_threshold_seconds=duration_threshold_seconds,
        skipped=skipped,
    )
