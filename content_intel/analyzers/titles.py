"""
Title & Thumbnail Pattern Analyzer

Compares how often each title pattern shows up among a channel's top
performers versus its whole catalog. Uses rules.match_all: a title can
count toward several patterns at once.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

from content_intel.aggregates import by_views, pattern_stat
from content_intel.config import DEFAULT_CONFIG, AnalysisConfig
from content_intel.records import VideoRecord, split_valid
from content_intel.results import InsufficientData, TitleAnalysis, TitlePattern
from content_intel.rules import PatternRule, default_title_rules
from content_intel.stats import mean, safe_ratio



def top_subset_size(total: int, config: AnalysisConfig = DEFAULT_CONFIG) -> int:
    """Top 20% of the catalog, never fewer than title_top_min videos."""
    return min(total, max(config.title_top_min, math.ceil(total * config.title_top_fraction)))



def analyze_title_patterns(
    videos: Sequence[VideoRecord],
    rules: Optional[Sequence[PatternRule]] = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> Union[TitleAnalysis, InsufficientData]:
    """
    Pattern strength in the top subset vs. the full population.

    - Needs config.title_min_videos count-valid videos.
    - Top subset: stable sort by views descending, so equal view counts keep
      their input order when the subset boundary falls between them.
    - A pattern is kept only with >= config.min_pattern_matches hits in the
      top subset; kept patterns are ordered by top frequency (ties keep rule order).
    """
    if rules is None:
        rules = default_title_rules()

    valid, skipped = split_valid(videos)
    if len(valid) < config.title_min_videos:
        return InsufficientData(
            analyzer="titlePatterns",
            required=config.title_min_videos,
            available=len(valid),
            reason=f"Need at least {config.title_min_videos} videos to compare top performers",
        )

    ranked = by_views(valid)
    top_videos = ranked[:top_subset_size(len(ranked), config)]

    patterns = []
    for rule in rules:
        top_matches = [v for v in top_videos if rule.matches(v.title)]
        if len(top_matches) < config.min_pattern_matches:
            continue
        all_matches = [v for v in valid if rule.matches(v.title)]

        top_frequency = len(top_matches) / len(top_videos)
        all_frequency = len(all_matches) / len(valid)
        patterns.append(TitlePattern(
            name=rule.name,
            top_count=len(top_matches),
            all_count=len(all_matches),
            top_frequency=top_frequency,
            all_frequency=all_frequency,
            lift=safe_ratio(top_frequency, all_frequency),
            stats=pattern_stat(rule.name, all_matches, config.example_video_count),
            weight_hint=rule.weight_hint,
            insight=rule.insight,
        ))

    patterns.sort(key=lambda pattern: -pattern.top_frequency)

    return TitleAnalysis(
        patterns=tuple(patterns),
        avg_top_title_length=mean([len(v.title) for v in top_videos]),
        avg_all_title_length=mean([len(v.title) for v in valid]),
        top_video_count=len(top_videos),
        total_video_count=len(valid),
        top_videos=tuple(ranked[:config.title_display_count]),
        skipped=skipped,
    )
