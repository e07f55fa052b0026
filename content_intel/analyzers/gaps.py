"""
Content Gap Analyzer

Finds patterns that several competitors use and the subject channel does not.

Competitor side and subject side are tested differently:
- each competitor video title is checked on its own (rules.match_all), so
  usage counts are per video;
- the subject is checked once against all of its titles joined by a single
  space. A predicate that matches anywhere in that corpus, even across the
  boundary between two titles, counts as "the subject already does this".
  That makes the subject side more permissive than a per-video check: a
  pattern the subject used once, in one title, is never reported as a gap.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from content_intel.config import DEFAULT_CONFIG, AnalysisConfig
from content_intel.records import VideoRecord, split_valid
from content_intel.results import ContentGap, GapExample
from content_intel.rules import PatternRule, default_gap_rules, match_all



def title_corpus(videos: Sequence[VideoRecord]) -> str:
    # case is preserved; case-insensitive rules carry re.IGNORECASE themselves
    return " ".join(video.title for video in videos)



def find_content_gaps(
    subject_videos: Sequence[VideoRecord],
    competitor_videos_by_channel: Mapping[str, Sequence[VideoRecord]],
    rules: Optional[Sequence[PatternRule]] = None,
    min_distinct_competitors: Optional[int] = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> List[ContentGap]:
    """
    Patterns used by >= min_distinct_competitors competitors and absent from
    the subject's title corpus, most widely used first (ties keep the order in
    which patterns were first seen), capped at config.gap_limit.
    """
    if rules is None:
        rules = default_gap_rules()
    if min_distinct_competitors is None:
        min_distinct_competitors = config.gap_min_distinct_competitors

    usage: Dict[str, int] = {}
    competitors: Dict[str, List[str]] = {}
    examples: Dict[str, List[GapExample]] = {}

    for channel, videos in competitor_videos_by_channel.items():
        valid, _ = split_valid(videos)
        for video in valid:
            for name in match_all(video.title, rules):
                usage[name] = usage.get(name, 0) + 1
                seen = competitors.setdefault(name, [])
                if channel not in seen:
                    seen.append(channel)
                pattern_examples = examples.setdefault(name, [])
                if len(pattern_examples) < config.gap_example_count:
                    pattern_examples.append(GapExample(
                        video_id=video.id,
                        title=video.title,
                        channel=channel,
                        views=video.views,
                    ))

    subject_valid, _ = split_valid(subject_videos)
    corpus = title_corpus(subject_valid)
    rules_by_name = {rule.name: rule for rule in rules}

    gaps = []
    for name, channels in competitors.items():
        if len(channels) < min_distinct_competitors:
            continue
        if rules_by_name[name].matches(corpus):
            continue
        gaps.append(ContentGap(
            pattern=name,
            competitors=tuple(channels),
            usage_count=usage[name],
            examples=tuple(examples[name]),
        ))

    gaps.sort(key=lambda gap: -len(gap.competitors))
    if config.gap_limit is not None:
        gaps = gaps[:config.gap_limit]
    return gaps
