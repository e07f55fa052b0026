"""Outlier Detector: recent videos that beat their channel's mean views by a wide margin."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Mapping, Optional, Sequence

from content_intel.config import DEFAULT_CONFIG, AnalysisConfig
from content_intel.records import VideoRecord, split_valid
from content_intel.results import OutlierVideo
from content_intel.stats import mean



def detect_outliers(
    videos: Sequence[VideoRecord],
    min_multiplier: Optional[float] = None,
    window_days: Optional[int] = None,
    now: Optional[datetime] = None,
    channel: str = "",
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> List[OutlierVideo]:
    """
    Flag videos with views / baseline >= min_multiplier published within the
    last window_days, best multiplier first.

    The baseline is the mean views of every count-valid video the channel
    has, dated or not. With fewer than config.outlier_min_videos videos (or a
    zero baseline) there is nothing to compare against and no outliers are
    returned.
    """
    if min_multiplier is None:
        min_multiplier = config.outlier_min_multiplier
    if window_days is None:
        window_days = config.outlier_window_days
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    valid, _ = split_valid(videos)
    if len(valid) < max(2, config.outlier_min_videos):
        return []

    baseline = mean([v.views for v in valid])
    if baseline <= 0:
        return []

    cutoff = now - timedelta(days=window_days)
    outliers = []
    for video in valid:
        if video.published_at is None or video.published_at < cutoff:
            continue
        multiplier = video.views / baseline
        if multiplier >= min_multiplier:
            outliers.append(OutlierVideo(
                video=video,
                baseline_views=baseline,
                multiplier=multiplier,
                channel=channel or video.channel,
            ))

    outliers.sort(key=lambda outlier: -outlier.multiplier)
    return outliers



def detect_competitor_outliers(
    videos_by_channel: Mapping[str, Sequence[VideoRecord]],
    min_multiplier: Optional[float] = None,
    window_days: Optional[int] = None,
    now: Optional[datetime] = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> List[OutlierVideo]:
    """Run detect_outliers per channel (each against its own baseline), merge and cap at config.outlier_limit."""
    merged: List[OutlierVideo] = []
    for channel, videos in videos_by_channel.items():
        merged.extend(detect_outliers(
            videos,
            min_multiplier=min_multiplier,
            window_days=window_days,
            now=now,
            channel=channel,
            config=config,
        ))

    merged.sort(key=lambda outlier: -outlier.multiplier)
    if config.outlier_limit is not None:
        merged = merged[:config.outlier_limit]
    return merged
