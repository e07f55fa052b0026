"""
Record Normalizer
Turns raw per-video dicts into fully-typed VideoRecord values.

Collaborators hand over videos in whatever shape their source produced:
- camelCase dashboard rows (publishedAt, durationSeconds, views)
- snake_case database rows (published_at, view_count, duration_seconds)
- YouTube Data API items (statistics.viewCount, ISO-8601 duration "PT2M30S")

Every numeric field is coerced here so that no analyzer has to guard
against strings, None or NaN. Normalization never raises for bad data:
unparsable values become 0 (or None for the optional metrics) and the
validity predicates decide which records each analysis may use.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from dateutil import parser as dateparser

from content_intel.config import DEFAULT_CONFIG

SHORT = "short"
LONG = "long"

ISO_DURATION_PATTERN = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$")
NON_NUMERIC_PATTERN = re.compile(r"[^0-9.\-]")


@dataclass(frozen=True)
class VideoRecord:
    id: str
    title: str
    published_at: Optional[datetime]
    duration_seconds: int
    views: int
    likes: int
    comments: int
    video_type: str
    ctr: Optional[float] = None
    retention: Optional[float] = None
    impressions: Optional[int] = None
    channel: str = ""

    @property
    def engagement_rate(self) -> float:
        """(likes + comments) / views, 0 when the video has no views."""
        if self.views <= 0:
            return 0.0
        return (self.likes + self.comments) / self.views


@dataclass(frozen=True)
class ChannelSnapshot:
    channel_id: str
    name: str
    videos: Tuple[VideoRecord, ...] = ()
    subscriber_count: int = 0
    video_count: int = 0
    total_view_count: int = 0


@dataclass(frozen=True)
class NormalizationReport:
    records: Tuple[VideoRecord, ...]
    total: int
    undated: int
    negative_counts: int

    @property
    def skipped(self) -> int:
        return sum(1 for record in self.records if not is_usable(record))

    def summary(self) -> str:
        return f"{self.skipped} of {self.total} records skipped"


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _to_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        cleaned = NON_NUMERIC_PATTERN.sub("", str(value))
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _to_int(value: Any) -> int:
    return int(_to_number(value))


def _to_ratio(value: Any) -> Optional[float]:
    """Optional ratio, expected in 0-1. Out-of-range values are clamped, never rescaled."""
    if value is None or value == "":
        return None
    return max(0.0, min(1.0, _to_number(value)))


def _to_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return max(0, _to_int(value))


def duration_seconds(value: Any) -> int:
    """
    Parse a duration into whole seconds.
    Accepts plain numbers, numeric strings, "HH:MM:SS" and ISO 8601 (PT2M30S).
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        number = _to_number(value)
        return max(0, int(number))

    text = str(value).strip()
    match = ISO_DURATION_PATTERN.match(text.upper())
    if match and text:
        days = int(match.group(1) or 0)
        hours = int(match.group(2) or 0)
        minutes = int(match.group(3) or 0)
        seconds = float(match.group(4) or 0)
        return int(days * 86400 + hours * 3600 + minutes * 60 + seconds)

    if ":" in text:
        total = 0
        for part in text.split(":"):
            total = total * 60 + _to_int(part)
        return max(0, total)

    return max(0, _to_int(text))


def parse_published_at(value: Any) -> Optional[datetime]:
    """Parse a publish timestamp into an aware UTC datetime; naive values are read as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = dateparser.parse(str(value))
        except (ValueError, OverflowError, TypeError):
            return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def classify_duration(seconds: int, short_threshold_seconds: int, fallback: str = LONG) -> str:
    """Duration bucket; a 0s duration is unknown and keeps the fallback."""
    if seconds <= 0:
        return fallback
    return SHORT if seconds <= short_threshold_seconds else LONG


def normalize(raw: Mapping[str, Any], short_threshold_seconds: int = DEFAULT_CONFIG.short_threshold_seconds) -> VideoRecord:
    """Build a VideoRecord from one raw video mapping."""
    if not isinstance(raw, Mapping):
        raise TypeError(f"raw video must be a mapping, got {type(raw).__name__}")

    statistics = raw.get("statistics")
    if not isinstance(statistics, Mapping):
        statistics = {}

    views = _first(raw, "views", "viewCount", "view_count")
    if views is None:
        views = statistics.get("viewCount")
    likes = _first(raw, "likes", "likeCount", "like_count")
    if likes is None:
        likes = statistics.get("likeCount")
    comments = _first(raw, "comments", "commentCount", "comment_count")
    if comments is None:
        comments = statistics.get("commentCount")

    seconds = duration_seconds(_first(raw, "durationSeconds", "duration_seconds", "duration"))

    explicit_type = str(_first(raw, "type", "video_type", "videoType") or "").strip().lower()
    fallback_type = explicit_type if explicit_type in (SHORT, LONG) else LONG

    return VideoRecord(
        id=str(_first(raw, "id", "videoId", "video_id") or ""),
        title=str(_first(raw, "title") or ""),
        published_at=parse_published_at(_first(raw, "publishedAt", "published_at", "publishDate")),
        duration_seconds=seconds,
        views=_to_int(views),
        likes=_to_int(likes),
        comments=_to_int(comments),
        video_type=classify_duration(seconds, short_threshold_seconds, fallback=fallback_type),
        ctr=_to_ratio(_first(raw, "ctr", "clickThroughRate")),
        retention=_to_ratio(_first(raw, "retention", "avgViewPct", "averageViewPercentage")),
        impressions=_to_optional_int(_first(raw, "impressions")),
        channel=str(_first(raw, "channel", "channelTitle", "channel_name") or ""),
    )


def has_valid_counts(video: VideoRecord) -> bool:
    return video.views >= 0 and video.likes >= 0 and video.comments >= 0


def is_usable(video: VideoRecord) -> bool:
    """Dated with non-negative counts: eligible for time-bucketed analyses."""
    return video.published_at is not None and has_valid_counts(video)


def split_valid(videos: Iterable[VideoRecord], require_date: bool = False) -> Tuple[List[VideoRecord], int]:
    """Return (kept, skipped) for count-based or, with require_date, time-based analyses."""
    predicate = is_usable if require_date else has_valid_counts
    kept = []
    skipped = 0
    for video in videos:
        if predicate(video):
            kept.append(video)
        else:
            skipped += 1
    return kept, skipped


def normalize_many(
    raws: Iterable[Mapping[str, Any]],
    short_threshold_seconds: int = DEFAULT_CONFIG.short_threshold_seconds,
) -> NormalizationReport:
    records = tuple(normalize(raw, short_threshold_seconds) for raw in raws)
    return NormalizationReport(
        records=records,
        total=len(records),
        undated=sum(1 for record in records if record.published_at is None),
        negative_counts=sum(1 for record in records if not has_valid_counts(record)),
    )


def load_channel_snapshot(
    raw_data: Mapping[str, Any],
    short_threshold_seconds: int = DEFAULT_CONFIG.short_threshold_seconds,
) -> Tuple[ChannelSnapshot, NormalizationReport]:
    """
    Build a ChannelSnapshot from the {"channel": {...}, "videos": [...]} shape
    written by the channel fetcher.
    """
    channel: Dict[str, Any] = dict(raw_data.get("channel") or {})
    name = str(_first(channel, "title", "name") or "")

    raw_videos = []
    for raw in raw_data.get("videos") or []:
        if isinstance(raw, Mapping) and not raw.get("channel") and not raw.get("channelTitle"):
            raw = {**raw, "channel": name}
        raw_videos.append(raw)

    report = normalize_many(raw_videos, short_threshold_seconds)
    snapshot = ChannelSnapshot(
        channel_id=str(_first(channel, "id", "channelId", "channel_id") or ""),
        name=name,
        videos=report.records,
        subscriber_count=max(0, _to_int(_first(channel, "subscriberCount", "subscriber_count"))),
        video_count=max(0, _to_int(_first(channel, "videoCount", "video_count"))),
        total_view_count=max(0, _to_int(_first(channel, "viewCount", "totalViewCount", "view_count"))),
    )
    return snapshot, report
