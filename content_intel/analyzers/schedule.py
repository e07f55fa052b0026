"""
Upload Schedule Analyzer

Analyzes, in the viewer's timezone:
- Best performing weekday and 6-hour time block
- Cadence consistency (spread of the gaps between uploads)
- Weekly upload frequency vs. weekly mean views (Pearson)
"""

from __future__ import annotations

from collections import OrderedDict
from datetime import datetime, tzinfo
from typing import Dict, List, Optional, Sequence, Tuple, Union

from dateutil import tz

from content_intel.aggregates import uploads_per_week
from content_intel.config import DEFAULT_CONFIG, AnalysisConfig
from content_intel.records import VideoRecord, split_valid
from content_intel.results import InsufficientData, ScheduleBucket, ScheduleProfile
from content_intel.stats import mean, pearson, population_std

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# (name, first hour, end hour exclusive)
TIME_BLOCKS = (
    ("Night", 0, 6),
    ("Morning", 6, 12),
    ("Afternoon", 12, 18),
    ("Evening", 18, 24),
)

SECONDS_PER_DAY = 24 * 60 * 60



def resolve_timezone(name: str) -> tzinfo:
    """IANA name to tzinfo. Unknown names are a caller error."""
    zone = tz.gettz(name) if name else None
    if zone is None:
        raise ValueError(f"Unknown timezone: {name!r}")
    return zone



def localize(instant: datetime, timezone_name: str) -> datetime:
    """
    Convert a UTC instant into the target zone using the offset in force at
    that instant, so both sides of a DST transition land on the right hour.
    """
    return instant.astimezone(resolve_timezone(timezone_name))



def time_block_index(hour: int) -> int:
    for index, (_, start, end) in enumerate(TIME_BLOCKS):
        if start <= hour < end:
            return index
    raise ValueError(f"hour out of range: {hour}")



def _bucket_stats(groups: Dict[int, List[VideoRecord]], names: Sequence[str]) -> Tuple[ScheduleBucket, ...]:
    buckets = []
    for index, name in enumerate(names):
        members = groups.get(index)
        if not members:
            continue
        total_views = sum(v.views for v in members)
        buckets.append(ScheduleBucket(
            name=name,
            index=index,
            count=len(members),
            avg_views=total_views / len(members),
            total_views=total_views,
        ))
    return tuple(buckets)



def _best(buckets: Sequence[ScheduleBucket]) -> Optional[ScheduleBucket]:
    best = None
    for bucket in buckets:
        # strict > keeps the earliest index on ties
        if best is None or bucket.avg_views > best.avg_views:
            best = bucket
    return best



def upload_intervals(dates: Sequence[datetime]) -> List[float]:
    """Gaps between consecutive uploads in fractional days, chronological."""
    ordered = sorted(dates)
    return [
        (ordered[i] - ordered[i - 1]).total_seconds() / SECONDS_PER_DAY
        for i in range(1, len(ordered))
    ]



def consistency_score(intervals: Sequence[float]) -> float:
    """100 - coefficient of variation (as %), clamped to 0-100; 0 with no spacing to measure."""
    average = mean(intervals)
    if average <= 0:
        return 0.0
    score = 100 - (population_std(intervals) / average * 100)
    return max(0.0, min(100.0, score))



def frequency_views_correlation(
    local_videos: Sequence[Tuple[datetime, VideoRecord]],
    min_weeks: int,
) -> Tuple[float, int]:
    """
    Pearson r between uploads per ISO week and mean views per ISO week.
    Fewer than min_weeks weeks with uploads gives 0 by definition.
    """
    weeks: "OrderedDict[Tuple[int, int], List[VideoRecord]]" = OrderedDict()
    for local_dt, video in sorted(local_videos, key=lambda item: item[0]):
        iso = local_dt.isocalendar()
        weeks.setdefault((iso[0], iso[1]), []).append(video)

    if len(weeks) < min_weeks:
        return 0.0, len(weeks)

    uploads = [len(members) for members in weeks.values()]
    avg_views = [sum(v.views for v in members) / len(members) for members in weeks.values()]
    return pearson(uploads, avg_views), len(weeks)



def analyze_upload_schedule(
    videos: Sequence[VideoRecord],
    timezone: str = "UTC",
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> Union[ScheduleProfile, InsufficientData]:
    """Day/time performance and cadence for dated videos, bucketed in `timezone`."""
    zone = resolve_timezone(timezone)

    dated, skipped = split_valid(videos, require_date=True)
    if len(dated) < config.schedule_min_videos:
        return InsufficientData(
            analyzer="uploadSchedule",
            required=config.schedule_min_videos,
            available=len(dated),
            reason=f"Need at least {config.schedule_min_videos} dated videos",
        )

    local_videos = [(video.published_at.astimezone(zone), video) for video in dated]

    by_day: Dict[int, List[VideoRecord]] = {}
    by_block: Dict[int, List[VideoRecord]] = {}
    for local_dt, video in local_videos:
        by_day.setdefault(local_dt.weekday(), []).append(video)
        by_block.setdefault(time_block_index(local_dt.hour), []).append(video)

    day_stats = _bucket_stats(by_day, DAY_NAMES)
    time_stats = _bucket_stats(by_block, [name for name, _, _ in TIME_BLOCKS])

    intervals = upload_intervals([video.published_at for video in dated])
    correlation, weeks_analyzed = frequency_views_correlation(local_videos, config.correlation_min_weeks)

    return ScheduleProfile(
        day_stats=day_stats,
        best_day=_best(day_stats),
        time_stats=time_stats,
        best_time=_best(time_stats),
        average_interval_days=mean(intervals),
        consistency_score=consistency_score(intervals),
        frequency_views_correlation=correlation,
        weeks_analyzed=weeks_analyzed,
        uploads_per_week=uploads_per_week(dated),
        videos_analyzed=len(dated),
        timezone=timezone,
        skipped=skipped,
    )
