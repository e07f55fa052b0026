"""Competitive report runner wrapped around the deterministic analyzer modules."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from content_intel.analyzers.benchmark import benchmark_channels, channel_metrics, peer_distribution
from content_intel.analyzers.formats import categorize_formats
from content_intel.analyzers.gaps import find_content_gaps
from content_intel.analyzers.outliers import detect_competitor_outliers, detect_outliers
from content_intel.analyzers.schedule import analyze_upload_schedule, resolve_timezone
from content_intel.analyzers.titles import analyze_title_patterns
from content_intel.config import AnalysisConfig
from content_intel.records import ChannelSnapshot, NormalizationReport, load_channel_snapshot
from content_intel.results import InsufficientData
from content_intel.rules import PatternRule, default_content_type_rules, default_gap_rules, default_title_rules
from content_intel.serializers import result_to_dict



def _emit(logger: Optional[Callable[[str], None]], message: str) -> None:
    if logger:
        logger(message)



def profile_channel(
    snapshot: ChannelSnapshot,
    timezone: str,
    config: AnalysisConfig,
    title_rules: Sequence[PatternRule],
    type_rules: Sequence[PatternRule],
) -> Dict[str, Any]:
    """Single-channel analyses; safe to run concurrently for different channels."""
    return {
        "channel": snapshot.name,
        "channelId": snapshot.channel_id,
        "metrics": result_to_dict(channel_metrics(snapshot, config)),
        "titlePatterns": result_to_dict(analyze_title_patterns(snapshot.videos, title_rules, config)),
        "uploadSchedule": result_to_dict(analyze_upload_schedule(snapshot.videos, timezone, config)),
        "contentFormats": result_to_dict(
            categorize_formats(snapshot.videos, type_rules, config.short_threshold_seconds, config)
        ),
    }



def _profile_all(
    snapshots: Sequence[ChannelSnapshot],
    timezone: str,
    config: AnalysisConfig,
    title_rules: Sequence[PatternRule],
    type_rules: Sequence[PatternRule],
) -> List[Dict[str, Any]]:
    if config.max_workers == 1 or len(snapshots) < 2:
        return [profile_channel(s, timezone, config, title_rules, type_rules) for s in snapshots]

    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        futures = [
            executor.submit(profile_channel, s, timezone, config, title_rules, type_rules)
            for s in snapshots
        ]
        return [future.result() for future in futures]



def competitor_labels(competitors: Sequence[ChannelSnapshot]) -> List[str]:
    """
    One distinct label per competitor, used to key per-channel video maps.
    Duplicate or blank names get the channel id (or the position) appended.
    """
    names = [c.name or c.channel_id or f"Competitor {i + 1}" for i, c in enumerate(competitors)]
    labels: List[str] = []
    for index, (competitor, name) in enumerate(zip(competitors, names)):
        label = name
        if names.count(name) > 1:
            suffix = competitor.channel_id if competitor.channel_id and competitor.channel_id != name else str(index + 1)
            label = f"{name} ({suffix})"
        while label in labels:
            label = f"{label} #{index + 1}"
        labels.append(label)
    return labels



def extract_summary_metrics(report: Dict[str, Any]) -> Dict[str, Any]:
    subject = report.get("subject", {})
    schedule = subject.get("uploadSchedule", {})
    return {
        "competitors_analyzed": len(report.get("competitors", [])),
        "benchmark_metrics": len(report.get("benchmarks", [])),
        "metrics_below_competitors": sum(
            1 for gap in report.get("benchmarks", []) if gap.get("status") == "below"
        ),
        "content_gaps": len(report.get("contentGaps", [])),
        "competitor_outliers": len(report.get("competitorOutliers", [])),
        "subject_outliers": len(report.get("subjectOutliers", [])),
        "consistency_score": schedule.get("consistencyScore"),
        "records_skipped": report.get("dataQuality", {}).get("recordsSkipped", 0),
    }



def run_competitive_analysis(
    subject: ChannelSnapshot,
    competitors: Sequence[ChannelSnapshot],
    timezone: str = "UTC",
    config: Optional[AnalysisConfig] = None,
    title_rules: Optional[Sequence[PatternRule]] = None,
    type_rules: Optional[Sequence[PatternRule]] = None,
    gap_rules: Optional[Sequence[PatternRule]] = None,
    now: Optional[datetime] = None,
    logger: Optional[Callable[[str], None]] = None,
) -> Dict[str, Any]:
    """Run every analyzer for one subject channel against a competitor set."""
    config = config or AnalysisConfig.from_env()
    title_rules = title_rules if title_rules is not None else default_title_rules()
    type_rules = type_rules if type_rules is not None else default_content_type_rules()
    gap_rules = gap_rules if gap_rules is not None else default_gap_rules()
    resolve_timezone(timezone)

    _emit(logger, f"Running competitive analysis for: {subject.name or subject.channel_id}")
    _emit(logger, f"Competitors: {len(competitors)} | timezone: {timezone}")

    profiles = _profile_all([subject, *competitors], timezone, config, title_rules, type_rules)
    _emit(logger, "[Channel Profiles] complete")

    benchmarks = benchmark_channels(subject, competitors, config)
    _emit(logger, f"[Benchmarks] {len(benchmarks)} metrics compared")

    competitor_videos = dict(zip(competitor_labels(competitors), (c.videos for c in competitors)))
    outliers = detect_competitor_outliers(competitor_videos, now=now, config=config)
    subject_outliers = detect_outliers(subject.videos, now=now, channel=subject.name, config=config)
    _emit(logger, f"[Outliers] {len(outliers)} competitor outliers, {len(subject_outliers)} subject outliers")

    gaps = find_content_gaps(subject.videos, competitor_videos, gap_rules, config=config)
    _emit(logger, f"[Content Gaps] {len(gaps)} gaps found")

    report: Dict[str, Any] = {
        "subject": profiles[0],
        "competitors": profiles[1:],
        "benchmarks": result_to_dict(benchmarks),
        "peerDistribution": result_to_dict(peer_distribution(competitors)),
        "competitorOutliers": result_to_dict(outliers),
        "subjectOutliers": result_to_dict(subject_outliers),
        "contentGaps": result_to_dict(gaps),
        "config": config.to_dict(),
    }
    report["summary"] = extract_summary_metrics(report)
    return report



def run_from_raw(
    raw_input: Mapping[str, Any],
    timezone: Optional[str] = None,
    config: Optional[AnalysisConfig] = None,
    now: Optional[datetime] = None,
    logger: Optional[Callable[[str], None]] = None,
) -> Dict[str, Any]:
    """
    Run from the JSON input shape:
        {"timezone": "...", "subject": {"channel": {...}, "videos": [...]},
         "competitors": [{"channel": {...}, "videos": [...]}, ...]}
    """
    if "subject" not in raw_input:
        raise ValueError("Input is missing the 'subject' channel")

    config = config or AnalysisConfig.from_env()
    timezone = timezone or raw_input.get("timezone") or "UTC"

    loaded: List[Tuple[ChannelSnapshot, NormalizationReport]] = [
        load_channel_snapshot(raw_input["subject"], config.short_threshold_seconds)
    ]
    for raw_competitor in raw_input.get("competitors") or []:
        loaded.append(load_channel_snapshot(raw_competitor, config.short_threshold_seconds))

    total = sum(report.total for _, report in loaded)
    skipped = sum(report.skipped for _, report in loaded)
    if skipped:
        _emit(logger, f"{skipped} of {total} records skipped (missing dates or negative counts)")

    snapshots = [snapshot for snapshot, _ in loaded]
    report = run_competitive_analysis(
        snapshots[0],
        snapshots[1:],
        timezone=timezone,
        config=config,
        now=now,
        logger=logger,
    )
    report["dataQuality"] = {
        "recordsTotal": total,
        "recordsSkipped": skipped,
        "undated": sum(r.undated for _, r in loaded),
        "negativeCounts": sum(r.negative_counts for _, r in loaded),
    }
    report["summary"] = extract_summary_metrics(report)
    return report



def is_insufficient(section: Any) -> bool:
    return isinstance(section, InsufficientData) or (
        isinstance(section, dict) and section.get("status") == "insufficient_data"
    )
