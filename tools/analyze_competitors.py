#!/usr/bin/env python3
"""
Competitive Content Intelligence
Benchmarks a channel against its competitors from already-fetched video data

Runs 6 analysis modules per report:
1. Title & Thumbnail Patterns
2. Upload Schedule (timezone-aware)
3. Content Formats
4. Benchmark Gaps
5. Outlier Videos
6. Content Gaps

Usage:
    python3 tools/analyze_competitors.py path/to/competitors.json [Timezone/Name]
"""

import json
import sys
from pathlib import Path

from content_intel.config import AnalysisConfig
from content_intel.services.intel_runner import is_insufficient, run_from_raw



def print_report_summary(report):
    """Console summary of a finished report"""
    subject = report.get("subject", {})
    summary = report.get("summary", {})

    print("\n✅ Analysis complete!")
    print(f"📺 Channel: {subject.get('channel', '')}")
    print(f"🥊 Competitors Analyzed: {summary.get('competitors_analyzed', 0)}")

    titles = subject.get("titlePatterns", {})
    if is_insufficient(titles):
        print(f"📝 Title Patterns: not enough data ({titles.get('available')}/{titles.get('required')} videos)")
    else:
        names = ", ".join(p["name"] for p in titles.get("patterns", [])[:3]) or "none"
        print(f"📝 Strongest Title Patterns: {names}")

    schedule = subject.get("uploadSchedule", {})
    if is_insufficient(schedule):
        print(f"📅 Upload Schedule: not enough data ({schedule.get('available')}/{schedule.get('required')} videos)")
    else:
        best_day = (schedule.get("bestDay") or {}).get("name", "n/a")
        best_time = (schedule.get("bestTime") or {}).get("name", "n/a")
        print(f"📅 Best Slot: {best_day} / {best_time} ({schedule.get('timezone')})")
        print(f"📅 Consistency Score: {schedule.get('consistencyScore')}/100")

    print(f"📊 Benchmarks: {summary.get('benchmark_metrics', 0)} metrics, "
          f"{summary.get('metrics_below_competitors', 0)} below competitors")
    for gap in report.get("benchmarks", []):
        print(f"   - {gap['metric']}: {gap['gapPercent']:+.1f}% ({gap['status']})")

    print(f"🚀 Competitor Outliers: {summary.get('competitor_outliers', 0)}")
    print(f"🔍 Content Gaps: {summary.get('content_gaps', 0)}")
    for gap in report.get("contentGaps", []):
        print(f"   - {gap['pattern']} (used by {gap['competitorCount']} competitors)")

    if summary.get("records_skipped"):
        quality = report.get("dataQuality", {})
        print(f"⚠️ {quality.get('recordsSkipped')} of {quality.get('recordsTotal')} records skipped")



def main():
    """Main execution function"""
    if len(sys.argv) not in (2, 3):
        print("❌ Error: Missing input file path")
        print("\nUsage:")
        print("  python3 tools/analyze_competitors.py path/to/competitors.json [Timezone/Name]")
        sys.exit(1)

    data_file = sys.argv[1]
    data_path = Path(data_file)
    timezone = sys.argv[2] if len(sys.argv) == 3 else None

    if not data_path.exists():
        print(f"❌ Error: File not found: {data_file}")
        sys.exit(1)

    try:
        print(f"📂 Loading data from: {data_file}")
        with open(data_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        print("\n🔬 Competitive Content Intelligence")
        print("=" * 50)
        report = run_from_raw(data, timezone=timezone, config=AnalysisConfig.from_env(), logger=print)
        print_report_summary(report)

        output_file = data_path.parent / 'intel_analysis.json'
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        print(f"\n📁 Analysis saved to: {output_file}")

    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
