import unittest
from datetime import datetime, timedelta, timezone

from content_intel.analyzers.outliers import detect_competitor_outliers, detect_outliers
from content_intel.config import AnalysisConfig
from content_intel.records import LONG, VideoRecord

NOW = datetime(2025, 4, 1, tzinfo=timezone.utc)


def _video(video_id, views, days_ago=10, channel="Rival"):
    return VideoRecord(
        id=video_id,
        title=video_id,
        published_at=NOW - timedelta(days=days_ago) if days_ago is not None else None,
        duration_seconds=600,
        views=views,
        likes=0,
        comments=0,
        video_type=LONG,
        channel=channel,
    )


def _channel_videos():
    videos = [_video(f"base{i}", 100) for i in range(8)]
    videos.append(_video("hit", 2000, days_ago=5))
    videos.append(_video("old_hit", 2000, days_ago=120))
    return videos


class OutlierTests(unittest.TestCase):
    def test_recent_outlier_is_flagged(self):
        outliers = detect_outliers(_channel_videos(), now=NOW)

        self.assertEqual([o.video.id for o in outliers], ["hit"])
        self.assertEqual(outliers[0].baseline_views, 480)
        self.assertAlmostEqual(outliers[0].multiplier, 2000 / 480)
        self.assertEqual(outliers[0].channel, "Rival")

    def test_wider_window_includes_older_videos(self):
        outliers = detect_outliers(_channel_videos(), window_days=365, now=NOW)
        self.assertEqual(sorted(o.video.id for o in outliers), ["hit", "old_hit"])

    def test_single_hit_among_steady_uploads(self):
        videos = [_video(f"v{i}", 1000, days_ago=30 + i) for i in range(9)]
        videos.append(_video("viral", 5000, days_ago=200))
        outliers = detect_outliers(videos, min_multiplier=2.5, window_days=365, now=NOW)

        self.assertEqual([o.video.id for o in outliers], ["viral"])
        self.assertAlmostEqual(outliers[0].multiplier, 5000 / 1400)

    def test_threshold_is_inclusive(self):
        videos = [_video(f"v{i}", 100) for i in range(4)] + [_video("edge", 400)]
        outliers = detect_outliers(videos, now=NOW)

        self.assertEqual([o.video.id for o in outliers], ["edge"])
        self.assertEqual(outliers[0].multiplier, 2.5)

    def test_undated_videos_are_never_flagged(self):
        videos = [_video(f"v{i}", 100) for i in range(4)] + [_video("undated", 5000, days_ago=None)]
        self.assertEqual(detect_outliers(videos, now=NOW), [])

    def test_not_enough_videos(self):
        self.assertEqual(detect_outliers([_video("solo", 1000)], now=NOW), [])
        self.assertEqual(detect_outliers([], now=NOW), [])

    def test_zero_baseline(self):
        videos = [_video("a", 0), _video("b", 0)]
        self.assertEqual(detect_outliers(videos, min_multiplier=0, now=NOW), [])

    def test_naive_now_is_read_as_utc(self):
        outliers = detect_outliers(_channel_videos(), now=NOW.replace(tzinfo=None))
        self.assertEqual([o.video.id for o in outliers], ["hit"])

    def test_competitor_outliers_merge_and_cap(self):
        big = [_video(f"b{i}", 100, channel="Big") for i in range(4)] + [_video("big_hit", 1000, channel="Big")]
        small = [_video(f"s{i}", 10, channel="Small") for i in range(4)] + [_video("small_hit", 40, channel="Small")]
        videos_by_channel = {"Big": big, "Small": small}

        outliers = detect_competitor_outliers(videos_by_channel, now=NOW)
        self.assertEqual([o.video.id for o in outliers], ["big_hit", "small_hit"])
        self.assertEqual([o.channel for o in outliers], ["Big", "Small"])
        # each channel is measured against its own baseline
        self.assertEqual(outliers[1].baseline_views, 16)

        capped = detect_competitor_outliers(videos_by_channel, now=NOW, config=AnalysisConfig(outlier_limit=1))
        self.assertEqual(len(capped), 1)


if __name__ == "__main__":
    unittest.main()
