import unittest
from datetime import datetime, timezone

from content_intel.analyzers.formats import categorize_formats
from content_intel.records import LONG, SHORT, VideoRecord
from content_intel.results import InsufficientData


def _video(video_id, title, duration, views, video_type=None):
    if video_type is None:
        video_type = SHORT if 0 < duration <= 180 else LONG
    return VideoRecord(
        id=video_id,
        title=title,
        published_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        duration_seconds=duration,
        views=views,
        likes=0,
        comments=0,
        video_type=video_type,
    )


def _mixed_videos():
    return [
        _video("t1", "How to solder", 100, 100),
        _video("t2", "Guide to wiring", 900, 300),
        _video("r1", "Camera review", 900, 200),
        _video("o1", "Sunset", 60, 50),
    ]


class FormatTests(unittest.TestCase):
    def test_type_buckets(self):
        result = categorize_formats(_mixed_videos())

        names = [bucket.name for bucket in result.type_stats]
        self.assertEqual(names, ["Tutorial/How-To", "Review/Reaction", "Other"])
        tutorial = result.type_stats[0]
        self.assertEqual(tutorial.count, 2)
        self.assertEqual(tutorial.percentage, 50.0)
        self.assertEqual(tutorial.avg_views, 200)
        self.assertEqual(tutorial.top_video.id, "t2")
        self.assertAlmostEqual(sum(b.percentage for b in result.type_stats), 100.0)

    def test_every_video_lands_in_one_type_bucket(self):
        result = categorize_formats(_mixed_videos())
        self.assertEqual(sum(b.count for b in result.type_stats), result.total_videos)

    def test_duration_buckets_always_present(self):
        result = categorize_formats([_video("l1", "Long one", 900, 10)])

        self.assertEqual([b.name for b in result.duration_stats], ["Short Form", "Long Form"])
        self.assertEqual(result.duration_stats[0].count, 0)
        self.assertEqual(result.duration_stats[0].percentage, 0.0)
        self.assertIsNone(result.duration_stats[0].top_video)
        self.assertEqual(result.duration_stats[1].percentage, 100.0)

    def test_duration_threshold_override(self):
        result = categorize_formats(_mixed_videos(), duration_threshold_seconds=1000)

        self.assertEqual(result.duration_stats[0].count, 4)
        self.assertEqual(result.duration_threshold_seconds, 1000)

    def test_unknown_duration_uses_recorded_type(self):
        result = categorize_formats([_video("s1", "clip", 0, 10, video_type=SHORT)])
        self.assertEqual(result.duration_stats[0].count, 1)

    def test_count_ties_keep_rule_order(self):
        videos = [
            _video("v1", "My vlog", 900, 10),
            _video("r1", "Honest review", 900, 10),
        ]
        result = categorize_formats(videos)
        self.assertEqual([b.name for b in result.type_stats], ["Review/Reaction", "Vlog/Behind-the-Scenes"])

    def test_empty_input(self):
        result = categorize_formats([])
        self.assertIsInstance(result, InsufficientData)
        self.assertEqual(result.available, 0)


if __name__ == "__main__":
    unittest.main()
