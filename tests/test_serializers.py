import json
import unittest
from datetime import datetime, timezone

from content_intel.analyzers.benchmark import compute_benchmark_gap
from content_intel.records import SHORT, VideoRecord
from content_intel.results import InsufficientData
from content_intel.serializers import result_to_dict, video_to_dict


class SerializerTests(unittest.TestCase):
    def test_video_to_dict(self):
        video = VideoRecord(
            id="abc123",
            title="Clip",
            published_at=datetime(2025, 2, 1, 8, 0, tzinfo=timezone.utc),
            duration_seconds=40,
            views=200,
            likes=9,
            comments=1,
            video_type=SHORT,
        )
        data = video_to_dict(video)

        self.assertEqual(data["video_url"], "https://youtube.com/watch?v=abc123")
        self.assertEqual(data["publishedAt"], "2025-02-01T08:00:00+00:00")
        self.assertEqual(data["engagementRate"], 5.0)
        self.assertEqual(data["type"], "short")

    def test_insufficient_data(self):
        data = result_to_dict(InsufficientData("titlePatterns", 10, 4, "too few"))
        self.assertEqual(data["status"], "insufficient_data")
        self.assertEqual(data["available"], 4)

    def test_lists_and_rounding(self):
        gaps = [compute_benchmark_gap(100, [30], metric="avgViews")]
        data = result_to_dict(gaps)

        self.assertEqual(data[0]["gapPercent"], 233.3)
        self.assertEqual(data[0]["status"], "above")
        json.dumps(data)

    def test_unknown_type_raises(self):
        with self.assertRaises(TypeError):
            result_to_dict(object())


if __name__ == "__main__":
    unittest.main()
