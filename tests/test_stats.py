import unittest
from datetime import datetime, timedelta, timezone

from content_intel.aggregates import by_views, uploads_per_week, weighted_metrics
from content_intel.records import LONG, VideoRecord
from content_intel.stats import mean, median, pearson, percentile, population_std, weighted_average

START = datetime(2025, 1, 6, 12, 0, tzinfo=timezone.utc)


def _video(video_id, views, likes=0, comments=0, days=0, ctr=None, retention=None, impressions=None):
    return VideoRecord(
        id=video_id,
        title=video_id,
        published_at=START + timedelta(days=days),
        duration_seconds=600,
        views=views,
        likes=likes,
        comments=comments,
        video_type=LONG,
        ctr=ctr,
        retention=retention,
        impressions=impressions,
    )


class StatsTests(unittest.TestCase):
    def test_empty_inputs_are_zero(self):
        self.assertEqual(mean([]), 0.0)
        self.assertEqual(median([]), 0.0)
        self.assertEqual(percentile([], 50), 0.0)
        self.assertEqual(population_std([5]), 0.0)

    def test_population_std(self):
        self.assertAlmostEqual(population_std([2, 4, 4, 4, 5, 5, 7, 9]), 2.0)

    def test_percentile_interpolates(self):
        values = [100, 200, 300, 400, 500]
        self.assertEqual(percentile(values, 25), 200)
        self.assertEqual(percentile(values, 50), 300)
        self.assertEqual(percentile(values, 75), 400)
        self.assertAlmostEqual(percentile([1, 2], 50), 1.5)

    def test_pearson(self):
        self.assertAlmostEqual(pearson([1, 2, 3], [2, 4, 6]), 1.0)
        self.assertAlmostEqual(pearson([1, 2, 3], [6, 4, 2]), -1.0)
        self.assertEqual(pearson([1, 1, 1], [1, 2, 3]), 0.0)
        self.assertEqual(pearson([1], [1]), 0.0)
        with self.assertRaises(ValueError):
            pearson([1, 2], [1])

    def test_weighted_average(self):
        self.assertAlmostEqual(weighted_average([0.1, 0.05], [1000, 3000]), 0.0625)
        self.assertAlmostEqual(weighted_average([0.1, None, 0.2], [1, 5, 0]), 0.1)
        self.assertEqual(weighted_average([0.5], [0]), 0.0)


class AggregateTests(unittest.TestCase):
    def test_weighted_ctr_is_not_a_plain_mean(self):
        videos = [
            _video("a", 1000, ctr=0.10, impressions=1000, retention=0.5),
            _video("b", 3000, ctr=0.05, impressions=3000, retention=0.3),
        ]
        metrics = weighted_metrics(videos)

        self.assertAlmostEqual(metrics.ctr, 0.0625)
        self.assertAlmostEqual(metrics.retention, (0.5 * 1000 + 0.3 * 3000) / 4000)

    def test_missing_metrics_stay_none(self):
        metrics = weighted_metrics([_video("a", 100, likes=8, comments=2)])

        self.assertIsNone(metrics.ctr)
        self.assertIsNone(metrics.retention)
        self.assertAlmostEqual(metrics.engagement_rate, 0.1)

    def test_by_views_is_stable(self):
        videos = [_video("a", 10), _video("b", 30), _video("c", 10), _video("d", 30)]
        self.assertEqual([v.id for v in by_views(videos)], ["b", "d", "a", "c"])

    def test_uploads_per_week(self):
        videos = [_video(str(i), 1, days=i * 7) for i in range(5)]
        # 5 uploads spread over 4 weeks
        self.assertAlmostEqual(uploads_per_week(videos), 1.25)
        self.assertEqual(uploads_per_week(videos[:1]), 0.0)

    def test_upload_burst_counts_against_a_full_week(self):
        burst = [
            _video("a", 1),
            VideoRecord("b", "b", START + timedelta(hours=1), 600, 1, 0, 0, LONG),
        ]
        self.assertEqual(uploads_per_week(burst), 2.0)

        same_instant = [_video("a", 1), _video("b", 1)]
        self.assertEqual(uploads_per_week(same_instant), 2.0)


if __name__ == "__main__":
    unittest.main()
