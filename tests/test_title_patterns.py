import unittest
from datetime import datetime, timezone

from content_intel.analyzers.titles import analyze_title_patterns, top_subset_size
from content_intel.config import AnalysisConfig
from content_intel.records import LONG, VideoRecord
from content_intel.results import InsufficientData
from content_intel.rules import PatternRule

FILLER_TITLES = ["plain alpha", "plain beta", "plain gamma", "plain delta", "plain epsilon", "plain zeta", "plain eta"]


def _video(video_id, title, views):
    return VideoRecord(
        id=video_id,
        title=title,
        published_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        duration_seconds=600,
        views=views,
        likes=0,
        comments=0,
        video_type=LONG,
    )


def _catalog():
    videos = [
        _video("q1", "Why does this work?", 1000),
        _video("q2", "Is it worth it?", 900),
        _video("p1", "Fixing my desk", 800),
    ]
    for index, title in enumerate(FILLER_TITLES):
        videos.append(_video(f"f{index}", title, 700 - index * 100))
    return videos


class TitlePatternTests(unittest.TestCase):
    def test_top_subset_size(self):
        config = AnalysisConfig()
        self.assertEqual(top_subset_size(10, config), 3)
        self.assertEqual(top_subset_size(50, config), 10)
        self.assertEqual(top_subset_size(2, config), 2)

    def test_question_pattern_lift(self):
        result = analyze_title_patterns(_catalog())

        self.assertEqual(result.top_video_count, 3)
        self.assertEqual(result.total_video_count, 10)
        names = [p.name for p in result.patterns]
        self.assertEqual(names, ["Question Titles"])

        question = result.patterns[0]
        self.assertEqual(question.top_count, 2)
        self.assertEqual(question.all_count, 2)
        self.assertAlmostEqual(question.top_frequency, 2 / 3)
        self.assertAlmostEqual(question.all_frequency, 0.2)
        self.assertAlmostEqual(question.lift, (2 / 3) / 0.2)
        self.assertEqual(question.stats.avg_views, 950)
        self.assertEqual([v.id for v in question.stats.example_videos], ["q1", "q2"])

    def test_single_top_match_is_not_reported(self):
        result = analyze_title_patterns(_catalog())
        self.assertNotIn("First Person (I/My)", [p.name for p in result.patterns])

    def test_insufficient_data_below_minimum(self):
        result = analyze_title_patterns(_catalog()[:9])

        self.assertIsInstance(result, InsufficientData)
        self.assertFalse(result)
        self.assertEqual(result.required, 10)
        self.assertEqual(result.available, 9)

    def test_negative_counts_are_skipped(self):
        videos = _catalog() + [_video("bad", "Broken?", -1)]
        result = analyze_title_patterns(videos)

        self.assertEqual(result.total_video_count, 10)
        self.assertEqual(result.skipped, 1)

    def test_ties_at_the_boundary_keep_input_order(self):
        videos = [_video(f"t{i}", f"same views {chr(97 + i)}", 100) for i in range(10)]
        result = analyze_title_patterns(videos)

        self.assertEqual([v.id for v in result.top_videos[:3]], ["t0", "t1", "t2"])

    def test_custom_rules(self):
        rules = [PatternRule("Plain", lambda text: text.startswith("plain"))]
        config = AnalysisConfig(title_top_min=8)
        result = analyze_title_patterns(_catalog(), rules, config)

        self.assertEqual(result.top_video_count, 8)
        self.assertEqual(result.patterns[0].top_count, 5)
        self.assertEqual(result.patterns[0].all_count, 7)


if __name__ == "__main__":
    unittest.main()
