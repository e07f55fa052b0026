import os
import unittest
from unittest import mock

from content_intel.config import AnalysisConfig


class ConfigTests(unittest.TestCase):
    def test_default_outlier_settings(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = AnalysisConfig.from_env()

        self.assertEqual(config.outlier_min_multiplier, 2.5)
        self.assertEqual(config.outlier_window_days, 90)
        self.assertEqual(config.outlier_limit, 20)

    def test_env_overrides(self):
        env = {
            "INTEL_SHORT_THRESHOLD_SECONDS": "60",
            "INTEL_TITLE_TOP_FRACTION": "0.1",
            "INTEL_GAP_LIMIT": "off",
            "INTEL_MAX_WORKERS": "1",
        }
        with mock.patch.dict(os.environ, env):
            config = AnalysisConfig.from_env()

        self.assertEqual(config.short_threshold_seconds, 60)
        self.assertEqual(config.title_top_fraction, 0.1)
        self.assertIsNone(config.gap_limit)
        self.assertEqual(config.max_workers, 1)

    def test_invalid_values_raise(self):
        with self.assertRaises(ValueError):
            AnalysisConfig(title_top_fraction=0)
        with self.assertRaises(ValueError):
            AnalysisConfig(gap_denominator_floor=0)
        with self.assertRaises(ValueError):
            AnalysisConfig(max_workers=0)

    def test_to_dict(self):
        data = AnalysisConfig().to_dict()
        self.assertEqual(data["gap_limit"], 5)
        self.assertEqual(data["short_threshold_seconds"], 180)


if __name__ == "__main__":
    unittest.main()
