from __future__ import annotations

import unittest

from calpick.config import ConfigError, config_from_dict, descriptor_from_dict
from calpick.model import CalendarDate, RangeSelection, TimeOfDay
from calpick.presets import FixedRange, MonthPeriod, RelativeDays


def D(s: str) -> CalendarDate:
    return CalendarDate.parse(s)


class TestConfigContract(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = config_from_dict({})
        self.assertEqual(cfg.mode, "single")
        self.assertFalse(cfg.time_tracking)
        self.assertEqual((cfg.start_time, cfg.end_time), (TimeOfDay(0, 0), TimeOfDay(23, 59)))
        self.assertEqual(cfg.predefined_ranges, ())

    def test_full_object(self) -> None:
        cfg = config_from_dict(
            {
                "mode": "multi_month",
                "time_tracking": True,
                "start_time": "09:00",
                "end_time": "17:30",
                "min_date": "2024-01-01",
                "disabled_dates": ["2024-03-25"],
                "initial_range": {"start": "2024-03-23", "end": "2024-03-26"},
                "predefined_ranges": [
                    {"key": "last7days", "label": "Last 7 days", "range": {"kind": "last_days", "days": 7}},
                    {"key": "custom", "label": "Custom Dates"},
                ],
                "preset": "custom",
            }
        )
        self.assertEqual(cfg.mode, "multi-month")
        self.assertEqual(cfg.start_time, TimeOfDay(9, 0))
        self.assertEqual(cfg.end_time, TimeOfDay(17, 30))
        self.assertEqual(cfg.min_date, D("2024-01-01"))
        self.assertEqual(cfg.disabled_dates, (D("2024-03-25"),))
        self.assertEqual(cfg.initial_range, RangeSelection(D("2024-03-23"), D("2024-03-26")))
        self.assertEqual([p.key for p in cfg.predefined_ranges], ["last7days", "custom"])
        self.assertEqual(cfg.predefined_ranges[0].descriptor, RelativeDays(-6, 0))
        self.assertIsNone(cfg.predefined_ranges[1].descriptor)
        self.assertEqual(cfg.preset, "custom")

    def test_descriptor_kinds(self) -> None:
        self.assertEqual(descriptor_from_dict({"kind": "relative", "start_offset": -3}), RelativeDays(-3, 0))
        self.assertEqual(descriptor_from_dict({"kind": "month", "offset": -1}), MonthPeriod(-1))
        self.assertEqual(
            descriptor_from_dict({"kind": "fixed", "start": "2024-03-01", "end": "2024-03-04"}),
            FixedRange(D("2024-03-01"), D("2024-03-04")),
        )

    def test_malformed_objects_raise_config_error(self) -> None:
        bad = [
            [],
            {"mode": "week"},
            {"time_tracking": "yes"},
            {"start_time": "25:00"},
            {"min_date": "2024-02-30"},
            {"disabled_dates": "2024-03-25"},
            {"initial_range": ["2024-03-23"]},
            {"predefined_ranges": [{"label": "no key"}]},
            {"predefined_ranges": [{"key": "x", "range": {"kind": "weeks"}}]},
            {"predefined_ranges": [{"key": "x", "range": {"kind": "last_days", "days": 0}}]},
            {"predefined_ranges": [{"key": "x", "range": {"kind": "relative", "start_offset": True}}]},
        ]
        for obj in bad:
            with self.subTest(obj=obj):
                with self.assertRaises(ConfigError):
                    config_from_dict(obj)

    def test_end_only_initial_range_is_rejected(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            config_from_dict({"mode": "range", "initial_range": {"end": "2024-03-26"}})
        self.assertIn("initial_range.end requires initial_range.start", str(ctx.exception))

        cfg = config_from_dict({"mode": "range", "initial_range": {"start": "2024-03-26"}})
        self.assertTrue(cfg.initial_range.is_partial)

    def test_config_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(ConfigError, ValueError))


if __name__ == "__main__":
    unittest.main(verbosity=2)
