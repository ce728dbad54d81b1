from __future__ import annotations

import unittest

from daygrid.config import (
    ConfigError,
    ScheduleConfig,
    start_hour_24,
    with_operating_hours,
    with_time_format,
)


class TestScheduleConfigContract(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = ScheduleConfig()
        self.assertEqual(cfg.operating_hours, 8)
        self.assertEqual(cfg.start_hour, 8)
        self.assertEqual(cfg.time_step, 15)
        self.assertTrue(cfg.use_24h)
        self.assertTrue(cfg.smart_placement)
        self.assertTrue(cfg.restrict_vertical)

    def test_rejects_values_outside_enumerations(self) -> None:
        bad = [
            {"operating_hours": 10},
            {"time_step": 25},
            {"time_step": 45},
            {"meridiem": "XM"},
            {"start_hour": 24},
            {"start_hour": -1},
            {"use_24h": False, "start_hour": 0},
            {"use_24h": False, "start_hour": 13},
        ]
        for kwargs in bad:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ConfigError):
                    ScheduleConfig(**kwargs)

    def test_config_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(ConfigError, ValueError))

    def test_slot_geometry(self) -> None:
        expected = {15: (4, 48.0), 20: (3, 64.0), 30: (2, 96.0), 60: (1, 192.0)}
        for step, (sph, height) in expected.items():
            cfg = ScheduleConfig(time_step=step)
            self.assertEqual(cfg.steps_per_hour, sph)
            self.assertEqual(cfg.slot_height, height)

    def test_start_hour_24_resolution(self) -> None:
        self.assertEqual(start_hour_24(12, "AM", False), 0)
        self.assertEqual(start_hour_24(7, "AM", False), 7)
        self.assertEqual(start_hour_24(12, "PM", False), 12)
        self.assertEqual(start_hour_24(3, "PM", False), 15)
        self.assertEqual(start_hour_24(15, "AM", True), 15)
        self.assertEqual(ScheduleConfig(use_24h=False, start_hour=9, meridiem="PM").start_hour_24, 21)

    def test_full_day_resets_start_hour_to_midnight(self) -> None:
        cfg = with_operating_hours(ScheduleConfig(start_hour=10), 24)
        self.assertEqual(cfg.operating_hours, 24)
        self.assertEqual(cfg.start_hour, 0)

        back = with_operating_hours(cfg, 12)
        self.assertEqual(back.operating_hours, 12)
        self.assertEqual(back.start_hour, 8)

    def test_full_day_in_12h_mode_starts_at_12_am(self) -> None:
        cfg = with_operating_hours(ScheduleConfig(use_24h=False, start_hour=3, meridiem="PM"), 24)
        self.assertEqual(cfg.start_hour, 12)
        self.assertEqual(cfg.meridiem, "AM")
        self.assertEqual(cfg.start_hour_24, 0)

    def test_time_format_toggle_keeps_first_hour(self) -> None:
        cfg = ScheduleConfig(start_hour=15)
        h12 = with_time_format(cfg, False)
        self.assertFalse(h12.use_24h)
        self.assertEqual((h12.start_hour, h12.meridiem), (3, "PM"))
        self.assertEqual(with_time_format(h12, True).start_hour, 15)
        self.assertIs(with_time_format(cfg, True), cfg)

    def test_from_dict(self) -> None:
        cfg = ScheduleConfig.from_dict({"operating_hours": 12, "time_step": 30, "meridiem": "pm", "use_24h": False, "start_hour": 1})
        self.assertEqual(cfg.operating_hours, 12)
        self.assertEqual(cfg.time_step, 30)
        self.assertEqual(cfg.meridiem, "PM")
        self.assertEqual(cfg.start_hour_24, 13)
        self.assertEqual(ScheduleConfig.from_dict(cfg.to_dict()), cfg)
        self.assertEqual(ScheduleConfig.from_dict({}), ScheduleConfig())

    def test_from_dict_rejects_unknown_and_mistyped_keys(self) -> None:
        with self.assertRaises(ConfigError):
            ScheduleConfig.from_dict({"operating_hour": 8})
        with self.assertRaises(ConfigError):
            ScheduleConfig.from_dict({"time_step": "15"})
        with self.assertRaises(ConfigError):
            ScheduleConfig.from_dict({"operating_hours": True})
        with self.assertRaises(ConfigError):
            ScheduleConfig.from_dict({"smart_placement": "yes"})
        with self.assertRaises(ConfigError):
            ScheduleConfig.from_dict(["not", "a", "dict"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
