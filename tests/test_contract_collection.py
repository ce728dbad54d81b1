from __future__ import annotations

import datetime as dt
import unittest

from daygrid.collection import find_owner, iter_appointments, replace_start_time, start_from_minutes
from daygrid.model import Appointment, Patient


def _appt(aid: str, hhmm: str, dur: int, pid: str) -> Appointment:
    hh, mm = (int(x) for x in hhmm.split(":"))
    return Appointment(id=aid, start_time=dt.datetime(2025, 3, 2, hh, mm), duration_min=dur, patient_id=pid)


class TestCollectionContract(unittest.TestCase):
    def setUp(self) -> None:
        self.p1 = Patient(id="p1", name="Ada", appointments=(_appt("a1", "09:00", 30, "p1"),))
        self.p2 = Patient(
            id="p2",
            name="Alan",
            appointments=(_appt("b1", "10:00", 60, "p2"), _appt("b2", "14:00", 15, "p2")),
        )
        self.patients = (self.p1, self.p2)

    def test_iter_and_find_owner(self) -> None:
        self.assertEqual([a.id for a in iter_appointments(self.patients)], ["a1", "b1", "b2"])
        owner = find_owner(self.patients, "b2")
        self.assertIsNotNone(owner)
        self.assertIs(owner[0], self.p2)
        self.assertEqual(owner[1].id, "b2")
        self.assertIsNone(find_owner(self.patients, "nope"))

    def test_replace_start_time_is_copy_on_write(self) -> None:
        new_start = dt.datetime(2025, 3, 2, 11, 15)
        out = replace_start_time(self.patients, "b1", new_start)

        self.assertIsInstance(out, tuple)
        self.assertIs(out[0], self.p1)
        self.assertIsNot(out[1], self.p2)
        self.assertEqual(out[1].appointments[0].start_time, new_start)
        self.assertIs(out[1].appointments[1], self.p2.appointments[1])
        # input untouched
        self.assertEqual(self.p2.appointments[0].start_time, dt.datetime(2025, 3, 2, 10, 0))

    def test_replace_unknown_id_passes_through(self) -> None:
        out = replace_start_time(list(self.patients), "zzz", dt.datetime(2025, 3, 2))
        self.assertEqual(out, self.patients)
        self.assertIs(out[0], self.p1)

    def test_start_from_minutes_keeps_date_and_rolls(self) -> None:
        orig = dt.datetime(2025, 3, 2, 9, 0, 30)
        self.assertEqual(start_from_minutes(orig, 570), dt.datetime(2025, 3, 2, 9, 30))
        self.assertEqual(start_from_minutes(orig, -60), dt.datetime(2025, 3, 1, 23, 0))
        self.assertEqual(start_from_minutes(orig, 1440 + 30), dt.datetime(2025, 3, 3, 0, 30))


if __name__ == "__main__":
    unittest.main(verbosity=2)
