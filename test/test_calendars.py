import unittest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from calendars import EPOCH, Calendar
from coercion import CoercionError
from printf import TypeCoercionFailure, format

# Friday, 7 May 2021, 14:03:09.123456 UTC
when = datetime(2021, 5, 7, 14, 3, 9, 123456)
epoch_seconds = 1620396189

# 9999-12-31 22:56:40 and 0001-01-01 00:00:00 UTC
last_nanos = 253402297000 * 10 ** 9
first_nanos = -62135596800 * 10 ** 9

class CalendarTest(unittest.TestCase):
    def testMomentFromDatetime(self):
        m = Calendar().moment(when)
        self.assertEqual((2021, 5, 7, 14, 3, 9), m[:6])
        self.assertEqual(123456000, m.nanosecond)
        self.assertEqual(4, m.weekday)
        self.assertEqual(127, m.yday)
        self.assertEqual(0, m.offset)
        self.assertEqual("UTC", m.zone)
        self.assertEqual(epoch_seconds, m.epoch_seconds)
        self.assertEqual(epoch_seconds * 1000 + 123, m.epoch_millis)
        self.assertEqual(2, m.hour12)
        self.assertEqual(123, m.millisecond)

    def testMomentFromNumbers(self):
        cal = Calendar()
        m = cal.moment(epoch_seconds * 10 ** 9 + 123456789)
        self.assertEqual((2021, 5, 7, 14, 3, 9), m[:6])
        self.assertEqual(123456789, m.nanosecond)

        m = cal.moment(epoch_seconds + 0.5)
        self.assertEqual(9, m.second)
        self.assertEqual(500000000, m.nanosecond)

        m = cal.moment(Decimal("-1.5"))
        self.assertEqual((1969, 12, 31, 23, 59, 58), m[:6])
        self.assertEqual(500000000, m.nanosecond)
        self.assertEqual(-1500000000, m.epoch_nanos)

    def testMomentFromDate(self):
        m = Calendar().moment(date(2021, 5, 7))
        self.assertEqual((2021, 5, 7, 0, 0, 0, 0), m[:7])
        self.assertEqual(12, m.hour12)

    def testZones(self):
        pacific = Calendar(timezone(timedelta(hours=-8), "PST"))
        m = pacific.moment(epoch_seconds * 10 ** 9)
        self.assertEqual((2021, 5, 7, 6, 3), m[:5])
        self.assertEqual("-0800", m.rfc822_zone)
        self.assertEqual("PST", m.zone)
        self.assertEqual(epoch_seconds, m.epoch_seconds)

        # Naive datetimes are wall-clock times in the calendar's zone.
        m = pacific.moment(when)
        self.assertEqual(14, m.hour)
        self.assertEqual(epoch_seconds + 8 * 3600, m.epoch_seconds)

        # Aware datetimes keep their own zone.
        india = timezone(timedelta(hours=5, minutes=30))
        m = pacific.moment(when.replace(tzinfo=india))
        self.assertEqual(14, m.hour)
        self.assertEqual("+0530", m.rfc822_zone)
        self.assertEqual(epoch_seconds - 5 * 3600 - 1800, m.epoch_seconds)

    def testNotADate(self):
        cal = Calendar()
        for value in ("2021-05-07", None, True, float("nan"), [1], 10 ** 40):
            self.assertRaises(CoercionError, cal.moment, value)

        # In range as UTC, but not once moved into the calendar's zone.
        east = Calendar(timezone(timedelta(hours=5)))
        self.assertRaises(CoercionError, east.moment, last_nanos)
        west = Calendar(timezone(timedelta(hours=-5)))
        self.assertRaises(CoercionError, west.moment, first_nanos)
        self.assertEqual(9999, Calendar().moment(last_nanos).year)

    def testEpoch(self):
        m = Calendar().moment(EPOCH)
        self.assertEqual(0, m.epoch_nanos)
        self.assertEqual(3, m.weekday)

class DateFormatTest(unittest.TestCase):
    def formatEquals(self, result, control, *args, **kwargs):
        self.assertEqual(result, format(control, *args, **kwargs))

    def testFields(self):
        for field, result in (("Y", "2021"), ("y", "21"), ("C", "20"),
                              ("m", "05"), ("d", "07"), ("e", "7"),
                              ("B", "May"), ("b", "May"), ("h", "May"),
                              ("A", "Friday"), ("a", "Fri"), ("j", "127"),
                              ("H", "14"), ("I", "02"), ("k", "14"),
                              ("l", "2"), ("M", "03"), ("S", "09"),
                              ("L", "123"), ("N", "123456000"), ("p", "pm"),
                              ("z", "+0000"), ("Z", "UTC"),
                              ("s", "1620396189"), ("Q", "1620396189123")):
            self.formatEquals(result, "%t" + field, when)

    def testUpperCase(self):
        self.formatEquals("PM", "%Tp", when)
        self.formatEquals("MAY", "%TB", when)
        self.formatEquals("FRIDAY", "%TA", when)

    def testComposites(self):
        self.formatEquals("14:03", "%tR", when)
        self.formatEquals("14:03:09", "%tT", when)
        self.formatEquals("02:03:09 PM", "%tr", when)
        self.formatEquals("05/07/21", "%tD", when)
        self.formatEquals("2021-05-07", "%tF", when)
        self.formatEquals("Fri May 07 14:03:09 UTC 2021", "%tc", when)
        self.formatEquals("FRI MAY 07 14:03:09 UTC 2021", "%Tc", when)

    def testArgumentsAndWidth(self):
        self.formatEquals("2021-05-07 14:03", "%tF %<tR", when)
        self.formatEquals("May 7, 2021", "%1$tB %1$te, %1$tY", when)
        self.formatEquals("2021  |", "%-6tY|", when)
        self.formatEquals("    14", "%6tH", when)
        self.formatEquals("x 2021", "%2$s %1$tY", when, "x")

    def testEpochValues(self):
        self.formatEquals("123456789", "%tN", epoch_seconds * 10 ** 9 + 123456789)
        self.formatEquals("14:03:09.500", "%tT.%<tL", epoch_seconds + 0.5)
        self.formatEquals("00:00", "%tR", date(2021, 5, 7))

    def testCalendar(self):
        pacific = Calendar(timezone(timedelta(hours=-8), "PST"))
        self.formatEquals("06:03 -0800 PST", "%tR %<tz %<tZ",
                          epoch_seconds * 10 ** 9, calendar=pacific)
        french = Calendar(months=["janvier", "f\xe9vrier", "mars", "avril",
                                  "mai", "juin", "juillet", "ao\xfbt",
                                  "septembre", "octobre", "novembre",
                                  "d\xe9cembre"],
                          am_pm=["am", "pm"])
        self.formatEquals("7 mai 2021", "%te %<tB %<tY", when, calendar=french)
        self.formatEquals("May", "%tb", when, calendar=french)

    def testNotADate(self):
        self.formatEquals("%tY", "%tY", "2021")
        self.formatEquals("<%-5Tc>", "<%-5Tc>", "x")
        self.formatEquals("%tY 2", "%tY %d", True, 2)
        self.assertRaises(TypeCoercionFailure, format, "%tY", "2021",
                          strict=True)
        self.assertRaises(TypeCoercionFailure, format, "%tY", None,
                          strict=True)

        east = Calendar(timezone(timedelta(hours=5)))
        self.formatEquals("%tY", "%tY", last_nanos, calendar=east)
        self.assertRaises(TypeCoercionFailure, format, "%tY", last_nanos,
                          calendar=east, strict=True)

if __name__ == "__main__":
    unittest.main()
