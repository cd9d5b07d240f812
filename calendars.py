"""Calendar and time zone input for the date/time conversions.

A Calendar is passed explicitly to each formatting call (or taken from
printfvars), so that rendering a date never depends on the process's local
time zone or locale."""

from collections import namedtuple
from datetime import datetime, timedelta, timezone

from coercion import CoercionError, Kind, as_decimal, kind_of

__all__ = ["Calendar", "Moment", "EPOCH"]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

NANOS = 10 ** 9

class Moment(namedtuple("Moment", "year month day hour minute second "
                                  "nanosecond weekday yday offset zone "
                                  "epoch_nanos")):
    """The calendar fields of an instant as seen in one time zone.  weekday
    counts from Monday = 0; offset is in seconds east of UTC."""

    __slots__ = ()

    @property
    def hour12(self):
        h = self.hour % 12
        return 12 if h == 0 else h

    @property
    def millisecond(self):
        return self.nanosecond // 1000000

    @property
    def epoch_seconds(self):
        return self.epoch_nanos // NANOS

    @property
    def epoch_millis(self):
        return self.epoch_nanos // 1000000

    @property
    def rfc822_zone(self):
        sign = "-" if self.offset < 0 else "+"
        minutes = abs(self.offset) // 60
        return "%s%02d%02d" % (sign, minutes // 60, minutes % 60)

class Calendar(object):
    """A time zone together with the names used to spell dates in it."""

    weekdays = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
                "Saturday", "Sunday")
    short_weekdays = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
    months = ("January", "February", "March", "April", "May", "June",
              "July", "August", "September", "October", "November",
              "December")
    short_months = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
    am_pm = ("AM", "PM")

    def __init__(self, tz=timezone.utc, weekdays=None, short_weekdays=None,
                 months=None, short_months=None, am_pm=None):
        self.tz = tz
        if weekdays is not None: self.weekdays = tuple(weekdays)
        if short_weekdays is not None: self.short_weekdays = tuple(short_weekdays)
        if months is not None: self.months = tuple(months)
        if short_months is not None: self.short_months = tuple(short_months)
        if am_pm is not None: self.am_pm = tuple(am_pm)

    def __repr__(self):
        return "Calendar(tz=%r)" % (self.tz,)

    def instant(self, value):
        """Return an aware datetime and the nanosecond of its second for a
        date-like value: a datetime (naive ones are taken to be in this
        calendar's zone), a date (midnight), a real number of seconds since
        the epoch, or an integer number of nanoseconds since the epoch."""
        kind = kind_of(value)
        if kind == Kind.date:
            if not isinstance(value, datetime):
                return datetime(value.year, value.month, value.day,
                                tzinfo=self.tz), 0
            if value.utcoffset() is None:
                value = value.replace(tzinfo=self.tz)
            return value, value.microsecond * 1000
        elif kind == Kind.integer:
            nanos = int(value)
        elif kind == Kind.real:
            try:
                nanos = int(as_decimal(value) * NANOS)
            except (ValueError, OverflowError):
                raise CoercionError("%r is not a finite number of seconds"
                                    % (value,))
        else:
            raise CoercionError("cannot convert %r to a date" % (value,))

        seconds, nanosecond = divmod(nanos, NANOS)
        try:
            dt = EPOCH + timedelta(seconds=seconds,
                                   microseconds=nanosecond // 1000)
            return dt.astimezone(self.tz), nanosecond
        except OverflowError:
            raise CoercionError("%r is outside the supported date range"
                                % (value,))

    def moment(self, value):
        dt, nanosecond = self.instant(value)
        offset = int(dt.utcoffset().total_seconds())
        delta = dt - EPOCH
        return Moment(year=dt.year, month=dt.month, day=dt.day,
                      hour=dt.hour, minute=dt.minute, second=dt.second,
                      nanosecond=nanosecond,
                      weekday=dt.weekday(),
                      yday=dt.timetuple().tm_yday,
                      offset=offset,
                      zone=dt.tzname() or "",
                      epoch_nanos=(delta.days * 86400 + delta.seconds) * NANOS
                                  + nanosecond)
