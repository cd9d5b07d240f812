"""An implementation of Java-style printf formatting.

A format string is ordinary text with embedded directives of the form

    %[argument][flags][width][.precision]conversion

where argument is either n$ (the nth argument, counting from one) or < (the
argument used by the previous directive), flags are any of " 0(+,-#", and
conversion is a letter, or t or T followed by a date/time field letter.
Directives without an argument specifier take the next argument in turn.

By default formatting is lenient: missing arguments and arguments of the
wrong type produce placeholder text.  In strict mode they raise a
PolicyError instead.  Strictness and the Calendar used for dates may be
given to each call; otherwise the defaults in printfvars apply."""

import logging
import math
import re
from collections import namedtuple
from io import StringIO

import coercion
import numerals
import printfvars
from coercion import CoercionError

__all__ = ["Formatter", "format", "FormatError", "MalformedDirective",
           "NoPreviousArgument", "PolicyError", "ArgumentIndexOutOfRange",
           "TypeCoercionFailure"]

log = logging.getLogger(__name__)

class FormatError(Exception):
    def __init__(self, control, *args):
        self.control = control
        self.args = args

    def __str__(self):
        return format(self.control, *self.args, strict=False)

class MalformedDirective(FormatError):
    """A directive the formatter cannot interpret, whatever the mode.  The
    message shows the format string with a caret under the offending
    position."""

    offset = 3
    def __init__(self, template, index, message, *args):
        self.template = template
        self.index = index
        super(MalformedDirective, self).__init__(
            "%s%n  \"%s\"%n%" + str(index + self.offset + 1) + "s",
            format(message, *args, strict=False), template, "^")

class NoPreviousArgument(FormatError, LookupError):
    pass

class PolicyError(FormatError):
    """Base class for errors raised only in strict mode; lenient formatting
    renders placeholder text instead."""

class ArgumentIndexOutOfRange(PolicyError, IndexError):
    pass

class TypeCoercionFailure(PolicyError, TypeError):
    pass

PREVIOUS = "<"

class Arguments(object):
    """The arguments of one formatting call, together with the cursor that
    tracks the next implicit argument and the last argument resolved, and
    the call's strictness and calendar."""

    def __init__(self, args, strict=None, calendar=None, last=None):
        self.args = args
        self.len = len(args)
        self.cur = 0
        self.last = last
        self.strict = printfvars.format_is_strict if strict is None else strict
        self.calendar = printfvars.calendar if calendar is None else calendar

    def resolve(self, spec):
        """Return the argument selected by spec: the next one if spec is
        None, the previous one if it is PREVIOUS, or else the argument with
        the given ordinal.  In lenient mode an index past the end yields
        None."""
        if spec is None:
            index = self.cur
            self.cur += 1
        elif spec == PREVIOUS:
            if self.last is None:
                raise NoPreviousArgument("no previous argument for %%<")
            index = self.last
        else:
            index = spec - 1
        if index >= self.len:
            if self.strict:
                raise ArgumentIndexOutOfRange(
                    "argument %d requested but only %d supplied",
                    index + 1, self.len)
            log.debug("argument %d requested but only %d supplied",
                      index + 1, self.len)
            return None
        self.last = index
        return self.args[index]

class FlagSet(namedtuple("FlagSet",
                         "space zero parens plus left group alternate upper")):
    """The flags of a directive.  Conflicting flags may all be set; the
    conversions decide which one wins."""

    __slots__ = ()
    characters = {" ": "space", "0": "zero", "(": "parens", "+": "plus",
                  "-": "left", ",": "group", "#": "alternate"}

    @classmethod
    def parse(cls, chars, conversion):
        """Characters that are not flags are ignored.  Upper-case output is
        selected by the case of the conversion letter, not by a flag."""
        flags = dict.fromkeys(cls.characters.values(), False)
        for char in chars:
            if char in cls.characters:
                flags[cls.characters[char]] = True
        return cls(upper=conversion.isupper(), **flags)

class Directive(object):
    """Base class for conversion directives.  The parser creates instances
    of (subclasses of) this class, which write their formatted argument to a
    stream via their format methods."""

    placeholder = "NULL"

    def __init__(self, conversion, argspec, flags, width, precision, field,
                 control, start, end):
        self.conversion = conversion; self.argspec = argspec
        self.flags = flags; self.width = width; self.precision = precision
        self.field = field
        self.control = control; self.start = start; self.end = end

    def __str__(self): return self.control[self.start:self.end]
    def __len__(self): return self.end - self.start

    def format(self, stream, args):
        stream.write(self.convert(args.resolve(self.argspec), args))

    def convert(self, value, args):
        """Return the text for value, which is None if there isn't one."""
        raise NotImplementedError

class ConstantChar(Directive):
    """Directives that consume no argument and always produce the same text
    are replaced by that text when the format string is parsed."""

    def __new__(cls, *args):
        return cls.character

class Percent(ConstantChar):
    character = "%"

class Newline(ConstantChar):
    character = "\n"

class Return(ConstantChar):
    character = "\r"

class LineTerminator(ConstantChar):
    character = "\r\n"

# General conversions

class Textual(Directive):
    """Conversions whose result is text: the precision is the maximum
    length, and the width the minimum."""

    def convert(self, value, args):
        s = self.placeholder if value is None else self.text(value)
        if self.precision is not None:
            s = s[:self.precision]
        if self.flags.upper:
            s = s.upper()
        return numerals.justify(s, self.width, self.flags.left)

class String(Textual):
    def text(self, value):
        return coercion.as_text(value)

class Boolean(Textual):
    def convert(self, value, args):
        return super(Boolean, self).convert(coercion.as_boolean(value), args)

    def text(self, value):
        return "true" if value else "false"

class Character(Textual):
    def text(self, value):
        return coercion.as_text(value)[:1]

# Numeric conversions

class Numeric(Directive):
    """Base class for numeric conversions.  Arguments that cannot be coerced
    render as NaN, or raise TypeCoercionFailure in strict mode."""

    def convert(self, value, args):
        try:
            n = self.coerce(value)
        except CoercionError as e:
            if args.strict:
                raise TypeCoercionFailure("%s cannot format %s",
                                          str(self), repr(value)) from e
            log.debug("%s cannot format %r", self, value)
            return numerals.justify("NaN", self.width, self.flags.left)
        return self.render(n)

class Integral(Numeric):
    grouping = False
    prefix = ""

    def coerce(self, value):
        return coercion.as_integer(value)

    def render(self, n):
        s = numerals.pad(self.digits(abs(n)), n < 0, self.flags, self.width,
                         self.prefix if self.flags.alternate else "",
                         self.grouping)
        return s.upper() if self.flags.upper else s

class Decimal(Integral):
    grouping = True

    def digits(self, n):
        return "%d" % n

class Octal(Integral):
    prefix = "0"

    def digits(self, n):
        return "%o" % n

class Hexadecimal(Integral):
    prefix = "0x"

    def digits(self, n):
        return "%x" % n

class HashCode(Hexadecimal):
    def convert(self, value, args):
        if value is None:
            return numerals.justify(self.placeholder, self.width,
                                    self.flags.left)
        return super(HashCode, self).convert(value, args)

    def coerce(self, value):
        return coercion.hash_of(value)

class Real(Numeric):
    grouping = False
    prefix = ""
    default_precision = 6

    def coerce(self, value):
        return coercion.as_decimal(value)

    def render(self, d):
        if d.is_nan():
            return numerals.justify("NaN", self.width, self.flags.left)
        elif d.is_infinite():
            return numerals.pad("Infinity", d.is_signed(),
                                self.flags._replace(zero=False), self.width)
        s = numerals.pad(self.digits(abs(d)), d.is_signed(), self.flags,
                         self.width, self.prefix, self.grouping)
        return s.upper() if self.flags.upper else s

    @property
    def places(self):
        return self.default_precision if self.precision is None \
                                      else self.precision

class Scientific(Real):
    def digits(self, d):
        return numerals.scientific(d, self.places)

class Fixed(Real):
    grouping = True

    def digits(self, d):
        return numerals.trimmed(d, self.default_precision) \
               if self.precision is None \
               else numerals.fixed(d, self.precision)

class GeneralScientific(Real):
    grouping = True

    def digits(self, d):
        return numerals.general(d, self.places)

class HexFloat(Real):
    prefix = "0x"

    def coerce(self, value):
        d = coercion.as_decimal(value)
        if d.is_finite() and math.isinf(float(d)):
            # Too large for a double.
            return coercion.as_decimal(float(d))
        return d

    def digits(self, d):
        return numerals.hexadecimal(float(d), self.precision)

# Date/time conversions

date_fields = {
    "H": lambda m, cal: "%02d" % m.hour,
    "I": lambda m, cal: "%02d" % m.hour12,
    "k": lambda m, cal: "%d" % m.hour,
    "l": lambda m, cal: "%d" % m.hour12,
    "M": lambda m, cal: "%02d" % m.minute,
    "S": lambda m, cal: "%02d" % m.second,
    "L": lambda m, cal: "%03d" % m.millisecond,
    "N": lambda m, cal: "%09d" % m.nanosecond,
    "p": lambda m, cal: cal.am_pm[m.hour >= 12].lower(),
    "z": lambda m, cal: m.rfc822_zone,
    "Z": lambda m, cal: m.zone,
    "s": lambda m, cal: "%d" % m.epoch_seconds,
    "Q": lambda m, cal: "%d" % m.epoch_millis,
    "B": lambda m, cal: cal.months[m.month - 1],
    "b": lambda m, cal: cal.short_months[m.month - 1],
    "h": lambda m, cal: cal.short_months[m.month - 1],
    "A": lambda m, cal: cal.weekdays[m.weekday],
    "a": lambda m, cal: cal.short_weekdays[m.weekday],
    "C": lambda m, cal: "%02d" % (m.year // 100),
    "Y": lambda m, cal: "%04d" % m.year,
    "y": lambda m, cal: "%02d" % (m.year % 100),
    "j": lambda m, cal: "%03d" % m.yday,
    "m": lambda m, cal: "%02d" % m.month,
    "d": lambda m, cal: "%02d" % m.day,
    "e": lambda m, cal: "%d" % m.day,
}

# Composite fields are formatted by recursion, with the date bound as the
# previous argument.
composite_date_controls = {
    "R": "%<tH:%<tM",
    "T": "%<tH:%<tM:%<tS",
    "r": "%<tI:%<tM:%<tS %<Tp",
    "D": "%<tm/%<td/%<ty",
    "F": "%<tY-%<tm-%<td",
    "c": "%<ta %<tb %<td %<tT %<tZ %<tY",
}

class DateTime(Directive):
    """A date/time field.  Values that are not dates are echoed as the
    directive itself, or raise TypeCoercionFailure in strict mode."""

    def convert(self, value, args):
        try:
            moment = args.calendar.moment(value)
        except CoercionError as e:
            if args.strict:
                raise TypeCoercionFailure("%s cannot format %s",
                                          str(self), repr(value)) from e
            log.debug("%s cannot format %r", self, value)
            return str(self)

        if self.field in composite_dates:
            stream = StringIO()
            composite_dates[self.field](stream,
                                        Arguments([value], args.strict,
                                                  args.calendar, last=0))
            s = stream.getvalue()
        else:
            s = date_fields[self.field](moment, args.calendar)
        if self.flags.upper:
            s = s.upper()
        return numerals.justify(s, self.width, self.flags.left)

conversions = dict()

def register_directive(char, cls):
    assert len(char) == 1, "only single-character conversions allowed"
    assert issubclass(cls, Directive), "invalid conversion directive class"
    conversions[char] = cls

for chars, cls in (("%", Percent), ("n", Newline), ("r", Return),
                   ("NR", LineTerminator),
                   ("sS", String), ("bB", Boolean), ("cC", Character),
                   ("d", Decimal), ("o", Octal), ("xX", Hexadecimal),
                   ("hH", HashCode),
                   ("eE", Scientific), ("f", Fixed), ("gG", GeneralScientific),
                   ("aA", HexFloat),
                   ("tT", DateTime)):
    for char in chars:
        register_directive(char, cls)

directive_pattern = re.compile(r"""
    %(?:(?P<constant>[%nNrR])
       |(?P<argspec>[1-9][0-9]*\$|<)?
        (?P<flags>[-\#+\ 0,(]*)
        (?P<width>[1-9][0-9]*)?
        (?:\.(?P<precision>[0-9]+))?
        (?:(?P<conversion>[aAbBcCdeEfgGhHosSxX])
          |(?P<datetime>[tT])(?P<field>[aAbBcCdDeFhHIjklLmMNpQrRsSTyYzZ])?))
""", re.VERBOSE)

def make_directive(match, control):
    char = match.group("constant")
    if char:
        return conversions[char]()

    char = match.group("conversion") or match.group("datetime")
    field = match.group("field")
    if match.group("datetime") and not field:
        raise MalformedDirective(control, match.end(),
                                 "date/time conversion %%%s requires a field "
                                 "letter", char)
    argspec = match.group("argspec")
    if argspec and argspec != PREVIOUS:
        argspec = int(argspec[:-1])
    width = match.group("width")
    precision = match.group("precision")
    return conversions[char](char,
                             argspec or None,
                             FlagSet.parse(match.group("flags"), char),
                             int(width) if width else None,
                             int(precision) if precision is not None else None,
                             field,
                             control, match.start(), match.end())

def parse_format_string(control):
    """Yield a list of strings and Directive instances corresponding to the
    given format string.  Text that does not form a directive, including a
    lone % or one followed by an unknown flag or conversion, is literal."""

    if not isinstance(control, str):
        raise TypeError("format string must be a string")

    i = 0
    for match in directive_pattern.finditer(control):
        if match.start() > i:
            yield control[i:match.start()]
        yield make_directive(match, control)
        i = match.end()
    if i < len(control):
        yield control[i:]

class Formatter(object):
    def __init__(self, control):
        if not isinstance(control, str):
            raise TypeError("expected a format string")
        self.directives = tuple(parse_format_string(control))

    def __call__(self, stream, *args, strict=None, calendar=None):
        if len(args) == 1 and isinstance(args[0], Arguments):
            args = args[0]
        else:
            args = Arguments(args, strict, calendar)
        apply_directives(stream, self.directives, args)
        return args

def apply_directives(stream, directives, args):
    write = stream.write
    for x in directives:
        if isinstance(x, str):
            write(x)
        else:
            x.format(stream, args)

def format(control, *args, strict=None, calendar=None):
    """Return control with its directives replaced by the formatted args.
    control may be a string or a Formatter."""
    stream = StringIO()
    f = control if isinstance(control, Formatter) else Formatter(control)
    try:
        f(stream, *args, strict=strict, calendar=calendar)
        return stream.getvalue()
    finally:
        stream.close()

composite_dates = dict((field, Formatter(control))
                       for field, control in composite_date_controls.items())
