"""Coercion of format arguments to the types the conversions need.

Format arguments are arbitrary Python objects.  Rather than testing for each
numeric type wherever a number is wanted, every argument is first tagged with
its Kind, and each conversion family then asks for exactly one target type
through a single function below.  Failure to coerce is reported by raising
CoercionError; whether that is fatal is for the caller to decide."""

import numbers
from datetime import date
from decimal import Decimal

__all__ = ["Kind", "CoercionError", "kind_of", "as_integer", "as_decimal",
           "as_boolean", "as_text", "hash_of"]

class CoercionError(ValueError):
    pass

class Kind:
    """Tags for the runtime variants of a format argument.  Python has a
    single unbounded integer type, so signed and unsigned integers share
    one tag."""

    none = "none"
    boolean = "boolean"
    integer = "integer"
    real = "real"
    string = "string"
    date = "date"
    other = "other"

def kind_of(value):
    if value is None:
        return Kind.none
    # bool is an Integral, so it has to be checked first.
    if isinstance(value, bool):
        return Kind.boolean
    if isinstance(value, numbers.Integral):
        return Kind.integer
    if isinstance(value, (numbers.Real, Decimal)):
        return Kind.real
    if isinstance(value, str):
        return Kind.string
    if isinstance(value, date):
        return Kind.date
    return Kind.other

def as_integer(value):
    """Return value as an int.  Reals are truncated toward zero; strings
    must spell an integer."""
    kind = kind_of(value)
    if kind == Kind.integer:
        return int(value)
    elif kind == Kind.real:
        try:
            return int(value)
        except (ValueError, OverflowError):
            pass
    elif kind == Kind.string:
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise CoercionError("cannot convert %r to an integer" % (value,))

def as_decimal(value):
    """Return value as a Decimal.  Floats are converted through their
    shortest repr, so 0.1 becomes Decimal('0.1'), not the exact binary
    fraction.  NaN and the infinities come through as Decimal specials."""
    kind = kind_of(value)
    if kind == Kind.integer:
        return Decimal(int(value))
    elif kind == Kind.real:
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(repr(float(value)))
        except OverflowError:
            pass
    elif kind == Kind.string:
        try:
            return Decimal(repr(float(value)))
        except ValueError:
            pass
    raise CoercionError("cannot convert %r to a real number" % (value,))

def as_boolean(value):
    """A value is true only if it prints as "true", ignoring case.  None,
    like any other value, is false."""
    return value is not None and str(value).lower() == "true"

def as_text(value):
    return str(value)

def hash_of(value):
    """Return the hash of value as an unsigned 64-bit integer.  Unhashable
    values fall back to their identity."""
    try:
        h = hash(value)
    except TypeError:
        h = id(value)
    return h & 0xFFFFFFFFFFFFFFFF
