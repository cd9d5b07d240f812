"""Digit rendering and field assembly shared by the numeric conversions.

The digit functions take non-negative finite Decimals (or floats, for
hexadecimal) and return bare digit strings; pad() then adds the sign or
parentheses, any radix prefix, grouping separators, and padding.  Decimal
digits are rounded half-up."""

import re
from decimal import ROUND_HALF_UP, Context, Decimal

__all__ = ["commafy", "justify", "pad", "fixed", "trimmed", "scientific",
           "general", "hexadecimal"]

def commafy(s, commachar=",", comma_interval=3):
    """Add commachars between groups of comma_interval digits."""
    first = len(s) % comma_interval
    a = [s[0:first]] if first > 0 else []
    for i in range(first, len(s), comma_interval):
        a.append(s[i:i + comma_interval])
    return commachar.join(a)

def justify(s, width, left=False):
    if not width or len(s) >= width:
        return s
    return s.ljust(width) if left else s.rjust(width)

def zero_fill(whole, room, grouped):
    """Pad the integer digits whole with zeros to fill room columns."""
    if not grouped:
        return whole.rjust(room, "0")
    # The zeros get grouped along with the digits, so find the largest
    # digit count whose grouped length still fits; justify() makes up any
    # column left over.
    n = len(whole)
    while (n + 1) + n // 3 <= room:
        n += 1
    return commafy(whole.rjust(n, "0"))

def pad(digits, negative, flags, width, prefix="", grouping=False):
    """Assemble a numeric field of at least width columns.  Left
    justification takes precedence over zero padding, and a plus sign over
    a leading space."""
    if negative:
        sign, close = ("(", ")") if flags.parens else ("-", "")
    else:
        sign = "+" if flags.plus else " " if flags.space else ""
        close = ""
    grouped = grouping and flags.group
    whole, dot, rest = digits.partition(".")
    if flags.zero and not flags.left and width:
        room = width - len(sign) - len(prefix) - len(dot) - len(rest) - len(close)
        whole = zero_fill(whole, room, grouped)
    elif grouped:
        whole = commafy(whole)
    return justify(sign + prefix + whole + dot + rest + close,
                   width, flags.left)

def context(d, digits):
    return Context(prec=max(d.adjusted(), 0) + digits + 2,
                   rounding=ROUND_HALF_UP)

def fixed(d, precision):
    """Digits of d with exactly precision fraction digits."""
    q = d.quantize(Decimal(1).scaleb(-precision),
                   context=context(d, precision))
    return "{:f}".format(q)

def trimmed(d, most=6):
    """Digits of d with at most most fraction digits, but at least one."""
    whole, _, fraction = fixed(d, most).partition(".")
    return whole + "." + (fraction.rstrip("0") or "0")

def scientific(d, precision):
    """Digits of d as one integer digit, precision fraction digits and a
    signed exponent of at least two digits."""
    if d:
        ctx = Context(prec=precision + 1, rounding=ROUND_HALF_UP)
        r = ctx.plus(d)
        exponent = r.adjusted()
        mantissa = r.scaleb(-exponent, context=ctx)
    else:
        exponent = 0
        mantissa = Decimal(0)
    return "%se%s%02d" % (fixed(mantissa, precision),
                          "-" if exponent < 0 else "+", abs(exponent))

def general(d, precision):
    """Digits of d rounded to precision significant digits, in scientific
    form if the rounded value is below 10**-4 or at least 10**precision
    and in fixed form otherwise."""
    precision = max(precision, 1)
    if not d:
        return fixed(d, precision - 1)
    r = Context(prec=precision, rounding=ROUND_HALF_UP).plus(d)
    exponent = r.adjusted()
    if exponent < -4 or exponent >= precision:
        return scientific(d, precision - 1)
    return fixed(r, precision - exponent - 1)

float_hex = re.compile(r"0x([01])\.([0-9a-f]+)p([-+][0-9]+)$")

def hexadecimal(f, precision=None):
    """Digits of the float f in hexadecimal floating point, without the 0x
    prefix: 1.8p1 for 3.0.  Without a precision, trailing zeros of the
    fraction are dropped; with one, the fraction is rounded half-up to that
    many hexadecimal digits."""
    lead, fraction, exponent = float_hex.match(f.hex()).groups()
    exponent = int(exponent)
    if precision is None:
        fraction = fraction.rstrip("0") or "0"
    else:
        places = min(max(precision, 1), len(fraction))
        shift = 4 * (len(fraction) - places)
        n = int(lead + fraction, 16)
        if shift:
            n = (n + (1 << (shift - 1))) >> shift
        lead, rest = divmod(n, 16 ** places)
        if lead > 1:
            # Rounded up past the leading digit: renormalize.
            lead, rest, exponent = 1, 0, exponent + 1
        lead = str(lead)
        fraction = "%0*x" % (places, rest)
    return "%s.%sp%d" % (lead, fraction, exponent)
