"""Defaults for printf formatting.

These settings apply to calls that do not pass the corresponding keyword
argument.  Rebind them for the dynamic extent of a with-statement using
bindings:

    with bindings(printfvars, format_is_strict=True):
        ...
"""

import os
from calendars import Calendar

# Raise PolicyError for missing or ill-typed arguments instead of rendering
# placeholders.
format_is_strict = os.environ.get("PRINTF_STRICT", "").lower() in \
    ("1", "true", "yes", "on")

# Time zone and names for the date/time conversions.
calendar = Calendar()
