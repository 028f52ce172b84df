"""Key parsers, parameter checkers and error helpers shared by resources."""
import re
from typing import Iterable, Optional

# ids are stored as 64-bit integers at most
MIN_INT = -(2 ** 63)
MAX_INT = 2 ** 63 - 1

_INT_RE = re.compile(r"-?[0-9]+")


class BadKeyError(ValueError):
    """A resource key is missing or of the wrong type."""


def parse_int(s: str) -> int:
    """Parse a plain decimal integer that fits a 64-bit column.

    Unlike ``int()`` this rejects surrounding whitespace, ``_`` separators,
    a leading ``+`` and non-ASCII digits.
    """
    if not isinstance(s, str) or _INT_RE.fullmatch(s) is None:
        raise ValueError(f"invalid integer: {s!r}")
    value = int(s)
    if not MIN_INT <= value <= MAX_INT:
        raise ValueError(f"integer out of range: {s}")
    return value


def get_int_key(s: str) -> int:
    """Parse an integer key from its query string form."""
    return parse_int(s)


def is_int(s: str) -> Optional[Exception]:
    """Checker for integer-valued query parameters."""
    try:
        parse_int(s)
    except ValueError:
        return ValueError("must be an integer")
    return None


def required(values: dict) -> list[Exception]:
    """One error per absent (None) entry, in key order.

    Presence is all that is checked: an empty string is a value.
    """
    return [
        ValueError(f"'{name}' is required")
        for name in sorted(values)
        if values[name] is None
    ]


def join_errs(errs: Iterable[Exception]) -> Optional[Exception]:
    """Join several errors into one, or None when there are none."""
    errs = [e for e in errs if e is not None]
    if not errs:
        return None
    return ValueError(", ".join(str(e) for e in errs))
