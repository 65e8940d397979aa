"""
Text decoding for argument-taking options.

Two modes
- strict (default): the whole token must be a valid number for the option's
  kind and fit its width; otherwise InvalidValueError.
- lenient: legacy behavior. The longest valid numeric prefix is used ("12abc"
  gives 12), no prefix gives zero, and out-of-width values wrap the way an
  unsigned/signed cast of that width would.

Layouts
- ENUM / INT: signed 32-bit, base 10 (ENUM stores value + 1, 0 meaning unset)
- UINT / UINT32: unsigned 32-bit, base 10
- UINT64: unsigned 64-bit, base 10
- HEXUINT8/16/32/64: unsigned, base 16 (an optional 0x prefix is accepted)
"""
import re

from .faults import InvalidValueError
from .options import ValueKind

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_HEXADECIMAL = re.compile(r"[+-]?(?:0[xX])?([0-9a-fA-F]+)", re.ASCII)
_FLOAT = re.compile(r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)", re.IGNORECASE | re.ASCII)


def bounds(kind, /):
    """
    (minimum, maximum) representable by an integer kind.
    """
    width, signed, _ = kind.layout
    if signed:
        return -(1 << width - 1), (1 << width - 1) - 1
    return 0, (1 << width) - 1


def _invalid(kind, text, what):
    return InvalidValueError(
        "invalid %s value %r for %s option" % (what, text, kind.label),
        title="invalid value",
        hint="pass a %s value" % what,
        token=text,
        kind=kind,
    )


def decode_integer(kind, text, /, strict=True):
    """
    decode text as the integer kind (INT, UINT*, HEXUINT*, ENUM layout).
    """
    kind = ValueKind(kind)
    if kind.layout is None:
        raise ValueError("decode_integer() needs an integer kind, got %s" % kind.label)
    radix = kind.layout[2]
    pattern = _HEXADECIMAL if radix == 16 else _DECIMAL
    what = "hexadecimal" if radix == 16 else "decimal"

    if strict:
        match = pattern.fullmatch(text.strip())
        if not match:
            raise _invalid(kind, text, what)
        value = int(match[0], radix)
        minimum, maximum = bounds(kind)
        if not minimum <= value <= maximum:
            raise InvalidValueError(
                "%s value %r is out of range for %s option (%d..%d)" % (what, text, kind.label, minimum, maximum),
                title="value out of range",
                hint="pass a value between %d and %d" % (minimum, maximum),
                token=text,
                kind=kind,
            )
        return value

    match = pattern.match(text.lstrip())
    if not match:
        return 0
    return kind.wrap(int(match[0], radix))


def decode_float(text, /, strict=True):
    if strict:
        if not _FLOAT.fullmatch(text.strip()):
            raise _invalid(ValueKind.FLOAT, text, "floating point")
        return float(text)
    match = _FLOAT.match(text.lstrip())
    return float(match[0]) if match else 0.0


def decode_enum(text, /, strict=True):
    """
    decode an enum index; the stored value is the index plus one.
    """
    value = decode_integer(ValueKind.ENUM, text, strict)
    if strict and value < 0:
        raise _invalid(ValueKind.ENUM, text, "non-negative enum index")
    return value + 1


def decode_text(text, capacity, /):
    return text[:capacity]


__all__ = (
    "bounds",
    "decode_integer",
    "decode_float",
    "decode_enum",
    "decode_text",
)
