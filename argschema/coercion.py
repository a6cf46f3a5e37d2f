"""
Argschema value coercion: raw token -> typed field value.

Rules (after unwrapping Optional)
- str: the token, unchanged.
- enum: exact, case-sensitive match against member names in declaration order (aliases
  included); the first match wins.
- integer kinds: base-10 with an optional leading sign; "_" may separate digits but can
  neither lead nor trail. The shape is checked before the range, so malformed input is
  always InvalidIntegerError and a well-formed value outside the kind's bounds is always
  IntegerOverflowError.
- bool: never coerced; presence alone means True.
"""
import re

from .faults import FaultCode, IntegerOverflowError, InvalidEnumValueError, InvalidIntegerError
from .kinds import IntegerType
from .utils import Unset, ordinal

_INTEGER = re.compile(r"[+-]?[0-9](_*[0-9])*", re.ASCII)


def _position(index):
    return "" if index is Unset else " at %s position" % ordinal(index)


def coerce(field, token, /, index=Unset, input=Unset):
    """
    convert one raw token into the value of `field`.

    parameters
    - field: argschema.schemas.Field (non-boolean).
    - token: str, the value token taken after the flag or switch.
    - index: 1-based position of `token` in the argument stream (for messages).
    - input: the flag or switch spelling that requested the value (defaults to the
      field's flag name).

    raises
    - InvalidEnumValueError, InvalidIntegerError, IntegerOverflowError.
    - TypeError when called for a boolean field (programming error).
    """
    kind = field.kind
    input = input if input is not Unset else field.flag

    if kind is bool:
        raise TypeError("coerce() cannot convert a value for boolean field %r" % field.name)

    if kind is str:
        return token

    if isinstance(kind, IntegerType):
        if not _INTEGER.fullmatch(token):
            raise InvalidIntegerError(
                "expected integer argument for %s, found %r%s" % (input, token, _position(index)),
                code=FaultCode.INVALID_INTEGER,
                hint="pass a base-10 %s such as %s 42" % (kind.__name__, input),
                token=token,
                index=index,
                field=field,
            )
        value = int(token.replace("_", ""))
        if value not in kind:
            raise IntegerOverflowError(
                "integer argument out of range for %s: %r%s" % (kind.__name__, token, _position(index)),
                code=FaultCode.INTEGER_OVERFLOW,
                hint="%s accepts values from %d to %d" % (kind.__name__, kind.minimum, kind.maximum),
                token=token,
                index=index,
                field=field,
            )
        return value

    for name, member in kind.__members__.items():
        if token == name:
            return member

    raise InvalidEnumValueError(
        "invalid option for %s: %r%s" % (input, token, _position(index)),
        code=FaultCode.INVALID_ENUM_VALUE,
        hint="expected one of %s" % ", ".join(map(repr, kind.__members__)) if kind.__members__ else None,
        token=token,
        index=index,
        field=field,
    )


__all__ = (
    "coerce",
)
