"""
Argschema field kinds.

A field kind is the type a schema field is annotated with, after unwrapping Optional:
- bool: presence-only; a flag or switch sets it to True, absence means False.
- str: the raw token, unchanged.
- sized integers: classes built by integer(bits, signed=True), e.g. i32 or u8. A plain
  `int` annotation stands for a signed 64-bit integer.
- exhaustive enumerations: any enum.Enum subclass that is not an enum.Flag. Tokens are
  matched against member names.

Anything else (lists, floats, unions of several types, Optional[bool], ...) is rejected
with InvalidFieldTypeError when the schema is declared.

Quick example
    >>> from argschema.kinds import integer, u8
    >>> u8.minimum, u8.maximum
    (0, 255)
    >>> integer(12, signed=False).maximum
    4095
"""
import enum
import functools
import types
import typing

from .faults import InvalidFieldTypeError


class IntegerType(type):
    """
    Metaclass of the sized integer kinds.

    Each class it builds is an int subclass named after its width ("i32", "u8") and
    carries the inclusive bounds of that width:
    - bits: width in bits (>= 1).
    - signed: two's complement range when True, otherwise 0..2**bits - 1.
    - minimum / maximum: inclusive bounds.

    Instances are never created by the parser; parsed values are plain ints.
    """

    def __new__(cls, name, bases, namespace, *, bits, signed):
        self = super().__new__(cls, name, bases, namespace | {"__module__": __name__})
        self.bits = bits
        self.signed = signed
        self.minimum = -(1 << (bits - 1)) if signed else 0
        self.maximum = (1 << (bits - 1)) - 1 if signed else (1 << bits) - 1
        return self

    def __init__(cls, name, bases, namespace, **options):
        super().__init__(name, bases, namespace)

    def __contains__(self, value):
        return isinstance(value, int) and self.minimum <= value <= self.maximum

    def __repr__(self):
        return self.__name__


@functools.cache
def _integer(bits, signed, /):
    return IntegerType(("i" if signed else "u") + str(bits), (int,), {"__doc__": "%s %d-bit integer kind" % (
        "signed" if signed else "unsigned", bits
    )}, bits=bits, signed=signed)


def integer(bits, /, signed=True):
    """
    Return the integer kind for the given width and signedness.

    Kinds are cached per (bits, signed), so integer(32) is i32.
    """
    if not isinstance(bits, int) or isinstance(bits, bool):
        raise TypeError("integer() width must be an integer")
    if bits < 1:
        raise ValueError("integer() width must be a positive integer")
    return _integer(bits, bool(signed))


i8 = integer(8)
i16 = integer(16)
i32 = integer(32)
i64 = integer(64)
u8 = integer(8, signed=False)
u16 = integer(16, signed=False)
u32 = integer(32, signed=False)
u64 = integer(64, signed=False)

# Pointer-sized aliases for 64-bit platforms.
isize = i64
usize = u64


def _describe(annotation):
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation)


def resolve(annotation, name, /):
    """
    Classify a field annotation into (kind, optional).

    Optional[T] and T | None are unwrapped once; the wrapped type must itself be a
    valid non-boolean kind.

    Raises
    - InvalidFieldTypeError naming the field and the offending annotation.
    """
    optional = False
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        members = typing.get_args(annotation)
        if len(members) == 2 and type(None) in members:
            annotation, = (member for member in members if member is not type(None))
            optional = True

    if annotation is bool:
        if optional:
            raise InvalidFieldTypeError("bad field type %r: bool cannot be optional" % name)
        return bool, optional
    if annotation is str:
        return str, optional
    if annotation is int:
        return i64, optional
    if isinstance(annotation, IntegerType):
        return annotation, optional
    if (
            isinstance(annotation, type) and
            issubclass(annotation, enum.Enum) and
            not issubclass(annotation, enum.Flag)
    ):
        return annotation, optional

    raise InvalidFieldTypeError("bad field type %r: %s" % (
        name, ("optional " if optional else "") + _describe(annotation)
    ))


def describe(kind, /):
    """
    Return a short, user-facing label of a kind ("bool", "string", "i32", "enum Mode").
    """
    if kind is bool:
        return "bool"
    if kind is str:
        return "string"
    if isinstance(kind, IntegerType):
        return kind.__name__
    return "enum " + kind.__qualname__


__all__ = (
    "IntegerType",
    "integer",
    "i8",
    "i16",
    "i32",
    "i64",
    "u8",
    "u16",
    "u32",
    "u64",
    "isize",
    "usize",
)
