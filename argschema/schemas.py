r"""
Argschema schema declaration and validation.

Overview
- Field: one validated schema field (name, kind, optional, default/factory, flag, switch).
- Schema: the immutable, validated description of a configuration class:
  ordered fields, the flag-name index, the switch table and the positional capacity.
- @schema(...): class decorator that turns an annotated class into a keyword-only
  dataclass, validates it once and attaches the Schema as `__schema__`.

Declaring a schema
    >>> from enum import Enum
    >>> from argschema import schema, i32
    >>> class Mode(Enum):
    ...     fast = 1
    ...     safe = 2
    >>> @schema(switches={"verbose": "v", "count": "c"})
    ... class Config:
    ...     verbose: bool
    ...     name: str | None
    ...     count: i32 = 4
    ...     mode: Mode = Mode.safe

Validation (runs exactly once, when the schema is declared)
- every field kind is bool, str, an integer kind or an exhaustive enum, optionally
  wrapped in Optional (never Optional[bool]);
- every switch names an existing field, no two switches share a character, and every
  switch character is a single ASCII letter;
- every declared default is a value of its field's kind (None only when optional);
- the positional capacity is a positive integer.
Violations raise SchemaError subclasses; see argschema.faults.

String annotations
- With `from __future__ import annotations`, annotations are resolved against the
  module globals when the schema is declared. Names local to a function cannot be
  resolved there and raise InvalidFieldTypeError naming the class.
"""
import dataclasses
import functools
import operator
import re
import typing
from collections.abc import Mapping
from types import MappingProxyType

from .faults import (
    DuplicateSwitchError,
    InvalidFieldTypeError,
    InvalidCapacityError,
    InvalidSwitchCharacterError,
    UnknownSwitchNameError,
)
from .kinds import IntegerType, describe, resolve
from .utils import *


class DescriptorType(type):
    """
    Metaclass that exposes descriptor fields as read-only properties.

    Responsibilities
    - Mirror every name in __introspectable__ as a property over "_{name}".
    - Provide stable __repr__/__rich_repr__ over __displayable__ (or __introspectable__)
      for diagnostics and rich.pretty output.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Field(metaclass=DescriptorType):
    """
    A validated schema field.

    Properties
    - name: attribute name on the configuration class.
    - kind: bool, str, an integer kind (argschema.kinds) or an enum class.
    - optional: True when declared as Optional[kind] / kind | None.
    - default: declared default value, or Unset.
    - factory: declared default factory, or Unset (called once per parse when needed).
    - flag: long flag name, "--" + name with "_" replaced by "-".
    - switch: single-letter alias, or None.
    """

    __introspectable__ = (
        "name",
        "kind",
        "optional",
        "default",
        "factory",
        "flag",
        "switch",
    )

    __displayable__ = (
        "name",
        "kind",
        "optional",
        "default",
        "flag",
        "switch",
    )

    def __init__(self, name, kind, /, optional=False, default=Unset, factory=Unset, switch=None):
        self._name = name
        self._kind = kind
        self._optional = optional
        self._default = default
        self._factory = factory
        self._flag = "--" + name.replace("_", "-")
        self._switch = switch

    @property
    def label(self):
        """
        user-facing kind label, e.g. "optional i32".
        """
        return ("optional " if self.optional else "") + describe(self.kind)


def _validate_switches(source, switches, names, /):
    """
    Validate a switch table and return it inverted (character -> field name).

    Checks run per entry, in declaration order: duplicated character (against later
    entries), unknown field name, then character shape.
    """
    if not isinstance(switches, Mapping):
        raise TypeError("schema 'switches' must be a mapping of field names to letters")

    entries = list(switches.items())
    table = {}
    for index, (name, character) in enumerate(entries, 1):
        for other, duplicate in entries[index:]:
            if character == duplicate:
                raise DuplicateSwitchError("duplicated switch values: %r and %r" % (name, other))

        if name not in names:
            raise UnknownSwitchNameError("switch name not defined in %s: %r" % (source.__qualname__, name))

        if not isinstance(character, str) or len(character) != 1:
            raise InvalidSwitchCharacterError("switch is not a character: %r" % name)
        if not (character.isascii() and character.isalpha()):
            raise InvalidSwitchCharacterError("switch is not a letter: %r" % character)

        table[character] = name
    return table


def _validate_default(name, kind, optional, default, /):
    """
    Reject a declared default that the field's kind could never produce.

    None is accepted only for optional fields; integer defaults must be ints (not bools)
    within the kind's bounds; enum defaults must be members of the enum.
    """
    if default is None:
        if optional:
            return
    elif kind is bool or kind is str:
        if type(default) is kind:
            return
    elif isinstance(kind, IntegerType):
        if not isinstance(default, bool) and default in kind:
            return
    elif isinstance(default, kind):
        return

    raise InvalidFieldTypeError("bad default for field %r: %r is not a valid %s" % (
        name, default, ("optional " if optional else "") + describe(kind)
    ))


class Schema(metaclass=DescriptorType):
    """
    Immutable, validated description of a configuration dataclass.

    Construction validates the source once; afterwards the object is read-only and
    can be shared by any number of parse calls.

    Parameters
    - source: a dataclass; its init fields, in declaration order, become the schema.
    - switches: Unset | Mapping[str, str]
      Field name -> single ASCII letter. Unset means the schema declares no switch
      table at all, so single-dash tokens are never accepted.
    - capacity: int
      Maximum number of positional arguments (default 8).

    Properties
    - source, fields (tuple[Field, ...]), flags (flag name -> Field),
      switches (letter -> Field, or None when undeclared), capacity.
    """

    __introspectable__ = (
        "source",
        "fields",
        "flags",
        "switches",
        "capacity",
    )

    __displayable__ = (
        "source",
        "fields",
        "switches",
        "capacity",
    )

    def __init__(self, source, /, switches=Unset, capacity=8):
        if not isinstance(source, type):
            raise TypeError("schema source must be a class")
        if not dataclasses.is_dataclass(source):
            raise TypeError("schema source must be a dataclass (use @schema to declare one)")

        try:
            hints = typing.get_type_hints(source)
        except NameError as error:
            raise InvalidFieldTypeError("unresolvable field type in %s: %s" % (source.__qualname__, error)) from None
        declared = [field for field in dataclasses.fields(source) if field.init]

        # Field kinds first, then the switch table.
        kinds = {field.name: resolve(hints[field.name], field.name) for field in declared}

        if switches is Unset:
            table = None
        else:
            table = _validate_switches(source, switches, kinds.keys())
        aliases = {name: character for character, name in (table or {}).items()}

        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise InvalidCapacityError("schema 'capacity' must be an integer")
        if capacity < 1:
            raise InvalidCapacityError("schema 'capacity' must be a positive integer")

        fields = []
        for field in declared:
            kind, optional = kinds[field.name]
            default = Unset if field.default is dataclasses.MISSING else field.default
            if default is not Unset:
                _validate_default(field.name, kind, optional, default)
            fields.append(Field(
                field.name,
                kind,
                optional=optional,
                default=default,
                factory=Unset if field.default_factory is dataclasses.MISSING else field.default_factory,
                switch=aliases.get(field.name),
            ))

        self._source = source
        self._fields = tuple(fields)
        self._flags = MappingProxyType({field.flag: field for field in fields})
        names = {field.name: field for field in fields}
        self._switches = None if table is None else MappingProxyType({
            character: names[name] for character, name in table.items()
        })
        self._capacity = capacity

    def build(self, values, /):
        """
        Instantiate the configuration class from a complete name -> value mapping.
        """
        return self.source(**values)


def schema(source=Unset, /, **options):
    """
    Class decorator declaring a configuration schema.

    Usage
    - Bare:
        @schema
        class Config: ...
    - With options (forwarded to Schema):
        @schema(switches={"verbose": "v"}, capacity=16)
        class Config: ...

    Behavior
    - Turns the class into a keyword-only dataclass unless it already declares its own
      dataclass fields.
    - Validates it (raising SchemaError subclasses) and stores the Schema as __schema__.
    - Returns the class itself.
    """

    @rename("schema")
    def wrapper(source, /):
        if not isinstance(source, type):
            raise TypeError("@schema() must be applied to a class")
        if "__dataclass_fields__" not in vars(source):
            source = dataclasses.dataclass(source, kw_only=True)
        source.__schema__ = Schema(source, **options)
        return source

    if source is not Unset:
        return wrapper(source)
    return wrapper


def schemaof(object, /):
    """
    Return the Schema of a @schema class, or the object itself when it is a Schema.
    """
    if isinstance(object, Schema):
        return object
    if isinstance(object, type) and isinstance(vars(object).get("__schema__"), Schema):
        return vars(object)["__schema__"]
    raise TypeError("schema argument must be a Schema or a @schema class, not %r" % type(object).__name__)


__all__ = (
    "Field",
    "Schema",
    "schema",
    "schemaof",
)
