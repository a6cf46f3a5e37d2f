"""
Argschema utilities (internal helpers, carefully exposed)

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
    Field defaults use it, since None is the legitimate default of an optional field.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- ordinal(number)
  • Human-friendly position label ("first", "second", ..., "11th") used in fault messages.

Stability and contract
- Names not in __all__ are internal and may change without notice.
"""
import builtins
import functools
from collections.abc import Mapping
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    None cannot play this role here: it is the legitimate default of an optional
    field, and a field declared without any default must still be told apart from
    one declared as `= None`. The single instance, Unset, marks "nothing given" for
    Field.default/Field.factory, for omitted keyword options (such as a missing
    switch table) and for parse() called without an explicit token list.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance, and so do
      copy.copy(Unset) and copy.deepcopy(Unset).

    Typical use
    - Default a parameter to Unset, test it with `is Unset`, and materialize a
      concrete value with coalesce(value, default).
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).

        Returns NotImplemented when the other operand does not form a union with a
        type, so Python can try the reflected operation.
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when Unset appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Return the one instance of the sentinel, creating it on first call.
        """
        return super().__new__(cls)

    def __bool__(self):
        """
        Falsey sentinel: `if not value` works, while `value is Unset` stays exact.
        """
        return False

    def __repr__(self):
        """
        Human-friendly representation used in reprs of fields and in errors.
        """
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing, which would create a second "unset" value.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    The object is returned unchanged unless it is Unset. Falsey values such as None,
    0, "" or False are real values and are never replaced: a field whose declared
    default is 0 keeps 0.

    Parameters
    - object: any value that may be Unset.
    - default: value returned only when object is Unset (defaults to None).

    Returns
    - object, if object is not Unset.
    - default, if object is Unset.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    - coalesce(0, 5)               -> 0
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - Function form: rename(callable, name) -> callable
      Updates the callable's __name__ and __qualname__ in place and returns it.
    - Decorator form: rename(name) -> decorator
      Returns a decorator that applies the function form to the decorated callable.

    Parameters
    - callable: Callable
      The callable to rename (function form only).
    - name: str
      The name to assign.

    Returns
    - The same callable object in the function form.
    - A decorator (itself named "rename") in the decorator form.

    Raises
    - TypeError when the target is not callable, the name is not a string, the
      callable's metadata cannot be updated (builtins, C functions), or the number
      of arguments is not 1 or 2.

    Notes
    - Only metadata changes; behavior is untouched. Used for the __repr__ and
      __rich_repr__ functions generated per descriptor class, so tracebacks show
      their real names instead of a nested helper's.

    Examples
        >>> @rename("__repr__")
        ... def generated(self): ...
        >>> generated.__qualname__
        '__repr__'
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" from the instance. Mappings are served
    through a MappingProxyType view; tuples, frozensets and scalars are already
    immutable and are returned as they are.

    Example
    - Given self._fields, declare fields = mirror("fields") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        object = getattr(self, "_" + name)
        if isinstance(object, Mapping) and not isinstance(object, MappingProxyType):
            return MappingProxyType(object)
        return object

    return property(getter)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    if not isinstance(number, int) or number < 1:
        raise ValueError("ordinal() argument must be a positive integer")
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
)
