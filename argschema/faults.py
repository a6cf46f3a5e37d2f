"""
Argschema faults (schema errors, parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse error.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- ParseError: base type for runtime errors caused by user input. It carries message +
  options and knows how to render itself as "error: <detail>" with an optional hint.
- SchemaError: base type for author-facing errors, raised once when a schema is declared.
  These are plain TypeErrors; they are never rendered for end users.

Integration
- The parser raises ParseError subclasses; nothing is caught inside the core.
- run() catches ParseError at the program boundary and calls __trigger__(), which prints
  through the rich console on stderr and exits with status 1.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes for parse errors (stable identifiers).

    grouping (by high-level domain)
    - tokens (1110x)
      • EMPTY_ARGUMENT, UNRECOGNIZED_ARGUMENT, TOO_MANY_POSITIONAL_ARGUMENTS
    - flags and switches (1111x)
      • UNRECOGNIZED_FLAG, UNRECOGNIZED_SWITCH, SWITCH_REQUIRES_TRAILING_POSITION,
        MISSING_VALUE_AFTER_FLAG, MISSING_REQUIRED_FLAG
    - values (1112x)
      • INVALID_ENUM_VALUE, INTEGER_OVERFLOW, INVALID_INTEGER
    """
    # --- token errors (1110x) ---
    EMPTY_ARGUMENT                    = 11101
    UNRECOGNIZED_ARGUMENT             = 11102
    TOO_MANY_POSITIONAL_ARGUMENTS     = 11103

    # --- flag/switch errors (1111x) ---
    UNRECOGNIZED_FLAG                 = 11111
    UNRECOGNIZED_SWITCH               = 11112
    SWITCH_REQUIRES_TRAILING_POSITION = 11113
    MISSING_VALUE_AFTER_FLAG          = 11114
    MISSING_REQUIRED_FLAG             = 11115

    # --- value errors (1112x) ---
    INVALID_ENUM_VALUE                = 11121
    INTEGER_OVERFLOW                  = 11122
    INVALID_INTEGER                   = 11123


class ParseError(Exception):
    """
    base type for every error caused by the parsed arguments.

    options
    - code: FaultCode of the concrete error.
    - hint: optional one-line suggestion rendered below the message.
    - token/index/field: context of the failure, when relevant.
    - colorful: render with styles (default True); set by run().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            "error-label": "bold #FF4DA6",  # friendly pinky label
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        message = Text.assemble(text("error", "error-label"), ": ", text(self.message, "error-message"))
        if not self.hint:
            return message
        hint = Text.assemble("  ", text("→ ", "hint-arrow"), text(self.hint, "hint"))
        return Group(message, hint)

    def __trigger__(self):
        console.print(self, soft_wrap=True)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyArgumentError(ParseError): ...
class UnrecognizedArgumentError(ParseError): ...
class UnrecognizedFlagError(ParseError): ...
class UnrecognizedSwitchError(ParseError): ...
class SwitchRequiresTrailingPositionError(ParseError): ...
class MissingValueAfterFlagError(ParseError): ...
class InvalidEnumValueError(ParseError): ...
class IntegerOverflowError(ParseError): ...
class InvalidIntegerError(ParseError): ...
class TooManyPositionalArgumentsError(ParseError): ...
class MissingRequiredFlagError(ParseError): ...


class SchemaError(TypeError):
    """
    raised when a schema declaration is structurally invalid.

    a schema error is a programming mistake of the tool author, so it is raised once,
    when the schema is declared, and never depends on the parsed arguments.
    """


class InvalidFieldTypeError(SchemaError): ...
class UnknownSwitchNameError(SchemaError): ...
class DuplicateSwitchError(SchemaError): ...
class InvalidSwitchCharacterError(SchemaError): ...
class InvalidCapacityError(SchemaError): ...


__all__ = (
    "FaultCode",
    "ParseError",
    "EmptyArgumentError",
    "UnrecognizedArgumentError",
    "UnrecognizedFlagError",
    "UnrecognizedSwitchError",
    "SwitchRequiresTrailingPositionError",
    "MissingValueAfterFlagError",
    "InvalidEnumValueError",
    "IntegerOverflowError",
    "InvalidIntegerError",
    "TooManyPositionalArgumentsError",
    "MissingRequiredFlagError",
    "SchemaError",
    "InvalidFieldTypeError",
    "UnknownSwitchNameError",
    "DuplicateSwitchError",
    "InvalidSwitchCharacterError",
    "InvalidCapacityError",
)
