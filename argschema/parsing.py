"""
Argschema parsing: token dispatch, defaulting and the program-boundary runner.

What this module provides
- parse(schema, args): consume argv-like tokens and return Result(config, args), or raise
  the first ParseError encountered. Never prints, never exits.
- run(schema, args, colorful=True): parse() for entry points; a ParseError is printed as
  "error: <detail>" on stderr and the process exits with status 1.

Token classification (left to right, at most one token of look-ahead)
- ""              → EmptyArgumentError
- "name"          → positional (bounded by the schema capacity)
- "-"             → UnrecognizedArgumentError
- "--flag-name"   → long flag; value-bearing fields take the next token
- "-abc"          → switch cluster; booleans anywhere, one value-bearing switch last

After the stream is exhausted, every field never passed is defaulted in declaration
order: declared default, then None for optional fields, then False for booleans;
otherwise MissingRequiredFlagError for the first such field.
"""
import copy
import difflib
import sys
from collections import namedtuple

from .coercion import coerce
from .faults import *
from .kinds import describe
from .schemas import schemaof
from .utils import Unset, coalesce, ordinal

Result = namedtuple("Result", ("config", "args"))
Result.__doc__ = """
Outcome of a successful parse.

- config: instance of the schema class, every field set.
- args: tuple of positional arguments in encounter order.
"""


class Dispatcher:
    """
    Per-call parse state and token dispatch.

    A dispatcher is created for one parse() call and discarded afterwards; it owns the
    passed-set, the in-progress values and the positional buffer. The schema it reads
    is immutable and may be shared.
    """

    def __init__(self, schema, tokens, /):
        self.schema = schema
        self._tokens = iter(tokens)
        self._index = 0
        self._passed = dict.fromkeys((field.name for field in schema.fields), False)
        self._values = {}
        self._positionals = []

    def _next(self):
        """
        pull the next token, or Unset when the source is exhausted.
        """
        token = next(self._tokens, Unset)
        if token is not Unset:
            self._index += 1
        return token

    def _assign(self, field, input, index):
        """
        mark `field` as passed and store its value.

        booleans are set by presence; other kinds coerce the following token.
        """
        self._passed[field.name] = True
        if field.kind is bool:
            self._values[field.name] = True
            return

        token = self._next()
        if token is Unset:
            raise MissingValueAfterFlagError(
                "expected argument after %s at %s position" % (input, ordinal(index)),
                code=FaultCode.MISSING_VALUE_AFTER_FLAG,
                hint="pass a value after %s (expected %s)" % (input, describe(field.kind)),
                token=input,
                index=index,
                field=field,
            )
        self._values[field.name] = coerce(field, token, index=self._index, input=input)

    def _parse_positional(self, token):
        if len(self._positionals) == self.schema.capacity:
            raise TooManyPositionalArgumentsError(
                "too many arguments: %r at %s position" % (token, ordinal(self._index)),
                code=FaultCode.TOO_MANY_POSITIONAL_ARGUMENTS,
                hint="at most %d positional arguments are accepted" % self.schema.capacity,
                token=token,
                index=self._index,
            )
        self._positionals.append(token)

    def _parse_flag(self, token):
        try:
            field = self.schema.flags[token]
        except KeyError:
            suggestions = difflib.get_close_matches(token, self.schema.flags.keys(), 1)
            if suggestions:
                hint = "did you mean %r?" % suggestions[0]
            elif self.schema.flags:
                hint = "known flags are %s" % ", ".join(self.schema.flags)
            else:
                hint = None
            raise UnrecognizedFlagError(
                "unrecognized flag: %s at %s position" % (token, ordinal(self._index)),
                code=FaultCode.UNRECOGNIZED_FLAG,
                hint=hint,
                token=token,
                index=self._index,
            ) from None
        self._assign(field, token, self._index)

    def _parse_cluster(self, token):
        index = self._index
        switches = self.schema.switches
        if switches is None:
            raise UnrecognizedArgumentError(
                "unrecognized argument: %r at %s position" % (token, ordinal(index)),
                code=FaultCode.UNRECOGNIZED_ARGUMENT,
                hint="single-letter switches are not available; use long flags such as --name",
                token=token,
                index=index,
            )

        cluster = token[1:]
        for position, character in enumerate(cluster, 1):
            try:
                field = switches[character]
            except KeyError:
                raise UnrecognizedSwitchError(
                    "unrecognized switch: %s in %r at %s position" % (character, token, ordinal(index)),
                    code=FaultCode.UNRECOGNIZED_SWITCH,
                    hint="known switches are %s" % ", ".join("-" + key for key in switches) if switches else None,
                    token=token,
                    index=index,
                ) from None

            # Only the last switch of a cluster may take a value ("-abc v1 v2 v3" is rejected).
            if field.kind is not bool and position != len(cluster):
                raise SwitchRequiresTrailingPositionError(
                    "expected argument after switch '%s' in %r at %s position" % (character, token, ordinal(index)),
                    code=FaultCode.SWITCH_REQUIRES_TRAILING_POSITION,
                    hint="move '%s' to the end of the cluster (for example: -%s%s <value>)" % (
                        character, cluster.replace(character, "", 1), character
                    ),
                    token=token,
                    index=index,
                    field=field,
                )
            self._assign(field, "-" + character, index)

    def _finalize(self):
        """
        defaulting pass over the fields never passed, in declaration order.
        """
        for field in self.schema.fields:
            if self._passed[field.name]:
                continue
            if field.default is not Unset:
                self._values[field.name] = field.default
            elif field.factory is not Unset:
                self._values[field.name] = field.factory()
            elif field.optional:
                self._values[field.name] = None
            elif field.kind is bool:
                self._values[field.name] = False
            else:
                raise MissingRequiredFlagError(
                    "missing required flag: %r" % field.flag,
                    code=FaultCode.MISSING_REQUIRED_FLAG,
                    hint="pass %s <%s>" % (field.flag, field.label) + (
                        " or -%s <%s>" % (field.switch, field.label) if field.switch else ""
                    ),
                    field=field,
                )

    def dispatch(self):
        """
        run the whole state machine and return the Result.
        """
        while (token := self._next()) is not Unset:
            if not token:
                raise EmptyArgumentError(
                    "empty argument at %s position" % ordinal(self._index),
                    code=FaultCode.EMPTY_ARGUMENT,
                    hint="remove the empty argument or quote a value for it",
                    token=token,
                    index=self._index,
                )
            if not token.startswith("-"):
                self._parse_positional(token)
            elif token == "-":
                raise UnrecognizedArgumentError(
                    "unrecognized argument: '-' at %s position" % ordinal(self._index),
                    code=FaultCode.UNRECOGNIZED_ARGUMENT,
                    hint="a lone dash is neither a flag nor a switch",
                    token=token,
                    index=self._index,
                )
            elif token.startswith("--"):
                self._parse_flag(token)
            else:
                self._parse_cluster(token)

        self._finalize()
        return Result(self.schema.build(self._values), tuple(self._positionals))


def parse(schema, args=Unset, /):
    """
    parse argv-like tokens against a schema.

    parameters
    - schema: a @schema class or a Schema.
    - args: iterable of str (defaults to sys.argv[1:]); consumed lazily, once.

    returns
    - Result(config, args).

    raises
    - the first ParseError encountered (see argschema.faults).
    """
    return Dispatcher(schemaof(schema), coalesce(args, sys.argv[1:])).dispatch()


def run(schema, args=Unset, /, *, colorful=True):
    """
    parse() for program entry points.

    on a ParseError, prints "error: <detail>" (and its hint) to stderr through the rich
    console and exits the process with status 1. schema errors are not caught: they are
    raised when the schema is declared, before run() is reached.
    """
    try:
        return parse(schema, args)
    except ParseError as fault:
        copy.replace(fault, colorful=colorful).__trigger__()


__all__ = (
    "Result",
    "Dispatcher",
    "parse",
    "run",
)
