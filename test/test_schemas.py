"""
Schemas module behavioral tests (declaration, validation, introspection).

Scope
- Validate @schema: dataclass conversion, field order, flag names, switch table, capacity.
- Validate every schema error: bad field kinds, unknown/duplicated/malformed switches,
  bad capacity, non-class sources.
- Validate read-only introspection of Schema and Field.

Conventions
- Test method names follow CamelCase per project convention.
"""
import dataclasses
import enum
import unittest
from typing import Optional
from unittest import TestCase

from argschema import (
    DuplicateSwitchError,
    InvalidCapacityError,
    InvalidFieldTypeError,
    InvalidSwitchCharacterError,
    Schema,
    SchemaError,
    UnknownSwitchNameError,
    i32,
    i64,
    schema,
    schemaof,
    u8,
)
from argschema.utils import Unset


class Mode(enum.Enum):
    fast = 1
    safe = 2


class Permission(enum.Flag):
    read = 1
    write = 2


class TestSchemaDeclaration(TestCase):
    """Behavioral tests for a valid @schema declaration."""

    def setUp(self):
        @schema(switches={"verbose": "v", "name": "n"})
        class Config:
            verbose: bool
            name: Optional[str]
            dry_run: bool
            count: i32 = 4
            mode: Mode = Mode.safe
            limit: int | None = None

        self.Config = Config
        self.schema = Config.__schema__

    def testFieldsFollowDeclarationOrder(self):
        self.assertEqual(
            [field.name for field in self.schema.fields],
            ["verbose", "name", "dry_run", "count", "mode", "limit"],
        )

    def testFlagNamesReplaceUnderscores(self):
        self.assertEqual(
            list(self.schema.flags),
            ["--verbose", "--name", "--dry-run", "--count", "--mode", "--limit"],
        )

    def testFieldKindsAndOptionality(self):
        fields = {field.name: field for field in self.schema.fields}
        self.assertIs(fields["verbose"].kind, bool)
        self.assertFalse(fields["verbose"].optional)
        self.assertIs(fields["name"].kind, str)
        self.assertTrue(fields["name"].optional)
        self.assertIs(fields["count"].kind, i32)
        self.assertIs(fields["mode"].kind, Mode)
        self.assertIs(fields["limit"].kind, i64)
        self.assertTrue(fields["limit"].optional)

    def testDefaultsAreCaptured(self):
        fields = {field.name: field for field in self.schema.fields}
        self.assertEqual(fields["count"].default, 4)
        self.assertIs(fields["mode"].default, Mode.safe)
        self.assertIsNone(fields["limit"].default)
        self.assertIs(fields["verbose"].default, Unset)

    def testSwitchTableMapsLettersToFields(self):
        self.assertEqual(set(self.schema.switches), {"v", "n"})
        self.assertEqual(self.schema.switches["v"].name, "verbose")
        self.assertEqual(self.schema.switches["n"].flag, "--name")

    def testFieldsKnowTheirSwitch(self):
        fields = {field.name: field for field in self.schema.fields}
        self.assertEqual(fields["verbose"].switch, "v")
        self.assertIsNone(fields["count"].switch)

    def testDefaultCapacityIsEight(self):
        self.assertEqual(self.schema.capacity, 8)

    def testClassBecomesKeywordOnlyDataclass(self):
        self.assertTrue(dataclasses.is_dataclass(self.Config))
        config = self.Config(verbose=True, name=None, dry_run=False)
        self.assertEqual(config.count, 4)
        with self.assertRaises(TypeError):
            self.Config(True, None, False)

    def testSchemaIsReadOnly(self):
        with self.assertRaises(AttributeError):
            self.schema.capacity = 3
        with self.assertRaises(TypeError):
            self.schema.flags["--other"] = self.schema.fields[0]
        self.assertIsInstance(self.schema.fields, tuple)

    def testSchemaofResolvesDecoratedClass(self):
        self.assertIs(schemaof(self.Config), self.schema)
        self.assertIs(schemaof(self.schema), self.schema)

    def testRepresentationNamesFields(self):
        self.assertIn("name='verbose'", repr(self.schema.fields[0]))
        self.assertTrue(repr(self.schema).startswith("schema("))


class TestSchemaOptions(TestCase):
    """Behavioral tests for decorator forms and options."""

    def testBareDecorator(self):
        @schema
        class Config:
            name: str

        self.assertIsNone(Config.__schema__.switches)
        self.assertEqual(Config.__schema__.capacity, 8)

    def testEmptySwitchTableIsDeclared(self):
        @schema(switches={})
        class Config:
            name: str

        self.assertEqual(dict(Config.__schema__.switches), {})

    def testCustomCapacity(self):
        @schema(capacity=2)
        class Config:
            verbose: bool

        self.assertEqual(Config.__schema__.capacity, 2)

    def testExistingDataclassIsKept(self):
        @schema
        @dataclasses.dataclass
        class Config:
            name: str
            hidden: int = dataclasses.field(default=0, init=False)

        self.assertEqual([field.name for field in Config.__schema__.fields], ["name"])

    def testDefaultFactoryIsCaptured(self):
        @schema
        class Config:
            name: str = dataclasses.field(default_factory=lambda: "anonymous")

        field, = Config.__schema__.fields
        self.assertIs(field.default, Unset)
        self.assertEqual(field.factory(), "anonymous")

    def testSchemaRequiresDataclass(self):
        class Config:
            name: str

        with self.assertRaises(TypeError):
            Schema(Config)

    def testSchemaofRejectsUndecoratedClass(self):
        class Config:
            name: str

        with self.assertRaises(TypeError):
            schemaof(Config)

    def testDecoratorRejectsNonClass(self):
        with self.assertRaises(TypeError):
            schema(lambda: None)


class TestSchemaErrors(TestCase):
    """Behavioral tests for structurally invalid schemas."""

    def testSchemaErrorIsTypeError(self):
        self.assertTrue(issubclass(SchemaError, TypeError))

    def testOptionalBoolRejected(self):
        with self.assertRaises(InvalidFieldTypeError):
            @schema
            class Config:
                verbose: bool | None

    def testTypingOptionalBoolRejected(self):
        with self.assertRaises(InvalidFieldTypeError):
            @schema
            class Config:
                verbose: Optional[bool]

    def testUnsupportedKindsRejected(self):
        for annotation in (float, list[str], int | str, bytes, Permission):
            with self.subTest(annotation=annotation):
                with self.assertRaises(InvalidFieldTypeError):
                    @schema
                    class Config:
                        value: annotation

    def testFieldTypeErrorNamesTheField(self):
        with self.assertRaises(InvalidFieldTypeError) as context:
            @schema
            class Config:
                ratio: float

        self.assertIn("ratio", str(context.exception))

    def testUnknownSwitchNameRejected(self):
        with self.assertRaises(UnknownSwitchNameError):
            @schema(switches={"verbose": "v", "quiet": "q"})
            class Config:
                verbose: bool

    def testDuplicatedSwitchRejected(self):
        with self.assertRaises(DuplicateSwitchError) as context:
            @schema(switches={"verbose": "v", "version": "v"})
            class Config:
                verbose: bool
                version: bool

        self.assertIn("verbose", str(context.exception))
        self.assertIn("version", str(context.exception))

    def testDuplicateCheckedBeforeUnknownName(self):
        with self.assertRaises(DuplicateSwitchError):
            @schema(switches={"verbose": "v", "missing": "v"})
            class Config:
                verbose: bool

    def testNonLetterSwitchRejected(self):
        for character in ("1", "-", "é", " "):
            with self.subTest(character=character):
                with self.assertRaises(InvalidSwitchCharacterError):
                    @schema(switches={"verbose": character})
                    class Config:
                        verbose: bool

    def testMultiCharacterSwitchRejected(self):
        for character in ("vv", "", 118):
            with self.subTest(character=character):
                with self.assertRaises(InvalidSwitchCharacterError):
                    @schema(switches={"verbose": character})
                    class Config:
                        verbose: bool

    def testSwitchesMustBeMapping(self):
        with self.assertRaises(TypeError):
            @schema(switches=[("verbose", "v")])
            class Config:
                verbose: bool

    def testInvalidCapacityRejected(self):
        for capacity in (0, -1, True, "8"):
            with self.subTest(capacity=capacity):
                with self.assertRaises(InvalidCapacityError):
                    @schema(capacity=capacity)
                    class Config:
                        level: u8 = 0

    def testOutOfRangeIntegerDefaultRejected(self):
        for default in (300, -1):
            with self.subTest(default=default):
                with self.assertRaises(InvalidFieldTypeError) as context:
                    @schema
                    class Config:
                        level: u8 = default

                self.assertIn("level", str(context.exception))
                self.assertIn("u8", str(context.exception))

    def testBoolIntegerDefaultRejected(self):
        with self.assertRaises(InvalidFieldTypeError):
            @schema
            class Config:
                level: u8 = True

    def testNonMemberEnumDefaultRejected(self):
        for default in ("fast", 1, Permission.read):
            with self.subTest(default=default):
                with self.assertRaises(InvalidFieldTypeError) as context:
                    @schema
                    class Config:
                        mode: Mode = default

                self.assertIn("mode", str(context.exception))

    def testMismatchedScalarDefaultRejected(self):
        with self.assertRaises(InvalidFieldTypeError):
            @schema
            class Config:
                verbose: bool = "yes"

        with self.assertRaises(InvalidFieldTypeError):
            @schema
            class Config:
                name: str = 5

    def testNoneDefaultRequiresOptional(self):
        with self.assertRaises(InvalidFieldTypeError) as context:
            @schema
            class Config:
                name: str = None

        self.assertIn("name", str(context.exception))

        @schema
        class Config:
            name: str | None = None
            limit: i32 | None = None
            level: u8 | None = 255

        self.assertEqual([field.default for field in Config.__schema__.fields], [None, None, 255])


if __name__ == "__main__":
    unittest.main()
