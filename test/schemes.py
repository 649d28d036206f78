"""
Scheme compiler behavioral tests.

Scope
- Validate compiled structure (names, kinds, modifiers, keyword block, executors).
- Validate determinism of compilation.
- Validate compile-time faults and their positions.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from herald import ArgType, Argument, compile_scheme
from herald.faults import (
    FaultCode,
    ExpectedTokenError,
    UnknownTypeError,
    EmptyEnumerationError,
    EnumerationSeparatorError,
    DuplicateArgumentError,
    DefaultValueError,
    RelativeOperatorError,
    InvalidCharacterError,
)

HEAL = "heal: target:@ amount:int=10 ~health"
TP = "tp: player:@ x:num y:num z:num ~0 {mode:enum[relative|absolute]=absolute}"


class TestSchemeStructure(TestCase):
    """Behavioral tests for successfully compiled schemes."""

    def testHeal(self):
        command = compile_scheme(HEAL)
        self.assertEqual(command.name, "heal")
        self.assertEqual(command.positional, (
            Argument("target", ArgType.SELECTOR),
            Argument("amount", ArgType.INTEGER, True, 10, "health"),
        ))
        self.assertEqual(dict(command.keyword), {})

    def testKeywordBlock(self):
        command = compile_scheme(TP)
        self.assertEqual([argument.name for argument in command.positional], ["player", "x", "y", "z"])
        self.assertEqual(command.positional[3].origin, 0)
        self.assertIsNone(command.argument("z"))
        mode = command.argument("mode")
        self.assertTrue(mode.optional)
        self.assertEqual(mode.default, "absolute")
        self.assertEqual(mode.enumeration, "|relative|absolute|")

    def testDeterministic(self):
        self.assertEqual(compile_scheme(TP), compile_scheme(TP))
        self.assertEqual(compile_scheme(HEAL), compile_scheme(HEAL))

    def testExecutorIsBound(self):
        def executor(interpreter, args, kwargs):
            pass

        self.assertIs(compile_scheme("ping", executor).executor, executor)

    def testNameWithoutArguments(self):
        command = compile_scheme("  ping:  ")
        self.assertEqual(command.name, "ping")
        self.assertEqual(command.positional, ())

    def testNamespacedName(self):
        command = compile_scheme("world:time: value:int")
        self.assertEqual(command.name, "world:time")
        self.assertEqual(command.positional[0].name, "value")

    def testImplicitEnumerations(self):
        inline = compile_scheme("pick: choice:[a|b]").positional[0]
        named = compile_scheme("give: item:$items").positional[0]
        spaced = compile_scheme("give: item:enum $items").positional[0]
        self.assertEqual(inline.type, ArgType.ENUMVALUE)
        self.assertEqual(inline.enumeration, "|a|b|")
        self.assertEqual(named.enumeration, "items")
        self.assertEqual(spaced, named)

    def testModifierOrderDoesNotMatter(self):
        self.assertEqual(
            compile_scheme("x: a:int~0=1").positional[0],
            compile_scheme("x: a:int=1 ~0").positional[0],
        )

    def testNoneDefault(self):
        argument = compile_scheme("x: a:str=none").positional[0]
        self.assertTrue(argument.optional)
        self.assertIsNone(argument.default)

    def testQuotedNames(self):
        command = compile_scheme('"say hi": "the text":str')
        self.assertEqual(command.name, "say hi")
        self.assertEqual(command.positional[0].name, "the text")

    def testNumericDefaultsFitNumbers(self):
        argument = compile_scheme("x: a:num=1").positional[0]
        self.assertEqual(argument.default, 1)

    def testSameNameInBothNamespaces(self):
        command = compile_scheme("x: a:int {a:int=1}")
        self.assertEqual(command.argument(0).name, command.argument("a").name)


class TestSchemeFaults(TestCase):
    """Behavioral tests for compile-time faults."""

    def testSpaceInsideEnumerationPointsAtTheSpace(self):
        with self.assertRaises(EnumerationSeparatorError) as context:
            compile_scheme("pick: choice:enum[a b]")
        self.assertEqual((context.exception.line, context.exception.column), (1, 20))
        self.assertEqual(context.exception.code, FaultCode.ENUMERATION_SEPARATOR)

    def testEmptyEnumeration(self):
        with self.assertRaises(EmptyEnumerationError):
            compile_scheme("pick: choice:enum[]")
        with self.assertRaises(EmptyEnumerationError):
            compile_scheme("pick: choice:[a||b]")

    def testUnterminatedEnumeration(self):
        with self.assertRaises(ExpectedTokenError):
            compile_scheme("pick: choice:[a|b")

    def testEnumerationNeedsASet(self):
        with self.assertRaises(ExpectedTokenError):
            compile_scheme("pick: choice:enum other:int")

    def testUnknownType(self):
        with self.assertRaises(UnknownTypeError) as context:
            compile_scheme("x: a:float")
        self.assertEqual(context.exception.column, 6)
        self.assertEqual(context.exception.options["type"], "float")

    def testMissingColon(self):
        with self.assertRaises(ExpectedTokenError) as context:
            compile_scheme("x: a int")
        self.assertEqual(context.exception.column, 5)

    def testUnterminatedKeywordBlock(self):
        with self.assertRaises(ExpectedTokenError):
            compile_scheme("x: {a:int=1")

    def testSingleKeywordBlock(self):
        with self.assertRaises(ExpectedTokenError):
            compile_scheme("x: {a:int=1} {b:int=1}")

    def testRelativeOperatorNeedsNumericArgument(self):
        with self.assertRaises(RelativeOperatorError):
            compile_scheme("x: a:str~0")
        with self.assertRaises(RelativeOperatorError):
            compile_scheme("x: a:@~0")

    def testOriginMustBeNumberOrName(self):
        with self.assertRaises(RelativeOperatorError):
            compile_scheme("x: a:int~true")

    def testDuplicatedNames(self):
        with self.assertRaises(DuplicateArgumentError) as context:
            compile_scheme("x: a:int a:int")
        self.assertEqual(context.exception.column, 10)
        with self.assertRaises(DuplicateArgumentError):
            compile_scheme("x: {a:int=1 a:int=2}")

    def testDefaultMustFitType(self):
        for scheme in ('x: a:int="s"', "x: a:int=1.5", "x: a:@=true", "x: a:str=3", "x: m:[a|b]=c"):
            with self.subTest(scheme=scheme):
                with self.assertRaises(DefaultValueError):
                    compile_scheme(scheme)

    def testInvalidCharacter(self):
        with self.assertRaises(InvalidCharacterError):
            compile_scheme("x: a:int=#")

    def testMessagesCarryTheArgumentName(self):
        with self.assertRaises(DefaultValueError) as context:
            compile_scheme("x: amount:int=1.5")
        self.assertIn("argument 'amount'", str(context.exception))


if __name__ == "__main__":
    unittest.main()
