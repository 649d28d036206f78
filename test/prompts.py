"""
Prompt parser behavioral tests (binding, skipping, keywords, relatives, faults).

Scope
- Validate positional binding order, optional-slot skipping and trailing defaults.
- Validate keyword arguments and their equivalence with positional values.
- Validate enumeration membership (inline and named).
- Validate the relative operator against constant and variable origins.
- Validate binding faults and their positions.

Conventions
- Test method names follow CamelCase per project convention.
- Prompts are parsed through an Interpreter that owns a private repository.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from herald import Interpreter, Prompt, PromptParser, Repository
from herald.faults import (
    ArgumentTypeError,
    ExtraPositionalError,
    InvalidCharacterError,
    InvalidEnumValueError,
    KeywordNameError,
    MissingArgumentError,
    RelativeArithmeticError,
    RelativeOperatorError,
    UnknownCommandError,
    UnknownEnumerationError,
    UnknownKeywordError,
)


class TestPositionalBinding(TestCase):
    """Behavioral tests for positional slots."""

    def setUp(self):
        self.interpreter = Interpreter(variables={"health": 50})
        self.interpreter.register("heal: target:@ amount:int=10 ~health")
        self.interpreter.register("add: a:int b:int c:num")
        self.interpreter.register("give: count:int=1 item:str")
        self.interpreter.register('say: text:str')

    def testHealDefaultsAmount(self):
        prompt = self.interpreter.parse("heal 7")
        self.assertEqual(prompt.command.name, "heal")
        self.assertEqual(prompt.args, [7, 10])
        self.assertEqual(prompt.kwargs, {})

    def testHealRelativeDelta(self):
        self.assertEqual(self.interpreter.parse("heal 7 ~3").args, [7, 53])

    def testHealBareRelative(self):
        self.assertEqual(self.interpreter.parse("heal 7 ~").args, [7, 50])

    def testMandatoryValuesBindInOrder(self):
        self.assertEqual(self.interpreter.parse("add 1 2 3.5").args, [1, 2, 3.5])

    def testIntegerAcceptedAsNumber(self):
        self.assertEqual(self.interpreter.parse("add 1 2 3").args, [1, 2, 3])

    def testOptionalSlotIsSkipped(self):
        self.assertEqual(self.interpreter.parse("give sword").args, [1, "sword"])
        self.assertEqual(self.interpreter.parse("give 3 sword").args, [3, "sword"])

    def testQuotedString(self):
        self.assertEqual(self.interpreter.parse('say "hello world"').args, ["hello world"])

    def testWhitespaceIsInsignificant(self):
        self.assertEqual(self.interpreter.parse("  heal   7   ").args, [7, 10])

    def testBind(self):
        self.assertEqual(self.interpreter.parse("heal 7").bind(), {"target": 7, "amount": 10})

    def testMissingArgumentNamesIt(self):
        with self.assertRaises(MissingArgumentError) as context:
            self.interpreter.parse("heal")
        self.assertIn("'target'", str(context.exception))

    def testMissingTrailingArgument(self):
        with self.assertRaises(MissingArgumentError) as context:
            self.interpreter.parse("add 1 2")
        self.assertIn("'c'", str(context.exception))

    def testExtraPositional(self):
        with self.assertRaises(ExtraPositionalError):
            self.interpreter.parse("heal 7 3 4")
        with self.assertRaises(ExtraPositionalError):
            self.interpreter.parse("add 1 2 3 4")

    def testTypeMismatchOnMandatorySlot(self):
        with self.assertRaises(ArgumentTypeError) as context:
            self.interpreter.parse("heal abc")
        self.assertEqual(context.exception.column, 6)
        self.assertIn("argument 'target': id expected, got string", str(context.exception))

    def testBooleansAreNotIntegers(self):
        with self.assertRaises(ArgumentTypeError):
            self.interpreter.parse("heal true")

    def testInvalidCharacter(self):
        with self.assertRaises(InvalidCharacterError):
            self.interpreter.parse("heal 7 #")

    def testUnknownCommand(self):
        with self.assertRaises(UnknownCommandError) as context:
            self.interpreter.parse("frobnicate")
        self.assertEqual(context.exception.options["input"], "frobnicate")

    def testUnknownCommandSuggestion(self):
        with self.assertRaises(UnknownCommandError) as context:
            self.interpreter.parse("heel 7")
        self.assertIn("'heal'", context.exception.hint)


class TestKeywordBinding(TestCase):
    """Behavioral tests for key=value arguments."""

    def setUp(self):
        self.interpreter = Interpreter(variables={"px": 1.5})
        self.interpreter.register("tp: x:num {mode:enum[relative|absolute]=absolute}")
        self.interpreter.register("setp: mode:[relative|absolute]")
        self.interpreter.register("setk: {mode:[relative|absolute]}")
        self.interpreter.register("move: {x:num=0 ~px}")
        self.interpreter.register("cfg: {level:int}")

    def testKeywordDefault(self):
        prompt = self.interpreter.parse("tp 1")
        self.assertEqual(prompt.args, [1])
        self.assertEqual(prompt.kwargs, {"mode": "absolute"})

    def testKeywordBeforePositional(self):
        prompt = self.interpreter.parse("tp mode=relative 1")
        self.assertEqual(prompt.args, [1])
        self.assertEqual(prompt.kwargs, {"mode": "relative"})

    def testSpacesAroundEquals(self):
        self.assertEqual(self.interpreter.parse("tp 1 mode = relative").kwargs, {"mode": "relative"})

    def testKeywordMatchesPositional(self):
        positional = self.interpreter.parse("setp relative").args[0]
        keyword = self.interpreter.parse("setk mode=relative").kwargs["mode"]
        self.assertEqual(positional, keyword)

    def testMissingMandatoryKeyword(self):
        with self.assertRaises(MissingArgumentError) as context:
            self.interpreter.parse("cfg")
        self.assertIn("keyword argument 'level'", str(context.exception))

    def testKeywordMismatchIsFatal(self):
        with self.assertRaises(ArgumentTypeError):
            self.interpreter.parse("move x=abc")

    def testUnknownKeyword(self):
        with self.assertRaises(UnknownKeywordError) as context:
            self.interpreter.parse("tp 1 mod=relative")
        self.assertIn("'mode'", context.exception.hint)

    def testKeywordNameMustBeAString(self):
        with self.assertRaises(KeywordNameError):
            self.interpreter.parse("tp 1 5=3")

    def testInvalidEnumerationValue(self):
        with self.assertRaises(InvalidEnumValueError):
            self.interpreter.parse("tp 1 mode=sideways")

    def testRelativeKeyword(self):
        self.assertEqual(self.interpreter.parse("move x=~2").kwargs, {"x": 3.5})
        self.assertEqual(self.interpreter.parse("move x=~").kwargs, {"x": 1.5})

    def testRelativeKeywordOnEnumeration(self):
        with self.assertRaises(RelativeOperatorError):
            self.interpreter.parse("tp 1 mode=~1")


class TestEnumerations(TestCase):
    """Behavioral tests for enumeration membership."""

    def setUp(self):
        self.interpreter = Interpreter(enumerations={"items": ["sword", "shield"]})
        self.interpreter.register("pick: style:[bold|thin]=thin count:int")
        self.interpreter.register("choose: option:[a|b|c]")
        self.interpreter.register("give: item:$items")

    def testMembersAccepted(self):
        for value in ("a", "b", "c"):
            with self.subTest(value=value):
                self.assertEqual(self.interpreter.parse("choose " + value).args, [value])

    def testOtherStringsRejected(self):
        for value in ("d", "ab", '"a|b"', '""'):
            with self.subTest(value=value):
                with self.assertRaises(InvalidEnumValueError):
                    self.interpreter.parse("choose " + value)

    def testNonStringRejectedWhenMandatory(self):
        with self.assertRaises(ArgumentTypeError):
            self.interpreter.parse("choose 1")

    def testNonStringSkipsOptionalSlot(self):
        self.assertEqual(self.interpreter.parse("pick 3").args, ["thin", 3])

    def testWrongStringIsFatalEvenWhenOptional(self):
        with self.assertRaises(InvalidEnumValueError):
            self.interpreter.parse("pick wide 3")

    def testNamedEnumeration(self):
        self.assertEqual(self.interpreter.parse("give sword").args, ["sword"])
        with self.assertRaises(InvalidEnumValueError):
            self.interpreter.parse("give axe")

    def testUnknownNamedEnumeration(self):
        interpreter = Interpreter(self.interpreter.repository)
        with self.assertRaises(UnknownEnumerationError):
            interpreter.parse("give sword")


class TestRelativeValues(TestCase):
    """Behavioral tests for the relative operator on positional slots."""

    def setUp(self):
        self.variables = {"health": 10}
        self.interpreter = Interpreter(variables=self.variables)
        self.interpreter.register("heal: target:@ amount:int=10 ~health")
        self.interpreter.register("shift: a:int b:int~0")
        self.interpreter.register("scale: f:num~1")
        self.interpreter.register("say: text:str")
        self.interpreter.register("label: tag:str=none count:int")

    def testDeltaIsAddedToVariable(self):
        self.assertEqual(self.interpreter.parse("heal 1 ~5").args, [1, 15])

    def testBareRelativeYieldsOrigin(self):
        self.assertEqual(self.interpreter.parse("heal 1 ~").args, [1, 10])

    def testNegativeDelta(self):
        self.assertEqual(self.interpreter.parse("heal 1 ~-4").args, [1, 6])

    def testNoneOriginKeepsDelta(self):
        del self.variables["health"]
        self.assertEqual(self.interpreter.parse("heal 1 ~3").args, [1, 3])

    def testConstantOrigin(self):
        self.assertEqual(self.interpreter.parse("shift 4 ~1").args, [4, 1])

    def testSlotWithoutOriginTakesTheDelta(self):
        self.assertEqual(self.interpreter.parse("shift ~4 ~1").args, [4, 1])

    def testNumberArithmetic(self):
        value = self.interpreter.parse("scale ~0.5").args[0]
        self.assertEqual(value, 1.5)
        self.assertIsInstance(value, float)

    def testIntegerArithmeticRejectsFractions(self):
        with self.assertRaises(RelativeArithmeticError) as context:
            self.interpreter.parse("heal 1 ~1.5")
        self.assertIn("argument 'amount'", str(context.exception))

    def testNonNumericOrigin(self):
        self.variables["health"] = "full"
        with self.assertRaises(RelativeArithmeticError):
            self.interpreter.parse("heal 1 ~1")

    def testRelativeOnStringSlot(self):
        with self.assertRaises(RelativeOperatorError):
            self.interpreter.parse("say ~hello")

    def testBareRelativeOnStringSlot(self):
        with self.assertRaises(RelativeOperatorError) as context:
            self.interpreter.parse("say ~")
        self.assertEqual(context.exception.column, 5)
        self.assertIn("argument 'text'", str(context.exception))

    def testNumericDeltaOnStringSlot(self):
        with self.assertRaises(RelativeOperatorError) as context:
            self.interpreter.parse("say ~5")
        self.assertEqual(context.exception.column, 6)

    def testRelativeSkipsOptionalStringSlot(self):
        self.assertEqual(self.interpreter.parse("label ~2").args, [None, 2])

    def testCallableVariables(self):
        interpreter = Interpreter(self.interpreter.repository, variables=lambda name: 100)
        self.assertEqual(interpreter.parse("heal 1 ~1").args, [1, 101])


class TestPromptParser(TestCase):
    """Behavioral tests for the parser used without an interpreter."""

    def testStandaloneParser(self):
        repository = Repository()
        repository.add("echo: text:str")
        prompt = PromptParser("echo hi", repository).parse_prompt()
        self.assertEqual(prompt, Prompt(repository.get("echo"), ["hi"], {}))

    def testFailedParseBuildsNoPrompt(self):
        repository = Repository()
        parser = PromptParser("frobnicate 1 2", repository)
        with self.assertRaises(UnknownCommandError):
            parser.parse_prompt()

    def testRepr(self):
        repository = Repository()
        repository.add("echo: text:str")
        prompt = PromptParser("echo hi", repository).parse_prompt()
        self.assertEqual(repr(prompt), "prompt(command='echo', args=['hi'], kwargs={})")


if __name__ == "__main__":
    unittest.main()
