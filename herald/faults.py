"""
Herald faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain so logs and searches stay predictable.
- ParseError / CommandWarning: base types that carry a message plus options and
  know how to render themselves with rich (header, message, caret, hint).
- trigger(): central entry point to surface a fault (raise or print, see shell mode).
- getdoc(): optional description lookup for a code from the host application.

Position model
- Every ParseError built by a scanner carries the source label, a 1-based line and
  a 1-based column. str(error) reads like a compiler diagnostic:
      <string>:1:12: argument 'amount': integer expected, got string
- The scanned text travels with the error (option "text") so renderers can show the
  offending line with a caret under the column.

Integration
- Parsers call Scanner.error(...) to build faults and raise them immediately: there is
  no recovery, the first fault aborts the compile or the parse.
- Interpreter.execute() hands faults to trigger() which, in shell mode, prints them to
  the stderr console instead of propagating.

Host hooks (read from __main__)
- __prog__: program name in the header (defaults to "herald").
- __styles__: palette overrides.
- __codes__: FaultCode → label remapping.
- __docs__: FaultCode → documentation string (see getdoc()).
"""
import inspect
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across herald (stable identifiers).

    grouping (by high-level domain)
    - lexical (211xx)
      • UNEXPECTED_END, INVALID_CHARACTER, UNTERMINATED_STRING, MALFORMED_NUMBER
    - grammar (221xx)
      • EXPECTED_TOKEN, UNKNOWN_TYPE, EMPTY_ENUMERATION, ENUMERATION_SEPARATOR,
        DUPLICATE_ARGUMENT, DEFAULT_VALUE
    - binding (231xx)
      • UNKNOWN_COMMAND, UNKNOWN_KEYWORD, KEYWORD_NAME, EXTRA_POSITIONAL, MISSING_ARGUMENT
    - semantic (241xx)
      • ARGUMENT_TYPE, INVALID_ENUM_VALUE, UNKNOWN_ENUMERATION, RELATIVE_OPERATOR,
        RELATIVE_ARITHMETIC
    - warnings (251xx)
      • REDEFINED_COMMAND
    """
    # --- lexical errors (21xxx) ---
    UNEXPECTED_END              = 21101
    INVALID_CHARACTER           = 21102
    UNTERMINATED_STRING         = 21103
    MALFORMED_NUMBER            = 21104

    # --- grammar errors (22xxx) ---
    EXPECTED_TOKEN              = 22101
    UNKNOWN_TYPE                = 22102
    EMPTY_ENUMERATION           = 22103
    ENUMERATION_SEPARATOR       = 22104
    DUPLICATE_ARGUMENT          = 22105
    DEFAULT_VALUE               = 22106

    # --- binding errors (23xxx) ---
    UNKNOWN_COMMAND             = 23101
    UNKNOWN_KEYWORD             = 23102
    KEYWORD_NAME                = 23103
    EXTRA_POSITIONAL            = 23104
    MISSING_ARGUMENT            = 23105

    # --- semantic errors (24xxx) ---
    ARGUMENT_TYPE               = 24101
    INVALID_ENUM_VALUE          = 24102
    UNKNOWN_ENUMERATION         = 24103
    RELATIVE_OPERATOR           = 24104
    RELATIVE_ARITHMETIC         = 24105

    # --- warnings (25xxx) ---
    REDEFINED_COMMAND           = 25101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(fault, palette, /):
    """
    build the rich renderable shared by errors and warnings.

    layout
    - header: [ prog - code | title ]
    - message
    - the offending source line and a caret under the column (when known)
    - hint arrow (when a hint is present)
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", "herald"), styler("prog-name"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " - ",
        text(code.normalize() if code is not None else "?", styler("code")),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), styler("title")),
        " ]"
    )
    renders = [text(fault, styler("message"))]

    source, line, column = options.get("text"), options.get("line"), options.get("column")
    if source is not None and line and column:
        lines = source.splitlines() or [""]
        if line <= len(lines):
            renders.append(text(lines[line - 1], styler("source")))
            renders.append(text(" " * (column - 1) + "^", styler("caret")))

    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class ParseError(Exception):
    """
    the single error kind of herald.

    carries
    - message: human-readable text (argument-scoped errors start with "argument 'name':").
    - options: read-only mapping with the position (source, line, column), the scanned
      text, the FaultCode, a short title, a hint and any extra context (argument,
      command, value...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def source(self):
        return self.options.get("source", "<string>")

    @property
    def line(self):
        return self.options.get("line")

    @property
    def column(self):
        return self.options.get("column")

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __str__(self):
        message = str(self.message) if self.message is not Unset else type(self).__name__
        if self.line is None:
            return message
        return "%s:%d:%d: %s" % (self.source, self.line, self.column, message)

    def __rich__(self):
        return _renderer(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "source": "#E6E6F0",
            "caret": "bold #FF4DA6",
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnexpectedEndError(ParseError): ...
class InvalidCharacterError(ParseError): ...
class UnterminatedStringError(ParseError): ...
class MalformedNumberError(ParseError): ...
class ExpectedTokenError(ParseError): ...
class UnknownTypeError(ParseError): ...
class EmptyEnumerationError(ParseError): ...
class EnumerationSeparatorError(ParseError): ...
class DuplicateArgumentError(ParseError): ...
class DefaultValueError(ParseError): ...
class UnknownCommandError(ParseError): ...
class UnknownKeywordError(ParseError): ...
class KeywordNameError(ParseError): ...
class ExtraPositionalError(ParseError): ...
class MissingArgumentError(ParseError): ...
class ArgumentTypeError(ParseError): ...
class InvalidEnumValueError(ParseError): ...
class UnknownEnumerationError(ParseError): ...
class RelativeOperatorError(ParseError): ...
class RelativeArithmeticError(ParseError): ...


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else type(self).__name__

    def __rich__(self):
        return _renderer(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RedefinedCommandWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - outside shell mode errors are raised and warnings go through warnings.warn;
      in shell mode both are printed to the stderr console.

    typical options
    - shell, fancy, colorful, and any context the renderer may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParseError",
    "UnexpectedEndError",
    "InvalidCharacterError",
    "UnterminatedStringError",
    "MalformedNumberError",
    "ExpectedTokenError",
    "UnknownTypeError",
    "EmptyEnumerationError",
    "EnumerationSeparatorError",
    "DuplicateArgumentError",
    "DefaultValueError",
    "UnknownCommandError",
    "UnknownKeywordError",
    "KeywordNameError",
    "ExtraPositionalError",
    "MissingArgumentError",
    "ArgumentTypeError",
    "InvalidEnumValueError",
    "UnknownEnumerationError",
    "RelativeOperatorError",
    "RelativeArithmeticError",
    "CommandWarning",
    "RedefinedCommandWarning",
    "trigger",
    "getdoc",
)
