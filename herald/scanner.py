"""
Position-tracking cursor over a text (the scanning layer under every herald parser).

Contract
- A Scanner walks a single in-memory string with a 0-based offset (self.pos).
- Character access never silently runs past the end: peek()/peekraw()/advance()
  raise UnexpectedEndError when the input is exhausted; callers test hasnext() first
  when the end is a legitimate stop.
- Whitespace is insignificant for peek() (it is skipped first) and significant for
  peekraw(), which is how prompts tell "~" from "~ ".
- error(message, fault) builds (does not raise) a fault positioned at the cursor:
  1-based line and column are derived from the offset, so back() never desynchronizes
  the reported position.

Literal decoding
- parse_string(quote): the cursor sits right after the opening quote; escapes
  \\n \\t \\r \\b \\f \\v \\0 \\\\ \\" \\' \\xHH \\uHHHH are decoded, a backslash-newline
  is a line continuation.
- parse_number(sign): the sign has already been consumed by the caller; decimal,
  0x/0o/0b integers, fractions and exponents are supported. Integers come back as
  int, anything with a fraction or exponent as float.
  Integers must fit a signed 64-bit range and floats must be finite; anything else
  is a MalformedNumberError ("99999999999999999999", "1e999").
"""
import math

from .faults import *

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

_DIGITS = "0123456789"

_INT_MIN, _INT_MAX = -2 ** 63, 2 ** 63 - 1

_BASES = {
    "x": 16,
    "o": 8,
    "b": 2,
}


class Scanner:
    """
    Cursor over a source string with position-aware error construction.
    """

    def __init__(self, source, filename="<string>", /):
        if not isinstance(source, str):
            raise TypeError("scanner source must be a string")
        if not isinstance(filename, str):
            raise TypeError("scanner filename must be a string")
        self.source = source
        self.filename = filename
        self.pos = 0

    def position(self, pos=None, /):
        """
        1-based (line, column) of an offset (the cursor by default).
        """
        pos = self.pos if pos is None else pos
        line = self.source.count("\n", 0, pos) + 1
        column = pos - (self.source.rfind("\n", 0, pos) + 1) + 1
        return line, column

    def error(self, message, fault=ParseError, /, *, pos=None, **options):
        """
        Build a fault of the given class positioned at the cursor (or at pos).
        """
        line, column = self.position(pos)
        return fault(
            message,
            source=self.filename,
            line=line,
            column=column,
            text=self.source,
            **options
        )

    def hasnext(self):
        return self.pos < len(self.source)

    def skipws(self):
        while self.hasnext() and self.source[self.pos].isspace():
            self.pos += 1

    def peekraw(self):
        if not self.hasnext():
            raise self.error(
                "unexpected end",
                UnexpectedEndError,
                title="unexpected end of input",
                code=FaultCode.UNEXPECTED_END,
                hint="the input stops before the current construct is complete",
            )
        return self.source[self.pos]

    def peek(self):
        self.skipws()
        return self.peekraw()

    def advance(self):
        char = self.peekraw()
        self.pos += 1
        return char

    def back(self, count=1, /):
        if count < 0 or count > self.pos:
            raise ValueError("cannot move back %d characters from offset %d" % (count, self.pos))
        self.pos -= count

    def expect(self, char, /):
        """
        Consume exactly `char` at the cursor (whitespace is not skipped).
        """
        if not self.hasnext() or self.source[self.pos] != char:
            raise self.error(
                "'%s' expected" % char,
                ExpectedTokenError,
                title="expected token",
                code=FaultCode.EXPECTED_TOKEN,
                hint="insert '%s' here" % char,
                expected=char,
            )
        self.pos += 1

    def readuntil(self, char, /):
        """
        Return the text up to (not including) `char`; the cursor stops on `char` or at the end.
        """
        start = self.pos
        while self.hasnext() and self.source[self.pos] != char:
            self.pos += 1
        return self.source[start:self.pos]

    def parse_string(self, quote, /):
        start = self.pos - 1
        chunks = []
        while True:
            if not self.hasnext():
                raise self.error(
                    "unterminated string",
                    UnterminatedStringError,
                    pos=start,
                    title="unterminated string",
                    code=FaultCode.UNTERMINATED_STRING,
                    hint="close the string with %s" % quote,
                )
            char = self.source[self.pos]
            if char == "\n":
                raise self.error(
                    "unterminated string",
                    UnterminatedStringError,
                    pos=start,
                    title="unterminated string",
                    code=FaultCode.UNTERMINATED_STRING,
                    hint="strings cannot span lines; close it with %s" % quote,
                )
            self.pos += 1
            if char == quote:
                return "".join(chunks)
            if char != "\\":
                chunks.append(char)
                continue
            chunks.append(self._escape())

    def _escape(self):
        # the backslash is consumed already
        char = self.advance()
        if char in _ESCAPES:
            return _ESCAPES[char]
        if char == "\n":
            return ""
        if char in ("x", "u"):
            width = 2 if char == "x" else 4
            digits = self.source[self.pos:self.pos + width]
            if len(digits) != width or any(digit not in "0123456789abcdefABCDEF" for digit in digits):
                raise self.error(
                    "invalid '\\%s' escape" % char,
                    InvalidCharacterError,
                    title="invalid escape",
                    code=FaultCode.INVALID_CHARACTER,
                    hint="'\\%s' takes exactly %d hexadecimal digits" % (char, width),
                )
            self.pos += width
            return chr(int(digits, 16))
        self.back()
        raise self.error(
            "'\\%s' is an illegal escape" % char,
            InvalidCharacterError,
            title="invalid escape",
            code=FaultCode.INVALID_CHARACTER,
            hint="escape a literal backslash as '\\\\'",
        )

    def parse_number(self, sign=1, /):
        start = self.pos
        if not self.hasnext() or self.source[self.pos] not in _DIGITS:
            raise self._malformed(start, "number expected")

        text = self.source
        if text[self.pos] == "0" and self.pos + 1 < len(text) and text[self.pos + 1].lower() in _BASES:
            base = _BASES[text[self.pos + 1].lower()]
            self.pos += 2
            digits = self._digits(lambda char: char.isalnum())
            try:
                value = int(digits, base)
            except ValueError:
                raise self._malformed(start, "malformed base-%d integer" % base) from None
            self._terminate(start)
            return self._bounded(start, sign * value)

        integral = self._digits(_DIGITS.__contains__)
        fraction = exponent = ""
        if self.hasnext() and text[self.pos] == "." and self.pos + 1 < len(text) and text[self.pos + 1] in _DIGITS:
            self.pos += 1
            fraction = "." + self._digits(_DIGITS.__contains__)
        if self.hasnext() and text[self.pos] in "eE":
            self.pos += 1
            exponent = "e"
            if self.hasnext() and text[self.pos] in "+-":
                exponent += self.advance()
            if not self.hasnext() or text[self.pos] not in _DIGITS:
                raise self._malformed(start, "exponent digits expected")
            exponent += self._digits(_DIGITS.__contains__)
        self._terminate(start)

        if fraction or exponent:
            return self._bounded(start, sign * float(integral + fraction + exponent))
        try:
            value = int(integral)
        except ValueError:
            # digit strings past the interpreter's conversion limit
            raise self._malformed(start, "integer out of range") from None
        return self._bounded(start, sign * value)

    def _digits(self, predicate):
        start = self.pos
        while self.hasnext() and predicate(self.source[self.pos]):
            self.pos += 1
        return self.source[start:self.pos]

    def _terminate(self, start):
        # a literal glued to letters ("5abc", "1.") is not a number
        if self.hasnext() and (self.source[self.pos].isalnum() or self.source[self.pos] in "_."):
            raise self._malformed(start, "malformed number")

    def _bounded(self, start, value):
        if isinstance(value, float):
            if not math.isfinite(value):
                raise self._malformed(start, "number out of range")
        elif not _INT_MIN <= value <= _INT_MAX:
            raise self._malformed(start, "integer out of range")
        return value

    def _malformed(self, start, message):
        return self.error(
            message,
            MalformedNumberError,
            pos=start,
            title="malformed number",
            code=FaultCode.MALFORMED_NUMBER,
            hint="write numbers like 12, -3, 0.5, 1e3 or 0xff",
        )


__all__ = (
    "Scanner",
)
