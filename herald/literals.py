"""
Identifiers and value literals shared by the scheme compiler and the prompt parser.

Identifiers
- start with a letter, '_', '$', '@' or '.', continue with letters, digits, '_', '$',
  '@' and '.'; a quoted string ("..." or '...') is also accepted as an identifier.
- with colon=True, ':' is accepted between identifier characters ("world:time"); a
  trailing ':' is left for the caller (it separates a scheme's name from its arguments).

Literals (parse_value)
- identifier → true/false (bool), none/nil/null (None), otherwise the word as a string.
- quoted → string.
- '+', '-' or a digit → number (the sign is consumed here, the digits by the scanner).
- anything else → InvalidCharacterError naming the character.
"""
from .faults import *
from .scanner import Scanner
from .utils import quote

_KEYWORDS = {
    "true": True,
    "false": False,
    "none": None,
    "nil": None,
    "null": None,
}


def is_identifier_start(char, /):
    return char.isalpha() or char in "_$@."


def is_identifier_part(char, /):
    return char.isalnum() or char in "_$@."


class LiteralParser(Scanner):
    """
    Scanner extended with identifier and literal value parsing.
    """

    def parse_identifier(self, *, colon=False):
        char = self.peek()
        if char in "\"'":
            self.advance()
            return self.parse_string(char)
        if not is_identifier_start(char):
            raise self.error(
                "identifier expected",
                ExpectedTokenError,
                title="identifier expected",
                code=FaultCode.EXPECTED_TOKEN,
                hint="names start with a letter, '_', '$', '@' or '.', or are quoted",
                found=char,
            )
        start = self.pos
        source = self.source
        while self.hasnext():
            char = source[self.pos]
            if is_identifier_part(char):
                self.pos += 1
            elif colon and char == ":" and self.pos + 1 < len(source) and is_identifier_part(source[self.pos + 1]):
                self.pos += 1
            else:
                break
        return source[start:self.pos]

    def parse_value(self):
        char = self.peek()
        if is_identifier_start(char):
            word = self.parse_identifier(colon=True)
            return _KEYWORDS.get(word, word)
        if char in "\"'":
            self.advance()
            return self.parse_string(char)
        if char in "+-0123456789":
            sign = -1 if char == "-" else 1
            if char in "+-":
                self.advance()
            return self.parse_number(sign)
        raise self.error(
            "invalid character %s" % quote(char),
            InvalidCharacterError,
            title="invalid character",
            code=FaultCode.INVALID_CHARACTER,
            hint="values are words, quoted strings or numbers",
            found=char,
        )


__all__ = (
    "LiteralParser",
    "is_identifier_start",
    "is_identifier_part",
)
