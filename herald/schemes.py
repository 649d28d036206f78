"""
Scheme compiler: turns a command scheme string into a Command.

Grammar (informal)
    scheme     := name [':'] argument* ['{' argument* '}']
    argument   := name ':' type enumspec? modifier*
    type       := 'num' | 'int' | 'str' | '@' | 'enum' | '[' (implicit enum) | '$' (implicit enum)
    enumspec   := '[' member ('|' member)* ']' | '$' name
    modifier   := '=' literal        (optional argument, literal is the default)
                | '~' literal        (origin of the relative operator)

Examples
    heal: target:@ amount:int=10~health
    tp: player:@ x:num~0 y:num~0 z:num~0 {mode:enum[relative|absolute]=absolute}
    give: item:$items count:int=1

Compile-time checks
- unknown type keywords, empty enumerations, spaces inside an inline enumeration;
- duplicate names inside the positional list or the keyword block;
- defaults whose kind does not fit the declared type (inline enumerations also check
  membership; named ones are resolved only when prompts are parsed);
- '~' on a non-numeric argument.
The first problem raises; nothing is registered on failure.
"""
from .arguments import *
from .dynamic import isinteger, isnumeric, typename
from .faults import *
from .literals import LiteralParser, is_identifier_part
from .utils import quote


class SchemeParser(LiteralParser):
    """
    Compiler for one scheme string.
    """

    def _word(self):
        start = self.pos
        while self.hasnext() and (is_identifier_part(self.source[self.pos]) and self.source[self.pos] != "$"):
            self.pos += 1
        return self.source[start:self.pos]

    def parse_type(self):
        char = self.peek()
        if char in "[$":
            return ArgType.ENUMVALUE
        start = self.pos
        keyword = self._word()
        if not keyword:
            raise self.error(
                "type expected",
                ExpectedTokenError,
                title="type expected",
                code=FaultCode.EXPECTED_TOKEN,
                hint="declare the type after ':' (num, int, str, @ or enum)",
                found=char,
            )
        type = ArgType.lookup(keyword)
        if type is None:
            raise self.error(
                "unknown type %s" % quote(keyword),
                UnknownTypeError,
                pos=start,
                title="unknown type",
                code=FaultCode.UNKNOWN_TYPE,
                hint="use one of num, int, str, @ or enum",
                type=keyword,
            )
        return type

    def parse_enum(self):
        char = self.peek()
        start = self.pos
        if char == "[":
            self.advance()
            body = self.readuntil("]")
            if not self.hasnext():
                raise self.error(
                    "']' expected",
                    ExpectedTokenError,
                    title="unterminated enumeration",
                    code=FaultCode.EXPECTED_TOKEN,
                    hint="close the enumeration with ']'",
                    expected="]",
                )
            for offset, member in enumerate(body):
                if member.isspace():
                    raise self.error(
                        "whitespace inside an enumeration",
                        EnumerationSeparatorError,
                        pos=start + 1 + offset,
                        title="invalid enumeration separator",
                        code=FaultCode.ENUMERATION_SEPARATOR,
                        hint="separate members with '|', e.g. [a|b|c]",
                    )
            if not all(body.split("|")):
                raise self.error(
                    "empty enumeration" if not body else "empty enumeration member",
                    EmptyEnumerationError,
                    pos=start,
                    title="empty enumeration",
                    code=FaultCode.EMPTY_ENUMERATION,
                    hint="list at least one member, e.g. [a|b]",
                )
            self.advance()
            return "|%s|" % body

        self.expect("$")
        name = self._word()
        if not name:
            raise self.error(
                "enumeration name expected",
                ExpectedTokenError,
                title="enumeration name expected",
                code=FaultCode.EXPECTED_TOKEN,
                hint="name a registered enumeration, e.g. $items",
            )
        return name

    def parse_argument(self, taken, /):
        self.skipws()
        start = self.pos
        name = self.parse_identifier()
        if name in taken:
            raise self.error(
                "argument %s: duplicated name" % quote(name),
                DuplicateArgumentError,
                pos=start,
                title="duplicated argument",
                code=FaultCode.DUPLICATE_ARGUMENT,
                hint="rename one of the arguments",
                argument=name,
            )
        self.expect(":")
        type = self.parse_type()
        enumeration = self.parse_enum() if type is ArgType.ENUMVALUE else ""

        optional, default, origin = False, None, None
        marks = {}
        while True:
            self.skipws()
            if not self.hasnext() or self.source[self.pos] not in "=~":
                break
            modifier = self.advance()
            marks[modifier] = self.pos
            if modifier == "=":
                optional = True
                default = self.parse_value()
            else:
                origin = self.parse_value()

        if "~" in marks:
            self._check_origin(name, type, origin, marks["~"])
        if "=" in marks:
            self._check_default(name, type, enumeration, default, marks["="])
        return Argument(name, type, optional, default, origin, enumeration)

    def _check_origin(self, name, type, origin, pos):
        if not type.numeric:
            raise self.error(
                "argument %s: the relative operator needs a numeric argument" % quote(name),
                RelativeOperatorError,
                pos=pos - 1,
                title="invalid relative operator",
                code=FaultCode.RELATIVE_OPERATOR,
                hint="only num and int arguments accept '~'",
                argument=name,
            )
        if isinstance(origin, bool) or not (origin is None or isnumeric(origin) or isinstance(origin, str)):
            raise self.error(
                "argument %s: origin must be a number or a variable name, got %s" % (quote(name), typename(origin)),
                RelativeOperatorError,
                pos=pos,
                title="invalid relative origin",
                code=FaultCode.RELATIVE_OPERATOR,
                hint="write ~0 for a constant origin or ~name for a variable",
                argument=name,
            )

    def _check_default(self, name, type, enumeration, default, pos):
        if default is None:
            return
        match type:
            case ArgType.NUMBER:
                accepted = isnumeric(default)
            case ArgType.INTEGER | ArgType.SELECTOR:
                accepted = isinteger(default)
            case ArgType.STRING:
                accepted = isinstance(default, str)
            case ArgType.ENUMVALUE if enumeration.startswith("|"):
                accepted = isinstance(default, str) and "|" not in default and "|%s|" % default in enumeration
            case ArgType.ENUMVALUE:
                accepted = isinstance(default, str)
        if not accepted:
            raise self.error(
                "argument %s: default %s does not fit type %s" % (quote(name), typename(default), type.value),
                DefaultValueError,
                pos=pos,
                title="invalid default value",
                code=FaultCode.DEFAULT_VALUE,
                hint="the default must be a valid %s" % type.label,
                argument=name,
                value=default,
            )

    def parse_scheme(self, executor=None, /):
        self.skipws()
        name = self.parse_identifier(colon=True)
        if self.hasnext() and self.source[self.pos] == ":":
            self.advance()

        positional, keyword = [], {}
        block = False
        while True:
            self.skipws()
            if not self.hasnext():
                break
            if self.source[self.pos] != "{":
                positional.append(self.parse_argument({argument.name for argument in positional}))
                continue
            if block:
                raise self.error(
                    "only one keyword block is allowed",
                    ExpectedTokenError,
                    title="duplicated keyword block",
                    code=FaultCode.EXPECTED_TOKEN,
                    hint="declare every keyword argument inside a single {...}",
                )
            block = True
            self.advance()
            while True:
                self.skipws()
                if not self.hasnext():
                    raise self.error(
                        "'}' expected",
                        ExpectedTokenError,
                        title="unterminated keyword block",
                        code=FaultCode.EXPECTED_TOKEN,
                        hint="close the keyword block with '}'",
                        expected="}",
                    )
                if self.source[self.pos] == "}":
                    self.advance()
                    break
                argument = self.parse_argument(keyword)
                keyword[argument.name] = argument

        return Command(name, positional, keyword, executor)


def compile_scheme(scheme, executor=None, /, filename="<scheme>"):
    """
    Compile a scheme string into a Command bound to executor.

    Raises a ParseError subclass (with line and column) on the first malformed construct.
    """
    return SchemeParser(scheme, filename).parse_scheme(executor)


__all__ = (
    "SchemeParser",
    "compile_scheme",
)
