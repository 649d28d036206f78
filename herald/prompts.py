"""
Prompt parser: binds a prompt line to a registered command.

Prompt syntax
    prompt   := name value*
    value    := literal                  (positional)
              | '~' [literal]            (relative positional)
              | name '=' ['~'] literal   (keyword; '~' makes it relative)

Positional binding
- Values fill positional slots left to right.
- A value that does not fit an optional slot skips it: the slot receives its default
  and the value is tried against the next slot ("heal 7" with
  "heal: target:@ amount:int=10" binds target=7, amount=10).
- A value that does not fit a mandatory slot raises ArgumentTypeError.
- A relative value binds to the first slot that declares an origin; when it reaches a
  slot without origin first, the delta is checked against that slot and used as an
  absolute value (numeric slots only).
- Trailing slots receive their defaults; a missing mandatory slot raises
  MissingArgumentError, as does a missing mandatory keyword.

The result is a Prompt holding the command, the positional values (one per slot, in
order) and the keyword values (one per declared keyword).
"""
import difflib

from .faults import *
from .literals import LiteralParser
from .checks import Checker
from .relatives import Resolver
from .utils import Unset, quote


class Prompt:
    """
    Result of parsing a prompt: command plus bound argument values.

    Attributes
    - command: the Command the prompt named.
    - args: list of dynamic values, args[i] bound to command.positional[i].
    - kwargs: dict of dynamic values keyed by keyword-argument name.
    """

    def __init__(self, command, args=(), kwargs=None, /):
        self.command = command
        self.args = list(args)
        self.kwargs = dict(kwargs or {})

    def bind(self):
        """
        Flatten to a name → value dict (keyword values win over positional names).
        """
        return {
            argument.name: value
            for argument, value in zip(self.command.positional, self.args)
        } | self.kwargs

    def __eq__(self, other):
        if not isinstance(other, Prompt):
            return NotImplemented
        return (self.command, self.args, self.kwargs) == (other.command, other.args, other.kwargs)

    __hash__ = None

    def __repr__(self):
        return "prompt(command=%r, args=%r, kwargs=%r)" % (self.command.name, self.args, self.kwargs)

    def __rich_repr__(self):
        yield "command", self.command.name
        yield "args", self.args
        yield "kwargs", self.kwargs


class PromptParser(Checker, Resolver, LiteralParser):
    """
    Parser for one prompt line against a repository.

    variables: callable name → dynamic value, consulted for relative origins.
    enumerations: mapping name → "|a|b|" for named enumerations.
    """

    def __init__(self, source, repository, /, variables=None, enumerations=None, filename="<prompt>"):
        super().__init__(source, filename)
        self.repository = repository
        if variables is not None:
            self.variables = variables
        if enumerations is not None:
            self.enumerations = enumerations
        self.mark = 0

    def parse_command(self):
        self.skipws()
        self.mark = self.pos
        name = self.parse_identifier(colon=True)
        command = self.repository.get(name)
        if command is None:
            suggestions = difflib.get_close_matches(name, self.repository.names(), n=3)
            raise self.error(
                "unknown command %s" % quote(name),
                UnknownCommandError,
                pos=self.mark,
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                hint=(
                    "did you mean %s?" % quote(suggestions[0])
                    if suggestions else
                    "no command is registered under this name"
                ),
                input=name,
                suggestions=tuple(suggestions),
            )
        return command

    def parse_prompt(self):
        command = self.parse_command()
        args, kwargs = [], {}
        index = 0
        while True:
            self.skipws()
            if not self.hasnext():
                break
            self.mark = self.pos
            relative = self.source[self.pos] == "~"
            if relative:
                self.advance()
                if not self.hasnext() or self.source[self.pos].isspace():
                    index = self.bind_positional(command, index, args, Unset, relative=True)
                    continue
                self.mark = self.pos

            value = self.parse_value()
            if not relative:
                self.skipws()
                if self.hasnext() and self.source[self.pos] == "=":
                    self.bind_keyword(command, value, kwargs)
                    continue
            index = self.bind_positional(command, index, args, value, relative=relative)

        self.mark = len(self.source)
        while (argument := command.argument(index)) is not None:
            if not argument.optional:
                raise self.missing(command, argument, "argument")
            args.append(argument.default)
            index += 1
        for name, argument in command.keyword.items():
            if name in kwargs:
                continue
            if not argument.optional:
                raise self.missing(command, argument, "keyword argument")
            kwargs[name] = argument.default

        return Prompt(command, args, kwargs)

    def bind_positional(self, command, index, args, value, /, *, relative=False):
        """
        Bind value to the next acceptable positional slot; return the next index.

        value is Unset for a bare "~".
        """
        seed = 0 if value is Unset else value
        while True:
            argument = command.argument(index)
            if argument is None:
                raise self.error(
                    "extra positional argument",
                    ExtraPositionalError,
                    pos=self.mark,
                    title="too many arguments",
                    code=FaultCode.EXTRA_POSITIONAL,
                    hint="%s takes %d positional argument%s: %s" % (
                        quote(command.name),
                        len(command.positional),
                        "" if len(command.positional) == 1 else "s",
                        command.usage,
                    ),
                    command=command,
                )
            index += 1
            if relative and argument.relative:
                break
            if relative and not argument.type.numeric and not argument.optional:
                raise self.operatorerror(argument)
            if self.typecheck(argument, seed):
                break
            args.append(argument.default)

        if relative:
            value = self.resolve_relative(argument, value)
            self.strictcheck(argument, value)
        args.append(value)
        return index

    def bind_keyword(self, command, key, kwargs, /):
        """
        Parse the value of "key=value" (cursor on '=') and store it in kwargs.
        """
        if not isinstance(key, str):
            raise self.error(
                "keyword name expected, got %s" % type(key).__name__,
                KeywordNameError,
                pos=self.mark,
                title="invalid keyword name",
                code=FaultCode.KEYWORD_NAME,
                hint="keyword arguments are written name=value",
                key=key,
            )
        argument = command.argument(key)
        if argument is None:
            suggestions = difflib.get_close_matches(key, tuple(command.keyword), n=3)
            raise self.error(
                "unknown keyword argument %s" % quote(key),
                UnknownKeywordError,
                pos=self.mark,
                title="unknown keyword argument",
                code=FaultCode.UNKNOWN_KEYWORD,
                hint=(
                    "did you mean %s?" % quote(suggestions[0])
                    if suggestions else
                    "usage: %s" % command.usage
                ),
                command=command,
                key=key,
                suggestions=tuple(suggestions),
            )

        self.expect("=")
        self.skipws()
        self.mark = self.pos
        if self.peek() == "~":
            value = self.parse_relative(argument)
        else:
            value = self.parse_value()
        self.strictcheck(argument, value)
        kwargs[key] = value

    def missing(self, command, argument, kind, /):
        return self.error(
            "missing %s %s" % (kind, quote(argument.name)),
            MissingArgumentError,
            pos=self.mark,
            title="missing argument",
            code=FaultCode.MISSING_ARGUMENT,
            hint="usage: %s" % command.usage,
            command=command,
            argument=argument,
        )


__all__ = (
    "Prompt",
    "PromptParser",
)
