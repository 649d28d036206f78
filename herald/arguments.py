r"""
Herald argument model: the compiled form of a command scheme.

Overview
- ArgType: closed set of argument kinds with their scheme keywords
  (num, int, str, @, enum).
- Argument: one signature slot (name, type, optional, default, origin, enumeration).
- Command: a named signature (ordered positional slots + keyword slots) bound to an
  opaque executor handle.

Introspection & representation
- SpecType metaclass provides stable __repr__/__rich_repr__, structural equality and
  exposes the fields declared in __introspectable__ as read-only properties.
- Containers come back frozen: Command.positional is a tuple, Command.keyword a
  read-only mapping.

Validation highlights
- Argument names are non-empty strings; positional names are unique within a command,
  keyword names are unique within the keyword block (the two namespaces are separate).
- enumeration is set for enum arguments only, and only enum arguments carry one.
- origin is None, a numeric constant or a variable name, and only numeric arguments
  (num/int) may declare one.
- default is meaningful only for optional arguments.

Quick example:
    >>> amount = Argument("amount", ArgType.INTEGER, optional=True, default=10, origin="health")
    >>> heal = Command("heal", (Argument("target", ArgType.SELECTOR), amount))
    >>> heal.usage
    'heal <target:@> [amount:int=10 ~health]'
"""
import functools
import operator
import re
from collections.abc import Mapping, Iterable
from enum import Enum

from .dynamic import isnumeric, typename
from .utils import *


class ArgType(Enum):
    """
    Argument kinds, valued by their scheme keyword.

    SELECTOR is structurally an integer (an entity/object id) and is checked like
    INTEGER; it stays a distinct kind so executors know the value is a reference.
    """
    NUMBER = "num"
    INTEGER = "int"
    STRING = "str"
    SELECTOR = "@"
    ENUMVALUE = "enum"

    @property
    def numeric(self):
        """
        True for kinds that support the relative ('~') operator.
        """
        return self in (ArgType.NUMBER, ArgType.INTEGER)

    @property
    def label(self):
        """
        Human name used in "<label> expected" messages.
        """
        return {
            ArgType.NUMBER: "number",
            ArgType.INTEGER: "integer",
            ArgType.STRING: "string",
            ArgType.SELECTOR: "id",
            ArgType.ENUMVALUE: "enumeration value",
        }[self]

    @classmethod
    def lookup(cls, keyword, /):
        """
        Resolve a scheme keyword (num/int/str/@/enum) or return None.
        """
        try:
            return cls(keyword)
        except ValueError:
            return None


class SpecType(type):
    """
    Metaclass that turns argument-model classes into introspectable records.

    Responsibilities
    - Expose the names listed in __introspectable__ as read-only properties mirroring
      the private "_name" backing fields.
    - Provide stable __repr__/__rich_repr__ for diagnostics and pretty printing.
    - Provide structural equality over the introspectable fields (instances are
      unhashable, like any mutable-looking record).

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in construction errors.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key fields.

            Example
            - argument(name='amount', type=<ArgType.INTEGER: 'int'>, optional=True, ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__eq__")
        def __eq__(self, other):
            if type(other) is not type(self):
                return NotImplemented
            return all(
                getattr(self, name) == getattr(other, name)
                for name in type(self).__introspectable__
            )
        self.__eq__ = __eq__
        self.__hash__ = None

        return self


def _sanitize_name(cls, name, /):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    return name


def _literal(value, /):
    """
    Render a dynamic value back into scheme/prompt literal syntax.
    """
    match value:
        case None:
            return "none"
        case bool():
            return "true" if value else "false"
        case int() | float():
            return repr(value)
        case str() if re.fullmatch(r"[^\W\d][\w.$@:]*", value) and value not in (
            "true", "false", "none", "nil", "null"
        ):
            return value
        case str():
            return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
        case _:
            return repr(value)


class Argument(metaclass=SpecType):
    """
    One signature slot of a command.

    Fields
    - name (str): unique within its namespace (positional list or keyword block).
    - type (ArgType): the argument kind.
    - optional (bool): an omitted optional argument receives `default`.
    - default (dynamic value): meaningful only when optional (None otherwise).
    - origin (None | int | float | str): base of the relative operator: a numeric
      constant or the name of a variable resolved at parse time. None disables '~'.
    - enumeration (str): for enum arguments, either the inline set stored as
      "|a|b|c|" or the bare name of a named enumeration; empty for other kinds.
    """

    __introspectable__ = (
        "name",
        "type",
        "optional",
        "default",
        "origin",
        "enumeration",
    )

    def __init__(
            self,
            name,
            type,
            /,
            optional=False,
            default=None,
            origin=None,
            enumeration="",
    ):
        self._name = _sanitize_name(Argument, name)

        if not isinstance(type, ArgType):
            raise TypeError("argument 'type' must be an ArgType")
        self._type = type

        self._optional = bool(optional)
        if not self._optional and default is not None:
            raise ValueError("argument %s: only optional arguments carry a default" % quote(name))
        typename(default)  # TypeError for non-dynamic defaults
        self._default = default

        if origin is not None:
            if not isinstance(origin, str) and not isnumeric(origin):
                raise TypeError("argument %s: 'origin' must be a number or a variable name" % quote(name))
            if not type.numeric:
                raise ValueError("argument %s: only numeric arguments support an origin" % quote(name))
        self._origin = origin

        if not isinstance(enumeration, str):
            raise TypeError("argument 'enumeration' must be a string")
        if type is ArgType.ENUMVALUE and not enumeration:
            raise ValueError("argument %s: enumeration arguments need an enumeration" % quote(name))
        if type is not ArgType.ENUMVALUE and enumeration:
            raise ValueError("argument %s: only enumeration arguments carry an enumeration" % quote(name))
        self._enumeration = enumeration

    @property
    def relative(self):
        """
        True when the argument accepts the relative ('~') operator with a known origin.
        """
        return self._origin is not None

    @property
    def named(self):
        """
        True when the enumeration refers to a named set ($name) rather than an inline one.
        """
        return bool(self._enumeration) and not self._enumeration.startswith("|")

    @property
    def kind(self):
        """
        Type as written in a scheme: num, int, str, @, enum[a|b] or enum$name.
        """
        if self._type is not ArgType.ENUMVALUE:
            return self._type.value
        if self.named:
            return "enum$" + self._enumeration
        return "enum[" + self._enumeration[1:-1] + "]"

    @property
    def usage(self):
        """
        Scheme-like rendering: <name:type> for mandatory, [name:type=default ~origin] for optional.
        """
        text = "%s:%s" % (self._name, self.kind)
        if self._optional:
            text += "=" + _literal(self._default)
        if self._origin is not None:
            text += " ~" + _literal(self._origin)
        return "[%s]" % text if self._optional else "<%s>" % text


class Command(metaclass=SpecType):
    """
    Compiled command signature bound to an opaque executor handle.

    Fields
    - name (str): unique within a repository; may contain ':' namespace separators.
    - positional (tuple[Argument, ...]): fixed order, bound by index.
    - keyword (Mapping[str, Argument]): bound by name (key=value in prompts).
    - executor (any): stored and handed back unchanged; herald never inspects it.
    """

    __introspectable__ = (
        "name",
        "positional",
        "keyword",
        "executor",
    )

    __displayable__ = (
        "name",
        "positional",
        "keyword",
    )

    def __init__(self, name, positional=(), keyword=(), executor=None, /):
        self._name = _sanitize_name(Command, name)

        if not isinstance(positional, Iterable):
            raise TypeError("command 'positional' must be an iterable of arguments")
        self._positional = []
        for argument in positional:
            if not isinstance(argument, Argument):
                raise TypeError("command 'positional' must contain arguments only")
            if any(argument.name == other.name for other in self._positional):
                raise ValueError("command %s: duplicated positional argument %s" % (
                    quote(name), quote(argument.name)
                ))
            self._positional.append(argument)

        if isinstance(keyword, Mapping):
            keyword = keyword.values()
        if not isinstance(keyword, Iterable):
            raise TypeError("command 'keyword' must be a mapping or an iterable of arguments")
        self._keyword = {}
        for argument in keyword:
            if not isinstance(argument, Argument):
                raise TypeError("command 'keyword' must contain arguments only")
            if argument.name in self._keyword:
                raise ValueError("command %s: duplicated keyword argument %s" % (
                    quote(name), quote(argument.name)
                ))
            self._keyword[argument.name] = argument

        self._executor = executor

    def argument(self, key, /):
        """
        Positional slot by index (int) or keyword slot by name (str); None when absent.
        """
        if isinstance(key, bool):
            raise TypeError("argument() key must be an index or a keyword name")
        if isinstance(key, int):
            if 0 <= key < len(self._positional):
                return self._positional[key]
            return None
        if isinstance(key, str):
            return self._keyword.get(key)
        raise TypeError("argument() key must be an index or a keyword name")

    @property
    def usage(self):
        """
        One-line signature, e.g. "tp <player:@> <x:num> {[mode:enum[relative|absolute]=absolute]}".
        """
        parts = [self._name]
        parts.extend(argument.usage for argument in self._positional)
        if self._keyword:
            parts.append("{%s}" % " ".join(argument.usage for argument in self._keyword.values()))
        return " ".join(parts)


__all__ = (
    "ArgType",
    "Argument",
    "Command",
)

# Remove the internal metaclass from the module namespace; it is not public API.
del SpecType
