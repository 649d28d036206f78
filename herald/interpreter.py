"""
Herald interpreter: the context object a host application talks to.

Owns
- a Repository of compiled commands (private, or shared between interpreters);
- the variable namespace consulted by relative origins ("~health");
- the registry of named enumerations referenced by "$name" schemes;
- the presentation flags used when faults are surfaced (shell, fancy, colorful).

Entry points
- register(scheme, executor) → name     compile and store a command
- lookup(name) → Command | None
- parse(text) → Prompt                  validate a prompt line (raises ParseError)
- execute(text)                         parse, then call executor(interpreter, args, kwargs)
- describe(name) / names() / help()     introspection for consoles and tooling

Variables
- variables may be a mapping (missing names read as None) or a callable name → value.
- interpreter[name] reads a variable; assignment and deletion require a mutable mapping.
  Assigned values are normalized into dynamic values.

Shell mode
- With shell=True, execute() prints faults to the stderr console and returns None
  instead of raising; redefinition warnings are printed instead of warned.
"""
from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping, MutableMapping
from types import MappingProxyType

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .arguments import ArgType
from .dynamic import normalize
from .faults import *
from .prompts import PromptParser
from .repository import Repository
from .utils import *


class Interpreter:
    """
    Command interpreter bound to one repository and one variable namespace.
    """

    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    repository = mirror("repository")

    def __init__(
            self,
            repository=Unset,
            /,
            *,
            variables=Unset,
            enumerations=Unset,
            shell=False,
            fancy=False,
            colorful=False,
    ):
        if repository is Unset:
            repository = Repository()
        if not isinstance(repository, Repository):
            raise TypeError("interpreter 'repository' must be a repository")
        self._repository = repository

        variables = coalesce(variables, {})
        if not isinstance(variables, Mapping | Callable):
            raise TypeError("interpreter 'variables' must be a mapping or a callable")
        self._variables = variables

        self._enumerations = {}
        for name, members in coalesce(enumerations, {}).items():
            self.enumerate(name, members)

        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

    @property
    def options(self):
        """
        Presentation options forwarded to trigger().
        """
        return {
            "shell": self._shell,
            "fancy": self._fancy,
            "colorful": self._colorful,
        }

    @property
    def enumerations(self):
        """
        Named enumerations as name → tuple of members.
        """
        return MappingProxyType({
            name: tuple(members[1:-1].split("|"))
            for name, members in self._enumerations.items()
        })

    def enumerate(self, name, members, /):
        """
        Register (or replace) the named enumeration referenced as $name in schemes.
        """
        if not isinstance(name, str) or not name:
            raise TypeError("enumeration name must be a non-empty string")
        if isinstance(members, str) or not isinstance(members, Iterable):
            raise TypeError("enumeration %s must be an iterable of strings" % quote(name))
        members = tuple(members)
        if not members:
            raise ValueError("enumeration %s cannot be empty" % quote(name))
        for member in members:
            if not isinstance(member, str):
                raise TypeError("enumeration %s must contain strings only" % quote(name))
            if not member or "|" in member or any(char.isspace() for char in member):
                raise ValueError("enumeration %s: invalid member %r" % (quote(name), member))
        self._enumerations[name] = "|%s|" % "|".join(members)

    def variable(self, name, /):
        """
        Resolve a variable (None when unknown); used for relative origins.
        """
        if isinstance(self._variables, Mapping):
            return self._variables.get(name)
        return self._variables(name)

    def __getitem__(self, name):
        return self.variable(name)

    def __setitem__(self, name, value):
        if not isinstance(self._variables, MutableMapping):
            raise TypeError("interpreter variables are read-only")
        if not isinstance(name, str):
            raise TypeError("variable names must be strings")
        self._variables[name] = normalize(value)

    def __delitem__(self, name):
        if not isinstance(self._variables, MutableMapping):
            raise TypeError("interpreter variables are read-only")
        del self._variables[name]

    def register(self, scheme, executor=None, /):
        """
        Compile scheme and store it under its name; return the name.

        Scheme errors always raise (registration happens at configuration time).
        """
        return self._repository.add(scheme, executor, **self.options).name

    def lookup(self, name, /):
        return self._repository.get(name)

    def names(self):
        return self._repository.names()

    def parse(self, text, /, filename="<prompt>"):
        """
        Parse a prompt line into a Prompt; raises a ParseError subclass on failure.
        """
        return PromptParser(
            text,
            self._repository,
            variables=self.variable,
            enumerations=MappingProxyType(self._enumerations),
            filename=filename,
        ).parse_prompt()

    def execute(self, text, /):
        """
        Parse text and dispatch it to the command's executor.

        Returns the executor's result, or None when a fault was printed in shell mode.
        """
        try:
            prompt = self.parse(text)
        except ParseError as fault:
            trigger(fault, **self.options)
            return None
        executor = prompt.command.executor
        if not callable(executor):
            raise TypeError("command %s has no callable executor" % quote(prompt.command.name))
        return executor(self, prompt.args, prompt.kwargs)

    def describe(self, name, /):
        """
        Plain-data description of a command (None when the name is unknown).
        """
        command = self._repository.get(name)
        if command is None:
            return None

        def argument(argument):
            if argument.type is not ArgType.ENUMVALUE:
                enumeration = None
            elif argument.named:
                enumeration = "$" + argument.enumeration
            else:
                enumeration = argument.enumeration[1:-1].split("|")
            return {
                "name": argument.name,
                "type": argument.type.value,
                "optional": argument.optional,
                "default": argument.default,
                "origin": argument.origin,
                "enumeration": enumeration,
            }

        return {
            "name": command.name,
            "usage": command.usage,
            "positional": [argument(slot) for slot in command.positional],
            "keyword": {key: argument(slot) for key, slot in command.keyword.items()},
        }

    def help(self, name=Unset, /):
        """
        Render the command table (or one command's signature) to the console.

        Palette keys
        - table-title, table-border, command-name, usage
        - argument-name, argument-type, default, origin, panel-title

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - When colorful is False, styling is suppressed.
        """
        console = Console()
        styles = defaultdict(str, {
            "table-title": "bold #FFFFFF",
            "table-border": "#4B5563",  # slate border
            "command-name": "bold #36C5F0",  # sky-blue commands
            "usage": "#9CA3AF",
            "argument-name": "bold #00E6FF",
            "argument-type": "bold #FFD600",  # amber types
            "default": "#22C55E",
            "origin": "#FF4D94",
            "panel-title": "bold #FF4D94",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self._colorful else ""

        def text(fragment, style=""):
            return Text(str(fragment), styler(style))

        if name is Unset:
            table = Table(
                "command", "usage",
                title=text("commands", "table-title"),
                box=ROUNDED,
                style=styler("table-border"),
                header_style=styler("table-title"),
            )
            for command in self._repository:
                table.add_row(text(command.name, "command-name"), text(command.usage, "usage"))
            render = table
            title = "commands"
        else:
            command = self._repository.get(name)
            if command is None:
                raise KeyError("unknown command %s" % quote(name))
            table = Table(
                "argument", "type", "default", "origin",
                box=ROUNDED,
                style=styler("table-border"),
                header_style=styler("table-title"),
            )
            slots = [(argument.name, argument) for argument in command.positional]
            slots += [(argument.name + "=", argument) for argument in command.keyword.values()]
            for label, argument in slots:
                table.add_row(
                    text(label, "argument-name"),
                    text(argument.kind, "argument-type"),
                    text(repr(argument.default) if argument.optional else "-", "default"),
                    text(argument.origin if argument.origin is not None else "-", "origin"),
                )
            render = Group(text(command.usage, "usage"), table)
            title = command.name

        if self._fancy:
            render = Panel(render, title=text(title, "panel-title"), title_align="left")
        console.print(render)


__all__ = (
    "Interpreter",
)
