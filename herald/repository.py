"""
Command repository: the name → Command table shared by an interpreter.

Concurrency
- Writers (add/remove) serialize on a lock and publish a fresh read-only snapshot.
- Readers (get/names/iteration) use whatever snapshot is current and never block, so a
  prompt parse always sees one consistent table even while commands are registered.

Redefinition
- Adding a command under an existing name replaces it and emits
  RedefinedCommandWarning (printed in shell mode, warnings.warn otherwise).
"""
from threading import Lock
from types import MappingProxyType

from .arguments import Command
from .faults import *
from .schemes import compile_scheme
from .utils import quote


class Repository:
    """
    Thread-safe command table.
    """

    def __init__(self, commands=(), /):
        self._lock = Lock()
        self._commands = MappingProxyType({})
        for command in commands:
            self.add(command)

    @property
    def commands(self):
        """
        Current read-only snapshot (name → Command).
        """
        return self._commands

    def add(self, scheme, executor=None, /, **options):
        """
        Compile (when given a scheme string) and register a command; return it.

        options are forwarded to trigger() for the redefinition warning
        (shell, fancy, colorful).
        """
        if isinstance(scheme, str):
            command = compile_scheme(scheme, executor)
        elif isinstance(scheme, Command):
            if executor is not None:
                raise TypeError("an executor can only be given with a scheme string")
            command = scheme
        else:
            raise TypeError("add() argument must be a scheme string or a command")

        with self._lock:
            commands = dict(self._commands)
            previous = commands.get(command.name)
            commands[command.name] = command
            self._commands = MappingProxyType(commands)

        if previous is not None:
            trigger(
                RedefinedCommandWarning(
                    "command %s redefined" % quote(command.name),
                    title="command redefined",
                    code=FaultCode.REDEFINED_COMMAND,
                    hint="the previous definition (%s) was replaced" % previous.usage,
                    command=command,
                ),
                **options
            )
        return command

    def get(self, name, /):
        return self._commands.get(name)

    def remove(self, name, /):
        """
        Unregister and return a command; KeyError when the name is unknown.
        """
        with self._lock:
            commands = dict(self._commands)
            command = commands.pop(name)
            self._commands = MappingProxyType(commands)
        return command

    def names(self):
        return tuple(self._commands)

    def __contains__(self, name):
        return name in self._commands

    def __iter__(self):
        return iter(tuple(self._commands.values()))

    def __len__(self):
        return len(self._commands)


__all__ = (
    "Repository",
)
