"""
Type checking of parsed values against argument slots.

typecheck(argument, value) answers whether value may bind to argument:
- True: the value is acceptable.
- False: the value does not fit but the argument is optional, so the caller may skip
  the slot (its default is used) and try the next one.
- raises ArgumentTypeError: the value does not fit a mandatory argument.

Enumeration values are checked for kind first (a non-string follows the rules above);
a string that is not a member always raises InvalidEnumValueError, even for optional
slots. Named enumerations are looked up in self.enumerations; a missing name raises
UnknownEnumerationError.
"""
from types import MappingProxyType

from .arguments import ArgType
from .dynamic import isinteger, isnumeric, typename
from .faults import *
from .utils import quote


class Checker:
    """
    Mixin for scanners that bind values to arguments.

    Expects error() from Scanner; mark is the offset of the value being checked.
    """
    enumerations = MappingProxyType({})
    mark = None

    def argerror(self, argument, message, fault, /, **options):
        """
        Build a fault scoped to argument and positioned at the current value.
        """
        return self.error(
            "argument %s: %s" % (quote(argument.name), message),
            fault,
            pos=self.mark,
            argument=argument,
            **options
        )

    def members(self, argument, /):
        """
        The "|a|b|" form of the enumeration of argument.
        """
        if not argument.named:
            return argument.enumeration
        try:
            return self.enumerations[argument.enumeration]
        except KeyError:
            raise self.argerror(
                argument,
                "unknown enumeration %s" % quote(argument.enumeration),
                UnknownEnumerationError,
                title="unknown enumeration",
                code=FaultCode.UNKNOWN_ENUMERATION,
                hint="register the enumeration before parsing prompts",
            ) from None

    def typecheck(self, argument, value, /):
        match argument.type:
            case ArgType.NUMBER:
                accepted = isnumeric(value)
            case ArgType.INTEGER | ArgType.SELECTOR:
                accepted = isinteger(value)
            case ArgType.STRING:
                accepted = isinstance(value, str)
            case ArgType.ENUMVALUE:
                accepted = isinstance(value, str)
                if accepted:
                    members = self.members(argument)
                    if "|" in value or "|%s|" % value not in members:
                        raise self.argerror(
                            argument,
                            "invalid enumeration value %s" % quote(value),
                            InvalidEnumValueError,
                            title="invalid enumeration value",
                            code=FaultCode.INVALID_ENUM_VALUE,
                            hint="expected one of: %s" % ", ".join(members[1:-1].split("|")),
                            value=value,
                        )
        if accepted:
            return True
        if argument.optional:
            return False
        raise self.typeerror(argument, value)

    def typeerror(self, argument, value, /):
        return self.argerror(
            argument,
            "%s expected, got %s" % (argument.type.label, typename(value)),
            ArgumentTypeError,
            title="argument type mismatch",
            code=FaultCode.ARGUMENT_TYPE,
            hint="usage: %s" % argument.usage,
            value=value,
        )

    def strictcheck(self, argument, value, /):
        """
        typecheck() without the optional escape hatch: a mismatch always raises.
        """
        if not self.typecheck(argument, value):
            raise self.typeerror(argument, value)


__all__ = (
    "Checker",
)
