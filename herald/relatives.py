"""
Relative operator ('~') resolution.

A relative value is written "~" or "~delta" in a prompt. Its final value is
origin + delta, where origin comes from the argument's declaration:
- a numeric constant (x:num~0) is used as is;
- a variable name (amount:int~health) is looked up through self.variables at parse time;
- no origin makes the delta absolute.

Arithmetic follows the argument type: num adds as floats, int adds integers only
(an integer argument never accepts a fractional delta or origin). A bare "~" yields
the origin itself (0 when there is none).
"""
from .arguments import ArgType
from .dynamic import isnumeric, tointeger, tonumber
from .faults import *
from .utils import Unset, quote


class Resolver:
    """
    Mixin for prompt parsers; expects Checker.argerror() and LiteralParser.parse_value().

    variables is a callable name → dynamic value (None for unknown names).
    """

    @staticmethod
    def variables(name, /):
        return None

    def fetch_origin(self, argument, /):
        origin = argument.origin
        if isinstance(origin, str):
            return self.variables(origin)
        if isnumeric(origin):
            return origin
        return None

    def operatorerror(self, argument, /):
        return self.argerror(
            argument,
            "the relative operator needs a numeric argument",
            RelativeOperatorError,
            title="invalid relative operator",
            code=FaultCode.RELATIVE_OPERATOR,
            hint="'~' only applies to num and int arguments",
        )

    def apply_relative(self, argument, delta, origin, /):
        if not argument.type.numeric:
            raise self.operatorerror(argument)
        if origin is None:
            return delta
        try:
            if argument.type is ArgType.NUMBER:
                return tonumber(origin) + tonumber(delta)
            return tointeger(origin) + tointeger(delta)
        except TypeError as exception:
            raise self.argerror(
                argument,
                "relative %s" % exception,
                RelativeArithmeticError,
                title="invalid relative arithmetic",
                code=FaultCode.RELATIVE_ARITHMETIC,
                hint="origin %s and delta must both be %ss" % (
                    quote(argument.origin) if isinstance(argument.origin, str) else argument.origin,
                    argument.type.label,
                ),
                origin=origin,
                delta=delta,
            ) from None

    def resolve_relative(self, argument, delta=Unset, /):
        """
        Final value of "~delta" (or of a bare "~" when delta is Unset) for argument.
        """
        origin = self.fetch_origin(argument)
        if delta is Unset:
            if not argument.type.numeric:
                return self.apply_relative(argument, 0, origin)
            return 0 if origin is None else origin
        return self.apply_relative(argument, delta, origin)

    def parse_relative(self, argument, /):
        """
        Parse "~" or "~delta" at the cursor (keyword values) and resolve it.
        """
        self.expect("~")
        if not self.hasnext() or self.source[self.pos].isspace():
            return self.resolve_relative(argument)
        self.mark = self.pos
        return self.resolve_relative(argument, self.parse_value())


__all__ = (
    "Resolver",
)
