"""
Dynamic values: the untyped runtime data flowing through schemes and prompts.

Representation
- Native Python values stand for the variants:
    None   → none
    bool   → boolean
    int    → integer
    float  → number
    str    → string
    list   → list  (ordered, appended to while parsing)
    dict   → map   (insertion ordered, string keys, overwrite on duplicate put)
- bool is an int subclass in Python but never counts as an integer here; every
  dispatch below matches bool() before int().

Numeric coercion
- An integer is acceptable wherever a number is required (tonumber(3) == 3.0).
- The reverse is not: tointeger(3.0) raises TypeError.
"""
from collections.abc import Mapping, Sequence

NONE = None
"""The none value (kept as a name for readability at call sites)."""


def typename(value, /):
    """
    Return the kind name of a dynamic value.

    Raises TypeError for objects that are not dynamic values.
    """
    match value:
        case None:
            return "none"
        case bool():
            return "boolean"
        case int():
            return "integer"
        case float():
            return "number"
        case str():
            return "string"
        case list():
            return "list"
        case dict():
            return "map"
        case _:
            raise TypeError("%r is not a dynamic value" % type(value).__name__)


def isinteger(value, /):
    return isinstance(value, int) and not isinstance(value, bool)


def isnumeric(value, /):
    return isinteger(value) or isinstance(value, float)


def tonumber(value, /):
    """
    Read a number out of an integer or number value.
    """
    match value:
        case bool():
            pass
        case int() | float():
            return float(value)
    raise TypeError("number expected, got %s" % _kind(value))


def tointeger(value, /):
    """
    Read an integer out of an integer value (numbers are not truncated).
    """
    if isinteger(value):
        return value
    raise TypeError("integer expected, got %s" % _kind(value))


def normalize(value, /):
    """
    Convert a host object into a dynamic value.

    - None, bool, int, float and str pass through unchanged.
    - Mappings become dicts (keys must be strings, order preserved).
    - Other non-string sequences (tuples, lists...) become lists.
    - Anything else raises TypeError.

    Nested containers are converted recursively; the result never shares containers
    with the input.
    """
    match value:
        case None | bool() | int() | float() | str():
            return value
        case Mapping():
            result = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TypeError("map keys must be strings, got %r" % type(key).__name__)
                result[key] = normalize(item)
            return result
        case bytes() | bytearray():
            raise TypeError("%r cannot be converted to a dynamic value" % type(value).__name__)
        case Sequence():
            return [normalize(item) for item in value]
        case _:
            raise TypeError("%r cannot be converted to a dynamic value" % type(value).__name__)


def _kind(value):
    try:
        return typename(value)
    except TypeError:
        return type(value).__name__


__all__ = (
    "NONE",
    "typename",
    "isinteger",
    "isnumeric",
    "tonumber",
    "tointeger",
    "normalize",
)
