"""
Helmsman value types: the closed scalar type set and the classification result.

Overview
- ArgType
  • Closed enumeration {UNSPECIFIED, INT, FLOAT, STRING, BOOL}.
  • ArgType(int) / ArgType(float) / ArgType(str) / ArgType(bool) map Python's
    builtin types onto members; ArgType(Unset) is UNSPECIFIED.
  • ArgType.infer(value) classifies a runtime value (bool before int, enum
    members through their value); anything else is UNSPECIFIED.
  • member.parse(string) turns shell text into a typed value.

- render(value)
  • Canonical string form of a scalar, used for choice matching and help.

- ArgMap
  • dict subclass returned by classification: canonical parameter name →
    scalar, or list of scalars for AllowMultiple parameters.
  • Typed accessors return the zero value for absent names and raise
    TypeError on a mismatched stored type.

Parsing rules
- INT: base-10, optional sign, digits only ("42", "-7", "+3").
- FLOAT: Python float syntax without surrounding whitespace or underscores.
- BOOL: "true"/"t"/"1" and "false"/"f"/"0", case-sensitive.
- STRING: verbatim.
- UNSPECIFIED: always an error ("unknown arg type").
"""
import re
from enum import Enum

from .utils import Unset


class ArgType(Enum):
    """
    Closed set of scalar parameter types.

    UNSPECIFIED is a registration-time placeholder: argument and flag specs
    replace it with a concrete member before any value is parsed.
    """
    UNSPECIFIED = ""
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"

    @classmethod
    def _missing_(cls, value):
        if value is Unset:
            return cls.UNSPECIFIED
        return {
            int: cls.INT,
            float: cls.FLOAT,
            str: cls.STRING,
            bool: cls.BOOL,
        }.get(value)

    def __str__(self):
        return self.value or "unspecified"

    @classmethod
    def infer(cls, value, /):
        """
        Map a runtime value onto its ArgType, or UNSPECIFIED when unsupported.

        Enum members are classified by their value, so `class Kind(str, Enum)`
        members infer as STRING.
        """
        if isinstance(value, Enum) and not isinstance(value, cls):
            value = value.value
        match value:
            case bool():
                return cls.BOOL
            case int():
                return cls.INT
            case float():
                return cls.FLOAT
            case str():
                return cls.STRING
            case _:
                return cls.UNSPECIFIED

    def parse(self, string, /):
        """
        Convert shell text into a value of this type.

        Raises
        - TypeError: when string is not a str.
        - ValueError: when the text is not a valid literal for this type, or
          when called on UNSPECIFIED.
        """
        if not isinstance(string, str):
            raise TypeError("parse() argument must be a string")
        match self:
            case ArgType.INT:
                if not re.fullmatch(r"[+-]?[0-9]+", string):
                    raise ValueError("value could not be parsed to an integer")
                return int(string, 10)
            case ArgType.FLOAT:
                if string != string.strip() or "_" in string:
                    raise ValueError("value could not be parsed to a float")
                try:
                    return float(string)
                except ValueError:
                    raise ValueError("value could not be parsed to a float") from None
            case ArgType.BOOL:
                if string in ("true", "t", "1"):
                    return True
                if string in ("false", "f", "0"):
                    return False
                raise ValueError("value could not be parsed into a bool")
            case ArgType.STRING:
                return string
            case _:
                raise ValueError("unknown arg type")

    def accepts(self, value, /):
        """
        Tell whether an already-typed value belongs to this type.

        INT never accepts bool; FLOAT also accepts int (widened by callers).
        """
        match self:
            case ArgType.INT:
                return isinstance(value, int) and not isinstance(value, bool)
            case ArgType.FLOAT:
                return isinstance(value, int | float) and not isinstance(value, bool)
            case ArgType.STRING:
                return isinstance(value, str)
            case ArgType.BOOL:
                return isinstance(value, bool)
            case _:
                return False


def render(value, /):
    """
    Canonical string form of a scalar (bools as "true"/"false").
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ArgMap(dict):
    """
    Classification result for one pipeline stage.

    Keys are canonical parameter names (a flag's long name, or its short name
    when it has none; an argument's name). Values are scalars, or lists of
    scalars for AllowMultiple parameters.
    """

    def _fetch(self, name, argtype, zero):
        if (value := self.get(name, Unset)) is Unset:
            return zero
        if not argtype.accepts(value):
            raise TypeError(f"argument {name!r} does not hold a {argtype} value")
        return value

    def _fetchall(self, name, argtype):
        if (values := self.get(name, Unset)) is Unset:
            return []
        if not isinstance(values, list | tuple) or not all(map(argtype.accepts, values)):
            raise TypeError(f"argument {name!r} does not hold a list of {argtype} values")
        return list(values)

    def getstring(self, name, /):
        return self._fetch(name, ArgType.STRING, "")

    def getint(self, name, /):
        return self._fetch(name, ArgType.INT, 0)

    def getfloat(self, name, /):
        return float(self._fetch(name, ArgType.FLOAT, 0.0))

    def getbool(self, name, /):
        return self._fetch(name, ArgType.BOOL, False)

    def getstrings(self, name, /):
        return self._fetchall(name, ArgType.STRING)

    def getints(self, name, /):
        return self._fetchall(name, ArgType.INT)

    def getfloats(self, name, /):
        return list(map(float, self._fetchall(name, ArgType.FLOAT)))


__all__ = (
    "ArgType",
    "ArgMap",
    "render",
)
