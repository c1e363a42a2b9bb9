"""
Treeargs typed values and the token coercion cascade.

Overview
- Tag: closed enumeration of the five value kinds (BOOL, INT, UINT, FLOAT, STR).
- Value: sealed base of exactly five variants: Bool, Int, UInt, Float, Str.
  A Value is both the declared default of an option (its tag fixes the kind the
  option accepts) and the parsed result stored for that option.
- coerce(token, tag): decide which kind a raw token represents, with a fixed
  precedence that never fails; anything unrecognized degrades to Str.

Precedence of coerce()
1. "true"/"yes"   → Bool(True)   (case-insensitive, whatever the tag)
2. "false"/"no"   → Bool(False)  (case-insensitive, whatever the tag)
3. float literal  → Float        (only when tag is FLOAT)
4. digits only    → UInt / Int   (only when tag is UINT or INT, and in range)
5. signed digits  → Int          (only when tag is INT, and in range)
6. anything else  → Str(token)   verbatim

Ranges
- Int holds a signed 64-bit integer, UInt an unsigned 64-bit integer.
  Out-of-range payloads are rejected on construction; during coercion an
  out-of-range literal simply falls through to the next rule.
- Float holds a double; a finite literal that overflows it (1e400) is out of
  range too, while "inf" and "nan" are accepted as written.

Examples
    >>> coerce("1.5", Tag.FLOAT)
    Float(1.5)
    >>> coerce("-3", Tag.UINT)
    Str('-3')
    >>> Value.of(True) == Bool(True)
    True
"""
import enum
import math
import re
from typing import final

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1
UINT_MAX = 2 ** 64 - 1

TRUE_LITERALS = frozenset({"true", "yes"})
FALSE_LITERALS = frozenset({"false", "no"})

_FLOAT = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)", re.IGNORECASE)
_NONFINITE = re.compile(r"[+-]?(?:inf(?:inity)?|nan)", re.IGNORECASE)
_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")


class Tag(enum.Enum):
    """
    kind of a value; fixed for an option by the variant of its default.
    """
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    STR = "str"

    @property
    def label(self):
        """
        placeholder shown in usage text for options of this kind (None for BOOL).
        """
        return {
            Tag.BOOL: None,
            Tag.INT: "INT",
            Tag.UINT: "UINT",
            Tag.FLOAT: "FLOAT",
            Tag.STR: "STRING",
        }[self]


class Value:
    """
    Sealed base of the five value variants.

    Contract
    - Only Bool, Int, UInt, Float and Str exist; further subclassing raises TypeError.
    - Two values are equal only when both tag and payload are equal, so
      Int(1) != UInt(1) and Float(1.0) != Int(1).
    - Values are hashable and immutable once constructed.
    """
    __slots__ = ("_value",)
    __sealed__ = False

    tag = None

    def __init_subclass__(cls, **options):
        if Value.__sealed__:
            raise TypeError(f"type {cls.__mro__[1].__name__!r} is not an acceptable base type")
        super().__init_subclass__(**options)

    def __init__(self, value, /):
        raise TypeError("cannot instantiate 'Value' directly, use one of its variants or Value.of()")

    @staticmethod
    def of(object, /):
        """
        Promote a plain Python literal to its Value variant.

        bool → Bool, int → Int, float → Float, str → Str; a Value passes through.
        Unsigned integers must be declared explicitly with UInt(...).
        """
        match object:
            case Value():
                return object
            case bool():
                return Bool(object)
            case int():
                return Int(object)
            case float():
                return Float(object)
            case str():
                return Str(object)
            case _:
                raise TypeError(f"cannot build a value from {type(object).__name__!r}")

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        if hasattr(self, "_value"):
            raise AttributeError(f"{type(self).__name__!r} object is immutable")
        super().__setattr__(name, value)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.tag is other.tag and self._value == other._value

    def __hash__(self):
        return hash((self.tag, self._value))

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r})"

    def __rich_repr__(self):
        yield self._value


@final
class Bool(Value):
    __slots__ = ()
    tag = Tag.BOOL

    def __init__(self, value, /):
        if not isinstance(value, bool):
            raise TypeError("'Bool' value must be a boolean")
        self._value = value


@final
class Int(Value):
    __slots__ = ()
    tag = Tag.INT

    def __init__(self, value, /):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("'Int' value must be an integer")
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(f"'Int' value {value} is out of the signed 64-bit range")
        self._value = value


@final
class UInt(Value):
    __slots__ = ()
    tag = Tag.UINT

    def __init__(self, value, /):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("'UInt' value must be an integer")
        if not 0 <= value <= UINT_MAX:
            raise ValueError(f"'UInt' value {value} is out of the unsigned 64-bit range")
        self._value = value


@final
class Float(Value):
    __slots__ = ()
    tag = Tag.FLOAT

    def __init__(self, value, /):
        if not isinstance(value, int | float) or isinstance(value, bool):
            raise TypeError("'Float' value must be a real number")
        self._value = float(value)


@final
class Str(Value):
    __slots__ = ()
    tag = Tag.STR

    def __init__(self, value, /):
        if not isinstance(value, str):
            raise TypeError("'Str' value must be a string")
        self._value = value


Value.__sealed__ = True


def is_true(token, /):
    return token.lower() in TRUE_LITERALS


def is_false(token, /):
    return token.lower() in FALSE_LITERALS


def is_boolean(token, /):
    """
    True when token is one of the boolean literals (true/yes/false/no, any case).
    """
    return is_true(token) or is_false(token)


def coerce(token, tag, /):
    """
    Turn a raw token into a Value for a slot of the given tag.

    The cascade never raises on content: a token that is not a literal of the
    expected kind comes back as Str(token), and it is up to the caller to treat
    that as a mismatch. Only wrong argument types raise TypeError.
    """
    if not isinstance(token, str):
        raise TypeError("coerce() first argument must be a string")
    if not isinstance(tag, Tag):
        raise TypeError("coerce() second argument must be a tag")

    if is_true(token):
        return Bool(True)
    if is_false(token):
        return Bool(False)

    if tag is Tag.FLOAT and _FLOAT.fullmatch(token):
        number = float(token)
        # finite literals beyond the double range fall through like out-of-range integers
        if math.isfinite(number) or _NONFINITE.fullmatch(token):
            return Float(number)

    if tag in (Tag.UINT, Tag.INT) and _UNSIGNED.fullmatch(token):
        try:
            return UInt(int(token)) if tag is Tag.UINT else Int(int(token))
        except ValueError:
            pass  # out of range, keep falling

    if tag is Tag.INT and _SIGNED.fullmatch(token):
        try:
            return Int(int(token))
        except ValueError:
            pass

    return Str(token)


__all__ = (
    "Tag",
    "Value",
    "Bool",
    "Int",
    "UInt",
    "Float",
    "Str",
    "coerce",
    "is_true",
    "is_false",
    "is_boolean",
)
