"""
Type Classifier Module

Decides the shape of a configuration entry and, for leaves, the native type a
value should carry in values.yaml. Strings are tried, in order, as a base-10
64-bit integer, a 64-bit float and a boolean token before being kept as text.
"""
import enum
import math
import re
from typing import Any, NamedTuple

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_RE = re.compile(r'^[+-]?[0-9]+$')
_FLOAT_RE = re.compile(r'^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$')
_FLOAT_SPECIALS = {'inf', '+inf', '-inf', 'infinity', '+infinity', '-infinity', 'nan', '+nan', '-nan'}

TRUE_TOKENS = frozenset({'1', 't', 'T', 'TRUE', 'true', 'True'})
FALSE_TOKENS = frozenset({'0', 'f', 'F', 'FALSE', 'false', 'False'})


class ValueKind(enum.Enum):
    STRING = 'string'
    INT = 'int'
    FLOAT = 'float'
    BOOL = 'bool'
    MAPPING = 'mapping'
    ARRAY = 'array'
    UNRECOGNIZED = 'unrecognized'

    @property
    def is_leaf(self) -> bool:
        return self in LEAF_KINDS


LEAF_KINDS = frozenset({ValueKind.STRING, ValueKind.INT, ValueKind.FLOAT, ValueKind.BOOL})


class Leaf(NamedTuple):
    """A classified scalar ready to be stored in values"""
    kind: ValueKind
    value: Any


def kind_of(value: Any) -> ValueKind:
    """Return the shape of a raw configuration value

    bool is checked before int since it is an int subclass.
    """
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dict):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.UNRECOGNIZED


def parse_int(text: str):
    """Parse a signed base-10 integer that fits in 64 bits, or return None"""
    if not _INT_RE.fullmatch(text):
        return None
    number = int(text)
    if number < INT64_MIN or number > INT64_MAX:
        return None
    return number


def parse_float(text: str):
    """Parse a 64-bit float literal, or return None

    Overflowing literals (e.g. 1e400) are rejected rather than turned into inf.
    """
    if _FLOAT_RE.fullmatch(text):
        number = float(text)
        if math.isinf(number):
            return None
        return number
    if text.lower() in _FLOAT_SPECIALS:
        return float(text)
    return None


def parse_bool(text: str):
    """Parse a boolean token, or return None"""
    if text in TRUE_TOKENS:
        return True
    if text in FALSE_TOKENS:
        return False
    return None


def classify_string(text: str) -> Leaf:
    """Reinterpret a string-encoded value as its native type

    Examples:
        >>> classify_string('5')
        Leaf(kind=<ValueKind.INT: 'int'>, value=5)
        >>> classify_string('5.5').value
        5.5
        >>> classify_string('true').value
        True
        >>> classify_string(':8081').kind
        <ValueKind.STRING: 'string'>
    """
    number = parse_int(text)
    if number is not None:
        return Leaf(ValueKind.INT, number)

    real = parse_float(text)
    if real is not None:
        return Leaf(ValueKind.FLOAT, real)

    flag = parse_bool(text)
    if flag is not None:
        return Leaf(ValueKind.BOOL, flag)

    return Leaf(ValueKind.STRING, text)


def classify(value: Any) -> Leaf:
    """Classify a leaf value

    Native bool/int/float values pass through unchanged, strings go through
    classify_string.

    Raises:
        TypeError: value is not a scalar leaf
    """
    kind = kind_of(value)
    if kind is ValueKind.STRING:
        return classify_string(value)
    if kind.is_leaf:
        return Leaf(kind, value)
    raise TypeError(f"Cannot classify {type(value).__name__} as a leaf value")
