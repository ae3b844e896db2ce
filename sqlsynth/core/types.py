"""
Column Type Definitions for SQLSynth.
Maps abstract column-type names to MySQL type codes and declared lengths.
"""

from enum import IntEnum
from typing import Dict, List, Set


class TypeCode(IntEnum):
    """MySQL protocol type codes used by the synthesizers."""
    LONG = 3
    FLOAT = 4
    NULL = 6
    TIMESTAMP = 7
    DATETIME = 12
    VARCHAR = 15
    BLOB = 252


SUPPORTED_TYPES: List[str] = ['int', 'varchar', 'timestamp', 'datetime', 'text', 'float']

_TYPE_CODES: Dict[str, TypeCode] = {
    'int': TypeCode.LONG,
    'varchar': TypeCode.VARCHAR,
    'timestamp': TypeCode.TIMESTAMP,
    'datetime': TypeCode.DATETIME,
    'text': TypeCode.BLOB,
    'float': TypeCode.FLOAT,
}

_TYPE_LENGTHS: Dict[str, int] = {
    'int': 16,
    'varchar': 511,
    'timestamp': 255,
    'datetime': 255,
    'text': 511,
    'float': 53,
}

DEFAULT_LENGTH = 16

# Base Categories
NUMERIC_TYPES: Set[str] = {'int', 'float'}
STRING_TYPES: Set[str] = {'varchar', 'text'}
DATETIME_TYPES: Set[str] = {'timestamp', 'datetime'}


def type_code(name: str) -> TypeCode:
    """Map an abstract type name to its type code; unknown names map to NULL."""
    return _TYPE_CODES.get(name, TypeCode.NULL)


def data_type_len(name: str) -> int:
    """Declared length used when a column of this type is created."""
    return _TYPE_LENGTHS.get(name, DEFAULT_LENGTH)


def is_numeric(dtype: str) -> bool:
    return dtype.lower() in NUMERIC_TYPES

def is_string(dtype: str) -> bool:
    return dtype.lower() in STRING_TYPES

def is_datetime(dtype: str) -> bool:
    return dtype.lower() in DATETIME_TYPES
