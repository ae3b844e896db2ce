"""
Value Generation Strategy.
"""
import datetime
import string
from typing import Any, Dict, List

from sqlsynth.core.rand import RandomSource
from sqlsynth.core.schema import Column
from sqlsynth.core.types import is_numeric, is_string, is_datetime

# Legal MySQL ranges
_INT_MIN, _INT_MAX = -2 ** 31, 2 ** 31 - 1
_TIMESTAMP_MIN = datetime.datetime(1970, 1, 1, 0, 0, 1)
_TIMESTAMP_MAX = datetime.datetime(2038, 1, 19, 3, 14, 7)
_DATETIME_MIN = datetime.datetime(1000, 1, 1, 0, 0, 0)
_DATETIME_MAX = datetime.datetime(9999, 12, 31, 23, 59, 59)

_STRING_CHARS = string.ascii_letters + string.digits

_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Small pools so that enum values collide across rows
_ENUM_VALUES: Dict[str, List[Any]] = {
    'int': [0, 1, -1, 2, 100, _INT_MAX, _INT_MIN],
    'float': [0.0, 1.5, -1.5, 3.14, 1e10],
    'varchar': ['', 'a', 'Test User', 'Product X', 'Active Status', 'user@example.com'],
    'text': ['', 'Sample text', 'Notes', 'Description', 'Info'],
    'timestamp': ['1970-01-01 00:00:01', '2000-01-01 00:00:00', '2038-01-19 03:14:07'],
    'datetime': ['1000-01-01 00:00:00', '2000-01-01 00:00:00', '9999-12-31 23:59:59'],
}


class ValueGenerator:
    """Generates literal values for columns of the supported types.

    Values are plain Python objects: ``int``, ``float`` or ``str``. ``None``
    stands for SQL NULL and is only returned for types the generator does not
    know.
    """

    def __init__(self, rng: RandomSource):
        self.rng = rng

    def _string_length(self, column: Column) -> int:
        limit = column.length if column.length > 0 else 32
        return self.rng.rd_range(1, min(limit, 64))

    def _generate_string(self, column: Column) -> str:
        return ''.join(self.rng.choice(_STRING_CHARS) for _ in range(self._string_length(column)))

    def _generate_datetime(self, low: datetime.datetime, high: datetime.datetime) -> str:
        span = int((high - low).total_seconds())
        moment = low + datetime.timedelta(seconds=self.rng.rd_range(0, span))
        return moment.strftime(_DATETIME_FORMAT)

    def generate(self, column: Column) -> Any:
        """Generate a random value anywhere in the column type's range."""
        dtype = column.data_type.lower()

        if is_numeric(dtype):
            if dtype == 'int':
                return self.rng.rd_range(_INT_MIN, _INT_MAX)
            return round(self.rng.uniform(-1e6, 1e6), 4)

        if is_string(dtype):
            return self._generate_string(column)

        if is_datetime(dtype):
            if dtype == 'timestamp':
                return self._generate_datetime(_TIMESTAMP_MIN, _TIMESTAMP_MAX)
            return self._generate_datetime(_DATETIME_MIN, _DATETIME_MAX)

        # Fallback: use NULL for unknown types (safer than string literal)
        return None

    def generate_zero(self, column: Column) -> Any:
        """The smallest legal value of the column type."""
        dtype = column.data_type.lower()
        if dtype == 'int':
            return 0
        if dtype == 'float':
            return 0.0
        if is_string(dtype):
            return ''
        if dtype == 'timestamp':
            return _TIMESTAMP_MIN.strftime(_DATETIME_FORMAT)
        if dtype == 'datetime':
            return _DATETIME_MIN.strftime(_DATETIME_FORMAT)
        return None

    def generate_enum(self, column: Column) -> Any:
        """Pick from a small fixed pool of values for the column type."""
        values = _ENUM_VALUES.get(column.data_type.lower())
        if not values:
            return None
        value = self.rng.choice(values)
        if isinstance(value, str) and column.length > 0 and is_string(column.data_type):
            return value[:column.length]
        return value
