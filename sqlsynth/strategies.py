"""
Row-value strategies for INSERT synthesis.

RANDOM draws one value per column per row: NOT NULL columns always get a
value, nullable columns get NULL one time in three.

EXHAUSTIVE enumerates every zero / random / NULL combination over the
insertable columns (3^N rows) for boundary-condition coverage.
"""

import logging
from enum import Enum
from typing import Any, List, Sequence

from sqlsynth.core.rand import RandomSource
from sqlsynth.core.schema import Column, ColumnOption
from sqlsynth.core.valgen import ValueGenerator

logger = logging.getLogger(__name__)

__all__ = [
    "RowStrategy",
    "random_row",
    "boundary_rows",
    "build_rows",
]

EXHAUSTIVE_WARN_ROWS = 3 ** 8


class RowStrategy(Enum):
    RANDOM = "random"
    EXHAUSTIVE = "exhaustive"


def random_row(columns: Sequence[Column], valgen: ValueGenerator, rng: RandomSource) -> List[Any]:
    row = []
    for column in columns:
        if rng.rd(3) == 0 and not column.has_option(ColumnOption.NOT_NULL):
            row.append(None)
        else:
            row.append(valgen.generate_enum(column))
    return row


def boundary_rows(columns: Sequence[Column], valgen: ValueGenerator) -> List[List[Any]]:
    """Every combination of zero, random and NULL values, first column varying fastest."""
    if not columns:
        return [[]]
    head = columns[0]
    zero_val = valgen.generate_zero(head)
    rand_val = valgen.generate(head)
    rows = []
    for sub in boundary_rows(columns[1:], valgen):
        rows.append([zero_val] + sub)
        rows.append([rand_val] + sub)
        rows.append([None] + sub)
    return rows


def build_rows(strategy: RowStrategy, columns: Sequence[Column], valgen: ValueGenerator,
               rng: RandomSource, count: int = 0) -> List[List[Any]]:
    """Build value rows for ``columns``; ``count`` only applies to RANDOM."""
    if strategy is RowStrategy.EXHAUSTIVE:
        if 3 ** len(columns) > EXHAUSTIVE_WARN_ROWS:
            logger.warning("Exhaustive strategy over %d columns yields %d rows",
                           len(columns), 3 ** len(columns))
        return boundary_rows(columns, valgen)
    return [random_row(columns, valgen, rng) for _ in range(count)]
