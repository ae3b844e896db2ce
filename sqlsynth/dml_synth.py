"""
DML Synthesizer for SQLSynth
Builds multi-row INSERT statements for tables in the catalog.
"""

import logging
from typing import List

from sqlsynth.core.builder import StatementBuilder, StatementKind
from sqlsynth.core.catalog import Catalog
from sqlsynth.core.errors import TableNotFoundError
from sqlsynth.core.rand import RandomSource
from sqlsynth.core.schema import Column, Table
from sqlsynth.core.valgen import ValueGenerator
from sqlsynth.ddl_synth import ID_COLUMN
from sqlsynth.strategies import RowStrategy, build_rows

logger = logging.getLogger(__name__)

MIN_ROWS = 10
MAX_ROWS = 20


class DMLSynthesizer:
    """Generate INSERT statements"""

    def __init__(self, rng: RandomSource, valgen: ValueGenerator,
                 row_strategy: RowStrategy = RowStrategy.RANDOM):
        self.rng = rng
        self.valgen = valgen
        self.row_strategy = row_strategy

    @staticmethod
    def insertable_columns(table: Table) -> List[Column]:
        # id is assigned by AUTO_INCREMENT
        return [c for c in table.columns if c.name != ID_COLUMN]

    def insert(self, catalog: Catalog, table_name: str, builder: StatementBuilder) -> str:
        """Fill ``builder`` with an INSERT into ``table_name`` and return the SQL."""
        builder.expect(StatementKind.INSERT)
        table = catalog.lookup(table_name)
        if table is None:
            raise TableNotFoundError(table_name)

        builder.set_table_name(table.name)
        columns = self.insertable_columns(table)
        for column in columns:
            builder.add_insert_column(column)

        count = 0
        if self.row_strategy is RowStrategy.RANDOM:
            count = self.rng.rd_range(MIN_ROWS, MAX_ROWS)
        rows = build_rows(self.row_strategy, columns, self.valgen, self.rng, count)
        logger.debug("Inserting %d rows into %s (%s)", len(rows), table.name,
                     self.row_strategy.value)
        for row in rows:
            builder.add_value_row(row)

        return builder.print()
