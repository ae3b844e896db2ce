"""
DDL Synthesizer for SQLSynth
Builds CREATE TABLE statements from requested column types and CREATE INDEX
statements over tables already in the catalog.
"""

import logging
from typing import List, Sequence, Tuple

from sqlsynth.core.builder import StatementBuilder, StatementKind
from sqlsynth.core.catalog import Catalog
from sqlsynth.core.errors import CatalogEmptyError
from sqlsynth.core.rand import RandomSource
from sqlsynth.core.schema import Column, ColumnOption, IndexPart, Table, TableConstraint
from sqlsynth.core.types import data_type_len

logger = logging.getLogger(__name__)

ID_COLUMN = "id"
MAX_INDEX_PARTS = 10
TEXT_PREFIX_MAX = 31
VARCHAR_PREFIX_MAX = 32
INDEX_NAME_LENGTH = 5


def table_name_for(col_types: Sequence[str]) -> str:
    return "table_" + "_".join(col_types)


class DDLSynthesizer:
    """Generate CREATE TABLE / CREATE INDEX statements"""

    def __init__(self, rng: RandomSource):
        self.rng = rng

    def define_table(self, col_types: Sequence[str]) -> Table:
        """Table described by ``create_table(col_types)``.

        The first column is always an AUTO_INCREMENT integer ``id`` that is the
        table's primary key; each requested type adds a ``col_<type>`` column.
        """
        name = table_name_for(col_types)
        columns = [Column(
            table=name,
            name=ID_COLUMN,
            data_type="int",
            length=data_type_len("int"),
            options={ColumnOption.AUTO_INCREMENT, ColumnOption.PRIMARY_KEY},
        )]
        for col_type in col_types:
            columns.append(Column(
                table=name,
                name=f"col_{col_type}",
                data_type=col_type,
                length=data_type_len(col_type),
            ))
        return Table(name=name, columns=columns)

    def create_table(self, col_types: Sequence[str], builder: StatementBuilder) -> Tuple[str, str]:
        """Fill ``builder`` with a CREATE TABLE and return ``(sql, table_name)``."""
        builder.expect(StatementKind.CREATE_TABLE)
        table = self.define_table(col_types)
        builder.set_table_name(table.name)

        id_column, *columns = table.columns
        # PRIMARY KEY is emitted as a table constraint, not as a column option
        builder.add_column(Column(
            table=table.name,
            name=id_column.name,
            data_type=id_column.data_type,
            length=id_column.length,
            options={ColumnOption.AUTO_INCREMENT},
        ))
        builder.add_constraint(TableConstraint("PRIMARY KEY", [ID_COLUMN]))
        for column in columns:
            builder.add_column(column)

        return builder.print(), table.name

    def _index_part(self, column: Column) -> IndexPart:
        if column.data_type == "text":
            return IndexPart(column.name, self.rng.rd(TEXT_PREFIX_MAX) + 1)
        if column.data_type == "varchar":
            length = 1
            if column.length > 1:
                max_len = min(column.length, VARCHAR_PREFIX_MAX)
                length = self.rng.rd(max_len - 1) + 1
            return IndexPart(column.name, length)
        return IndexPart(column.name)

    def create_index(self, catalog: Catalog, builder: StatementBuilder) -> str:
        """Fill ``builder`` with a CREATE INDEX over a random catalog table."""
        builder.expect(StatementKind.CREATE_INDEX)
        tables: List[Table] = catalog.all_tables()
        if not tables:
            raise CatalogEmptyError()
        table = tables[self.rng.rd(len(tables))]
        logger.debug("Indexing table %s (%d columns)", table.name, len(table.columns))

        builder.set_table_name(table.name)
        builder.set_index_name(self.rng.rd_string_char(INDEX_NAME_LENGTH))
        for column in table.columns:
            builder.add_index_part(self._index_part(column))

        # Prefix truncation: later columns are less likely to be indexed
        if len(builder.index_parts) > MAX_INDEX_PARTS:
            keep = self.rng.rd(MAX_INDEX_PARTS) + 1
            logger.debug("Truncating index on %s to %d parts", table.name, keep)
            builder.truncate_index_parts(keep)

        return builder.print()
