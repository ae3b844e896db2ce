"""
Statement Builder Interface

Synthesizers never touch a SQL AST directly. They fill a StatementBuilder,
which records the handful of fields they are allowed to set and renders the
statement on print(). The default implementation builds a sqlglot expression
tree and prints it in the configured dialect.

Example:
    builder = new_builder("create_table")
    builder.set_table_name("t")
    builder.add_column(Column("t", "id", "int", 16))
    sql = builder.print()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence

from sqlglot import exp

from sqlsynth.core.errors import BuilderError, MalformedTemplateError, SynthesisError
from sqlsynth.core.schema import Column, ColumnOption, IndexPart, TableConstraint
from sqlsynth.core.types import TypeCode

logger = logging.getLogger(__name__)

DEFAULT_DIALECT = "mysql"


@lru_cache(maxsize=None)
def _dialect_type(name: str, dialect: str) -> exp.DataType:
    return exp.DataType.build(name, dialect=dialect)


class StatementKind(str, Enum):
    CREATE_TABLE = "create_table"
    CREATE_INDEX = "create_index"
    INSERT = "insert"


class StatementBuilder(ABC):
    """Abstract base class for statement builders.

    Subclasses only implement print(); the recording methods check that the
    capability used matches the statement kind and raise
    MalformedTemplateError otherwise.
    """

    def __init__(self, kind: StatementKind):
        try:
            self.kind = StatementKind(kind)
        except ValueError:
            raise MalformedTemplateError(f"unknown statement kind: {kind!r}") from None
        self.table_name: Optional[str] = None
        self.columns: List[Column] = []
        self.constraints: List[TableConstraint] = []
        self.index_name: Optional[str] = None
        self.index_parts: List[IndexPart] = []
        self.insert_columns: List[Column] = []
        self.rows: List[List[Any]] = []

    def expect(self, *kinds: StatementKind) -> None:
        if self.kind not in kinds:
            allowed = ", ".join(k.value for k in kinds)
            raise MalformedTemplateError(
                f"{self.kind.value} statement used where {allowed} was expected"
            )

    def set_table_name(self, name: str) -> None:
        self.table_name = name

    def add_column(self, column: Column) -> None:
        self.expect(StatementKind.CREATE_TABLE)
        self.columns.append(column)

    def add_constraint(self, constraint: TableConstraint) -> None:
        self.expect(StatementKind.CREATE_TABLE)
        self.constraints.append(constraint)

    def set_index_name(self, name: str) -> None:
        self.expect(StatementKind.CREATE_INDEX)
        self.index_name = name

    def add_index_part(self, part: IndexPart) -> None:
        self.expect(StatementKind.CREATE_INDEX)
        self.index_parts.append(part)

    def truncate_index_parts(self, count: int) -> None:
        self.expect(StatementKind.CREATE_INDEX)
        del self.index_parts[count:]

    def add_insert_column(self, column: Column) -> None:
        self.expect(StatementKind.INSERT)
        self.insert_columns.append(column)

    def add_value_row(self, values: Sequence[Any]) -> None:
        self.expect(StatementKind.INSERT)
        if len(values) != len(self.insert_columns):
            raise MalformedTemplateError(
                f"row has {len(values)} values for {len(self.insert_columns)} columns"
            )
        self.rows.append(list(values))

    @abstractmethod
    def print(self) -> str:
        """Render the recorded statement as SQL text."""


class SqlglotStatementBuilder(StatementBuilder):
    """StatementBuilder rendering through a sqlglot expression tree."""

    # Spelled as in the target dialect and parsed with it, so printing in the
    # same dialect gives the name back unchanged
    _SQL_TYPE_NAMES: Dict[TypeCode, str] = {
        TypeCode.LONG: "INT",
        TypeCode.VARCHAR: "VARCHAR",
        TypeCode.TIMESTAMP: "TIMESTAMP",
        TypeCode.DATETIME: "DATETIME",
        TypeCode.BLOB: "TEXT",
        TypeCode.FLOAT: "FLOAT",
    }

    # Types whose declared length is part of the column definition
    _SIZED_TYPES = {TypeCode.LONG, TypeCode.VARCHAR, TypeCode.BLOB, TypeCode.FLOAT}

    _OPTION_CONSTRAINTS = {
        ColumnOption.NOT_NULL: exp.NotNullColumnConstraint,
        ColumnOption.AUTO_INCREMENT: exp.AutoIncrementColumnConstraint,
        ColumnOption.PRIMARY_KEY: exp.PrimaryKeyColumnConstraint,
    }

    def __init__(self, kind: StatementKind, dialect: str = DEFAULT_DIALECT):
        super().__init__(kind)
        self.dialect = dialect

    def print(self) -> str:
        if not self.table_name:
            raise MalformedTemplateError(f"{self.kind.value} statement has no table name")
        try:
            tree = self.build()
            # Prefixed index parts are Anonymous nodes; keep their column names as-is
            return tree.sql(dialect=self.dialect, normalize_functions=False)
        except SynthesisError:
            raise
        except Exception as e:
            raise BuilderError(
                f"failed to print {self.kind.value} statement for table {self.table_name}: {e}"
            ) from e

    def build(self) -> exp.Expression:
        """Build the sqlglot tree for the recorded statement."""
        if self.kind is StatementKind.CREATE_TABLE:
            return self._build_create_table()
        if self.kind is StatementKind.CREATE_INDEX:
            return self._build_create_index()
        return self._build_insert()

    def _table(self) -> exp.Table:
        return exp.Table(this=exp.to_identifier(self.table_name))

    def _data_type(self, column: Column) -> exp.DataType:
        code = column.type_code
        name = self._SQL_TYPE_NAMES.get(code)
        if name is None:
            return exp.DataType(this=exp.DataType.Type.NULL)
        dtype = _dialect_type(name, self.dialect).copy()
        if code in self._SIZED_TYPES and column.length > 0:
            dtype.set("expressions", [exp.DataTypeParam(this=exp.Literal.number(column.length))])
        return dtype

    def _column_def(self, column: Column) -> exp.ColumnDef:
        constraints = [
            exp.ColumnConstraint(kind=constraint())
            for option, constraint in self._OPTION_CONSTRAINTS.items()
            if column.has_option(option)
        ]
        return exp.ColumnDef(
            this=exp.to_identifier(column.name),
            kind=self._data_type(column),
            constraints=constraints,
        )

    def _constraint(self, constraint: TableConstraint) -> exp.Expression:
        if constraint.constraint_type != "PRIMARY KEY":
            raise MalformedTemplateError(
                f"unsupported table constraint: {constraint.constraint_type}"
            )
        pk = exp.PrimaryKey(expressions=[exp.to_identifier(c) for c in constraint.columns])
        if constraint.name:
            return exp.Constraint(this=exp.to_identifier(constraint.name), expressions=[pk])
        return pk

    def _build_create_table(self) -> exp.Create:
        definitions = [self._column_def(c) for c in self.columns]
        definitions.extend(self._constraint(c) for c in self.constraints)
        return exp.Create(
            this=exp.Schema(this=self._table(), expressions=definitions),
            kind="TABLE",
        )

    @staticmethod
    def _index_column(part: IndexPart) -> exp.Expression:
        if part.length is None:
            return exp.column(part.column)
        return exp.Anonymous(this=part.column, expressions=[exp.Literal.number(part.length)])

    def _build_create_index(self) -> exp.Create:
        if not self.index_name:
            raise MalformedTemplateError("create_index statement has no index name")
        index = exp.Index(
            this=exp.to_identifier(self.index_name),
            table=self._table(),
            params=exp.IndexParameters(columns=[self._index_column(p) for p in self.index_parts]),
        )
        return exp.Create(this=index, kind="INDEX")

    def _build_insert(self) -> exp.Insert:
        columns = [exp.column(c.name, table=c.table or None) for c in self.insert_columns]
        values = exp.Values(expressions=[
            exp.Tuple(expressions=[exp.convert(v) for v in row]) for row in self.rows
        ])
        return exp.Insert(
            this=exp.Schema(this=self._table(), expressions=columns),
            expression=values,
        )


def new_builder(kind: StatementKind, dialect: str = DEFAULT_DIALECT) -> StatementBuilder:
    """Create an empty statement shell of the given kind."""
    builder = SqlglotStatementBuilder(kind, dialect=dialect)
    logger.debug("New %s builder (dialect=%s)", builder.kind.value, dialect)
    return builder
