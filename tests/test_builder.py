"""Tests for the statement builder."""

import pytest
from sqlglot import exp
from sqlsynth.core.builder import (
    StatementBuilder, StatementKind, SqlglotStatementBuilder, new_builder,
)
from sqlsynth.core.errors import BuilderError, MalformedTemplateError
from sqlsynth.core.schema import Column, ColumnOption, IndexPart, TableConstraint


def col(name, data_type, length, *options):
    return Column('t', name, data_type, length, set(options))


class TestKindChecks:
    """Capabilities are only valid for their statement kind."""

    def test_unknown_kind(self):
        with pytest.raises(MalformedTemplateError):
            new_builder("drop_table")

    def test_string_kind_accepted(self):
        builder = new_builder("insert")
        assert builder.kind is StatementKind.INSERT

    def test_add_column_on_insert(self):
        builder = new_builder(StatementKind.INSERT)
        with pytest.raises(MalformedTemplateError):
            builder.add_column(col('a', 'int', 16))

    def test_index_part_on_create_table(self):
        builder = new_builder(StatementKind.CREATE_TABLE)
        with pytest.raises(MalformedTemplateError):
            builder.add_index_part(IndexPart('a'))

    def test_value_row_on_create_index(self):
        builder = new_builder(StatementKind.CREATE_INDEX)
        with pytest.raises(MalformedTemplateError):
            builder.add_value_row([1])

    def test_expect_message(self):
        builder = new_builder(StatementKind.INSERT)
        with pytest.raises(MalformedTemplateError) as exc:
            builder.expect(StatementKind.CREATE_TABLE)
        assert "insert" in str(exc.value)
        assert "create_table" in str(exc.value)

    def test_row_width_must_match_columns(self):
        builder = new_builder(StatementKind.INSERT)
        builder.add_insert_column(col('a', 'int', 16))
        with pytest.raises(MalformedTemplateError):
            builder.add_value_row([1, 2])

    def test_print_requires_table_name(self):
        builder = new_builder(StatementKind.CREATE_TABLE)
        with pytest.raises(MalformedTemplateError):
            builder.print()


class TestCreateTable:

    @pytest.fixture
    def builder(self):
        builder = new_builder(StatementKind.CREATE_TABLE)
        builder.set_table_name('table_int_varchar')
        builder.add_column(col('id', 'int', 16, ColumnOption.AUTO_INCREMENT))
        builder.add_constraint(TableConstraint('PRIMARY KEY', ['id']))
        builder.add_column(col('col_int', 'int', 16))
        builder.add_column(col('col_varchar', 'varchar', 511))
        return builder

    def test_tree_shape(self, builder):
        tree = builder.build()
        assert isinstance(tree, exp.Create)
        defs = tree.this.expressions
        assert [d.name for d in defs if isinstance(d, exp.ColumnDef)] == ['id', 'col_int', 'col_varchar']
        assert any(isinstance(d, exp.PrimaryKey) for d in defs)

    def test_sql(self, builder):
        sql = builder.print()
        assert sql.startswith("CREATE TABLE table_int_varchar")
        assert "AUTO_INCREMENT" in sql
        assert "VARCHAR(511)" in sql
        assert "PRIMARY KEY (id)" in sql
        assert sql.index("id") < sql.index("col_int") < sql.index("col_varchar")

    def test_not_null_option(self):
        builder = new_builder(StatementKind.CREATE_TABLE)
        builder.set_table_name('t')
        builder.add_column(col('a', 'int', 16, ColumnOption.NOT_NULL))
        assert "NOT NULL" in builder.print()

    def test_type_names_round_trip(self):
        builder = new_builder(StatementKind.CREATE_TABLE)
        builder.set_table_name('t')
        builder.add_column(col('a', 'timestamp', 255))
        builder.add_column(col('b', 'datetime', 255))
        sql = builder.print()
        assert "a TIMESTAMP" in sql
        assert "b DATETIME" in sql

    def test_unknown_type_prints(self):
        builder = new_builder(StatementKind.CREATE_TABLE)
        builder.set_table_name('t')
        builder.add_column(col('g', 'geometry', 16))
        assert builder.print().startswith("CREATE TABLE t")

    def test_unsupported_constraint(self):
        builder = new_builder(StatementKind.CREATE_TABLE)
        builder.set_table_name('t')
        builder.add_column(col('a', 'int', 16))
        builder.add_constraint(TableConstraint('UNIQUE', ['a']))
        with pytest.raises(MalformedTemplateError):
            builder.print()


class TestCreateIndex:

    def test_sql(self):
        builder = new_builder(StatementKind.CREATE_INDEX)
        builder.set_table_name('table_int_text')
        builder.set_index_name('abcde')
        builder.add_index_part(IndexPart('col_int'))
        builder.add_index_part(IndexPart('col_text', 12))
        sql = builder.print()
        assert sql.startswith("CREATE INDEX abcde")
        assert "table_int_text" in sql
        assert "col_text(12)" in sql.lower()

    def test_requires_index_name(self):
        builder = new_builder(StatementKind.CREATE_INDEX)
        builder.set_table_name('t')
        builder.add_index_part(IndexPart('a'))
        with pytest.raises(MalformedTemplateError):
            builder.print()

    def test_truncate_keeps_prefix(self):
        builder = new_builder(StatementKind.CREATE_INDEX)
        for name in 'abcd':
            builder.add_index_part(IndexPart(name))
        builder.truncate_index_parts(2)
        assert [p.column for p in builder.index_parts] == ['a', 'b']


class TestInsert:

    def test_sql(self):
        builder = new_builder(StatementKind.INSERT)
        builder.set_table_name('table_int_text')
        builder.add_insert_column(col('col_int', 'int', 16))
        builder.add_insert_column(col('col_text', 'text', 511))
        builder.add_value_row([1, 'abc'])
        builder.add_value_row([2, None])
        sql = builder.print()
        assert sql.startswith("INSERT INTO table_int_text")
        assert "VALUES" in sql
        assert "'abc'" in sql
        assert "NULL" in sql

    def test_columns_qualified_by_table(self):
        builder = new_builder(StatementKind.INSERT)
        builder.set_table_name('t')
        builder.add_insert_column(col('a', 'int', 16))
        builder.add_insert_column(col('b', 'varchar', 511))
        builder.add_value_row([1, 'x'])
        assert builder.print().startswith("INSERT INTO t (t.a, t.b) VALUES")


class TestPrintFailures:

    def test_unknown_dialect_is_builder_error(self):
        builder = SqlglotStatementBuilder(StatementKind.CREATE_TABLE, dialect="no_such_dialect")
        builder.set_table_name('t')
        builder.add_column(col('a', 'int', 16))
        with pytest.raises(BuilderError) as exc:
            builder.print()
        assert exc.value.__cause__ is not None

    def test_custom_builder(self):
        class EchoBuilder(StatementBuilder):
            def print(self):
                return f"{self.kind.value} {self.table_name}"

        builder = EchoBuilder(StatementKind.INSERT)
        builder.set_table_name('t')
        assert builder.print() == "insert t"
