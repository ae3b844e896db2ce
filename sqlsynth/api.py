"""
SQLSynth Library API - Simple interface for statement synthesis
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

from sqlsynth.core.builder import DEFAULT_DIALECT, StatementKind, new_builder
from sqlsynth.core.catalog import Catalog
from sqlsynth.core.errors import ConfigError
from sqlsynth.core.rand import RandomSource
from sqlsynth.core.schema import Table
from sqlsynth.core.types import SUPPORTED_TYPES
from sqlsynth.core.valgen import ValueGenerator
from sqlsynth.ddl_synth import DDLSynthesizer, table_name_for
from sqlsynth.dml_synth import DMLSynthesizer
from sqlsynth.strategies import RowStrategy


__all__ = [
    "SynthConfig",
    "Synthesizer",
    "create_synthesizer",
]


@dataclass
class SynthConfig:
    """Configuration for a Synthesizer."""

    seed: Optional[int] = None
    dialect: str = DEFAULT_DIALECT
    row_strategy: RowStrategy = RowStrategy.RANDOM

    # Workload settings
    type_pool: List[str] = field(default_factory=lambda: list(SUPPORTED_TYPES))
    max_table_columns: int = 5

    @classmethod
    def from_env(cls) -> "SynthConfig":
        """Build a config from SQLSYNTH_* environment variables."""
        config = cls()
        seed = os.environ.get("SQLSYNTH_SEED")
        if seed:
            try:
                config.seed = int(seed)
            except ValueError:
                raise ConfigError(f"SQLSYNTH_SEED must be an integer, got {seed!r}") from None
        config.dialect = os.environ.get("SQLSYNTH_DIALECT") or config.dialect
        strategy = os.environ.get("SQLSYNTH_ROW_STRATEGY")
        if strategy:
            try:
                config.row_strategy = RowStrategy(strategy)
            except ValueError:
                available = ', '.join(s.value for s in RowStrategy)
                raise ConfigError(
                    f"SQLSYNTH_ROW_STRATEGY '{strategy}' not found. Available: {available}"
                ) from None
        return config


class Synthesizer:
    """Main SQLSynth API

    Wraps the DDL and DML synthesizers around one seeded random source, so a
    fixed seed reproduces the same statements. The synthesizer methods only
    read the catalog; generate_workload() is the one place that registers the
    tables it creates.
    """

    def __init__(self, config: Optional[SynthConfig] = None, catalog: Optional[Catalog] = None):
        self.config = config or SynthConfig()
        self.catalog = catalog if catalog is not None else Catalog()
        self.rng = RandomSource(self.config.seed)
        self.valgen = ValueGenerator(self.rng)
        self.ddl = DDLSynthesizer(self.rng)
        self.dml = DMLSynthesizer(self.rng, self.valgen, self.config.row_strategy)

    def _builder(self, kind: StatementKind):
        return new_builder(kind, dialect=self.config.dialect)

    def define_table(self, col_types: List[str]) -> Table:
        return self.ddl.define_table(col_types)

    def create_table(self, col_types: List[str]) -> Tuple[str, str]:
        """Return ``(sql, table_name)`` for a new table; the catalog is untouched."""
        return self.ddl.create_table(col_types, self._builder(StatementKind.CREATE_TABLE))

    def create_index(self) -> str:
        return self.ddl.create_index(self.catalog, self._builder(StatementKind.CREATE_INDEX))

    def insert(self, table_name: str) -> str:
        return self.dml.insert(self.catalog, table_name, self._builder(StatementKind.INSERT))

    def random_column_types(self) -> List[str]:
        count = self.rng.rd_range(1, self.config.max_table_columns)
        return [self.rng.choice(self.config.type_pool) for _ in range(count)]

    def _create_and_commit(self, col_types: List[str]) -> str:
        sql, name = self.create_table(col_types)
        self.catalog.add_table(self.define_table(col_types))
        logger.debug("Registered table %s", name)
        return sql

    def _next_statement(self) -> str:
        if not len(self.catalog):
            return self._create_and_commit(self.random_column_types())

        action = self.rng.rd(3)
        if action == 0:
            col_types = self.random_column_types()
            name = table_name_for(col_types)
            if name not in self.catalog:
                return self._create_and_commit(col_types)
            logger.debug("Table %s already exists, inserting instead", name)
            return self.insert(name)
        if action == 1:
            return self.create_index()
        tables = self.catalog.all_tables()
        return self.insert(tables[self.rng.rd(len(tables))].name)

    def generate_workload(self, count: int) -> Iterator[str]:
        """Yield a mixed stream of CREATE TABLE, CREATE INDEX and INSERT statements."""
        for _ in range(count):
            yield self._next_statement()


def create_synthesizer(seed: Optional[int] = None, catalog: Optional[Catalog] = None,
                       **kwargs) -> Synthesizer:
    """Create a new Synthesizer; extra keyword arguments go to SynthConfig"""
    return Synthesizer(SynthConfig(seed=seed, **kwargs), catalog=catalog)
