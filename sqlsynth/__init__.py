"""
SQLSynth - Randomized SQL statement synthesizer

Generates CREATE TABLE, CREATE INDEX and INSERT statements for fuzz-testing
MySQL-compatible database engines.
"""

__version__ = "1.0.0"

from .api import Synthesizer, SynthConfig, create_synthesizer
from .core.catalog import Catalog
from .core.schema import Column, ColumnOption, Table
from .strategies import RowStrategy

__all__ = [
    'Synthesizer', 'SynthConfig', 'create_synthesizer',
    'Catalog', 'Column', 'ColumnOption', 'Table', 'RowStrategy',
]
