"""
Schema Metadata Definitions for SQLSynth.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

from sqlsynth.core.types import TypeCode, type_code

__all__ = [
    "ColumnOption",
    "Column",
    "TableConstraint",
    "Table",
    "IndexPart",
]


class ColumnOption(Enum):
    NOT_NULL = "NOT NULL"
    AUTO_INCREMENT = "AUTO_INCREMENT"
    PRIMARY_KEY = "PRIMARY KEY"


@dataclass
class Column:
    """Column metadata as seen by the synthesizers"""
    table: str
    name: str
    data_type: str
    length: int = 0
    options: Set[ColumnOption] = field(default_factory=set)

    def has_option(self, option: ColumnOption) -> bool:
        return option in self.options

    @property
    def type_code(self) -> TypeCode:
        return type_code(self.data_type)


@dataclass
class TableConstraint:
    """Table-level constraint definition"""
    constraint_type: str  # only PRIMARY KEY is synthesized
    columns: List[str]
    name: Optional[str] = None


@dataclass
class Table:
    """Table definition; column order is the definition order"""
    name: str
    columns: List[Column] = field(default_factory=list)

    def get_column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def get_column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    @classmethod
    def from_list(cls, name: str, columns_list: List[dict]) -> "Table":
        """Factory to create from a simple list-of-dicts format.

        Each dict needs ``name`` and ``data_type``; ``length`` and ``options``
        (iterable of ColumnOption or their SQL spelling) are optional.
        """
        cols = []
        for c in columns_list:
            options = {o if isinstance(o, ColumnOption) else ColumnOption(o)
                       for o in c.get('options', ())}
            cols.append(Column(
                table=name,
                name=c['name'],
                data_type=c.get('data_type') or c.get('type') or 'int',
                length=c.get('length', 0),
                options=options,
            ))
        return cls(name=name, columns=cols)


@dataclass(frozen=True)
class IndexPart:
    """One index column, optionally limited to a key prefix length"""
    column: str
    length: Optional[int] = None

    def __str__(self) -> str:
        if self.length is None:
            return self.column
        return f"{self.column}({self.length})"
