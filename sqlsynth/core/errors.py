"""
Exceptions raised while synthesizing statements.
"""

__all__ = [
    "SynthesisError",
    "CatalogEmptyError",
    "TableNotFoundError",
    "BuilderError",
    "MalformedTemplateError",
    "ConfigError",
]


class SynthesisError(Exception):
    """Base class for all synthesizer failures."""


class CatalogEmptyError(SynthesisError):
    def __init__(self, message: str = "no table available"):
        super().__init__(message)


class TableNotFoundError(SynthesisError, KeyError):
    def __init__(self, table: str):
        self.table = table
        super().__init__(f"table {table} not exist")

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return self.args[0]


class BuilderError(SynthesisError):
    """Statement construction or printing failed inside the SQL AST library."""


class MalformedTemplateError(SynthesisError):
    """A statement builder does not have the shape a synthesizer expects."""


class ConfigError(SynthesisError, ValueError):
    """A configuration setting could not be parsed."""
