"""
Error hierarchy for DDL definition and synthesis.
"""

from __future__ import annotations


class SchemaError(RuntimeError):
    """Base error for schema statement failures raised by BlazeViews itself."""


class DefinitionError(SchemaError):
    """Raised when a definition is incomplete or a required callback is missing."""


class InvalidColumnError(SchemaError):
    """
    Raised when a mapping view references a column the source table lacks.
    """

    def __init__(self, column: str, table: str | None = None) -> None:
        self.column = column
        self.table = table
        location = f" on table '{table}'" if table else ""
        super().__init__(f"Column '{column}' does not exist{location}.")
