"""
View, materialized view and function DDL.
"""

from .builder import ViewSchemaBuilder
from .definitions import (
    FunctionParam,
    MappingDefinition,
    ParamDefinition,
    ViewDefinition,
    VirtualTableKind,
    VirtualTableOptions,
)
from .errors import DefinitionError, InvalidColumnError, SchemaError
from .statements import DDLResult, DDLStatus, SchemaStatements

__all__ = [
    "DDLResult",
    "DDLStatus",
    "DefinitionError",
    "FunctionParam",
    "InvalidColumnError",
    "MappingDefinition",
    "ParamDefinition",
    "SchemaError",
    "SchemaStatements",
    "ViewDefinition",
    "ViewSchemaBuilder",
    "VirtualTableKind",
    "VirtualTableOptions",
]
