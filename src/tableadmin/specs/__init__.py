"""
TableAdmin specification types.

Column metadata and resource definitions shared by the dialect adapters,
the resource loader, the views and the route handlers.
"""

from .column import ColumnMeta, DataType
from .resource import (
    CollectionAction,
    ColumnConfig,
    FormConfig,
    IndexConfig,
    MemberAction,
    ResourceDefinition,
    ResourceExport,
    ResourceOptions,
    ShowConfig,
    define_resource,
    is_resource_export,
)

__all__ = [
    "CollectionAction",
    "ColumnConfig",
    "ColumnMeta",
    "DataType",
    "FormConfig",
    "IndexConfig",
    "MemberAction",
    "ResourceDefinition",
    "ResourceExport",
    "ResourceOptions",
    "ShowConfig",
    "define_resource",
    "is_resource_export",
]
