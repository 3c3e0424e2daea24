"""
TableAdmin - generated admin panels for SQLAlchemy tables.

Point TableAdmin at your tables and it serves server-rendered index, show,
create and edit pages for each one, behind a cookie session login.

Example::

    from tableadmin import TableAdmin, define_config

    admin = TableAdmin(define_config(
        database="postgresql+psycopg://localhost/shop",
        admin_users=admin_users,
        session_secret=SESSION_SECRET,
        resources_dir="admin/resources",
    ))
    app = admin.app
"""

from tableadmin._version import get_version
from tableadmin.actions import create_csv_export_action
from tableadmin.config import AdminConfig, define_config
from tableadmin.database import Database, SQLAlchemyDatabase
from tableadmin.dialects import DialectAdapter, register_adapter
from tableadmin.errors import (
    ActionError,
    ConfigurationError,
    CsrfValidationError,
    DatabaseOperationError,
    ErrorKind,
    RecordNotFoundError,
    TableAdminError,
)
from tableadmin.runtime.server import TableAdmin
from tableadmin.specs import (
    CollectionAction,
    ColumnMeta,
    DataType,
    MemberAction,
    ResourceDefinition,
    define_resource,
)
from tableadmin.ui.theme import DEFAULT_THEME, Theme

__version__ = get_version()

__all__ = [
    "__version__",
    "ActionError",
    "AdminConfig",
    "CollectionAction",
    "ColumnMeta",
    "ConfigurationError",
    "CsrfValidationError",
    "DEFAULT_THEME",
    "DataType",
    "Database",
    "DatabaseOperationError",
    "DialectAdapter",
    "ErrorKind",
    "MemberAction",
    "RecordNotFoundError",
    "ResourceDefinition",
    "SQLAlchemyDatabase",
    "TableAdmin",
    "TableAdminError",
    "Theme",
    "create_csv_export_action",
    "define_config",
    "define_resource",
    "register_adapter",
]
