"""Resource loading, column policy and form parsing."""

from .forms import (
    coerce_record_id,
    drop_blank_defaults,
    drop_blank_passwords,
    missing_required_fields,
    parse_form_values,
)
from .loader import LoadResult, build_resource, build_resources, load_resources, validate_resources
from .naming import slugify, table_name_to_display_name, table_name_to_route_path

__all__ = [
    "LoadResult",
    "build_resource",
    "build_resources",
    "coerce_record_id",
    "drop_blank_defaults",
    "drop_blank_passwords",
    "load_resources",
    "missing_required_fields",
    "parse_form_values",
    "slugify",
    "table_name_to_display_name",
    "table_name_to_route_path",
    "validate_resources",
]
