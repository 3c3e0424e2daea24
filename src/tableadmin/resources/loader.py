"""
Resource discovery and validation.

Resources come from one of two providers:

- an explicit registration list of ``ResourceExport`` objects, or
- a directory of Python modules, each assigning ``resource = define_resource(...)``.

Both return a ``LoadResult``; per-resource problems are collected as
human-readable strings and never raised, so the caller decides whether
startup can continue.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from tableadmin.dialects import DialectAdapter, get_table_sql_name, postgresql_adapter
from tableadmin.errors import ConfigurationError
from tableadmin.specs.resource import ResourceDefinition, ResourceExport, is_resource_export

from .naming import slugify, table_name_to_display_name, table_name_to_route_path

logger = logging.getLogger(__name__)

RESOURCE_ATTRIBUTE = "resource"
RESOURCE_FILE_SUFFIX = ".py"
_MODULE_PREFIX = "tableadmin_resources"


@dataclass
class LoadResult:
    """Resources that loaded cleanly plus one message per failure."""

    resources: list[ResourceDefinition] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def build_resource(
    export: ResourceExport, adapter: DialectAdapter = postgresql_adapter
) -> ResourceDefinition:
    """Resolve a ``ResourceExport`` into a ``ResourceDefinition``.

    Raises:
        ConfigurationError: if the table exposes no column catalog.
    """
    table_name = get_table_sql_name(export.table)
    return ResourceDefinition(
        table=export.table,
        table_name=table_name,
        route_path=table_name_to_route_path(table_name),
        display_name=table_name_to_display_name(table_name),
        options=export.options,
        columns=tuple(adapter.extract_columns(export.table)),
    )


def build_resources(
    exports: Iterable[ResourceExport], adapter: DialectAdapter = postgresql_adapter
) -> LoadResult:
    """Resolve an explicit registration list."""
    result = LoadResult()
    for position, export in enumerate(exports):
        if not is_resource_export(export):
            result.errors.append(
                f"resources[{position}]: not a valid resource. "
                "Use define_resource() to create it."
            )
            continue
        try:
            result.resources.append(build_resource(export, adapter))
        except ConfigurationError as exc:
            result.errors.append(f"resources[{position}]: {exc}")
    return result


def _import_resource_module(path: Path) -> ModuleType:
    module_name = f"{_MODULE_PREFIX}.{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def load_resources(
    directory: str | Path, adapter: DialectAdapter = postgresql_adapter
) -> LoadResult:
    """
    Discover resources from the Python modules in ``directory``.

    Subdirectories are not scanned and files starting with ``_`` are skipped.

    Args:
        directory: Directory holding resource definition modules.
        adapter: Dialect adapter used to extract column metadata.

    Returns:
        LoadResult with the resources found and a message per failed file.
    """
    absolute_dir = Path(directory).resolve()
    result = LoadResult()

    try:
        candidates = sorted(
            entry
            for entry in absolute_dir.iterdir()
            if entry.is_file()
            and entry.suffix == RESOURCE_FILE_SUFFIX
            and not entry.name.startswith("_")
        )
    except OSError:
        result.errors.append(f"Failed to read resources directory: {absolute_dir}")
        return result

    for path in candidates:
        try:
            module = _import_resource_module(path)
        except Exception as exc:
            result.errors.append(f"{path.name}: Failed to load - {exc}")
            continue

        exported = getattr(module, RESOURCE_ATTRIBUTE, None)
        if not is_resource_export(exported):
            result.errors.append(
                f"{path.name}: '{RESOURCE_ATTRIBUTE}' is not a valid resource. "
                "Use define_resource() to create it."
            )
            continue

        try:
            result.resources.append(build_resource(exported, adapter))
        except ConfigurationError as exc:
            result.errors.append(f"{path.name}: {exc}")
            continue
        logger.debug("Loaded resource %s from %s", result.resources[-1].table_name, path.name)

    return result


def _duplicate_slugs(kind: str, names: Sequence[str], table_name: str) -> list[str]:
    errors: list[str] = []
    seen: dict[str, str] = {}
    for name in names:
        slug = slugify(name)
        if slug in seen:
            errors.append(
                f'{kind} actions "{seen[slug]}" and "{name}" on "{table_name}" '
                f'share the slug "{slug}". Action slugs must be unique per resource.'
            )
        else:
            seen[slug] = name
    return errors


def validate_resources(resources: Sequence[ResourceDefinition]) -> list[str]:
    """Report route-path collisions between resources and ambiguous action slugs."""
    errors: list[str] = []
    route_paths: dict[str, str] = {}

    for resource in resources:
        existing = route_paths.get(resource.route_path)
        if existing is not None:
            errors.append(
                f'Route path "{resource.route_path}" is used by both '
                f'"{existing}" and "{resource.table_name}" tables. '
                "Each table must have a unique route path."
            )
        else:
            route_paths[resource.route_path] = resource.table_name

        errors.extend(
            _duplicate_slugs(
                "Member",
                [a.name for a in resource.options.member_actions],
                resource.table_name,
            )
        )
        errors.extend(
            _duplicate_slugs(
                "Collection",
                [a.name for a in resource.options.collection_actions],
                resource.table_name,
            )
        )
        if not any(col.is_primary_key for col in resource.columns):
            errors.append(f'Table "{resource.table_name}" has no primary key column.')

    return errors
