"""Naming helpers deriving URLs and labels from SQL names."""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^a-z0-9-]")
_CAMEL_BOUNDARY_RE = re.compile(r"([A-Z])")


def table_name_to_route_path(table_name: str) -> str:
    """``sale_orders`` -> ``sale-orders``."""
    return table_name.replace("_", "-")


def table_name_to_display_name(table_name: str) -> str:
    """``sale_orders`` -> ``Sale Order``; naive singularization strips one trailing ``s``."""
    words = [word[:1].upper() + word[1:] for word in table_name.split("_")]
    return re.sub(r"s$", "", " ".join(words))


def slugify(name: str) -> str:
    """``Export CSV`` -> ``export-csv``."""
    slug = _WHITESPACE_RE.sub("-", name.lower())
    return _NON_SLUG_RE.sub("", slug)


def column_label(name: str) -> str:
    """Human label for a column name.

    ``passwordHash`` -> ``Password Hash``; ``created_at`` -> ``Created at``.
    """
    label = _CAMEL_BOUNDARY_RE.sub(r" \1", name).replace("_", " ").strip()
    return label[:1].upper() + label[1:]
