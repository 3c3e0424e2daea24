"""Pagination controls for the index view."""

from __future__ import annotations

import math
from dataclasses import dataclass

from markupsafe import Markup

from tableadmin.ui.template_renderer import render_fragment

ELLIPSIS = None


@dataclass(frozen=True)
class Pagination:
    """Position of the current index page."""

    current_page: int
    total_pages: int
    base_url: str

    @classmethod
    def for_count(
        cls, total_count: int, per_page: int, current_page: int, base_url: str
    ) -> Pagination:
        return cls(
            current_page=current_page,
            total_pages=math.ceil(total_count / per_page),
            base_url=base_url,
        )

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def is_out_of_range(self) -> bool:
        return self.current_page > max(self.total_pages, 1)

    def page_url(self, page: int) -> str:
        return f"{self.base_url}?page={page}"

    def page_items(self) -> list[int | None]:
        """
        Page numbers to link, with ``None`` marking an elided run.

        Always shows the first and last page plus the neighbours of the
        current page: ``[1, None, 4, 5, 6, None, 10]`` for page 5 of 10.
        """
        items: list[int | None] = [1]

        if self.current_page > 3:
            items.append(ELLIPSIS)

        start = max(2, self.current_page - 1)
        stop = min(self.total_pages - 1, self.current_page + 1)
        for page in range(start, stop + 1):
            if page not in items:
                items.append(page)

        if self.current_page < self.total_pages - 2:
            items.append(ELLIPSIS)

        if self.total_pages > 1 and self.total_pages not in items:
            items.append(self.total_pages)

        return items


def render_pagination(pagination: Pagination) -> Markup:
    """Previous/next and page links; empty when everything fits on one page."""
    if pagination.total_pages <= 1:
        return Markup("")
    return render_fragment(
        "components/pagination.html",
        pagination=pagination,
        items=pagination.page_items(),
    )
