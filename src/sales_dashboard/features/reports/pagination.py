import math
from typing import Any, List, Mapping, Optional
from urllib.parse import urlencode

from ...core.config import DASHBOARD_BASE_PATH, MAX_OFFSET, PAGE_SIZE
from ...core.exceptions import InvalidArgument
from .schemas import PageLink


def clamp_page(page: Optional[int]) -> int:
    if page is None or page < 1:
        return 1
    return page


def page_offset(page: Optional[int], page_size: int = PAGE_SIZE) -> int:
    offset = (clamp_page(page) - 1) * page_size
    if offset > MAX_OFFSET:
        raise InvalidArgument(f"Page {page} is out of range.")
    return offset


def total_pages(total_records: int, page_size: int = PAGE_SIZE) -> int:
    if total_records <= 0:
        return 0
    return math.ceil(total_records / page_size)


def build_page_link(
    page: int,
    query_params: Optional[Mapping[str, Any]] = None,
    base_path: str = DASHBOARD_BASE_PATH,
) -> str:
    """
    Returns a link to ``page`` that keeps every other current query parameter.

    Only the ``page`` parameter is overwritten, so calling this on its own
    output's parameters gives back the same link.
    """
    params = dict(query_params or {})
    params["page"] = page
    return f"{base_path}?{urlencode(params, doseq=True)}"


def build_page_links(
    page: int,
    pages: int,
    query_params: Optional[Mapping[str, Any]] = None,
    base_path: str = DASHBOARD_BASE_PATH,
) -> List[PageLink]:
    """
    Builds the navigation bar for a listing: previous, every page, next.

    A single page (or none) gets no navigation at all.
    """
    if pages <= 1:
        return []

    links = []
    if page > 1:
        links.append(PageLink(label="«", page=page - 1, url=build_page_link(page - 1, query_params, base_path)))
    for number in range(1, pages + 1):
        links.append(PageLink(
            label=str(number), page=number,
            url=build_page_link(number, query_params, base_path), active=number == page,
        ))
    if page < pages:
        links.append(PageLink(label="»", page=page + 1, url=build_page_link(page + 1, query_params, base_path)))
    return links
