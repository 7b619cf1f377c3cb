"""
In-memory query layer behind the inventory screens.

Filtering, sorting and pagination run over the full lists returned by the
repositories; nothing is pushed down to the store.
"""

import math
from typing import Optional

from utils.stock_status import stock_status, batch_freshness

PAGE_SIZE = 10
ALL = "All"


def filter_ingredients(ingredients, batches, search: str = "", status: str = ALL):
    """Ingredients whose name contains `search` (any case) and, unless `status` is All, whose stock status matches."""
    needle = (search or "").lower()
    result = []
    for ingredient in ingredients:
        if needle and needle not in ingredient.name.lower():
            continue
        if status and status != ALL and stock_status(ingredient, batches) != status:
            continue
        result.append(ingredient)
    return sorted(result, key=lambda i: i.name)


def filter_batches(batches, today, search: str = "", ingredient_id: Optional[int] = None, freshness: str = ALL):
    needle = (search or "").lower()
    result = []
    for batch in batches:
        name = batch.ingredient.name if batch.ingredient is not None else ""
        if needle and needle not in name.lower():
            continue
        if ingredient_id is not None and batch.ingredient_id != ingredient_id:
            continue
        if freshness and freshness != ALL and batch_freshness(batch, today) != freshness:
            continue
        result.append(batch)
    return result


def sort_batches(batches):
    """Most recently created first; id breaks ties between identical timestamps."""
    return sorted(batches, key=lambda b: (b.created_at, b.id), reverse=True)


def total_pages(total_items: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(total_items / page_size)


def clamp_page(page: int, total_items: int, page_size: int = PAGE_SIZE) -> int:
    pages = total_pages(total_items, page_size)
    if pages == 0:
        return 1
    return min(max(page, 1), pages)


def navigate(current_page: int, requested_page: int, total_items: int, page_size: int = PAGE_SIZE) -> int:
    """Move to `requested_page` if it exists, otherwise stay where we are."""
    if 1 <= requested_page <= total_pages(total_items, page_size):
        return requested_page
    return current_page


def paginate(items, page: int = 1, page_size: int = PAGE_SIZE) -> dict:
    page = clamp_page(page, len(items), page_size)
    start = (page - 1) * page_size
    return {
        "items": items[start:start + page_size],
        "page": page,
        "page_size": page_size,
        "total_items": len(items),
        "total_pages": total_pages(len(items), page_size),
    }


def build_inventory_page(batches, today, search: str = "", ingredient_id: Optional[int] = None,
                         freshness: str = ALL, page: int = 1, current_page: Optional[int] = None) -> dict:
    """
    Filter, sort newest first, then cut out one page.

    With `current_page` set, `page` is a navigation request from that page: a
    target outside the filtered range leaves the caller on `current_page`.
    """
    filtered = filter_batches(batches, today, search=search, ingredient_id=ingredient_id, freshness=freshness)
    if current_page is not None:
        page = navigate(clamp_page(current_page, len(filtered)), page, len(filtered))
    return paginate(sort_batches(filtered), page)
