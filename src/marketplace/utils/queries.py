"""Helpers for reading complete result sets through Protean's paged queries."""

PAGE_SIZE = 500


def fetch_all(query, page_size: int = PAGE_SIZE) -> list:
    """Walk a QuerySet page by page and return every matching record."""
    items = []
    offset = 0
    while True:
        page = query.limit(page_size).offset(offset).all()
        items.extend(page.items)
        offset += page_size
        if offset >= page.total or not page.items:
            return items


def paginate(query, page_size: int, current_page: int) -> dict:
    """Return one page in the ``{items, total, page, page_size}`` shape used by the admin API."""
    page_size = max(1, page_size)
    current_page = max(1, current_page)
    result = query.limit(page_size).offset((current_page - 1) * page_size).all()
    return {
        "items": list(result.items),
        "total": result.total,
        "page": current_page,
        "page_size": page_size,
    }
