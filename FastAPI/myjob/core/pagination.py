from myjob.config import settings


def normalize_page(page: int | None, page_size: int | None) -> tuple[int, int]:
    """Clamp page to >= 1 and page_size to 1..max_page_size."""
    page = max(1, page or 1)
    page_size = min(max(1, page_size or settings.default_page_size), settings.max_page_size)
    return page, page_size


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size
