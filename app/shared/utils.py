"""Shared utility functions."""

import math


def page_offset(page: int, page_size: int) -> int:
    """Calculate SQL offset for a 1-indexed page."""
    return (max(page, 1) - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed to show ``total`` items.

    Args:
        total: Total count of matching items.
        page_size: Items per page.

    Returns:
        Page count, 0 when there are no items.
    """
    return math.ceil(total / page_size) if total > 0 else 0
