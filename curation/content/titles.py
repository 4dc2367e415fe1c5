"""Helpers for naming items in user-facing messages."""

from collections.abc import Sequence

from curation.config.constants import CONFLICT_TITLE_PREVIEW


def summarize_titles(titles: Sequence[str], limit: int = CONFLICT_TITLE_PREVIEW) -> str:
    """Join the first ``limit`` titles and count the rest.

    Args:
        titles: Titles in display order.
        limit: Maximum number of titles named.

    Returns:
        Text such as ``"A, B and 3 more"``.
    """
    shown = ", ".join(titles[:limit])
    remainder = len(titles) - limit
    if remainder > 0:
        return f"{shown} and {remainder} more"
    return shown
